"""
Fenêtres horaires et test de la congestion charge (logique pure, sans I/O).
- Les créneaux client (morning/afternoon/evening/any) sont des intervalles en minutes [début, fin).
- La zone de péage urbain s'applique sur un intervalle différent en semaine et le week-end.
"""
from datetime import date
from typing import Optional, Tuple

# module collectmyitem.pricing.congestion
TIME_WINDOWS = {
    "morning": (8 * 60, 12 * 60),
    "afternoon": (12 * 60, 17 * 60),
    "evening": (17 * 60, 21 * 60),
    "any": (0, 24 * 60),
}

# Lun–Ven 07:00–18:00, Sam–Dim 12:00–17:00
WEEKDAY_CHARGING = (7 * 60, 18 * 60)
WEEKEND_CHARGING = (12 * 60, 17 * 60)


def time_window_range(time_window: Optional[str]) -> Tuple[int, int]:
    """Retourne l'intervalle [début, fin) en minutes; créneau inconnu => journée entière."""
    key = str(time_window or "").strip().lower()
    return TIME_WINDOWS.get(key, TIME_WINDOWS["any"])


def ranges_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return max(a_start, b_start) < min(a_end, b_end)


def parse_date(value) -> Optional[date]:
    """
    Convertit "YYYY-MM-DD" (ou un datetime ISO) en date.
    - Tolérant: retourne None si vide ou non parsable.
    """
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def charging_interval(day: date) -> Tuple[int, int]:
    return WEEKDAY_CHARGING if day.weekday() < 5 else WEEKEND_CHARGING


def congestion_charge_applies(date_value, time_window: Optional[str]) -> bool:
    """
    Vrai si le créneau demandé chevauche la période de péage du jour.
    - Sans date exploitable: jamais de péage.
    """
    day = parse_date(date_value)
    if day is None:
        return False
    win_start, win_end = time_window_range(time_window)
    charge_start, charge_end = charging_interval(day)
    return ranges_overlap(win_start, win_end, charge_start, charge_end)
