"""
Calcul du prix d'une course (logique pure, pas de Stripe, pas de fichier).
Source unique du tarif: utilisée par le devis instantané (/api/price) et par le checkout.
"""
import math
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field

from collectmyitem import config
from .congestion import congestion_charge_applies
from .zones import travel_cost

# module collectmyitem.pricing.calculator
DEFAULT_SIZE = "medium"
BASE_BY_SIZE = {"small": 35, "medium": 55, "large": 75, "xl": 95}
PER_EXTRA_BY_SIZE = {"small": 6, "medium": 8, "large": 10, "xl": 12}
ITEM_TYPE_ADDONS = {"mixed": 10, "boxes": 5, "other": 5}

MIN_ITEMS = 1
MAX_ITEMS = 30
STAIRS_FEE = 10
CONGESTION_FEE = 18
MIN_TOTAL = 30
ROUND_TO = 5
PRICE_NOTE = "Includes van + driver"


class Quote(BaseModel):
    price: int
    zone: str
    breakdown: List[str] = Field(default_factory=list)
    note: str = PRICE_NOTE


def clamp_number(value: Any, minimum: int, maximum: int, fallback: int) -> int:
    """
    Convertit une valeur libre en entier borné.
    - Non numérique, NaN, infini ou hors de portée d’un float => fallback.
    - Les décimales sont tronquées.
    """
    try:
        n = float(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    if not math.isfinite(n):
        return fallback
    return int(min(maximum, max(minimum, n)))


def _choice(payload: Mapping[str, Any], key: str) -> str:
    return str(payload.get(key) or "").strip().lower()


def _is_yes(payload: Mapping[str, Any], key: str) -> bool:
    return _choice(payload, key) == "yes"


def round_to_step(total: int, step: int = ROUND_TO) -> int:
    # arrondi au plus proche, demi vers le haut
    return int(math.floor(total / step + 0.5)) * step


def calculate_quote(payload: Optional[Mapping[str, Any]], travel_policy: Optional[str] = None) -> Quote:
    """
    Calcule le devis complet d'une course.
    - payload: champs du formulaire (itemSize, itemCount, itemType, stairsPickup, stairsDropoff,
      congestionZone, date, timeWindow, pickup, dropoff). Valeurs absentes/invalides => défauts.
    - travel_policy: "zone" ou "flat" (défaut: config.TRAVEL_POLICY).
    Étapes:
      1) base selon la taille (inconnue => medium)
      2) articles supplémentaires: (n - 1) x tarif de la taille
      3) supplément type (mixed/boxes/other), escaliers (10 par adresse)
      4) trajet (zone ou forfait), congestion (18 si opt-in et créneau facturé)
      5) plancher à 30, arrondi au multiple de 5 le plus proche
    Ne lève jamais d'exception.
    """
    payload = payload if isinstance(payload, Mapping) else {}
    policy = (travel_policy or config.TRAVEL_POLICY or "zone").lower()

    size = _choice(payload, "itemSize")
    if size not in BASE_BY_SIZE:
        size = DEFAULT_SIZE
    base = BASE_BY_SIZE[size]

    count = clamp_number(payload.get("itemCount"), MIN_ITEMS, MAX_ITEMS, MIN_ITEMS)
    extra_items = (count - 1) * PER_EXTRA_BY_SIZE[size]

    type_addon = ITEM_TYPE_ADDONS.get(_choice(payload, "itemType"), 0)

    stairs = (STAIRS_FEE if _is_yes(payload, "stairsPickup") else 0) + (
        STAIRS_FEE if _is_yes(payload, "stairsDropoff") else 0
    )

    travel, zone_label = travel_cost(payload.get("pickup"), payload.get("dropoff"), policy)

    congestion = 0
    if _is_yes(payload, "congestionZone") and congestion_charge_applies(
        payload.get("date"), payload.get("timeWindow")
    ):
        congestion = CONGESTION_FEE

    subtotal = base + extra_items + type_addon + stairs + travel + congestion
    price = round_to_step(max(MIN_TOTAL, subtotal))

    lines: List[Optional[str]] = [
        f"Base: £{base}",
        f"Extra items: £{extra_items}" if extra_items > 0 else None,
        f"Item type: £{type_addon}" if type_addon > 0 else None,
        f"Stairs: £{stairs}" if stairs > 0 else None,
        f"Travel: £{travel}" if travel > 0 else None,
        f"Congestion charge: £{congestion}" if congestion > 0 else None,
    ]
    return Quote(price=price, zone=zone_label, breakdown=[l for l in lines if l])


def calculate_price(payload: Optional[Mapping[str, Any]], travel_policy: Optional[str] = None) -> int:
    """Prix seul (livres entières), pour le chemin de paiement."""
    return calculate_quote(payload, travel_policy).price
