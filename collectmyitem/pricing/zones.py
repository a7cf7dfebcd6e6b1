"""
Zones de trajet déduites des codes postaux (Londres, zones 1 à 6).
"""
import re
from typing import Optional, Tuple

# module collectmyitem.pricing.zones
ZONE_STEP = 3
FLAT_TRAVEL_FEE = 15
MAX_ZONE = 6

_DIGIT = re.compile(r"[1-9]")


def clean_postcode(postcode) -> str:
    return re.sub(r"\s+", "", str(postcode or "").strip().upper())


def zone_from_postcode(postcode) -> Optional[int]:
    """
    Devine la zone à partir du premier chiffre 1-9 du code postal.
    - Retourne None si aucun chiffre ou si la zone dépasse 6.
    """
    m = _DIGIT.search(clean_postcode(postcode))
    if not m:
        return None
    n = int(m.group(0))
    return n if 1 <= n <= MAX_ZONE else None


def travel_cost(pickup, dropoff, policy: str = "zone") -> Tuple[int, str]:
    """
    Calcule (coût du trajet, libellé de zone).
    - policy="flat": forfait fixe, libellé "London".
    - policy="zone" (défaut): (zone max - 1) x 3, zone 1 si inconnue.
    """
    if policy == "flat":
        return FLAT_TRAVEL_FEE, "London"
    zone = max(zone_from_postcode(pickup) or 1, zone_from_postcode(dropoff) or 1)
    return (zone - 1) * ZONE_STEP, f"Zones 1-{zone}"
