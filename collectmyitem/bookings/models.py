"""
Modèle Booking: champs acceptés depuis le formulaire, référence et vue publique.
"""
import secrets
import string
from typing import Any, Dict, Optional

BOOKING_REF_PREFIX = "CMI-"
BOOKING_REF_LENGTH = 6
_REF_ALPHABET = string.ascii_uppercase + string.digits

# Champs client conservés sur la réservation (le reste du body est ignoré)
SHIPMENT_FIELDS = (
    "pickup",
    "dropoff",
    "itemType",
    "itemSize",
    "itemCount",
    "itemDetails",
    "stairsPickup",
    "stairsDropoff",
    "congestionZone",
    "date",
    "timeWindow",
)
CONTACT_FIELDS = ("name", "phone", "email", "notes")

PUBLIC_FIELDS = ("bookingRef", "status", "price", "createdAt", "paidAt")


# module collectmyitem.bookings.models
def new_booking_ref() -> str:
    """Référence courte aléatoire, ex: CMI-7K2QXZ."""
    return BOOKING_REF_PREFIX + "".join(secrets.choice(_REF_ALPHABET) for _ in range(BOOKING_REF_LENGTH))


def clean_booking_ref(value: Any) -> Optional[str]:
    ref = str(value or "").strip()
    return ref or None


def booking_fields_from_request(body: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extrait les champs persistés depuis la requête de réservation.
    - Le prix envoyé par le client est conservé à titre indicatif (clientPrice), jamais facturé.
    """
    fields = {k: body[k] for k in SHIPMENT_FIELDS + CONTACT_FIELDS if k in body and body[k] is not None}
    if body.get("price") is not None:
        fields["clientPrice"] = body.get("price")
    return fields


def public_view(booking: Dict[str, Any]) -> Dict[str, Any]:
    return {k: booking.get(k) for k in PUBLIC_FIELDS}
