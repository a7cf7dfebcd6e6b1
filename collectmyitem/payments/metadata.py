"""
Sérialisation/désérialisation des métadonnées Stripe (bookingRef).
"""
import json
from typing import Any, Dict, Mapping, Optional

# module collectmyitem.payments.metadata
def normalize_metadata(metadata: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """
    Stripe n'accepte que des valeurs str dans metadata.
    - Ignore les valeurs None, sérialise dict/list en JSON.
    """
    normalized: Dict[str, str] = {}
    for key, value in (metadata or {}).items():
        if value is None:
            continue
        if isinstance(value, (dict, list, tuple)):
            normalized[key] = json.dumps(value, ensure_ascii=True)
        else:
            normalized[key] = str(value)
    return normalized

def make_metadata(booking_ref: str, **extra: Any) -> Dict[str, str]:
    return normalize_metadata({"bookingRef": booking_ref, **extra})

def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}

def extract_booking_ref(event: Mapping[str, Any]) -> Optional[str]:
    """
    Extrait bookingRef depuis un event Stripe (webhook).
    - Attend event.data.object.metadata.bookingRef
    - Repli sur event.data.object.client_reference_id
    """
    data_obj = _mapping(_mapping(_mapping(event).get("data")).get("object"))
    meta = _mapping(data_obj.get("metadata"))
    ref = meta.get("bookingRef") or data_obj.get("client_reference_id")
    return str(ref) if ref else None

def extract_session_id(event: Mapping[str, Any]) -> Optional[str]:
    data_obj = _mapping(_mapping(_mapping(event).get("data")).get("object"))
    return data_obj.get("id")
