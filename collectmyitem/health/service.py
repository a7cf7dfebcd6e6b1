from typing import Any, Dict

from collectmyitem.bookings.store import BookingStore, BookingStoreError


def health_store_info(store: BookingStore) -> Dict[str, Any]:
    """
    Diagnostic du fichier de réservations.
    - exists / readable / count, et l'erreur éventuelle (JSON corrompu, droits).
    """
    info: Dict[str, Any] = {"path": str(store.path), "exists": store.path.exists()}
    try:
        info["count"] = len(store.list_all())
        info["readable"] = True
    except BookingStoreError as e:
        info["readable"] = False
        info["error"] = str(e)
    return info
