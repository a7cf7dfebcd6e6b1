from fastapi import APIRouter, Depends, HTTPException

from collectmyitem.bookings.models import public_view
from collectmyitem.bookings.store import BookingStore, get_store

router = APIRouter(prefix="/api/bookings", tags=["Bookings API"])

# module collectmyitem.bookings.views
@router.get("/{booking_ref}")
def get_booking_status(booking_ref: str, store: BookingStore = Depends(get_store)):
    """
    Statut public d'une réservation (utilisé par la page de succès).
    - Retour: {bookingRef, status, price, createdAt, paidAt}
    - Les coordonnées du client ne sont jamais exposées.
    - Erreurs: 404 si la référence est inconnue.
    """
    booking = store.get(booking_ref)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return public_view(booking)
