"""
Cas d'usage 'payments': orchestre pricing, store des réservations, stripe et metadata.
"""
import logging
from urllib.parse import urlencode
from typing import Any, Dict, Mapping, Optional

import stripe

from collectmyitem import config
from collectmyitem.bookings.models import booking_fields_from_request, clean_booking_ref, new_booking_ref
from collectmyitem.bookings.store import BookingAlreadyPaidError, BookingStore
from collectmyitem.pricing import calculate_price
from . import metadata as meta
from . import stripe_client

logger = logging.getLogger(__name__)

# Montant minimal accepté par Stripe (50 pence)
MIN_CHARGE_MINOR = 50
PRODUCT_NAME = "Collect My Item"
CHECKOUT_COMPLETED = "checkout.session.completed"


class CheckoutError(Exception):
    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def to_minor_units(price: int) -> int:
    return int(round(price * 100))

def to_line_items(booking_ref: str, amount_minor: int, currency: Optional[str] = None) -> list:
    """Une seule ligne Stripe pour le montant calculé côté serveur."""
    return [
        {
            "price_data": {
                "currency": currency or config.CHECKOUT_CURRENCY,
                "product_data": {"name": f"{PRODUCT_NAME} - {booking_ref}"},
                "unit_amount": amount_minor,
            },
            "quantity": 1,
        }
    ]

def checkout_urls(base_url: Optional[str] = None, booking_ref: Optional[str] = None) -> Dict[str, str]:
    """URLs de retour Stripe; la page de succès reçoit ?ref= pour suivre le statut."""
    base = (base_url or config.BASE_URL).rstrip("/")
    success = f"{base}{config.CHECKOUT_SUCCESS_PATH}"
    if booking_ref:
        success = f"{success}?{urlencode({'ref': booking_ref})}"
    return {
        "success_url": success,
        "cancel_url": f"{base}{config.CHECKOUT_CANCEL_PATH}",
    }

def create_checkout(body: Mapping[str, Any], store: BookingStore, base_url: Optional[str] = None) -> Dict[str, str]:
    """
    Crée la réservation 'pending' et la session Stripe Checkout associée.
    Étapes:
      1) Recalcule le prix côté serveur (le prix envoyé par le client n'est jamais facturé)
      2) Refuse un montant < 50 pence (CheckoutError 400) avant tout appel Stripe
      3) Génère bookingRef si absent, puis upsert de la réservation avec le prix calculé
         (CheckoutError 409 si cette réservation est déjà payée, sans appel Stripe)
      4) Crée la session Stripe (metadata.bookingRef) et mémorise stripeSessionId
    Retour: {"url": "<checkout stripe>", "bookingRef": "CMI-..."}
    Erreurs: CheckoutError(500, <message Stripe>) si Stripe échoue (pas de retry).
    """
    body = body if isinstance(body, Mapping) else {}
    price = calculate_price(body)
    amount_minor = to_minor_units(price)
    if not amount_minor or amount_minor < MIN_CHARGE_MINOR:
        raise CheckoutError(400, "Invalid amount")

    booking_ref = clean_booking_ref(body.get("bookingRef")) or new_booking_ref()
    fields = booking_fields_from_request(dict(body))
    fields["price"] = price
    try:
        store.upsert(booking_ref, fields)
    except BookingAlreadyPaidError as e:
        logger.warning("payments.checkout refused ref=%s: already paid", booking_ref)
        raise CheckoutError(409, "Booking already paid") from e

    try:
        session = stripe_client.create_session(
            line_items=to_line_items(booking_ref, amount_minor),
            mode="payment",
            metadata=meta.make_metadata(booking_ref),
            client_reference_id=booking_ref,
            customer_email=(body.get("email") or None),
            **checkout_urls(base_url, booking_ref),
        )
    except stripe.StripeError as e:
        logger.exception("payments.checkout stripe error ref=%s", booking_ref)
        raise CheckoutError(500, getattr(e, "user_message", None) or str(e)) from e

    url = session.get("url")
    if not url:
        raise CheckoutError(500, "Stripe session has no checkout URL")
    if session.get("id"):
        store.upsert(booking_ref, {"stripeSessionId": session.get("id")})

    logger.info("payments.checkout created ref=%s amount=%s session=%s", booking_ref, amount_minor, session.get("id"))
    return {"url": url, "bookingRef": booking_ref}

def handle_event(event: Mapping[str, Any], store: BookingStore) -> Optional[Dict[str, Any]]:
    """
    Applique un événement Stripe déjà vérifié.
    - checkout.session.completed: passe la réservation metadata.bookingRef en 'paid'.
    - Autres types: ignorés (acquittés par la vue).
    Retour: la réservation mise à jour, ou None si rien n'a changé.
    """
    event_type = (event or {}).get("type")
    if event_type != CHECKOUT_COMPLETED:
        logger.info("payments.webhook ignored type=%s", event_type)
        return None

    booking_ref = meta.extract_booking_ref(event)
    if not booking_ref:
        logger.warning("payments.webhook completed without bookingRef")
        return None

    extra = {}
    session_id = meta.extract_session_id(event)
    if session_id:
        extra["stripeSessionId"] = session_id
    booking = store.mark_paid(booking_ref, **extra)
    logger.info("payments.webhook paid ref=%s found=%s", booking_ref, booking is not None)
    return booking
