"""
Module 'payments' (feature-first): point d'entrée public.
Réunit metadata Stripe, client Stripe et cas d'usage checkout/webhook.
"""

from .metadata import normalize_metadata, make_metadata, extract_booking_ref, extract_session_id
from .stripe_client import require_stripe, create_session, construct_event, parse_event, WebhookVerificationError
from .service import CheckoutError, create_checkout, handle_event, to_line_items, to_minor_units

__all__ = [
    # metadata
    "normalize_metadata",
    "make_metadata",
    "extract_booking_ref",
    "extract_session_id",
    # stripe
    "require_stripe",
    "create_session",
    "construct_event",
    "parse_event",
    "WebhookVerificationError",
    # services
    "CheckoutError",
    "create_checkout",
    "handle_event",
    "to_line_items",
    "to_minor_units",
]
