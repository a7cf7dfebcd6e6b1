"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.
"""
import json

import stripe
from typing import Any, Dict, List, Optional
from fastapi import Request

from collectmyitem import config


class WebhookVerificationError(Exception):
    """Signature Stripe absente, invalide, ou payload illisible."""


# module collectmyitem.payments.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l’emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY si disponible.
    - En absence de clé, les appels Stripe échoueront côté SDK (ex: No API key provided).
    """
    if config.STRIPE_SECRET_KEY:
        stripe.api_key = config.STRIPE_SECRET_KEY
    return stripe

def create_session(
    *,
    line_items: List[Dict[str, Any]],
    mode: str,
    success_url: str,
    cancel_url: str,
    metadata: Dict[str, str],
    client_reference_id: Optional[str] = None,
    customer_email: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Crée une session Stripe Checkout (page de paiement hébergée).
    - line_items: lignes Stripe (price_data/quantity)
    - mode: généralement "payment"
    - metadata: ex {"bookingRef": "CMI-..."} pour corréler le webhook
    Retour: dict session (ex: {"id": "cs_test_...", "url": "https://..."})
    Les erreurs Stripe (stripe.StripeError) sont propagées à l'appelant.
    """
    require_stripe()
    params: Dict[str, Any] = {
        "line_items": line_items,
        "mode": mode,
        "success_url": success_url,
        "cancel_url": cancel_url,
        "metadata": metadata,
        "payment_method_types": ["card"],
    }
    if client_reference_id:
        params["client_reference_id"] = client_reference_id
    if customer_email:
        params["customer_email"] = customer_email
    session = stripe.checkout.Session.create(**params)
    # StripeObject n'est pas un dict (stripe>=13): lecture par attribut
    return {"id": getattr(session, "id", None), "url": getattr(session, "url", None)}

def construct_event(payload: bytes, sig_header: Optional[str]) -> Dict[str, Any]:
    """
    Valide la signature Stripe sur les octets bruts et retourne l'événement.
    - La signature porte sur le texte exact reçu (WebhookSignature.verify_header),
      le JSON n'est décodé qu'ensuite, en dict Python simple.
    - Lève WebhookVerificationError si le secret manque, si la signature est invalide
      ou si le payload n'est pas un objet JSON.
    """
    secret = config.STRIPE_WEBHOOK_SECRET
    if not secret:
        raise WebhookVerificationError("STRIPE_WEBHOOK_SECRET manquant")
    if not sig_header:
        raise WebhookVerificationError("En-tête Stripe-Signature manquant")
    try:
        text = payload.decode("utf-8") if isinstance(payload, bytes) else str(payload)
        stripe.WebhookSignature.verify_header(text, sig_header, secret, stripe.Webhook.DEFAULT_TOLERANCE)
        event = json.loads(text)
    except (ValueError, stripe.SignatureVerificationError) as e:
        raise WebhookVerificationError(str(e)) from e
    if not isinstance(event, dict):
        raise WebhookVerificationError("Payload Stripe inattendu")
    return event

async def parse_event(request: Request):
    """
    Parse et valide un événement Stripe signé (webhook).
    - Lit le body brut (jamais désérialisé avant la vérification) + en-tête Stripe-Signature
    - Valide la signature via Webhook.construct_event (STRIPE_WEBHOOK_SECRET)
    Retour: l’événement (dict) si la signature est valide.
    """
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")
    return construct_event(payload, sig_header)
