import logging

from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from collectmyitem.bookings.store import BookingStore, BookingStoreError, get_store
from collectmyitem.utils.http import read_json_object
from collectmyitem.utils.rate_limit import optional_rate_limit
from collectmyitem.payments import stripe_client
from collectmyitem.payments import service as payments_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments API"])

# module collectmyitem.payments.views
@router.post("/create-checkout-session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
@router.post("/api/create-checkout-session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_checkout_session(request: Request, store: BookingStore = Depends(get_store)):
    """
    Crée une session Checkout Stripe pour une réservation.
    - Entrée JSON: champs du devis + coordonnées (name, phone, email, notes), bookingRef optionnel
    - Sécurité: rate limit (10 req / 60s)
    - Le prix est recalculé côté serveur (payments_service.create_checkout)
    - Retour: {"url": "<stripe>", "bookingRef": "CMI-..."}
    - Erreurs: 400 si montant invalide, 409 si la réservation est déjà payée, 500 si Stripe échoue (message Stripe)
    """
    body = await read_json_object(request)
    try:
        result = await run_in_threadpool(payments_service.create_checkout, body, store)
        return JSONResponse(result)
    except payments_service.CheckoutError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail)
    except BookingStoreError:
        raise
    except Exception as e:
        logger.exception("Erreur create_checkout_session")
        raise HTTPException(status_code=500, detail=str(e))

@router.post("/webhook", include_in_schema=False)
async def webhook_stripe(request: Request, store: BookingStore = Depends(get_store)):
    """
    Webhook Stripe (Checkout): consomme checkout.session.completed pour marquer la réservation payée.
    - Signature: valide via stripe_client.parse_event sur le body BRUT (aucun paramètre body JSON
      n'est déclaré ici, la vérification doit porter sur les octets transmis)
    - Autres événements: acquittés et ignorés
    - Réponses: {"received": true}; 400 si signature/payload invalide (aucune modification)
    """
    try:
        event = await stripe_client.parse_event(request)
    except stripe_client.WebhookVerificationError as e:
        logger.warning("payments.webhook invalid signature: %s", e)
        raise HTTPException(status_code=400, detail="Invalid signature")

    await run_in_threadpool(payments_service.handle_event, event, store)
    return JSONResponse({"received": True})
