import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from collectmyitem.pricing.calculator import calculate_quote
from collectmyitem.utils.http import read_json_object

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Pricing API"])

# module collectmyitem.pricing.views
@router.post("/price")
async def price_quote(request: Request):
    """
    Devis instantané (tarif serveur, faisant foi).
    - Entrée JSON: champs du formulaire de devis (itemSize, itemCount, stairs*, date, timeWindow...)
    - Aucune persistance: calcul pur.
    - Retour: {"price": <int>, "zone": "...", "breakdown": [...], "note": "..."}
    """
    body = await read_json_object(request)
    quote = calculate_quote(body)
    logger.info("pricing.quote size=%s count=%s price=%s", body.get("itemSize"), body.get("itemCount"), quote.price)
    return JSONResponse(quote.model_dump())
