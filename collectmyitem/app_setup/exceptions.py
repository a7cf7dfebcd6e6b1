"""
Gestionnaires d’exceptions utilisés par la factory.
- HTTPException: body JSON standard {"detail": ...}.
- BookingStoreError: fichier de réservations illisible => 500 JSON, jamais un crash du process.
"""
import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from collectmyitem.bookings.store import BookingStoreError

logger = logging.getLogger(__name__)

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers d'erreurs applicatives.
    - Chaque handler contient l'échec à une seule réponse JSON.
    """
    @app.exception_handler(HTTPException)
    async def json_http_errors(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))

    @app.exception_handler(BookingStoreError)
    async def booking_store_errors(request: Request, exc: BookingStoreError):
        logger.error("bookings.store error path=%s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Booking storage unavailable"})
