"""
Middlewares transverses de l’application.
- register_basic_middlewares: CORS et confiance en X-Forwarded-*.
- register_no_cache_middleware: empêche la mise en cache des statuts de réservation.
Notes:
- Aucun middleware ne lit ni ne désérialise le body: le webhook Stripe reçoit les octets bruts.
"""
from fastapi import Request, FastAPI
from fastapi.middleware.cors import CORSMiddleware
try:
    from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware
except ImportError:
    ProxyHeadersMiddleware = None
from collectmyitem.config import CORS_ORIGINS

NO_CACHE_PREFIXES = ("/api/bookings",)

def register_basic_middlewares(app: FastAPI) -> None:
    """
    Ajoute les middlewares « de base »:
    - CORSMiddleware: autorise les origines définies (dev/prod).
    - ProxyHeadersMiddleware (si dispo): fait confiance aux en-têtes du proxy (x-forwarded-*).
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Fait confiance aux en-têtes X-Forwarded-* (Render, Nginx, etc.)
    if ProxyHeadersMiddleware:
        app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

def register_no_cache_middleware(app: FastAPI) -> None:
    """
    Empêche la mise en cache des statuts de réservation:
    - S’applique aux GET sous /api/bookings (la page de succès interroge le statut jusqu'au paiement).
    """
    @app.middleware("http")
    async def no_cache_for_bookings(request: Request, call_next):
        response = await call_next(request)
        if request.method == "GET" and request.url.path.startswith(NO_CACHE_PREFIXES):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response
