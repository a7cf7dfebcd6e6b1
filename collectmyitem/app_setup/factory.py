"""
Factory d’application recommandée pour les entrypoints (ex: collectmyitem.asgi).
Ordonne les étapes d’initialisation de manière lisible et testable.
"""
from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_no_cache_middleware
from .static import mount_static_files
from .exceptions import register_exception_handlers
from .routes import register_routes
from .routers import register_routers

def create_app() -> FastAPI:
    """
    Construit l’app FastAPI avec le lifespan et enregistre:
      - middlewares de base (CORS, proxy), no-cache, statiques
      - gestionnaires d’exceptions et routes simples (/, pages de retour Stripe)
      - tous les routers (pricing, payments, bookings, health)
    Retour:
      FastAPI prêt à être utilisé par le serveur ASGI.
    """
    app = FastAPI(title="Collect My Item API", lifespan=lifespan)
    register_basic_middlewares(app)
    register_no_cache_middleware(app)
    mount_static_files(app)
    register_exception_handlers(app)
    register_routes(app)
    register_routers(app)
    return app
