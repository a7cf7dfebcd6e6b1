"""
Registre central des routers (API, health).
- API: pricing (devis), payments (checkout + webhook Stripe), bookings (statut)
- Health: health_router
"""
from fastapi import FastAPI
from collectmyitem.pricing import views as pricing_views
from collectmyitem.payments import views as payments_views
from collectmyitem.bookings import views as bookings_views
from collectmyitem.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l’application.
    - L’ordre n’a pas d’impact sauf conflits de chemins (évités par préfixes).
    """
    app.include_router(pricing_views.router)
    app.include_router(payments_views.router)
    app.include_router(bookings_views.router)
    # Health & monitoring
    app.include_router(health_router)
