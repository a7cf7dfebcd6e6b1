"""
ASGI entrypoint: expose `app` for process managers / deployments.

- En production, un process manager (ex: gunicorn/uvicorn-workers) importe `collectmyitem.asgi:app`.
- Toute la configuration FastAPI (routes, middlewares, static, etc.) est centralisée
  dans collectmyitem.app_setup, ce fichier ne fait qu’exposer l’instance `app`.
- Un seul worker par fichier de réservations: les écritures ne sont sérialisées qu'au sein d'un process.
"""

from collectmyitem.app import app

if __name__ == "__main__":
    import uvicorn
    from collectmyitem.config import PORT
    uvicorn.run(
        "collectmyitem.asgi:app",
        host="0.0.0.0",
        port=PORT,
        reload=True,     # rechargement automatique en dev
    )
