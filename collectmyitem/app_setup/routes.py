"""
Routes simples (hors routers) pour la page d’accueil et les pages de retour Stripe.
- Sert / (et /index.html) depuis public/index.html si présent, sinon redirige vers /public/index.html.
- /success.html et /cancel.html: destinations success_url/cancel_url du checkout.
- /favicon.ico: pas de contenu (204) pour éviter des 404 dans les logs.
"""
from fastapi import FastAPI
from fastapi.responses import FileResponse, RedirectResponse, Response
from starlette.status import HTTP_204_NO_CONTENT, HTTP_303_SEE_OTHER
from collectmyitem.config import PUBLIC_DIR

def _serve_page(name: str):
    page_path = PUBLIC_DIR / name
    if page_path.exists():
        return FileResponse(str(page_path))
    return RedirectResponse(url=f"/public/{name}", status_code=HTTP_303_SEE_OTHER)

def register_routes(app: FastAPI) -> None:
    """
    Enregistre les routes racine et les pages statiques de premier niveau.
    - Laisse l’OpenAPI propre (include_in_schema=False).
    - Évite les 404 de favicon via une réponse 204.
    """
    @app.get("/", include_in_schema=False)
    def root_page():
        return _serve_page("index.html")

    @app.get("/index.html", include_in_schema=False)
    def index_alias():
        return _serve_page("index.html")

    @app.get("/success.html", include_in_schema=False)
    def success_page():
        return _serve_page("success.html")

    @app.get("/cancel.html", include_in_schema=False)
    def cancel_page():
        return _serve_page("cancel.html")

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=HTTP_204_NO_CONTENT)
