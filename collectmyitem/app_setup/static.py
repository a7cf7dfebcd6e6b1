"""
Montage des fichiers statiques.
Expose:
- /public -> tout le répertoire public
- /static -> alias pour compatibilité
- /js, /css -> accès direct aux assets du formulaire de devis
"""
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from collectmyitem.config import PUBLIC_DIR

def mount_static_files(app: FastAPI) -> None:
    """
    Monte les répertoires statiques sur des préfixes stables.
    - check_dir=False: l'API reste utilisable sans bundle de présentation.
    """
    app.mount("/public", StaticFiles(directory=str(PUBLIC_DIR), check_dir=False), name="public")
    app.mount("/static", StaticFiles(directory=str(PUBLIC_DIR), check_dir=False), name="static")
    app.mount("/js", StaticFiles(directory=str(PUBLIC_DIR / "js"), check_dir=False), name="js")
    app.mount("/css", StaticFiles(directory=str(PUBLIC_DIR / "css"), check_dir=False), name="css")
