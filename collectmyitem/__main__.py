"""
Point d'entrée principal du service.

Usage:
    python -m collectmyitem

Ce mode lance uvicorn directement et lit quelques variables d'environnement:
- PORT: port d'écoute (par défaut 4242)
- UVICORN_RELOAD: active le reload auto en dev ("1"/"true"/"yes")
- LOG_LEVEL: niveau de logs uvicorn (ex: "info", "debug")
"""
import os
import uvicorn

from collectmyitem.config import PORT


def main():
    reload_flag = os.environ.get("UVICORN_RELOAD", "").lower() in ("1", "true", "yes")
    log_level = os.environ.get("LOG_LEVEL", "info")
    uvicorn.run(
        "collectmyitem.asgi:app",  # on réutilise l'ASGI app unique
        host="0.0.0.0",
        port=PORT,
        reload=reload_flag,
        log_level=log_level,
        workers=1,
    )


if __name__ == "__main__":
    main()
