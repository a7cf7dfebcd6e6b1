# module collectmyitem.app
import logging
import os

from collectmyitem.app_setup.factory import create_app

# Logs applicatifs (les loggers uvicorn sont configurés par uvicorn lui-même)
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "info").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# App globale
app = create_app()
