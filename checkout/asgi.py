"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

- En production, un process manager (ex: gunicorn -k uvicorn.workers.UvicornWorker) importe
  `checkout.asgi:app`.
- Toute la configuration FastAPI est centralisée dans checkout.app_setup.factory.
"""
import logging
import os

from checkout.app_setup.factory import create_app

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "info").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = create_app()
