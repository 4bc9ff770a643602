"""
Middlewares transverses de l’application.
- register_basic_middlewares: CORS (origines depuis CORS_ORIGINS).
- register_request_logging_middleware: une ligne de log par requête (méthode, chemin, statut, durée).
"""
import logging
import time
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from checkout.config import CORS_ORIGINS

logger = logging.getLogger("checkout.access")

def register_basic_middlewares(app: FastAPI) -> None:
    """
    Ajoute les middlewares « de base »:
    - CORSMiddleware: autorise les origines définies (le front appelle /api/process-payment).
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["*"],
    )

def register_request_logging_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s status=%s duration_ms=%.1f", request.method, request.url.path, response.status_code, elapsed_ms)
        return response
