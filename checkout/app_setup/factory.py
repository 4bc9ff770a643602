"""
Factory d’application recommandée pour les entrypoints (ex: checkout.asgi).
Ordonne les étapes d’initialisation de manière lisible et testable.
"""
from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_request_logging_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers

def create_app() -> FastAPI:
    """
    Construit l’app FastAPI avec le lifespan et enregistre:
      - middlewares CORS et journalisation des requêtes
      - gestionnaires d’exceptions (erreurs de paiement -> {"error": ...})
      - routers (API paiement, health)
    """
    app = FastAPI(title="Checkout API", lifespan=lifespan)
    register_basic_middlewares(app)
    register_request_logging_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
