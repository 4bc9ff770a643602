"""
Gestionnaires d’exceptions.
- PaymentError -> {"error": message} avec le statut de l’erreur classifiée.
- Corps invalide (planId manquant, types) -> 400 {"error": ...}.
- HTTPException (429 du rate limiting, 404 de routes) -> {"error": detail}.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from checkout.payments.errors import PaymentError

logger = logging.getLogger(__name__)

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PaymentError)
    async def payment_error_handler(request: Request, exc: PaymentError):
        if exc.upstream is not None:
            logger.info("payments.error %s status=%s upstream=%s", type(exc).__name__, exc.status_code, exc.upstream)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
        detail = "Requête invalide" + (f": {', '.join(f for f in fields if f)}" if any(fields) else "")
        return JSONResponse(status_code=400, content={"error": detail})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)
