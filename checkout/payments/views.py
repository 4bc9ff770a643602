import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from checkout.config import CHECKOUT_RATE_LIMIT_TIMES, CHECKOUT_RATE_LIMIT_SECONDS
from checkout.utils.rate_limit import optional_rate_limit
from .models import CheckoutRequest, PaymentSettings
from . import service as payments_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Payments API"])

# module checkout.payments.views
@router.post(
    "/process-payment",
    dependencies=[Depends(optional_rate_limit(times=CHECKOUT_RATE_LIMIT_TIMES, seconds=CHECKOUT_RATE_LIMIT_SECONDS))],
)
async def process_payment_view(
    body: CheckoutRequest,
    settings: PaymentSettings = Depends(payments_service.get_payment_settings),
):
    """
    Crée un paiement pour un plan et renvoie l'URL de redirection de la passerelle.
    - Entrée JSON: { "planId": "...", "couponCode": "..."?, "couponsEndpoint": "..."? }
    - Sortie: 200 { "redirectUrl": "https://..." }
    - Erreurs: { "error": "<message>" } avec le statut de l'erreur classifiée
      (404 plan, 400 config/coupon, 502 services amont, 500 données/interne)
    """
    result = await payments_service.process_payment(body, settings)
    logger.info("payments.views.process_payment ok plan_id=%s order_id=%s", body.plan_id, result.order.id if result.order else None)
    return JSONResponse({"redirectUrl": result.redirect_url}, status_code=200)
