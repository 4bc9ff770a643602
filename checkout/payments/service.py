"""
Cas d'usage 'payments': orchestre repository, prix, coupons, order_id et passerelle.
Pipeline strictement séquentiel; chaque étape avance ou termine avec une erreur classifiée.
"""
import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional

from checkout import config
from checkout.infra import http_client
from . import coupons
from . import gateway
from . import repository
from .errors import GatewayConfigMissingError, InternalError, PaymentError
from .models import CheckoutRequest, CheckoutResult, GatewayConfig, Order, PaymentSettings
from .order_id import generate_order_id
from .price import parse_price

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class PaymentStage(str, Enum):
    FETCHING_PLAN = "fetching_plan"
    FETCHING_GATEWAY_CONFIG = "fetching_gateway_config"
    VALIDATING_COUPON = "validating_coupon"
    COMPUTING_AMOUNT = "computing_amount"
    BUILDING_ORDER = "building_order"
    SUBMITTING_PAYMENT = "submitting_payment"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

# module checkout.payments.service
def get_payment_settings() -> PaymentSettings:
    """Dépendance FastAPI: instantané de la configuration process (checkout.config)."""
    return PaymentSettings(
        contentful_space_id=config.CONTENTFUL_SPACE_ID,
        contentful_access_token=config.CONTENTFUL_ACCESS_TOKEN,
        contentful_environment=config.CONTENTFUL_ENVIRONMENT,
        contentful_cdn_url=config.CONTENTFUL_CDN_URL,
        default_api_key=config.DLOCAL_API_KEY,
        default_secret_key=config.DLOCAL_SECRET_KEY,
        default_coupons_endpoint=config.COUPONS_ENDPOINT,
        plan_store_timeout=config.PLAN_STORE_TIMEOUT_SECONDS,
        coupon_timeout=config.COUPON_TIMEOUT_SECONDS,
        gateway_timeout=config.GATEWAY_TIMEOUT_SECONDS,
    )

def resolve_gateway_config(plan_config: Optional[GatewayConfig], settings: PaymentSettings) -> GatewayConfig:
    """
    Résolution à deux niveaux: identifiants du plan, sinon ceux du process.
    Soulève GatewayConfigMissingError avant tout appel réseau si un élément manque.
    """
    if plan_config is None or not plan_config.api_endpoint:
        raise GatewayConfigMissingError()
    api_key = plan_config.api_key or settings.default_api_key
    secret_key = plan_config.secret_key or settings.default_secret_key
    if not api_key or not secret_key:
        raise GatewayConfigMissingError()
    return GatewayConfig(
        api_endpoint=plan_config.api_endpoint,
        http_method=plan_config.http_method or "POST",
        api_key=api_key,
        secret_key=secret_key,
    )

def apply_discount(amount: Decimal, discount_fraction: Decimal) -> Decimal:
    """Montant final = base x (1 - fraction), arrondi au centime (half-up)."""
    final = amount - amount * discount_fraction
    return final.quantize(CENTS, rounding=ROUND_HALF_UP)

async def process_payment(
    checkout_request: CheckoutRequest,
    settings: PaymentSettings,
    now: Optional[datetime] = None,
) -> CheckoutResult:
    """
    Traite une demande de paiement:
      1) plan (Contentful)  2) config passerelle  3) coupon (si fourni)
      4) montant final      5) commande           6) envoi à la passerelle
    Retourne CheckoutResult(redirect_url) ou soulève une PaymentError.
    """
    plan_id = checkout_request.plan_id
    stage = PaymentStage.FETCHING_PLAN
    try:
        async with http_client.create_async_client(settings.plan_store_timeout) as client:
            logger.info("payments.stage stage=%s plan_id=%s", stage.value, plan_id)
            plan = await repository.fetch_plan(client, plan_id, settings)
            price = parse_price(plan.raw_price)

            stage = PaymentStage.FETCHING_GATEWAY_CONFIG
            logger.info("payments.stage stage=%s plan_id=%s", stage.value, plan_id)
            gateway_config = resolve_gateway_config(plan.gateway_config, settings)

            discount = Decimal("0")
            if checkout_request.coupon_code:
                stage = PaymentStage.VALIDATING_COUPON
                logger.info("payments.stage stage=%s plan_id=%s", stage.value, plan_id)
                endpoint = checkout_request.coupons_endpoint or settings.default_coupons_endpoint
                coupon = await coupons.validate_coupon(
                    client,
                    checkout_request.coupon_code,
                    endpoint,
                    timeout=settings.coupon_timeout,
                )
                discount = coupon.discount_fraction

            stage = PaymentStage.COMPUTING_AMOUNT
            final_amount = apply_discount(price.amount, discount)
            logger.info(
                "payments.amount plan_id=%s base=%s final=%s discount=%s%% currency=%s",
                plan_id, price.amount, final_amount, discount * 100, price.currency_code,
            )

            stage = PaymentStage.BUILDING_ORDER
            order = Order(
                id=generate_order_id(plan.name, final_amount, now),
                amount=final_amount,
                currency_code=price.currency_code,
            )
            gateway_request = gateway.build_gateway_request(gateway_config, order)

            stage = PaymentStage.SUBMITTING_PAYMENT
            logger.info("payments.stage stage=%s order_id=%s", stage.value, order.id)
            redirect_url = await gateway.submit_payment(
                client, gateway_request, timeout=settings.gateway_timeout
            )
    except PaymentError as e:
        logger.warning(
            "payments.stage stage=%s failed_at=%s plan_id=%s error=%s",
            PaymentStage.FAILED.value, stage.value, plan_id, type(e).__name__,
        )
        raise
    except Exception as e:
        logger.exception("payments.stage stage=%s failed_at=%s plan_id=%s", PaymentStage.FAILED.value, stage.value, plan_id)
        raise InternalError() from e

    logger.info("payments.stage stage=%s order_id=%s", PaymentStage.SUCCEEDED.value, order.id)
    return CheckoutResult(redirect_url=redirect_url, order=order)
