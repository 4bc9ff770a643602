"""
Module 'payments' (feature-first): point d'entrée public.
Réunit lecture du prix, order_id, coupons, passerelle, repository Contentful et orchestration.
"""

from .errors import (
    PaymentError,
    PlanNotFoundError,
    PlanStoreUnavailableError,
    GatewayConfigMissingError,
    MalformedPriceError,
    CouponConfigError,
    CouponInvalidError,
    CouponUnavailableError,
    GatewayRejectedError,
    GatewayResponseMalformedError,
    GatewayUnavailableError,
    InternalError,
)
from .price import parse_price
from .order_id import generate_order_id
from .coupons import validate_coupon
from .gateway import build_gateway_request, submit_payment, payments_url
from .repository import fetch_plan
from .service import process_payment, get_payment_settings, resolve_gateway_config, apply_discount, PaymentStage

__all__ = [
    # errors
    "PaymentError",
    "PlanNotFoundError",
    "PlanStoreUnavailableError",
    "GatewayConfigMissingError",
    "MalformedPriceError",
    "CouponConfigError",
    "CouponInvalidError",
    "CouponUnavailableError",
    "GatewayRejectedError",
    "GatewayResponseMalformedError",
    "GatewayUnavailableError",
    "InternalError",
    # pure helpers
    "parse_price",
    "generate_order_id",
    "payments_url",
    "build_gateway_request",
    "apply_discount",
    "resolve_gateway_config",
    # upstream calls
    "validate_coupon",
    "submit_payment",
    "fetch_plan",
    # services
    "process_payment",
    "get_payment_settings",
    "PaymentStage",
]
