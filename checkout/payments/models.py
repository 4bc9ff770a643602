"""
Types du domaine 'payments' (valeurs immuables, une requête = un jeu d'instances)
et schémas d'entrée de l'endpoint HTTP.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# module checkout.payments.models
@dataclass(frozen=True)
class GatewayConfig:
    api_endpoint: str
    http_method: str = "POST"
    api_key: str = ""
    secret_key: str = ""


@dataclass(frozen=True)
class PricingPlan:
    id: str
    name: str
    raw_price: str
    gateway_config: Optional[GatewayConfig] = None


@dataclass(frozen=True)
class ParsedPrice:
    amount: Decimal
    currency_code: str = "USD"


@dataclass(frozen=True)
class CouponResult:
    valid: bool
    discount_fraction: Decimal = Decimal("0")
    message: str = ""


@dataclass(frozen=True)
class Order:
    id: str
    amount: Decimal
    currency_code: str


@dataclass(frozen=True)
class GatewayRequest:
    method: str
    url: str
    headers: Dict[str, str]
    body: Dict[str, Any]


@dataclass(frozen=True)
class CheckoutResult:
    redirect_url: str
    order: Optional[Order] = None


@dataclass(frozen=True)
class PaymentSettings:
    """
    Niveau « process » de la configuration, injecté dans l'orchestrateur.
    - default_api_key / default_secret_key: utilisés si le plan n'a pas ses propres identifiants.
    - default_coupons_endpoint: utilisé si la requête n'en fournit pas.
    - timeouts en secondes, un par collaborateur externe.
    """
    contentful_space_id: str = ""
    contentful_access_token: str = ""
    contentful_environment: str = "master"
    contentful_cdn_url: str = "https://cdn.contentful.com"
    default_api_key: str = ""
    default_secret_key: str = ""
    default_coupons_endpoint: str = ""
    plan_store_timeout: float = 5.0
    coupon_timeout: float = 5.0
    gateway_timeout: float = 5.0


class CheckoutRequest(BaseModel):
    """
    Corps attendu par POST /api/process-payment:
    { "planId": "...", "couponCode": "..."?, "couponsEndpoint": "..."? }
    """
    model_config = ConfigDict(populate_by_name=True)

    plan_id: str = Field(alias="planId", min_length=1)
    coupon_code: Optional[str] = Field(default=None, alias="couponCode")
    coupons_endpoint: Optional[str] = Field(default=None, alias="couponsEndpoint")

    @field_validator("plan_id")
    @classmethod
    def _strip_plan_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("planId manquant")
        return v

    @field_validator("coupon_code", "coupons_endpoint")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None
