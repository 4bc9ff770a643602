"""
Validation des coupons auprès de l'endpoint tiers.
GET {endpoint}?coupon={code}&action=apply-coupon -> {"valid": bool, "discount"?: 0..1, "message"?: str}
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx

from .errors import CouponConfigError, CouponInvalidError, CouponUnavailableError
from .models import CouponResult

logger = logging.getLogger(__name__)

COUPON_HEADERS = {
    "Accept": "*/*",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
}

# module checkout.payments.coupons
def _discount_fraction(raw) -> Decimal:
    """
    Le champ discount est une fraction (0.15 = 15 %).
    Une valeur hors [0, 1] (ex: 15) est une violation de contrat, pas un pourcentage à deviner.
    Un coupon valide sans discount n'est pas lu comme 0 %.
    """
    if raw is None:
        raise ValueError("discount absent")
    if isinstance(raw, bool):
        raise ValueError("discount booléen")
    try:
        value = Decimal(str(raw))
    except InvalidOperation as e:
        raise ValueError(f"discount illisible: {raw!r}") from e
    if not value.is_finite() or value < 0 or value > 1:
        raise ValueError(f"discount hors bornes: {raw!r}")
    return value

async def validate_coupon(
    client: httpx.AsyncClient,
    coupon_code: str,
    coupons_endpoint: Optional[str],
    timeout: Optional[float] = None,
) -> CouponResult:
    """
    Interroge le service de coupons et convertit la réponse en décision.
    - CouponConfigError: endpoint absent
    - CouponInvalidError: valid=false (message du service, ou texte générique)
    - CouponUnavailableError: transport/timeout, JSON illisible ou réponse hors contrat
    Aucune de ces erreurs n'est convertie en « pas de remise ».
    """
    if not coupons_endpoint:
        raise CouponConfigError()

    try:
        resp = await client.get(
            coupons_endpoint,
            params={"coupon": coupon_code, "action": "apply-coupon"},
            headers=COUPON_HEADERS,
            follow_redirects=True,
            timeout=timeout,
        )
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("payments.coupons unavailable endpoint=%s error=%s", coupons_endpoint, type(e).__name__)
        raise CouponUnavailableError(upstream=str(e)) from e

    if not isinstance(data, dict) or "valid" not in data:
        logger.error("payments.coupons unexpected payload status=%s", resp.status_code)
        raise CouponUnavailableError(upstream=data)

    if not data.get("valid"):
        message = str(data.get("message") or "").strip()
        raise CouponInvalidError(message or None)

    try:
        fraction = _discount_fraction(data.get("discount"))
    except ValueError as e:
        logger.error("payments.coupons invalid discount=%r", data.get("discount"))
        raise CouponUnavailableError(upstream=data) from e

    return CouponResult(valid=True, discount_fraction=fraction, message=str(data.get("message") or ""))
