"""
Adaptateur passerelle (dLocal): construction de la requête de création de paiement et envoi.
Un paiement créé n'est jamais renvoyé automatiquement (risque de double débit).
"""
import logging
from typing import Any, Dict, Optional

import httpx

from .errors import GatewayRejectedError, GatewayResponseMalformedError, GatewayUnavailableError
from .models import GatewayConfig, GatewayRequest, Order

logger = logging.getLogger(__name__)

PAYMENTS_PATH = "v1/payments"

# module checkout.payments.gateway
def payments_url(api_endpoint: str) -> str:
    """
    Ajoute le chemin v1/payments une seule fois.
    - "https://api.x/v1/payments" ou "https://api.x/v1/payments/" -> "https://api.x/v1/payments"
    - "https://api.x" ou "https://api.x/" -> "https://api.x/v1/payments"
    """
    endpoint = (api_endpoint or "").strip().rstrip("/")
    if endpoint.endswith(PAYMENTS_PATH):
        return endpoint
    return endpoint + "/" + PAYMENTS_PATH

def auth_header(api_key: str, secret_key: str) -> str:
    # Convention dLocal: les deux clés dans un seul en-tête Bearer
    return f"Bearer {api_key}:{secret_key}"

def build_gateway_request(config: GatewayConfig, order: Order) -> GatewayRequest:
    """
    Prépare (url, headers, body) pour la passerelle.
    Le montant est le montant final décimal (seul l'order_id utilise la partie entière).
    """
    return GatewayRequest(
        method=(config.http_method or "POST").upper(),
        url=payments_url(config.api_endpoint),
        headers={
            "Content-Type": "application/json",
            "Authorization": auth_header(config.api_key, config.secret_key),
        },
        body={
            "amount": float(order.amount),
            "currency": order.currency_code,
            "order_id": order.id,
        },
    )

def _error_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text[:500]

async def submit_payment(
    client: httpx.AsyncClient,
    request: GatewayRequest,
    timeout: Optional[float] = None,
) -> str:
    """
    Envoie la requête et retourne redirect_url.
    - GatewayUnavailableError: transport/timeout
    - GatewayRejectedError: statut non-2xx (corps journalisé, pas relayé)
    - GatewayResponseMalformedError: 2xx sans redirect_url exploitable
    """
    try:
        resp = await client.request(
            request.method,
            request.url,
            headers=request.headers,
            json=request.body,
            timeout=timeout,
        )
    except httpx.HTTPError as e:
        logger.error("payments.gateway unavailable url=%s error=%s", request.url, type(e).__name__)
        raise GatewayUnavailableError(upstream=str(e)) from e

    if not resp.is_success:
        body = _error_body(resp)
        logger.error("payments.gateway rejected status=%s body=%s", resp.status_code, body)
        raise GatewayRejectedError(upstream=body)

    try:
        data: Dict[str, Any] = resp.json()
    except ValueError as e:
        logger.error("payments.gateway non-json response status=%s", resp.status_code)
        raise GatewayResponseMalformedError(upstream=resp.text[:500]) from e

    redirect_url = data.get("redirect_url") if isinstance(data, dict) else None
    if not redirect_url or not isinstance(redirect_url, str):
        logger.error("payments.gateway missing redirect_url order_id=%s", request.body.get("order_id"))
        raise GatewayResponseMalformedError(upstream=data)
    if not _is_absolute_url(redirect_url):
        logger.error("payments.gateway relative redirect_url=%r order_id=%s", redirect_url, request.body.get("order_id"))
        raise GatewayResponseMalformedError(upstream=data)
    return redirect_url

def _is_absolute_url(value: str) -> bool:
    try:
        return httpx.URL(value).is_absolute_url
    except httpx.InvalidURL:
        return False
