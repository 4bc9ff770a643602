"""
Accès aux données pour la feature 'payments': lecture du plan de prix dans Contentful.
"""
import logging
from typing import Any, Dict, Optional

import httpx

import checkout.infra.contentful_client as contentful_client
from .errors import MalformedPriceError, PlanNotFoundError, PlanStoreUnavailableError
from .models import GatewayConfig, PaymentSettings, PricingPlan

logger = logging.getLogger(__name__)

# module checkout.payments.repository
def _gateway_config_from_fields(fields: Optional[Dict[str, Any]]) -> Optional[GatewayConfig]:
    """
    Convertit les champs de l'entrée ConnectAPI en GatewayConfig.
    - Retourne None si aucun apiEndpoint n'est défini.
    - Les identifiants peuvent être vides: le repli sur la config process se fait dans le service.
    """
    if not fields:
        return None
    endpoint = str(fields.get("apiEndpoint") or "").strip()
    if not endpoint:
        return None
    return GatewayConfig(
        api_endpoint=endpoint,
        http_method=str(fields.get("httpMethod") or "POST").strip().upper(),
        api_key=str(fields.get("apiKey") or "").strip(),
        secret_key=str(fields.get("secretKey") or "").strip(),
    )

async def fetch_plan(client: httpx.AsyncClient, plan_id: str, settings: PaymentSettings) -> PricingPlan:
    """
    Récupère le plan {name, price, apiConnection} par son identifiant.
    - PlanNotFoundError si l'entrée n'existe pas
    - MalformedPriceError si le champ price est absent
    - PlanStoreUnavailableError si Contentful ne répond pas correctement
    """
    if not plan_id:
        raise PlanNotFoundError()
    try:
        entry = await contentful_client.fetch_entry(
            client,
            entry_id=plan_id,
            space_id=settings.contentful_space_id,
            access_token=settings.contentful_access_token,
            environment=settings.contentful_environment,
            cdn_url=settings.contentful_cdn_url,
            timeout=settings.plan_store_timeout,
        )
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("payments.repository.fetch_plan failed plan_id=%s error=%s", plan_id, type(e).__name__)
        raise PlanStoreUnavailableError(upstream=str(e)) from e

    if not entry:
        raise PlanNotFoundError()

    fields = entry["fields"]
    raw_price = fields.get("price")
    if raw_price is None or str(raw_price).strip() == "":
        raise MalformedPriceError(upstream=raw_price)

    api_fields = contentful_client.resolve_link(fields.get("apiConnection"), entry["includes"])
    return PricingPlan(
        id=plan_id,
        name=str(fields.get("name") or plan_id),
        raw_price=str(raw_price),
        gateway_config=_gateway_config_from_fields(api_fields),
    )
