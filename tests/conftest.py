import os

# Pas de Redis en tests: le lifespan désactive le rate limiting
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import json
import pytest
import httpx
from typing import Any, Dict, Generator, List
from fastapi.testclient import TestClient

from checkout.app_setup.factory import create_app
from checkout.payments.models import PaymentSettings
from checkout.payments.service import get_payment_settings

CDN_HOST = "cdn.test"
COUPONS_HOST = "coupons.test"
GATEWAY_HOST = "gw.test"

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


def contentful_payload(
    name: str = "Pro Plan",
    price: str = "100.00 USD",
    api_fields: Dict[str, Any] | None = None,
    with_link: bool = True,
) -> Dict[str, Any]:
    """Réponse Contentful CDA (entries?sys.id=...) avec l'entrée ConnectAPI dans includes."""
    fields: Dict[str, Any] = {"name": name, "price": price}
    includes: List[Dict[str, Any]] = []
    if with_link:
        fields["apiConnection"] = {"sys": {"type": "Link", "linkType": "Entry", "id": "api-1"}}
        includes.append({
            "sys": {"id": "api-1"},
            "fields": api_fields if api_fields is not None else {
                "apiEndpoint": f"https://{GATEWAY_HOST}/",
                "httpMethod": "POST",
                "apiKey": "plan-key",
                "secretKey": "plan-secret",
            },
        })
    return {"items": [{"sys": {"id": "plan-1"}, "fields": fields}], "includes": {"Entry": includes}}


class FakeUpstream:
    """
    Simule Contentful, le service de coupons et la passerelle derrière un httpx.MockTransport.
    - plan / coupon / gateway: (statut, corps) renvoyés par hôte (corps str = texte brut)
    - errors: {hôte: exception httpx} pour simuler transport/timeout
    - calls: toutes les requêtes reçues, dans l'ordre
    """

    def __init__(self):
        self.plan = (200, contentful_payload())
        self.coupon = (200, {"valid": True, "discount": 0.15})
        self.gateway = (200, {"redirect_url": "https://pay.example/x"})
        self.errors: Dict[str, type] = {}
        self.calls: List[httpx.Request] = []

    def calls_to(self, host: str) -> List[httpx.Request]:
        return [r for r in self.calls if r.url.host == host]

    def gateway_body(self, index: int = 0) -> Dict[str, Any]:
        return json.loads(self.calls_to(GATEWAY_HOST)[index].content)

    def _reply(self, spec) -> httpx.Response:
        status, body = spec
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        host = request.url.host
        if host in self.errors:
            raise self.errors[host]("simulated failure", request=request)
        if host == CDN_HOST:
            return self._reply(self.plan)
        if host == COUPONS_HOST:
            return self._reply(self.coupon)
        if host == GATEWAY_HOST:
            return self._reply(self.gateway)
        return httpx.Response(404, json={"error": "unknown host"})

    def client(self, timeout=None) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler), follow_redirects=True)


@pytest.fixture()
def settings() -> PaymentSettings:
    return PaymentSettings(
        contentful_space_id="space",
        contentful_access_token="cda-token",
        contentful_environment="master",
        contentful_cdn_url=f"https://{CDN_HOST}",
        default_api_key="env-key",
        default_secret_key="env-secret",
        default_coupons_endpoint="",
        plan_store_timeout=1.0,
        coupon_timeout=1.0,
        gateway_timeout=1.0,
    )


@pytest.fixture()
def upstream(monkeypatch) -> FakeUpstream:
    fake = FakeUpstream()
    # Le service ouvre son client via checkout.infra.http_client.create_async_client
    monkeypatch.setattr("checkout.infra.http_client.create_async_client", fake.client)
    return fake


@pytest.fixture()
def app(settings):
    fastapi_app = create_app()
    fastapi_app.dependency_overrides[get_payment_settings] = lambda: settings
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def plan_payload():
    """Fabrique de réponses Contentful (voir contentful_payload)."""
    return contentful_payload
