import pytest
import httpx

COUPONS = "https://coupons.test/api"


def test_process_payment_success(client, upstream):
    response = client.post("/api/process-payment", json={"planId": "plan-1"})

    assert response.status_code == 200
    assert response.json() == {"redirectUrl": "https://pay.example/x"}
    body = upstream.gateway_body()
    assert body["amount"] == 100.0
    assert body["currency"] == "USD"


def test_process_payment_with_coupon(client, upstream):
    response = client.post(
        "/api/process-payment",
        json={"planId": "plan-1", "couponCode": "SAVE15", "couponsEndpoint": COUPONS},
    )
    assert response.status_code == 200
    assert upstream.gateway_body()["amount"] == 85.0


def test_process_payment_blank_coupon_is_ignored(client, upstream):
    response = client.post("/api/process-payment", json={"planId": "plan-1", "couponCode": "  "})
    assert response.status_code == 200
    assert upstream.calls_to("coupons.test") == []


def test_process_payment_invalid_coupon(client, upstream):
    upstream.coupon = (200, {"valid": False, "message": "expired"})
    response = client.post(
        "/api/process-payment",
        json={"planId": "plan-1", "couponCode": "OLD", "couponsEndpoint": COUPONS},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "expired"}
    assert upstream.calls_to("gw.test") == []


def test_process_payment_coupon_endpoint_missing(client, upstream):
    response = client.post("/api/process-payment", json={"planId": "plan-1", "couponCode": "SAVE15"})
    assert response.status_code == 400
    assert response.json() == {"error": "Endpoint de coupons non configuré"}


def test_process_payment_plan_not_found(client, upstream):
    upstream.plan = (200, {"sys": {"type": "Array"}, "items": []})
    response = client.post("/api/process-payment", json={"planId": "nope"})
    assert response.status_code == 404
    assert response.json() == {"error": "Plan de paiement introuvable"}


def test_process_payment_plan_store_misconfigured(client, upstream):
    # /entries en 404: espace ou environnement Contentful inconnu
    upstream.plan = (404, {"sys": {"type": "Error", "id": "NotFound"}})
    response = client.post("/api/process-payment", json={"planId": "plan-1"})
    assert response.status_code == 502
    assert response.json() == {"error": "Magasin de contenu indisponible"}
    assert upstream.calls_to("gw.test") == []


def test_process_payment_gateway_config_missing(client, upstream, plan_payload):
    upstream.plan = (200, plan_payload(with_link=False))
    response = client.post("/api/process-payment", json={"planId": "plan-1"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_process_payment_gateway_rejected_hides_upstream_body(client, upstream):
    upstream.gateway = (401, {"message": "Invalid key plan-key"})
    response = client.post("/api/process-payment", json={"planId": "plan-1"})
    assert response.status_code == 502
    assert response.json() == {"error": "Erreur lors du traitement du paiement"}
    assert "plan-key" not in response.text


def test_process_payment_gateway_without_redirect(client, upstream):
    upstream.gateway = (200, {"id": "PAY-1"})
    response = client.post("/api/process-payment", json={"planId": "plan-1"})
    assert response.status_code == 502
    assert response.json() == {"error": "URL de redirection absente de la réponse de la passerelle"}


def test_process_payment_gateway_unavailable(client, upstream):
    upstream.errors["gw.test"] = httpx.ConnectError
    response = client.post("/api/process-payment", json={"planId": "plan-1"})
    assert response.status_code == 502
    assert response.json() == {"error": "Passerelle de paiement indisponible"}


def test_process_payment_malformed_price(client, upstream, plan_payload):
    upstream.plan = (200, plan_payload(price="sur devis"))
    response = client.post("/api/process-payment", json={"planId": "plan-1"})
    assert response.status_code == 500
    assert response.json() == {"error": "Prix du plan invalide"}


@pytest.mark.parametrize("payload", [{}, {"planId": ""}, {"planId": "   "}, {"planId": 12}])
def test_process_payment_bad_request_body(client, upstream, payload):
    response = client.post("/api/process-payment", json=payload)
    assert response.status_code == 400
    assert response.json()["error"].startswith("Requête invalide")
    assert upstream.calls == []


def test_process_payment_rate_limited_with_local_fallback(client, upstream, monkeypatch):
    # Limite par défaut: 10 requêtes / 60 s par IP et chemin
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    statuses = [client.post("/api/process-payment", json={"planId": "plan-1"}).status_code for _ in range(11)]
    assert statuses[:10] == [200] * 10
    assert statuses[10] == 429


def test_process_payment_rate_limit_ignores_forwarded_for(client, upstream, monkeypatch):
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    statuses = [
        client.post(
            "/api/process-payment",
            json={"planId": "plan-1"},
            headers={"X-Forwarded-For": f"10.0.0.{i}"},
        ).status_code
        for i in range(12)
    ]
    assert statuses[:10] == [200] * 10
    assert statuses[10:] == [429, 429]
