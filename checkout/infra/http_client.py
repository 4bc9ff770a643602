"""
Fabrique du client httpx utilisé par une requête de paiement.
Un client par requête (aucun état partagé entre requêtes); les tests remplacent
create_async_client pour injecter un httpx.MockTransport.
"""
from typing import Optional
import httpx

DEFAULT_TIMEOUT_SECONDS = 5.0

# module checkout.infra.http_client
def create_async_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout or DEFAULT_TIMEOUT_SECONDS),
        follow_redirects=True,
    )
