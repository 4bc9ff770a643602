"""
Accès à l'API Contentful Delivery (lecture seule) via httpx.
- fetch_entry: récupère une entrée et ses liens inclus (includes.Entry)
- resolve_link: remplace un lien {"sys": {"type": "Link", ...}} par les champs de l'entrée liée
"""
from typing import Any, Dict, Optional
import httpx

# module checkout.infra.contentful_client
def entries_url(cdn_url: str, space_id: str, environment: str) -> str:
    return f"{cdn_url.rstrip('/')}/spaces/{space_id}/environments/{environment or 'master'}/entries"

async def fetch_entry(
    client: httpx.AsyncClient,
    *,
    entry_id: str,
    space_id: str,
    access_token: str,
    environment: str = "master",
    cdn_url: str = "https://cdn.contentful.com",
    include: int = 2,
    timeout: Optional[float] = None,
) -> Optional[Dict[str, Any]]:
    """
    Retourne {"fields": {...}, "includes": {id: fields}} ou None si l'entrée n'existe pas
    (réponse 200 avec items vide).
    - Les erreurs transport et tous les statuts non-2xx remontent en httpx.HTTPError:
      un 404 sur /entries signale un espace ou un environnement inconnu, pas une entrée absente.
    """
    resp = await client.get(
        entries_url(cdn_url, space_id, environment),
        params={"sys.id": entry_id, "include": include},
        headers={"Authorization": f"Bearer {access_token}"},
        timeout=timeout,
    )
    resp.raise_for_status()
    data = resp.json()

    items = (data or {}).get("items") or []
    if not items:
        return None
    linked = {
        str((e.get("sys") or {}).get("id")): e.get("fields") or {}
        for e in ((data.get("includes") or {}).get("Entry") or [])
    }
    return {"fields": items[0].get("fields") or {}, "includes": linked}

def resolve_link(value: Any, includes: Dict[str, Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Résout un champ lien vers les champs de l'entrée liée.
    - Accepte aussi une entrée déjà résolue ({"fields": {...}}).
    - Retourne None si le lien est absent ou non résolu.
    """
    if not isinstance(value, dict):
        return None
    if isinstance(value.get("fields"), dict):
        return value["fields"]
    sys = value.get("sys") or {}
    if sys.get("type") == "Link" and sys.get("linkType") == "Entry":
        return includes.get(str(sys.get("id")))
    return None
