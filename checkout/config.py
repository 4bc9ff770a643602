# checkout.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale du service de paiement.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs (Contentful, dLocal, coupons)
- Expose les timeouts des appels sortants et les réglages CORS / rate limiting
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _float_env(name: str, default: float) -> float:
    raw = _clean_env(os.getenv(name) or "")
    try:
        value = float(raw) if raw else default
    except ValueError:
        return default
    return value if value > 0 else default

# Contentful: espace, token Delivery API et environnement
CONTENTFUL_SPACE_ID = _clean_env(os.getenv("CONTENTFUL_SPACE_ID") or "")
CONTENTFUL_ACCESS_TOKEN = _clean_env(os.getenv("CONTENTFUL_ACCESS_TOKEN") or "")
CONTENTFUL_ENVIRONMENT = _clean_env(os.getenv("CONTENTFUL_ENVIRONMENT") or "master")
CONTENTFUL_CDN_URL = _clean_env(os.getenv("CONTENTFUL_CDN_URL") or "https://cdn.contentful.com")

# Normalisations utiles
if CONTENTFUL_CDN_URL and not CONTENTFUL_CDN_URL.startswith("http"):
    CONTENTFUL_CDN_URL = "https://" + CONTENTFUL_CDN_URL
CONTENTFUL_CDN_URL = CONTENTFUL_CDN_URL.rstrip("/")

# dLocal: identifiants par défaut si le plan n'en fournit pas
DLOCAL_API_KEY = _clean_env(os.getenv("DLOCAL_API_KEY") or "")
DLOCAL_SECRET_KEY = _clean_env(os.getenv("DLOCAL_SECRET_KEY") or "")

# Endpoint de coupons par défaut (la requête peut le surcharger)
COUPONS_ENDPOINT = _clean_env(os.getenv("COUPONS_ENDPOINT") or "")

# Timeouts (secondes) des appels sortants
PLAN_STORE_TIMEOUT_SECONDS = _float_env("PLAN_STORE_TIMEOUT_SECONDS", 5.0)
COUPON_TIMEOUT_SECONDS = _float_env("COUPON_TIMEOUT_SECONDS", 5.0)
GATEWAY_TIMEOUT_SECONDS = _float_env("GATEWAY_TIMEOUT_SECONDS", 5.0)

# CORS (dev)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Rate limiting de l'endpoint de paiement
CHECKOUT_RATE_LIMIT_TIMES = int(os.getenv("CHECKOUT_RATE_LIMIT_TIMES", "10"))
CHECKOUT_RATE_LIMIT_SECONDS = int(os.getenv("CHECKOUT_RATE_LIMIT_SECONDS", "60"))
