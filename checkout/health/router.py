from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from checkout import config
from checkout.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return JSONResponse(rate_limit_health_info(request))

@router.get("/config")
def health_config():
    # Présence des réglages uniquement, jamais les valeurs
    return {
        "contentful": bool(config.CONTENTFUL_SPACE_ID and config.CONTENTFUL_ACCESS_TOKEN),
        "gateway_default_credentials": bool(config.DLOCAL_API_KEY and config.DLOCAL_SECRET_KEY),
        "coupons_endpoint": bool(config.COUPONS_ENDPOINT),
    }
