from fastapi import APIRouter
from typing import Dict, Any

from ..config import settings
from ..providers.nitro import RouterNitroProvider

router = APIRouter()


@router.get("/healthz")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint that verifies the RouterNitro API is reachable"""

    provider_status = {
        "routernitro": await RouterNitroProvider().health_check(),
        "llm": {
            "status": "configured" if settings.has_llm_key else "unavailable",
            "provider": settings.llm_provider,
        },
    }

    return {
        "status": "healthy" if provider_status["routernitro"]["status"] == "healthy" else "degraded",
        "providers": provider_status,
    }
