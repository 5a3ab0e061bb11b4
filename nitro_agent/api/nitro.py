import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from ..core.nitro_tool import run_nitro_tool
from ..providers.llm import LLMProviderError
from ..services.chains import get_chain_details
from ..services.quotes import get_quote
from ..services.tokens import get_token_details
from ..types import LookupErrorKind, QuoteRequest

router = APIRouter(prefix="/nitro")
_logger = logging.getLogger(__name__)


class NitroToolRequest(BaseModel):
    query: str = Field(..., min_length=1, description="Natural-language swap/bridge request")
    llm_provider: Optional[str] = Field(default=None, description="Override the default LLM provider")
    llm_model: Optional[str] = Field(default=None, description="Override the default LLM model")


class NitroToolResponse(BaseModel):
    message: str = Field(description="Human readable route summary or error")
    artifact: Dict[str, Any] = Field(default_factory=dict, description="Structured route data or diagnostics")


@router.get("/chains")
async def search_chains(
    query: str = Query(..., min_length=1, description="Chain name, id, type or gas token symbol"),
) -> Dict[str, Any]:
    result = await get_chain_details(query)
    if not result.success:
        raise HTTPException(status_code=502, detail=result.message)
    return result.to_dict()


@router.get("/tokens/{chain_id}/{symbol}")
async def token_details(chain_id: str, symbol: str) -> Dict[str, Any]:
    result = await get_token_details(chain_id, symbol)
    if result.error == LookupErrorKind.NOT_FOUND:
        raise HTTPException(status_code=404, detail=result.message)
    if not result.success:
        raise HTTPException(status_code=502, detail=result.message)
    return result.to_dict()


@router.post("/quote")
async def quote(request: QuoteRequest) -> Dict[str, Any]:
    result = await get_quote(request)
    if not result.success:
        raise HTTPException(status_code=502, detail=result.message)
    return result.to_dict()


@router.post("/tool")
async def nitro_tool(request: NitroToolRequest) -> NitroToolResponse:
    """Run the full natural-language quote pipeline"""

    try:
        message, artifact = await run_nitro_tool(
            request.query,
            llm_provider=request.llm_provider,
            llm_model=request.llm_model,
        )
    except (ValueError, LLMProviderError) as exc:
        # No usable LLM provider could be built
        _logger.warning("LLM provider unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc))
    return NitroToolResponse(message=message, artifact=artifact)
