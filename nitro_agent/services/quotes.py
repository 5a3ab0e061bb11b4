"""Quote lookup: one POST to RouterNitro, validated against ``QuoteResult``."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..providers.nitro import RouterNitroProvider
from ..types import LookupErrorKind, LookupResult, QuoteRequest, QuoteResult


logger = logging.getLogger(__name__)


class QuoteService:
    def __init__(self, *, provider: Optional[RouterNitroProvider] = None) -> None:
        self._provider = provider or RouterNitroProvider()

    async def get_quote(self, request: QuoteRequest) -> LookupResult[QuoteResult]:
        """Fetch a quote for ``request``; never raises past this boundary."""

        try:
            payload = await self._provider.quote(request.to_payload())
            quote = QuoteResult.model_validate(payload)
        except httpx.HTTPStatusError as exc:
            response = exc.response
            message = f"Quote API error: {response.status_code} {response.reason_phrase}"
            logger.error("Error fetching quote: %s", message)
            return LookupResult.fail(LookupErrorKind.UPSTREAM, message)
        except httpx.RequestError as exc:
            logger.error("Error fetching quote: %s", exc)
            return LookupResult.fail(LookupErrorKind.UPSTREAM, str(exc) or exc.__class__.__name__)
        except ValidationError as exc:
            logger.error("Quote response failed validation: %s", exc)
            return LookupResult.fail(LookupErrorKind.INVALID_RESPONSE, "Quote response failed validation")
        except ValueError as exc:
            logger.error("Quote API returned a non-JSON body: %s", exc)
            return LookupResult.fail(LookupErrorKind.INVALID_RESPONSE, "Invalid quote API response")

        return LookupResult.ok(quote, "Quote fetched")


async def get_quote(request: QuoteRequest) -> LookupResult[QuoteResult]:
    """Module-level helper using a default-configured service."""

    return await QuoteService().get_quote(request)


__all__ = ["QuoteService", "get_quote"]
