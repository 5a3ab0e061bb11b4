"""
Chain lookup service - searches the RouterNitro chain directory.

A lookup fetches one page of the directory (sorted by ``createdAt``
ascending) and keeps every chain whose name, chain id, type or gas token
symbol contains the query, ignoring case.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..config import settings
from ..providers.nitro import RouterNitroProvider
from ..types import ChainQueryResult, LookupErrorKind, LookupResult


logger = logging.getLogger(__name__)

SEARCHABLE_FIELDS = ("name", "chainId", "type")


def chain_matches(chain: Dict[str, Any], search_term: str) -> bool:
    """Case-insensitive substring match over the searchable chain fields."""

    needle = search_term.lower()
    candidates: List[Optional[Any]] = [chain.get(field) for field in SEARCHABLE_FIELDS]
    gas_token = chain.get("gasToken")
    if isinstance(gas_token, dict):
        candidates.append(gas_token.get("symbol"))

    return any(
        value is not None and needle in str(value).lower()
        for value in candidates
    )


class ChainLookupService:
    """Resolve free-text chain names, ids, types or gas symbols."""

    def __init__(
        self,
        *,
        provider: Optional[RouterNitroProvider] = None,
        page_limit: Optional[int] = None,
    ) -> None:
        self._provider = provider or RouterNitroProvider()
        self._page_limit = page_limit or settings.nitro_chain_page_limit

    async def fetch_directory(self) -> List[Dict[str, Any]]:
        """Fetch the raw chain directory page; raises on HTTP or shape errors."""

        payload = await self._provider.list_chains(
            page=0,
            limit=self._page_limit,
            sort_key="createdAt",
            sort_order="asc",
        )
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise ValueError("Invalid API response format")
        return data

    async def get_chain_details(self, chain_query: str) -> LookupResult[List[ChainQueryResult]]:
        """Return every directory chain matching ``chain_query``.

        Never raises: upstream and format errors come back as a failed result.
        """

        logger.info("Fetching chain details from RouterNitro for query=%r", chain_query)
        try:
            chains = await self.fetch_directory()
        except httpx.HTTPStatusError as exc:
            response = exc.response
            message = f"RouterNitro API error: {response.status_code} {response.reason_phrase}"
            logger.error("Error fetching chain details: %s", message)
            return LookupResult.fail(LookupErrorKind.UPSTREAM, message)
        except httpx.RequestError as exc:
            logger.error("Error fetching chain details: %s", exc)
            return LookupResult.fail(LookupErrorKind.UPSTREAM, str(exc) or exc.__class__.__name__)
        except ValueError as exc:
            # Covers non-JSON bodies as well as a missing/non-list ``data`` field
            logger.error("Error fetching chain details: %s", exc)
            return LookupResult.fail(LookupErrorKind.INVALID_RESPONSE, str(exc))

        now = datetime.now(timezone.utc)
        matches: List[ChainQueryResult] = []
        for chain in chains:
            if not isinstance(chain, dict) or not chain_matches(chain, chain_query):
                continue
            try:
                matches.append(
                    ChainQueryResult.from_raw(chain, explorer_url=settings.nitro_explorer_url, now=now)
                )
            except ValidationError as exc:
                logger.warning("Skipping malformed chain record %r: %s", chain.get("chainId"), exc)
        logger.debug("Chain query %r matched %d of %d chains", chain_query, len(matches), len(chains))

        message = (
            f"Found {len(matches)} matching chains"
            if matches
            else "No matching chains found"
        )
        return LookupResult.ok(matches, message, count=len(matches))


async def get_chain_details(chain_query: str) -> LookupResult[List[ChainQueryResult]]:
    """Module-level helper using a default-configured service."""

    return await ChainLookupService().get_chain_details(chain_query)


__all__ = [
    "ChainLookupService",
    "chain_matches",
    "get_chain_details",
]
