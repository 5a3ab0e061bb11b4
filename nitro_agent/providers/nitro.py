"""Async client for the RouterNitro (nitroswap) public API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import settings
from .base import Provider


logger = logging.getLogger(__name__)


class RouterNitroProvider(Provider):
    """Thin wrapper around https://api.nitroswap.routernitro.com endpoints.

    Every call opens its own ``httpx.AsyncClient``; nothing is shared between
    requests. HTTP errors propagate as ``httpx.HTTPStatusError`` and transport
    failures as ``httpx.RequestError`` so the lookup services can decide how
    to report them.
    """

    name = "routernitro"

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.nitro_base_url).rstrip("/")
        self.timeout_s = timeout_s if timeout_s is not None else settings.request_timeout_seconds
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": settings.nitro_user_agent,
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        headers = self._headers()
        if json is not None:
            headers["Content-Type"] = "application/json"

        logger.debug("RouterNitro %s %s params=%s", method, path, params)
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_s,
            transport=self._transport,
        ) as client:
            response = await client.request(method, path, json=json, params=params, headers=headers)
            response.raise_for_status()
            return response

    async def ready(self) -> bool:
        return bool(self.base_url)

    async def health_check(self) -> Dict[str, Any]:
        try:
            response = await self._request("GET", "/chain", params={"page": 0, "limit": 1})
            return {"status": "healthy", "latency_ms": int(response.elapsed.total_seconds() * 1000)}
        except Exception as e:
            return {"status": "error", "reason": str(e)}

    async def list_chains(
        self,
        *,
        page: int = 0,
        limit: int = 200,
        sort_key: str = "createdAt",
        sort_order: str = "asc",
    ) -> Dict[str, Any]:
        """Fetch one page of the chain directory (``GET /chain``)."""

        params = {
            "page": str(page),
            "limit": str(limit),
            "sortKey": sort_key,
            "sortOrder": sort_order,
        }
        resp = await self._request("GET", "/chain", params=params)
        return resp.json()

    async def list_tokens(self, chain_id: str) -> Dict[str, Any]:
        """Fetch the full token list for ``chain_id`` (``GET /token/{chainId}``)."""

        resp = await self._request("GET", f"/token/{chain_id}")
        return resp.json()

    async def quote(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Request a swap/bridge quote (``POST /quote``).

        `payload` carries fromChainId, toChainId, fromTokenAddress,
        toTokenAddress and amount.
        """

        resp = await self._request("POST", "/quote", json=payload)
        return resp.json()
