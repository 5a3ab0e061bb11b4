"""Shared RouterNitro fixtures: canned API payloads and a mock-transport provider."""

from typing import Any, Callable, Dict, List

import httpx
import pytest

from nitro_agent.providers.nitro import RouterNitroProvider


def _gas_limit(swap: int, transfer: int) -> Dict[str, int]:
    return {"swap": swap, "transfer": transfer}


ETHEREUM_CHAIN: Dict[str, Any] = {
    "_id": "64f0c1a2b3c4d5e6f7a8b901",
    "chainId": "1",
    "name": "Ethereum",
    "type": "evm",
    "isLive": True,
    "isIntentApiSupported": True,
    "isEnabledForMainnet": True,
    "isRefuelEnabled": True,
    "isQREnabled": False,
    "gasLimit": {
        "trustless": _gas_limit(300000, 100000),
        "mintBurn": _gas_limit(350000, 120000),
        "circle": _gas_limit(400000, 150000),
    },
    "gasToken": {"symbol": "ETH", "address": "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"},
    "createdAt": "2023-09-01T10:00:00.000Z",
    "updatedAt": "2024-05-01T10:00:00.000Z",
    "__v": 0,
}

BSC_CHAIN: Dict[str, Any] = {
    **ETHEREUM_CHAIN,
    "_id": "64f0c1a2b3c4d5e6f7a8b902",
    "chainId": "56",
    "name": "BSC",
    "isQREnabled": True,
    "gasToken": {"symbol": "BNB", "address": "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"},
}

POLYGON_CHAIN: Dict[str, Any] = {
    **ETHEREUM_CHAIN,
    "_id": "64f0c1a2b3c4d5e6f7a8b903",
    "chainId": "137",
    "name": "Polygon",
    "isRefuelEnabled": False,
    "gasLimit": None,
    "gasToken": {"symbol": "MATIC", "address": "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"},
}

TRON_CHAIN: Dict[str, Any] = {
    "_id": "64f0c1a2b3c4d5e6f7a8b904",
    "chainId": "728126428",
    "name": "Tron",
    "type": "tron",
    "isLive": False,
    "gasToken": None,
}

TOKENS_BY_CHAIN: Dict[str, List[Dict[str, Any]]] = {
    "1": [
        {"symbol": "ETH", "address": "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee", "decimals": 18, "chainId": "1"},
        {"symbol": "USDC", "address": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48", "decimals": 6, "chainId": "1"},
    ],
    "56": [
        {"symbol": "USDT", "address": "0x55d398326f99059ff775485246999027b3197955", "decimals": 18, "chainId": "56"},
    ],
    "137": [
        {"symbol": "USDT", "address": "0xc2132d05d31c914a87c6611c10748aeb04b58e8f", "decimals": 6, "chainId": "137"},
    ],
}

QUOTE_RESPONSE: Dict[str, Any] = {
    "estimatedGas": 210000,
    "route": [{"protocol": "RouterNitro", "fromChainId": "56", "toChainId": "137"}],
    "expectedOutput": "49.85",
    "priceImpact": "0.02%",
}


@pytest.fixture
def chain_directory() -> List[Dict[str, Any]]:
    return [ETHEREUM_CHAIN, BSC_CHAIN, POLYGON_CHAIN, TRON_CHAIN]


@pytest.fixture
def nitro_api(chain_directory) -> Callable[[httpx.Request], httpx.Response]:
    """Handler emulating the three RouterNitro endpoints; records every request."""

    calls: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        path = request.url.path
        if path == "/chain":
            return httpx.Response(200, json={"total": len(chain_directory), "data": chain_directory})
        if path.startswith("/token/"):
            chain_id = path.rsplit("/", 1)[-1]
            return httpx.Response(200, json={"data": TOKENS_BY_CHAIN.get(chain_id, [])})
        if path == "/quote" and request.method == "POST":
            return httpx.Response(200, json=QUOTE_RESPONSE)
        return httpx.Response(404, json={"message": "not found"})

    handler.calls = calls  # type: ignore[attr-defined]
    return handler


@pytest.fixture
def make_provider() -> Callable[[Callable[[httpx.Request], httpx.Response]], RouterNitroProvider]:
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> RouterNitroProvider:
        return RouterNitroProvider(
            base_url="https://nitro.test",
            timeout_s=5,
            transport=httpx.MockTransport(handler),
        )
    return _make


@pytest.fixture
def quote_response() -> Dict[str, Any]:
    return dict(QUOTE_RESPONSE)
