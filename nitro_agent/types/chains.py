"""Chain directory models for the RouterNitro API."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt


class GasLimit(BaseModel):
    swap: Union[StrictInt, StrictFloat]
    transfer: Union[StrictInt, StrictFloat]


class GasLimitGroup(BaseModel):
    trustless: GasLimit
    mintBurn: GasLimit
    circle: GasLimit


class GasToken(BaseModel):
    symbol: str
    address: str


class Chain(BaseModel):
    """Strict shape of a record returned by ``GET /chain``."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", description="Directory record identifier")
    chainId: str = Field(description="Chain identifier used across the RouterNitro API")
    name: str
    type: str = Field(description="Chain family, e.g. evm, tron, near")
    isLive: bool
    isIntentApiSupported: bool
    isEnabledForMainnet: bool
    isRefuelEnabled: bool
    isQREnabled: bool
    gasLimit: Optional[GasLimitGroup] = None
    gasToken: Optional[GasToken] = None
    createdAt: str
    updatedAt: str
    version: int = Field(alias="__v")

    def to_metadata(self) -> Dict[str, Any]:
        """Dump using the API's own field names, as stored next to embeddings."""
        return self.model_dump(by_alias=True)


class ChainSummary(BaseModel):
    name: str
    chainId: str
    type: str
    isLive: bool


class ChainGas(BaseModel):
    token: Optional[Dict[str, Any]] = None
    limits: Dict[str, Any] = Field(default_factory=dict)


class ChainFeatures(BaseModel):
    isIntentApiSupported: bool = False
    isRefuelEnabled: bool = False
    isQREnabled: bool = False


class ChainTimestamps(BaseModel):
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class ChainQueryResult(BaseModel):
    """Normalized view of a chain matching a lookup query."""

    chain: ChainSummary
    gas: ChainGas
    features: ChainFeatures
    metadata: ChainTimestamps
    url: str
    timestamp: datetime

    @classmethod
    def from_raw(
        cls,
        raw: Dict[str, Any],
        *,
        explorer_url: str = "https://routernitro.com",
        now: Optional[datetime] = None,
    ) -> "ChainQueryResult":
        """Build a result from a loosely shaped directory record.

        Missing values fall back to ``"Unknown"`` for identifiers, ``False`` for
        flags, ``None`` for the gas token and timestamps and ``{}`` for limits.
        """
        chain_id = raw.get("chainId") or "Unknown"
        return cls(
            chain=ChainSummary(
                name=raw.get("name") or "Unknown",
                chainId=str(chain_id),
                type=raw.get("type") or "Unknown",
                isLive=bool(raw.get("isLive")),
            ),
            gas=ChainGas(
                token=raw.get("gasToken") or None,
                limits=raw.get("gasLimit") or {},
            ),
            features=ChainFeatures(
                isIntentApiSupported=bool(raw.get("isIntentApiSupported")),
                isRefuelEnabled=bool(raw.get("isRefuelEnabled")),
                isQREnabled=bool(raw.get("isQREnabled")),
            ),
            metadata=ChainTimestamps(
                createdAt=raw.get("createdAt") or None,
                updatedAt=raw.get("updatedAt") or None,
            ),
            url=f"{explorer_url.rstrip('/')}/chain/{raw.get('chainId')}",
            timestamp=now or datetime.now(timezone.utc),
        )
