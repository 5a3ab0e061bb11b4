"""Shared success/failure envelope returned by every RouterNitro lookup."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")

NITRO_SOURCE = "RouterNitro"


class LookupErrorKind(str, Enum):
    """Why a lookup did not produce data"""
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"
    INVALID_RESPONSE = "invalid_response"


class LookupResult(BaseModel, Generic[T]):
    """Tagged result: ``success`` with ``data`` or a failure with an ``error`` kind.

    An empty chain match list is still a success; callers that need at least
    one item must check ``data`` themselves.
    """

    success: bool = Field(description="Whether the lookup completed")
    data: Optional[T] = Field(default=None, description="Lookup payload")
    message: str = Field(default="", description="Human readable outcome")
    error: Optional[LookupErrorKind] = Field(default=None, description="Failure category")
    count: Optional[int] = Field(default=None, description="Number of items for list results")
    source: str = Field(default=NITRO_SOURCE, description="Upstream data source")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def ok(cls, data: T, message: str = "", *, count: Optional[int] = None) -> "LookupResult[T]":
        return cls(success=True, data=data, message=message, count=count)

    @classmethod
    def fail(cls, error: LookupErrorKind, message: str) -> "LookupResult[T]":
        return cls(success=False, data=None, message=message, error=error)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
