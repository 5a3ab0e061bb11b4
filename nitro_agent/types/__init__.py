from .chains import (
    Chain,
    ChainFeatures,
    ChainGas,
    ChainQueryResult,
    ChainSummary,
    ChainTimestamps,
    GasLimit,
    GasLimitGroup,
    GasToken,
)
from .quotes import QuoteRequest, QuoteResult
from .results import NITRO_SOURCE, LookupErrorKind, LookupResult
from .tokens import TokenRecord
from .transactions import TransactionDetails

__all__ = [
    "Chain",
    "ChainFeatures",
    "ChainGas",
    "ChainQueryResult",
    "ChainSummary",
    "ChainTimestamps",
    "GasLimit",
    "GasLimitGroup",
    "GasToken",
    "QuoteRequest",
    "QuoteResult",
    "NITRO_SOURCE",
    "LookupErrorKind",
    "LookupResult",
    "TokenRecord",
    "TransactionDetails",
]
