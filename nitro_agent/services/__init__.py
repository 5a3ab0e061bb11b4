from .chains import ChainLookupService, get_chain_details
from .extraction import ExtractionError, TransactionExtractor
from .quotes import QuoteService, get_quote
from .tokens import TokenLookupService, get_token_details

__all__ = [
    "ChainLookupService",
    "get_chain_details",
    "ExtractionError",
    "TransactionExtractor",
    "QuoteService",
    "get_quote",
    "TokenLookupService",
    "get_token_details",
]
