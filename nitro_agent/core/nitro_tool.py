"""RouterNitro quote tool: natural-language query in, route summary out.

The pipeline is strictly sequential with two fan-out points:

    extract → (chain lookup × 2) → (token lookup × 2) → quote → format

Every stage is a hard gate. A failed stage returns a user-facing message plus
a diagnostic artifact; nothing is retried or cached between calls.
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from ..providers.llm import ToolDefinition, ToolParameter, ToolParameterType, get_llm_provider
from ..services.chains import ChainLookupService
from ..services.extraction import TransactionExtractor
from ..services.quotes import QuoteService
from ..services.tokens import TokenLookupService
from ..types import ChainQueryResult, LookupResult, QuoteRequest, QuoteResult, TokenRecord, TransactionDetails


logger = logging.getLogger(__name__)

ToolOutput = Tuple[str, Dict[str, Any]]

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request. Please try again."
INVALID_AMOUNT_MESSAGE = "Invalid amount. Please provide a positive number to swap or bridge."
CHAIN_ERROR_MESSAGE = "Failed to fetch chain details. Please check the chain names and try again."
TOKEN_ERROR_MESSAGE = "Failed to fetch token details. Please check the token symbols and try again."
QUOTE_ERROR_MESSAGE = "Failed to fetch quote. Please try again with different parameters."

NITRO_TOOL = ToolDefinition(
    name="nitro",
    description=(
        "Get detailed information about buying or selling tokens on different blockchain "
        "using RouterNitro bridge. Provide the from chain, to chain, amount, from token, to token. "
        "Returns the transaction details. Use this when users ask about buying, selling, "
        "bridging or swapping tokens on different blockchain using RouterNitro bridge."
    ),
    parameters=[
        ToolParameter(
            name="query",
            type=ToolParameterType.STRING,
            description=(
                "The query describing the token swap/bridge operation in natural language, "
                "e.g., 'I want to swap 100 ETH from Ethereum to Bitcoin', "
                "or 'Bridge 50 USDT from BSC to Polygon'"
            ),
        ),
    ],
)


def parse_amount(raw: str) -> Optional[Decimal]:
    """Return ``raw`` as a positive finite Decimal, or None."""

    try:
        value = Decimal(raw.strip().replace(",", ""))
    except (InvalidOperation, AttributeError):
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


def format_route_summary(details: TransactionDetails, quote: QuoteResult) -> str:
    return (
        f"Found route to {details.toToken} on {details.toChain} chain:\n"
        f"- Amount: {details.amount} {details.fromToken}\n"
        f"- Expected output: {quote.expectedOutput} {details.toToken}\n"
        f"- Price impact: {quote.priceImpact}\n"
        f"- Estimated gas: {quote.estimatedGas}"
    )


def _first_chain(result: LookupResult[List[ChainQueryResult]]) -> Optional[ChainQueryResult]:
    if not result.success or not result.data:
        return None
    return result.data[0]


class NitroQuotePipeline:
    """Resolve chains, tokens and a quote for one natural-language request."""

    def __init__(
        self,
        extractor: TransactionExtractor,
        *,
        chain_service: Optional[ChainLookupService] = None,
        token_service: Optional[TokenLookupService] = None,
        quote_service: Optional[QuoteService] = None,
    ) -> None:
        self._extractor = extractor
        self._chains = chain_service or ChainLookupService()
        self._tokens = token_service or TokenLookupService()
        self._quotes = quote_service or QuoteService()

    async def run(self, query: str) -> ToolOutput:
        """Return ``(message, artifact)`` for ``query``."""

        logger.info("Processing nitro query: %s", query)
        try:
            return await self._run(query)
        except Exception as exc:
            logger.exception("Error in nitro tool")
            return GENERIC_ERROR_MESSAGE, {"error": str(exc) or exc.__class__.__name__, "query": query}

    async def _run(self, query: str) -> ToolOutput:
        details = await self._extractor.extract(query)

        amount = parse_amount(details.amount)
        if amount is None:
            logger.warning("Rejecting non-numeric amount %r", details.amount)
            return INVALID_AMOUNT_MESSAGE, {
                "error": "Invalid amount",
                "details": details.model_dump(),
            }
        # Quote API gets plain digits: "1,000" and "1e3" both become "1000"
        details = details.model_copy(update={"amount": format(amount, "f")})

        from_chain_result, to_chain_result = await asyncio.gather(
            self._chains.get_chain_details(details.fromChain),
            self._chains.get_chain_details(details.toChain),
        )

        from_chain = _first_chain(from_chain_result)
        to_chain = _first_chain(to_chain_result)
        if from_chain is None or to_chain is None:
            return CHAIN_ERROR_MESSAGE, {
                "error": "Invalid chain information",
                "details": {
                    "fromChainResult": from_chain_result.to_dict(),
                    "toChainResult": to_chain_result.to_dict(),
                },
            }

        from_token_result, to_token_result = await asyncio.gather(
            self._tokens.get_token_details(from_chain.chain.chainId, details.fromToken),
            self._tokens.get_token_details(to_chain.chain.chainId, details.toToken),
        )

        from_token: Optional[TokenRecord] = from_token_result.data
        to_token: Optional[TokenRecord] = to_token_result.data
        if from_token is None or to_token is None:
            return TOKEN_ERROR_MESSAGE, {
                "error": "Invalid token information",
                "details": {
                    "fromToken": from_token.model_dump() if from_token else None,
                    "toToken": to_token.model_dump() if to_token else None,
                    "fromTokenResult": from_token_result.to_dict(),
                    "toTokenResult": to_token_result.to_dict(),
                },
            }

        quote_result = await self._quotes.get_quote(
            QuoteRequest(
                fromChainId=from_chain.chain.chainId,
                toChainId=to_chain.chain.chainId,
                fromTokenAddress=from_token.address,
                toTokenAddress=to_token.address,
                amount=details.amount,
            )
        )
        quote = quote_result.data
        if quote is None:
            return QUOTE_ERROR_MESSAGE, {"error": "Error getting quote", "details": quote_result.to_dict()}

        return format_route_summary(details, quote), {
            "fromChain": from_chain.chain.model_dump(),
            "toChain": to_chain.chain.model_dump(),
            "fromToken": from_token.model_dump(),
            "toToken": to_token.model_dump(),
            "amount": details.amount,
            "quote": quote.model_dump(),
        }


async def run_nitro_tool(
    query: str,
    *,
    llm_provider: Optional[str] = None,
    llm_model: Optional[str] = None,
) -> ToolOutput:
    """Run the pipeline with a freshly constructed LLM provider.

    The provider is closed before returning.
    """

    async with get_llm_provider(llm_provider, llm_model) as llm:
        pipeline = NitroQuotePipeline(TransactionExtractor(llm))
        return await pipeline.run(query)


__all__ = [
    "NITRO_TOOL",
    "NitroQuotePipeline",
    "run_nitro_tool",
    "ToolOutput",
    "format_route_summary",
    "parse_amount",
    "GENERIC_ERROR_MESSAGE",
    "INVALID_AMOUNT_MESSAGE",
    "CHAIN_ERROR_MESSAGE",
    "TOKEN_ERROR_MESSAGE",
    "QUOTE_ERROR_MESSAGE",
]
