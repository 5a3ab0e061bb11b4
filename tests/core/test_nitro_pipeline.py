"""
Tests for the NitroQuotePipeline.

Stage gating is checked with mocked services (call-count assertions); the
end-to-end scenario runs the real lookup services against a mock RouterNitro
transport with only the extractor mocked.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from nitro_agent.core.nitro_tool import (
    CHAIN_ERROR_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    INVALID_AMOUNT_MESSAGE,
    NITRO_TOOL,
    QUOTE_ERROR_MESSAGE,
    TOKEN_ERROR_MESSAGE,
    NitroQuotePipeline,
    parse_amount,
)
from nitro_agent.services.chains import ChainLookupService
from nitro_agent.services.extraction import ExtractionError
from nitro_agent.services.quotes import QuoteService
from nitro_agent.services.tokens import TokenLookupService
from nitro_agent.types import (
    ChainQueryResult,
    LookupErrorKind,
    LookupResult,
    QuoteResult,
    TokenRecord,
    TransactionDetails,
)


BRIDGE_DETAILS = TransactionDetails(
    fromChain="BSC",
    toChain="Polygon",
    amount="50",
    fromToken="USDT",
    toToken="USDT",
)


def make_extractor(details=BRIDGE_DETAILS, side_effect=None):
    extractor = MagicMock()
    extractor.extract = AsyncMock(return_value=details, side_effect=side_effect)
    return extractor


def chain_hit(name, chain_id):
    chain = ChainQueryResult.from_raw({"name": name, "chainId": chain_id, "type": "evm", "isLive": True})
    return LookupResult.ok([chain], "Found 1 matching chains", count=1)


def token_hit(symbol, chain_id, address):
    return LookupResult.ok(TokenRecord(symbol=symbol, address=address, decimals=6, chainId=chain_id))


@pytest.fixture
def chain_service():
    service = MagicMock()
    service.get_chain_details = AsyncMock(side_effect=lambda query: {
        "BSC": chain_hit("BSC", "56"),
        "Polygon": chain_hit("Polygon", "137"),
    }[query])
    return service


@pytest.fixture
def token_service():
    service = MagicMock()
    service.get_token_details = AsyncMock(side_effect=lambda chain_id, symbol: {
        "56": token_hit(symbol, "56", "0xbsc"),
        "137": token_hit(symbol, "137", "0xpolygon"),
    }[chain_id])
    return service


@pytest.fixture
def quote_service(quote_response):
    service = MagicMock()
    service.get_quote = AsyncMock(return_value=LookupResult.ok(QuoteResult(**quote_response)))
    return service


@pytest.fixture
def pipeline(chain_service, token_service, quote_service):
    return NitroQuotePipeline(
        make_extractor(),
        chain_service=chain_service,
        token_service=token_service,
        quote_service=quote_service,
    )


class TestParseAmount:

    @pytest.mark.parametrize("raw", ["50", "0.5", " 1,000 ", "1e3"])
    def test_accepts_positive_numbers(self, raw):
        assert parse_amount(raw) is not None

    @pytest.mark.parametrize("raw", ["", "fifty", "0", "-1", "NaN", "Infinity"])
    def test_rejects_everything_else(self, raw):
        assert parse_amount(raw) is None


class TestPipelineGating:

    @pytest.mark.asyncio
    async def test_success_resolves_every_stage_once(self, pipeline, chain_service, token_service, quote_service):
        message, artifact = await pipeline.run("Bridge 50 USDT from BSC to Polygon")

        assert message.startswith("Found route to USDT on Polygon chain")
        assert chain_service.get_chain_details.await_count == 2
        assert token_service.get_token_details.await_count == 2
        token_service.get_token_details.assert_any_await("56", "USDT")
        token_service.get_token_details.assert_any_await("137", "USDT")
        quote_service.get_quote.assert_awaited_once()

        request = quote_service.get_quote.await_args.args[0]
        assert request.fromChainId == "56"
        assert request.toChainId == "137"
        assert request.fromTokenAddress == "0xbsc"
        assert request.toTokenAddress == "0xpolygon"
        assert request.amount == "50"
        assert artifact["quote"]["expectedOutput"] == "49.85"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failing_side", ["BSC", "Polygon"])
    async def test_chain_failure_halts_before_tokens(
        self, pipeline, chain_service, token_service, quote_service, failing_side
    ):
        def lookup(query):
            if query == failing_side:
                return LookupResult.fail(LookupErrorKind.UPSTREAM, "RouterNitro API error: 502 Bad Gateway")
            return chain_hit(query, "1")

        chain_service.get_chain_details.side_effect = lookup

        message, artifact = await pipeline.run("Bridge 50 USDT from BSC to Polygon")

        assert message == CHAIN_ERROR_MESSAGE
        assert message.startswith("Failed to fetch chain details")
        assert artifact["error"] == "Invalid chain information"
        assert set(artifact["details"]) == {"fromChainResult", "toChainResult"}
        token_service.get_token_details.assert_not_awaited()
        quote_service.get_quote.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_chain_match_halts(self, pipeline, chain_service, token_service, quote_service):
        chain_service.get_chain_details.side_effect = lambda query: (
            LookupResult.ok([], "No matching chains found", count=0)
            if query == "Polygon"
            else chain_hit(query, "56")
        )

        message, artifact = await pipeline.run("Bridge 50 USDT from BSC to Polygon")

        assert message == CHAIN_ERROR_MESSAGE
        assert artifact["details"]["toChainResult"]["count"] == 0
        token_service.get_token_details.assert_not_awaited()
        quote_service.get_quote.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_token_halts_before_quote(self, pipeline, token_service, quote_service):
        token_service.get_token_details.side_effect = lambda chain_id, symbol: (
            LookupResult.fail(LookupErrorKind.NOT_FOUND, f"Token {symbol} not found on chain {chain_id}")
            if chain_id == "137"
            else token_hit(symbol, chain_id, "0xbsc")
        )

        message, artifact = await pipeline.run("Bridge 50 USDT from BSC to Polygon")

        assert message == TOKEN_ERROR_MESSAGE
        assert artifact["error"] == "Invalid token information"
        assert artifact["details"]["toToken"] is None
        assert artifact["details"]["fromToken"]["address"] == "0xbsc"
        assert artifact["details"]["toTokenResult"]["error"] == "not_found"
        quote_service.get_quote.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_quote_failure(self, pipeline, quote_service):
        quote_service.get_quote.return_value = LookupResult.fail(
            LookupErrorKind.INVALID_RESPONSE, "Quote response failed validation"
        )

        message, artifact = await pipeline.run("Bridge 50 USDT from BSC to Polygon")

        assert message == QUOTE_ERROR_MESSAGE
        assert artifact["error"] == "Error getting quote"

    @pytest.mark.asyncio
    async def test_extraction_failure_returns_generic_error(self, chain_service, token_service, quote_service):
        pipeline = NitroQuotePipeline(
            make_extractor(side_effect=ExtractionError("No JSON object found in LLM response")),
            chain_service=chain_service,
            token_service=token_service,
            quote_service=quote_service,
        )

        message, artifact = await pipeline.run("hello there")

        assert message == GENERIC_ERROR_MESSAGE
        assert artifact == {"error": "No JSON object found in LLM response", "query": "hello there"}
        chain_service.get_chain_details.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_numeric_amount_halts_before_lookups(self, chain_service, token_service, quote_service):
        details = BRIDGE_DETAILS.model_copy(update={"amount": "some"})
        pipeline = NitroQuotePipeline(
            make_extractor(details=details),
            chain_service=chain_service,
            token_service=token_service,
            quote_service=quote_service,
        )

        message, artifact = await pipeline.run("Bridge some USDT from BSC to Polygon")

        assert message == INVALID_AMOUNT_MESSAGE
        assert artifact["details"]["amount"] == "some"
        chain_service.get_chain_details.assert_not_awaited()
        quote_service.get_quote.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw, sent", [("1,000", "1000"), ("1e3", "1000"), ("0.5", "0.5")])
    async def test_quote_receives_normalized_amount(self, chain_service, token_service, quote_service, raw, sent):
        pipeline = NitroQuotePipeline(
            make_extractor(details=BRIDGE_DETAILS.model_copy(update={"amount": raw})),
            chain_service=chain_service,
            token_service=token_service,
            quote_service=quote_service,
        )

        message, artifact = await pipeline.run(f"Bridge {raw} USDT from BSC to Polygon")

        request = quote_service.get_quote.await_args.args[0]
        assert request.amount == sent
        assert artifact["amount"] == sent
        assert f"- Amount: {sent} USDT" in message


class TestEndToEnd:

    @pytest.mark.asyncio
    async def test_bridge_usdt_from_bsc_to_polygon(self, make_provider, nitro_api):
        provider = make_provider(nitro_api)
        pipeline = NitroQuotePipeline(
            make_extractor(),
            chain_service=ChainLookupService(provider=provider),
            token_service=TokenLookupService(provider=provider),
            quote_service=QuoteService(provider=provider),
        )

        result = await pipeline.run("Bridge 50 USDT from BSC to Polygon")

        assert isinstance(result, tuple) and len(result) == 2
        message, artifact = result
        assert message == (
            "Found route to USDT on Polygon chain:\n"
            "- Amount: 50 USDT\n"
            "- Expected output: 49.85 USDT\n"
            "- Price impact: 0.02%\n"
            "- Estimated gas: 210000"
        )
        assert set(artifact) == {"fromChain", "toChain", "fromToken", "toToken", "amount", "quote"}
        assert artifact["fromChain"]["chainId"] == "56"
        assert artifact["toChain"]["chainId"] == "137"
        assert artifact["fromToken"]["address"] == "0x55d398326f99059ff775485246999027b3197955"
        assert artifact["toToken"]["address"] == "0xc2132d05d31c914a87c6611c10748aeb04b58e8f"
        assert artifact["amount"] == "50"

        paths = [request.url.path for request in nitro_api.calls]
        assert paths.count("/chain") == 2
        assert sorted(p for p in paths if p.startswith("/token/")) == ["/token/137", "/token/56"]
        assert paths[-1] == "/quote"

    @pytest.mark.asyncio
    async def test_malformed_chain_record_reports_chain_failure(self, make_provider, nitro_api, chain_directory):
        # Polygon's gas token arrives as a bare symbol instead of an object
        chain_directory[2] = {**chain_directory[2], "gasToken": "MATIC", "createdAt": 1700000000}
        provider = make_provider(nitro_api)
        pipeline = NitroQuotePipeline(
            make_extractor(),
            chain_service=ChainLookupService(provider=provider),
            token_service=TokenLookupService(provider=provider),
            quote_service=QuoteService(provider=provider),
        )

        message, artifact = await pipeline.run("Bridge 50 USDT from BSC to Polygon")

        assert message == CHAIN_ERROR_MESSAGE
        assert artifact["details"]["toChainResult"]["count"] == 0
        assert all(request.url.path == "/chain" for request in nitro_api.calls)


def test_tool_definition_exposes_query_parameter():
    schema = NITRO_TOOL.to_openai_format()

    assert schema["function"]["name"] == "nitro"
    assert schema["function"]["parameters"]["required"] == ["query"]
    assert schema["function"]["parameters"]["properties"]["query"]["type"] == "string"
    assert NITRO_TOOL.response_format == "content_and_artifact"
