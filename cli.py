#!/usr/bin/env python3
"""Simple CLI for the RouterNitro quote assistant"""

import argparse
import asyncio
import json
import sys

from nitro_agent.core.nitro_tool import run_nitro_tool
from nitro_agent.logging_config import setup_logging
from nitro_agent.services.chains import get_chain_details
from nitro_agent.services.seeder import ChainIndexSeeder
from nitro_agent.services.tokens import get_token_details


def print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str))


async def cli_quote(query: str, provider: str = None, model: str = None) -> int:
    """Run the natural-language quote pipeline"""
    print(f"🔍 Processing: {query}")

    message, artifact = await run_nitro_tool(query, llm_provider=provider, llm_model=model)
    print(f"\n{message}")
    if artifact:
        print("\nDetails:")
        print_json(artifact)
    return 0 if "quote" in artifact else 1


async def cli_chains(query: str) -> int:
    """Search the RouterNitro chain directory"""
    result = await get_chain_details(query)
    if not result.success:
        print(f"❌ {result.message}")
        return 1

    print(f"🔗 {result.message}")
    print("-" * 50)
    for item in result.data or []:
        chain = item.chain
        status = "live" if chain.isLive else "not live"
        gas_symbol = (item.gas.token or {}).get("symbol", "-")
        print(f"{chain.name:<24} {chain.chainId:<16} {chain.type:<8} {gas_symbol:<8} {status}")
    return 0


async def cli_token(chain_id: str, symbol: str) -> int:
    """Resolve a token symbol on a chain"""
    result = await get_token_details(chain_id, symbol)
    if result.data is None:
        print(f"❌ {result.message}")
        return 1

    token = result.data
    print(f"🪙 {token.symbol} on {token.chainId}")
    print(f"   Address:  {token.address}")
    print(f"   Decimals: {token.decimals}")
    return 0


async def cli_seed() -> int:
    """Rebuild the chain metadata vector collection"""
    seeder = ChainIndexSeeder()
    count = await seeder.seed()
    print(f"✅ Seeded {count} chain documents")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="RouterNitro quote CLI")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command")

    quote_parser = subparsers.add_parser("quote", help="Quote a swap/bridge described in plain English")
    quote_parser.add_argument("query", help="e.g. 'Bridge 50 USDT from BSC to Polygon'")
    quote_parser.add_argument("--provider", default=None, help="LLM provider (openai, anthropic)")
    quote_parser.add_argument("--model", default=None, help="LLM model id")

    chains_parser = subparsers.add_parser("chains", help="Search supported chains")
    chains_parser.add_argument("query", help="Chain name, id, type or gas token symbol")

    token_parser = subparsers.add_parser("token", help="Look up a token on a chain")
    token_parser.add_argument("chain_id", help="RouterNitro chain id")
    token_parser.add_argument("symbol", help="Token symbol")

    subparsers.add_parser("seed", help="Seed the chain metadata vector collection")

    return parser


async def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "quote":
        return await cli_quote(args.query, args.provider, args.model)
    elif args.command == "chains":
        return await cli_chains(args.query)
    elif args.command == "token":
        return await cli_token(args.chain_id, args.symbol)
    elif args.command == "seed":
        try:
            return await cli_seed()
        except Exception as e:
            print(f"❌ Fatal error during seeding: {e}")
            return 1

    print(f"❌ Unknown command: {args.command}")
    parser.print_help()
    return 1


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
