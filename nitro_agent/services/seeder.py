"""
Chain index seeder - fills the MongoDB vector collection with chain metadata.

Each RouterNitro chain becomes one document::

    {"text": ..., "pageContent": ..., "metadata": <Chain>, "embedding": [...]}

``text`` duplicates ``pageContent`` because the Atlas vector index is
configured with ``text`` as its text key.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError
from pymongo import AsyncMongoClient

from ..config import settings
from ..providers.nitro import RouterNitroProvider
from ..types import Chain
from .embeddings import EmbeddingService


logger = logging.getLogger(__name__)


class SeederError(Exception):
    """Raised when the chain index cannot be rebuilt"""
    pass


def build_searchable_text(chain: Chain) -> str:
    """Flatten a chain record into one descriptive line for embedding."""

    features = ", ".join([
        f"Intent API: {'Supported' if chain.isIntentApiSupported else 'Not Supported'}",
        f"Mainnet: {'Enabled' if chain.isEnabledForMainnet else 'Not Enabled'}",
        f"Refuel: {'Available' if chain.isRefuelEnabled else 'Not Available'}",
        f"QR: {'Enabled' if chain.isQREnabled else 'Not Enabled'}",
    ])

    if chain.gasLimit:
        limits = chain.gasLimit
        gas_limits = "; ".join([
            f"Trustless: Swap {limits.trustless.swap}, Transfer {limits.trustless.transfer}",
            f"MintBurn: Swap {limits.mintBurn.swap}, Transfer {limits.mintBurn.transfer}",
            f"Circle: Swap {limits.circle.swap}, Transfer {limits.circle.transfer}",
        ])
    else:
        gas_limits = "No gas limits defined"

    gas_token = (
        f"{chain.gasToken.symbol} ({chain.gasToken.address})"
        if chain.gasToken
        else "None"
    )

    lines = [
        f"Chain: {chain.name} ({chain.type})",
        f"Chain ID: {chain.chainId}",
        f"Status: {'Live' if chain.isLive else 'Not Live'}",
        f"Gas Token: {gas_token}",
        f"Features: {features}",
        f"Gas Limits: {gas_limits}",
        f"Created: {chain.createdAt}",
        f"Updated: {chain.updatedAt}",
    ]
    return " ".join(lines)


def validate_chains(raw_chains: Sequence[Any]) -> List[Chain]:
    """Keep the records that match the strict ``Chain`` shape."""

    chains: List[Chain] = []
    for raw in raw_chains:
        try:
            chains.append(Chain.model_validate(raw))
        except ValidationError as exc:
            name = raw.get("name") if isinstance(raw, dict) else None
            logger.warning("Validation error for chain %s: %s", name, exc)
    logger.info("Successfully validated %d of %d chains", len(chains), len(raw_chains))
    return chains


class ChainVectorStore:
    """Document collection with an Atlas ``$vectorSearch`` index over ``embedding``."""

    def __init__(self, collection: Any, *, index_name: Optional[str] = None) -> None:
        self._collection = collection
        self.index_name = index_name or settings.vector_index_name

    async def clear(self) -> int:
        result = await self._collection.delete_many({})
        return result.deleted_count

    async def add_documents(self, documents: List[Dict[str, Any]]) -> int:
        if not documents:
            return 0
        result = await self._collection.insert_many(documents)
        return len(result.inserted_ids)

    async def sample(self) -> Optional[Dict[str, Any]]:
        return await self._collection.find_one({})

    async def similarity_search(self, query_vector: List[float], *, k: int = 4) -> List[Dict[str, Any]]:
        pipeline = [
            {
                "$vectorSearch": {
                    "index": self.index_name,
                    "path": "embedding",
                    "queryVector": query_vector,
                    "numCandidates": max(k * 10, 50),
                    "limit": k,
                }
            },
            {"$project": {"embedding": 0, "score": {"$meta": "vectorSearchScore"}, "pageContent": 1, "metadata": 1}},
        ]
        cursor = await self._collection.aggregate(pipeline)
        return [doc async for doc in cursor]


class ChainIndexSeeder:
    """Rebuild the chain metadata collection from the live RouterNitro directory.

    The seeder owns its MongoDB client: it is closed when :meth:`seed`
    returns, whether seeding succeeded or not.
    """

    def __init__(
        self,
        *,
        provider: Optional[RouterNitroProvider] = None,
        embeddings: Optional[EmbeddingService] = None,
        client: Optional[AsyncMongoClient] = None,
        mongodb_uri: Optional[str] = None,
        database: Optional[str] = None,
        collection: Optional[str] = None,
        page_limit: Optional[int] = None,
    ) -> None:
        self._provider = provider or RouterNitroProvider()
        self._embeddings = embeddings or EmbeddingService()
        self._page_limit = page_limit or settings.nitro_seed_page_limit
        self._database = database or settings.mongodb_database
        self._collection = collection or settings.mongodb_collection

        if client is None:
            uri = mongodb_uri or settings.mongodb_uri
            if not uri:
                raise SeederError("MONGODB_URI is not configured")
            client = AsyncMongoClient(uri)
        self._client = client

    async def fetch_chains(self) -> List[Chain]:
        logger.info("Fetching chain data from API...")
        payload = await self._provider.list_chains(page=0, limit=self._page_limit)
        raw_chains = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(raw_chains, list):
            raise SeederError("Invalid chain directory response")
        logger.info("Fetched %d chains from API", len(raw_chains))
        return validate_chains(raw_chains)

    async def build_documents(self, chains: Sequence[Chain]) -> List[Dict[str, Any]]:
        texts = [build_searchable_text(chain) for chain in chains]
        vectors = await self._embeddings.embed_documents(texts)
        if len(vectors) != len(texts):
            raise SeederError(f"Expected {len(texts)} embeddings, got {len(vectors)}")

        return [
            {
                "text": text,
                "pageContent": text,
                "metadata": chain.to_metadata(),
                "embedding": vector,
            }
            for chain, text, vector in zip(chains, texts, vectors)
        ]

    async def seed(self) -> int:
        """Replace the collection contents; returns the number of documents inserted."""

        try:
            logger.info("Connecting to MongoDB...")
            await self._client.admin.command("ping")
            store = ChainVectorStore(self._client[self._database][self._collection])

            logger.info("Clearing existing data...")
            deleted = await store.clear()
            logger.info("Removed %d existing documents", deleted)

            chains = await self.fetch_chains()

            logger.info("Creating documents and embeddings...")
            documents = await self.build_documents(chains)
            inserted = await store.add_documents(documents)
            logger.info("Successfully added %d documents with embeddings", inserted)

            sample = await store.sample()
            if not sample or not sample.get("embedding"):
                logger.warning("Embeddings might not have been created properly")
            else:
                logger.info("Embeddings verified successfully")

            logger.info("Successfully completed database seeding")
            return inserted
        except Exception:
            logger.exception("Error in database seeding")
            raise
        finally:
            await self._client.close()
            await self._embeddings.aclose()
            logger.info("Closed MongoDB connection")


__all__ = [
    "ChainIndexSeeder",
    "ChainVectorStore",
    "SeederError",
    "build_searchable_text",
    "validate_chains",
]
