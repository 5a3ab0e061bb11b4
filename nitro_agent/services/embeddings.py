"""OpenAI embedding client used to index chain metadata."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from openai import AsyncOpenAI

from ..config import settings


logger = logging.getLogger(__name__)


class EmbeddingService:
    """Batch text embeddings via ``text-embedding-3-small`` (1536 dims by default)."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        dimensions: Optional[int] = None,
        batch_size: int = 100,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self.model = model or settings.embedding_model
        self.dimensions = dimensions or settings.embedding_dimensions
        self.batch_size = max(1, batch_size)
        self._client = client or AsyncOpenAI(api_key=api_key or settings.openai_api_key)

    async def embed_documents(self, texts: Sequence[str]) -> List[List[float]]:
        vectors: List[List[float]] = []
        for start in range(0, len(texts), self.batch_size):
            batch = list(texts[start:start + self.batch_size])
            logger.debug("Embedding batch of %d texts with %s", len(batch), self.model)
            response = await self._client.embeddings.create(
                model=self.model,
                input=batch,
                dimensions=self.dimensions,
            )
            # The API may return items out of order; ``index`` is authoritative.
            ordered = sorted(response.data, key=lambda item: item.index)
            vectors.extend(item.embedding for item in ordered)
        return vectors

    async def embed_query(self, text: str) -> List[float]:
        vectors = await self.embed_documents([text])
        return vectors[0]

    async def aclose(self) -> None:
        await self._client.close()
