"""Domain service interfaces (ports).

These protocols define the contracts that provider adapters must satisfy.
The application layer depends on these abstractions, not on the OpenAI or
Pinecone SDKs.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable

from rmp_assistant.domain.models import RetrievedMatch

# ---------------------------------------------------------------------------
# Embedding
# ---------------------------------------------------------------------------


@runtime_checkable
class IEmbeddingService(Protocol):
    """Interface for text embedding services.

    Implementations: OpenAIEmbeddingService, fakes in tests.
    """

    def embed_text(self, text: str) -> list[float]: ...

    def embed_batch(self, texts: list[str], batch_size: int = 100) -> list[list[float]]: ...

    @property
    def dimension(self) -> int: ...


# ---------------------------------------------------------------------------
# Vector index
# ---------------------------------------------------------------------------


@runtime_checkable
class IVectorIndex(Protocol):
    """Interface for the managed vector index.

    Implementations: PineconeVectorIndex, fakes in tests.
    """

    def ensure_index(self) -> bool: ...

    def query(self, vector: list[float], top_k: int) -> list[RetrievedMatch]: ...

    def upsert(self, records: list[dict]) -> int: ...


# ---------------------------------------------------------------------------
# Chat completion
# ---------------------------------------------------------------------------


@runtime_checkable
class IChatCompletionService(Protocol):
    """Interface for streaming chat completions.

    Implementations: OpenAIChatCompletionService, fakes in tests.
    """

    async def open_stream(self, messages: list[dict]) -> AsyncIterator[str]: ...
