"""Shared fixtures and in-memory fake providers."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from rmp_assistant.domain.models import ChatMessage, RetrievedMatch


def pytest_configure(config):
    """Set pytest-asyncio mode to auto so async test functions work without markers."""
    config.option.asyncio_mode = "auto"


# ---------------------------------------------------------------------------
# Fake providers
# ---------------------------------------------------------------------------


class FakeEmbeddingService:
    """Returns a constant vector and records every input."""

    def __init__(self, dimension: int = 8):
        self._dimension = dimension
        self.calls: list[str] = []

    def embed_text(self, text: str) -> list[float]:
        self.calls.append(text)
        return [0.1] * self._dimension

    def embed_batch(self, texts: list[str], batch_size: int = 100) -> list[list[float]]:
        self.calls.extend(texts)
        return [[0.1] * self._dimension for _ in texts]

    @property
    def dimension(self) -> int:
        return self._dimension


class FakeVectorIndex:
    """In-memory index that returns canned matches."""

    def __init__(self, matches: list[RetrievedMatch] | None = None):
        self.matches = matches or []
        self.exists = False
        self.ensure_calls = 0
        self.queries: list[tuple[list[float], int]] = []
        self.upserted: list[dict] = []

    def ensure_index(self) -> bool:
        self.ensure_calls += 1
        if self.exists:
            return False
        self.exists = True
        return True

    def query(self, vector: list[float], top_k: int) -> list[RetrievedMatch]:
        self.queries.append((vector, top_k))
        return self.matches[:top_k]

    def upsert(self, records: list[dict]) -> int:
        self.upserted.extend(records)
        return len(records)


class FakeCompletionService:
    """Streams the given fragments, optionally failing after ``fail_after`` of them."""

    def __init__(self, fragments: list[str], fail_after: int | None = None):
        self.fragments = fragments
        self.fail_after = fail_after
        self.sent: list[dict] | None = None
        self.closed = False

    async def open_stream(self, messages: list[dict]) -> AsyncIterator[str]:
        self.sent = messages
        return self._generate()

    async def _generate(self) -> AsyncIterator[str]:
        try:
            for i, fragment in enumerate(self.fragments):
                if self.fail_after is not None and i == self.fail_after:
                    raise ConnectionError("provider disconnected")
                yield fragment
        finally:
            self.closed = True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def smith_match() -> RetrievedMatch:
    return RetrievedMatch(id="J.Smith", score=0.92, metadata={"subject": "Calculus", "stars": 4.8})


@pytest.fixture()
def three_matches() -> list[RetrievedMatch]:
    return [
        RetrievedMatch(id="Dr. A", score=0.9, metadata={"subject": "Biology", "stars": 5, "review": "Great"}),
        RetrievedMatch(id="Dr. B", score=0.8, metadata={"subject": "Physics", "stars": 3.5}),
        RetrievedMatch(id="Dr. C", score=0.7, metadata={"subject": "History", "stars": 4}),
    ]


@pytest.fixture()
def user_question() -> list[ChatMessage]:
    return [ChatMessage(role="user", content="best calculus professor")]
