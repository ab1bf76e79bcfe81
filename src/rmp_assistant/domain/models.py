"""Domain entities and value objects.

These are the core data structures of the professor assistant,
independent of any provider SDK or HTTP framework.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------


class ChatMessage(BaseModel):
    """A single message in the conversation, in chronological order."""

    role: Literal["system", "user", "assistant"] = Field(
        description="Message role: 'system', 'user' or 'assistant'"
    )
    content: str = Field(description="Message content")


# ---------------------------------------------------------------------------
# Retrieval
# ---------------------------------------------------------------------------


@dataclass
class RetrievedMatch:
    """A single nearest-neighbour hit returned by the vector index."""

    id: str
    score: float | None = None
    metadata: dict = field(default_factory=dict)

    @property
    def subject(self) -> str | None:
        return self.metadata.get("subject")

    @property
    def stars(self) -> float | int | None:
        return self.metadata.get("stars")

    @property
    def review(self) -> str | None:
        return self.metadata.get("review")


@dataclass(frozen=True)
class IndexDescriptor:
    """Provisioning parameters for the vector index."""

    name: str
    dimension: int
    metric: str = "cosine"
    cloud: str = "aws"
    region: str = "us-east-1"


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------


class ProfessorReview(BaseModel):
    """One entry of the reviews file used to fill the index."""

    professor: str = Field(min_length=1)
    subject: str
    stars: float = Field(ge=0, le=5)
    review: str


class ReviewsFile(BaseModel):
    reviews: list[ProfessorReview]


# ---------------------------------------------------------------------------
# Streaming
# ---------------------------------------------------------------------------


class StreamState(str, enum.Enum):
    """Lifecycle of a completion relay. Transitions only move forward."""

    IDLE = "idle"
    STREAMING = "streaming"
    COMPLETED = "completed"
    ERRORED = "errored"
    CANCELLED = "cancelled"
