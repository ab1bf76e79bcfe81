"""Seed use case — loads professor reviews into the vector index."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from rmp_assistant.domain.models import ProfessorReview, ReviewsFile
from rmp_assistant.domain.protocols import IEmbeddingService, IVectorIndex


def load_reviews(path: Path) -> list[ProfessorReview]:
    """Read and validate a ``{"reviews": [...]}`` JSON file."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    return ReviewsFile.model_validate(raw).reviews


class SeedReviewsUseCase:
    """Embed each review and upsert one vector per professor."""

    def __init__(
        self,
        embedding_service: IEmbeddingService,
        vector_index: IVectorIndex,
        batch_size: int = 100,
    ) -> None:
        self.embedding_service = embedding_service
        self.vector_index = vector_index
        self.batch_size = batch_size

    def execute(self, reviews: list[ProfessorReview]) -> int:
        """Upsert *reviews* and return how many vectors were written."""
        if not reviews:
            logger.warning("No reviews to seed")
            return 0

        reviews = self._unique_by_professor(reviews)
        self.vector_index.ensure_index()

        embeddings = self.embedding_service.embed_batch(
            [r.review for r in reviews], batch_size=self.batch_size
        )
        records = [
            {
                "id": r.professor,
                "values": values,
                "metadata": {"review": r.review, "subject": r.subject, "stars": r.stars},
            }
            for r, values in zip(reviews, embeddings, strict=True)
        ]

        upserted = self.vector_index.upsert(records)
        logger.info("Seeded {} professor reviews", upserted)
        return upserted

    @staticmethod
    def _unique_by_professor(reviews: list[ProfessorReview]) -> list[ProfessorReview]:
        """Keep the last review per professor; the professor name is the vector id."""
        latest: dict[str, ProfessorReview] = {}
        for review in reviews:
            if review.professor in latest:
                logger.warning(
                    "Duplicate review for {}; keeping the later entry", review.professor
                )
            latest[review.professor] = review
        return list(latest.values())
