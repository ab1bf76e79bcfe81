"""Tests for loading reviews and seeding the index."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from loguru import logger
from pydantic import ValidationError

from conftest import FakeEmbeddingService, FakeVectorIndex
from rmp_assistant.application.use_cases import SeedReviewsUseCase, load_reviews
from rmp_assistant.cli import cli
from rmp_assistant.config import Settings
from rmp_assistant.domain.models import ProfessorReview

_SAMPLE = Path(__file__).resolve().parent.parent / "data" / "reviews.json"


@pytest.fixture()
def reviews_file(tmp_path: Path) -> Path:
    path = tmp_path / "reviews.json"
    path.write_text(
        json.dumps(
            {
                "reviews": [
                    {"professor": "J.Smith", "subject": "Calculus", "stars": 4.8, "review": "Clear."},
                    {"professor": "Dr. B", "subject": "Physics", "stars": 3, "review": "Tough."},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


class TestLoadReviews:
    def test_loads_sample_file(self):
        reviews = load_reviews(_SAMPLE)
        assert len(reviews) > 0
        assert all(0 <= r.stars <= 5 for r in reviews)

    def test_rejects_invalid_stars(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"reviews": [{"professor": "X", "subject": "Y", "stars": 9, "review": "Z"}]})
        )
        with pytest.raises(ValidationError):
            load_reviews(path)


class TestSeedReviewsUseCase:
    def test_upserts_one_vector_per_professor(self, reviews_file: Path):
        index = FakeVectorIndex()
        uc = SeedReviewsUseCase(embedding_service=FakeEmbeddingService(), vector_index=index)

        count = uc.execute(load_reviews(reviews_file))

        assert count == 2
        assert index.exists
        assert [r["id"] for r in index.upserted] == ["J.Smith", "Dr. B"]
        assert index.upserted[0]["metadata"] == {"review": "Clear.", "subject": "Calculus", "stars": 4.8}

    def test_duplicate_professor_keeps_later_review(self):
        index = FakeVectorIndex()
        uc = SeedReviewsUseCase(embedding_service=FakeEmbeddingService(), vector_index=index)
        reviews = [
            ProfessorReview(professor="J.Smith", subject="Calculus", stars=3, review="Old."),
            ProfessorReview(professor="Dr. B", subject="Physics", stars=4, review="Tough."),
            ProfessorReview(professor="J.Smith", subject="Calculus", stars=4.8, review="New."),
        ]
        warnings: list[str] = []
        sink_id = logger.add(lambda m: warnings.append(m.record["message"]), level="WARNING")
        try:
            count = uc.execute(reviews)
        finally:
            logger.remove(sink_id)

        assert count == 2
        assert [r["id"] for r in index.upserted] == ["J.Smith", "Dr. B"]
        assert index.upserted[0]["metadata"]["review"] == "New."
        assert any("Duplicate review for J.Smith" in w for w in warnings)

    def test_nothing_to_seed(self):
        index = FakeVectorIndex()
        uc = SeedReviewsUseCase(embedding_service=FakeEmbeddingService(), vector_index=index)

        assert uc.execute([]) == 0
        assert index.ensure_calls == 0


class TestSeedCommand:
    def test_seed_command(self, reviews_file: Path):
        index = FakeVectorIndex()
        uc = SeedReviewsUseCase(embedding_service=FakeEmbeddingService(), vector_index=index)
        settings = Settings(_env_file=None, log_level="WARNING")

        with (
            patch("rmp_assistant.cli.get_settings", return_value=settings),
            patch("rmp_assistant.cli.build_seed_use_case", return_value=uc),
        ):
            result = CliRunner().invoke(cli, ["seed", "--file", str(reviews_file)])

        assert result.exit_code == 0, result.output
        assert "Upserted 2 vectors" in result.output

    def test_seed_command_missing_credentials(self, reviews_file: Path):
        settings = Settings(_env_file=None, openai_api_key="", log_level="WARNING")

        with patch("rmp_assistant.cli.get_settings", return_value=settings):
            result = CliRunner().invoke(cli, ["seed", "--file", str(reviews_file)])

        assert result.exit_code == 1
        assert "OPENAI_API_KEY" in result.output
