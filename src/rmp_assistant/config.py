"""Configuration for the assistant using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from rmp_assistant.application.exceptions import MissingCredentialsError
from rmp_assistant.domain.models import IndexDescriptor

_PACKAGE_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _PACKAGE_DIR.parent.parent  # src/rmp_assistant/ → project root


class Settings(BaseSettings):
    """All settings, loaded from environment variables and the project .env file."""

    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # OpenAI — chat + embedding models
    # ------------------------------------------------------------------
    openai_api_key: str = ""
    openai_chat_model: str = "gpt-4o-mini"
    openai_embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 1536

    # ------------------------------------------------------------------
    # Pinecone — vector index
    # ------------------------------------------------------------------
    pinecone_api_key: str = ""
    pinecone_index_name: str = "rag"
    pinecone_namespace: str = "ns1"
    pinecone_metric: str = "cosine"
    pinecone_cloud: str = "aws"
    pinecone_region: str = "us-east-1"

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------
    reviews_path: Path = _PROJECT_ROOT / "data" / "reviews.json"

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = "INFO"
    log_json: bool = False

    def index_descriptor(self) -> IndexDescriptor:
        """Provisioning parameters for the Pinecone index."""
        return IndexDescriptor(
            name=self.pinecone_index_name,
            dimension=self.embedding_dimensions,
            metric=self.pinecone_metric,
            cloud=self.pinecone_cloud,
            region=self.pinecone_region,
        )

    def require_credentials(self) -> None:
        """Check that both provider API keys are present.

        Called when provider clients are built (per request), never at import
        or startup, so a missing key fails the request instead of the process.
        """
        if not self.openai_api_key:
            raise MissingCredentialsError("OPENAI_API_KEY not set. Add it to .env")
        if not self.pinecone_api_key:
            raise MissingCredentialsError("PINECONE_API_KEY not set. Add it to .env")


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings singleton."""
    return Settings()
