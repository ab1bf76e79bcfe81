"""Builds provider clients and use cases from an explicit Settings object."""

from __future__ import annotations

from openai import AsyncOpenAI, OpenAI
from pinecone import Pinecone

from rmp_assistant.application.use_cases import ChatUseCase, SeedReviewsUseCase
from rmp_assistant.config import Settings
from rmp_assistant.infrastructure.completion_service import OpenAIChatCompletionService
from rmp_assistant.infrastructure.embedding_service import OpenAIEmbeddingService
from rmp_assistant.infrastructure.pinecone_index import PineconeVectorIndex


class ProviderClients:
    """Long-lived SDK clients shared by all requests.

    Each client is created on first use, after credentials have been checked,
    so a missing key fails the request that needs it rather than startup.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._openai: OpenAI | None = None
        self._async_openai: AsyncOpenAI | None = None
        self._pinecone: Pinecone | None = None

    @property
    def openai(self) -> OpenAI:
        if self._openai is None:
            self._openai = OpenAI(api_key=self.settings.openai_api_key)
        return self._openai

    @property
    def async_openai(self) -> AsyncOpenAI:
        if self._async_openai is None:
            self._async_openai = AsyncOpenAI(api_key=self.settings.openai_api_key)
        return self._async_openai

    @property
    def pinecone(self) -> Pinecone:
        if self._pinecone is None:
            self._pinecone = Pinecone(api_key=self.settings.pinecone_api_key)
        return self._pinecone

    def close(self) -> None:
        """Release the sync OpenAI connection pool."""
        if self._openai is not None:
            self._openai.close()
            self._openai = None

    async def aclose(self) -> None:
        """Release every OpenAI connection pool (sync and async)."""
        self.close()
        if self._async_openai is not None:
            await self._async_openai.close()
            self._async_openai = None


def build_embedding_service(settings: Settings, clients: ProviderClients) -> OpenAIEmbeddingService:
    return OpenAIEmbeddingService(
        client=clients.openai,
        model=settings.openai_embedding_model,
        dimensions=settings.embedding_dimensions,
    )


def build_vector_index(settings: Settings, clients: ProviderClients) -> PineconeVectorIndex:
    return PineconeVectorIndex(
        client=clients.pinecone,
        descriptor=settings.index_descriptor(),
        namespace=settings.pinecone_namespace,
    )


def build_chat_use_case(settings: Settings, clients: ProviderClients) -> ChatUseCase:
    """Wire a ChatUseCase over the shared provider clients.

    Raises:
        MissingCredentialsError: If an API key is not configured.
    """
    settings.require_credentials()
    return ChatUseCase(
        embedding_service=build_embedding_service(settings, clients),
        vector_index=build_vector_index(settings, clients),
        completion_service=OpenAIChatCompletionService(
            client=clients.async_openai,
            model=settings.openai_chat_model,
        ),
    )


def build_seed_use_case(settings: Settings, clients: ProviderClients) -> SeedReviewsUseCase:
    settings.require_credentials()
    return SeedReviewsUseCase(
        embedding_service=build_embedding_service(settings, clients),
        vector_index=build_vector_index(settings, clients),
    )
