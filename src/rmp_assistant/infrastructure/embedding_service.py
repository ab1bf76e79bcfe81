"""OpenAI implementation of the embedding service."""

from __future__ import annotations

from openai import OpenAI

from rmp_assistant.application.exceptions import EmptyQueryError

DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"


class OpenAIEmbeddingService:
    """Embeds text with the OpenAI embeddings API."""

    def __init__(
        self,
        client: OpenAI,
        model: str = DEFAULT_EMBEDDING_MODEL,
        dimensions: int = 1536,
    ):
        """
        Initialize the embedding service.

        Args:
            client: Configured OpenAI client
            model: Embedding model identifier
            dimensions: Requested vector length (must match the index)
        """
        self.client = client
        self.model = model
        self._dimensions = dimensions

    def _to_float_list(self, embedding: list[float]) -> list[float]:
        """Ensure embedding is a plain list of Python floats."""
        return [float(x) for x in embedding]

    def _create_kwargs(self) -> dict:
        """Build kwargs for embeddings.create."""
        # text-embedding-3-* support dimensions; request our configured size for index compatibility
        return {"model": self.model, "dimensions": self._dimensions, "encoding_format": "float"}

    def embed_text(self, text: str) -> list[float]:
        """Generate embedding for a single text."""
        if not text or not text.strip():
            raise EmptyQueryError("cannot embed empty text")
        kwargs = self._create_kwargs()
        kwargs["input"] = text
        response = self.client.embeddings.create(**kwargs)
        return self._to_float_list(response.data[0].embedding)

    def embed_batch(self, texts: list[str], batch_size: int = 100) -> list[list[float]]:
        """
        Generate embeddings for multiple texts in batch.

        Args:
            texts: List of input texts to embed
            batch_size: Maximum batch size for API calls

        Returns:
            List of embedding vectors, in input order
        """
        if any(not t or not t.strip() for t in texts):
            raise EmptyQueryError("cannot embed empty text")

        all_embeddings = []
        for i in range(0, len(texts), batch_size):
            batch = texts[i : i + batch_size]
            kwargs = self._create_kwargs()
            kwargs["input"] = batch
            response = self.client.embeddings.create(**kwargs)
            for item in response.data:
                all_embeddings.append(self._to_float_list(item.embedding))

        return all_embeddings

    @property
    def dimension(self) -> int:
        """Get embedding dimension."""
        return self._dimensions
