"""Pinecone-backed vector index: provisioning, top-k query and upsert."""

from __future__ import annotations

from loguru import logger
from pinecone import ConflictError, Pinecone, ServerlessSpec

from rmp_assistant.domain.models import IndexDescriptor, RetrievedMatch


class PineconeVectorIndex:
    """Adapter over one namespace of one Pinecone serverless index."""

    def __init__(
        self,
        client: Pinecone,
        descriptor: IndexDescriptor,
        namespace: str = "ns1",
        upsert_batch_size: int = 100,
    ) -> None:
        self.client = client
        self.descriptor = descriptor
        self.namespace = namespace
        self.upsert_batch_size = upsert_batch_size
        self._index = None

    @property
    def index(self):
        """Data-plane handle, created on first use."""
        if self._index is None:
            self._index = self.client.Index(self.descriptor.name)
        return self._index

    def ensure_index(self) -> bool:
        """Create the index if it does not exist yet.

        Returns True when this call created it. A concurrent creation by
        another request (HTTP 409) counts as already existing.
        """
        name = self.descriptor.name
        if name in self.client.list_indexes().names():
            return False

        logger.info(
            "Creating index {} | dimension={} metric={}",
            name,
            self.descriptor.dimension,
            self.descriptor.metric,
        )
        try:
            self.client.create_index(
                name=name,
                dimension=self.descriptor.dimension,
                metric=self.descriptor.metric,
                spec=ServerlessSpec(cloud=self.descriptor.cloud, region=self.descriptor.region),
            )
        except ConflictError:
            logger.warning("Index {} already exists (created concurrently)", name)
            return False
        return True

    def query(self, vector: list[float], top_k: int) -> list[RetrievedMatch]:
        """Return up to *top_k* matches, most similar first, with metadata."""
        response = self.index.query(
            vector=vector,
            top_k=top_k,
            include_metadata=True,
            namespace=self.namespace,
        )
        return [
            RetrievedMatch(
                id=match.id,
                score=getattr(match, "score", None),
                metadata=dict(match.metadata or {}),
            )
            for match in response.matches
        ]

    def upsert(self, records: list[dict]) -> int:
        """Write ``{"id", "values", "metadata"}`` records; returns the upserted count."""
        total = 0
        for i in range(0, len(records), self.upsert_batch_size):
            batch = records[i : i + self.upsert_batch_size]
            response = self.index.upsert(vectors=batch, namespace=self.namespace)
            total += response.upserted_count
        return total
