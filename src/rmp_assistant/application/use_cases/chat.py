"""Chat use case — orchestrates one retrieval-augmented chat turn.

This module contains all business logic for handling a chat turn:
message validation, index provisioning, embedding, retrieval, prompt
composition and opening the completion stream.  It has **no dependency on
FastAPI** and can be invoked from any transport layer.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from loguru import logger

from rmp_assistant.application.exceptions import EmptyConversationError, EmptyQueryError
from rmp_assistant.application.prompt import TOP_K, compose_messages
from rmp_assistant.application.streaming import CompletionRelay
from rmp_assistant.domain.models import ChatMessage
from rmp_assistant.domain.protocols import (
    IChatCompletionService,
    IEmbeddingService,
    IVectorIndex,
)


class ChatUseCase:
    """Runs the RAG pipeline for a single request.

    Parameters
    ----------
    embedding_service:
        Turns the latest message into a query vector.
    vector_index:
        Provisions the index and answers top-k queries.
    completion_service:
        Opens the streaming chat completion.
    """

    def __init__(
        self,
        embedding_service: IEmbeddingService,
        vector_index: IVectorIndex,
        completion_service: IChatCompletionService,
    ) -> None:
        self.embedding_service = embedding_service
        self.vector_index = vector_index
        self.completion_service = completion_service

    async def start(self, messages: Sequence[ChatMessage]) -> CompletionRelay:
        """Run every stage up to the first streamed byte.

        Provider failures (auth, quota, provisioning) surface here, before the
        caller has committed to a streaming response.

        Args:
            messages: Full conversation history. The last entry is the new
                      question; earlier entries are passed to the model unchanged.

        Returns:
            A fresh ``CompletionRelay`` over the model's answer.

        Raises:
            EmptyConversationError: If *messages* is empty.
            EmptyQueryError: If the last message has no text.
        """
        if not messages:
            raise EmptyConversationError("messages list must not be empty")

        query = messages[-1].content
        if not query.strip():
            raise EmptyQueryError("last message content must not be empty")

        # SDK calls for Pinecone and embeddings are blocking
        created = await asyncio.to_thread(self.vector_index.ensure_index)
        if created:
            logger.info("Vector index created on first request")

        vector = await asyncio.to_thread(self.embedding_service.embed_text, query)
        matches = await asyncio.to_thread(self.vector_index.query, vector, TOP_K)
        logger.info("Retrieved {} matches | query={}", len(matches), query[:60])

        composed = compose_messages(messages, matches)
        fragments = await self.completion_service.open_stream(composed)
        return CompletionRelay(fragments)
