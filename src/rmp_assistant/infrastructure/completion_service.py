"""OpenAI streaming chat completions."""

from __future__ import annotations

from collections.abc import AsyncIterator

from openai import AsyncOpenAI

DEFAULT_CHAT_MODEL = "gpt-4o-mini"


class OpenAIChatCompletionService:
    """Opens a streamed chat completion and exposes it as text fragments."""

    def __init__(self, client: AsyncOpenAI, model: str = DEFAULT_CHAT_MODEL) -> None:
        self.client = client
        self.model = model

    async def open_stream(self, messages: list[dict]) -> AsyncIterator[str]:
        """Send the request and return a lazy iterator over text deltas.

        The request itself is awaited here, so authentication and quota
        errors are raised before the first fragment is consumed.
        """
        stream = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            stream=True,
        )
        return self._fragments(stream)

    @staticmethod
    async def _fragments(stream) -> AsyncIterator[str]:
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        finally:
            await stream.close()
