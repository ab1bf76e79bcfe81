"""Relay from a provider fragment stream to the HTTP response."""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator

from loguru import logger

from rmp_assistant.application.exceptions import CompletionStreamError
from rmp_assistant.domain.models import StreamState


class CompletionRelay:
    """Single-pass, cancellable forwarder of completion fragments.

    ``idle → streaming → completed | errored | cancelled``. Each request gets
    a fresh instance; a relay cannot be iterated twice.
    """

    def __init__(self, fragments: AsyncIterator[str]) -> None:
        self._fragments = fragments
        self.state = StreamState.IDLE
        self.fragments_emitted = 0

    async def stream(self) -> AsyncIterator[str]:
        """Yield fragments in provider order until the provider finishes.

        A provider failure re-raises as ``CompletionStreamError`` after the
        fragments already received have been forwarded.
        """
        if self.state is not StreamState.IDLE:
            raise RuntimeError(f"Relay already used (state={self.state.value})")

        self.state = StreamState.STREAMING
        t0 = time.perf_counter()

        try:
            async for fragment in self._fragments:
                if not fragment:
                    continue
                self.fragments_emitted += 1
                yield fragment
        except (GeneratorExit, asyncio.CancelledError):
            self.state = StreamState.CANCELLED
            logger.info("Stream cancelled by consumer | fragments={}", self.fragments_emitted)
            raise
        except Exception as exc:
            self.state = StreamState.ERRORED
            logger.error(
                "Stream failed after {} fragments: {}", self.fragments_emitted, exc
            )
            raise CompletionStreamError(str(exc), self.fragments_emitted) from exc
        finally:
            await self._close_source()

        self.state = StreamState.COMPLETED
        logger.info(
            "Stream completed | latency={}ms | fragments={}",
            int((time.perf_counter() - t0) * 1000),
            self.fragments_emitted,
        )

    async def _close_source(self) -> None:
        aclose = getattr(self._fragments, "aclose", None)
        if aclose is not None:
            await aclose()
