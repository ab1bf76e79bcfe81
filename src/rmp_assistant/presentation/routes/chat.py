"""Chat routes — health check and the streaming RAG endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Body, HTTPException, Request
from fastapi.responses import JSONResponse, StreamingResponse
from loguru import logger

from rmp_assistant.application.exceptions import EmptyConversationError, EmptyQueryError
from rmp_assistant.application.streaming import CompletionRelay
from rmp_assistant.domain.models import ChatMessage

router = APIRouter(tags=["chat"])


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health")
async def health():
    """Simple liveness / readiness check."""
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Chat (streaming plain text)
# ---------------------------------------------------------------------------


@router.post("/api/chat")
async def chat(
    raw_request: Request,
    messages: list[ChatMessage] = Body(..., description="Conversation, oldest first"),
):
    """Answer the last message using retrieved professor data, streamed as raw text.

    Any failure before the first fragment becomes a 500 carrying the error
    message; a failure mid-stream aborts the response.
    """
    factory = raw_request.app.state.use_case_factory

    logger.info(
        "POST /api/chat | messages={} last={}",
        len(messages),
        messages[-1].content[:60] if messages else "",
    )

    try:
        uc = factory()
        relay: CompletionRelay = await uc.start(messages)
    except (EmptyConversationError, EmptyQueryError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except Exception as exc:
        logger.exception("POST /api/chat failed before streaming")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    return StreamingResponse(
        relay.stream(),
        media_type="text/plain; charset=utf-8",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
        },
    )
