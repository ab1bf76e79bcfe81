"""FastAPI application for the RateMyProfessor assistant.

This module is a thin **presentation layer**.  The pipeline lives in
``application.use_cases`` and the provider adapters in ``infrastructure``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from rmp_assistant import __version__
from rmp_assistant.config import get_settings
from rmp_assistant.infrastructure.container import ProviderClients, build_chat_use_case
from rmp_assistant.logging_config import setup_logging
from rmp_assistant.presentation.routes.chat import router as chat_router

# ---------------------------------------------------------------------------
# Lifespan: configure logging, shared clients and the use case factory
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Set up logging and the use case factory around the application lifetime.

    Provider clients are created lazily on the first request that needs them,
    so missing credentials fail that request rather than startup.
    """
    settings = get_settings()
    setup_logging(level=settings.log_level, json=settings.log_json)

    app.state.settings = settings
    app.state.clients = clients = ProviderClients(settings)
    app.state.use_case_factory = partial(build_chat_use_case, settings, clients)

    logger.info(
        "Application startup complete | index={} namespace={} model={}",
        settings.pinecone_index_name,
        settings.pinecone_namespace,
        settings.openai_chat_model,
    )
    yield

    await clients.aclose()
    logger.info("Application shutdown complete")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="RateMyProfessor Assistant",
    description="Answers questions about professors with retrieval-augmented generation.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("rmp_assistant.main:app", host="0.0.0.0", port=8000, reload=True)
