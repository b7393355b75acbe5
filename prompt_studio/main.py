"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prompt_studio.api.router import api_router
from prompt_studio.config import get_settings
from prompt_studio.db.client import get_supabase_client
from prompt_studio.llm.adapter import get_llm_adapter
from prompt_studio.utils.logging import setup_logging

logger = structlog.get_logger()

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("promptstudio.starting", port=settings.port)

    get_supabase_client()
    logger.info("promptstudio.supabase_connected")

    adapter = get_llm_adapter()
    if not adapter.available_providers():
        logger.warning("promptstudio.no_llm_providers")

    if not settings.jwt_secret:
        logger.warning("promptstudio.jwt_secret_missing")

    yield

    logger.info("promptstudio.shutdown")


app = FastAPI(
    title="PromptStudio",
    description="Reusable prompt templates, context snippets and LLM document generation",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Service info endpoint."""
    return {"service": "promptstudio", "version": VERSION}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "service": "promptstudio", "version": VERSION}
