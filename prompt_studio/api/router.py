"""Main API router, aggregating all endpoint modules."""

from fastapi import APIRouter

from prompt_studio.api.generation import router as generation_router
from prompt_studio.api.llm import router as llm_router
from prompt_studio.api.snippets import router as snippets_router
from prompt_studio.api.templates import router as templates_router

api_router = APIRouter()

api_router.include_router(templates_router, prefix="/templates", tags=["templates"])
api_router.include_router(snippets_router, prefix="/snippets", tags=["snippets"])
api_router.include_router(llm_router, tags=["llm"])
api_router.include_router(generation_router, tags=["generation"])
