"""API router aggregation."""

from fastapi import APIRouter

from prompt_history.api import health, prompts

api_router = APIRouter()

api_router.include_router(health.router, tags=["Health"])
api_router.include_router(prompts.router, prefix="/prompts", tags=["Prompts"])
