"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from prompt_history.services.prompt import PromptService


def get_prompt_service(request: Request) -> PromptService:
    """
    Get the prompt service built during application startup.

    Raises:
        RuntimeError: If the application lifespan has not run
    """
    service = getattr(request.app.state, "prompt_service", None)
    if service is None:
        raise RuntimeError("Prompt service not initialized")
    return service


# Type alias for cleaner dependency injection
PromptServiceDep = Annotated[PromptService, Depends(get_prompt_service)]
