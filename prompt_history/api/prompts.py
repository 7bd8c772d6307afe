"""Prompt management endpoints.

Endpoints:
    POST   /prompts        - Create a prompt
    GET    /prompts        - List all prompts
    GET    /prompts/{id}   - Get a prompt
    PUT    /prompts/{id}   - Replace a prompt's prompt, mediaUrl and mediaType
    DELETE /prompts/{id}   - Delete a prompt and its generated media

Errors are raised as service exceptions and rendered by the handlers in
``prompt_history.api.errors`` as ``{"status": "error", "message": ...}``.

Usage:
    POST /prompts
    {
        "prompt": "a cat",
        "mediaUrl": "https://cdn.example.com/generated-media/cat.png",
        "mediaType": "image"
    }
"""

from typing import List

from fastapi import APIRouter, Response, status

from prompt_history.api.deps import PromptServiceDep
from prompt_history.models.schemas import (
    ErrorResponse,
    PromptCreate,
    PromptResponse,
    PromptUpdate,
)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    404: {"model": ErrorResponse, "description": "Prompt not found"},
    500: {"model": ErrorResponse, "description": "Store error"},
}


@router.post(
    "",
    response_model=PromptResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a prompt",
    responses={k: ERROR_RESPONSES[k] for k in (400, 500)},
)
async def create_prompt(body: PromptCreate, service: PromptServiceDep):
    """Create a prompt record for a generated media asset."""
    record = await service.create(
        prompt=body.prompt,
        media_url=body.media_url,
        media_type=body.media_type,
    )
    return PromptResponse.from_record(record)


@router.get(
    "",
    response_model=List[PromptResponse],
    response_model_exclude_none=True,
    summary="List all prompts",
    responses={500: ERROR_RESPONSES[500]},
)
async def list_prompts(service: PromptServiceDep):
    """List every prompt, in store order."""
    records = await service.list_all()
    return [PromptResponse.from_record(r) for r in records]


@router.get(
    "/{prompt_id}",
    response_model=PromptResponse,
    response_model_exclude_none=True,
    summary="Get a prompt",
    responses={k: ERROR_RESPONSES[k] for k in (404, 500)},
)
async def get_prompt(prompt_id: str, service: PromptServiceDep):
    """Get a prompt by id."""
    record = await service.get(prompt_id)
    return PromptResponse.from_record(record)


@router.put(
    "/{prompt_id}",
    response_model=PromptResponse,
    response_model_exclude_none=True,
    summary="Update a prompt",
    responses=ERROR_RESPONSES,
)
async def update_prompt(prompt_id: str, body: PromptUpdate, service: PromptServiceDep):
    """Replace a prompt's text and media reference."""
    record = await service.update(
        prompt_id,
        prompt=body.prompt,
        media_url=body.media_url,
        media_type=body.media_type,
    )
    return PromptResponse.from_record(record)


@router.delete(
    "/{prompt_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a prompt",
    responses={k: ERROR_RESPONSES[k] for k in (404, 500)},
)
async def delete_prompt(prompt_id: str, service: PromptServiceDep):
    """Delete a prompt and its generated media object."""
    await service.delete(prompt_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
