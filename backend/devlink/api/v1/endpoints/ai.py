from fastapi import APIRouter
from pydantic import ValidationError as PydanticValidationError

from devlink.core.exceptions import ValidationError
from devlink.core.logging_config import logger
from devlink.schemas.content import GenerateContentRequest, GenerateContentResponse
from devlink.services.content_generator import generate_content

router = APIRouter()


@router.post("/generate", response_model=GenerateContentResponse)
async def generate(request: GenerateContentRequest):
    """
    Generate portfolio text.

    type "about" builds a personalized about section from user_details,
    "project" returns a project description, anything else a placeholder.
    """
    try:
        content = generate_content(request.type, request.context, request.user_details)
    except PydanticValidationError as e:
        raise ValidationError("Invalid user details", field="user_details") from e

    logger.debug(f"Generated {request.type} content ({len(content)} chars)")
    return GenerateContentResponse(content=content)
