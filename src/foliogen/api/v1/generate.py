"""Full profile generation endpoint."""

from fastapi import APIRouter, HTTPException, status
from pydantic import Field

from foliogen.api.deps import GenerationService
from foliogen.schemas.common import CamelModel
from foliogen.schemas.profile import GeneratedProfile

router = APIRouter()


class GenerateRequest(CamelModel):
    """Inputs for portfolio generation."""

    name: str | None = Field(None, json_schema_extra={"example": "Ada Lovelace"})
    role: str | None = Field(None, json_schema_extra={"example": "Staff Engineer"})
    raw_text: str | None = Field(None, description="Background text: CV, bio, notes")
    linkedin_url: str | None = None
    github_url: str | None = None


@router.post("", response_model=GeneratedProfile)
async def generate_profile(request: GenerateRequest, service: GenerationService) -> GeneratedProfile:
    """
    Generate a portfolio (bio, skills, projects) from background text.

    ## Errors

    - 400: name, role or background text missing
    - 503: AI service not configured
    - 500: the model failed or returned an incomplete profile
    """
    if not request.name or not request.role or not request.raw_text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name, role, and background text are required",
        )

    return await service.generate_full_profile(
        name=request.name,
        role=request.role,
        raw_text=request.raw_text,
        linkedin_url=request.linkedin_url,
        github_url=request.github_url,
    )
