"""Fast keyword extraction endpoint."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from foliogen.api.deps import GenerationService

router = APIRouter()


class AnalyzeRequest(BaseModel):
    """Text to extract technical keywords from."""

    text: str | None = Field(
        None,
        description="Free-form background text",
        json_schema_extra={"example": "I build data pipelines in Rust and deploy them on Kubernetes."},
    )


class AnalyzeResponse(BaseModel):
    """Extracted keywords."""

    tags: list[str]


@router.post("", response_model=AnalyzeResponse)
async def analyze_input(request: AnalyzeRequest, service: GenerationService) -> AnalyzeResponse:
    """
    Extract up to ten technical keywords from text.

    Falls back to a fixed tag list when the model is unavailable.
    """
    if not request.text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Text content is required",
        )

    tags = await service.analyze_input_fast(request.text)
    return AnalyzeResponse(tags=tags)
