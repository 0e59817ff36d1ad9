"""Source ingestion endpoints for GitHub, LinkedIn, and unified profiles."""

import structlog
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from foliogen.api.deps import GithubAdapter, LinkedInAdapter
from foliogen.exceptions import FolioGenError
from foliogen.schemas.common import CamelModel
from foliogen.schemas.github import GithubProfile
from foliogen.schemas.linkedin import LinkedInProfile
from foliogen.schemas.unified import UnifiedProfile
from foliogen.services.merge import merge_profiles

logger = structlog.get_logger(__name__)

router = APIRouter()


# ============================================
# Request Schemas
# ============================================

class GithubIngestRequest(BaseModel):
    """GitHub profile to ingest."""

    url: str | None = Field(
        None,
        description="GitHub profile URL or bare username",
        json_schema_extra={"example": "https://github.com/octocat"},
    )


class LinkedInIngestRequest(BaseModel):
    """LinkedIn profile to ingest."""

    url: str | None = Field(
        None,
        description="LinkedIn profile URL",
        json_schema_extra={"example": "https://www.linkedin.com/in/johndoe/"},
    )
    text: str | None = Field(None, description="Copy-pasted profile text")


class UnifiedIngestRequest(CamelModel):
    """Pre-fetched source data, source URLs, or a mix of both."""

    github_data: GithubProfile | None = None
    linkedin_data: LinkedInProfile | None = None
    github_url: str | None = None
    linkedin_url: str | None = None
    linkedin_text: str | None = None


# ============================================
# Endpoints
# ============================================

@router.post("/github", response_model=GithubProfile)
async def ingest_github(request: GithubIngestRequest, adapter: GithubAdapter) -> GithubProfile:
    """
    Fetch a GitHub profile with repository statistics.

    Up to 100 owned repositories are read to compute total stars, a
    size-weighted language breakdown, and top repositories by stars and
    by recent activity.
    """
    if not request.url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="GitHub URL is required",
        )

    return await adapter.ingest(request.url)


@router.post("/linkedin", response_model=LinkedInProfile)
async def ingest_linkedin(request: LinkedInIngestRequest, adapter: LinkedInAdapter) -> LinkedInProfile:
    """
    Parse pasted LinkedIn profile text into structured data.

    Fields not present in the text are returned as null or empty.
    """
    if not request.url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="LinkedIn URL is required",
        )

    return await adapter.ingest(request.url, request.text)


@router.post("/unified", response_model=UnifiedProfile)
async def ingest_unified(
    request: UnifiedIngestRequest,
    github_adapter: GithubAdapter,
    linkedin_adapter: LinkedInAdapter,
) -> UnifiedProfile:
    """
    Merge GitHub and LinkedIn data into one profile.

    Provided data is used as-is; a source given only by URL is ingested
    first. A source that fails to ingest is logged and left out.
    """
    if not any([request.github_data, request.linkedin_data, request.github_url, request.linkedin_url]):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either provide (githubData and/or linkedinData) or (githubUrl and/or linkedinUrl)",
        )

    github = request.github_data
    if github is None and request.github_url:
        try:
            github = await github_adapter.ingest(request.github_url)
        except FolioGenError as e:
            logger.warning("GitHub ingestion failed, merging without it", status=e.status_code, error=e.message)
        except Exception as e:
            logger.error("GitHub ingestion crashed, merging without it", error=str(e), exc_info=e)

    linkedin = request.linkedin_data
    if linkedin is None and request.linkedin_url:
        try:
            linkedin = await linkedin_adapter.ingest(request.linkedin_url, request.linkedin_text or None)
        except FolioGenError as e:
            logger.warning("LinkedIn ingestion failed, merging without it", status=e.status_code, error=e.message)
        except Exception as e:
            logger.error("LinkedIn ingestion crashed, merging without it", error=str(e), exc_info=e)

    return merge_profiles(github, linkedin)
