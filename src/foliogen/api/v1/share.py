"""Shareable profile link endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from foliogen.api.deps import AppSettings, ShareStore
from foliogen.exceptions import NotFoundError
from foliogen.schemas.profile import GeneratedProfile
from foliogen.schemas.share import SharedProfileResponse, ShareResponse

router = APIRouter()


@router.post("", response_model=ShareResponse)
async def share_profile(profile: GeneratedProfile, store: ShareStore, settings: AppSettings) -> ShareResponse:
    """
    Publish a snapshot of a profile under a short share ID.

    Links are nominally valid for 30 days; shares are kept in memory
    and do not survive a restart.
    """
    record = store.create(profile)
    return ShareResponse(
        share_id=record.share_id,
        share_url=f"{settings.public_base_url}/share/{record.share_id}",
        expires_at=record.expires_at,
    )


@router.get("", response_model=SharedProfileResponse)
async def get_shared_profile(
    store: ShareStore,
    share_id: str | None = Query(None, alias="id"),
) -> SharedProfileResponse:
    """Fetch a shared profile by its share ID."""
    if not share_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Share ID is required",
        )

    profile = store.get(share_id)
    if profile is None:
        raise NotFoundError("Portfolio not found")

    return SharedProfileResponse(profile=profile)
