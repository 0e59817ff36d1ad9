"""Share link schemas."""

from datetime import datetime

from foliogen.schemas.common import CamelModel
from foliogen.schemas.profile import GeneratedProfile


class ShareResponse(CamelModel):
    """Result of sharing a profile."""

    success: bool = True
    share_id: str
    share_url: str
    expires_at: datetime


class SharedProfileResponse(CamelModel):
    """Shared profile lookup result."""

    success: bool = True
    profile: GeneratedProfile
