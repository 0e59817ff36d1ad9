"""Unified developer profile schema."""

from datetime import datetime

from pydantic import computed_field

from foliogen.schemas.common import CamelModel
from foliogen.schemas.github import GithubProfile
from foliogen.schemas.linkedin import LinkedInProfile


class UnifiedProfile(CamelModel):
    """GitHub and LinkedIn data merged into one record."""

    id: str
    created_at: datetime
    updated_at: datetime
    github: GithubProfile | None = None
    linkedin: LinkedInProfile | None = None
    primary_name: str | None = None
    primary_location: str | None = None
    primary_title: str | None = None
    primary_company: str | None = None
    normalized_skills: list[str] = []

    @computed_field
    @property
    def has_github(self) -> bool:
        """Whether GitHub data contributed to this profile."""
        return self.github is not None

    @computed_field
    @property
    def has_linkedin(self) -> bool:
        """Whether LinkedIn data contributed to this profile."""
        return self.linkedin is not None
