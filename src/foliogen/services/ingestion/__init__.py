"""Source ingestion adapters."""

from foliogen.services.ingestion.github import (
    GithubIngestionAdapter,
    build_github_profile,
    normalize_github_username,
)
from foliogen.services.ingestion.linkedin import LinkedInIngestionAdapter

__all__ = [
    "GithubIngestionAdapter",
    "build_github_profile",
    "normalize_github_username",
    "LinkedInIngestionAdapter",
]
