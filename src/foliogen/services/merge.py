"""Merge GitHub and LinkedIn source profiles into one unified profile."""

import re
from datetime import datetime, timezone
from uuid import uuid4

from foliogen.schemas.github import GithubProfile
from foliogen.schemas.linkedin import LinkedInProfile
from foliogen.schemas.unified import UnifiedProfile

_WORD_SEPARATOR = re.compile(r"[\s-]+")


def _canonical(skill: str) -> str:
    return skill.strip().lower()


def _title_case(skill: str) -> str:
    """Capitalize each hyphen- or space-delimited word: "machine-learning" → "Machine Learning"."""
    words = [w for w in _WORD_SEPARATOR.split(skill) if w]
    return " ".join(w[0].upper() + w[1:] for w in words)


def normalize_skills(
    github: GithubProfile | None = None,
    linkedin: LinkedInProfile | None = None,
) -> list[str]:
    """
    Combine claimed and detected skills into one deduplicated, sorted list.

    Sources are LinkedIn skills, GitHub language names, and topics of the
    top-starred repositories. Entries are compared trimmed and case-folded.
    """
    raw: list[str] = []
    if linkedin is not None:
        raw.extend(linkedin.skills)
    if github is not None:
        raw.extend(github.languages.keys())
        for repo in github.top_repos_by_stars:
            raw.extend(repo.topics)

    canonical = {_canonical(skill) for skill in raw if skill and skill.strip()}
    # Title-casing can fold "a-b" and "a b" together, so dedupe again
    return sorted({_title_case(skill) for skill in canonical})


def merge_profiles(
    github: GithubProfile | None = None,
    linkedin: LinkedInProfile | None = None,
) -> UnifiedProfile:
    """
    Merge source profiles.

    LinkedIn wins for name, location, title and company; GitHub fills in
    name and location only. Each call gets a fresh id and timestamps.
    """
    now = datetime.now(timezone.utc)

    primary_name = (linkedin.name if linkedin else None) or (github.name if github else None)
    primary_location = (linkedin.location if linkedin else None) or (github.location if github else None)
    primary_title = (linkedin.current_role or linkedin.headline) if linkedin else None
    primary_company = linkedin.current_company if linkedin else None

    return UnifiedProfile(
        id=str(uuid4()),
        created_at=now,
        updated_at=now,
        github=github,
        linkedin=linkedin,
        primary_name=primary_name or None,
        primary_location=primary_location or None,
        primary_title=primary_title or None,
        primary_company=primary_company or None,
        normalized_skills=normalize_skills(github, linkedin),
    )
