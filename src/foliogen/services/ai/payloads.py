"""Expected shapes of raw model output.

These are deliberately loose (everything optional): they only guarantee
types. A field of the wrong type becomes None rather than failing the
payload, and list entries that are not objects are dropped one by one.
Semantic checks and clean-up happen in the generation service.
"""

from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

logger = structlog.get_logger(__name__)


def _lenient_str(v: Any) -> str | None:
    if isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return None


def _lenient_int(v: Any) -> int | None:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float) and v.is_integer():
        return int(v)
    if isinstance(v, str) and v.strip().isdecimal():
        return int(v.strip())
    # "Present", "2019-2021", ...
    return None


def _string_list(v: Any) -> list[str] | None:
    if not isinstance(v, list):
        return None
    return [item for item in v if isinstance(item, str)]


def _valid_entries(model: type[BaseModel], v: Any) -> list[Any] | None:
    """Validate list entries one at a time, dropping the ones that fail."""
    if not isinstance(v, list):
        return None
    entries = []
    for item in v:
        try:
            entries.append(model.model_validate(item))
        except PydanticValidationError:
            logger.warning("Dropping malformed AI payload entry", expected=model.__name__)
    return entries


class PayloadModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class KeywordsPayload(PayloadModel):
    keywords: list[str] | None = None

    @field_validator("keywords", mode="before")
    @classmethod
    def keep_strings(cls, v: Any) -> list[str] | None:
        return _string_list(v)


class FeedbackAnalysisPayload(PayloadModel):
    category: str | None = None
    sentiment: str | None = None

    @field_validator("category", "sentiment", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _lenient_str(v)


class ProjectPayload(PayloadModel):
    title: str | None = None
    description: str | None = None
    technologies: list[str] | None = None
    link: str | None = None

    @field_validator("title", "description", "link", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _lenient_str(v)

    @field_validator("technologies", mode="before")
    @classmethod
    def keep_strings(cls, v: Any) -> list[str] | None:
        # "Go, Rust" instead of ["Go", "Rust"] counts as no technologies
        return _string_list(v)


class ProfilePayload(PayloadModel):
    bio: str | None = None
    skills: list[str] | None = None
    projects: list[ProjectPayload] | None = None

    @field_validator("bio", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _lenient_str(v)

    @field_validator("skills", mode="before")
    @classmethod
    def keep_strings(cls, v: Any) -> list[str] | None:
        return _string_list(v)

    @field_validator("projects", mode="before")
    @classmethod
    def drop_invalid_projects(cls, v: Any) -> list[Any] | None:
        return _valid_entries(ProjectPayload, v)


class EducationPayload(PayloadModel):
    institution: str | None = None
    degree: str | None = None
    field_of_study: str | None = None
    start_year: int | None = None
    end_year: int | None = None

    @field_validator("institution", "degree", "field_of_study", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _lenient_str(v)

    @field_validator("start_year", "end_year", mode="before")
    @classmethod
    def coerce_year(cls, v: Any) -> int | None:
        return _lenient_int(v)


class PostPayload(PayloadModel):
    title: str | None = None
    content_snippet: str | None = None
    url: str | None = None
    created_at: str | None = None

    @field_validator("title", "content_snippet", "url", "created_at", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _lenient_str(v)


class LinkedInPayload(PayloadModel):
    name: str | None = None
    headline: str | None = None
    current_role: str | None = None
    current_company: str | None = None
    location: str | None = None
    education: list[EducationPayload] | None = None
    skills: list[str] | None = None
    posts: list[PostPayload] | None = None

    @field_validator("name", "headline", "current_role", "current_company", "location", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _lenient_str(v)

    @field_validator("skills", mode="before")
    @classmethod
    def keep_strings(cls, v: Any) -> list[str] | None:
        return _string_list(v)

    @field_validator("education", mode="before")
    @classmethod
    def drop_invalid_education(cls, v: Any) -> list[Any] | None:
        return _valid_entries(EducationPayload, v)

    @field_validator("posts", mode="before")
    @classmethod
    def drop_invalid_posts(cls, v: Any) -> list[Any] | None:
        return _valid_entries(PostPayload, v)
