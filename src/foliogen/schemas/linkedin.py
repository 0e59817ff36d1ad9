"""LinkedIn source profile schemas."""

from foliogen.schemas.common import CamelModel


class EducationEntry(CamelModel):
    """One education entry; only the institution is mandatory."""

    institution: str
    degree: str | None = None
    field_of_study: str | None = None
    start_year: int | None = None
    end_year: int | None = None


class LinkedInPost(CamelModel):
    """Snippet of a recent post."""

    content_snippet: str
    title: str | None = None
    url: str | None = None
    created_at: str | None = None


class RawSource(CamelModel):
    """Truncated copy of the text the profile was parsed from."""

    text: str = ""


class LinkedInProfile(CamelModel):
    """Normalized LinkedIn profile.

    Fields missing from the source text stay ``None`` or empty.
    """

    url: str
    name: str | None = None
    headline: str | None = None
    current_role: str | None = None
    current_company: str | None = None
    location: str | None = None
    education: list[EducationEntry] = []
    skills: list[str] = []
    posts: list[LinkedInPost] = []
    raw_source: RawSource | None = None
