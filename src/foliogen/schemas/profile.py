"""Generated portfolio profile schemas."""

from datetime import datetime

from foliogen.schemas.common import CamelModel


class Project(CamelModel):
    """Portfolio project."""

    title: str
    description: str
    technologies: list[str] = []
    link: str | None = None


class GeneratedProfile(CamelModel):
    """AI-generated portfolio profile."""

    id: str
    name: str
    title: str
    bio: str
    skills: list[str]
    projects: list[Project]
    generated_at: datetime
    github_url: str | None = None
    linkedin_url: str | None = None
