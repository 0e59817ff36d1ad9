"""GitHub source profile schemas."""

from datetime import datetime

from foliogen.schemas.common import CamelModel


class GithubRepoSummary(CamelModel):
    """Summary of one repository owned by the user."""

    name: str
    full_name: str
    html_url: str
    description: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    language: str | None = None
    topics: list[str] = []
    is_fork: bool = False
    last_push_at: datetime | None = None


class LanguageStat(CamelModel):
    """Weighted share of one primary language across repositories.

    ``bytes`` is the summed repository size in kilobytes, kept under this
    name for compatibility with existing clients.
    """

    bytes: int
    percent: float


class GithubProfile(CamelModel):
    """Normalized GitHub profile."""

    url: str
    username: str
    name: str | None = None
    bio: str | None = None
    location: str | None = None
    blog: str | None = None
    avatar_url: str | None = None
    followers: int = 0
    following: int = 0
    public_repos_count: int = 0
    total_stars: int = 0
    languages: dict[str, LanguageStat] = {}
    last_activity_at: datetime | None = None
    pinned_repos: list[GithubRepoSummary] = []
    top_repos_by_stars: list[GithubRepoSummary] = []
    top_repos_by_recent_activity: list[GithubRepoSummary] = []
