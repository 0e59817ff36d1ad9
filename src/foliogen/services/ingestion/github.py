"""GitHub profile ingestion via the public REST API."""

import re
from datetime import datetime
from typing import Any

import httpx
import structlog

from foliogen.exceptions import GithubUserNotFoundError, UpstreamError, ValidationError
from foliogen.schemas.github import GithubProfile, GithubRepoSummary, LanguageStat

logger = structlog.get_logger(__name__)

HOST_MARKER = "github.com/"
MAX_REPOS = 100
TOP_REPOS_LIMIT = 6

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})$")


def normalize_github_username(value: str) -> str:
    """
    Extract a GitHub username from a profile URL or bare username.

    Examples:
        "https://github.com/alice/" → "alice"
        "github.com/alice" → "alice"
        "alice" → "alice"

    Raises:
        ValidationError: if no plausible username remains
    """
    username = (value or "").strip()
    if HOST_MARKER in username:
        username = username.split(HOST_MARKER, 1)[1].split("/")[0]
    username = username.strip().rstrip("/")

    if not username or not _USERNAME_PATTERN.match(username):
        raise ValidationError("Invalid GitHub URL or username")
    return username


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _to_repo_summary(repo: dict[str, Any]) -> GithubRepoSummary:
    return GithubRepoSummary(
        name=repo.get("name") or "",
        full_name=repo.get("full_name") or "",
        html_url=repo.get("html_url") or "",
        description=repo.get("description"),
        stargazers_count=repo.get("stargazers_count") or 0,
        forks_count=repo.get("forks_count") or 0,
        language=repo.get("language"),
        topics=repo.get("topics") or [],
        is_fork=bool(repo.get("fork")),
        last_push_at=_parse_timestamp(repo.get("pushed_at")),
    )


def compute_language_stats(repos: list[dict[str, Any]]) -> dict[str, LanguageStat]:
    """
    Weight each repository's primary language by its size.

    Sizes are in kilobytes with a floor of 1, so empty repositories still
    count. Percentages are taken over the total weight and sum to 100.
    Repositories without a primary language are ignored.
    """
    weights: dict[str, int] = {}
    for repo in repos:
        language = repo.get("language")
        if not language:
            continue
        weights[language] = weights.get(language, 0) + max(repo.get("size") or 0, 1)

    total = sum(weights.values())
    return {
        language: LanguageStat(bytes=weight, percent=weight / total * 100)
        for language, weight in weights.items()
    }


def _push_sort_key(repo: GithubRepoSummary) -> float:
    # Repositories that were never pushed sort last
    return repo.last_push_at.timestamp() if repo.last_push_at else float("-inf")


def build_github_profile(user: dict[str, Any], repos: list[dict[str, Any]]) -> GithubProfile:
    """Derive a normalized profile from raw user and repository payloads."""
    summaries = [_to_repo_summary(repo) for repo in repos]

    top_by_stars = sorted(summaries, key=lambda r: r.stargazers_count, reverse=True)[:TOP_REPOS_LIMIT]
    top_by_activity = sorted(summaries, key=_push_sort_key, reverse=True)[:TOP_REPOS_LIMIT]

    return GithubProfile(
        url=user.get("html_url") or f"https://github.com/{user.get('login', '')}",
        username=user.get("login") or "",
        name=user.get("name"),
        bio=user.get("bio"),
        location=user.get("location"),
        blog=user.get("blog") or None,
        avatar_url=user.get("avatar_url"),
        followers=user.get("followers") or 0,
        following=user.get("following") or 0,
        public_repos_count=user.get("public_repos") or 0,
        total_stars=sum(r.stargazers_count for r in summaries),
        languages=compute_language_stats(repos),
        last_activity_at=top_by_activity[0].last_push_at if top_by_activity else None,
        # No pinned-repository signal without an authenticated GraphQL call;
        # the star ranking stands in for it.
        pinned_repos=list(top_by_stars),
        top_repos_by_stars=top_by_stars,
        top_repos_by_recent_activity=top_by_activity,
    )


class GithubIngestionAdapter:
    """
    Fetch and normalize a GitHub profile.

    Upstream failures are surfaced immediately with the upstream status code;
    they are never retried.

    Usage:
        adapter = GithubIngestionAdapter(api_url="https://api.github.com")
        profile = await adapter.ingest("https://github.com/alice")
    """

    def __init__(
        self,
        api_url: str = "https://api.github.com",
        token: str | None = None,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "foliogen-api",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def ingest(self, url_or_username: str) -> GithubProfile:
        """
        Fetch a user and their owned repositories.

        Raises:
            ValidationError: the input holds no usable username
            GithubUserNotFoundError: GitHub has no such user
            UpstreamError: any other non-success response or a network failure
        """
        username = normalize_github_username(url_or_username)

        if self._client is not None:
            return await self._fetch(self._client, username)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._fetch(client, username)

    async def _fetch(self, client: httpx.AsyncClient, username: str) -> GithubProfile:
        headers = self._headers()

        try:
            user_response = await client.get(f"{self.api_url}/users/{username}", headers=headers)
        except httpx.HTTPError as e:
            logger.error("GitHub user request failed", username=username, error=str(e))
            raise UpstreamError("Failed to fetch GitHub user data") from e

        if user_response.status_code == 404:
            logger.info("GitHub user not found", username=username)
            raise GithubUserNotFoundError(username)
        if not user_response.is_success:
            logger.warning("GitHub user lookup failed", username=username, status=user_response.status_code)
            raise UpstreamError("Failed to fetch GitHub user data", status_code=user_response.status_code)

        try:
            repos_response = await client.get(
                f"{self.api_url}/users/{username}/repos",
                params={"per_page": MAX_REPOS, "sort": "stars", "type": "owner"},
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.error("GitHub repository request failed", username=username, error=str(e))
            raise UpstreamError("Failed to fetch GitHub repositories") from e

        if not repos_response.is_success:
            logger.warning("GitHub repository fetch failed", username=username, status=repos_response.status_code)
            raise UpstreamError("Failed to fetch GitHub repositories", status_code=repos_response.status_code)

        try:
            user = user_response.json()
            repos = repos_response.json()
        except ValueError as e:
            logger.warning("GitHub returned a non-JSON body", username=username, error=str(e))
            raise UpstreamError("Unexpected GitHub response") from e
        if not isinstance(user, dict) or not isinstance(repos, list):
            raise UpstreamError("Unexpected GitHub response")

        profile = build_github_profile(user, repos)
        logger.info(
            "GitHub profile ingested",
            username=profile.username,
            repos=len(repos),
            total_stars=profile.total_stars,
            languages=len(profile.languages),
        )
        return profile
