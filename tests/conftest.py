"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from foliogen.config import Settings, get_settings
from foliogen.main import create_app
from foliogen.schemas.profile import GeneratedProfile, Project

API = "/api/v1"


class FakeGenerativeClient:
    """Generative client returning canned responses in order.

    The last response repeats once the list is exhausted. Exceptions in
    the list are raised instead of returned.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: list[dict] = []

    async def generate(
        self,
        prompt,
        *,
        model,
        system_instruction=None,
        response_schema=None,
        json_output=False,
    ):
        self.calls.append({
            "prompt": prompt,
            "model": model,
            "system_instruction": system_instruction,
            "response_schema": response_schema,
            "json_output": json_output,
        })
        index = min(len(self.calls), len(self.responses)) - 1
        response = self.responses[index]
        if isinstance(response, BaseException):
            raise response
        return response


def make_settings(**overrides) -> Settings:
    """Settings isolated from the environment and any .env file."""
    values = {
        "gemini_api_key": None,
        "openrouter_api_key": None,
        "github_token": None,
        "ai_retry_max_attempts": 2,
        "ai_retry_initial_delay": 0,
        "public_base_url": "https://folio.test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_repo(
    name: str,
    stars: int = 0,
    language: str | None = "Python",
    size: int = 100,
    pushed_at: str | None = "2024-01-01T00:00:00Z",
    topics: list[str] | None = None,
) -> dict:
    """Raw GitHub repository payload."""
    return {
        "name": name,
        "full_name": f"alice/{name}",
        "html_url": f"https://github.com/alice/{name}",
        "description": f"{name} description",
        "stargazers_count": stars,
        "forks_count": 0,
        "language": language,
        "topics": topics or [],
        "fork": False,
        "pushed_at": pushed_at,
        "size": size,
    }


GITHUB_USER = {
    "login": "alice",
    "html_url": "https://github.com/alice",
    "name": "Alice Example",
    "bio": "Builds things",
    "location": "Berlin",
    "blog": "",
    "avatar_url": "https://avatars.githubusercontent.com/u/1",
    "followers": 10,
    "following": 2,
    "public_repos": 3,
}


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def app(test_settings):
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: test_settings
    return app


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def generated_profile() -> GeneratedProfile:
    return GeneratedProfile(
        id="3f1c0a52-8d4e-4a4b-9a57-2c0f5b6f1e11",
        name="Ada Lovelace",
        title="Staff Engineer",
        bio="Designs analytical engines.",
        skills=["Python", "Rust"],
        projects=[
            Project(
                title="Difference Engine",
                description="Mechanical computation at scale.",
                technologies=["Brass", "Gears"],
                link="https://example.com/engine",
            )
        ],
        generated_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        github_url="https://github.com/ada",
    )
