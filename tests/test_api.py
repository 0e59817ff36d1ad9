"""Tests for the HTTP endpoints."""

from unittest.mock import AsyncMock

import httpx
import orjson
import pytest

from conftest import API, GITHUB_USER, FakeGenerativeClient, make_repo, make_settings
from foliogen.api.deps import get_chat_service, get_generation_service, get_github_adapter
from foliogen.services.ai.chat import UNAVAILABLE_REPLY, ChatAgentService
from foliogen.services.ai.generation import FALLBACK_TAGS, ProfileGenerationService
from foliogen.services.ingestion.github import GithubIngestionAdapter

PROFILE_RESPONSE = orjson.dumps({
    "bio": "Designs analytical engines.",
    "skills": ["Python", "Rust"],
    "projects": [{"title": "Engine", "description": "Mechanical computation.", "technologies": ["Brass"]}],
}).decode()


def use_generation_client(app, test_settings, *responses) -> FakeGenerativeClient:
    fake = FakeGenerativeClient(*responses)
    app.dependency_overrides[get_generation_service] = lambda: ProfileGenerationService(
        test_settings, client=fake, sleep=AsyncMock()
    )
    return fake


def use_github(app, handler) -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_github_adapter] = lambda: GithubIngestionAdapter(
        api_url="https://api.github.test", client=client
    )


def github_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/users/alice":
        return httpx.Response(200, json=GITHUB_USER)
    if request.url.path == "/users/alice/repos":
        return httpx.Response(200, json=[make_repo("engine", stars=7, topics=["react"])])
    return httpx.Response(404)


# ============================================
# Health
# ============================================

@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# ============================================
# Analyze
# ============================================

@pytest.mark.asyncio
async def test_analyze_requires_text(client):
    response = await client.post(f"{API}/analyze", json={"text": ""})
    assert response.status_code == 400
    assert response.json()["detail"] == "Text content is required"


@pytest.mark.asyncio
async def test_analyze_without_api_key_returns_fallback(client):
    response = await client.post(f"{API}/analyze", json={"text": "I write Rust"})
    assert response.status_code == 200
    assert response.json() == {"tags": FALLBACK_TAGS}


@pytest.mark.asyncio
async def test_analyze_returns_model_keywords(app, client, test_settings):
    use_generation_client(app, test_settings, '```json\n{"keywords": ["Rust", "Tokio"]}\n```')

    response = await client.post(f"{API}/analyze", json={"text": "I write Rust"})

    assert response.json() == {"tags": ["Rust", "Tokio"]}


# ============================================
# Generate
# ============================================

@pytest.mark.asyncio
async def test_generate_requires_fields(client):
    response = await client.post(f"{API}/generate", json={"name": "Ada", "role": "Engineer"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Name, role, and background text are required"


@pytest.mark.asyncio
async def test_generate_without_api_key_is_unavailable(client):
    response = await client.post(
        f"{API}/generate",
        json={"name": "Ada", "role": "Engineer", "rawText": "Background"},
    )
    assert response.status_code == 503
    assert response.json()["detail"] == "AI service configuration error"


@pytest.mark.asyncio
async def test_generate_returns_camel_case_profile(app, client, test_settings):
    use_generation_client(app, test_settings, PROFILE_RESPONSE)

    response = await client.post(
        f"{API}/generate",
        json={
            "name": "Ada",
            "role": "Engineer",
            "rawText": "Background",
            "githubUrl": "https://github.com/ada",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Ada"
    assert data["githubUrl"] == "https://github.com/ada"
    assert data["projects"][0]["link"] is None
    assert "generatedAt" in data


@pytest.mark.asyncio
async def test_generate_incomplete_content_is_server_error(app, client, test_settings):
    use_generation_client(app, test_settings, '{"bio": "", "skills": [], "projects": []}')

    response = await client.post(
        f"{API}/generate",
        json={"name": "Ada", "role": "Engineer", "rawText": "Background"},
    )

    assert response.status_code == 500
    assert response.json()["detail"] == "Incomplete profile data received from AI"


@pytest.mark.asyncio
async def test_generate_retry_exhaustion_is_server_error(app, client, test_settings):
    use_generation_client(app, test_settings, RuntimeError("model overloaded"))

    response = await client.post(
        f"{API}/generate",
        json={"name": "Ada", "role": "Engineer", "rawText": "Background"},
    )

    assert response.status_code == 500
    assert "failed after 2 attempts" in response.json()["detail"]


# ============================================
# Share
# ============================================

@pytest.mark.asyncio
async def test_share_round_trip(client, generated_profile):
    body = generated_profile.model_dump(mode="json", by_alias=True)

    created = await client.post(f"{API}/share", json=body)

    assert created.status_code == 200
    share = created.json()
    assert share["success"] is True
    assert len(share["shareId"]) == 8
    assert share["shareUrl"] == f"https://folio.test/share/{share['shareId']}"
    assert "expiresAt" in share

    fetched = await client.get(f"{API}/share", params={"id": share["shareId"]})

    assert fetched.status_code == 200
    assert fetched.json()["success"] is True
    assert fetched.json()["profile"] == body


@pytest.mark.asyncio
async def test_share_lookup_requires_id(client):
    response = await client.get(f"{API}/share")
    assert response.status_code == 400
    assert response.json()["detail"] == "Share ID is required"


@pytest.mark.asyncio
async def test_share_lookup_unknown_id(client):
    response = await client.get(f"{API}/share", params={"id": "Nope1234"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Portfolio not found"


# ============================================
# Ingest
# ============================================

@pytest.mark.asyncio
async def test_ingest_github(app, client):
    use_github(app, github_handler)

    response = await client.post(f"{API}/ingest/github", json={"url": "https://github.com/alice"})

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "alice"
    assert data["totalStars"] == 7
    assert data["languages"]["Python"]["percent"] == 100


@pytest.mark.asyncio
async def test_ingest_github_requires_url(client):
    response = await client.post(f"{API}/ingest/github", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "GitHub URL is required"


@pytest.mark.asyncio
async def test_ingest_github_invalid_username(client):
    response = await client.post(f"{API}/ingest/github", json={"url": "https://github.com/"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid GitHub URL or username"


@pytest.mark.asyncio
async def test_ingest_github_unknown_user(app, client):
    use_github(app, github_handler)

    response = await client.post(f"{API}/ingest/github", json={"url": "ghost"})

    assert response.status_code == 404
    assert response.json()["detail"] == "GitHub user not found"


@pytest.mark.asyncio
async def test_ingest_linkedin_without_api_key(client):
    response = await client.post(
        f"{API}/ingest/linkedin",
        json={"url": "https://linkedin.com/in/ada", "text": "Ada Lovelace, Engineer"},
    )
    assert response.status_code == 503


@pytest.mark.asyncio
async def test_ingest_linkedin_rejects_blank_text(app, client, test_settings):
    use_generation_client(app, test_settings, '{"name": "Ada"}')

    response = await client.post(
        f"{API}/ingest/linkedin",
        json={"url": "https://linkedin.com/in/ada", "text": "   "},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_ingest_linkedin(app, client, test_settings):
    use_generation_client(app, test_settings, '{"name": "Ada Lovelace", "skills": ["Python"]}')

    response = await client.post(
        f"{API}/ingest/linkedin",
        json={"url": "https://linkedin.com/in/ada", "text": "Ada Lovelace, Engineer"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Ada Lovelace"
    assert data["rawSource"]["text"] == "Ada Lovelace, Engineer"


@pytest.mark.asyncio
async def test_ingest_unified_requires_a_source(client):
    response = await client.post(f"{API}/ingest/unified", json={"linkedinText": "text only"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_ingest_unified_from_urls(app, client, test_settings):
    use_github(app, github_handler)
    use_generation_client(
        app,
        test_settings,
        '{"name": "Alice L.", "currentRole": "Principal Engineer", "skills": ["Go"]}',
    )

    response = await client.post(
        f"{API}/ingest/unified",
        json={
            "githubUrl": "alice",
            "linkedinUrl": "https://linkedin.com/in/alice",
            "linkedinText": "Alice L. - Principal Engineer",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["hasGithub"] is True
    assert data["hasLinkedin"] is True
    assert data["primaryName"] == "Alice L."
    assert data["primaryTitle"] == "Principal Engineer"
    assert data["primaryLocation"] == "Berlin"
    assert data["normalizedSkills"] == ["Go", "Python", "React"]


@pytest.mark.asyncio
async def test_ingest_unified_omits_failed_source(app, client):
    use_github(app, lambda request: httpx.Response(503))

    # LinkedIn also fails: no AI credential is configured
    response = await client.post(
        f"{API}/ingest/unified",
        json={"githubUrl": "alice", "linkedinUrl": "https://linkedin.com/in/alice"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["hasGithub"] is False
    assert data["hasLinkedin"] is False
    assert data["normalizedSkills"] == []


@pytest.mark.asyncio
async def test_ingest_unified_uses_provided_data(app, client):
    def failing_handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("GitHub should not be called when data is provided")

    use_github(app, failing_handler)
    github_data = {"url": "https://github.com/alice", "username": "alice", "name": "Alice", "location": "Berlin"}

    response = await client.post(
        f"{API}/ingest/unified",
        json={"githubData": github_data, "githubUrl": "alice"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["primaryName"] == "Alice"
    assert data["github"]["username"] == "alice"


# ============================================
# Feedback
# ============================================

@pytest.mark.asyncio
async def test_feedback_requires_name_and_message(client):
    response = await client.post(f"{API}/feedback", json={"name": "Bob"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Name and message are required"


@pytest.mark.asyncio
async def test_feedback_submit_list_and_reply(app, client, test_settings):
    fake = use_generation_client(
        app,
        test_settings,
        '{"category": "Work Opportunity", "sentiment": "Positive"}',
        "Hi Bob, thanks for reaching out. Let's set up a call.",
    )

    created = await client.post(
        f"{API}/feedback",
        json={"name": "Bob", "email": "bob@example.com", "message": "Want to work together?"},
    )
    assert created.status_code == 200
    feedback = created.json()
    assert feedback["category"] == "Work Opportunity"
    assert feedback["sentiment"] == "Positive"
    assert feedback["isRead"] is False

    listed = await client.get(f"{API}/feedback")
    assert [f["id"] for f in listed.json()] == [feedback["id"]]

    replied = await client.post(f"{API}/feedback/{feedback['id']}/reply", json={"ownerName": "Ada"})
    assert replied.status_code == 200
    assert replied.json()["aiResponseDraft"] == "Hi Bob, thanks for reaching out. Let's set up a call."
    assert "You are Ada" in fake.calls[1]["prompt"]


@pytest.mark.asyncio
async def test_feedback_without_api_key_is_uncategorized(client):
    response = await client.post(f"{API}/feedback", json={"name": "Bob", "message": "Hi"})
    assert response.json()["category"] == "Uncategorized"


@pytest.mark.asyncio
async def test_feedback_reply_unknown_id(client):
    response = await client.post(f"{API}/feedback/missing/reply", json={})
    assert response.status_code == 404
    assert response.json()["detail"] == "Feedback not found"


# ============================================
# Chat
# ============================================

@pytest.mark.asyncio
async def test_chat_requires_profile(client):
    response = await client.post(f"{API}/chat", json={"message": "Hi"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_chat_without_api_key_is_unavailable(client, generated_profile):
    response = await client.post(
        f"{API}/chat",
        json={"message": "What does Ada do?", "profile": generated_profile.model_dump(mode="json", by_alias=True)},
    )
    assert response.status_code == 200
    assert response.json() == {"reply": UNAVAILABLE_REPLY}


@pytest.mark.asyncio
async def test_chat_reply(app, client, generated_profile):
    sent: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(orjson.loads(request.content))
        return httpx.Response(200, json={"choices": [{"message": {"content": " Ada builds engines. "}}]})

    settings = make_settings(openrouter_api_key="sk-test")
    chat_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_chat_service] = lambda: ChatAgentService(settings, client=chat_client)

    response = await client.post(
        f"{API}/chat",
        json={
            "message": "What does Ada do?",
            "profile": generated_profile.model_dump(mode="json", by_alias=True),
            "history": [{"role": "user", "text": "Hello"}, {"role": "model", "text": "Hi there"}],
        },
    )

    assert response.json() == {"reply": "Ada builds engines."}
    roles = [m["role"] for m in sent[0]["messages"]]
    assert roles == ["system", "user", "assistant", "user"]
    assert "Ada Lovelace" in sent[0]["messages"][0]["content"]


@pytest.mark.asyncio
async def test_ingest_unified_survives_non_json_github_body(app, client):
    use_github(app, lambda request: httpx.Response(200, text="<html>maintenance</html>"))
    linkedin_data = {"url": "https://linkedin.com/in/alice", "name": "Alice L.", "skills": ["Go"]}

    response = await client.post(
        f"{API}/ingest/unified",
        json={"githubUrl": "alice", "linkedinData": linkedin_data},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["hasGithub"] is False
    assert data["primaryName"] == "Alice L."
    assert data["normalizedSkills"] == ["Go"]


@pytest.mark.asyncio
async def test_ingest_unified_survives_unexpected_adapter_error(app, client):
    class BrokenAdapter:
        async def ingest(self, url_or_username):
            raise RuntimeError("unexpected payload")

    app.dependency_overrides[get_github_adapter] = lambda: BrokenAdapter()

    response = await client.post(
        f"{API}/ingest/unified",
        json={"githubUrl": "alice", "linkedinData": {"url": "https://linkedin.com/in/alice"}},
    )

    assert response.status_code == 200
    assert response.json()["hasGithub"] is False
    assert response.json()["hasLinkedin"] is True
