"""Profile-grounded chat assistant over an OpenAI-compatible API."""

from typing import Literal

import httpx
import structlog
from pydantic import BaseModel

from foliogen.config import Settings
from foliogen.schemas.profile import GeneratedProfile

logger = structlog.get_logger(__name__)

EMPTY_MESSAGE_REPLY = "I'd be happy to help! What would you like to know?"
UNAVAILABLE_REPLY = "I apologize, but the chat service is currently unavailable."
AUTH_ERROR_REPLY = (
    "I apologize, but the chat service is temporarily unavailable due to a configuration issue."
)
ERROR_REPLY = (
    "I apologize, but I encountered an error processing your message. "
    "Could you please try rephrasing your question?"
)


class ChatTurn(BaseModel):
    """One prior message in the conversation."""

    role: Literal["user", "model"]
    text: str


def build_system_instruction(profile: GeneratedProfile) -> str:
    """Describe the profile the assistant is allowed to talk about."""
    skills = "\n".join(f"- {skill}" for skill in profile.skills)
    projects = "\n".join(
        f"• {p.title}\n  Description: {p.description}\n  Technologies: {', '.join(p.technologies)}"
        for p in profile.projects
    )
    return f"""
You are an AI assistant representing {profile.name}.

Your knowledge base is STRICTLY LIMITED to:

Profile:
- Name: {profile.name}
- Role: {profile.title}
- Bio: {profile.bio}
- LinkedIn: {profile.linkedin_url or "N/A"}
- GitHub: {profile.github_url or "N/A"}

Skills:
{skills}

Projects:
{projects}

Instructions:
- Answer as if you are {profile.name}'s representative
- Be professional, helpful, and conversational
- Only reference information from the profile above
- If asked about something not in the profile, politely say you don't have that information
- Suggest the visitor contact {profile.name} directly for detailed discussions
- Keep responses concise (2-4 sentences typically)
- Be personable but maintain professional boundaries
"""


class ChatAgentService:
    """
    Chat assistant for a published portfolio.

    Never raises: failures turn into canned replies.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.settings = settings
        self._client = client

    @property
    def is_configured(self) -> bool:
        key = self.settings.openrouter_api_key
        return bool(key and key.get_secret_value().strip())

    def _build_messages(
        self,
        profile: GeneratedProfile,
        history: list[ChatTurn],
        message: str,
    ) -> list[dict[str, str]]:
        messages = [{"role": "system", "content": build_system_instruction(profile)}]
        for turn in history:
            messages.append({
                "role": "assistant" if turn.role == "model" else "user",
                "content": turn.text,
            })
        messages.append({"role": "user", "content": message})
        return messages

    async def reply(
        self,
        profile: GeneratedProfile,
        message: str,
        history: list[ChatTurn] | None = None,
    ) -> str:
        """Answer a visitor's message about the profile."""
        if not message or not message.strip():
            return EMPTY_MESSAGE_REPLY

        if not self.is_configured:
            logger.warning("Chat API key missing")
            return UNAVAILABLE_REPLY

        payload = {
            "model": self.settings.chat_model,
            "messages": self._build_messages(profile, history or [], message),
            "temperature": self.settings.chat_temperature,
            "max_tokens": self.settings.chat_max_tokens,
        }
        headers = {"Authorization": f"Bearer {self.settings.openrouter_api_key.get_secret_value()}"}
        url = f"{self.settings.openrouter_base_url}/chat/completions"

        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.settings.chat_timeout) as client:
                    response = await client.post(url, json=payload, headers=headers)

            if response.status_code in (401, 403):
                logger.error("Chat service rejected credentials", status=response.status_code)
                return AUTH_ERROR_REPLY
            response.raise_for_status()

            choices = response.json().get("choices") or []
            content = (choices[0].get("message") or {}).get("content") if choices else None
            reply = (content or "").strip()
            if not reply:
                logger.warning("Empty response from chat model")
                return ERROR_REPLY
            return reply

        except httpx.TimeoutException:
            logger.warning("Chat request timed out")
            return ERROR_REPLY
        except httpx.HTTPStatusError as e:
            logger.error("Chat HTTP error", status=e.response.status_code)
            return ERROR_REPLY
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.error("Chat failed", error=str(e))
            return ERROR_REPLY
