"""Profile generation service backed by a generative model.

Every operation follows the same steps:

1. Validate required inputs
2. Degrade to a labeled fallback (or fail) when no API key is configured
3. Call the model under a timeout tier with retries
4. Parse the output through the JSON extraction boundary
5. Clean up the parsed payload (trim, drop malformed entries, cap lists)
"""

import asyncio
from datetime import datetime, timezone
from uuid import uuid4

import structlog

from foliogen.config import Settings
from foliogen.exceptions import (
    ConfigurationError,
    ContentIncompletenessError,
    RetryExhaustedError,
    ValidationError,
)
from foliogen.schemas.feedback import FeedbackAnalysis, FeedbackCategory, Sentiment
from foliogen.schemas.linkedin import EducationEntry, LinkedInPost, LinkedInProfile, RawSource
from foliogen.schemas.profile import GeneratedProfile, Project
from foliogen.services.ai import prompts
from foliogen.services.ai.client import GeminiClient, GenerativeClientProtocol
from foliogen.services.ai.json_extraction import parse_payload
from foliogen.services.ai.payloads import (
    FeedbackAnalysisPayload,
    KeywordsPayload,
    LinkedInPayload,
    ProfilePayload,
)
from foliogen.services.ai.resilience import CallPolicy, Sleeper, TimeoutTier, execute

logger = structlog.get_logger(__name__)

# Fallbacks used when the model is unavailable
FALLBACK_TAGS = ["Strategy", "Leadership", "Development"]
FALLBACK_ANALYSIS = FeedbackAnalysis(category=FeedbackCategory.UNCATEGORIZED, sentiment=Sentiment.NEUTRAL)
EMPTY_FEEDBACK_ANALYSIS = FeedbackAnalysis(category=FeedbackCategory.OTHER, sentiment=Sentiment.NEUTRAL)
EMPTY_MESSAGE_REPLY = "Thank you for reaching out. I appreciate your interest."
FALLBACK_REPLY = "Thank you for your message. I appreciate your feedback and will get back to you soon."

MAX_KEYWORD_LENGTH = 50
MAX_SKILLS = 15
MAX_PROJECTS = 6
MAX_TECHNOLOGIES = 12
MAX_EDUCATION = 10
MAX_POSTS = 10
RAW_SOURCE_LIMIT = 10000
SENTIMENT_VALUES = {s.value for s in Sentiment}


def _clean(value: str | None) -> str | None:
    """Trim a string, mapping blank values to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def _clean_list(values: list[str | None] | None, limit: int, max_length: int | None = None) -> list[str]:
    """Trim entries, drop blanks (and overlong ones), cap the list."""
    cleaned = []
    for value in values or []:
        value = _clean(value)
        if value is None:
            continue
        if max_length is not None and len(value) >= max_length:
            continue
        cleaned.append(value)
    return cleaned[:limit]


def _truncate_words(text: str, max_words: int) -> str:
    words = text.split(" ")
    if len(words) <= max_words:
        return text
    return " ".join(words[:max_words]).rstrip() + "..."


class ProfileGenerationService:
    """
    AI operations for portfolio generation.

    Usage:
        service = ProfileGenerationService(settings)
        tags = await service.analyze_input_fast("I build Rust services on Kubernetes")
        profile = await service.generate_full_profile("Ada", "Engineer", background)
    """

    def __init__(
        self,
        settings: Settings,
        client: GenerativeClientProtocol | None = None,
        sleep: Sleeper | None = None,
    ):
        self.settings = settings
        self._client = client
        self._sleep = sleep or asyncio.sleep

    @property
    def is_configured(self) -> bool:
        """Whether model calls can be made."""
        return self._client is not None or self.settings.has_ai_credentials

    def _get_client(self) -> GenerativeClientProtocol:
        if self._client is None:
            if not self.settings.has_ai_credentials:
                raise ConfigurationError()
            self._client = GeminiClient(api_key=self.settings.gemini_api_key.get_secret_value())
        return self._client

    def _policy(self, tier: TimeoutTier) -> CallPolicy:
        return CallPolicy.for_tier(self.settings, tier)

    async def _call(
        self,
        name: str,
        tier: TimeoutTier,
        prompt: str,
        model: str,
        system_instruction: str | None = None,
        response_schema: dict | None = None,
        json_output: bool = True,
    ) -> str:
        client = self._get_client()

        async def operation() -> str:
            return await client.generate(
                prompt,
                model=model,
                system_instruction=system_instruction,
                response_schema=response_schema,
                json_output=json_output,
            )

        return await execute(operation, name, self._policy(tier), sleep=self._sleep)

    async def analyze_input_fast(self, text: str) -> list[str]:
        """
        Extract up to ten technical keywords from free text.

        Never raises: model failures degrade to FALLBACK_TAGS.
        """
        if not text or not text.strip():
            logger.warning("Empty text provided for keyword analysis")
            return []

        if not self.is_configured:
            logger.warning("API key missing, returning fallback tags")
            return list(FALLBACK_TAGS)

        try:
            raw = await self._call(
                "Fast keyword analysis",
                TimeoutTier.FAST,
                prompts.keyword_prompt(text),
                model=self.settings.gemini_model_fast,
            )
        except RetryExhaustedError as e:
            logger.error("Fast analysis failed, returning fallback tags", error=str(e))
            return list(FALLBACK_TAGS)

        payload = parse_payload(raw, KeywordsPayload, KeywordsPayload())
        return _clean_list(payload.keywords, prompts.MAX_KEYWORDS, max_length=MAX_KEYWORD_LENGTH)

    async def analyze_feedback(self, text: str) -> FeedbackAnalysis:
        """Classify a feedback message into a category and sentiment."""
        if not text or not text.strip():
            return EMPTY_FEEDBACK_ANALYSIS.model_copy()

        if not self.is_configured:
            return FALLBACK_ANALYSIS.model_copy()

        try:
            raw = await self._call(
                "Feedback analysis",
                TimeoutTier.FAST,
                prompts.feedback_prompt(text),
                model=self.settings.gemini_model_fast,
            )
        except RetryExhaustedError as e:
            logger.error("Feedback analysis failed", error=str(e))
            return FALLBACK_ANALYSIS.model_copy()

        payload = parse_payload(raw, FeedbackAnalysisPayload, FeedbackAnalysisPayload())

        category_value = _clean(payload.category)
        if category_value in prompts.CLASSIFIABLE_CATEGORIES:
            category = FeedbackCategory(category_value)
        else:
            category = FeedbackCategory.OTHER

        sentiment_value = _clean(payload.sentiment)
        sentiment = Sentiment(sentiment_value) if sentiment_value in SENTIMENT_VALUES else Sentiment.NEUTRAL

        return FeedbackAnalysis(category=category, sentiment=sentiment)

    async def draft_reply(
        self,
        message: str,
        owner_name: str,
        sender_name: str | None = None,
        sender_email: str | None = None,
        category: str | None = None,
        sentiment: str | None = None,
    ) -> str:
        """Draft a short, professional reply to a feedback message."""
        if not message or not message.strip():
            return EMPTY_MESSAGE_REPLY

        if not self.is_configured:
            return FALLBACK_REPLY

        try:
            raw = await self._call(
                "Reply draft generation",
                TimeoutTier.STANDARD,
                prompts.reply_prompt(owner_name, sender_name, sender_email, category, sentiment, message),
                model=self.settings.gemini_model,
                json_output=False,
            )
        except RetryExhaustedError as e:
            logger.error("Reply drafting failed", error=str(e))
            return FALLBACK_REPLY

        reply = raw.strip()
        if not reply:
            return FALLBACK_REPLY
        # Allow some slack over the prompted word count before cutting
        return _truncate_words(reply, prompts.MAX_REPLY_WORDS * 2)

    async def generate_full_profile(
        self,
        name: str,
        role: str,
        raw_text: str,
        linkedin_url: str | None = None,
        github_url: str | None = None,
    ) -> GeneratedProfile:
        """
        Generate a complete portfolio profile.

        Raises:
            ValidationError: name, role or background text is empty
            ConfigurationError: no API key is configured
            RetryExhaustedError: every model call failed
            ContentIncompletenessError: the model answered without a bio,
                skills, or at least one usable project
        """
        if not (name or "").strip() or not (role or "").strip() or not (raw_text or "").strip():
            raise ValidationError("Name, role, and background text are required")

        if not self.is_configured:
            raise ConfigurationError()

        raw = await self._call(
            "Profile generation",
            TimeoutTier.EXTENDED,
            prompts.profile_prompt(name, role, raw_text, linkedin_url, github_url),
            model=self.settings.gemini_model,
            system_instruction=prompts.PROFILE_SYSTEM_INSTRUCTION,
            response_schema=prompts.PROFILE_RESPONSE_SCHEMA,
        )
        payload = parse_payload(raw, ProfilePayload, ProfilePayload())

        bio = _clean(payload.bio)
        skills = _clean_list(payload.skills, MAX_SKILLS)

        projects = []
        for item in payload.projects or []:
            title = _clean(item.title)
            description = _clean(item.description)
            if not title or not description:
                continue
            projects.append(
                Project(
                    title=title,
                    description=description,
                    technologies=_clean_list(item.technologies, MAX_TECHNOLOGIES),
                    link=_clean(item.link),
                )
            )
        projects = projects[:MAX_PROJECTS]

        if not bio or not skills:
            raise ContentIncompletenessError("Incomplete profile data received from AI")
        if not projects:
            raise ContentIncompletenessError("No valid projects generated")

        logger.info("Profile generated", skills=len(skills), projects=len(projects))

        return GeneratedProfile(
            id=str(uuid4()),
            name=name.strip(),
            title=role.strip(),
            bio=bio,
            skills=skills,
            projects=projects,
            generated_at=datetime.now(timezone.utc),
            linkedin_url=_clean(linkedin_url),
            github_url=_clean(github_url),
        )

    async def parse_linkedin_profile(self, url: str, text: str | None = None) -> LinkedInProfile:
        """
        Extract a structured LinkedIn profile from pasted profile text.

        Fields the text does not state are left empty.

        Raises:
            ValidationError: ``text`` was given but is blank
            ConfigurationError: no API key is configured
            RetryExhaustedError: every model call failed
        """
        if text is not None and not text.strip():
            raise ValidationError("LinkedIn text content is required")

        if not self.is_configured:
            raise ConfigurationError()

        raw = await self._call(
            "LinkedIn profile parsing",
            TimeoutTier.EXTENDED,
            prompts.linkedin_prompt(url, text),
            model=self.settings.gemini_model,
            system_instruction=prompts.LINKEDIN_SYSTEM_INSTRUCTION,
            response_schema=prompts.LINKEDIN_RESPONSE_SCHEMA,
        )
        payload = parse_payload(raw, LinkedInPayload, LinkedInPayload())

        education = [
            EducationEntry(
                institution=_clean(entry.institution),
                degree=_clean(entry.degree),
                field_of_study=_clean(entry.field_of_study),
                start_year=entry.start_year,
                end_year=entry.end_year,
            )
            for entry in payload.education or []
            if _clean(entry.institution)
        ]
        posts = [
            LinkedInPost(
                content_snippet=_clean(post.content_snippet),
                title=_clean(post.title),
                url=_clean(post.url),
                created_at=_clean(post.created_at),
            )
            for post in payload.posts or []
            if _clean(post.content_snippet)
        ]

        return LinkedInProfile(
            url=url,
            name=_clean(payload.name),
            headline=_clean(payload.headline),
            current_role=_clean(payload.current_role),
            current_company=_clean(payload.current_company),
            location=_clean(payload.location),
            education=education[:MAX_EDUCATION],
            skills=_clean_list(payload.skills, MAX_SKILLS * 2),
            posts=posts[:MAX_POSTS],
            raw_source=RawSource(text=text[:RAW_SOURCE_LIMIT] if text else ""),
        )
