"""LinkedIn profile ingestion from pasted profile text."""

import structlog

from foliogen.exceptions import ConfigurationError, ValidationError
from foliogen.schemas.linkedin import LinkedInProfile
from foliogen.services.ai.generation import ProfileGenerationService

logger = structlog.get_logger(__name__)


class LinkedInIngestionAdapter:
    """
    Turn LinkedIn profile text into a normalized profile.

    LinkedIn offers no public profile API, so extraction is delegated to the
    generation service's parsing operation.
    """

    def __init__(self, generation_service: ProfileGenerationService):
        self.generation_service = generation_service

    async def ingest(self, url: str, text: str | None = None) -> LinkedInProfile:
        """
        Parse a LinkedIn profile.

        Args:
            url: LinkedIn profile URL
            text: Copy-pasted profile text; ``None`` means none was supplied

        Raises:
            ValidationError: the URL is empty, or ``text`` was given but is blank
            ConfigurationError: no AI credential is configured
        """
        if not url or not url.strip():
            raise ValidationError("LinkedIn URL is required")
        if text is not None and not text.strip():
            raise ValidationError("LinkedIn text content is required")
        if not self.generation_service.is_configured:
            raise ConfigurationError()

        profile = await self.generation_service.parse_linkedin_profile(url.strip(), text)
        logger.info(
            "LinkedIn profile ingested",
            url=profile.url,
            has_name=profile.name is not None,
            skills=len(profile.skills),
            education=len(profile.education),
        )
        return profile
