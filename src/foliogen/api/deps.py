"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from foliogen.config import Settings, get_settings
from foliogen.repositories.feedback_repo import InMemoryFeedbackRepository
from foliogen.repositories.share_repo import ShareStoreProtocol
from foliogen.services.ai.chat import ChatAgentService
from foliogen.services.ai.generation import ProfileGenerationService
from foliogen.services.ingestion.github import GithubIngestionAdapter
from foliogen.services.ingestion.linkedin import LinkedInIngestionAdapter

AppSettings = Annotated[Settings, Depends(get_settings)]


def get_generation_service(settings: AppSettings) -> ProfileGenerationService:
    """Get the profile generation service."""
    return ProfileGenerationService(settings)


def get_chat_service(settings: AppSettings) -> ChatAgentService:
    """Get the chat assistant service."""
    return ChatAgentService(settings)


def get_github_adapter(settings: AppSettings) -> GithubIngestionAdapter:
    """Get the GitHub ingestion adapter."""
    return GithubIngestionAdapter(
        api_url=settings.github_api_url,
        token=settings.github_token.get_secret_value() if settings.github_token else None,
        timeout=settings.github_timeout,
    )


def get_linkedin_adapter(
    generation_service: Annotated[ProfileGenerationService, Depends(get_generation_service)],
) -> LinkedInIngestionAdapter:
    """Get the LinkedIn ingestion adapter."""
    return LinkedInIngestionAdapter(generation_service)


def get_share_store(request: Request) -> ShareStoreProtocol:
    """Get the process-wide share store."""
    return request.app.state.share_store


def get_feedback_repo(request: Request) -> InMemoryFeedbackRepository:
    """Get the process-wide feedback inbox."""
    return request.app.state.feedback_repo


# Type aliases for cleaner dependency injection
GenerationService = Annotated[ProfileGenerationService, Depends(get_generation_service)]
ChatService = Annotated[ChatAgentService, Depends(get_chat_service)]
GithubAdapter = Annotated[GithubIngestionAdapter, Depends(get_github_adapter)]
LinkedInAdapter = Annotated[LinkedInIngestionAdapter, Depends(get_linkedin_adapter)]
ShareStore = Annotated[ShareStoreProtocol, Depends(get_share_store)]
FeedbackRepo = Annotated[InMemoryFeedbackRepository, Depends(get_feedback_repo)]
