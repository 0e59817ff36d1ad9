"""Pydantic schemas for request/response validation."""

from foliogen.schemas.common import CamelModel
from foliogen.schemas.feedback import (
    Feedback,
    FeedbackAnalysis,
    FeedbackCategory,
    FeedbackCreate,
    Sentiment,
)
from foliogen.schemas.github import GithubProfile, GithubRepoSummary, LanguageStat
from foliogen.schemas.linkedin import EducationEntry, LinkedInPost, LinkedInProfile, RawSource
from foliogen.schemas.profile import GeneratedProfile, Project
from foliogen.schemas.share import SharedProfileResponse, ShareResponse
from foliogen.schemas.unified import UnifiedProfile

__all__ = [
    "CamelModel",
    "Feedback",
    "FeedbackAnalysis",
    "FeedbackCategory",
    "FeedbackCreate",
    "Sentiment",
    "GithubProfile",
    "GithubRepoSummary",
    "LanguageStat",
    "EducationEntry",
    "LinkedInPost",
    "LinkedInProfile",
    "RawSource",
    "GeneratedProfile",
    "Project",
    "SharedProfileResponse",
    "ShareResponse",
    "UnifiedProfile",
]
