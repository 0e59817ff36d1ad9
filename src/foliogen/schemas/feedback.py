"""Feedback inbox schemas."""

import enum
from datetime import datetime

from pydantic import EmailStr

from foliogen.schemas.common import CamelModel


class FeedbackCategory(str, enum.Enum):
    """Categories the classifier may assign."""

    WORK_OPPORTUNITY = "Work Opportunity"
    PRAISE = "Praise"
    QUESTION = "Question"
    BUG_REPORT = "Bug Report"
    OTHER = "Other"
    UNCATEGORIZED = "Uncategorized"


class Sentiment(str, enum.Enum):
    """Sentiment of a message."""

    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


class FeedbackAnalysis(CamelModel):
    """Classifier output for one message."""

    category: FeedbackCategory = FeedbackCategory.OTHER
    sentiment: Sentiment = Sentiment.NEUTRAL


class FeedbackCreate(CamelModel):
    """Visitor submission from the feedback form."""

    name: str | None = None
    email: EmailStr | None = None
    message: str | None = None


class Feedback(CamelModel):
    """Stored feedback message."""

    id: str
    name: str
    email: str | None = None
    message: str
    category: FeedbackCategory
    sentiment: Sentiment
    timestamp: datetime
    is_read: bool = False
    ai_response_draft: str | None = None


class ReplyDraftRequest(CamelModel):
    """Request to draft a reply on behalf of the portfolio owner."""

    owner_name: str | None = None
