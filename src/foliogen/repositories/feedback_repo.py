"""Feedback inbox storage."""

from datetime import datetime, timezone
from uuid import uuid4

import structlog

from foliogen.schemas.feedback import Feedback, FeedbackAnalysis

logger = structlog.get_logger(__name__)


class InMemoryFeedbackRepository:
    """Process-local feedback inbox. Records are never deleted."""

    def __init__(self):
        self._items: dict[str, Feedback] = {}

    def create(
        self,
        name: str,
        message: str,
        analysis: FeedbackAnalysis,
        email: str | None = None,
    ) -> Feedback:
        """Store a new feedback message."""
        feedback = Feedback(
            id=str(uuid4()),
            name=name,
            email=email,
            message=message,
            category=analysis.category,
            sentiment=analysis.sentiment,
            timestamp=datetime.now(timezone.utc),
        )
        self._items[feedback.id] = feedback
        logger.info(
            "Feedback received",
            feedback_id=feedback.id,
            category=feedback.category.value,
            sentiment=feedback.sentiment.value,
        )
        return feedback

    def get(self, feedback_id: str) -> Feedback | None:
        """Get feedback by ID."""
        return self._items.get(feedback_id)

    def list_feedback(self) -> list[Feedback]:
        """List feedback, newest first."""
        return sorted(self._items.values(), key=lambda f: f.timestamp, reverse=True)

    def attach_reply(self, feedback_id: str, draft: str) -> Feedback | None:
        """Attach a drafted reply; returns None for unknown IDs."""
        feedback = self._items.get(feedback_id)
        if feedback is None:
            return None
        updated = feedback.model_copy(update={"ai_response_draft": draft})
        self._items[feedback_id] = updated
        return updated
