"""Data access repositories."""

from foliogen.repositories.feedback_repo import InMemoryFeedbackRepository
from foliogen.repositories.share_repo import (
    InMemoryShareStore,
    ShareRecord,
    ShareStoreProtocol,
    generate_share_id,
)

__all__ = [
    "InMemoryFeedbackRepository",
    "InMemoryShareStore",
    "ShareRecord",
    "ShareStoreProtocol",
    "generate_share_id",
]
