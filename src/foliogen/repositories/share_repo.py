"""Share record storage."""

import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

import structlog

from foliogen.schemas.profile import GeneratedProfile

logger = structlog.get_logger(__name__)

SHARE_ID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
SHARE_ID_LENGTH = 8


def generate_share_id(length: int = SHARE_ID_LENGTH) -> str:
    """Pick each character independently and uniformly from 62 symbols."""
    return "".join(secrets.choice(SHARE_ID_ALPHABET) for _ in range(length))


@dataclass
class ShareRecord:
    """Serialized profile snapshot behind a share id."""

    share_id: str
    snapshot: dict
    created_at: datetime
    expires_at: datetime


class ShareStoreProtocol(Protocol):
    """Protocol for share storage backends."""

    def create(self, profile: GeneratedProfile) -> ShareRecord:
        """Store a snapshot of a profile under a new id."""
        ...

    def get(self, share_id: str) -> GeneratedProfile | None:
        """Return the profile stored under an id, if any."""
        ...


class InMemoryShareStore:
    """
    Process-local share store.

    Records are lost on restart. ``expires_at`` is informational only:
    nothing evicts expired records. Ids are not checked for collisions,
    so a colliding create overwrites the earlier record.
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(days=30),
        id_factory: Callable[[], str] = generate_share_id,
    ):
        self.ttl = ttl
        self._id_factory = id_factory
        self._records: dict[str, ShareRecord] = {}

    def create(self, profile: GeneratedProfile) -> ShareRecord:
        now = datetime.now(timezone.utc)
        record = ShareRecord(
            share_id=self._id_factory(),
            snapshot=profile.model_dump(mode="json", by_alias=True),
            created_at=now,
            expires_at=now + self.ttl,
        )
        if record.share_id in self._records:
            logger.warning("Share id collision, overwriting record", share_id=record.share_id)
        self._records[record.share_id] = record
        logger.info("Profile shared", share_id=record.share_id, profile_id=profile.id)
        return record

    def get(self, share_id: str) -> GeneratedProfile | None:
        record = self._records.get(share_id)
        if record is None:
            return None
        return GeneratedProfile.model_validate(record.snapshot)

    def __len__(self) -> int:
        return len(self._records)
