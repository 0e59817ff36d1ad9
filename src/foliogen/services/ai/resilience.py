"""Timeout and retry execution for outbound AI calls.

Each AI operation runs through :func:`execute` with a :class:`CallPolicy`:
every attempt is individually time-boxed by :func:`with_timeout`, and
:func:`with_retry` re-runs failed attempts with exponential backoff.

Usage:
    policy = CallPolicy.for_tier(settings, TimeoutTier.FAST)
    text = await execute(lambda: client.generate(prompt), "Keyword analysis", policy)
"""

import asyncio
import enum
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

import structlog

from foliogen.config import Settings
from foliogen.exceptions import CallTimeoutError, FolioGenError, RetryExhaustedError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Operation = Callable[[], Awaitable[T]]
Sleeper = Callable[[float], Awaitable[object]]

# Timed-out calls keep running; hold a reference until they settle.
_abandoned: set[asyncio.Task] = set()


class TimeoutTier(str, enum.Enum):
    """Time budget classes, by operation cost."""

    FAST = "fast"
    STANDARD = "standard"
    EXTENDED = "extended"


@dataclass(frozen=True)
class CallPolicy:
    """Retry and timeout settings for one kind of AI call."""

    timeout: float
    max_attempts: int = 3
    initial_delay: float = 1.0
    backoff_multiplier: float = 2.0

    @classmethod
    def for_tier(cls, settings: Settings, tier: TimeoutTier) -> "CallPolicy":
        """Build a policy from settings for the given timeout tier."""
        timeouts = {
            TimeoutTier.FAST: settings.ai_timeout_fast,
            TimeoutTier.STANDARD: settings.ai_timeout_standard,
            TimeoutTier.EXTENDED: settings.ai_timeout_extended,
        }
        return cls(
            timeout=timeouts[tier],
            max_attempts=settings.ai_retry_max_attempts,
            initial_delay=settings.ai_retry_initial_delay,
            backoff_multiplier=settings.ai_retry_backoff_multiplier,
        )


def _settle_abandoned(task: asyncio.Task) -> None:
    _abandoned.discard(task)
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Abandoned call finished with error", error=str(task.exception()))


async def with_timeout(operation: Operation[T], timeout: float, name: str) -> T:
    """
    Race an operation against a timer.

    If the timer wins, the operation is abandoned rather than cancelled:
    it may still complete in the background and its result is discarded.

    Raises:
        CallTimeoutError: if ``timeout`` seconds elapse first
    """
    task = asyncio.ensure_future(operation())
    done, _ = await asyncio.wait({task}, timeout=timeout)

    if task not in done:
        _abandoned.add(task)
        task.add_done_callback(_settle_abandoned)
        logger.warning("AI call timed out", operation=name, timeout_seconds=timeout)
        raise CallTimeoutError(name, timeout)

    return task.result()


async def with_retry(
    operation: Operation[T],
    name: str,
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    backoff_multiplier: float = 2.0,
    sleep: Sleeper = asyncio.sleep,
) -> T:
    """
    Run an operation, retrying failures with exponential backoff.

    After attempt ``n`` fails, waits ``initial_delay * backoff_multiplier ** (n - 1)``
    seconds. Errors flagged as not retryable are re-raised immediately.

    Raises:
        RetryExhaustedError: after the final attempt fails, chained to the last error
    """
    last_error: BaseException | None = None

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except FolioGenError as e:
            if not e.retryable:
                raise
            last_error = e
        except Exception as e:
            last_error = e

        if attempt == max_attempts:
            break

        delay = initial_delay * backoff_multiplier ** (attempt - 1)
        logger.warning(
            "AI call failed, retrying",
            operation=name,
            attempt=attempt,
            max_attempts=max_attempts,
            delay_seconds=delay,
            error=str(last_error),
        )
        await sleep(delay)

    logger.error(
        "AI call failed after all attempts",
        operation=name,
        attempts=max_attempts,
        error=str(last_error),
    )
    raise RetryExhaustedError(name, max_attempts, last_error) from last_error


async def execute(
    operation: Operation[T],
    name: str,
    policy: CallPolicy,
    sleep: Sleeper = asyncio.sleep,
) -> T:
    """Run an operation under a policy: each attempt time-boxed, failures retried."""

    async def attempt() -> T:
        return await with_timeout(operation, policy.timeout, name)

    return await with_retry(
        attempt,
        name,
        max_attempts=policy.max_attempts,
        initial_delay=policy.initial_delay,
        backoff_multiplier=policy.backoff_multiplier,
        sleep=sleep,
    )
