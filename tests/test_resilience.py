"""Tests for the timeout and retry wrappers."""

import asyncio
from unittest.mock import AsyncMock, call

import pytest

from conftest import make_settings
from foliogen.exceptions import (
    CallTimeoutError,
    ContentIncompletenessError,
    RetryExhaustedError,
)
from foliogen.services.ai.resilience import (
    CallPolicy,
    TimeoutTier,
    execute,
    with_retry,
    with_timeout,
)


@pytest.mark.asyncio
async def test_retry_backoff_delays_then_aggregated_error():
    """Three failing attempts wait 1s then 2s, then raise one aggregated error."""
    error = RuntimeError("model unavailable")
    operation = AsyncMock(side_effect=error)
    sleep = AsyncMock()

    with pytest.raises(RetryExhaustedError) as exc_info:
        await with_retry(
            operation,
            "Profile generation",
            max_attempts=3,
            initial_delay=1.0,
            backoff_multiplier=2,
            sleep=sleep,
        )

    assert operation.await_count == 3
    assert sleep.await_args_list == [call(1.0), call(2.0)]
    exc = exc_info.value
    assert exc.operation == "Profile generation"
    assert exc.attempts == 3
    assert exc.last_error is error
    assert exc.__cause__ is error
    assert "Profile generation failed after 3 attempts" in str(exc)


@pytest.mark.asyncio
async def test_retry_returns_first_success():
    operation = AsyncMock(side_effect=[ValueError("flaky"), "ok"])
    sleep = AsyncMock()

    result = await with_retry(operation, "Flaky call", initial_delay=0.5, sleep=sleep)

    assert result == "ok"
    assert operation.await_count == 2
    sleep.assert_awaited_once_with(0.5)


@pytest.mark.asyncio
async def test_non_retryable_error_is_raised_immediately():
    operation = AsyncMock(side_effect=ContentIncompletenessError("No valid projects generated"))
    sleep = AsyncMock()

    with pytest.raises(ContentIncompletenessError):
        await with_retry(operation, "Profile generation", sleep=sleep)

    assert operation.await_count == 1
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_timeout_abandons_operation_without_cancelling():
    release = asyncio.Event()
    finished = asyncio.Event()

    async def slow_call():
        await release.wait()
        finished.set()
        return "late result"

    with pytest.raises(CallTimeoutError) as exc_info:
        await with_timeout(slow_call, 0.01, "Fast keyword analysis")

    assert "Fast keyword analysis timed out after 10ms" in str(exc_info.value)
    assert exc_info.value.timeout == 0.01

    # The abandoned call keeps running and can still complete
    release.set()
    await asyncio.wait_for(finished.wait(), timeout=1)
    assert finished.is_set()


@pytest.mark.asyncio
async def test_timeout_returns_result_when_fast_enough():
    async def quick_call():
        return {"keywords": ["Rust"]}

    assert await with_timeout(quick_call, 1, "Quick") == {"keywords": ["Rust"]}


@pytest.mark.asyncio
async def test_execute_time_boxes_each_attempt():
    release = asyncio.Event()
    attempts = 0

    async def hanging_call():
        nonlocal attempts
        attempts += 1
        await release.wait()

    policy = CallPolicy(timeout=0.01, max_attempts=2, initial_delay=0)
    sleep = AsyncMock()

    with pytest.raises(RetryExhaustedError) as exc_info:
        await execute(hanging_call, "LinkedIn profile parsing", policy, sleep=sleep)

    assert attempts == 2
    assert isinstance(exc_info.value.last_error, CallTimeoutError)
    release.set()
    await asyncio.sleep(0)


def test_policy_for_tier_uses_settings():
    settings = make_settings(
        ai_timeout_fast=5,
        ai_timeout_extended=90,
        ai_retry_max_attempts=4,
        ai_retry_initial_delay=0.25,
        ai_retry_backoff_multiplier=3,
    )

    fast = CallPolicy.for_tier(settings, TimeoutTier.FAST)
    extended = CallPolicy.for_tier(settings, TimeoutTier.EXTENDED)

    assert fast.timeout == 5
    assert extended.timeout == 90
    assert fast.max_attempts == 4
    assert fast.initial_delay == 0.25
    assert fast.backoff_multiplier == 3
