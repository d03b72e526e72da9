"""Unit tests for bounded random-retry allocation."""

import pytest

from app.application.services.allocator import (
    AllocationExhaustedError,
    BoundedRetryAllocator,
    CandidateCollision,
)
from app.shared.utils.generators import generate_tenant_code, generate_tenant_user_id
from tests.fakes import scripted


def _taken(*codes: str):
    taken = set(codes)
    attempts: list[str] = []

    async def attempt(candidate: str) -> str:
        attempts.append(candidate)
        if candidate in taken:
            raise CandidateCollision(candidate)
        taken.add(candidate)
        return candidate

    return attempt, attempts


async def test_collision_then_success() -> None:
    draws = iter(["00ab", "3f2c"])
    allocator = BoundedRetryAllocator(lambda: next(draws))
    attempt, attempts = _taken("00ab")
    assert await allocator.allocate(attempt) == "3f2c"
    assert attempts == ["00ab", "3f2c"]


async def test_exhaustion_after_exact_bound() -> None:
    allocator = BoundedRetryAllocator(lambda: "00ab", max_attempts=100)
    attempt, attempts = _taken("00ab")
    with pytest.raises(AllocationExhaustedError) as exc_info:
        await allocator.allocate(attempt)
    assert exc_info.value.attempts == 100
    assert len(attempts) == 100


async def test_other_failures_abort_immediately() -> None:
    calls = 0

    async def attempt(candidate: str) -> str:
        nonlocal calls
        calls += 1
        raise RuntimeError("disk full")

    allocator = BoundedRetryAllocator(lambda: "abcd")
    with pytest.raises(RuntimeError):
        await allocator.allocate(attempt)
    assert calls == 1


def test_bound_must_be_positive() -> None:
    with pytest.raises(ValueError):
        BoundedRetryAllocator(lambda: "x", max_attempts=0)


def test_generators_format() -> None:
    assert generate_tenant_code(scripted(0xAB)) == "00ab"
    assert generate_tenant_code(scripted(0xFFFF)) == "ffff"
    assert generate_tenant_user_id("3f2c", scripted(0x1A)) == "3f2c:0000001a"
