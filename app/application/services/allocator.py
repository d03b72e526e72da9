"""Bounded random-retry allocation of unique short identifiers.

The database uniqueness constraint is what guarantees uniqueness; this
module only decides what to do when a drawn candidate loses: draw again,
up to a fixed number of attempts. Any failure other than a collision
aborts immediately.
"""

from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from app.shared.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class CandidateCollision(Exception):
    """Raised by an attempt when the drawn candidate is already taken."""

    def __init__(self, candidate: str) -> None:
        self.candidate = candidate
        super().__init__(f"Candidate already taken: {candidate}")


class AllocationExhaustedError(Exception):
    """Raised when every attempt collided."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"No free candidate after {attempts} attempts")


class BoundedRetryAllocator(Generic[T]):
    """Draws candidates and retries on collision, at most max_attempts times.

    Args:
        draw: Returns a fresh random candidate (inject a deterministic one in tests).
        max_attempts: Upper bound on attempts; must be >= 1.
        label: Name used in log messages.
    """

    def __init__(
        self,
        draw: Callable[[], str],
        max_attempts: int = 100,
        label: str = "identifier",
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.draw = draw
        self.max_attempts = max_attempts
        self.label = label

    async def allocate(self, attempt: Callable[[str], Awaitable[T]]) -> T:
        """Run attempt(candidate) until it succeeds.

        Args:
            attempt: Persists the candidate; raises CandidateCollision when
                the candidate is taken. Any other exception propagates.

        Returns:
            Whatever the successful attempt returned.

        Raises:
            AllocationExhaustedError: All attempts collided.
        """
        for number in range(1, self.max_attempts + 1):
            candidate = self.draw()
            try:
                return await attempt(candidate)
            except CandidateCollision:
                logger.info(
                    "%s collision on %r (attempt %d/%d)",
                    self.label,
                    candidate,
                    number,
                    self.max_attempts,
                )
        logger.warning("%s allocation exhausted after %d attempts", self.label, self.max_attempts)
        raise AllocationExhaustedError(self.max_attempts)
