"""
Ordered first-success traversal over candidates.

Each candidate is attempted at most once, strictly in order; the first
success short-circuits the traversal. Failures are collected instead of
raised so callers decide how to surface them.

Dependencies: None
System role: Candidate fallback for staged PDF retrieval
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

C = TypeVar("C")
T = TypeVar("T")


@dataclass(frozen=True)
class AttemptError(Generic[C]):
    """A failed attempt and the error it raised."""

    candidate: C
    error: Exception


@dataclass
class FallbackOutcome(Generic[C, T]):
    """Result of a traversal: the winning candidate and value, plus every failure before it."""

    value: T | None = None
    candidate: C | None = None
    errors: list[AttemptError[C]] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.candidate is not None

    @property
    def last_error(self) -> Exception | None:
        return self.errors[-1].error if self.errors else None


async def first_success(
    candidates: Sequence[C],
    attempt: Callable[[C], Awaitable[T]],
    on_failure: Callable[[C, Exception], None] | None = None,
) -> FallbackOutcome[C, T]:
    """
    Attempt candidates in order until one succeeds.

    Args:
        candidates: Ordered candidates
        attempt: Coroutine function producing a value or raising
        on_failure: Optional hook called for each failed candidate

    Returns:
        FallbackOutcome: Winning value (if any) and recorded failures
    """
    outcome: FallbackOutcome[C, T] = FallbackOutcome()
    for candidate in candidates:
        try:
            value = await attempt(candidate)
        except Exception as exc:
            outcome.errors.append(AttemptError(candidate=candidate, error=exc))
            if on_failure is not None:
                on_failure(candidate, exc)
            continue
        outcome.value = value
        outcome.candidate = candidate
        return outcome
    return outcome
