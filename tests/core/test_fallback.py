"""
Test suite for ordered first-success traversal.

System role: Verification of candidate fallback semantics
"""

import pytest

from pdf_qa.core.fallback import first_success


class TestFirstSuccess:
    """Tests for first_success."""

    @pytest.mark.asyncio
    async def test_should_stop_at_first_success(self) -> None:
        """Test later candidates are never attempted."""
        attempted: list[str] = []

        async def attempt(candidate: str) -> str:
            attempted.append(candidate)
            if candidate != "b":
                raise RuntimeError(f"no {candidate}")
            return candidate.upper()

        outcome = await first_success(["a", "b", "c"], attempt)

        assert outcome.succeeded
        assert outcome.value == "B"
        assert outcome.candidate == "b"
        assert attempted == ["a", "b"]
        assert [e.candidate for e in outcome.errors] == ["a"]

    @pytest.mark.asyncio
    async def test_should_record_every_failure_in_order(self) -> None:
        failures: list[str] = []

        async def attempt(candidate: str) -> str:
            raise ValueError(candidate)

        outcome = await first_success(
            ["x", "y"],
            attempt,
            on_failure=lambda candidate, exc: failures.append(candidate),
        )

        assert not outcome.succeeded
        assert outcome.value is None
        assert failures == ["x", "y"]
        assert str(outcome.last_error) == "y"

    @pytest.mark.asyncio
    async def test_empty_candidates_should_have_no_errors(self) -> None:
        async def attempt(candidate: str) -> str:
            return candidate

        outcome = await first_success([], attempt)

        assert not outcome.succeeded
        assert outcome.last_error is None
