"""Tests for minimum-interval pacing between external calls."""

from unittest.mock import AsyncMock

import pytest

from polai.analysis.pacing import PacingPolicy


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class TestPacingPolicy:
    async def test_first_call_does_not_wait(self, clock: FakeClock) -> None:
        sleep = AsyncMock()
        pacing = PacingPolicy(2.0, clock=clock, sleep=sleep)

        await pacing.wait()

        sleep.assert_not_awaited()

    async def test_back_to_back_calls_wait_full_interval(self, clock: FakeClock) -> None:
        sleep = AsyncMock()
        pacing = PacingPolicy(2.0, clock=clock, sleep=sleep)

        await pacing.wait()
        await pacing.wait()

        sleep.assert_awaited_once_with(2.0)

    async def test_waits_only_for_remaining_interval(self, clock: FakeClock) -> None:
        sleep = AsyncMock()
        pacing = PacingPolicy(2.0, clock=clock, sleep=sleep)

        await pacing.wait()
        clock.now += 1.5
        await pacing.wait()

        sleep.assert_awaited_once_with(pytest.approx(0.5))

    async def test_no_wait_after_interval_elapsed(self, clock: FakeClock) -> None:
        sleep = AsyncMock()
        pacing = PacingPolicy(2.0, clock=clock, sleep=sleep)

        await pacing.wait()
        clock.now += 5.0
        await pacing.wait()

        sleep.assert_not_awaited()

    async def test_zero_interval_never_waits(self, clock: FakeClock) -> None:
        sleep = AsyncMock()
        pacing = PacingPolicy(0.0, clock=clock, sleep=sleep)

        for _ in range(3):
            await pacing.wait()

        sleep.assert_not_awaited()
