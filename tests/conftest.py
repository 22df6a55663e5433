from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from primor_pos.state import AppState, PosController


class StepClock:
    """Clock that advances only when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def state(clock: StepClock) -> AppState:
    return AppState.seeded(clock=clock)


@pytest.fixture
def controller(state: AppState) -> PosController:
    return PosController(state)
