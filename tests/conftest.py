"""Shared test fixtures: the two reference strategies and small hand-checkable ones."""

from __future__ import annotations

import pytest

from wear_tco.config import Layer, Strategy, WearRates, intervention_at
from wear_tco.config.defaults import scenario_no_stage0, scenario_stage0_plate


@pytest.fixture
def scenario1() -> Strategy:
    """No stage 0 plate; stage 1..4 relined at 0 / 24k / 36k / 78k h, sidewall at 60k h."""
    return scenario_no_stage0()


@pytest.fixture
def scenario2() -> Strategy:
    """25 mm stage 0 plate at commissioning; 20 mm plates at 36k and 84k h."""
    return scenario_stage0_plate()


@pytest.fixture
def bare_floor() -> Strategy:
    """Nothing installed: only the floor wears.

    25 mm floor, 0.45 mm/1000 h, minimum 14 mm
    → 14.2 mm at 24 000 h, held at 14 mm from 25 000 h on.
    """
    return Strategy(
        id="bare",
        name="Bare floor",
        total_hours=30_000,
        interventions=[intervention_at(0)],
    )


@pytest.fixture
def two_plates() -> Strategy:
    """Thin 5 mm stage 2 plate over a 25 mm stage 1 plate.

    stage2 at 0.26 mm/1000 h is gone after 20 steps, then stage1 takes over.
    """
    return Strategy(
        id="two-plates",
        name="Two plates",
        total_hours=30_000,
        interventions=[intervention_at(0, {Layer.STAGE1: (25, 2), Layer.STAGE2: (5, 0)})],
        wear_rates=WearRates(),
    )
