"""Reference strategies — the two workbook scenarios.

Scenario 1 runs without a stage 0 plate; scenario 2 installs a 25 mm stage 0
plate at commissioning and lets it wear 2 mm into the substrate before the
first relining.  Both share the same cost structure and horizon.
"""

from __future__ import annotations

from wear_tco.config.costs import CostStructure
from wear_tco.config.intervention import MaintenanceIntervention, StageInstall
from wear_tco.config.layers import Layer
from wear_tco.config.strategy import Strategy
from wear_tco.config.wear import WearRates


def intervention_at(
    hours: float,
    installs: dict[Layer, tuple[float, float]] | None = None,
    *,
    sidewall: bool = False,
    frontwall: bool = False,
    rebuild: bool = False,
    floor_min: float = 14.0,
) -> MaintenanceIntervention:
    """Build an intervention from ``{layer: (thickness, min_thickness)}``."""
    stages = [
        StageInstall(layer=layer, thickness=thickness, min_thickness=minimum)
        for layer, (thickness, minimum) in (installs or {}).items()
    ]
    return MaintenanceIntervention(
        operating_hours=hours,
        floor_min_thickness=floor_min,
        stages=stages,
        sidewall_replacement=sidewall,
        frontwall_replacement=frontwall,
        rebuild=rebuild,
    )


def scenario_no_stage0() -> Strategy:
    return Strategy(
        id="scenario1",
        name="Scenario 1 - No Stage 0 WP (Initial Install)",
        operating_hours_per_period=6_000,
        total_hours=110_000,
        initial_floor_thickness=25,
        floor_min_thickness=14,
        interventions=[
            intervention_at(0, {Layer.STAGE1: (25, 2)}),
            intervention_at(24_000, {Layer.STAGE2: (25, 0)}),
            intervention_at(36_000, {Layer.STAGE3: (25, 0)}),
            intervention_at(60_000, sidewall=True),
            intervention_at(78_000, {Layer.STAGE4: (25, 0)}),
            intervention_at(90_000),
            intervention_at(96_000),
            intervention_at(102_000),
            intervention_at(108_000),
            intervention_at(114_000),
        ],
        wear_rates=WearRates(floor=0.45, stage0=0.0, stage1=0.36, stage2=0.36, stage3=0.18, stage4=0.12),
        costs=CostStructure(),
    )


def scenario_stage0_plate() -> Strategy:
    return Strategy(
        id="scenario2",
        name="Scenario 2 - 25 mm Wear Plate installed in Stage 0 (Initial Install)",
        operating_hours_per_period=6_000,
        total_hours=110_000,
        initial_floor_thickness=25,
        floor_min_thickness=14,
        interventions=[
            intervention_at(0, {Layer.STAGE0: (25, -2)}),
            intervention_at(24_000, {Layer.STAGE0: (25, 2), Layer.STAGE1: (25, 2)}),
            intervention_at(36_000, {Layer.STAGE2: (20, 0)}),
            intervention_at(60_000, {Layer.STAGE3: (25, 0)}, sidewall=True),
            intervention_at(78_000),
            intervention_at(84_000, {Layer.STAGE4: (20, 0)}),
            intervention_at(90_000),
            intervention_at(96_000),
            intervention_at(102_000),
            intervention_at(108_000),
        ],
        wear_rates=WearRates(floor=0.45, stage0=0.45, stage1=0.36, stage2=0.36, stage3=0.18, stage4=0.12),
        costs=CostStructure(),
    )


def default_strategies() -> list[Strategy]:
    """Fresh copies of the reference strategies, in display order."""
    return [scenario_no_stage0(), scenario_stage0_plate()]
