"""Tests for engine/validator.py: clamping, ordering repair, violation records."""

from __future__ import annotations

import math

import pytest

from wear_tco.config import (
    CostStructure,
    Layer,
    PlateCost,
    Strategy,
    ValidationLimits,
    WearRates,
    intervention_at,
)
from wear_tco.engine.validator import summarize_violations, validate_strategy
from wear_tco.interchange import load_strategies_json


def _fields(violations):
    return [v.field for v in violations]


# ═══════════════════════════════════════════════════════════════════════════
# Clean input
# ═══════════════════════════════════════════════════════════════════════════

class TestCleanInput:

    def test_defaults_are_valid(self):
        validated, violations = validate_strategy(Strategy())
        assert violations == []
        assert validated == Strategy(id=validated.id)

    def test_scenario2_is_valid(self, scenario2: Strategy):
        validated, violations = validate_strategy(scenario2)
        assert violations == []
        assert validated == scenario2

    def test_scenario1_zero_stage0_rate_is_clamped(self, scenario1: Strategy):
        validated, violations = validate_strategy(scenario1)
        assert _fields(violations) == ["wear_rates.stage0"]
        assert validated.wear_rates.stage0 == 0.12

    def test_idempotent(self, scenario1: Strategy):
        once, _ = validate_strategy(scenario1)
        twice, violations = validate_strategy(once)
        assert violations == []
        assert twice == once


# ═══════════════════════════════════════════════════════════════════════════
# Scalar clamps
# ═══════════════════════════════════════════════════════════════════════════

class TestClamps:

    def test_wear_rate_above_max(self):
        s = Strategy(wear_rates=WearRates(floor=0.9))
        validated, violations = validate_strategy(s)
        assert validated.wear_rates.floor == 0.45
        v = violations[0]
        assert v.field == "wear_rates.floor"
        assert v.value == 0.9
        assert v.valid_range == (0.12, 0.45)
        assert "0.9" in v.message

    def test_thickness_above_max(self):
        s = Strategy(interventions=[intervention_at(0, {Layer.STAGE3: (150, 0)})])
        validated, violations = validate_strategy(s)
        assert validated.interventions[0].stage(Layer.STAGE3).thickness == 100
        assert _fields(violations) == ["interventions[0].stage3.thickness"]

    def test_stage0_minimum_may_be_negative(self):
        s = Strategy(interventions=[intervention_at(0, {Layer.STAGE0: (25, -2)})])
        _, violations = validate_strategy(s)
        assert violations == []

    def test_stage0_minimum_lower_bound(self):
        s = Strategy(interventions=[intervention_at(0, {Layer.STAGE0: (25, -10)})])
        validated, violations = validate_strategy(s)
        assert validated.interventions[0].stage(Layer.STAGE0).min_thickness == -5
        assert violations[0].valid_range == (-5, 100)

    def test_other_stage_minimum_not_negative(self):
        s = Strategy(interventions=[intervention_at(0, {Layer.STAGE1: (25, -1)})])
        validated, violations = validate_strategy(s)
        assert validated.interventions[0].stage(Layer.STAGE1).min_thickness == 0
        assert _fields(violations) == ["interventions[0].stage1.min_thickness"]

    def test_negative_hours(self):
        s = Strategy(interventions=[intervention_at(-500)])
        validated, violations = validate_strategy(s)
        assert validated.interventions[0].operating_hours == 0
        assert _fields(violations) == ["interventions[0].operating_hours"]

    def test_horizon_above_max(self):
        validated, violations = validate_strategy(Strategy(total_hours=600_000))
        assert validated.total_hours == 500_000
        assert "total_hours" in _fields(violations)

    def test_negative_cost(self):
        validated, violations = validate_strategy(Strategy(costs=CostStructure(labor_rate=-50)))
        assert validated.costs.labor_rate == 0
        assert violations[0].field == "costs.labor_rate"
        assert violations[0].valid_range == (0, math.inf)

    def test_negative_plate_price(self):
        costs = CostStructure(plates=[PlateCost(layer=Layer.STAGE1, cost_20mm=-1, cost_25mm=660, quantity=30)])
        validated, violations = validate_strategy(Strategy(costs=costs))
        assert validated.costs.plate(Layer.STAGE1).cost_20mm == 0
        assert "costs.stage1.cost_20mm" in _fields(violations)

    def test_fractional_quantity_floored_silently(self):
        validated, violations = validate_strategy(Strategy(costs=CostStructure(sidewall_qty=2.7)))
        assert validated.costs.sidewall_qty == 2
        assert isinstance(validated.costs.sidewall_qty, int)
        assert violations == []

    def test_quantities_come_back_as_integers(self, scenario1: Strategy):
        validated, _ = validate_strategy(scenario1)
        costs = validated.costs
        assert all(isinstance(q, int) for q in (costs.sidewall_qty, costs.frontwall_qty, costs.rebuild_qty))
        assert all(isinstance(p.quantity, int) for p in costs.plates)

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_quantity(self, bad):
        validated, violations = validate_strategy(Strategy(costs=CostStructure(sidewall_qty=bad)))
        assert validated.costs.sidewall_qty == 0
        assert _fields(violations) == ["costs.sidewall_qty"]

    def test_non_finite_plate_quantity(self):
        costs = CostStructure(plates=[PlateCost(layer=Layer.STAGE2, cost_20mm=760, cost_25mm=880, quantity=math.nan)])
        validated, violations = validate_strategy(Strategy(costs=costs))
        assert validated.costs.plate(Layer.STAGE2).quantity == 0
        assert _fields(violations) == ["costs.stage2.quantity"]

    def test_non_finite_quantity_from_json(self):
        (strategy,) = load_strategies_json('[{"costs": {"sidewallQty": NaN, "frontwallQty": Infinity}}]')
        validated, violations = validate_strategy(strategy)
        assert (validated.costs.sidewall_qty, validated.costs.frontwall_qty) == (0, 0)
        assert _fields(violations) == ["costs.sidewall_qty", "costs.frontwall_qty"]

    def test_negative_quantity(self):
        validated, violations = validate_strategy(Strategy(costs=CostStructure(frontwall_qty=-1)))
        assert validated.costs.frontwall_qty == 0
        assert _fields(violations) == ["costs.frontwall_qty"]

    def test_custom_limits(self):
        limits = ValidationLimits(wear_rate_max=1.0)
        _, violations = validate_strategy(Strategy(wear_rates=WearRates(floor=0.9)), limits)
        assert violations == []

    def test_input_untouched(self):
        s = Strategy(wear_rates=WearRates(floor=0.9))
        validate_strategy(s)
        assert s.wear_rates.floor == 0.9


# ═══════════════════════════════════════════════════════════════════════════
# Intervention ordering
# ═══════════════════════════════════════════════════════════════════════════

class TestOrdering:

    def test_out_of_order_pushed_forward(self):
        s = Strategy(interventions=[intervention_at(0), intervention_at(24_000), intervention_at(20_000)])
        validated, violations = validate_strategy(s)
        assert [e.operating_hours for e in validated.interventions] == [0, 24_000, 25_000]
        assert len(violations) == 1
        assert violations[0].field == "interventions[2].operating_hours"
        assert violations[0].value == 20_000

    def test_repair_cascades(self):
        s = Strategy(interventions=[
            intervention_at(0), intervention_at(24_000), intervention_at(20_000), intervention_at(21_000),
        ])
        validated, violations = validate_strategy(s)
        assert [e.operating_hours for e in validated.interventions] == [0, 24_000, 25_000, 26_000]
        assert len(violations) == 2

    def test_equal_hours_are_out_of_order(self):
        s = Strategy(interventions=[intervention_at(6_000), intervention_at(6_000)])
        validated, _ = validate_strategy(s)
        assert validated.interventions[1].operating_hours == 7_000

    def test_not_resorted(self):
        """The list keeps its order; only hours move."""
        s = Strategy(interventions=[
            intervention_at(10_000, sidewall=True),
            intervention_at(5_000, frontwall=True),
        ])
        validated, _ = validate_strategy(s)
        assert validated.interventions[0].sidewall_replacement
        assert validated.interventions[1].frontwall_replacement

    def test_repair_past_hour_cap_is_flagged(self):
        s = Strategy(total_hours=500_000, interventions=[intervention_at(500_000), intervention_at(500_000)])
        validated, violations = validate_strategy(s)
        assert validated.interventions[1].operating_hours == 501_000
        assert _fields(violations) == ["interventions[1].operating_hours"] * 2
        assert violations[1].value == 501_000
        assert violations[1].valid_range == (0, 500_000)

    def test_repair_within_cap_has_single_violation(self):
        s = Strategy(interventions=[intervention_at(498_000), intervention_at(498_000)])
        validated, violations = validate_strategy(s)
        assert validated.interventions[1].operating_hours == 499_000
        assert len(violations) == 1

    def test_too_many_interventions_flagged_not_dropped(self):
        s = Strategy(interventions=[intervention_at(h * 1_000) for h in range(12)])
        validated, violations = validate_strategy(s)
        assert len(validated.interventions) == 12
        assert _fields(violations) == ["interventions"]


# ═══════════════════════════════════════════════════════════════════════════
# Cross-field advisories
# ═══════════════════════════════════════════════════════════════════════════

class TestCrossField:

    def test_horizon_not_beyond_period(self):
        validated, violations = validate_strategy(Strategy(total_hours=5_000))
        assert validated.total_hours == 5_000
        assert _fields(violations) == ["total_hours"]

    def test_floor_not_above_minimum(self):
        validated, violations = validate_strategy(Strategy(initial_floor_thickness=10))
        assert validated.initial_floor_thickness == 10
        assert _fields(violations) == ["initial_floor_thickness"]


class TestSummary:

    def test_summary(self):
        _, violations = validate_strategy(Strategy(total_hours=5_000, wear_rates=WearRates(floor=1)))
        summary = summarize_violations(violations)
        assert not summary.is_valid
        assert summary.error_count == 2
        assert summary.errors == violations

    def test_empty_summary(self):
        summary = summarize_violations([])
        assert summary.is_valid
        assert summary.error_count == 0


@pytest.mark.parametrize("rate", [0.0, 0.05, 0.11])
def test_low_wear_rates_raised_to_minimum(rate):
    validated, violations = validate_strategy(Strategy(wear_rates=WearRates(stage2=rate)))
    assert validated.wear_rates.stage2 == 0.12
    assert _fields(violations) == ["wear_rates.stage2"]
