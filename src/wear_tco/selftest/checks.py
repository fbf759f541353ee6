"""Regression checks — recompute a strategy and compare with reference figures.

Checks per strategy:
  1. Wear rates             |actual − expected| ≤ 0.001
  2. Total cost, cost/hour  |actual − expected| / expected ≤ 1 %
  3. Wear progression       floor never grows, no negative thickness,
                            final floor within 1 mm
  4. Maintenance schedule   event count matches, hours strictly ascending

The checks run the engines on the strategy exactly as given.  Nothing here
corrects a mismatch; a failed check means the engine output drifted away
from figures that are known to be right (or the figures are wrong).
"""

from __future__ import annotations

from typing import Mapping, Sequence

from wear_tco.config.defaults import default_strategies
from wear_tco.config.layers import ALL_LAYERS
from wear_tco.config.strategy import Strategy
from wear_tco.engine.comparison import count_maintenance_events
from wear_tco.engine.cost import accumulate_cost
from wear_tco.engine.wear import simulate_wear
from wear_tco.models.results import (
    CheckResult,
    CostAccumulation,
    QuickValidationSummary,
    SuiteResult,
    WearAccumulation,
)
from wear_tco.selftest.reference import (
    DEFAULT_TOLERANCES,
    ReferenceFigures,
    ReferenceTolerances,
    WORKBOOK_REFERENCES,
)


def _relative_error(actual: float, expected: float) -> float:
    return abs(actual - expected) / abs(expected)


# ═══════════════════════════════════════════════════════════════════════════
# Individual check groups
# ═══════════════════════════════════════════════════════════════════════════

def check_wear_rates(
    strategy: Strategy,
    reference: ReferenceFigures,
    tolerances: ReferenceTolerances = DEFAULT_TOLERANCES,
) -> list[CheckResult]:
    tol = tolerances.wear_rate_absolute
    results = []
    for layer in ALL_LAYERS:
        expected = reference.wear_rates.for_layer(layer)
        actual = strategy.wear_rates.for_layer(layer)
        results.append(CheckResult(
            passed=abs(expected - actual) <= tol,
            message=f"{layer.value} wear rate validation",
            expected=expected,
            actual=actual,
            tolerance=tol,
        ))
    return results


def check_cost(
    strategy: Strategy,
    reference: ReferenceFigures,
    tolerances: ReferenceTolerances = DEFAULT_TOLERANCES,
    cost_series: list[CostAccumulation] | None = None,
) -> list[CheckResult]:
    series = cost_series if cost_series is not None else accumulate_cost(strategy)
    final = series[-1]
    tol = tolerances.cost_relative
    return [
        CheckResult(
            passed=_relative_error(final.cumulative_cost, reference.total_cost) <= tol,
            message="Total cost validation",
            expected=reference.total_cost,
            actual=final.cumulative_cost,
            tolerance=tol,
        ),
        CheckResult(
            passed=_relative_error(final.cost_per_hour, reference.cost_per_hour) <= tol,
            message="Cost per hour validation",
            expected=reference.cost_per_hour,
            actual=final.cost_per_hour,
            tolerance=tol,
        ),
    ]


def check_wear_progression(
    strategy: Strategy,
    reference: ReferenceFigures,
    tolerances: ReferenceTolerances = DEFAULT_TOLERANCES,
    wear_series: list[WearAccumulation] | None = None,
) -> list[CheckResult]:
    series = wear_series if wear_series is not None else simulate_wear(strategy)
    if not series:
        return [CheckResult(passed=False, message="Wear simulation produced no samples")]

    results: list[CheckResult] = []

    # Floor never thickens between samples.
    previous = series[0].floor
    growth: tuple[WearAccumulation, float] | None = None
    for sample in series[1:]:
        if sample.floor > previous:
            growth = (sample, previous)
            break
        previous = sample.floor
    if growth is None:
        results.append(CheckResult(passed=True, message="Floor thickness is non-increasing"))
    else:
        sample, before = growth
        results.append(CheckResult(
            passed=False,
            message=f"Floor thickness increased at {sample.hours:g} hours",
            expected=before,
            actual=sample.floor,
        ))

    negative = next(
        (s for s in series if any(getattr(s, layer.value) < 0 for layer in ALL_LAYERS)),
        None,
    )
    results.append(CheckResult(
        passed=negative is None,
        message=(
            "Non-negative thickness values"
            if negative is None
            else f"Negative thickness value at {negative.hours:g} hours"
        ),
    ))

    tol = tolerances.thickness_absolute
    final_floor = series[-1].floor
    results.append(CheckResult(
        passed=abs(final_floor - reference.final_floor_thickness) <= tol,
        message="Final floor thickness validation",
        expected=reference.final_floor_thickness,
        actual=final_floor,
        tolerance=tol,
    ))
    return results


def check_maintenance_schedule(strategy: Strategy, reference: ReferenceFigures) -> list[CheckResult]:
    events = count_maintenance_events(strategy)
    results = [CheckResult(
        passed=events == reference.maintenance_events,
        message="Maintenance event count validation",
        expected=reference.maintenance_events,
        actual=events,
    )]

    # Order as given; the wear engine walks spans in this order.
    hours = [event.operating_hours for event in strategy.interventions]
    for i in range(1, len(hours)):
        if hours[i] <= hours[i - 1]:
            results.append(CheckResult(
                passed=False,
                message=f"Intervention {i} at {hours[i]:g} hours is not after the previous one",
                expected=hours[i - 1],
                actual=hours[i],
            ))
            break
    else:
        results.append(CheckResult(passed=True, message="Intervention hours are ascending"))
    return results


# ═══════════════════════════════════════════════════════════════════════════
# Suites
# ═══════════════════════════════════════════════════════════════════════════

def _missing_reference(strategy: Strategy) -> CheckResult:
    return CheckResult(passed=False, message=f"No reference figures found for strategy: {strategy.id}")


def _suite(name: str, checks: list[CheckResult]) -> SuiteResult:
    passed = sum(1 for c in checks if c.passed)
    return SuiteResult(name=name, checks=checks, passed=passed, total=len(checks), success=passed == len(checks))


def run_strategy_suite(
    strategy: Strategy,
    reference: ReferenceFigures | None,
    tolerances: ReferenceTolerances = DEFAULT_TOLERANCES,
) -> SuiteResult:
    """All check groups for one strategy."""
    if reference is None:
        return _suite(strategy.name, [_missing_reference(strategy)])

    checks = [
        *check_wear_rates(strategy, reference, tolerances),
        *check_cost(strategy, reference, tolerances),
        *check_wear_progression(strategy, reference, tolerances),
        *check_maintenance_schedule(strategy, reference),
    ]
    return _suite(strategy.name, checks)


def run_comprehensive_validation(
    strategies: Sequence[Strategy] | None = None,
    references: Mapping[str, ReferenceFigures] | None = None,
    tolerances: ReferenceTolerances = DEFAULT_TOLERANCES,
) -> list[SuiteResult]:
    """One suite per strategy; defaults to the reference strategies."""
    strategies = default_strategies() if strategies is None else strategies
    references = WORKBOOK_REFERENCES if references is None else references
    return [run_strategy_suite(s, references.get(s.id), tolerances) for s in strategies]


def run_quick_validation(
    strategy: Strategy,
    references: Mapping[str, ReferenceFigures] | None = None,
    tolerances: ReferenceTolerances = DEFAULT_TOLERANCES,
) -> QuickValidationSummary:
    """Wear-rate and cost checks only — cheap enough to run on every edit."""
    references = WORKBOOK_REFERENCES if references is None else references
    reference = references.get(strategy.id)
    if reference is None:
        checks = [_missing_reference(strategy)]
    else:
        checks = [
            *check_wear_rates(strategy, reference, tolerances),
            *check_cost(strategy, reference, tolerances),
        ]
    passed = sum(1 for c in checks if c.passed)
    return QuickValidationSummary(passed=passed, total=len(checks), success=passed == len(checks))
