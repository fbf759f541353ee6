"""Result types — the contract between engines, comparison and reporting.

Series samples are append-only: the engines build them once per call and
never touch them afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


# ═══════════════════════════════════════════════════════════════════════════
# Validator output
# ═══════════════════════════════════════════════════════════════════════════

class Violation(BaseModel):
    """One repaired (or advisory) problem found while validating a strategy."""

    model_config = ConfigDict(frozen=True)

    field: str
    """Dotted path of the offending field, e.g. ``interventions[2].operating_hours``."""

    value: float
    """Value as supplied, before repair."""

    valid_range: tuple[float, float]
    """Inclusive range the value was expected in."""

    message: str


class ValidationSummary(BaseModel):
    is_valid: bool
    error_count: int
    errors: list[Violation]


# ═══════════════════════════════════════════════════════════════════════════
# Engine series
# ═══════════════════════════════════════════════════════════════════════════

class WearAccumulation(BaseModel):
    """Thickness of every layer (mm) at one simulated hour.

    Values are floored at 0 for presentation; a stage0 plate worn into the
    substrate reports 0, not its negative internal thickness.
    """

    model_config = ConfigDict(frozen=True)

    hours: float
    floor: float
    stage0: float
    stage1: float
    stage2: float
    stage3: float
    stage4: float


class CostAccumulation(BaseModel):
    """Cost state at one cost-bearing event (or a series boundary)."""

    model_config = ConfigDict(frozen=True)

    hours: float
    period_cost: float
    """Cost incurred exactly at ``hours``."""

    cumulative_cost: float
    """Running total including ``period_cost``."""

    cost_per_hour: float
    """``cumulative_cost / hours``; 0 at hour 0."""


class InterventionCost(BaseModel):
    """Priced breakdown of a single intervention."""

    model_config = ConfigDict(frozen=True)

    hours: float
    material_cost: float
    """Wear plates: Σ quantity × unit price."""

    labor_cost: float
    """Wear plates: Σ quantity × minutes/60 × labor rate."""

    sidewall_cost: float
    frontwall_cost: float
    rebuild_cost: float
    total: float


class CalculationMetrics(BaseModel):
    """Timing of one cached-engine call."""

    calculation_time_ms: float
    data_points: int
    from_cache: bool


# ═══════════════════════════════════════════════════════════════════════════
# Comparison
# ═══════════════════════════════════════════════════════════════════════════

class StrategySummary(BaseModel):
    """Headline figures of one strategy, relative to a baseline."""

    strategy_id: str
    name: str
    total_hours: float
    total_cost: float
    cost_per_hour: float
    maintenance_events: int
    first_maintenance_hours: float | None
    """First plate install after commissioning; None if there is none."""

    savings_vs_baseline: float = 0.0
    """Baseline total cost − this total cost.  Positive = cheaper."""

    savings_pct: float = 0.0


# ═══════════════════════════════════════════════════════════════════════════
# Self-test harness
# ═══════════════════════════════════════════════════════════════════════════

class CheckResult(BaseModel):
    """One assertion of the reference check."""

    passed: bool
    message: str
    expected: float | None = None
    actual: float | None = None
    tolerance: float | None = None


class SuiteResult(BaseModel):
    """All checks run against one strategy."""

    name: str
    checks: list[CheckResult]
    passed: int
    total: int
    success: bool


class QuickValidationSummary(BaseModel):
    passed: int
    total: int
    success: bool
