"""Engine — validation, wear simulation and cost accumulation."""

from wear_tco.engine.validator import summarize_violations, validate_strategy
from wear_tco.engine.wear import simulate_wear
from wear_tco.engine.cost import accumulate_cost, intervention_cost, total_cost
from wear_tco.engine.cached import BoundedCache, CachedCalculationEngine, strategy_fingerprint
from wear_tco.engine.comparison import (
    compare_strategies,
    common_hour_grid,
    comparison_frame,
    cost_per_hour_on_grid,
    count_maintenance_events,
    first_maintenance_hours,
    summarize_strategy,
)
from wear_tco.engine.frames import cost_frame, wear_frame

__all__ = [
    "validate_strategy",
    "summarize_violations",
    "simulate_wear",
    "accumulate_cost",
    "intervention_cost",
    "total_cost",
    "BoundedCache",
    "CachedCalculationEngine",
    "strategy_fingerprint",
    "compare_strategies",
    "common_hour_grid",
    "comparison_frame",
    "cost_per_hour_on_grid",
    "count_maintenance_events",
    "first_maintenance_hours",
    "summarize_strategy",
    "cost_frame",
    "wear_frame",
]
