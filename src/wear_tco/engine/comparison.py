"""Side-by-side strategy comparison.

The first strategy is the baseline; every other strategy reports its
savings against it::

    savings     = baseline_total − total
    savings_pct = savings / baseline_total × 100     (0 if baseline is free)

Cost series of different strategies have samples at different hours, so the
per-hour curves are resampled on a common hour grid before they are put
next to each other.  A cost series is a step function: the value at hour
``h`` is the last sample at or before ``h``.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from wear_tco.config.strategy import Strategy
from wear_tco.engine.cached import CachedCalculationEngine
from wear_tco.engine.cost import accumulate_cost
from wear_tco.models.results import CostAccumulation, StrategySummary


def count_maintenance_events(strategy: Strategy) -> int:
    """Interventions that replace at least one plate or structure."""
    return sum(1 for event in strategy.interventions if event.is_maintenance_event)


def first_maintenance_hours(strategy: Strategy) -> float | None:
    """Hour of the first plate install after commissioning (hour 0)."""
    for event in strategy.interventions:
        if event.operating_hours > 0 and event.installs_any_plate:
            return event.operating_hours
    return None


def summarize_strategy(strategy: Strategy, cost_series: list[CostAccumulation]) -> StrategySummary:
    final = cost_series[-1]
    return StrategySummary(
        strategy_id=strategy.id,
        name=strategy.name,
        total_hours=strategy.total_hours,
        total_cost=final.cumulative_cost,
        cost_per_hour=final.cost_per_hour,
        maintenance_events=count_maintenance_events(strategy),
        first_maintenance_hours=first_maintenance_hours(strategy),
    )


def compare_strategies(
    strategies: Sequence[Strategy],
    engine: CachedCalculationEngine | None = None,
) -> list[StrategySummary]:
    """Summaries of ``strategies`` with savings relative to the first one."""
    if not strategies:
        return []

    summaries = []
    for strategy in strategies:
        series = engine.cost(strategy).samples if engine is not None else accumulate_cost(strategy)
        summaries.append(summarize_strategy(strategy, series))

    baseline = summaries[0].total_cost
    result = [summaries[0]]
    for summary in summaries[1:]:
        savings = baseline - summary.total_cost
        result.append(summary.model_copy(update={
            "savings_vs_baseline": savings,
            "savings_pct": savings / baseline * 100.0 if baseline > 0 else 0.0,
        }))
    return result


def cost_per_hour_on_grid(series: list[CostAccumulation], hours: Sequence[float]) -> np.ndarray:
    """Step-after resample of ``cost_per_hour`` at each hour of ``hours``.

    Hours before the first sample read 0.
    """
    sample_hours = np.array([s.hours for s in series], dtype=float)
    values = np.array([s.cost_per_hour for s in series], dtype=float)
    grid = np.asarray(hours, dtype=float)

    idx = np.searchsorted(sample_hours, grid, side="right") - 1
    out = np.zeros_like(grid)
    valid = idx >= 0
    out[valid] = values[idx[valid]]
    return out


def common_hour_grid(series_list: Sequence[list[CostAccumulation]]) -> np.ndarray:
    """Sorted union of every sample hour across ``series_list``."""
    if not series_list:
        return np.array([], dtype=float)
    return np.unique(np.concatenate([[s.hours for s in series] for series in series_list]).astype(float))


def comparison_frame(summaries: Sequence[StrategySummary]) -> pd.DataFrame:
    """Key-metrics table, one row per strategy."""
    return pd.DataFrame(
        [
            {
                "Strategy": s.name,
                "Total Hours": s.total_hours,
                "Total Cost": s.total_cost,
                "Cost/Hour": s.cost_per_hour,
                "Maintenance Events": s.maintenance_events,
                "First Maintenance": s.first_maintenance_hours,
                "Savings": s.savings_vs_baseline,
                "Savings %": s.savings_pct,
            }
            for s in summaries
        ],
        columns=[
            "Strategy", "Total Hours", "Total Cost", "Cost/Hour",
            "Maintenance Events", "First Maintenance", "Savings", "Savings %",
        ],
    )
