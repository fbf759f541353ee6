"""Maintenance cost accumulation.

Every intervention is priced independently::

    plate material = qty × (price_20mm if thickness == 20 else price_25mm)
    plate labor    = qty × (min_20mm  if thickness == 20 else min_25mm) / 60 × labor_rate
    sidewall       = sidewall_qty  × sidewall_cost  + labor_sidewall  × labor_rate
    frontwall      = frontwall_qty × frontwall_cost + labor_frontwall × labor_rate
    rebuild        = rebuild_cost                   + labor_rebuild   × labor_rate

The 20/25 mm selector is binary: only an install of exactly 20 mm uses the
20 mm price and labor minutes.  Every term is floored at 0, so a strategy
that skipped validation can never produce a negative cost.

The series starts with a zero sample at hour 0, adds one sample per
cost-bearing intervention, and ends with a boundary sample at
``total_hours`` when the last event happened earlier.
"""

from __future__ import annotations

from wear_tco.config.costs import CostStructure
from wear_tco.config.intervention import MaintenanceIntervention
from wear_tco.config.layers import Layer
from wear_tco.config.strategy import Strategy
from wear_tco.models.results import CostAccumulation, InterventionCost

THIN_PLATE_MM = 20.0
MINUTES_PER_HOUR = 60.0


def _nn(value: float) -> float:
    return max(0.0, value)


def plate_unit_cost(costs: CostStructure, layer: Layer, thickness: float) -> float:
    """Unit price of one plate of ``layer`` installed at ``thickness`` mm."""
    plate = costs.plate(layer)
    return _nn(plate.cost_20mm if thickness == THIN_PLATE_MM else plate.cost_25mm)


def plate_labor_minutes(costs: CostStructure, thickness: float) -> float:
    """Labor minutes to install one plate of ``thickness`` mm."""
    return _nn(costs.labor_wp_20mm if thickness == THIN_PLATE_MM else costs.labor_wp_25mm)


def intervention_cost(event: MaintenanceIntervention, costs: CostStructure) -> InterventionCost:
    """Price a single intervention."""
    labor_rate = _nn(costs.labor_rate)

    material = 0.0
    labor = 0.0
    for record in event.stages:
        if not record.installs:
            continue
        qty = _nn(costs.plate(record.layer).quantity)
        material += qty * plate_unit_cost(costs, record.layer, record.thickness)
        labor += qty * (plate_labor_minutes(costs, record.thickness) / MINUTES_PER_HOUR) * labor_rate

    sidewall = 0.0
    if event.sidewall_replacement:
        sidewall = _nn(costs.sidewall_qty) * _nn(costs.sidewall_cost) + _nn(costs.labor_sidewall) * labor_rate

    frontwall = 0.0
    if event.frontwall_replacement:
        frontwall = _nn(costs.frontwall_qty) * _nn(costs.frontwall_cost) + _nn(costs.labor_frontwall) * labor_rate

    rebuild = 0.0
    if event.rebuild:
        rebuild = _nn(costs.rebuild_cost) + _nn(costs.labor_rebuild) * labor_rate

    return InterventionCost(
        hours=event.operating_hours,
        material_cost=material,
        labor_cost=labor,
        sidewall_cost=sidewall,
        frontwall_cost=frontwall,
        rebuild_cost=rebuild,
        total=material + labor + sidewall + frontwall + rebuild,
    )


def accumulate_cost(strategy: Strategy) -> list[CostAccumulation]:
    """Cumulative and per-hour cost series of a strategy.

    Interventions that cost nothing emit no sample, so the series length is
    not tied to the number of interventions.
    """
    series = [CostAccumulation(hours=0.0, period_cost=0.0, cumulative_cost=0.0, cost_per_hour=0.0)]
    cumulative = 0.0

    for event in strategy.interventions:
        period_cost = intervention_cost(event, strategy.costs).total
        if period_cost <= 0:
            continue
        cumulative += period_cost
        hours = event.operating_hours
        series.append(CostAccumulation(
            hours=hours,
            period_cost=period_cost,
            cumulative_cost=cumulative,
            cost_per_hour=cumulative / hours if hours > 0 else 0.0,
        ))

    if series[-1].hours < strategy.total_hours:
        series.append(CostAccumulation(
            hours=strategy.total_hours,
            period_cost=0.0,
            cumulative_cost=cumulative,
            cost_per_hour=cumulative / strategy.total_hours if strategy.total_hours > 0 else 0.0,
        ))
    return series


def total_cost(strategy: Strategy) -> float:
    """Cumulative cost at the end of the horizon."""
    return accumulate_cost(strategy)[-1].cumulative_cost
