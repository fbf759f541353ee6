"""Flat interchange records ⇄ strategy models.

Strategy files (JSON, YAML) use the flat camelCase schema of the costing
workbook tool, with one key per stage field::

    {"operatingHours": 24000, "floorMinThickness": 14,
     "stage0Thickness": 25, "stage0MinThickness": 2, ...,
     "sidewallReplacement": false, "frontwallReplacement": false, "rebuild": false}

In memory those keys become ordered per-layer records.  This module is the
only place that knows both shapes.  Missing keys take the model defaults;
values are not range-checked here; the validator does that.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from wear_tco.config.costs import CostStructure, PlateCost
from wear_tco.config.intervention import MaintenanceIntervention, StageInstall
from wear_tco.config.layers import STAGES
from wear_tco.config.strategy import Strategy
from wear_tco.config.wear import WearRates


class StrategyImportError(ValueError):
    """A strategy file could not be turned into strategies."""


# Flat key → model field, for the scalar parts of each record.
_STRATEGY_KEYS = {
    "id": "id",
    "name": "name",
    "operatingHoursPerPeriod": "operating_hours_per_period",
    "totalHours": "total_hours",
    "initialFloorThickness": "initial_floor_thickness",
    "floorMinThickness": "floor_min_thickness",
}
_INTERVENTION_KEYS = {
    "operatingHours": "operating_hours",
    "floorMinThickness": "floor_min_thickness",
    "sidewallReplacement": "sidewall_replacement",
    "frontwallReplacement": "frontwall_replacement",
    "rebuild": "rebuild",
}
_COST_KEYS = {
    "sidewallQty": "sidewall_qty",
    "frontwallQty": "frontwall_qty",
    "rebuildQty": "rebuild_qty",
    "sidewallCost": "sidewall_cost",
    "frontwallCost": "frontwall_cost",
    "rebuildCost": "rebuild_cost",
    "laborRate": "labor_rate",
    "laborWP20mm": "labor_wp_20mm",
    "laborWP25mm": "labor_wp_25mm",
    "laborSidewall": "labor_sidewall",
    "laborFrontwall": "labor_frontwall",
    "laborRebuild": "labor_rebuild",
}


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise StrategyImportError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _pick(record: Mapping[str, Any], keys: Mapping[str, str]) -> dict[str, Any]:
    return {field: record[key] for key, field in keys.items() if key in record}


# ═══════════════════════════════════════════════════════════════════════════
# Record → model
# ═══════════════════════════════════════════════════════════════════════════

def intervention_from_record(record: Mapping[str, Any]) -> MaintenanceIntervention:
    record = _require_mapping(record, "intervention")
    fields = _pick(record, _INTERVENTION_KEYS)
    fields["stages"] = [
        StageInstall(
            layer=layer,
            thickness=record.get(f"{layer.value}Thickness", 0.0),
            min_thickness=record.get(f"{layer.value}MinThickness", 0.0),
        )
        for layer in STAGES
    ]
    return MaintenanceIntervention.model_validate(fields)


def costs_from_record(record: Mapping[str, Any]) -> CostStructure:
    record = _require_mapping(record, "costs")
    defaults = CostStructure()
    plates = []
    for layer in STAGES:
        base = defaults.plate(layer)
        plates.append(PlateCost(
            layer=layer,
            cost_20mm=record.get(f"{layer.value}_20mm", base.cost_20mm),
            cost_25mm=record.get(f"{layer.value}_25mm", base.cost_25mm),
            quantity=record.get(f"{layer.value}Qty", base.quantity),
        ))
    return CostStructure.model_validate({"plates": plates, **_pick(record, _COST_KEYS)})


def strategy_from_record(record: Mapping[str, Any]) -> Strategy:
    """Build a strategy from one flat record.

    Raises ``StrategyImportError`` when the record has the wrong shape or a
    value of the wrong type.
    """
    record = _require_mapping(record, "strategy")
    try:
        fields = _pick(record, _STRATEGY_KEYS)
        if "interventions" in record:
            events = record["interventions"]
            if not isinstance(events, list):
                raise StrategyImportError("interventions must be a list")
            fields["interventions"] = [intervention_from_record(e) for e in events]
        if "wearRates" in record:
            fields["wear_rates"] = WearRates.model_validate(_require_mapping(record["wearRates"], "wearRates"))
        if "costs" in record:
            fields["costs"] = costs_from_record(record["costs"])
        return Strategy.model_validate(fields)
    except ValidationError as exc:
        name = record.get("name", "<unnamed>")
        raise StrategyImportError(f"invalid strategy {name!r}: {exc}") from exc


def strategies_from_records(records: Any) -> list[Strategy]:
    """Build strategies from a list of flat records."""
    if not isinstance(records, list):
        raise StrategyImportError(f"expected a list of strategies, got {type(records).__name__}")
    return [strategy_from_record(r) for r in records]


# ═══════════════════════════════════════════════════════════════════════════
# Model → record
# ═══════════════════════════════════════════════════════════════════════════

def intervention_to_record(event: MaintenanceIntervention) -> dict[str, Any]:
    record: dict[str, Any] = {
        "operatingHours": event.operating_hours,
        "floorMinThickness": event.floor_min_thickness,
    }
    for stage in event.stages:
        record[f"{stage.layer.value}Thickness"] = stage.thickness
        record[f"{stage.layer.value}MinThickness"] = stage.min_thickness
    record["sidewallReplacement"] = event.sidewall_replacement
    record["frontwallReplacement"] = event.frontwall_replacement
    record["rebuild"] = event.rebuild
    return record


def costs_to_record(costs: CostStructure) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for plate in reversed(costs.plates):
        record[f"{plate.layer.value}_20mm"] = plate.cost_20mm
        record[f"{plate.layer.value}_25mm"] = plate.cost_25mm
    for plate in reversed(costs.plates):
        record[f"{plate.layer.value}Qty"] = plate.quantity
    for key, field in _COST_KEYS.items():
        record[key] = getattr(costs, field)
    return record


def strategy_to_record(strategy: Strategy) -> dict[str, Any]:
    record = {key: getattr(strategy, field) for key, field in _STRATEGY_KEYS.items()}
    record["interventions"] = [intervention_to_record(e) for e in strategy.interventions]
    record["wearRates"] = strategy.wear_rates.model_dump()
    record["costs"] = costs_to_record(strategy.costs)
    return record
