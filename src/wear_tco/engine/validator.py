"""Strategy validator — clamps fields into domain ranges.

The validator never rejects a strategy.  Out-of-range values are clamped,
out-of-order interventions are pushed forward, and every repair is reported
as a ``Violation``::

    wear rate      → [0.12, 0.45] mm/1000 h
    thickness      → [0, 100] mm   (stage0 minimum: [-5, 100] mm)
    hours          → [0, 500 000]
    money / labor  → ≥ 0
    quantities     → non-negative integers (NaN / ±inf → 0)
    ordering       → hours[i] ≤ hours[i-1]  ⇒  hours[i] = hours[i-1] + 1000
                     (may push past the hour cap; flagged, not clamped)

Both engines consume the validated copy; the input strategy is untouched.
"""

from __future__ import annotations

import logging
import math

from wear_tco.config.costs import CostStructure, PlateCost
from wear_tco.config.intervention import MaintenanceIntervention, StageInstall
from wear_tco.config.layers import ALL_LAYERS, Layer
from wear_tco.config.limits import DEFAULT_LIMITS, ValidationLimits
from wear_tco.config.strategy import Strategy
from wear_tco.config.wear import WearRates
from wear_tco.models.results import ValidationSummary, Violation

logger = logging.getLogger(__name__)

_COST_FIELDS = (
    "sidewall_cost",
    "frontwall_cost",
    "rebuild_cost",
    "labor_rate",
    "labor_wp_20mm",
    "labor_wp_25mm",
    "labor_sidewall",
    "labor_frontwall",
    "labor_rebuild",
)
_QUANTITY_FIELDS = ("sidewall_qty", "frontwall_qty", "rebuild_qty")


class _ViolationCollector:
    """Clamp helpers that record a violation whenever they change a value.

    One collector lives for exactly one ``validate_strategy`` call.
    """

    def __init__(self, limits: ValidationLimits) -> None:
        self.limits = limits
        self.violations: list[Violation] = []

    def _record(self, field: str, value: float, low: float, high: float, message: str) -> None:
        self.violations.append(Violation(field=field, value=value, valid_range=(low, high), message=message))

    def clamp(self, value: float, field: str, low: float, high: float, what: str, unit: str = "") -> float:
        if low <= value <= high:
            return value
        suffix = f" {unit}" if unit else ""
        self._record(field, value, low, high, f"{what} {value} is outside valid range [{low}, {high}]{suffix}")
        return max(low, min(high, value))

    def wear_rate(self, value: float, field: str) -> float:
        lim = self.limits
        return self.clamp(value, field, lim.wear_rate_min, lim.wear_rate_max, "Wear rate", "mm/1000hrs")

    def thickness(self, value: float, field: str, lower: float | None = None) -> float:
        lim = self.limits
        low = lim.thickness_min if lower is None else lower
        return self.clamp(value, field, low, lim.thickness_max, "Thickness", "mm")

    def hours(self, value: float, field: str) -> float:
        lim = self.limits
        return self.clamp(value, field, lim.operating_hours_min, lim.operating_hours_max, "Operating hours")

    def cost(self, value: float, field: str) -> float:
        if value >= 0:
            return value
        self._record(field, value, 0.0, math.inf, f"Cost {value} cannot be negative")
        return 0.0

    def quantity(self, value: float, field: str) -> int:
        if not math.isfinite(value):
            self._record(field, value, 0.0, math.inf, f"Quantity {value} is not a finite number")
            return 0
        if value < 0:
            self._record(field, value, 0.0, math.inf, f"Quantity {value} cannot be negative")
            return 0
        return math.floor(value)

    def advisory(self, field: str, value: float, low: float, high: float, message: str) -> None:
        self._record(field, value, low, high, message)


# ═══════════════════════════════════════════════════════════════════════════
# Section validators
# ═══════════════════════════════════════════════════════════════════════════

def _validate_wear_rates(rates: WearRates, c: _ViolationCollector) -> WearRates:
    return WearRates(**{
        layer.value: c.wear_rate(rates.for_layer(layer), f"wear_rates.{layer.value}")
        for layer in ALL_LAYERS
    })


def _validate_interventions(
    interventions: list[MaintenanceIntervention],
    c: _ViolationCollector,
) -> list[MaintenanceIntervention]:
    lim = c.limits
    repaired: list[MaintenanceIntervention] = []
    previous_hours: float | None = None

    for i, event in enumerate(interventions):
        prefix = f"interventions[{i}]"
        hours = c.hours(event.operating_hours, f"{prefix}.operating_hours")

        # Ascending order, walked as given. Never re-sorted.
        if previous_hours is not None and hours <= previous_hours:
            corrected = previous_hours + lim.ordering_shift_hours
            c.advisory(
                f"{prefix}.operating_hours", hours, corrected, lim.operating_hours_max,
                f"Intervention hours must be ascending. Correcting {hours} to {corrected}",
            )
            hours = corrected
            # Ordering wins over the cap; the overrun is only reported.
            if hours > lim.operating_hours_max:
                c.advisory(
                    f"{prefix}.operating_hours", hours, lim.operating_hours_min, lim.operating_hours_max,
                    f"Corrected intervention hours {hours} exceed the maximum {lim.operating_hours_max}",
                )
        previous_hours = hours

        stages = []
        for record in event.stages:
            field = f"{prefix}.{record.layer.value}"
            min_lower = lim.stage0_min_thickness_floor if record.layer is Layer.STAGE0 else None
            stages.append(StageInstall(
                layer=record.layer,
                thickness=c.thickness(record.thickness, f"{field}.thickness"),
                min_thickness=c.thickness(record.min_thickness, f"{field}.min_thickness", lower=min_lower),
            ))

        repaired.append(event.model_copy(update={
            "operating_hours": hours,
            "floor_min_thickness": c.thickness(event.floor_min_thickness, f"{prefix}.floor_min_thickness"),
            "stages": stages,
        }))

    if len(repaired) > lim.max_interventions:
        c.advisory(
            "interventions", len(repaired), 0, lim.max_interventions,
            f"Strategy has {len(repaired)} interventions; at most {lim.max_interventions} are supported",
        )
    return repaired


def _validate_costs(costs: CostStructure, c: _ViolationCollector) -> CostStructure:
    plates = [
        PlateCost(
            layer=plate.layer,
            cost_20mm=c.cost(plate.cost_20mm, f"costs.{plate.layer.value}.cost_20mm"),
            cost_25mm=c.cost(plate.cost_25mm, f"costs.{plate.layer.value}.cost_25mm"),
            quantity=c.quantity(plate.quantity, f"costs.{plate.layer.value}.quantity"),
        )
        for plate in costs.plates
    ]
    update: dict[str, object] = {"plates": plates}
    for name in _COST_FIELDS:
        update[name] = c.cost(getattr(costs, name), f"costs.{name}")
    for name in _QUANTITY_FIELDS:
        update[name] = c.quantity(getattr(costs, name), f"costs.{name}")
    return costs.model_copy(update=update)


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def validate_strategy(
    strategy: Strategy,
    limits: ValidationLimits | None = None,
) -> tuple[Strategy, list[Violation]]:
    """Return a repaired copy of ``strategy`` and the list of violations.

    Never raises on a well-typed strategy.  Cross-field rules
    (``total_hours > operating_hours_per_period`` and
    ``initial_floor_thickness > floor_min_thickness``) are reported but not
    repaired, since there is no single right way to fix them.
    """
    c = _ViolationCollector(limits or DEFAULT_LIMITS)
    lim = c.limits

    validated = strategy.model_copy(update={
        "operating_hours_per_period": c.hours(strategy.operating_hours_per_period, "operating_hours_per_period"),
        "total_hours": c.hours(strategy.total_hours, "total_hours"),
        "initial_floor_thickness": c.thickness(strategy.initial_floor_thickness, "initial_floor_thickness"),
        "floor_min_thickness": c.thickness(strategy.floor_min_thickness, "floor_min_thickness"),
        "wear_rates": _validate_wear_rates(strategy.wear_rates, c),
        "interventions": _validate_interventions(strategy.interventions, c),
        "costs": _validate_costs(strategy.costs, c),
    })

    if validated.total_hours <= validated.operating_hours_per_period:
        c.advisory(
            "total_hours", validated.total_hours,
            validated.operating_hours_per_period, lim.operating_hours_max,
            "Total hours must be greater than operating hours per period",
        )
    if validated.initial_floor_thickness <= validated.floor_min_thickness:
        c.advisory(
            "initial_floor_thickness", validated.initial_floor_thickness,
            validated.floor_min_thickness + 1, lim.thickness_max,
            "Initial floor thickness must be greater than minimum thickness",
        )

    if c.violations:
        logger.debug("strategy %s: %d violation(s) repaired or flagged", strategy.id, len(c.violations))
    return validated, list(c.violations)


def summarize_violations(violations: list[Violation]) -> ValidationSummary:
    return ValidationSummary(
        is_valid=not violations,
        error_count=len(violations),
        errors=list(violations),
    )
