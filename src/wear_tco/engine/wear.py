"""Layered wear simulation.

The stack wears from the top down, one layer at a time::

    wearing layer = first of (stage4, stage3, stage2, stage1, stage0)
                    that is installed and thicker than its minimum,
                    else the floor

Per step (``step = min(1000, hours left in the span)``):

    thickness -= wear_rate × step / 1000      (clamped at the minimum)

A stage that reaches its minimum is exhausted: its installed flag clears and
the next layer down starts wearing on the following step.  The floor has no
installed flag; it is only held at its minimum.

Interventions reset the layers they install and define the time spans: each
span runs from one intervention to the next (the last one to
``total_hours``).  Spans are walked in the order given, so an unsorted
schedule must go through the validator first.
"""

from __future__ import annotations

from dataclasses import dataclass

from wear_tco.config.intervention import MaintenanceIntervention
from wear_tco.config.layers import ALL_LAYERS, Layer, PRECEDENCE
from wear_tco.config.limits import DEFAULT_SETTINGS, SimulationSettings
from wear_tco.config.strategy import Strategy
from wear_tco.models.results import WearAccumulation

# Wear rates are quoted per this many operating hours.
RATE_BASIS_HOURS = 1_000.0


# ═══════════════════════════════════════════════════════════════════════════
# Internal mutable layer state
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class _LayerState:
    """Mutable simulation state of one layer."""

    current: float = 0.0
    minimum: float = 0.0
    installed: bool = False

    @property
    def can_wear(self) -> bool:
        return self.installed and self.current > self.minimum


class _WearStack:
    """Six layer states, indexed by ``Layer``."""

    def __init__(self, strategy: Strategy) -> None:
        self._rates = strategy.wear_rates
        self.layers: dict[Layer, _LayerState] = {layer: _LayerState() for layer in ALL_LAYERS}
        floor = self.layers[Layer.FLOOR]
        floor.current = strategy.initial_floor_thickness
        floor.minimum = strategy.floor_min_thickness

    def apply(self, event: MaintenanceIntervention) -> None:
        """Install every plate the event carries and update the floor minimum."""
        for record in event.stages:
            if not record.installs:
                continue
            state = self.layers[record.layer]
            state.current = record.thickness
            state.minimum = record.min_thickness
            state.installed = True
        self.layers[Layer.FLOOR].minimum = event.floor_min_thickness

    def wearing_layer(self) -> Layer:
        for layer in PRECEDENCE:
            if self.layers[layer].can_wear:
                return layer
        return Layer.FLOOR

    def wear(self, step_hours: float) -> Layer:
        """Deplete the wearing layer for ``step_hours``; returns that layer."""
        layer = self.wearing_layer()
        state = self.layers[layer]
        depletion = self._rates.for_layer(layer) * (step_hours / RATE_BASIS_HOURS)

        if layer is Layer.FLOOR:
            # Held at its minimum; never raised if the minimum moved above it.
            floor_limit = min(state.current, state.minimum)
            state.current = max(state.current - depletion, floor_limit)
            return layer

        state.current -= depletion
        if state.current <= state.minimum:
            state.current = state.minimum
            state.installed = False
        return layer

    def sample(self, hours: float) -> WearAccumulation:
        # Floored at 0 for presentation: a stage0 plate worn below zero reads 0.
        return WearAccumulation(
            hours=hours,
            **{layer.value: max(0.0, self.layers[layer].current) for layer in ALL_LAYERS},
        )


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def simulate_wear(
    strategy: Strategy,
    settings: SimulationSettings | None = None,
) -> list[WearAccumulation]:
    """Simulate layer thickness over the strategy's lifetime.

    Returns one sample per step, stamped with the hour at the *end* of the
    step.  Recomputed from scratch on every call.
    """
    step_size = (settings or DEFAULT_SETTINGS).step_hours
    stack = _WearStack(strategy)
    samples: list[WearAccumulation] = []
    events = strategy.interventions

    for i, event in enumerate(events):
        stack.apply(event)
        end_hours = events[i + 1].operating_hours if i + 1 < len(events) else strategy.total_hours

        hours = event.operating_hours
        while hours < end_hours:
            step = min(step_size, end_hours - hours)
            stack.wear(step)
            hours += step
            samples.append(stack.sample(hours))

    return samples
