"""Top-level strategy — bundles all inputs of one simulation."""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from wear_tco.config.costs import CostStructure
from wear_tco.config.intervention import MaintenanceIntervention
from wear_tco.config.wear import WearRates


class Strategy(BaseModel):
    """A complete maintenance strategy.

    Strategies are values: engines never modify them, and edits build a new
    instance (``model_copy(update=...)``).  Interventions are kept in the order
    given; the validator is responsible for making that order ascending.
    """

    model_config = ConfigDict(frozen=True)

    # --- Identity ---
    id: str = Field(default_factory=lambda: uuid4().hex, description="Stable identifier")
    name: str = Field(default="Untitled strategy", description="Human label")

    # --- Horizon ---
    operating_hours_per_period: float = Field(default=6_000.0, description="Operating hours per period")
    total_hours: float = Field(default=110_000.0, description="Simulation horizon (operating hours)")

    # --- Substrate ---
    initial_floor_thickness: float = Field(default=25.0, description="Floor thickness at hour 0 (mm)")
    floor_min_thickness: float = Field(default=14.0, description="Floor minimum before any intervention (mm)")

    interventions: list[MaintenanceIntervention] = Field(default_factory=list)
    wear_rates: WearRates = Field(default_factory=WearRates)
    costs: CostStructure = Field(default_factory=CostStructure)
