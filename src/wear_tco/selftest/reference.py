"""Reference figures the engines are checked against.

These are the figures of the costing workbook for the two default
strategies.  They are kept verbatim: when the engines disagree with them the
disagreement is reported, never patched over.
"""

from pydantic import BaseModel, Field

from wear_tco.config.wear import WearRates


class ReferenceTolerances(BaseModel):
    """Pass bands for each kind of figure."""

    cost_relative: float = Field(default=0.01, ge=0, description="Relative error allowed on cost figures")
    wear_rate_absolute: float = Field(default=0.001, ge=0, description="Absolute error on wear rates (mm/1000 h)")
    thickness_absolute: float = Field(default=1.0, ge=0, description="Absolute error on final thickness (mm)")


class ReferenceFigures(BaseModel):
    """Independently known results for one strategy."""

    total_cost: float = Field(gt=0)
    cost_per_hour: float = Field(gt=0)
    maintenance_events: int = Field(ge=0)
    final_floor_thickness: float
    wear_rates: WearRates


_WORKBOOK_RATES = WearRates(floor=0.45, stage0=0.45, stage1=0.38, stage2=0.26, stage3=0.18, stage4=0.12)

WORKBOOK_REFERENCES: dict[str, ReferenceFigures] = {
    "scenario1": ReferenceFigures(
        total_cost=138_360,
        cost_per_hour=1.26,
        maintenance_events=3,
        final_floor_thickness=14,
        wear_rates=_WORKBOOK_RATES,
    ),
    "scenario2": ReferenceFigures(
        total_cost=138_940,
        cost_per_hour=1.26,
        maintenance_events=4,
        final_floor_thickness=14,
        wear_rates=_WORKBOOK_RATES,
    ),
}

DEFAULT_TOLERANCES = ReferenceTolerances()
