"""Domain limits and engine settings."""

from pydantic import BaseModel, Field


class ValidationLimits(BaseModel):
    """Valid ranges the validator clamps strategy fields into.

    Values outside these ranges are repaired, never rejected; every repair is
    reported as a ``Violation``.
    """

    # --- Wear rates (mm per 1000 operating hours) ---
    wear_rate_min: float = Field(default=0.12, ge=0, description="Lowest credible wear rate")
    wear_rate_max: float = Field(default=0.45, gt=0, description="Highest credible wear rate")

    # --- Thickness (mm) ---
    thickness_min: float = Field(default=0.0, description="Lower bound for thickness fields")
    thickness_max: float = Field(default=100.0, gt=0, description="Upper bound for thickness fields")
    stage0_min_thickness_floor: float = Field(
        default=-5.0,
        description="Lower bound for stage0 minimum thickness. Negative values "
                    "let the stage0 plate wear into the substrate below it.",
    )

    # --- Operating hours ---
    operating_hours_min: float = Field(default=0.0, ge=0, description="Earliest intervention hour")
    operating_hours_max: float = Field(default=500_000.0, gt=0, description="Latest allowed hour value")
    ordering_shift_hours: float = Field(
        default=1_000.0, gt=0,
        description="Hours added to the previous intervention when an "
                    "intervention is out of order.",
    )

    # --- Schedule ---
    max_interventions: int = Field(
        default=10, ge=1,
        description="Advisory cap on interventions per strategy (not enforced).",
    )


class SimulationSettings(BaseModel):
    """Engine settings.

    ``step_hours`` is the sampling resolution of the wear series; the wear
    rates are always expressed per 1000 hours regardless of the step.
    """

    step_hours: float = Field(default=1_000.0, gt=0, description="Wear simulation step (hours)")
    cache_capacity: int = Field(
        default=50, ge=1,
        description="Entries kept per series cache before the oldest is evicted.",
    )


DEFAULT_LIMITS = ValidationLimits()
DEFAULT_SETTINGS = SimulationSettings()
