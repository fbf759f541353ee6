"""Scheduled maintenance interventions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wear_tco.config.layers import Layer, STAGES


class StageInstall(BaseModel):
    """What one intervention does to one stage layer.

    ``thickness == 0`` means the layer is left as it is at this event; the
    paired ``min_thickness`` is then ignored.
    """

    model_config = ConfigDict(frozen=True)

    layer: Layer
    thickness: float = Field(default=0.0, description="Installed plate thickness (mm); 0 = no replacement")
    min_thickness: float = Field(
        default=0.0,
        description="Minimum allowable thickness once installed (mm). May be "
                    "negative for stage0 (wear into the substrate).",
    )

    @property
    def installs(self) -> bool:
        return self.thickness > 0


def _empty_stages() -> list[StageInstall]:
    return [StageInstall(layer=layer) for layer in STAGES]


class MaintenanceIntervention(BaseModel):
    """One maintenance event at a given operating hour.

    ``stages`` always holds exactly five records ordered stage0 … stage4;
    missing stages are filled with no-op records and the list is re-ordered
    on construction.
    """

    model_config = ConfigDict(frozen=True)

    operating_hours: float = Field(default=0.0, description="Operating hour of the event")
    floor_min_thickness: float = Field(default=14.0, description="Floor minimum from this event on (mm)")
    stages: list[StageInstall] = Field(default_factory=_empty_stages)

    # --- Structural replacements (independent of the plate stack) ---
    sidewall_replacement: bool = False
    frontwall_replacement: bool = False
    rebuild: bool = False

    @field_validator("stages")
    @classmethod
    def _one_record_per_stage(cls, stages: list[StageInstall]) -> list[StageInstall]:
        by_layer: dict[Layer, StageInstall] = {}
        for record in stages:
            if record.layer is Layer.FLOOR:
                raise ValueError("the floor is not an installable stage")
            if record.layer in by_layer:
                raise ValueError(f"duplicate install record for {record.layer.value}")
            by_layer[record.layer] = record
        return [by_layer.get(layer, StageInstall(layer=layer)) for layer in STAGES]

    def stage(self, layer: Layer) -> StageInstall:
        """Install record for ``layer`` (stage layers only)."""
        index = layer.stage_index
        if index is None:
            raise KeyError("the floor has no install record")
        return self.stages[index]

    @property
    def installs_any_plate(self) -> bool:
        return any(s.installs for s in self.stages)

    @property
    def is_maintenance_event(self) -> bool:
        """True when the event replaces anything at all."""
        return (
            self.installs_any_plate
            or self.sidewall_replacement
            or self.frontwall_replacement
            or self.rebuild
        )
