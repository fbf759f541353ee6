"""Wear rates per layer."""

from pydantic import BaseModel, ConfigDict, Field

from wear_tco.config.layers import Layer


class WearRates(BaseModel):
    """Depletion rate of each layer in mm per 1000 operating hours.

    A rate of 0 makes a layer immortal — it never depletes while it is the
    wearing layer, so nothing below it ever wears either.
    """

    model_config = ConfigDict(frozen=True)

    floor: float = Field(default=0.45, description="Substrate floor (mm/1000 h)")
    stage0: float = Field(default=0.45, description="Stage 0 wear plate (mm/1000 h)")
    stage1: float = Field(default=0.38, description="Stage 1 wear plate (mm/1000 h)")
    stage2: float = Field(default=0.26, description="Stage 2 wear plate (mm/1000 h)")
    stage3: float = Field(default=0.18, description="Stage 3 wear plate (mm/1000 h)")
    stage4: float = Field(default=0.12, description="Stage 4 wear plate (mm/1000 h)")

    def for_layer(self, layer: Layer) -> float:
        return getattr(self, layer.value)
