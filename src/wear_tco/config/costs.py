"""Cost structure — material prices, quantities and labor."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wear_tco.config.layers import Layer, STAGES


class PlateCost(BaseModel):
    """Unit prices and plate count for one stage layer.

    Plates come in two thicknesses.  A 20 mm install uses ``cost_20mm``;
    any other install thickness uses ``cost_25mm``.
    """

    model_config = ConfigDict(frozen=True)

    layer: Layer
    cost_20mm: float = Field(default=0.0, description="Price per 20 mm plate ($)")
    cost_25mm: float = Field(default=0.0, description="Price per 25 mm plate ($)")
    quantity: float = Field(default=0.0, description="Plates installed per replacement")


# Reference prices: stage4 is the premium plate, stage0 the cheapest.
_DEFAULT_PLATES: dict[Layer, tuple[float, float, float]] = {
    Layer.STAGE0: (380.0, 440.0, 20),
    Layer.STAGE1: (570.0, 660.0, 30),
    Layer.STAGE2: (760.0, 880.0, 40),
    Layer.STAGE3: (950.0, 1_100.0, 50),
    Layer.STAGE4: (1_140.0, 1_320.0, 60),
}


def _default_plates() -> list[PlateCost]:
    return [
        PlateCost(layer=layer, cost_20mm=c20, cost_25mm=c25, quantity=qty)
        for layer, (c20, c25, qty) in _DEFAULT_PLATES.items()
    ]


class CostStructure(BaseModel):
    """Everything needed to price an intervention.

    Labor for plates is given in **minutes per plate**; labor for sidewall,
    frontwall and rebuild work is given in **hours per job**.  Both are
    multiplied by the hourly ``labor_rate``.
    """

    model_config = ConfigDict(frozen=True)

    # --- Wear plates ---
    plates: list[PlateCost] = Field(default_factory=_default_plates)

    # --- Structural replacements ---
    sidewall_qty: float = Field(default=2, description="Sidewall panels per replacement")
    frontwall_qty: float = Field(default=1, description="Frontwall panels per replacement")
    rebuild_qty: float = Field(default=0, description="Rebuild units (informational)")
    sidewall_cost: float = Field(default=36_000.0, description="Price per sidewall panel ($)")
    frontwall_cost: float = Field(default=20_000.0, description="Price per frontwall panel ($)")
    rebuild_cost: float = Field(default=0.0, description="Fixed rebuild cost ($)")

    # --- Labor ---
    labor_rate: float = Field(default=120.0, description="Labor rate ($/hour)")
    labor_wp_20mm: float = Field(default=5.0, description="Labor per 20 mm plate (minutes)")
    labor_wp_25mm: float = Field(default=8.0, description="Labor per 25 mm plate (minutes)")
    labor_sidewall: float = Field(default=520.0, description="Labor per sidewall job (hours)")
    labor_frontwall: float = Field(default=640.0, description="Labor per frontwall job (hours)")
    labor_rebuild: float = Field(default=1_200.0, description="Labor per rebuild (hours)")

    @field_validator("plates")
    @classmethod
    def _one_record_per_stage(cls, plates: list[PlateCost]) -> list[PlateCost]:
        by_layer: dict[Layer, PlateCost] = {}
        for record in plates:
            if record.layer is Layer.FLOOR:
                raise ValueError("the floor has no plate cost")
            if record.layer in by_layer:
                raise ValueError(f"duplicate plate cost for {record.layer.value}")
            by_layer[record.layer] = record
        return [by_layer.get(layer, PlateCost(layer=layer)) for layer in STAGES]

    def plate(self, layer: Layer) -> PlateCost:
        index = layer.stage_index
        if index is None:
            raise KeyError("the floor has no plate cost")
        return self.plates[index]
