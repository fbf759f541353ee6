"""DataFrame views of engine series for charting and export."""

from __future__ import annotations

import pandas as pd

from wear_tco.config.layers import ALL_LAYERS
from wear_tco.models.results import CostAccumulation, WearAccumulation

WEAR_COLUMNS = [layer.value for layer in ALL_LAYERS]
COST_COLUMNS = ["period_cost", "cumulative_cost", "cost_per_hour"]


def wear_frame(samples: list[WearAccumulation]) -> pd.DataFrame:
    """Thickness per layer, indexed by operating hour."""
    frame = pd.DataFrame([s.model_dump() for s in samples], columns=["hours", *WEAR_COLUMNS])
    return frame.set_index("hours")


def cost_frame(samples: list[CostAccumulation]) -> pd.DataFrame:
    """Period, cumulative and per-hour cost, indexed by operating hour."""
    frame = pd.DataFrame([s.model_dump() for s in samples], columns=["hours", *COST_COLUMNS])
    return frame.set_index("hours")
