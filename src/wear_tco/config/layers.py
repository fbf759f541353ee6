"""Wear layers and their precedence.

The protected surface is a stack::

    stage4   ← top, wears first
    stage3
    stage2
    stage1
    stage0   ← may wear into the substrate (negative minimum)
    floor    ← substrate, wears only when nothing above it is left

Only one layer wears at any instant: the topmost installed stage that still
has thickness above its minimum.
"""

from __future__ import annotations

from enum import Enum


class Layer(str, Enum):
    FLOOR = "floor"
    STAGE0 = "stage0"
    STAGE1 = "stage1"
    STAGE2 = "stage2"
    STAGE3 = "stage3"
    STAGE4 = "stage4"

    @property
    def stage_index(self) -> int | None:
        """0–4 for stage layers, None for the floor."""
        if self is Layer.FLOOR:
            return None
        return int(self.value[-1])

    @property
    def label(self) -> str:
        """Human label, e.g. ``"Stage 3"``."""
        if self is Layer.FLOOR:
            return "Floor"
        return f"Stage {self.stage_index}"


# Stage layers in storage order (stage0 … stage4).
STAGES: tuple[Layer, ...] = (
    Layer.STAGE0,
    Layer.STAGE1,
    Layer.STAGE2,
    Layer.STAGE3,
    Layer.STAGE4,
)

# Wear precedence, highest first.  The floor is the implicit fallback.
PRECEDENCE: tuple[Layer, ...] = tuple(reversed(STAGES))

# Every layer, floor first: the column order of wear samples.
ALL_LAYERS: tuple[Layer, ...] = (Layer.FLOOR, *STAGES)
