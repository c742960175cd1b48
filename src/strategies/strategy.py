from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np


@dataclass(frozen=True)
class SliceContext:
    index: int                          # position in the schedule, not the series
    slice_count: int
    rng: np.random.Generator
    volumes: List[float] | None = None


class Strategy:
    name = "PASSTHROUGH"
    uses_volume = False   # ask the scheduler for synthetic volumes

    def __init__(self, params: Dict[str, Any] | None = None):
        self.params = params or {}

    def adjust_quantity(self, qty: float, ctx: SliceContext) -> float:
        """
        Called once per slice with the risk-sized, clipped quantity.
        Returns the quantity to execute for this slice.

        The base strategy leaves the quantity untouched; unknown
        strategy names fall back to it.
        """
        return qty
