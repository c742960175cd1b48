import math
from typing import Any, Dict

from .strategy import SliceContext, Strategy


class IcebergStrategy(Strategy):
    """
    Only a random fraction of the order shows per slice.
    """

    name = "ICEBERG"

    def __init__(self, params: Dict[str, Any] | None = None):
        super().__init__(params)

        self.min_fraction: float = _fraction(self.params.get("min_fraction", 0.2), "min_fraction")
        self.max_fraction: float = _fraction(self.params.get("max_fraction", 1.0), "max_fraction")

        if not 0.0 <= self.min_fraction <= self.max_fraction:
            raise ValueError(
                f"need 0 <= min_fraction <= max_fraction, got "
                f"{self.min_fraction}, {self.max_fraction}")

    def adjust_quantity(self, qty: float, ctx: SliceContext) -> float:
        return qty * ctx.rng.uniform(self.min_fraction, self.max_fraction)


def _fraction(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) \
            or not math.isfinite(value):
        raise ValueError(f"{name} must be a number, got {value!r}")
    return float(value)
