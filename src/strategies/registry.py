from typing import Any, Dict, Type

from .iceberg import IcebergStrategy
from .strategy import Strategy
from .twap import TwapStrategy
from .vwap import VwapStrategy

STRATEGY_REGISTRY: Dict[str, Type[Strategy]] = {
    "TWAP": TwapStrategy,
    "VWAP": VwapStrategy,
    "ICEBERG": IcebergStrategy,
}


def get_strategy(name: str | None, params: Dict[str, Any] | None = None) -> Strategy:
    # unknown names execute the clipped quantity as-is
    StrategyClass = STRATEGY_REGISTRY.get(name or "", Strategy)
    return StrategyClass(params)
