from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, List

DEFAULT_STARTING_CAPITAL = 10000.0
DEFAULT_RISK_PER_TRADE = 2.0      # percent of capital
DEFAULT_SLICE_COUNT = 20
DEFAULT_MAX_CHILD_SIZE = 5000.0
DEFAULT_SIZE_MULTIPLIER = 20.0    # scales simulated trade magnitude
DEFAULT_VOLATILITY = 0.15         # +/- 15% price move per fill

BUY = "BUY"
SELL = "SELL"


class ValidationError(ValueError):
    """Raised for bad backtest input, before any simulation work."""


@dataclass(frozen=True)
class PriceBar:
    time: Any
    open: float
    high: float
    low: float
    close: float

    @classmethod
    def from_dict(cls, raw: Any) -> "PriceBar":
        if not isinstance(raw, dict):
            raise ValidationError("price bar must be an object")

        close = _as_number(raw.get("close"), "close")
        if close <= 0:
            raise ValidationError(f"close must be positive, got {close}")

        # open/high/low are display-only; fall back to close when absent
        return cls(
            time=raw.get("time"),
            open=_as_number(raw.get("open", close), "open"),
            high=_as_number(raw.get("high", close), "high"),
            low=_as_number(raw.get("low", close), "low"),
            close=close,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
        }


@dataclass(frozen=True)
class BacktestConfig:
    strategy: str = "TWAP"
    starting_capital: float = DEFAULT_STARTING_CAPITAL
    risk_per_trade: float = DEFAULT_RISK_PER_TRADE
    slice_count: int = DEFAULT_SLICE_COUNT
    max_child_size: float = DEFAULT_MAX_CHILD_SIZE
    size_multiplier: float = DEFAULT_SIZE_MULTIPLIER
    volatility: float = DEFAULT_VOLATILITY
    reclip: bool = True    # clip again after the strategy transform
    seed: int | None = None

    def __post_init__(self):
        if self.starting_capital <= 0:
            raise ValidationError("startingCapital must be > 0")
        if self.risk_per_trade < 0:
            raise ValidationError("riskPerTrade must be >= 0")
        if self.slice_count < 1:
            raise ValidationError("sliceCount must be >= 1")
        if self.max_child_size <= 0:
            raise ValidationError("maxChildSize must be > 0")
        if self.size_multiplier <= 0:
            raise ValidationError("sizeMultiplier must be > 0")
        if self.volatility < 0:
            raise ValidationError("volatility must be >= 0")
        if self.seed is not None and self.seed < 0:
            raise ValidationError("seed must be >= 0")

    @classmethod
    def from_request(cls, body: Dict[str, Any], default_seed: int | None = None) -> "BacktestConfig":
        """
        Build a config from a camelCase request body:
          strategy, startingCapital, riskPerTrade, sliceCount, maxChildSize,
          sizeMultiplier, volatility, reclip, seed
        Missing keys take the module defaults.
        """
        strategy = body.get("strategy")
        seed = body.get("seed", default_seed)

        return cls(
            strategy="" if strategy is None else str(strategy),
            starting_capital=_as_number(
                body.get("startingCapital", DEFAULT_STARTING_CAPITAL), "startingCapital"),
            risk_per_trade=_as_number(
                body.get("riskPerTrade", DEFAULT_RISK_PER_TRADE), "riskPerTrade"),
            slice_count=_as_int(
                body.get("sliceCount", DEFAULT_SLICE_COUNT), "sliceCount"),
            max_child_size=_as_number(
                body.get("maxChildSize", DEFAULT_MAX_CHILD_SIZE), "maxChildSize"),
            size_multiplier=_as_number(
                body.get("sizeMultiplier", DEFAULT_SIZE_MULTIPLIER), "sizeMultiplier"),
            volatility=_as_number(
                body.get("volatility", DEFAULT_VOLATILITY), "volatility"),
            reclip=_as_bool(body.get("reclip", True), "reclip"),
            seed=None if seed is None else _as_int(seed, "seed"),
        )


@dataclass(frozen=True)
class Slice:
    timestamp: Any
    exec_price: float
    qty: float
    price_change: float
    pnl: float


@dataclass(frozen=True)
class Trade:
    time: Any
    action: str          # "BUY" | "SELL"
    pnl: float


@dataclass(frozen=True)
class RunState:
    capital: float
    wins: int = 0
    total_trades: int = 0

    def record(self, pnl: float) -> "RunState":
        return replace(
            self,
            capital=self.capital + pnl,
            wins=self.wins + (1 if pnl > 0 else 0),
            total_trades=self.total_trades + 1,
        )


@dataclass(frozen=True)
class EquityPoint:
    time: Any
    value: float


@dataclass(frozen=True)
class EquitySegment:
    points: List[EquityPoint]
    trend: str           # "up" | "down"


@dataclass
class BacktestResult:
    slices: List[Slice]
    trades: List[Trade]
    total_pnl: float
    win_rate: float
    final_state: RunState
    equity_curve: List[EquityPoint]
    equity_segments: List[EquitySegment]
    summary: Dict[str, float]


def _as_number(value: Any, name: str) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number")
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite")
    return value


def _as_int(value: Any, name: str) -> int:
    number = _as_number(value, name)
    if not number.is_integer():
        raise ValidationError(f"{name} must be an integer")
    return int(number)


def _as_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be true or false")
    return value
