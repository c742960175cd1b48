from typing import Tuple

import numpy as np

from .models import BUY, DEFAULT_VOLATILITY, SELL, PriceBar, Slice, Trade


class UniformShockMarketModel:
    """
    Fill price = market price shocked by U(-volatility, +volatility).
    """

    def __init__(self, volatility: float = DEFAULT_VOLATILITY):
        self.volatility = volatility

    def price_change(self, bar: PriceBar, rng: np.random.Generator) -> float:
        return rng.uniform(-self.volatility, self.volatility) * bar.close


class CoinFlipDecisionModel:
    # placeholder signal: BUY or SELL with equal odds
    def decide(self, bar: PriceBar, rng: np.random.Generator) -> str:
        return BUY if rng.random() < 0.5 else SELL


def fill_pnl(action: str, market_price: float, exec_price: float, qty: float) -> float:
    if action == BUY:
        return (exec_price - market_price) * qty
    return (market_price - exec_price) * qty


def simulate_fill(
    bar: PriceBar,
    qty: float,
    market_model,
    decision_model,
    rng: np.random.Generator,
) -> Tuple[Slice, Trade]:
    market_price = bar.close

    price_change = market_model.price_change(bar, rng)
    exec_price = market_price + price_change
    action = decision_model.decide(bar, rng)
    pnl = fill_pnl(action, market_price, exec_price, qty)

    return (
        Slice(
            timestamp=bar.time,
            exec_price=exec_price,
            qty=qty,
            price_change=price_change,
            pnl=pnl,
        ),
        Trade(time=bar.time, action=action, pnl=pnl),
    )
