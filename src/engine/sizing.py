from strategies.strategy import SliceContext, Strategy

from .models import BacktestConfig


def risk_quantity(capital: float, market_price: float, config: BacktestConfig) -> float:
    """
    Risk-based size, clipped to max_child_size:
      risk_amount = capital * risk_per_trade / 100
      qty = (risk_amount / market_price) * size_multiplier

    size_multiplier only scales the magnitude of simulated trades;
    this is not a realistic sizing model.
    """
    risk_amount = capital * (config.risk_per_trade / 100.0)
    qty = (risk_amount / market_price) * config.size_multiplier
    return min(qty, config.max_child_size)


def quantize_order(
    capital: float,
    market_price: float,
    config: BacktestConfig,
    strategy: Strategy,
    ctx: SliceContext,
) -> float:
    qty = risk_quantity(capital, market_price, config)
    qty = strategy.adjust_quantity(qty, ctx)

    if config.reclip:
        qty = min(qty, config.max_child_size)

    # capital can go negative after heavy losses; never trade a negative size
    return max(qty, 0.0)
