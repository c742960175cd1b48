from typing import List, Sequence

import numpy as np

from strategies.strategy import SliceContext, Strategy

from .equity import segment_equity_curve
from .execution import CoinFlipDecisionModel, UniformShockMarketModel, simulate_fill
from .metrics import compute_metrics
from .models import (
    BacktestConfig,
    BacktestResult,
    EquityPoint,
    PriceBar,
    RunState,
    Slice,
    Trade,
    ValidationError,
)
from .portfolio import record_trade, total_pnl, win_rate
from .schedule import build_schedule
from .sizing import quantize_order


def run_backtest(
    strategy: Strategy,
    bars: Sequence[PriceBar],
    config: BacktestConfig,
    rng: np.random.Generator | None = None,
    market_model=None,
    decision_model=None,
) -> BacktestResult:
    if not bars:
        raise ValidationError("No data provided")

    if rng is None:
        rng = np.random.default_rng(config.seed)
    if market_model is None:
        market_model = UniformShockMarketModel(config.volatility)
    if decision_model is None:
        decision_model = CoinFlipDecisionModel()

    schedule = build_schedule(
        len(bars), config.slice_count, rng, with_volumes=strategy.uses_volume)

    state = RunState(capital=config.starting_capital)
    slices: List[Slice] = []
    trades: List[Trade] = []
    equity_curve: List[EquityPoint] = []

    for i, idx in enumerate(schedule.indices):
        bar = bars[idx]
        ctx = SliceContext(
            index=i,
            slice_count=config.slice_count,
            rng=rng,
            volumes=schedule.volumes,
        )

        qty = quantize_order(state.capital, bar.close, config, strategy, ctx)
        slc, trade = simulate_fill(bar, qty, market_model, decision_model, rng)

        state, point = record_trade(state, trade)
        slices.append(slc)
        trades.append(trade)
        equity_curve.append(point)

    summary = compute_metrics(
        config.starting_capital, state, equity_curve, trades, slices)

    print(f"[backtest] strategy={strategy.name} bars={len(bars)} "
          f"slices={len(slices)} pnl={summary['total_pnl']:.2f} "
          f"win_rate={summary['win_rate']:.1f}%")

    return BacktestResult(
        slices=slices,
        trades=trades,
        total_pnl=total_pnl(state, config.starting_capital),
        win_rate=win_rate(state),
        final_state=state,
        equity_curve=equity_curve,
        equity_segments=segment_equity_curve(equity_curve),
        summary=summary,
    )
