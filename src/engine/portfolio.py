from typing import Tuple

from .models import EquityPoint, RunState, Trade


def record_trade(state: RunState, trade: Trade) -> Tuple[RunState, EquityPoint]:
    """
    Apply one fill to the run state. Trades must arrive in
    chronological order: the next slice is sized from the capital
    returned here.
    """
    state = state.record(trade.pnl)
    return state, EquityPoint(time=trade.time, value=state.capital)


def total_pnl(state: RunState, starting_capital: float) -> float:
    return state.capital - starting_capital


def win_rate(state: RunState) -> float:
    # percent, 0..100
    if not state.total_trades:
        return 0.0
    return 100.0 * state.wins / state.total_trades
