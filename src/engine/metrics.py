from typing import Dict, List

from .models import BUY, SELL, EquityPoint, RunState, Slice, Trade


def compute_metrics(
    starting_capital: float,
    final_state: RunState,
    equity_curve: List[EquityPoint],
    trades: List[Trade],
    slices: List[Slice],
) -> Dict[str, float]:
    if not trades:
        return {
            "total_pnl": 0.0,
            "final_capital": final_state.capital,
            "num_trades": 0,
            "wins": 0,
            "losses": 0,
            "win_rate": 0.0,
            "avg_win": 0.0,
            "avg_loss": 0.0,
            "max_drawdown": 0.0,
            "buy_count": 0,
            "sell_count": 0,
            "avg_qty": 0.0,
        }

    wins = [t.pnl for t in trades if t.pnl > 0]
    losses = [t.pnl for t in trades if t.pnl < 0]

    # drawdown is measured from the starting capital, not the first fill
    values = [starting_capital] + [p.value for p in equity_curve]

    return {
        "total_pnl": final_state.capital - starting_capital,
        "final_capital": final_state.capital,
        "num_trades": final_state.total_trades,
        "wins": final_state.wins,
        "losses": len(losses),
        "win_rate": 100.0 * final_state.wins / final_state.total_trades,
        "avg_win": (sum(wins) / len(wins)) if wins else 0.0,
        "avg_loss": (sum(losses) / len(losses)) if losses else 0.0,
        "max_drawdown": _max_drawdown(values),
        "buy_count": sum(1 for t in trades if t.action == BUY),
        "sell_count": sum(1 for t in trades if t.action == SELL),
        "avg_qty": sum(s.qty for s in slices) / len(slices) if slices else 0.0,
    }


def _max_drawdown(values):
    peak = values[0]
    max_dd = 0.0
    for v in values:
        peak = max(peak, v)
        max_dd = max(max_dd, peak - v)
    return max_dd
