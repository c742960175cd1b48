from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List

import numpy as np
import pandas as pd
import requests

from app.backtests import DEFAULT_ASSET, DEFAULT_FROM, DEFAULT_TO, serialize_result
from engine.backtest import run_backtest
from engine.models import (
    DEFAULT_MAX_CHILD_SIZE,
    DEFAULT_RISK_PER_TRADE,
    DEFAULT_SLICE_COUNT,
    DEFAULT_STARTING_CAPITAL,
    BacktestConfig,
    PriceBar,
)
from marketdata.mock_series import bars_from_frame, bars_to_frame, generate_mock_series
from strategies.registry import get_strategy


def _load_bars(args: argparse.Namespace) -> List[PriceBar]:
    if args.csv:
        path = Path(args.csv)
        if not path.exists():
            raise FileNotFoundError(f"Price CSV not found: {path}")
        return bars_from_frame(pd.read_csv(path))

    rng = np.random.default_rng(args.seed)
    return generate_mock_series(args.asset, args.date_from, args.date_to, rng)


def _request_body(args: argparse.Namespace, bars: List[PriceBar]) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "data": [b.to_dict() for b in bars],
        "strategy": args.strategy,
        "startingCapital": args.capital,
        "riskPerTrade": args.risk,
        "sliceCount": args.slices,
        "maxChildSize": args.max_child,
        "reclip": not args.no_reclip,
    }
    if args.seed is not None:
        body["seed"] = args.seed
    return body


def _run_remote(url: str, body: Dict[str, Any]) -> Dict[str, Any]:
    resp = requests.post(url, json=body, timeout=30)
    if resp.status_code != 200:
        raise RuntimeError(
            f"backtest server returned {resp.status_code}: {resp.text}")
    return resp.json()


def _run_local(body: Dict[str, Any], bars: List[PriceBar]) -> Dict[str, Any]:
    config = BacktestConfig.from_request(body)
    result = run_backtest(get_strategy(config.strategy), bars, config)
    return serialize_result(result)


def _save_outputs(out_dir: Path, bars: List[PriceBar], result: Dict[str, Any]) -> None:
    """
    Writes:
      - prices.csv        (input bars)
      - trades.csv        (time, action, pnl)
      - equity_curve.csv  (time, value)
      - summary.json
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    bars_to_frame(bars).to_csv(out_dir / "prices.csv", index=False)
    pd.DataFrame(result["trades"], columns=["time", "action", "pnl"]).to_csv(
        out_dir / "trades.csv", index=False)
    pd.DataFrame(result["equityCurve"], columns=["time", "value"]).to_csv(
        out_dir / "equity_curve.csv", index=False)

    summary = result.get("summary") or {
        "total_pnl": result["totalPnL"], "win_rate": result["winRate"]}
    with open(out_dir / "summary.json", "w") as f:
        json.dump(summary, f, indent=2)

    print(f"[run_backtest] wrote results to {out_dir}")


def _parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Run a TWAP/VWAP/ICEBERG backtest on a price series."
    )
    p.add_argument("--strategy", default="TWAP",
                   help="TWAP, VWAP or ICEBERG; anything else trades unadjusted size.")
    p.add_argument("--csv", help="CSV with time,open,high,low,close columns. "
                                 "Omit to use a generated random walk.")
    p.add_argument("--asset", default=DEFAULT_ASSET,
                   help="Asset for the generated series (Gold/USD, Silver/USD, Oil/USD).")
    p.add_argument("--from", dest="date_from", default=DEFAULT_FROM,
                   help="First day of the generated series (YYYY-MM-DD).")
    p.add_argument("--to", dest="date_to", default=DEFAULT_TO,
                   help="Last day of the generated series (YYYY-MM-DD).")
    p.add_argument("--capital", type=float, default=DEFAULT_STARTING_CAPITAL)
    p.add_argument("--risk", type=float, default=DEFAULT_RISK_PER_TRADE,
                   help="Risk per trade, percent of capital.")
    p.add_argument("--slices", type=int, default=DEFAULT_SLICE_COUNT)
    p.add_argument("--max-child", type=float, default=DEFAULT_MAX_CHILD_SIZE)
    p.add_argument("--no-reclip", action="store_true",
                   help="Allow VWAP/ICEBERG slices above --max-child.")
    p.add_argument("--seed", type=int, help="Seed for reproducible runs.")
    p.add_argument("--url", help="POST to a running server, e.g. "
                                 "http://127.0.0.1:5000/api/backtest")
    p.add_argument("--out", help="Directory for CSV/JSON outputs.")
    return p.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    args = _parse_args(argv)

    bars = _load_bars(args)
    body = _request_body(args, bars)

    if args.url:
        print(f"[run_backtest] posting {len(bars)} bars to {args.url}")
        result = _run_remote(args.url, body)
    else:
        result = _run_local(body, bars)

    print(f"[run_backtest] trades={len(result['trades'])} "
          f"total_pnl={result['totalPnL']:.2f} win_rate={result['winRate']:.2f}%")

    if args.out:
        _save_outputs(Path(args.out), bars, result)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
