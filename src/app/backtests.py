# src/app/backtests.py

from typing import Any, Dict, List

import numpy as np
from flask import Blueprint, jsonify, request

from app import config as app_config
from engine.backtest import run_backtest
from engine.models import (
    BacktestConfig,
    BacktestResult,
    EquityPoint,
    PriceBar,
    ValidationError,
)
from marketdata.mock_series import generate_mock_series
from strategies.registry import get_strategy

bp = Blueprint("backtests", __name__)

DEFAULT_ASSET = "Gold/USD"
DEFAULT_FROM = "2024-03-01"
DEFAULT_TO = "2024-03-31"


def _parse_bars(data: Any) -> List[PriceBar]:
    if not data or not isinstance(data, list):
        raise ValidationError("No data provided")
    return [PriceBar.from_dict(raw) for raw in data]


def _point_json(p: EquityPoint) -> Dict[str, Any]:
    return {"time": p.time, "value": p.value}


def serialize_result(result: BacktestResult) -> Dict[str, Any]:
    """
    camelCase response body. slices/trades/totalPnL/winRate are the
    core contract; the equity and summary keys feed the charts.
    """
    return {
        "slices": [
            {
                "timestamp": s.timestamp,
                "price": s.exec_price,
                "qty": s.qty,
                "priceChange": s.price_change,
                "pnl": s.pnl,
            }
            for s in result.slices
        ],
        "trades": [
            {"time": t.time, "action": t.action, "pnl": t.pnl}
            for t in result.trades
        ],
        "totalPnL": result.total_pnl,
        "winRate": result.win_rate,
        "equityCurve": [_point_json(p) for p in result.equity_curve],
        "equitySegments": [
            {"trend": seg.trend, "points": [_point_json(p) for p in seg.points]}
            for seg in result.equity_segments
        ],
        "summary": result.summary,
    }


@bp.route("/api/backtest", methods=["POST"])
def create_backtest():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}

    try:
        bars = _parse_bars(body.get("data"))
        config = BacktestConfig.from_request(
            body, default_seed=app_config.BACKTEST_SEED)
        params = body.get("params")
        strategy = get_strategy(
            config.strategy, params if isinstance(params, dict) else None)
    except ValueError as e:
        print(f"[backtests] WARNING: rejected request: {e}")
        return jsonify({"error": str(e)}), 400

    result = run_backtest(strategy, bars, config)
    return jsonify(serialize_result(result))


@bp.route("/api/mock-data", methods=["GET"])
def mock_data():
    asset = request.args.get("asset", DEFAULT_ASSET)
    start = request.args.get("from", DEFAULT_FROM)
    end = request.args.get("to", DEFAULT_TO)
    raw_seed = request.args.get("seed")

    try:
        seed = None if raw_seed is None else int(raw_seed)
        if seed is not None and seed < 0:
            raise ValueError(f"seed must be >= 0, got {seed}")
        bars = generate_mock_series(asset, start, end, np.random.default_rng(seed))
    except ValueError as e:
        # bad seed or unparseable dates
        return jsonify({"error": str(e)}), 400

    return jsonify({"data": [b.to_dict() for b in bars]})
