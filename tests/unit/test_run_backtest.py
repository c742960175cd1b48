import json

import pandas as pd
import requests

from app import run_backtest as cli


class DummyResp:
    status_code = 200

    def __init__(self, payload):
        self._payload = payload
        self.text = json.dumps(payload)

    def json(self):
        return self._payload


def test_local_run_writes_outputs(tmp_path, capsys):
    out = tmp_path / "run"
    assert cli.main(["--strategy", "VWAP", "--slices", "6", "--seed", "3",
                     "--out", str(out)]) == 0

    trades = pd.read_csv(out / "trades.csv")
    assert len(trades) == 6
    assert list(trades.columns) == ["time", "action", "pnl"]
    assert len(pd.read_csv(out / "equity_curve.csv")) == 6
    assert len(pd.read_csv(out / "prices.csv")) == 31

    summary = json.loads((out / "summary.json").read_text())
    assert summary["num_trades"] == 6
    assert "[run_backtest] trades=6" in capsys.readouterr().out


def test_csv_input_round_trips_through_run(tmp_path):
    first = tmp_path / "first"
    cli.main(["--seed", "8", "--slices", "4", "--out", str(first)])

    second = tmp_path / "second"
    cli.main(["--csv", str(first / "prices.csv"), "--seed", "8", "--slices", "4",
              "--out", str(second)])

    a = pd.read_csv(first / "trades.csv")
    b = pd.read_csv(second / "trades.csv")
    pd.testing.assert_frame_equal(a, b)


def test_remote_run_posts_request(monkeypatch):
    seen = {}

    def fake_post(url, json=None, timeout=None):
        seen["url"] = url
        seen["body"] = json
        return DummyResp({"trades": [], "totalPnL": 0.0, "winRate": 0.0,
                          "equityCurve": []})

    monkeypatch.setattr(requests, "post", fake_post)

    assert cli.main(["--url", "http://test/api/backtest", "--strategy", "ICEBERG",
                     "--slices", "3", "--seed", "1"]) == 0
    assert seen["url"] == "http://test/api/backtest"
    assert seen["body"]["strategy"] == "ICEBERG"
    assert seen["body"]["sliceCount"] == 3
    assert seen["body"]["seed"] == 1
    assert len(seen["body"]["data"]) == 31
