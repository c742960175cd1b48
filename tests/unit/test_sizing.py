import numpy as np
import pytest

from engine.models import BacktestConfig
from engine.sizing import quantize_order, risk_quantity
from strategies.iceberg import IcebergStrategy
from strategies.strategy import SliceContext, Strategy
from strategies.twap import TwapStrategy
from strategies.vwap import VwapStrategy


def _ctx(index=0, slice_count=5, volumes=None, seed=0):
    return SliceContext(
        index=index,
        slice_count=slice_count,
        rng=np.random.default_rng(seed),
        volumes=volumes,
    )


def test_risk_quantity_and_clip():
    cfg = BacktestConfig(risk_per_trade=2, max_child_size=5000)
    # 2% of 10k = 200 risk, / 100 price * 20
    assert risk_quantity(10000, 100.0, cfg) == pytest.approx(40.0)

    small = BacktestConfig(risk_per_trade=2, max_child_size=10)
    assert risk_quantity(10000, 100.0, small) == 10

    custom = BacktestConfig(risk_per_trade=1, size_multiplier=4)
    assert risk_quantity(10000, 50.0, custom) == pytest.approx(8.0)


def test_twap_splits_evenly():
    cfg = BacktestConfig(strategy="TWAP", slice_count=5)
    qtys = [
        quantize_order(10000, 100.0, cfg, TwapStrategy(), _ctx(index=i))
        for i in range(5)
    ]
    assert qtys == [pytest.approx(8.0)] * 5


def test_vwap_weights_by_volume_share():
    cfg = BacktestConfig(strategy="VWAP", slice_count=2, reclip=False)
    volumes = [3.0, 1.0]

    first = quantize_order(10000, 100.0, cfg, VwapStrategy(), _ctx(0, 2, volumes))
    second = quantize_order(10000, 100.0, cfg, VwapStrategy(), _ctx(1, 2, volumes))

    assert first == pytest.approx(40.0 * 0.75 * 2)
    assert second == pytest.approx(40.0 * 0.25 * 2)
    assert first + second == pytest.approx(40.0 * 2)


def test_vwap_average_slice_matches_unsplit_quantity():
    cfg = BacktestConfig(strategy="VWAP", slice_count=4)
    qty = quantize_order(10000, 100.0, cfg, VwapStrategy(), _ctx(2, 4, [1.0] * 4))
    assert qty == pytest.approx(40.0)


def test_reclip_after_transform():
    volumes = [3.0, 1.0]
    loose = BacktestConfig(slice_count=2, max_child_size=50, reclip=False)
    tight = BacktestConfig(slice_count=2, max_child_size=50, reclip=True)

    assert quantize_order(10000, 100.0, loose, VwapStrategy(), _ctx(0, 2, volumes)) \
        == pytest.approx(60.0)
    assert quantize_order(10000, 100.0, tight, VwapStrategy(), _ctx(0, 2, volumes)) == 50


def test_iceberg_shows_a_fraction():
    cfg = BacktestConfig(strategy="ICEBERG")
    strategy = IcebergStrategy()
    for seed in range(20):
        qty = quantize_order(10000, 100.0, cfg, strategy, _ctx(seed=seed))
        assert 8.0 <= qty <= 40.0


def test_unknown_strategy_passes_through():
    cfg = BacktestConfig(strategy="MARKET", max_child_size=25)
    assert quantize_order(10000, 100.0, cfg, Strategy(), _ctx()) == 25


def test_quantity_never_negative():
    cfg = BacktestConfig()
    assert quantize_order(-500, 100.0, cfg, TwapStrategy(), _ctx()) == 0.0
    zero_risk = BacktestConfig(risk_per_trade=0)
    assert quantize_order(10000, 100.0, zero_risk, TwapStrategy(), _ctx()) == 0.0
