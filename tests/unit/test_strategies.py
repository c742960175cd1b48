import numpy as np
import pytest

from strategies.iceberg import IcebergStrategy
from strategies.registry import STRATEGY_REGISTRY, get_strategy
from strategies.strategy import SliceContext, Strategy
from strategies.twap import TwapStrategy
from strategies.vwap import VwapStrategy


def test_registry_dispatch():
    assert isinstance(get_strategy("TWAP"), TwapStrategy)
    assert isinstance(get_strategy("VWAP"), VwapStrategy)
    assert isinstance(get_strategy("ICEBERG"), IcebergStrategy)
    assert set(STRATEGY_REGISTRY) == {"TWAP", "VWAP", "ICEBERG"}


def test_unknown_names_fall_back_to_passthrough():
    for name in ("twap", "MARKET", "", None):
        strategy = get_strategy(name)
        assert type(strategy) is Strategy
        assert not strategy.uses_volume


def test_only_vwap_asks_for_volumes():
    assert VwapStrategy.uses_volume
    assert not TwapStrategy.uses_volume
    assert not IcebergStrategy.uses_volume


def test_iceberg_params():
    strategy = get_strategy("ICEBERG", {"min_fraction": 0.5, "max_fraction": 0.5})
    ctx = SliceContext(index=0, slice_count=1, rng=np.random.default_rng(0))
    assert strategy.adjust_quantity(10.0, ctx) == pytest.approx(5.0)

    with pytest.raises(ValueError):
        IcebergStrategy({"min_fraction": 0.9, "max_fraction": 0.1})


@pytest.mark.parametrize("value", [None, [0.5], {"x": 1}, "0.5", True, float("nan")])
def test_iceberg_rejects_non_numeric_fractions(value):
    with pytest.raises(ValueError):
        IcebergStrategy({"min_fraction": value})
    with pytest.raises(ValueError):
        IcebergStrategy({"max_fraction": value})


def test_vwap_needs_volumes():
    ctx = SliceContext(index=0, slice_count=2, rng=np.random.default_rng(0))
    with pytest.raises(RuntimeError):
        VwapStrategy().adjust_quantity(10.0, ctx)
