# src/marketdata/mock_series.py

from __future__ import annotations

import datetime as dt
from typing import Dict, List

import numpy as np
import pandas as pd

from engine.models import PriceBar

START_PRICES: Dict[str, float] = {
    "Gold/USD": 2000.0,
    "Silver/USD": 25.0,
}
FALLBACK_START_PRICE = 80.0   # Oil/USD and anything else

DAILY_MOVE = 0.08    # close moves up to +/- 4% of open
WICK = 0.02          # high/low extend up to 2% past the body


def generate_mock_series(
    asset: str,
    start: str | dt.date,
    end: str | dt.date,
    rng: np.random.Generator,
) -> List[PriceBar]:
    """
    Daily random-walk OHLC bars from start to end (inclusive).

    Each bar opens at the previous close; times are YYYY-MM-DD strings.
    An end before start gives an empty series.
    """
    days = pd.date_range(start=start, end=end, freq="D")
    price = START_PRICES.get(asset, FALLBACK_START_PRICE)

    bars: List[PriceBar] = []
    for day in days:
        open_ = price
        move = (rng.random() - 0.5) * DAILY_MOVE * price
        close = round(open_ + move, 2)
        high = max(open_, close) + round(rng.random() * WICK * price, 2)
        low = min(open_, close) - round(rng.random() * WICK * price, 2)

        bars.append(PriceBar(
            time=day.strftime("%Y-%m-%d"),
            open=open_,
            high=high,
            low=low,
            close=close,
        ))
        price = close

    print(f"[mock_series] generated {len(bars)} bars for {asset}")
    return bars


def bars_to_frame(bars: List[PriceBar]) -> pd.DataFrame:
    return pd.DataFrame(
        [b.to_dict() for b in bars],
        columns=["time", "open", "high", "low", "close"],
    )


def bars_from_frame(df: pd.DataFrame) -> List[PriceBar]:
    missing = {"time", "close"} - set(df.columns)
    if missing:
        raise ValueError(f"price frame missing columns: {sorted(missing)}")

    return [PriceBar.from_dict(row) for row in df.to_dict(orient="records")]
