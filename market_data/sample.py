"""示例数据。

- `REFERENCE_CLOSES`：28 根 bar 的参考序列（100 下探 92 后一路上涨到 117），
  用作 demo 与回归测试；
- `synthetic_candles`：几何布朗运动随机游走，用于较长序列的冒烟测试。
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import numpy as np

from shared.models.models import Candle

REFERENCE_CLOSES: tuple[float, ...] = (
    100, 101, 102, 98, 96, 94, 92, 93, 95, 97,
    99, 101, 100, 102, 103, 105, 104, 106, 107, 109,
    110, 111, 113, 112, 114, 115, 117, 116,
)

_TS0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _candles(closes, symbol: str, interval: timedelta) -> list[Candle]:
    out: list[Candle] = []
    for i, c in enumerate(closes):
        start = _TS0 + interval * i
        out.append(Candle(close=float(c), symbol=symbol, start_ts=start, end_ts=start + interval))
    return out


def reference_candles(symbol: str = "DEMO") -> list[Candle]:
    return _candles(REFERENCE_CLOSES, symbol, timedelta(days=1))


def synthetic_candles(
    n: int = 500,
    seed: int = 42,
    start_price: float = 100.0,
    drift: float = 0.0002,
    vol: float = 0.015,
    symbol: str = "SYNTH",
) -> list[Candle]:
    """几何布朗运动日线序列。"""
    if n <= 0:
        raise ValueError("n must be > 0")
    if start_price <= 0:
        raise ValueError("start_price must be > 0")
    rng = np.random.default_rng(seed)
    returns = rng.normal(drift, vol, n)
    closes = start_price * np.exp(np.cumsum(returns))
    return _candles(closes, symbol, timedelta(days=1))
