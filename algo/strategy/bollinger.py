"""布林带均值回归策略。

逻辑:
1. Mid = MA(Close, N)，Upper/Lower = Mid ± K * StdDev（总体标准差）
2. 空仓且 Close < Lower: 买入
3. 持仓且 Close > Upper: 卖出

Params:
- period: MA 窗口 (default 20)
- num_std: 标准差倍数 (default 2.0)
"""

from __future__ import annotations

from typing import Any, Iterator

import numpy as np

from algo.factors.window import sma, stddev
from algo.strategy.base import Decision, Strategy
from shared.models.models import TradeResult


class BollingerStrategy(Strategy):
    name = "bollinger"

    def __init__(self, period: int = 20, num_std: float = 2.0):
        self.period = int(period)
        self.num_std = float(num_std)
        if self.period <= 0:
            raise ValueError("Bollinger period must be > 0")
        if self.num_std < 0:
            raise ValueError("Bollinger num_std must be >= 0")

    @property
    def params(self) -> dict[str, Any]:
        return {"period": self.period, "num_std": self.num_std}

    @property
    def min_bars(self) -> int:
        return self.period

    def bands(self, closes: np.ndarray, i: int) -> tuple[float, float, float]:
        """bar `i` 的 (lower, mid, upper)。"""
        mid = sma(closes, i, self.period)
        sigma = stddev(closes, i, self.period, mid)
        return mid - self.num_std * sigma, mid, mid + self.num_std * sigma

    def decisions(self, closes: np.ndarray) -> Iterator[Decision]:
        # 首根决策 bar 为 period（而非 period-1），与历史回测口径一致
        for i in range(self.period, len(closes)):
            lower, _, upper = self.bands(closes, i)
            price = closes[i]
            yield i, price < lower, price > upper


def run_bollinger_strategy(candles: Any, profit_threshold: float, **params: Any) -> TradeResult:
    return BollingerStrategy(**params).evaluate(candles, profit_threshold)
