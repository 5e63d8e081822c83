"""RSI 超买超卖策略。

RSI < oversold 且空仓 -> 买入；RSI > overbought 且持仓 -> 卖出。
"""

from __future__ import annotations

from typing import Any, Iterator

import numpy as np

from algo.factors.window import ZERO_LOSS_MODES, rsi
from algo.strategy.base import Decision, Strategy
from shared.models.models import TradeResult


class RSIStrategy(Strategy):
    """RSI 均值回归策略。

    Params:
    - period: RSI 窗口 (default 14)
    - warmup: 首个参与决策的 bar 下标 (default 15，比 period 多跳过一根，沿用历史口径)
    - oversold / overbought: 阈值 (default 30 / 70)
    - zero_loss: loss == 0 时的 RSI 口径，"compat" | "conventional"
    """

    name = "rsi"

    def __init__(
        self,
        period: int = 14,
        warmup: int = 15,
        oversold: float = 30.0,
        overbought: float = 70.0,
        zero_loss: str = "compat",
    ):
        self.period = int(period)
        self.warmup = int(warmup)
        self.oversold = float(oversold)
        self.overbought = float(overbought)
        self.zero_loss = str(zero_loss)
        if self.period <= 0:
            raise ValueError("RSI period must be > 0")
        if self.warmup < 0:
            raise ValueError("RSI warmup must be >= 0")
        if not 0 <= self.oversold <= self.overbought <= 100:
            raise ValueError("RSI thresholds must satisfy 0 <= oversold <= overbought <= 100")
        if self.zero_loss not in ZERO_LOSS_MODES:
            raise ValueError(f"Unknown zero_loss mode: {self.zero_loss}")

    @property
    def params(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "warmup": self.warmup,
            "oversold": self.oversold,
            "overbought": self.overbought,
            "zero_loss": self.zero_loss,
        }

    @property
    def min_bars(self) -> int:
        return max(self.warmup, self.period + 1)

    def decisions(self, closes: np.ndarray) -> Iterator[Decision]:
        # warmup < period 时，历史不足的 bar 只会拿到中性哨兵值，直接跳过
        start = max(self.warmup, self.period)
        for i in range(start, len(closes)):
            value = rsi(closes, i, self.period, zero_loss=self.zero_loss)  # type: ignore[arg-type]
            yield i, value < self.oversold, value > self.overbought


def run_rsi_strategy(candles: Any, profit_threshold: float, **params: Any) -> TradeResult:
    return RSIStrategy(**params).evaluate(candles, profit_threshold)
