"""MACD 金叉/死叉策略。

逻辑：
1. 快/慢 EMA 以 `closes[fast-1]` / `closes[slow-1]` 为种子，从 bar `slow` 开始同步递推；
2. MACD = EMA_fast - EMA_slow，下标 0 对应 bar `slow`；
3. 信号线 = MACD 的 `signal` 周期 EMA，以 MACD[0] 为种子；
4. 金叉（MACD 上穿信号线）且空仓 -> 买入；死叉且持仓 -> 卖出。
"""

from __future__ import annotations

from typing import Any, Iterator

import numpy as np

from algo.factors.window import ema
from algo.strategy.base import Decision, Strategy
from shared.models.models import TradeResult


class MACDStrategy(Strategy):
    """MACD 交叉策略（fast=12, slow=26, signal=9）。"""

    name = "macd"

    def __init__(self, fast: int = 12, slow: int = 26, signal: int = 9):
        self.fast = int(fast)
        self.slow = int(slow)
        self.signal = int(signal)
        if self.fast <= 0 or self.slow <= 0 or self.signal <= 0:
            raise ValueError("MACD periods must be > 0")
        if self.fast >= self.slow:
            raise ValueError("MACD fast period must be < slow period")

    @property
    def params(self) -> dict[str, Any]:
        return {"fast": self.fast, "slow": self.slow, "signal": self.signal}

    @property
    def min_bars(self) -> int:
        # 慢线种子读取 closes[slow-1]
        return self.slow

    def lines(self, closes: np.ndarray) -> tuple[list[float], list[float]]:
        """返回 (macd, signal) 两条线，下标 0 对应 bar `slow`。"""
        ema_fast = float(closes[self.fast - 1])
        ema_slow = float(closes[self.slow - 1])
        macd: list[float] = []
        for i in range(self.slow, len(closes)):
            ema_fast = ema(closes[i], self.fast, ema_fast)
            ema_slow = ema(closes[i], self.slow, ema_slow)
            macd.append(ema_fast - ema_slow)

        signal: list[float] = []
        if macd:
            signal.append(macd[0])
            for j in range(1, len(macd)):
                signal.append(ema(macd[j], self.signal, signal[-1]))
        return macd, signal

    def decisions(self, closes: np.ndarray) -> Iterator[Decision]:
        macd, signal = self.lines(closes)
        for j in range(1, len(signal)):
            bullish = macd[j - 1] < signal[j - 1] and macd[j] > signal[j]
            bearish = macd[j - 1] > signal[j - 1] and macd[j] < signal[j]
            yield j + self.slow, bullish, bearish


def run_macd_strategy(candles: Any, profit_threshold: float, **params: Any) -> TradeResult:
    return MACDStrategy(**params).evaluate(candles, profit_threshold)
