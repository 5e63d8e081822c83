"""策略引擎基类。

一次 `evaluate(candles, threshold)` 是纯函数：输入序列与阈值，输出一个 TradeResult，
实例上不保留任何跨调用状态，因此同一实例可以被重复调用或在多线程中共享。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator

import numpy as np

from algo.strategy.position import TradeLedger
from shared.errors import InsufficientDataError
from shared.models.models import SignalType, TradeResult
from shared.models.series import closes_from, validate_threshold
from shared.utils.logging import setup_logger

_LOGGER = setup_logger("strategy")

# (bar 下标, 入场条件, 出场条件)
Decision = tuple[int, bool, bool]


class Strategy(ABC):
    """单仓位、只做多的指标策略。

    子类只需实现 `min_bars` 与 `decisions()`：按 bar 给出入场/出场条件，
    状态机推进、成交记录与统计由基类统一完成。
    """

    name: str = "strategy"

    @property
    def params(self) -> dict[str, Any]:
        """当前参数（写入 summary）。"""
        return {}

    @property
    @abstractmethod
    def min_bars(self) -> int:
        """评估所需的最少 bar 数。"""
        ...

    @abstractmethod
    def decisions(self, closes: np.ndarray) -> Iterator[Decision]:
        """按时间顺序产出每根可决策 bar 的 (index, entry, exit)。"""
        ...

    def evaluate(self, candles: Any, threshold: float) -> TradeResult:
        """在一条价格序列上跑完整回测。

        Parameters
        ----------
        candles:
            Candle 序列 / 含 close 列的 DataFrame / 数值序列（见 `closes_from`）。
        threshold:
            单笔收益超过该值才算“成功”，如 0.01 表示 1%。

        Raises
        ------
        InsufficientDataError
            序列短于 `min_bars`。
        DegenerateInputError
            阈值或收盘价非有限数值。
        """
        threshold = validate_threshold(threshold)
        closes = closes_from(candles)
        if len(closes) < self.min_bars:
            raise InsufficientDataError(
                f"{self.name} strategy needs at least {self.min_bars} bars, got {len(closes)}",
                required=self.min_bars,
                actual=len(closes),
            )

        ledger = TradeLedger(len(closes))
        for idx, entry, exit_ in self.decisions(closes):
            sig = ledger.step(idx, closes[idx], entry=entry, exit=exit_)
            if sig is not SignalType.NONE:
                _LOGGER.debug("%s %s @ bar %d price=%.6f", self.name, sig.name, idx, closes[idx])

        result = ledger.summarize(self.name, threshold)
        _LOGGER.debug(
            "%s done: bars=%d trades=%d success=%.2f%% avg_ret=%.4f%%",
            self.name,
            len(closes),
            result.total_trades,
            result.success_rate,
            result.avg_return,
        )
        return result
