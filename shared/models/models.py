"""核心数据结构：Candle/SignalType/Trade/TradeResult。"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any


@dataclass
class Candle:
    """K 线数据。

    回测核心只消费 `close`；其余 OHLCV 字段仅作为元数据随行。
    """
    close: float
    symbol: str = ""
    open: float | None = None
    high: float | None = None
    low: float | None = None
    volume: float | None = None
    start_ts: datetime | None = None
    end_ts: datetime | None = None


class SignalType(IntEnum):
    """单根 bar 上的离散信号（数值与历史信号编码保持一致）。"""

    NONE = 0
    BUY = 1
    SELL = -1


@dataclass(frozen=True)
class Trade:
    """一次完整的 buy -> sell 往返。"""
    entry_index: int
    exit_index: int
    entry_price: float
    exit_price: float

    @property
    def ret(self) -> float:
        """收益率：(exit - entry) / entry。"""
        return (self.exit_price - self.entry_price) / self.entry_price


@dataclass(frozen=True)
class TradeResult:
    """单个策略一次评估的汇总结果。

    Attributes
    ----------
    success_rate:
        收益超过阈值的交易占比（百分比）。
    avg_return:
        平均单笔收益（百分比）。
    total_trades:
        已完成的往返交易数。
    signals:
        与输入序列逐 bar 对齐的信号轨迹。
    open_position:
        序列结束时是否残留未平仓的多头（该笔不计入统计）。
    """
    strategy: str
    success_rate: float
    avg_return: float
    total_trades: int
    signals: tuple[SignalType, ...]
    trades: tuple[Trade, ...] = field(default_factory=tuple)
    open_position: bool = False

    def to_dict(self) -> dict[str, Any]:
        trades = []
        for t in self.trades:
            row = asdict(t)
            row["ret"] = t.ret
            trades.append(row)
        return {
            "strategy": self.strategy,
            "success_rate": self.success_rate,
            "avg_return": self.avg_return,
            "total_trades": self.total_trades,
            "open_position": self.open_position,
            "signals": [int(s) for s in self.signals],
            "trades": trades,
        }
