"""单仓位状态机与交易账本。

状态只有两种：`Flat`（空仓，初始）与 `Long`（持有一笔多头）。不支持做空。

    Flat --(入场条件)--> Long   记录入场价，打 BUY
    Long --(出场条件)--> Flat   结算收益，打 SELL

序列结束时残留的 Long 直接丢弃（不强制平仓），不计入任何统计。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from shared.models.models import SignalType, Trade, TradeResult


@dataclass(frozen=True)
class Flat:
    """空仓。"""


@dataclass(frozen=True)
class Long:
    """持有一笔多头。"""
    entry_price: float
    entry_index: int


PositionState = Union[Flat, Long]

FLAT = Flat()


def open_long(state: PositionState, price: float, index: int) -> Long:
    """Flat -> Long。"""
    if not isinstance(state, Flat):
        raise ValueError(f"cannot open a position while holding one (bar {index})")
    return Long(entry_price=float(price), entry_index=int(index))


def close_long(state: PositionState, price: float, index: int) -> tuple[Flat, Trade]:
    """Long -> Flat，返回结算后的交易。"""
    if not isinstance(state, Long):
        raise ValueError(f"cannot close a position while flat (bar {index})")
    trade = Trade(
        entry_index=state.entry_index,
        exit_index=int(index),
        entry_price=state.entry_price,
        exit_price=float(price),
    )
    return FLAT, trade


def summarize_trades(trades: Iterable[Trade], threshold: float) -> tuple[float, float, int]:
    """返回 (success_rate%, avg_return%, total_trades)；无交易时两个比率都为 0。"""
    total = 0
    profitable = 0
    total_ret = 0.0
    for t in trades:
        ret = t.ret
        total_ret += ret
        if ret > threshold:
            profitable += 1
        total += 1
    if not total:
        return 0.0, 0.0, 0
    return profitable / total * 100, (total_ret / total) * 100, total


class TradeLedger:
    """驱动状态机并记录信号轨迹与成交。

    每根 bar 至多发生一次状态迁移：空仓时只看入场条件，持仓时只看出场条件。
    """

    def __init__(self, n_bars: int):
        self.state: PositionState = FLAT
        self.signals: list[SignalType] = [SignalType.NONE] * n_bars
        self.trades: list[Trade] = []

    @property
    def holding(self) -> bool:
        return isinstance(self.state, Long)

    def step(self, index: int, price: float, *, entry: bool, exit: bool) -> SignalType:
        if isinstance(self.state, Flat):
            if entry:
                self.state = open_long(self.state, price, index)
                self.signals[index] = SignalType.BUY
                return SignalType.BUY
        elif exit:
            self.state, trade = close_long(self.state, price, index)
            self.trades.append(trade)
            self.signals[index] = SignalType.SELL
            return SignalType.SELL
        return SignalType.NONE

    def summarize(self, strategy: str, threshold: float) -> TradeResult:
        success_rate, avg_return, total = summarize_trades(self.trades, threshold)
        return TradeResult(
            strategy=strategy,
            success_rate=success_rate,
            avg_return=avg_return,
            total_trades=total,
            signals=tuple(self.signals),
            trades=tuple(self.trades),
            open_position=self.holding,
        )
