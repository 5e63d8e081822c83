"""逐 bar 窗口指标（标量版本）。

与 `algo/factors/*.py` 的向量化因子（DataFrame -> 列）不同，这里的函数面向
事件驱动式的策略循环：给定收盘价序列与 bar 下标 `i`，返回该 bar 的指标值。

约定：
- 窗口为 `closes[i - period + 1 .. i]`（含两端）；
- 历史不足时抛出 `InsufficientDataError`，不返回 0 之类的哨兵值；
- 唯一例外是 `rsi`：历史不足时返回中性值 `RSI_NEUTRAL`，调用方不得据此交易。
"""

from __future__ import annotations

import math
from typing import Literal, Sequence

from shared.errors import InsufficientDataError

RSI_NEUTRAL = 50.0

ZeroLossMode = Literal["compat", "conventional"]
ZERO_LOSS_MODES: tuple[str, ...] = ("compat", "conventional")


def has_history(i: int, period: int) -> bool:
    """bar `i` 是否有完整的 `period` 根窗口。"""
    return period > 0 and i >= period - 1


def window(closes: Sequence[float], i: int, period: int) -> Sequence[float]:
    """返回校验过长度的窗口切片 `closes[i-period+1 : i+1]`。"""
    if period <= 0:
        raise ValueError("window period must be > 0")
    if i < 0 or i >= len(closes):
        raise InsufficientDataError(
            f"bar index {i} out of range for series of length {len(closes)}",
            required=i + 1,
            actual=len(closes),
        )
    if not has_history(i, period):
        raise InsufficientDataError(
            f"bar {i} has {i + 1} bars of history, period {period} required",
            required=period,
            actual=i + 1,
        )
    return closes[i - period + 1 : i + 1]


def sma(closes: Sequence[float], i: int, period: int) -> float:
    """简单移动平均。"""
    w = window(closes, i, period)
    total = 0.0
    for c in w:
        total += c
    return total / period


def ema(value: float, period: int, prev_ema: float) -> float:
    """EMA 递推一步：`value*k + prev*(1-k)`，`k = 2/(period+1)`。

    种子由调用方决定（MACD 使用窗口首个收盘价作为种子）。
    """
    if period <= 0:
        raise ValueError("EMA period must be > 0")
    k = 2.0 / (period + 1)
    return value * k + prev_ema * (1 - k)


def rsi(
    closes: Sequence[float],
    i: int,
    period: int = 14,
    zero_loss: ZeroLossMode = "compat",
) -> float:
    """相对强弱指数（求和版本，无平滑）。

    gain/loss 为窗口内 `closes[j] - closes[j-1]` 的正/负部分之和。

    `zero_loss` 控制 loss == 0 时的取值：
    - "compat"：rs 记为 0，RSI = 0（全涨、无波动窗口都会落入超卖区，与历史结果保持一致）；
    - "conventional"：全涨窗口 RSI = 100，完全无波动窗口返回 `RSI_NEUTRAL`。
    """
    if period <= 0:
        raise ValueError("RSI period must be > 0")
    if zero_loss not in ZERO_LOSS_MODES:
        raise ValueError(f"Unknown zero_loss mode: {zero_loss}")
    if i >= len(closes):
        raise InsufficientDataError(
            f"bar index {i} out of range for series of length {len(closes)}",
            required=i + 1,
            actual=len(closes),
        )
    # 需要 closes[i - period] 作为第一个差分的基准
    if i < period:
        return RSI_NEUTRAL

    gain = 0.0
    loss = 0.0
    for j in range(i - period + 1, i + 1):
        change = closes[j] - closes[j - 1]
        if change > 0:
            gain += change
        else:
            loss -= change

    if loss == 0:
        if zero_loss == "conventional":
            return 100.0 if gain > 0 else RSI_NEUTRAL
        rs = 0.0
    else:
        rs = gain / loss
    return 100.0 - (100.0 / (1.0 + rs))


def stddev(closes: Sequence[float], i: int, period: int, mean: float) -> float:
    """总体标准差（除以 period），窗口与 `sma` 相同。"""
    w = window(closes, i, period)
    acc = 0.0
    for c in w:
        acc += (c - mean) ** 2
    return math.sqrt(acc / period)
