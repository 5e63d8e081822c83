"""回测输入错误分类。

全部继承 ValueError：调用方可以按具体类型区分，也可以像其余配置/参数错误一样统一捕获。
"""

from __future__ import annotations


class BacktestInputError(ValueError):
    """回测输入不满足前置条件。"""


class InsufficientDataError(BacktestInputError):
    """序列长度（或指定 bar 之前的历史）不足以计算指标。"""

    def __init__(self, message: str, *, required: int | None = None, actual: int | None = None):
        super().__init__(message)
        self.required = required
        self.actual = actual


class DegenerateInputError(BacktestInputError):
    """阈值或收盘价不是有限数值（NaN/inf），或输入项缺少收盘价。"""
