"""收盘价序列（PriceSeries）归一化。

策略引擎只认一条不可变的 float 序列；这里负责把各种上游形态统一转换过来，
并在入口处拒绝 NaN/inf 与非正价格，避免统计结果被静默污染。
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from numbers import Real
from typing import Any, Iterable

import numpy as np
import pandas as pd

from shared.errors import DegenerateInputError


def _to_float(value: Any, idx: int) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise DegenerateInputError(f"close at bar {idx} is not a number: {value!r}") from exc


def close_value(item: Any, idx: int = 0) -> float:
    """取单个元素的收盘价：数值 / 含 "close" 键的映射 / 带 `close` 属性的对象。"""
    if isinstance(item, Real) and not isinstance(item, bool):
        return float(item)
    if isinstance(item, Mapping):
        if "close" not in item:
            raise DegenerateInputError(f"item {idx} has no 'close' key")
        return _to_float(item["close"], idx)
    close = getattr(item, "close", None)
    if close is None:
        raise DegenerateInputError(f"item {idx} ({type(item).__name__}) has no close value")
    return _to_float(close, idx)


def closes_from(source: Any) -> np.ndarray:
    """把 candles/DataFrame/Series/数值序列转换为只读 float64 数组。

    支持：
    - pandas.DataFrame（取 `close` 列）/ pandas.Series / numpy 数组
    - 任意可迭代对象，元素为数值、带 `close` 属性的对象（如 Candle）或含 "close" 键的 dict

    Raises
    ------
    DegenerateInputError
        收盘价非数值、非有限或不为正，或元素取不到收盘价。
    """
    if isinstance(source, pd.DataFrame):
        if "close" not in source.columns:
            raise DegenerateInputError("price frame has no 'close' column")
        source = source["close"]
    try:
        if isinstance(source, pd.Series):
            arr = source.to_numpy(dtype=float, copy=True)
        elif isinstance(source, np.ndarray):
            arr = np.array(source, dtype=float, copy=True).reshape(-1)
        elif isinstance(source, Iterable) and not isinstance(source, (str, bytes)):
            arr = np.array([close_value(item, i) for i, item in enumerate(source)], dtype=float)
        else:
            raise DegenerateInputError(f"unsupported price source: {type(source).__name__}")
    except DegenerateInputError:
        raise
    except (TypeError, ValueError) as exc:
        raise DegenerateInputError(f"price series is not numeric: {exc}") from exc

    bad = np.flatnonzero(~np.isfinite(arr))
    if bad.size:
        raise DegenerateInputError(f"non-finite close at bar {int(bad[0])}: {arr[bad[0]]}")
    # 收益率以入场价为分母，非正价格没有意义
    bad = np.flatnonzero(arr <= 0)
    if bad.size:
        raise DegenerateInputError(f"non-positive close at bar {int(bad[0])}: {arr[bad[0]]}")
    arr.setflags(write=False)
    return arr


def validate_threshold(threshold: Any) -> float:
    """盈利阈值必须是有限数值。"""
    try:
        value = float(threshold)
    except (TypeError, ValueError) as exc:
        raise DegenerateInputError(f"threshold must be a number, got {threshold!r}") from exc
    if not math.isfinite(value):
        raise DegenerateInputError(f"threshold must be finite, got {value}")
    return value
