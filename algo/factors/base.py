"""因子（Factors/Features）抽象协议。

约定：因子层是“纯计算”，输入含 `close` 列的 DataFrame，输出添加列后的 DataFrame；
历史不足的 warm-up 行一律为 NaN。
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

import pandas as pd


class Factor(Protocol):
    """因子协议：`compute(df) -> df`。"""

    name: str
    params: Mapping[str, Any]

    def compute(self, df: pd.DataFrame) -> pd.DataFrame:
        """对输入 df 添加/更新因子列并返回 df。"""
        ...


def require_column(df: pd.DataFrame, col: str, factor: str) -> pd.Series:
    if col not in df.columns:
        raise ValueError(f"{factor} requires column: {col}")
    return df[col].astype(float)
