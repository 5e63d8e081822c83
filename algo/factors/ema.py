"""EMA 因子。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from algo.factors.base import require_column


@dataclass(frozen=True)
class EMAFactor:
    """指数移动平均（EMA）。

    使用 `ewm(span=period, adjust=False)`：以首个收盘价为种子逐 bar 递推，
    与 `algo.factors.window.ema` 的递推式相同；前 period-1 行置为 NaN。
    """

    period: int = 14
    price_col: str = "close"
    out_col: str | None = None
    name: str = "ema"
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.period <= 0:
            raise ValueError("EMA period must be > 0")
        object.__setattr__(
            self,
            "params",
            {
                "period": self.period,
                "price_col": self.price_col,
                "out_col": self.out_col,
            },
        )

    def compute(self, df: pd.DataFrame) -> pd.DataFrame:
        price = require_column(df, self.price_col, "EMAFactor")
        out = self.out_col or f"ema_{self.period}"
        df[out] = price.ewm(span=self.period, adjust=False, min_periods=self.period).mean()
        return df
