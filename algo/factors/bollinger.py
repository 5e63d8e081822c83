"""布林带因子。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from algo.factors.base import require_column


@dataclass(frozen=True)
class BollingerFactor:
    """布林带：mid = SMA(period)，upper/lower = mid ± num_std * σ（总体标准差，ddof=0）。

    输出列：`{prefix}_mid` / `{prefix}_upper` / `{prefix}_lower`，
    prefix 默认 `bb_{period}`。
    """

    period: int = 20
    num_std: float = 2.0
    price_col: str = "close"
    out_col: str | None = None
    name: str = "bollinger"
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.period <= 0:
            raise ValueError("Bollinger period must be > 0")
        if self.num_std < 0:
            raise ValueError("Bollinger num_std must be >= 0")
        object.__setattr__(
            self,
            "params",
            {
                "period": self.period,
                "num_std": self.num_std,
                "price_col": self.price_col,
                "out_col": self.out_col,
            },
        )

    def compute(self, df: pd.DataFrame) -> pd.DataFrame:
        price = require_column(df, self.price_col, "BollingerFactor")
        prefix = self.out_col or f"bb_{self.period}"

        roll = price.rolling(self.period, min_periods=self.period)
        mid = roll.mean()
        sigma = roll.std(ddof=0)
        df[f"{prefix}_mid"] = mid
        df[f"{prefix}_upper"] = mid + self.num_std * sigma
        df[f"{prefix}_lower"] = mid - self.num_std * sigma
        return df
