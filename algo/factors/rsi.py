"""RSI 因子。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from algo.factors.base import require_column
from algo.factors.window import RSI_NEUTRAL, ZERO_LOSS_MODES


@dataclass(frozen=True)
class RSIFactor:
    """相对强弱指数（窗口求和版本）。

    与 `algo.factors.window.rsi` 同口径：gain/loss 为窗口内正/负差分之和，
    `zero_loss` 决定 loss == 0 时的取值（见 window.rsi）。
    """

    period: int = 14
    price_col: str = "close"
    out_col: str | None = None
    zero_loss: str = "compat"
    name: str = "rsi"
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.period <= 0:
            raise ValueError("RSI period must be > 0")
        if self.zero_loss not in ZERO_LOSS_MODES:
            raise ValueError(f"Unknown zero_loss mode: {self.zero_loss}")
        object.__setattr__(
            self,
            "params",
            {
                "period": self.period,
                "price_col": self.price_col,
                "out_col": self.out_col,
                "zero_loss": self.zero_loss,
            },
        )

    def compute(self, df: pd.DataFrame) -> pd.DataFrame:
        price = require_column(df, self.price_col, "RSIFactor")
        out = self.out_col or f"rsi_{self.period}"

        delta = price.diff()
        gain = delta.clip(lower=0.0)
        loss = (-delta).clip(lower=0.0)

        # 逐窗口精确求和：滚动累加在 loss 归零时会残留浮点误差，影响 loss == 0 的判定
        gain_sum = gain.rolling(self.period, min_periods=self.period).apply(np.sum, raw=True)
        loss_sum = loss.rolling(self.period, min_periods=self.period).apply(np.sum, raw=True)

        rs = (gain_sum / loss_sum.where(loss_sum != 0)).fillna(0.0)
        values = 100.0 - (100.0 / (1.0 + rs))
        if self.zero_loss == "conventional":
            flat = loss_sum == 0
            values = values.mask(flat & (gain_sum > 0), 100.0).mask(flat & (gain_sum == 0), RSI_NEUTRAL)
        df[out] = values.where(gain_sum.notna())
        return df
