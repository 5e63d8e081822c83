"""配置架构定义（Pydantic Schema）。

目标：
- 让配置成为“强类型 + 可演进”的边界协议；
- 启动阶段尽早失败，避免 typo/类型错误在长回测中“隐蔽爆炸”；
- 策略参数统一进入 `params`，由策略模块自行解释。
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class StrategyConfig(BaseModel):
    """策略配置（type + params）。

    说明：
    - 策略参数不允许“散落在顶层”：必须进入 `params`；
    - `_pack_flat_params` 会把 `strategies:` 条目下的扁平字段自动挪到 `params`，从而实现：
      - 用户写起来方便
      - schema 又能做到严格（forbid extra keys）
    """
    type: str
    params: Dict[str, Any] = Field(default_factory=dict)
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _pack_flat_params(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"type": data, "params": {}}
        if not isinstance(data, dict):
            return data
        if "params" in data and isinstance(data.get("params"), dict) and set(data.keys()) <= {"type", "params"}:
            return data
        params = {k: v for k, v in data.items() if k not in {"type", "params"}}
        existing = data.get("params")
        if isinstance(existing, dict):
            params = {**params, **existing}
        return {"type": data.get("type"), "params": params}


def default_strategies() -> List[StrategyConfig]:
    """默认三套策略（rsi / macd / bollinger）及其默认参数。"""
    return [
        StrategyConfig(type="rsi", params={"period": 14, "warmup": 15, "oversold": 30.0, "overbought": 70.0}),
        StrategyConfig(type="macd", params={"fast": 12, "slow": 26, "signal": 9}),
        StrategyConfig(type="bollinger", params={"period": 20, "num_std": 2.0}),
    ]


class DataConfig(BaseModel):
    """价格数据来源。path 为空时由调用方提供 candles（或使用示例数据）。"""
    path: Optional[str] = None
    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    """应用总配置。"""
    symbol: str = "DEMO"
    threshold: float = 0.01
    parallel: bool = False
    data: DataConfig = Field(default_factory=DataConfig)
    strategies: List[StrategyConfig] = Field(default_factory=default_strategies)
    # 因子条目：仅名字（"rsi"）或 {name, params} / 扁平参数 dict
    factors: Optional[List[Union[str, Dict[str, Any]]]] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("threshold")
    @classmethod
    def _finite_threshold(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("threshold must be a finite number")
        # 收益率下限为 -100%，更低的阈值没有意义
        if v < -1.0:
            raise ValueError("threshold must be >= -1")
        return v

    @field_validator("strategies")
    @classmethod
    def _unique_strategy_types(cls, v: List[StrategyConfig]) -> List[StrategyConfig]:
        seen: set[str] = set()
        for s in v:
            if s.type in seen:
                raise ValueError(f"duplicate strategy type: {s.type}")
            seen.add(s.type)
        return v
