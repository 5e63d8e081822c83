"""因子注册表：字符串 -> 因子实现。

回测 summary 之外，引擎可以按配置额外产出一张“指标表”（features frame），
便于在报告或 notebook 里核对每根 bar 的指标值。
"""

from __future__ import annotations

from typing import Any, Iterable

import pandas as pd

from algo.factors.base import Factor
from algo.factors.bollinger import BollingerFactor
from algo.factors.ema import EMAFactor
from algo.factors.ma import MAFactor
from algo.factors.rsi import RSIFactor

_REGISTRY: dict[str, type] = {}


def register_factor(name: str, cls: type) -> None:
    _REGISTRY[name] = cls


def get_factor_cls(name: str) -> type:
    if name not in _REGISTRY:
        known = ", ".join(sorted(_REGISTRY))
        raise ValueError(f"Unknown factor: {name} (known: {known})")
    return _REGISTRY[name]


def _parse_item(item: Any) -> tuple[str, dict[str, Any]]:
    # 允许 "rsi" 这种只写名字的简写
    if isinstance(item, str):
        return item, {}
    if not isinstance(item, dict):
        raise ValueError("factor item must be a dict or a name")
    name = str(item.get("name") or item.get("type") or "")
    if not name:
        raise ValueError("factor item missing name")
    params = item.get("params")
    if params is None:
        params = {k: v for k, v in item.items() if k not in {"name", "type"}}
    if not isinstance(params, dict):
        raise ValueError("factor params must be a dict")
    return name, params


def build_factors(items: Iterable[Any] | None) -> list[Factor]:
    """从配置构建因子列表。

    支持形态：
    - [{name: "ma", params: {window: 20}}, ...]
    - [{name: "ma", window: 20}, ...]（扁平参数）
    - ["rsi", "bollinger"]（全部默认参数）
    """
    if items is None:
        return []
    if isinstance(items, (str, dict)):
        raise ValueError("factors config must be a list")

    factors: list[Factor] = []
    for item in items:
        name, params = _parse_item(item)
        cls = get_factor_cls(name)
        try:
            factors.append(cls(**params))
        except TypeError as exc:
            raise ValueError(f"Invalid params for factor {name}: {exc}") from exc
    return factors


def apply_factors(df: pd.DataFrame, factors: list[Factor]) -> pd.DataFrame:
    """在 df 的副本上依次计算因子列。"""
    out = df.copy()
    for f in factors:
        out = f.compute(out)
    return out


# 默认注册
register_factor("ma", MAFactor)
register_factor("ema", EMAFactor)
register_factor("rsi", RSIFactor)
register_factor("bollinger", BollingerFactor)
