"""策略注册表：字符串 -> Strategy 实现。

约定：engine 只负责 orchestration，策略实例必须由配置驱动构建。
"""

from __future__ import annotations

import inspect
from typing import Any, Mapping

from algo.strategy.base import Strategy
from algo.strategy.bollinger import BollingerStrategy
from algo.strategy.macd import MACDStrategy
from algo.strategy.rsi import RSIStrategy
from shared.config.schema import StrategyConfig

_REGISTRY: dict[str, type[Strategy]] = {}


def register_strategy(name: str, cls: type[Strategy]) -> None:
    _REGISTRY[name] = cls


def get_strategy_cls(name: str) -> type[Strategy]:
    if name not in _REGISTRY:
        raise ValueError(f"Unknown strategy: {name}")
    return _REGISTRY[name]


def strategy_names() -> list[str]:
    return list(_REGISTRY)


def _filter_init_kwargs(cls: type, params: Mapping[str, Any]) -> dict[str, Any]:
    """过滤出 __init__ 支持的参数，避免配置里多字段导致报错。"""
    sig = inspect.signature(cls.__init__)
    if any(p.kind == inspect.Parameter.VAR_KEYWORD for p in sig.parameters.values()):
        return dict(params)
    allowed = {name for name in sig.parameters.keys() if name != "self"}
    return {k: v for k, v in params.items() if k in allowed}


def build_strategy(cfg: StrategyConfig | Mapping[str, Any] | str) -> Strategy:
    """从配置构建策略实例。

    支持：
    - StrategyConfig（来自 shared.config.schema）
    - dict（含 type + 参数字段）
    - 仅策略名（全部默认参数）
    """
    if isinstance(cfg, str):
        name, params = cfg, {}
    elif isinstance(cfg, StrategyConfig):
        name = str(cfg.type)
        params = dict(cfg.params or {})
    elif isinstance(cfg, Mapping):
        name = str(cfg.get("type"))
        params = dict(cfg.get("params") or {})
        params.update({k: v for k, v in cfg.items() if k not in {"type", "params"}})
    else:
        raise ValueError("strategy cfg must be StrategyConfig, dict or name")

    cls = get_strategy_cls(name)
    return cls(**_filter_init_kwargs(cls, params))


# 默认注册
register_strategy("rsi", RSIStrategy)
register_strategy("macd", MACDStrategy)
register_strategy("bollinger", BollingerStrategy)
