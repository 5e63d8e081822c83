"""单次回测引擎。

读取一条价格序列，按配置依次（或每个策略一个线程）运行策略引擎，
输出 summary 与各策略的 TradeResult。

单个策略的输入错误（序列过短、非有限数值）只记录在该策略的 summary 条目里，
不影响其他策略。
"""

from __future__ import annotations

import concurrent.futures
from pathlib import Path
from typing import Any

import pandas as pd

from algo.factors.registry import apply_factors, build_factors
from algo.strategy.base import Strategy
from algo.strategy.registry import build_strategy
from engine.base_engine import BaseEngine, EngineResult
from market_data.loader import candles_from_frame, candles_to_frame, load_price_frame
from market_data.sample import reference_candles
from shared.config.config_loader import load_config
from shared.config.schema import AppConfig
from shared.errors import BacktestInputError
from shared.models.models import Candle, TradeResult
from shared.utils.logging import setup_logger

_LOGGER = setup_logger("backtest-engine")


class BacktestEngine(BaseEngine):
    """在一条序列上评估配置中的全部策略。

    Parameters
    ----------
    cfg_obj:
        已解析的 AppConfig；与 cfg_path 二选一。
    cfg_path:
        YAML 配置路径。
    candles:
        直接传入的价格序列；为 None 时读取 `data.path`，仍为空则使用参考示例序列。
    threshold:
        覆盖配置中的盈利阈值。
    """

    def __init__(
        self,
        cfg_obj: AppConfig | None = None,
        *,
        cfg_path: str | Path | None = None,
        candles: list[Candle] | pd.DataFrame | None = None,
        threshold: float | None = None,
    ):
        if cfg_obj is None:
            cfg_obj = load_config(cfg_path) if cfg_path is not None else AppConfig()
        self.cfg = cfg_obj
        self.candles = candles
        self.threshold = self.cfg.threshold if threshold is None else threshold
        self.strategies: list[Strategy] = [build_strategy(s) for s in self.cfg.strategies]

    def _load_candles(self) -> list[Candle]:
        if isinstance(self.candles, pd.DataFrame):
            return candles_from_frame(self.candles, symbol=self.cfg.symbol)
        if self.candles is not None:
            return list(self.candles)
        if self.cfg.data.path:
            return candles_from_frame(load_price_frame(self.cfg.data.path), symbol=self.cfg.symbol)
        _LOGGER.info("未配置 data.path，使用参考示例序列。")
        return reference_candles(self.cfg.symbol)

    def _evaluate_one(self, strategy: Strategy, candles: list[Candle]) -> TradeResult | BacktestInputError:
        try:
            return strategy.evaluate(candles, self.threshold)
        except BacktestInputError as exc:
            _LOGGER.warning("策略 %s 评估失败：%s", strategy.name, exc)
            return exc

    def _evaluate_all(self, candles: list[Candle]) -> list[TradeResult | BacktestInputError]:
        if not self.cfg.parallel or len(self.strategies) < 2:
            return [self._evaluate_one(s, candles) for s in self.strategies]
        # 各策略无共享可变状态，每个策略一个线程；结果按配置顺序返回
        with concurrent.futures.ThreadPoolExecutor(max_workers=len(self.strategies)) as executor:
            futures = [executor.submit(self._evaluate_one, s, candles) for s in self.strategies]
            return [f.result() for f in futures]

    def run(self) -> EngineResult:
        candles = self._load_candles()
        _LOGGER.info(
            "开始回测：symbol=%s bars=%d threshold=%s strategies=%s",
            self.cfg.symbol,
            len(candles),
            self.threshold,
            [s.name for s in self.strategies],
        )

        outcomes = self._evaluate_all(candles)
        results: dict[str, TradeResult] = {}
        strategies_summary: dict[str, Any] = {}
        for strategy, outcome in zip(self.strategies, outcomes):
            if isinstance(outcome, TradeResult):
                results[strategy.name] = outcome
                entry = outcome.to_dict()
                entry["params"] = strategy.params
                strategies_summary[strategy.name] = entry
            else:
                strategies_summary[strategy.name] = {
                    "error": str(outcome),
                    "error_type": type(outcome).__name__,
                    "params": strategy.params,
                }

        artifacts: dict[str, Any] = {"results": results, "candles": candles}
        if self.cfg.factors:
            factors = build_factors(self.cfg.factors)
            try:
                artifacts["features"] = apply_factors(candles_to_frame(candles), factors)
            except BacktestInputError as exc:
                _LOGGER.warning("指标表计算失败：%s", exc)
                artifacts["features_error"] = str(exc)

        summary = {
            "symbol": self.cfg.symbol,
            "bars": len(candles),
            "threshold": self.threshold,
            "strategies": strategies_summary,
        }
        return EngineResult(summary=summary, artifacts=artifacts)
