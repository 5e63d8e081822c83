"""三套策略共有的结果性质：取值范围、信号计数、幂等性、阈值单调性与退化输入。"""

from __future__ import annotations

import math

import pandas as pd
import pytest

from algo.strategy.registry import build_strategy, strategy_names
from market_data.loader import candles_to_frame
from market_data.sample import synthetic_candles
from shared.errors import DegenerateInputError
from shared.models.models import Candle, SignalType

NAMES = ["rsi", "macd", "bollinger"]


@pytest.fixture(scope="module")
def candles() -> list[Candle]:
    return synthetic_candles(400, seed=7)


def test_registry_knows_all_strategies():
    assert set(NAMES) <= set(strategy_names())


@pytest.mark.parametrize("name", NAMES)
def test_result_bounds_and_signal_counts(name, candles):
    res = build_strategy(name).evaluate(candles, 0.01)
    assert 0.0 <= res.success_rate <= 100.0
    assert res.avg_return >= -100.0
    assert res.total_trades >= 0
    assert len(res.signals) == len(candles)

    buys = res.signals.count(SignalType.BUY)
    sells = res.signals.count(SignalType.SELL)
    assert sells == res.total_trades
    assert buys == res.total_trades + (1 if res.open_position else 0)
    if res.total_trades == 0:
        assert res.success_rate == 0.0
        assert res.avg_return == 0.0


@pytest.mark.parametrize("name", NAMES)
def test_signals_alternate_starting_with_buy(name, candles):
    res = build_strategy(name).evaluate(candles, 0.01)
    fired = [s for s in res.signals if s is not SignalType.NONE]
    for k, s in enumerate(fired):
        assert s is (SignalType.BUY if k % 2 == 0 else SignalType.SELL)


@pytest.mark.parametrize("name", NAMES)
def test_evaluate_is_idempotent(name, candles):
    strat = build_strategy(name)
    assert strat.evaluate(candles, 0.01) == strat.evaluate(candles, 0.01)


@pytest.mark.parametrize("name", NAMES)
def test_success_rate_monotone_in_threshold(name, candles):
    strat = build_strategy(name)
    rates = [strat.evaluate(candles, t).success_rate for t in (-0.05, 0.0, 0.01, 0.05)]
    assert rates == sorted(rates, reverse=True)


@pytest.mark.parametrize("name", NAMES)
def test_input_shapes_are_equivalent(name, candles):
    strat = build_strategy(name)
    expected = strat.evaluate(candles, 0.01)
    closes = [c.close for c in candles]
    assert strat.evaluate(closes, 0.01) == expected
    assert strat.evaluate(pd.Series(closes), 0.01) == expected
    assert strat.evaluate(candles_to_frame(candles), 0.01) == expected
    assert strat.evaluate([{"close": c} for c in closes], 0.01) == expected


@pytest.mark.parametrize("name", NAMES)
@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_close_rejected(name, bad, candles):
    closes = [c.close for c in candles]
    closes[30] = bad
    with pytest.raises(DegenerateInputError):
        build_strategy(name).evaluate(closes, 0.01)


@pytest.mark.parametrize("name", NAMES)
@pytest.mark.parametrize("bad", [math.nan, math.inf, "x", None])
def test_non_finite_threshold_rejected(name, bad, candles):
    with pytest.raises(DegenerateInputError):
        build_strategy(name).evaluate(candles, bad)
