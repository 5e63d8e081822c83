from __future__ import annotations

import pytest

from algo.strategy.rsi import RSIStrategy, run_rsi_strategy
from market_data.sample import REFERENCE_CLOSES, reference_candles
from shared.errors import InsufficientDataError
from shared.models.models import SignalType


def test_rsi_buys_oversold_and_sells_overbought(v_shape_closes):
    res = run_rsi_strategy(v_shape_closes, 0.01)

    # bar 15：窗口内全是下跌，RSI = 0；bar 25：10 涨 4 跌，RSI ≈ 71.4
    assert res.signals[15] is SignalType.BUY
    assert res.signals[25] is SignalType.SELL
    assert res.total_trades == 1
    assert not res.open_position
    assert abs(res.success_rate - 100.0) < 1e-9
    assert abs(res.avg_return - (95.0 - 85.0) / 85.0 * 100) < 1e-9


def test_rsi_reference_series_never_oversold():
    # 参考序列 bar 15 之后 RSI 始终高于 50，不会触发买入
    res = RSIStrategy().evaluate(reference_candles(), 0.01)
    assert res.total_trades == 0
    assert SignalType.BUY not in res.signals
    assert len(res.signals) == len(REFERENCE_CLOSES)


def test_rsi_warmup_bars_have_no_signal(v_shape_closes):
    res = RSIStrategy().evaluate(v_shape_closes, 0.01)
    assert all(s is SignalType.NONE for s in res.signals[:15])


def test_rsi_conventional_mode_sells_on_pure_rally():
    # 兼容口径下纯上涨窗口 RSI = 0，不会卖出；常规口径为 100，会卖出
    closes = [100.0 - i for i in range(16)] + [85.0 + 2 * i for i in range(1, 20)]
    compat = RSIStrategy(overbought=99).evaluate(closes, 0.0)
    conventional = RSIStrategy(overbought=99, zero_loss="conventional").evaluate(closes, 0.0)
    assert compat.total_trades == 0
    assert compat.open_position
    assert conventional.total_trades == 1


def test_rsi_insufficient_data():
    with pytest.raises(InsufficientDataError) as exc:
        RSIStrategy().evaluate(list(REFERENCE_CLOSES[:14]), 0.01)
    assert exc.value.required == 15
    assert exc.value.actual == 14


def test_rsi_exactly_min_bars_has_no_decision():
    closes = [100.0 - i for i in range(15)]
    res = RSIStrategy().evaluate(closes, 0.01)
    assert res.total_trades == 0
    # bar 14 不参与决策（warmup=15），只有 15 根时没有可决策 bar
    assert all(s is SignalType.NONE for s in res.signals)


def test_rsi_param_validation():
    with pytest.raises(ValueError):
        RSIStrategy(period=0)
    with pytest.raises(ValueError):
        RSIStrategy(oversold=80, overbought=20)
    with pytest.raises(ValueError):
        RSIStrategy(zero_loss="nope")
