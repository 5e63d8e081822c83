from __future__ import annotations

import io

from rich.console import Console

from analysis.reporting import build_results_table, format_summary_line, render_summary, strategy_title
from engine.backtest_engine import BacktestEngine
from market_data.sample import reference_candles
from shared.config.schema import AppConfig
from shared.models.models import SignalType, TradeResult


def _result(name: str, trades: int, success: float) -> TradeResult:
    return TradeResult(
        strategy=name,
        success_rate=success,
        avg_return=1.5,
        total_trades=trades,
        signals=(SignalType.NONE,),
    )


def test_format_summary_line():
    assert format_summary_line(_result("rsi", 1, 100.0)) == "RSI Strategy: Trades = 1, Success = 100%"
    assert format_summary_line(_result("bollinger", 3, 66.66666)) == (
        "Bollinger Bands Strategy: Trades = 3, Success = 66.6667%"
    )
    assert format_summary_line(_result("macd", 0, 0.0)) == "MACD Strategy: Trades = 0, Success = 0%"


def test_strategy_title_falls_back_to_upper():
    assert strategy_title("kdj") == "KDJ"


def test_results_table_marks_errors():
    summary = BacktestEngine(AppConfig(), candles=reference_candles()[:20]).run().summary
    table = build_results_table(summary)
    assert table.row_count == 3

    buf = io.StringIO()
    render_summary(summary, console=Console(file=buf, width=200, color_system=None))
    text = buf.getvalue()
    assert "Bollinger Bands" in text
    assert "InsufficientDataError" in text
