from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from market_data import candles_from_frame, candles_to_frame, load_price_frame, reference_candles, synthetic_candles
from market_data.sample import REFERENCE_CLOSES


def test_load_price_frame_sorts_by_end_ts(tmp_path: Path):
    p = tmp_path / "prices.csv"
    p.write_text(
        "symbol,end_ts,close\n"
        "BTCUSDT,2024-01-03T00:00:00Z,103\n"
        "BTCUSDT,2024-01-01T00:00:00Z,101\n"
        "BTCUSDT,2024-01-02T00:00:00Z,102\n",
        encoding="utf-8",
    )
    df = load_price_frame(p)
    assert df["close"].tolist() == [101, 102, 103]

    candles = candles_from_frame(df)
    assert [c.close for c in candles] == [101.0, 102.0, 103.0]
    assert candles[0].symbol == "BTCUSDT"
    assert candles[0].end_ts == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert candles[0].open is None


def test_load_price_frame_close_only_keeps_file_order(tmp_path: Path):
    p = tmp_path / "closes.csv"
    p.write_text("close\n3\n1\n2\n", encoding="utf-8")
    df = load_price_frame(p)
    candles = candles_from_frame(df, symbol="X")
    assert [c.close for c in candles] == [3.0, 1.0, 2.0]
    assert all(c.symbol == "X" for c in candles)


def test_load_price_frame_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_price_frame(tmp_path / "missing.csv")
    p = tmp_path / "bad.csv"
    p.write_text("open,high\n1,2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="close"):
        load_price_frame(p)


def test_candles_to_frame_round_trips_close():
    candles = reference_candles()
    df = candles_to_frame(candles)
    assert list(df.columns) == ["ts", "symbol", "open", "high", "low", "close", "volume"]
    assert df["close"].tolist() == [float(c) for c in REFERENCE_CLOSES]


def test_reference_candles_shape():
    candles = reference_candles("ABC")
    assert len(candles) == 28
    assert candles[0].close == 100.0
    assert candles[-1].close == 116.0
    assert all(c.symbol == "ABC" for c in candles)
    assert candles[1].start_ts == candles[0].end_ts


def test_synthetic_candles_deterministic_and_positive():
    a = synthetic_candles(50, seed=1)
    b = synthetic_candles(50, seed=1)
    assert [c.close for c in a] == [c.close for c in b]
    assert all(c.close > 0 for c in a)
    assert [c.close for c in synthetic_candles(50, seed=2)] != [c.close for c in a]
    with pytest.raises(ValueError):
        synthetic_candles(0)
