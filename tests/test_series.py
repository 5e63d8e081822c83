from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from market_data import closes_from
from shared.errors import DegenerateInputError
from shared.models.models import Candle
from shared.models.series import validate_threshold


def test_closes_from_candles_and_numbers():
    out = closes_from([Candle(close=1.0), Candle(close=2.5)])
    assert out.dtype == np.float64
    assert out.tolist() == [1.0, 2.5]
    assert closes_from([1, 2, 3]).tolist() == [1.0, 2.0, 3.0]


def test_closes_from_frame_and_series():
    df = pd.DataFrame({"close": [3.0, 4.0], "open": [1.0, 1.0]})
    assert closes_from(df).tolist() == [3.0, 4.0]
    assert closes_from(df["close"]).tolist() == [3.0, 4.0]


def test_closes_from_is_read_only_copy():
    src = np.array([1.0, 2.0])
    out = closes_from(src)
    with pytest.raises(ValueError):
        out[0] = 5.0
    src[0] = 9.0
    assert out[0] == 1.0


def test_closes_from_rejects_missing_close():
    with pytest.raises(DegenerateInputError):
        closes_from([{"open": 1.0}])
    with pytest.raises(DegenerateInputError):
        closes_from(pd.DataFrame({"open": [1.0]}))
    with pytest.raises(DegenerateInputError):
        closes_from("100,101")


def test_closes_from_rejects_non_finite():
    with pytest.raises(DegenerateInputError, match="bar 1"):
        closes_from([1.0, float("nan"), 2.0])


def test_empty_series_is_allowed():
    assert closes_from([]).size == 0


def test_validate_threshold():
    assert validate_threshold("0.01") == 0.01
    assert validate_threshold(0) == 0.0
    with pytest.raises(DegenerateInputError):
        validate_threshold(float("inf"))


def test_closes_from_rejects_non_positive():
    with pytest.raises(DegenerateInputError, match="non-positive close at bar 2"):
        closes_from([100.0, 101.0, 0.0, 102.0])
    with pytest.raises(DegenerateInputError):
        closes_from(np.array([1.0, -5.0]))


def test_closes_from_rejects_non_numeric_close():
    with pytest.raises(DegenerateInputError, match="bar 1"):
        closes_from([{"close": 1.0}, {"close": "abc"}])
    with pytest.raises(DegenerateInputError):
        closes_from([Candle(close="x")])  # type: ignore[arg-type]
    with pytest.raises(DegenerateInputError):
        closes_from(pd.DataFrame({"close": ["1.0", "n/a"]}))
