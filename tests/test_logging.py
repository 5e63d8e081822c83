import logging

import pytest

from shared.utils.logging import set_level, setup_logger


def test_setup_logger_does_not_duplicate_handlers():
    a = setup_logger("test-logger-dedup")
    b = setup_logger("test-logger-dedup")
    assert a is b
    assert len([h for h in a.handlers if isinstance(h, logging.StreamHandler)]) == 1
    assert a.propagate is False


def test_set_level_accepts_names_and_rejects_unknown():
    setup_logger("test-logger-level")
    set_level("debug", "test-logger-level")
    assert logging.getLogger("test-logger-level").level == logging.DEBUG
    set_level(logging.ERROR, "test-logger-level")
    assert logging.getLogger("test-logger-level").level == logging.ERROR
    with pytest.raises(ValueError):
        set_level("loud", "test-logger-level")
