"""
Tests for the timing decorator.
"""
import pytest

from reactivities.logging_config import get_logger, timed

logger = get_logger("tests")


def test_timed_returns_result_and_keeps_name():
    @timed(logger)
    def add(a, b):
        return a + b

    assert add(2, 3) == 5
    assert add.__name__ == "add"


def test_timed_reraises_errors():
    @timed(logger)
    def explode():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        explode()
