import logging

import numpy as np
import pytest

from trilateration3d import Point, get_sample
from trilateration3d.logging_utils import _safe_repr, debug_log_call
from trilateration3d.solver import residuals


def test_safe_repr_summarizes_arrays():
    assert _safe_repr(np.zeros(0)) == "ndarray(shape=(0,), dtype=float64)"
    assert "values=[1.0, 2.0]" in _safe_repr(np.array([1.0, 2.0]))

    big = _safe_repr(np.arange(12, dtype=float))
    assert "min=0" in big and "max=11" in big


def test_safe_repr_formats_points_and_long_sequences():
    assert _safe_repr(Point(1, 2, 3)) == "Point(1.000000, 2.000000, 3.000000)"
    assert "(10 items)" in _safe_repr(list(range(10)))


def test_debug_log_call_emits_entry_and_exit(caplog):
    logger = logging.getLogger("trilateration3d.tests")

    @debug_log_call(logger)
    def add(a, b):
        return a + b

    with caplog.at_level(logging.DEBUG, logger="trilateration3d.tests"):
        assert add(1, b=2) == 3

    messages = [record.getMessage() for record in caplog.records]
    assert any(m.endswith("add(1, b=2)") for m in messages)
    assert any(m.endswith("add -> 3") for m in messages)


def test_debug_log_call_wraps_once():
    logger = logging.getLogger("trilateration3d.tests")
    wrapped = debug_log_call(logger)(len)
    assert debug_log_call(logger)(wrapped) is wrapped


def test_solver_functions_log_at_debug(caplog):
    observations, _ = get_sample("origin")

    with caplog.at_level(logging.DEBUG, logger="trilateration3d.solver.residuals"):
        residuals(observations, Point(1, 2, 3))

    assert any(record.getMessage().startswith("residuals(") for record in caplog.records)


def test_debug_log_call_reports_exceptions(caplog):
    logger = logging.getLogger("trilateration3d.tests")

    @debug_log_call(logger, name="explode")
    def explode():
        raise ValueError("boom")

    with caplog.at_level(logging.DEBUG, logger="trilateration3d.tests"):
        with pytest.raises(ValueError, match="boom"):
            explode()

    assert "explode raised ValueError: boom" in caplog.text
