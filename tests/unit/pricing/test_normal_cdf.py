from __future__ import annotations

import numpy as np
import pytest

from option_strategy_engine.pricing.normal import norm_cdf

stats = pytest.importorskip("scipy.stats")


def test_error_bound_against_reference() -> None:
    xs = np.linspace(-8.0, 8.0, 4001)

    approx = norm_cdf(xs)
    exact = stats.norm.cdf(xs)

    assert np.max(np.abs(approx - exact)) < 1e-7


def test_scalar_input_returns_float() -> None:
    value = norm_cdf(0.0)

    assert isinstance(value, float)
    assert value == pytest.approx(0.5, abs=1e-7)


def test_symmetry() -> None:
    for x in (0.1, 0.5, 1.0, 2.5, 4.0):
        assert norm_cdf(x) + norm_cdf(-x) == pytest.approx(1.0, abs=1e-12)


def test_tails_are_bounded() -> None:
    assert 0.0 <= norm_cdf(-40.0) < 1e-12
    assert norm_cdf(40.0) == pytest.approx(1.0)
