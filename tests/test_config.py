"""Tests for environment-driven numeric limits."""

from __future__ import annotations

import warnings

import pytest

from angmom import AngularMomentumError, Limits, d6j, d9j, get_limits, reset_limits
from angmom._core import dbinomial, triangle
from angmom.config import sixj_cache_size


@pytest.fixture(autouse=True)
def _fresh_limits(monkeypatch):
    monkeypatch.delenv("ANGMOM_MAX_BINOMIAL_N", raising=False)
    monkeypatch.delenv("ANGMOM_MAX_TRIANGLE_SUM", raising=False)
    reset_limits()
    yield
    reset_limits()


def test_default_limits():
    assert get_limits() == Limits(max_binomial_n=1000, max_triangle_sum=300)


def test_tighter_limits_from_environment(monkeypatch):
    monkeypatch.setenv("ANGMOM_MAX_BINOMIAL_N", "20")
    monkeypatch.setenv("ANGMOM_MAX_TRIANGLE_SUM", "10")
    reset_limits()

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert get_limits() == Limits(max_binomial_n=20, max_triangle_sum=10)

    assert dbinomial(20, 3) == 1140.0
    with pytest.raises(AngularMomentumError, match=r"n=21 is too large \(limit 20\)"):
        dbinomial(21, 3)

    assert triangle(4, 4, 2)[1]
    with pytest.raises(AngularMomentumError, match=r"limit 10"):
        triangle(4, 4, 4)


def test_relaxed_limits_warn(monkeypatch):
    monkeypatch.setenv("ANGMOM_MAX_BINOMIAL_N", "1500")
    reset_limits()

    with pytest.warns(RuntimeWarning, match="relaxed beyond defaults by ANGMOM_MAX_BINOMIAL_N"):
        limits = get_limits()
    assert limits.max_binomial_n == 1500
    assert limits.max_triangle_sum == 300
    assert dbinomial(1200, 1) == 1200.0


def test_limits_read_once(monkeypatch):
    assert get_limits().max_binomial_n == 1000
    monkeypatch.setenv("ANGMOM_MAX_BINOMIAL_N", "5")
    assert get_limits().max_binomial_n == 1000
    reset_limits()
    assert get_limits().max_binomial_n == 5


@pytest.mark.parametrize("raw", ["abc", "-3", "1.5"])
def test_invalid_environment_value(monkeypatch, raw):
    monkeypatch.setenv("ANGMOM_MAX_TRIANGLE_SUM", raw)
    reset_limits()
    with pytest.raises(ValueError, match="ANGMOM_MAX_TRIANGLE_SUM"):
        get_limits()


def test_sixj_cache_size(monkeypatch):
    monkeypatch.delenv("ANGMOM_SIXJ_CACHE_SIZE", raising=False)
    assert sixj_cache_size() == 200_000
    monkeypatch.setenv("ANGMOM_SIXJ_CACHE_SIZE", "0")
    assert sixj_cache_size() == 0


def test_relaxed_limit_warning_from_evaluator(monkeypatch):
    monkeypatch.setenv("ANGMOM_MAX_TRIANGLE_SUM", "400")
    reset_limits()
    with pytest.warns(RuntimeWarning, match="ANGMOM_MAX_TRIANGLE_SUM"):
        assert d6j(2, 2, 2, 2, 2, 2) == pytest.approx(1.0 / 6.0, abs=1e-15)


def test_tightened_limits_apply_to_cached_6j(monkeypatch):
    assert d6j(4, 4, 4, 4, 4, 4) != 0.0
    assert d9j(4, 4, 4, 4, 4, 4, 4, 4, 4) == d9j(4, 4, 4, 4, 4, 4, 4, 4, 4)

    monkeypatch.setenv("ANGMOM_MAX_TRIANGLE_SUM", "10")
    reset_limits()
    with pytest.raises(AngularMomentumError, match=r"j1\+j2\+j3=12 is too large \(limit 10\)"):
        d6j(4, 4, 4, 4, 4, 4)
    with pytest.raises(AngularMomentumError, match=r"limit 10"):
        d9j(4, 4, 4, 4, 4, 4, 4, 4, 4)

    monkeypatch.delenv("ANGMOM_MAX_TRIANGLE_SUM")
    reset_limits()
    assert d6j(4, 4, 4, 4, 4, 4) != 0.0
