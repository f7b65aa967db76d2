from __future__ import annotations

import functools
import os
import warnings
from dataclasses import dataclass
from typing import Final

DEFAULT_MAX_BINOMIAL_N: Final[int] = 1000
DEFAULT_MAX_TRIANGLE_SUM: Final[int] = 300
DEFAULT_SIXJ_CACHE_SIZE: Final[int] = 200_000


def _int_env(key: str, default: int) -> int:
    raw = os.environ.get(key, "").strip()
    if raw == "":
        return int(default)
    try:
        out = int(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got: {raw!r}") from e
    if out < 0:
        raise ValueError(f"{key} must be >= 0, got: {out}")
    return out


@dataclass(frozen=True)
class Limits:
    """Round-off guards for the double-precision evaluators.

    ``max_binomial_n`` bounds the upper argument of any binomial coefficient and
    ``max_triangle_sum`` bounds j1+j2+j3 (doubled) of any triangle factor.
    Exceeding either is a contract violation, not a zero result.
    """

    max_binomial_n: int = DEFAULT_MAX_BINOMIAL_N
    max_triangle_sum: int = DEFAULT_MAX_TRIANGLE_SUM


@functools.lru_cache(maxsize=1)
def get_limits() -> Limits:
    """Return the active limits, reading ``ANGMOM_MAX_*`` once per process."""

    limits = Limits(
        max_binomial_n=_int_env("ANGMOM_MAX_BINOMIAL_N", DEFAULT_MAX_BINOMIAL_N),
        max_triangle_sum=_int_env("ANGMOM_MAX_TRIANGLE_SUM", DEFAULT_MAX_TRIANGLE_SUM),
    )
    if limits.max_binomial_n > DEFAULT_MAX_BINOMIAL_N or limits.max_triangle_sum > DEFAULT_MAX_TRIANGLE_SUM:
        # Raised from whichever evaluator first reads the limits.
        warnings.warn(
            f"angular-momentum limits relaxed beyond defaults by ANGMOM_MAX_BINOMIAL_N/ANGMOM_MAX_TRIANGLE_SUM "
            f"(max_binomial_n={limits.max_binomial_n}, max_triangle_sum={limits.max_triangle_sum}); "
            "double-precision round-off is no longer bounded",
            RuntimeWarning,
        )
    return limits


def reset_limits() -> None:
    """Forget cached limits so the next call re-reads the environment."""

    get_limits.cache_clear()


def sixj_cache_size() -> int:
    return _int_env("ANGMOM_SIXJ_CACHE_SIZE", DEFAULT_SIXJ_CACHE_SIZE)
