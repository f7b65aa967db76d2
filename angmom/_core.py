from __future__ import annotations

import math
import numbers
from typing import Final

from angmom.config import get_limits

# Below this n the numerator and denominator are accumulated separately and
# divided once; at and above it the product is divided step by step.
_SPLIT_PRODUCT_MAX_N: Final[int] = 250

_TWOS_TOL: Final[float] = 1e-12


class AngularMomentumError(ValueError):
    """Invalid quantum numbers or arguments outside the safe numeric range.

    This is a fatal contract violation: the requested coefficient is not
    defined for the given labels, and callers are not expected to catch it and
    carry on. Selection-rule zeros (triangle rule, m1+m2 != m3, empty sums) are
    never reported this way; they evaluate to ``0.0``.
    """


def _fmt_args(**kwargs: int) -> str:
    return ", ".join(f"{k}={v}" for k, v in kwargs.items())


def fail(where: str, what: str, **kwargs: int) -> AngularMomentumError:
    """Build the error raised by ``where`` for the offending ``kwargs``."""

    if kwargs:
        return AngularMomentumError(f"{where}: {what} ({_fmt_args(**kwargs)})")
    return AngularMomentumError(f"{where}: {what}")


def as_int(x, *, name: str, where: str) -> int:
    """Coerce a doubled label to ``int`` without silently truncating."""

    if isinstance(x, bool):
        raise fail(where, f"{name} must be an integer, got bool {x!r}")
    if isinstance(x, numbers.Integral):
        return int(x)
    if isinstance(x, numbers.Real) and math.isfinite(float(x)) and float(x).is_integer():
        return int(x)
    raise fail(where, f"{name} must be an integer (doubled quantum number), got {x!r}")


def to_twos(x: float, *, name: str) -> int:
    """Convert a physical integer/half-integer quantum number to its doubled form."""

    if isinstance(x, bool):
        raise fail("to_twos", f"{name} must be integer/half-integer, got bool {x!r}")
    xf = float(x)
    if not math.isfinite(xf):
        raise fail("to_twos", f"{name} must be finite, got {x!r}")
    t = int(round(2.0 * xf))
    if abs(2.0 * xf - float(t)) > _TWOS_TOL:
        raise fail("to_twos", f"{name} must be integer/half-integer, got {x!r}")
    return t


def dbinomial(n: int, m: int) -> float:
    """Binomial coefficient n_C_m as a float.

    The smaller of m and n-m is used. For n below 250 the numerator and the
    denominator are accumulated separately and divided once; larger n divides
    at every step so neither accumulator overflows.
    """

    n = int(n)
    m = int(m)
    if n < 0 or m < 0 or m > n:
        raise fail("dbinomial", "requires 0 <= m <= n", n=n, m=m)

    m1 = min(m, n - m)
    if m1 == 0:
        return 1.0

    limit = get_limits().max_binomial_n
    if n > limit:
        raise fail("dbinomial", f"n={n} is too large (limit {limit})")

    if n < _SPLIT_PRODUCT_MAX_N:
        s1 = 1.0
        s2 = 1.0
        for i in range(1, m1 + 1):
            s1 *= n - i + 1
            s2 *= m1 - i + 1
        return s1 / s2

    s = 1.0
    for i in range(1, m1 + 1):
        s = (s * (n - i + 1)) / (m1 - i + 1)
    return s


def triangle(j1: int, j2: int, j3: int) -> tuple[float, bool]:
    """Triangle factor of three doubled angular momenta.

    Returns ``(delta, ok)`` with
    delta = sqrt(((j1+j2-j3)/2)! ((j1-j2+j3)/2)! ((-j1+j2+j3)/2)! / (1+(j1+j2+j3)/2)!),
    evaluated as 1/sqrt(C(S, j3) C(j3, k1) (S+1)). When the triple violates the
    triangle rule or has an odd sum, ``ok`` is False and delta is 0.0.
    """

    j1 = int(j1)
    j2 = int(j2)
    j3 = int(j3)
    if j1 < 0 or j2 < 0 or j3 < 0:
        raise fail("triangle", "invalid j", j1=j1, j2=j2, j3=j3)

    js = j1 + j2 + j3
    k1 = j2 + j3 - j1
    k2 = j3 + j1 - j2
    k3 = j1 + j2 - j3
    if k1 < 0 or k2 < 0 or k3 < 0 or js & 1:
        return 0.0, False

    limit = get_limits().max_triangle_sum
    if js > limit:
        raise fail("triangle", f"j1+j2+j3={js} is too large (limit {limit})", j1=j1, j2=j2, j3=j3)

    js //= 2
    k1 //= 2
    delta = 1.0 / (math.sqrt(dbinomial(js, j3)) * math.sqrt(dbinomial(j3, k1)) * math.sqrt(js + 1.0))
    return delta, True
