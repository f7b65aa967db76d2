from __future__ import annotations

import math

import numpy as np

from angmom._core import as_int, dbinomial, fail, to_twos


def dfunc(j: int, m1: int, m2: int, beta: float) -> float:
    """Wigner small-d function d^(j/2)_(m1/2, m2/2)(beta) = <j/2 m1/2| exp(+i beta Jy) |j/2 m2/2>.

    j, m1 and m2 are doubled quantum numbers; beta is in radians and is not
    reduced modulo 2*pi. See A. deShalit and H. Feshbach, Theoretical Nuclear
    Physics, Vol. 1, p. 920, eq. (2.13).
    """

    j = as_int(j, name="j", where="dfunc")
    m1 = as_int(m1, name="m1", where="dfunc")
    m2 = as_int(m2, name="m2", where="dfunc")
    if j < 0 or abs(m1) > j or abs(m2) > j or (j - m1) & 1 or (j - m2) & 1:
        raise fail("dfunc", "invalid input", j=j, m1=m1, m2=m2)

    jm1 = (j - m1) // 2
    jm2 = (j - m2) // 2
    mm = (m1 + m2) // 2
    sb = math.sin(float(beta) / 2.0)
    cb = math.cos(float(beta) / 2.0)

    ia_min = max(0, -mm)
    ia_max = min(jm1, jm2)

    # Zero exponents give 1.0 even for a zero base (beta = 0 or pi).
    s = 0.0
    sign = -1.0 if (jm1 - ia_min) & 1 else 1.0
    for ia in range(ia_min, ia_max + 1):
        s += (
            sign
            * dbinomial(jm1, ia)
            * dbinomial(jm1 + m1, jm2 - ia)
            * sb ** (jm1 + jm2 - 2 * ia)
            * cb ** (mm + 2 * ia)
        )
        sign = -sign
    return s * math.sqrt(dbinomial(j, jm1) / dbinomial(j, jm2))


def dmatrix(j: int, beta: float) -> np.ndarray:
    """Full (j+1) x (j+1) small-d matrix for doubled ``j``.

    Row/column index ``i`` corresponds to the doubled projection ``m = -j + 2*i``.
    """

    j = as_int(j, name="j", where="dmatrix")
    if j < 0:
        raise fail("dmatrix", "invalid input", j=j)
    ms = range(-j, j + 1, 2)
    out = np.empty((j + 1, j + 1), dtype=np.float64)
    for a, m1 in enumerate(ms):
        for b, m2 in enumerate(ms):
            out[a, b] = dfunc(j, m1, m2, beta)
    return out


def wigner_d(j: float, m1: float, m2: float, beta: float) -> float:
    """Small-d function for integer/half-integer inputs."""

    return dfunc(to_twos(j, name="j"), to_twos(m1, name="m1"), to_twos(m2, name="m2"), beta)
