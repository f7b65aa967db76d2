from __future__ import annotations

import functools
import math

from angmom._core import as_int, dbinomial, fail, to_twos, triangle
from angmom.config import Limits, get_limits, sixj_cache_size


def _phase_from_twos(exp_twos: int) -> float:
    """(-1)**(exp_twos/2) for an even doubled exponent."""

    exp_twos = int(exp_twos)
    if exp_twos & 1:
        raise fail("_phase_from_twos", "phase exponent must be even in doubled form", exp_twos=exp_twos)
    return -1.0 if ((exp_twos // 2) & 1) else 1.0


def dcg(j1: int, m1: int, j2: int, m2: int, j3: int, m3: int) -> float:
    """Clebsch-Gordan coefficient <j1/2 m1/2, j2/2 m2/2 | j3/2 m3/2>.

    All arguments are doubled quantum numbers. Uses the formula of Racah (1942).
    Raises ``AngularMomentumError`` if some |m| > j or j - m is odd; returns 0.0
    when the triangle rule or m3 = m1 + m2 is violated.
    """

    j1 = as_int(j1, name="j1", where="dcg")
    m1 = as_int(m1, name="m1", where="dcg")
    j2 = as_int(j2, name="j2", where="dcg")
    m2 = as_int(m2, name="m2", where="dcg")
    j3 = as_int(j3, name="j3", where="dcg")
    m3 = as_int(m3, name="m3", where="dcg")

    jm1 = j1 - m1
    jm2 = j2 - m2
    jm3 = j3 - m3
    if abs(m1) > j1 or abs(m2) > j2 or abs(m3) > j3 or jm1 & 1 or jm2 & 1 or jm3 & 1:
        raise fail("dcg", "invalid j or m", j1=j1, m1=m1, j2=j2, m2=m2, j3=j3, m3=m3)

    delta, ok = triangle(j1, j2, j3)
    if not ok:
        return 0.0
    if m3 != m1 + m2:
        return 0.0

    jm1 //= 2
    jm2 //= 2
    jm3 //= 2
    k1 = (j2 + j3 - j1) // 2
    k2 = (j3 + j1 - j2) // 2
    k3 = (j1 + j2 - j3) // 2

    pref = (
        math.sqrt(dbinomial(j1, k2) / dbinomial(j1, jm1))
        * math.sqrt(dbinomial(j2, k3) / dbinomial(j2, jm2))
        * math.sqrt(dbinomial(j3, k1) / dbinomial(j3, jm3))
        * math.sqrt(j3 + 1.0)
        * delta
    )

    iz_min = max(0, jm1 - k2, k3 - jm2)
    iz_max = min(k3, jm1, j2 - jm2)

    s = 0.0
    sign = -1.0 if iz_min & 1 else 1.0
    for iz in range(iz_min, iz_max + 1):
        s += sign * dbinomial(k3, iz) * dbinomial(k2, jm1 - iz) * dbinomial(k1, j2 - jm2 - iz)
        sign = -sign
    return s * pref


def threej(j1: int, j2: int, j3: int, m1: int, m2: int, m3: int) -> float:
    """Wigner 3j symbol with doubled-integer inputs, obtained from ``dcg``."""

    cg = dcg(j1, m1, j2, m2, j3, -m3)
    if cg == 0.0:
        return 0.0
    return _phase_from_twos(int(j1) - int(j2) - int(m3)) * cg / math.sqrt(int(j3) + 1.0)


def _d6j(j1: int, j2: int, j3: int, l1: int, l2: int, l3: int) -> float:
    # see I. Talmi, Simple Models of Complex Nuclei, p. 158
    delta_s, ok_s = triangle(j1, j2, j3)
    delta1, ok1 = triangle(j1, l2, l3)
    delta2, ok2 = triangle(l1, j2, l3)
    delta3, ok3 = triangle(l1, l2, j3)
    if not (ok_s and ok1 and ok2 and ok3):
        return 0.0

    js = (j1 + j2 + j3) // 2
    k1 = (j2 + j3 - j1) // 2
    k2 = (j3 + j1 - j2) // 2
    k3 = (j1 + j2 - j3) // 2
    jl1 = (j1 + l2 + l3) // 2
    jl2 = (l1 + j2 + l3) // 2
    jl3 = (l1 + l2 + j3) // 2

    iz_min = max(0, js, jl1, jl2, jl3)
    iz_max = min(k1 + jl1, k2 + jl2, k3 + jl3)

    s = 0.0
    sign = -1.0 if iz_min & 1 else 1.0
    for iz in range(iz_min, iz_max + 1):
        s += (
            sign
            * dbinomial(iz + 1, iz - js)
            * dbinomial(k1, iz - jl1)
            * dbinomial(k2, iz - jl2)
            * dbinomial(k3, iz - jl3)
        )
        sign = -sign
    return s * delta1 * delta2 * delta3 / delta_s


def _d6j_keyed(limits: Limits, j1: int, j2: int, j3: int, l1: int, l2: int, l3: int) -> float:
    # limits is part of the cache key only; the guards read get_limits() themselves.
    return _d6j(j1, j2, j3, l1, l2, l3)


# 9j evaluation repeats many 6j arguments; ANGMOM_SIXJ_CACHE_SIZE=0 disables.
_SIXJ_CACHE_SIZE = sixj_cache_size()
_d6j_cached = functools.lru_cache(maxsize=_SIXJ_CACHE_SIZE)(_d6j_keyed) if _SIXJ_CACHE_SIZE else _d6j_keyed


def d6j(j1: int, j2: int, j3: int, l1: int, l2: int, l3: int) -> float:
    """Wigner 6j symbol {j1/2 j2/2 j3/2; l1/2 l2/2 l3/2} (Racah formula).

    Zero if any of the triads (j1 j2 j3), (j1 l2 l3), (l1 j2 l3), (l1 l2 j3)
    fails the triangle rule.
    """

    return _d6j_cached(
        get_limits(),
        as_int(j1, name="j1", where="d6j"),
        as_int(j2, name="j2", where="d6j"),
        as_int(j3, name="j3", where="d6j"),
        as_int(l1, name="l1", where="d6j"),
        as_int(l2, name="l2", where="d6j"),
        as_int(l3, name="l3", where="d6j"),
    )


def sixj_cache_info():
    """``functools`` cache statistics of the 6j evaluator, or None when disabled."""

    if hasattr(_d6j_cached, "cache_info"):
        return _d6j_cached.cache_info()
    return None


def sixj_cache_clear() -> None:
    if hasattr(_d6j_cached, "cache_clear"):
        _d6j_cached.cache_clear()


def d9j(
    j11: int, j12: int, j13: int,
    j21: int, j22: int, j23: int,
    j31: int, j32: int, j33: int,
) -> float:
    """Wigner 9j symbol with doubled-integer inputs, rows (j11 j12 j13) ... (j31 j32 j33).

    Expanded as a sum over k of (k+1) times three 6j symbols; see I. Talmi,
    Simple Models of Complex Nuclei, p. 968.
    """

    j11 = as_int(j11, name="j11", where="d9j")
    j12 = as_int(j12, name="j12", where="d9j")
    j13 = as_int(j13, name="j13", where="d9j")
    j21 = as_int(j21, name="j21", where="d9j")
    j22 = as_int(j22, name="j22", where="d9j")
    j23 = as_int(j23, name="j23", where="d9j")
    j31 = as_int(j31, name="j31", where="d9j")
    j32 = as_int(j32, name="j32", where="d9j")
    j33 = as_int(j33, name="j33", where="d9j")

    k_min = max(abs(j11 - j33), abs(j12 - j23), abs(j21 - j32))
    k_max = min(j11 + j33, j12 + j23, j21 + j32)
    limits = get_limits()

    s = 0.0
    for k in range(k_min, k_max + 1, 2):
        s += (
            (k + 1.0)
            * _d6j_cached(limits, j11, j12, j13, j23, j33, k)
            * _d6j_cached(limits, j21, j22, j23, j12, k, j32)
            * _d6j_cached(limits, j31, j32, j33, k, j11, j21)
        )
    return -s if k_min & 1 else s


def clebsch_gordan(j1: float, m1: float, j2: float, m2: float, j3: float, m3: float) -> float:
    """Clebsch-Gordan coefficient for integer/half-integer inputs."""

    return dcg(
        to_twos(j1, name="j1"),
        to_twos(m1, name="m1"),
        to_twos(j2, name="j2"),
        to_twos(m2, name="m2"),
        to_twos(j3, name="j3"),
        to_twos(m3, name="m3"),
    )


def wigner_3j(j1: float, j2: float, j3: float, m1: float, m2: float, m3: float) -> float:
    """Wigner 3j symbol for integer/half-integer inputs (Condon-Shortley)."""

    return threej(
        to_twos(j1, name="j1"),
        to_twos(j2, name="j2"),
        to_twos(j3, name="j3"),
        to_twos(m1, name="m1"),
        to_twos(m2, name="m2"),
        to_twos(m3, name="m3"),
    )


def wigner_6j(a: float, b: float, c: float, d: float, e: float, f: float) -> float:
    """Wigner 6j symbol for integer/half-integer inputs (Racah formula)."""

    return d6j(
        to_twos(a, name="a"),
        to_twos(b, name="b"),
        to_twos(c, name="c"),
        to_twos(d, name="d"),
        to_twos(e, name="e"),
        to_twos(f, name="f"),
    )


def wigner_9j(
    j11: float, j12: float, j13: float,
    j21: float, j22: float, j23: float,
    j31: float, j32: float, j33: float,
) -> float:
    """Wigner 9j symbol for integer/half-integer inputs."""

    return d9j(
        to_twos(j11, name="j11"),
        to_twos(j12, name="j12"),
        to_twos(j13, name="j13"),
        to_twos(j21, name="j21"),
        to_twos(j22, name="j22"),
        to_twos(j23, name="j23"),
        to_twos(j31, name="j31"),
        to_twos(j32, name="j32"),
        to_twos(j33, name="j33"),
    )
