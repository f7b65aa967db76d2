"""angmom — angular-momentum coupling coefficients in doubled-integer labels."""

from importlib.metadata import PackageNotFoundError, version as _dist_version

from angmom._core import AngularMomentumError, to_twos
from angmom.config import Limits, get_limits, reset_limits
from angmom.rotation import dfunc, dmatrix, wigner_d
from angmom.wigner import (
    clebsch_gordan,
    d6j,
    d9j,
    dcg,
    sixj_cache_clear,
    sixj_cache_info,
    threej,
    wigner_3j,
    wigner_6j,
    wigner_9j,
)

try:
    __version__ = _dist_version("angmom")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    "AngularMomentumError",
    # Doubled-integer evaluators
    "dcg",
    "d6j",
    "d9j",
    "dfunc",
    "threej",
    "dmatrix",
    # Integer/half-integer front-ends
    "clebsch_gordan",
    "wigner_3j",
    "wigner_6j",
    "wigner_9j",
    "wigner_d",
    "to_twos",
    # Configuration
    "Limits",
    "get_limits",
    "reset_limits",
    "sixj_cache_info",
    "sixj_cache_clear",
]
