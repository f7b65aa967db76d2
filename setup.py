from __future__ import annotations

import os
import re

from setuptools import find_packages, setup


def _find_version() -> str:
    here = os.path.abspath(os.path.dirname(__file__))
    with open(os.path.join(here, "angmom", "__init__.py"), encoding="utf-8") as fp:
        text = fp.read()
    match = re.search(r'__version__ = "([^"]+)"', text)
    if match is None:
        raise SystemExit("angmom/__init__.py does not define a fallback __version__")
    return match.group(1)


setup(
    name="angmom",
    version=_find_version(),
    description="Clebsch-Gordan coefficients, Wigner 6j/9j symbols and small-d functions in doubled-integer labels.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": [
            "pytest",
            "scipy",
            "sympy",
        ],
    },
)
