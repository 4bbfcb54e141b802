"""Isomorphisms and matrix exponential engines."""

from qexpint.algebra.protocols import ExponentialEngine
from qexpint.algebra.exponential import (
    DEFAULT_DROPTOL,
    ExponentialStrategy,
    HermitianExponential,
    GenericExponential,
    create_exponential_engine,
)

__all__ = [
    "ExponentialEngine",
    "DEFAULT_DROPTOL",
    "ExponentialStrategy",
    "HermitianExponential",
    "GenericExponential",
    "create_exponential_engine",
]
