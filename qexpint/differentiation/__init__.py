"""Engines computing Jacobians of drive-dependent closures."""

from qexpint.differentiation.base import Differentiator
from qexpint.differentiation.autodiff import ForwardModeDifferentiator
from qexpint.differentiation.finite_difference import FiniteDifferenceDifferentiator
from qexpint.differentiation.factory import create_differentiator

__all__ = [
    "Differentiator",
    "ForwardModeDifferentiator",
    "FiniteDifferenceDifferentiator",
    "create_differentiator",
]
