"""Differentiator factory."""

from qexpint.differentiation.base import Differentiator
from qexpint.differentiation.autodiff import ForwardModeDifferentiator
from qexpint.differentiation.finite_difference import FiniteDifferenceDifferentiator


def create_differentiator(autodiff: bool = True) -> Differentiator:
    """
    Pick the engine for drive derivatives.

    Args:
        autodiff: Forward-mode JAX if True, central differences otherwise

    Returns:
        Differentiator
    """
    if autodiff:
        return ForwardModeDifferentiator()

    return FiniteDifferenceDifferentiator()
