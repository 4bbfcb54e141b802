"""Trajectory-wide constraint evaluation."""

from qexpint.stepping.constraint import DynamicsConstraint

__all__ = [
    "DynamicsConstraint",
]
