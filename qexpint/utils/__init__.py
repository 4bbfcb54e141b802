"""Utility helpers."""

from qexpint.utils.kronecker import eye_kronecker, eye_kronecker_matvec

__all__ = [
    "eye_kronecker",
    "eye_kronecker_matvec",
]
