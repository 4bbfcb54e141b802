"""Core abstractions: systems, trajectory layout, errors."""

from qexpint.core.exceptions import (
    QexpintError,
    IntegratorConfigurationError,
    ExponentialComputationError,
)
from qexpint.core.system import Generator, QuantumSystem, OpenQuantumSystem
from qexpint.core.trajectory import NamedTrajectory

__all__ = [
    "QexpintError",
    "IntegratorConfigurationError",
    "ExponentialComputationError",
    "Generator",
    "QuantumSystem",
    "OpenQuantumSystem",
    "NamedTrajectory",
]
