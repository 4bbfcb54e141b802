"""Exponential integrators for unitaries, kets and density operators."""

from qexpint.integrators.base import ExponentialIntegrator, jacobian, get_comps
from qexpint.integrators.assembly import JacobianAssembler
from qexpint.integrators.unitary import UnitaryExponentialIntegrator
from qexpint.integrators.quantum_state import QuantumStateExponentialIntegrator
from qexpint.integrators.density_operator import DensityOperatorExponentialIntegrator

__all__ = [
    "ExponentialIntegrator",
    "JacobianAssembler",
    "UnitaryExponentialIntegrator",
    "QuantumStateExponentialIntegrator",
    "DensityOperatorExponentialIntegrator",
    "jacobian",
    "get_comps",
]
