"""
qexpint: exponential-integrator dynamics constraints for quantum optimal control.

For adjacent knot points of a discretized control trajectory this library
provides the residual enforcing exact exponential propagation of
- unitaries (closed systems),
- pure states (closed systems),
- density operators (open systems with Lindblad dissipation),
together with its sparse Jacobian with respect to states, drives and a
free timestep.
"""

__version__ = "0.1.0"

from qexpint import config  # noqa: F401
from qexpint.core.exceptions import (
    QexpintError,
    IntegratorConfigurationError,
    ExponentialComputationError,
)
from qexpint.core.system import QuantumSystem, OpenQuantumSystem
from qexpint.core.trajectory import NamedTrajectory
from qexpint.integrators import (
    ExponentialIntegrator,
    UnitaryExponentialIntegrator,
    QuantumStateExponentialIntegrator,
    DensityOperatorExponentialIntegrator,
    jacobian,
    get_comps,
)
from qexpint.stepping.constraint import DynamicsConstraint

__all__ = [
    "QexpintError",
    "IntegratorConfigurationError",
    "ExponentialComputationError",
    "QuantumSystem",
    "OpenQuantumSystem",
    "NamedTrajectory",
    "ExponentialIntegrator",
    "UnitaryExponentialIntegrator",
    "QuantumStateExponentialIntegrator",
    "DensityOperatorExponentialIntegrator",
    "jacobian",
    "get_comps",
    "DynamicsConstraint",
]
