"""Shared systems and helpers for the integrator tests."""

import numpy as np
import pytest

import qexpint  # noqa: F401  (enables 64-bit JAX before tests use it)
from qexpint.core.system import QuantumSystem, OpenQuantumSystem


PAULI_X = np.array([[0, 1], [1, 0]], dtype=complex)
PAULI_Y = np.array([[0, -1j], [1j, 0]], dtype=complex)
PAULI_Z = np.array([[1, 0], [0, -1]], dtype=complex)


def central_difference_jacobian(f, x, h=1e-6):
    """Dense Jacobian of f at x by central differences."""
    x = np.asarray(x, dtype=float)
    f0 = np.asarray(f(x))
    J = np.zeros((f0.shape[0], x.shape[0]))

    for i in range(x.shape[0]):
        x_plus = x.copy()
        x_minus = x.copy()
        x_plus[i] += h
        x_minus[i] -= h
        J[:, i] = (np.asarray(f(x_plus)) - np.asarray(f(x_minus))) / (2 * h)

    return J


@pytest.fixture
def fd_jacobian():
    return central_difference_jacobian


@pytest.fixture
def qubit_system():
    """Drift σ_z, drives {σ_x, σ_y}."""
    return QuantumSystem(PAULI_Z, [PAULI_X, PAULI_Y])


@pytest.fixture
def open_qubit_system():
    """Qubit system with decay |0⟩⟨1|."""
    psi0 = np.array([1.0, 0.0])
    psi1 = np.array([0.0, 1.0])
    return OpenQuantumSystem(PAULI_Z, [PAULI_X, PAULI_Y], [np.outer(psi0, psi1)])


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
