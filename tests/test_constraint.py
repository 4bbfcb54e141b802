"""Tests for the trajectory-wide dynamics constraint."""

import numpy as np
import pytest

from qexpint.core.trajectory import NamedTrajectory
from qexpint.integrators import (
    UnitaryExponentialIntegrator,
    DensityOperatorExponentialIntegrator,
)
from qexpint.stepping.constraint import DynamicsConstraint


def small_unitary_trajectory(rng, T=5):
    return NamedTrajectory(
        {
            "Ut": rng.standard_normal((8, T)),
            "a": rng.standard_normal((2, T)),
            "dt": np.full((1, T), 0.1),
        },
        timestep="dt",
    )


def test_residuals_stack_per_step(qubit_system, rng):
    traj = small_unitary_trajectory(rng)
    integrator = UnitaryExponentialIntegrator("Ut", "a", qubit_system, traj)
    constraint = DynamicsConstraint(integrator, traj)

    c = constraint(traj.datavec)

    assert c.shape == (constraint.dim,)
    assert constraint.dim == 8 * 4
    for t in range(traj.T - 1):
        expected = integrator(traj.knot_point(t), traj.knot_point(t + 1), t)
        assert np.allclose(c[8 * t:8 * (t + 1)], expected)


def test_jacobian_blocks_per_step(qubit_system, rng):
    traj = small_unitary_trajectory(rng)
    integrator = UnitaryExponentialIntegrator("Ut", "a", qubit_system, traj)
    constraint = DynamicsConstraint(integrator, traj)
    zdim = traj.dim

    J = constraint.jacobian(traj.datavec).toarray()

    assert J.shape == (8 * 4, zdim * 5)
    for t in range(traj.T - 1):
        block = integrator.jacobian(traj.knot_point(t), traj.knot_point(t + 1), t)
        rows = slice(8 * t, 8 * (t + 1))
        assert np.allclose(J[rows, zdim * t:zdim * (t + 2)], block.toarray())
        assert np.allclose(J[rows, :zdim * t], 0.0)
        assert np.allclose(J[rows, zdim * (t + 2):], 0.0)


def test_jacobian_matches_finite_difference(qubit_system, rng, fd_jacobian):
    traj = small_unitary_trajectory(rng, T=3)
    integrator = UnitaryExponentialIntegrator("Ut", "a", qubit_system, traj)
    constraint = DynamicsConstraint(integrator, traj)

    Z = traj.datavec
    J_fd = fd_jacobian(constraint, Z)

    assert np.allclose(constraint.jacobian(Z).toarray(), J_fd, atol=1e-6)


def test_threaded_evaluation_matches_serial(open_qubit_system, rng):
    T = 6
    traj = NamedTrajectory(
        {
            "rho": rng.standard_normal((8, T)),
            "a": rng.standard_normal((2, T)),
            "dt": np.full((1, T), 0.1),
        },
        timestep="dt",
    )
    integrator = DensityOperatorExponentialIntegrator(
        "rho", "a", open_qubit_system, traj
    )
    serial = DynamicsConstraint(integrator, traj)
    threaded = DynamicsConstraint(integrator, traj, n_workers=4)
    Z = traj.datavec

    assert np.array_equal(serial(Z), threaded(Z))
    assert np.array_equal(
        serial.jacobian(Z).toarray(), threaded.jacobian(Z).toarray()
    )


def test_wrong_trajectory_length_raises(qubit_system, rng):
    traj = small_unitary_trajectory(rng)
    integrator = UnitaryExponentialIntegrator("Ut", "a", qubit_system, traj)
    constraint = DynamicsConstraint(integrator, traj)

    with pytest.raises(ValueError):
        constraint(np.zeros(traj.dim * traj.T + 1))


def test_invalid_worker_count_raises(qubit_system, rng):
    traj = small_unitary_trajectory(rng)
    integrator = UnitaryExponentialIntegrator("Ut", "a", qubit_system, traj)

    with pytest.raises(ValueError):
        DynamicsConstraint(integrator, traj, n_workers=0)
