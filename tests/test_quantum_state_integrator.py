"""Tests for the pure state exponential integrator."""

import numpy as np
import pytest
import scipy.linalg
import jax
import jax.numpy as jnp
import jax.scipy.linalg

from qexpint.algebra.isomorphisms import ket_to_iso
from qexpint.core.trajectory import NamedTrajectory
from qexpint.integrators import QuantumStateExponentialIntegrator, get_comps


def random_state_trajectory(rng, T=100, dt=0.1):
    return NamedTrajectory(
        {
            "psi": rng.standard_normal((4, T)),
            "a": rng.standard_normal((2, T)),
            "da": rng.standard_normal((2, T)),
            "dt": np.full((1, T), dt),
        },
        timestep="dt",
    )


def test_ket_dimension_is_half_state_dimension(qubit_system, rng):
    traj = random_state_trajectory(rng)
    integrator = QuantumStateExponentialIntegrator("psi", "a", qubit_system, traj)

    assert integrator.ketdim == 2
    assert integrator.dim == 4


def test_residual_zero_on_consistent_trajectory(qubit_system, rng):
    """Residual vanishes when ψ_{t+1} = exp(-iΔt H(a_t)) ψ_t."""
    T, dt = 8, 0.2
    a = rng.standard_normal((2, T))
    psi = np.array([1.0, 0.0], dtype=complex)
    states = np.zeros((4, T))
    states[:, 0] = ket_to_iso(psi)

    for t in range(T - 1):
        psi = scipy.linalg.expm(-1j * dt * qubit_system.H(a[:, t])) @ psi
        states[:, t + 1] = ket_to_iso(psi)

    traj = NamedTrajectory({"psi": states, "a": a}, timestep=dt)
    integrator = QuantumStateExponentialIntegrator("psi", "a", qubit_system, traj)

    for t in range(T - 1):
        residual = integrator(traj.knot_point(t), traj.knot_point(t + 1), t)
        assert np.linalg.norm(residual) < 1e-10


@pytest.mark.parametrize("t", [0, 1])
def test_jacobian_matches_finite_difference(qubit_system, rng, fd_jacobian, t):
    traj = random_state_trajectory(rng)
    integrator = QuantumStateExponentialIntegrator("psi", "a", qubit_system, traj)
    zdim = traj.dim

    z, z_next = traj.knot_point(t), traj.knot_point(t + 1)
    J = integrator.jacobian(z, z_next, t).toarray()
    J_fd = fd_jacobian(
        lambda zz: integrator(zz[:zdim], zz[zdim:], t),
        np.concatenate([z, z_next]),
    )

    assert np.allclose(J, J_fd, atol=1e-6)


def test_jacobian_matches_autodiff_reference(qubit_system, rng):
    """Every block agrees with jax.jacfwd of an independent residual."""
    traj = random_state_trajectory(rng)
    integrator = QuantumStateExponentialIntegrator("psi", "a", qubit_system, traj)
    zdim = traj.dim
    state = traj.components["psi"]
    drive = traj.components["a"]
    dt_index = traj.components["dt"][0]

    def reference(zz):
        z, z_next = zz[:zdim], zz[zdim:]
        E = jax.scipy.linalg.expm(z[dt_index] * qubit_system.G(z[drive]))
        return z_next[state] - E @ z[state]

    zz = np.concatenate([traj.knot_point(0), traj.knot_point(1)])
    J_ad = np.asarray(jax.jacfwd(reference)(jnp.asarray(zz)))
    J = integrator.jacobian(zz[:zdim], zz[zdim:], 0).toarray()

    assert np.allclose(J[:, state], J_ad[:, state])
    assert np.allclose(J[:, zdim + state], J_ad[:, zdim + state])
    assert np.allclose(J[:, drive], J_ad[:, drive])
    assert np.allclose(J[:, dt_index], J_ad[:, dt_index])
    assert np.allclose(J, J_ad, atol=1e-9)


def test_timestep_column_finite_difference_in_dt(qubit_system, rng):
    """d/dΔt exp(ΔtG) = G exp(ΔtG) against central differences in Δt."""
    traj = random_state_trajectory(rng, T=3, dt=0.25)
    integrator = QuantumStateExponentialIntegrator("psi", "a", qubit_system, traj)
    z, z_next = traj.knot_point(0), traj.knot_point(1)
    idx = integrator.timestep

    h = 1e-6
    z_plus, z_minus = z.copy(), z.copy()
    z_plus[idx] += h
    z_minus[idx] -= h
    column_fd = (integrator(z_plus, z_next, 0) - integrator(z_minus, z_next, 0)) / (2 * h)

    J = integrator.jacobian(z, z_next, 0).toarray()
    assert np.allclose(J[:, idx], column_fd, atol=1e-6)


def test_zero_timestep_gives_identity(qubit_system, rng):
    traj = random_state_trajectory(rng, T=3, dt=0.0)
    integrator = QuantumStateExponentialIntegrator("psi", "a", qubit_system, traj)
    z, z_next = traj.knot_point(0), traj.knot_point(1)

    assert np.allclose(integrator(z, z_next, 0), z_next[:4] - z[:4], atol=1e-14)
    J = integrator.jacobian(z, z_next, 0).toarray()
    assert np.allclose(J[:, :4], -np.eye(4), atol=1e-14)


def test_get_comps_includes_timestep_when_free(qubit_system, rng):
    traj = random_state_trajectory(rng, T=3)
    integrator = QuantumStateExponentialIntegrator("psi", "a", qubit_system, traj)

    state, drive, timestep = get_comps(integrator, traj)
    assert np.array_equal(state, traj.components["psi"])
    assert np.array_equal(drive, traj.components["a"])
    assert np.array_equal(timestep, traj.components["dt"])
