"""Quantum system specifications providing generator maps."""

from typing import Protocol, Sequence
import numpy as np
from numpy.typing import NDArray

from qexpint.algebra.isomorphisms import (
    ad_vec,
    hamiltonian_to_generator,
    iso_operator,
    lindblad_dissipator,
)


class Generator(Protocol):
    """
    Drive vector → generator matrix on the lifted real vector space.

    Must be pure: integrators call it with different drives at every knot
    point, from several threads, and with JAX tracers while differentiating.
    """

    def __call__(self, a: NDArray) -> NDArray:
        ...


class QuantumSystem:
    """
    Closed system H(a) = H_drift + Σ_j a_j H_j.

    The generator G(a) = iso(-i H(a)) is affine in the drives, so it is
    assembled from precomputed lifted pieces using only products and sums.
    """

    def __init__(
        self,
        H_drift: NDArray,
        H_drives: Sequence[NDArray],
    ):
        """
        Initialize closed quantum system.

        Args:
            H_drift: Drift Hamiltonian (n, n)
            H_drives: Drive Hamiltonians, each (n, n)
        """
        self.H_drift = np.asarray(H_drift, dtype=complex)
        self.H_drives = [np.asarray(H, dtype=complex) for H in H_drives]

        n = self.H_drift.shape[0]
        if self.H_drift.shape != (n, n):
            raise ValueError("H_drift must be a square matrix")
        for j, H in enumerate(self.H_drives):
            if H.shape != (n, n):
                raise ValueError(
                    f"drive Hamiltonian {j} has shape {H.shape}, expected {(n, n)}"
                )

        self.G_drift = hamiltonian_to_generator(self.H_drift)
        self.G_drives = [hamiltonian_to_generator(H) for H in self.H_drives]

    @property
    def levels(self) -> int:
        """Hilbert space dimension n."""
        return self.H_drift.shape[0]

    @property
    def n_drives(self) -> int:
        """Number of drive channels."""
        return len(self.H_drives)

    def H(self, a: NDArray) -> NDArray:
        """Hamiltonian at drive amplitudes a, shape (n, n)."""
        return self.H_drift + sum(a_j * H_j for a_j, H_j in zip(a, self.H_drives))

    def G(self, a: NDArray) -> NDArray:
        """Generator iso(-i H(a)), shape (2n, 2n)."""
        return self.G_drift + sum(a_j * G_j for a_j, G_j in zip(a, self.G_drives))


class OpenQuantumSystem(QuantumSystem):
    """
    Open system with Lindblad dissipation:

        dρ/dt = -i[H(a), ρ] + Σ_k (L_k ρ L_k† - ½{L_k†L_k, ρ})
    """

    def __init__(
        self,
        H_drift: NDArray,
        H_drives: Sequence[NDArray],
        dissipation_operators: Sequence[NDArray] = (),
    ):
        """
        Initialize open quantum system.

        Args:
            H_drift: Drift Hamiltonian (n, n)
            H_drives: Drive Hamiltonians, each (n, n)
            dissipation_operators: Jump operators L_k, each (n, n)
        """
        super().__init__(H_drift, H_drives)

        self.dissipation_operators = [
            np.asarray(L, dtype=complex) for L in dissipation_operators
        ]
        n = self.levels
        for k, L in enumerate(self.dissipation_operators):
            if L.shape != (n, n):
                raise ValueError(
                    f"dissipation operator {k} has shape {L.shape}, expected {(n, n)}"
                )

        dissipator = iso_operator(lindblad_dissipator(self.dissipation_operators, n))
        self.L_drift = hamiltonian_to_generator(ad_vec(self.H_drift)) + dissipator
        self.L_drives = [hamiltonian_to_generator(ad_vec(H)) for H in self.H_drives]

    def liouvillian(self, a: NDArray) -> NDArray:
        """Lifted Liouvillian acting on density_to_iso_vec(ρ), shape (2n², 2n²)."""
        return self.L_drift + sum(a_j * L_j for a_j, L_j in zip(a, self.L_drives))
