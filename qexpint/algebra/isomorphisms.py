"""Real-vector isomorphisms for kets, operators and density operators.

Complex objects are lifted to real vectors so that real-valued optimizers and
differentiation engines can act on them directly:

    ψ      ↦  [Re ψ; Im ψ]
    A      ↦  [[Re A, -Im A], [Im A, Re A]]
    U      ↦  column-wise concatenation of the lifted columns of U
    ρ      ↦  lifted column-major vec(ρ)

A Hamiltonian H enters the dynamics through its generator G(H) = iso(-iH).
"""

import numpy as np
from numpy.typing import NDArray


def ket_to_iso(psi: NDArray) -> NDArray:
    """Lift a complex ket to [Re ψ; Im ψ]."""
    psi = np.asarray(psi)
    return np.concatenate([np.real(psi), np.imag(psi)]).astype(float)


def iso_to_ket(psi_iso: NDArray) -> NDArray:
    """Inverse of ket_to_iso."""
    psi_iso = np.asarray(psi_iso)
    n = psi_iso.shape[0] // 2
    return psi_iso[:n] + 1j * psi_iso[n:]


def iso_operator(A: NDArray) -> NDArray:
    """
    Real block form of a complex matrix acting on lifted kets.

    Satisfies iso_operator(A) @ ket_to_iso(ψ) == ket_to_iso(A @ ψ).

    Args:
        A: Complex matrix (n, n)

    Returns:
        Real matrix (2n, 2n)
    """
    A = np.asarray(A)
    re, im = np.real(A), np.imag(A)
    return np.block([[re, -im], [im, re]]).astype(float)


def iso_operator_to_complex(A_iso: NDArray) -> NDArray:
    """Inverse of iso_operator."""
    A_iso = np.asarray(A_iso)
    n = A_iso.shape[0] // 2
    return A_iso[:n, :n] + 1j * A_iso[n:, :n]


def operator_to_iso_vec(U: NDArray) -> NDArray:
    """Stack the lifted columns of an operator into one real vector."""
    U = np.asarray(U)
    return np.concatenate([ket_to_iso(U[:, j]) for j in range(U.shape[1])])


def iso_vec_to_operator(U_iso: NDArray) -> NDArray:
    """Inverse of operator_to_iso_vec for a square operator."""
    U_iso = np.asarray(U_iso)
    n = int(round(np.sqrt(U_iso.shape[0] // 2)))
    columns = U_iso.reshape(n, 2 * n)
    return (columns[:, :n] + 1j * columns[:, n:]).T


def density_to_iso_vec(rho: NDArray) -> NDArray:
    """Lift the column-major vectorization of a density operator."""
    rho = np.asarray(rho)
    return ket_to_iso(rho.reshape(-1, order="F"))


def iso_vec_to_density(rho_iso: NDArray) -> NDArray:
    """Inverse of density_to_iso_vec."""
    vec = iso_to_ket(rho_iso)
    n = int(round(np.sqrt(vec.shape[0])))
    return vec.reshape(n, n, order="F")


def hamiltonian_to_generator(H: NDArray) -> NDArray:
    """
    Generator G(H) = iso(-iH) = [[Im H, Re H], [-Re H, Im H]].

    Args:
        H: Hamiltonian (n, n), Hermitian for closed dynamics

    Returns:
        Real generator (2n, 2n)
    """
    return iso_operator(-1j * np.asarray(H))


def generator_to_hamiltonian(G) -> NDArray:
    """
    Recover H from G = iso(-iH).

    Accepts dense arrays or scipy sparse matrices.

    Args:
        G: Real generator (2n, 2n)

    Returns:
        Complex matrix H (n, n)
    """
    if hasattr(G, "toarray"):
        G = G.toarray()
    G = np.asarray(G)
    n = G.shape[0] // 2
    return -G[n:, :n] + 1j * G[:n, :n]


def ad_vec(H: NDArray) -> NDArray:
    """
    Vectorized commutator: vec([H, ρ]) = ad_vec(H) @ vec(ρ), column-major.

    Args:
        H: Operator (n, n)

    Returns:
        Superoperator I ⊗ H - Hᵀ ⊗ I of shape (n², n²)
    """
    H = np.asarray(H)
    Id = np.eye(H.shape[0])
    return np.kron(Id, H) - np.kron(H.T, Id)


def lindblad_dissipator(L_ops: list[NDArray], n: int) -> NDArray:
    """
    Vectorized dissipator Σ_k L̄_k ⊗ L_k - ½ I ⊗ L_k†L_k - ½ (L_k†L_k)ᵀ ⊗ I.

    Args:
        L_ops: Dissipation (jump) operators, each (n, n)
        n: Hilbert space dimension

    Returns:
        Complex superoperator (n², n²)
    """
    Id = np.eye(n)
    D = np.zeros((n * n, n * n), dtype=complex)

    for L in L_ops:
        L = np.asarray(L, dtype=complex)
        LdagL = L.conj().T @ L
        D += np.kron(L.conj(), L)
        D -= 0.5 * np.kron(Id, LdagL)
        D -= 0.5 * np.kron(LdagL.T, Id)

    return D
