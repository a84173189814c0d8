"""Interaction matrices assembled from a bond list."""

from __future__ import annotations

from typing import Iterable

import numpy as np
import scipy.sparse as sp

from .strength import is_symbolic
from .types import Array, Container


def _numeric_strengths(container: Container) -> list:
    strengths = []
    for bond in container.connections:
        if is_symbolic(bond.strength):
            raise TypeError(
                f"Bond {bond.from_site}->{bond.to_site} has symbolic strength '{bond.strength}'; "
                "map it to a number before assembling matrices."
            )
        strengths.append(bond.strength)
    return strengths


def _check_indices(container: Container) -> tuple[Array, Array]:
    rows = np.array([bond.from_site for bond in container.connections], dtype=int)
    cols = np.array([bond.to_site for bond in container.connections], dtype=int)
    n = container.n_sites
    if rows.size and (rows.min() < 0 or cols.min() < 0 or rows.max() >= n or cols.max() >= n):
        raise IndexError(f"Bond references a site outside 0..{n - 1}.")
    return rows, cols


def real_space_matrix(
    container: Container,
    *,
    enforce_hermitian: bool = False,
    sparse: bool = False,
) -> Array | sp.csr_matrix:
    """Return ``M`` with ``M[from, to]`` summed over all bonds.

    The matrix is real unless a strength is complex. ``sparse=True`` returns a
    ``scipy.sparse.csr_matrix`` with the same entries.
    """

    strengths = _numeric_strengths(container)
    rows, cols = _check_indices(container)
    values = np.asarray(strengths)
    dtype = np.complex128 if np.iscomplexobj(values) else float
    values = values.astype(dtype) if values.size else np.zeros(0, dtype=dtype)
    n = container.n_sites

    if sparse:
        # duplicate (row, col) entries are summed by the COO -> CSR conversion
        mat = sp.coo_matrix((values, (rows, cols)), shape=(n, n), dtype=dtype).tocsr()
        if enforce_hermitian:
            mat = (0.5 * (mat + mat.conj().T)).tocsr()
        return mat

    mat = np.zeros((n, n), dtype=dtype)
    np.add.at(mat, (rows, cols), values)
    if enforce_hermitian:
        mat = 0.5 * (mat + mat.conj().T)
    return mat


def bloch_matrix(
    container: Container,
    k: Iterable[float],
    *,
    enforce_hermitian: bool = False,
) -> Array:
    """Return ``H(k)`` with each bond contributing ``s * exp(-i k . dr)``.

    ``dr`` is the displacement from the source site to the target site,
    including the lattice translations of the bond's wrap.
    """

    kvec = np.asarray(list(k), dtype=float)
    positions = container.site_positions
    if kvec.shape != (container.dimension,):
        raise ValueError(f"k must have {container.dimension} components, got shape {kvec.shape}.")

    strengths = _numeric_strengths(container)
    rows, cols = _check_indices(container)
    n = container.n_sites
    mat = np.zeros((n, n), dtype=np.complex128)
    if not strengths:
        return mat

    displacement = positions[cols] - positions[rows]
    if container.periodicity:
        wraps = np.array([bond.wrap for bond in container.connections], dtype=float)
        displacement = displacement + wraps @ container.lattice_vectors
    phases = np.exp(-1j * (displacement @ kvec))
    np.add.at(mat, (rows, cols), np.asarray(strengths, dtype=np.complex128) * phases)
    if enforce_hermitian:
        mat = 0.5 * (mat + mat.conj().T)
    return mat
