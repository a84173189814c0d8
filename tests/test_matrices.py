import numpy as np
import pytest

from latticepy.core import Bond, Unitcell, add_bond, bloch_matrix, real_space_matrix
from latticepy.construction import get_lattice
from latticepy.models import chain_unitcell, honeycomb_unitcell, square_unitcell


def _cluster(n_sites: int) -> Unitcell:
    return Unitcell(lattice_vectors=np.zeros((0, 2)), basis=[[float(i), 0.0] for i in range(n_sites)])


def test_parallel_bonds_accumulate() -> None:
    uc = _cluster(2)
    uc.connections = [Bond(0, 1, 1.0, ()), Bond(0, 1, 2.0, ())]
    mat = real_space_matrix(uc)
    assert mat.dtype == float
    assert mat[0, 1] == 3.0
    assert mat[1, 0] == 0.0


def test_complex_strengths_give_hermitian_matrix() -> None:
    uc = _cluster(3)
    add_bond(uc, 0, 1, 1.0 + 0.5j)
    add_bond(uc, 1, 2, -2.0j)
    mat = real_space_matrix(uc)
    assert np.iscomplexobj(mat)
    assert np.allclose(mat, mat.conj().T)


def test_enforce_hermitian_symmetrizes() -> None:
    uc = _cluster(2)
    uc.connections = [Bond(0, 1, 2.0, ())]
    mat = real_space_matrix(uc, enforce_hermitian=True)
    assert np.allclose(mat, [[0.0, 1.0], [1.0, 0.0]])


def test_sparse_matches_dense() -> None:
    lattice = get_lattice(honeycomb_unitcell(strength=0.5 + 0.1j), [-3, -3])
    dense = real_space_matrix(lattice)
    sparse = real_space_matrix(lattice, sparse=True)
    assert sparse.shape == dense.shape
    assert np.allclose(sparse.toarray(), dense)


def test_symbolic_strength_is_rejected() -> None:
    uc = square_unitcell(strength="t")
    with pytest.raises(TypeError):
        real_space_matrix(uc)
    with pytest.raises(TypeError):
        bloch_matrix(uc, [0.0, 0.0])


def test_out_of_range_site_is_rejected() -> None:
    uc = _cluster(2)
    uc.connections = [Bond(0, 2, 1.0, ())]
    with pytest.raises(IndexError):
        real_space_matrix(uc)


def test_bloch_rejects_wrong_k_length() -> None:
    with pytest.raises(ValueError):
        bloch_matrix(square_unitcell(), [0.0])


def test_bloch_square_dispersion() -> None:
    uc = square_unitcell()
    for kx, ky in [(0.0, 0.0), (0.4, -1.3), (np.pi, np.pi / 2)]:
        mat = bloch_matrix(uc, [kx, ky])
        assert mat.shape == (1, 1)
        assert np.isclose(mat[0, 0], 2.0 * np.cos(kx) + 2.0 * np.cos(ky))


def test_bloch_chain_dispersion() -> None:
    uc = chain_unitcell(strength=-1.0)
    for k in np.linspace(-np.pi, np.pi, 7):
        assert np.isclose(bloch_matrix(uc, [k])[0, 0], -2.0 * np.cos(k))


def test_bloch_honeycomb_is_hermitian_with_graphene_spectrum() -> None:
    uc = honeycomb_unitcell()
    k = np.array([0.7, -0.2])
    mat = bloch_matrix(uc, k)
    assert np.allclose(mat, mat.conj().T)
    deltas = [np.array([0.0, 1.0]), np.array([-0.5 * np.sqrt(3.0), -0.5]), np.array([0.5 * np.sqrt(3.0), -0.5])]
    expected = abs(sum(np.exp(-1j * d @ k) for d in deltas))
    assert np.allclose(np.linalg.eigvalsh(mat), [-expected, expected])


def test_empty_bond_list_gives_zero_matrices() -> None:
    uc = _cluster(3)
    assert np.array_equal(real_space_matrix(uc), np.zeros((3, 3)))
    assert np.array_equal(bloch_matrix(uc, [0.1, 0.2]), np.zeros((3, 3)))
