"""Derived quantities: density matrix, occupations, band character."""

import numpy as np
import pytest

from conftest import random_plo
from plocarkit.analysis import (
    band_character,
    local_density_matrix,
    occupation_table,
    orbital_occupations,
)


@pytest.fixture
def arrays():
    plo, ferw = random_plo((2, 2, 3, 4, 5), [5, 3], seed=11)
    params = {"nion": 2, "ns": 2, "nk": 3, "nb": 4, "nc_flag": 0}
    return params, plo, ferw


def test_density_matrix_matches_loop(arrays):
    _, plo, ferw = arrays
    dm = local_density_matrix(plo, ferw)
    assert dm.shape == (2, 2, 5, 5)

    ref = np.zeros_like(dm)
    for ion in range(2):
        for isp in range(2):
            for ik in range(3):
                for ib in range(4):
                    p = plo[ion, isp, ik, ib]
                    ref[ion, isp] += ferw[ion, isp, ik, ib] * np.outer(p, p.conj())
    np.testing.assert_allclose(dm, ref, rtol=1e-12, atol=1e-12)
    np.testing.assert_allclose(dm, dm.conj().swapaxes(-1, -2), atol=1e-12)


def test_occupations_are_density_matrix_diagonal(arrays):
    _, plo, ferw = arrays
    occ = orbital_occupations(plo, ferw)
    dm = local_density_matrix(plo, ferw)
    np.testing.assert_allclose(occ, np.diagonal(dm, axis1=-2, axis2=-1).real, rtol=1e-12)
    assert (occ >= 0).all()
    assert not occ[1, :, 3:].any()


def test_band_character(arrays):
    _, plo, _ = arrays
    char = band_character(plo)
    assert char.shape == (2, 2, 3, 4)
    np.testing.assert_allclose(char[0, 1, 2, 3], np.sum(np.abs(plo[0, 1, 2, 3]) ** 2))


def test_occupation_table(arrays):
    params, plo, ferw = arrays
    table = occupation_table(params, plo, ferw)
    assert list(table.columns) == ["ion", "spin", "lm", "occupation"]
    assert len(table) == 2 * 2 * 5
    occ = orbital_occupations(plo, ferw)
    row = table[(table.ion == 1) & (table.spin == 0) & (table.lm == 2)]
    assert row["occupation"].item() == pytest.approx(occ[1, 0, 2])


def test_shape_checks(arrays):
    params, plo, ferw = arrays
    with pytest.raises(ValueError):
        local_density_matrix(plo, ferw[:, :1])
    with pytest.raises(ValueError):
        band_character(plo[0])
    with pytest.raises(ValueError):
        occupation_table(dict(params, nion=3), plo, ferw)
