"""Encoding arrays into the PLOCAR layout."""

import io
import struct

import numpy as np
import pytest

from conftest import random_plo
from plocarkit.errors import UnsupportedPrecisionError
from plocarkit.io import read_header, record_dtype, write_plocar


def test_record_dtype_is_packed():
    assert record_dtype(8, 3).itemsize == 8 + 3 * 16
    assert record_dtype(4, 3).itemsize == 4 + 3 * 8
    assert record_dtype(4, 0).itemsize == 4
    assert record_dtype(8, 0).names == ("weight",)


def test_written_size_matches_layout():
    shape = (2, 2, 3, 4, 5)
    nlm = [5, 2]
    plo, ferw = random_plo(shape, nlm)
    buf = io.BytesIO()
    nbytes = write_plocar(buf, plo, ferw, nlm=nlm, precision=4)

    records = 2 * 3 * 4
    expected = 28 + sum(4 + records * (4 + n * 8) for n in nlm)
    assert nbytes == expected == len(buf.getvalue())

    buf.seek(0)
    h = read_header(buf)
    assert (h.precision, h.nion, h.ns, h.nk, h.nb, h.nlmmax) == (4, 2, 2, 3, 4, 5)
    assert struct.unpack("=i", buf.read(4)) == (5,)


def test_default_nlm_is_nlmmax(tmp_path):
    plo, ferw = random_plo((1, 1, 1, 1, 4), [4])
    path = tmp_path / "PLOCAR"
    write_plocar(path, plo, ferw)
    raw = path.read_bytes()
    assert struct.unpack("=i", raw[28:32]) == (4,)
    assert len(raw) == 28 + 4 + 8 + 4 * 16


@pytest.mark.parametrize("plo_shape, ferw_shape", [
    ((1, 1, 1, 3), (1, 1, 1)),
    ((1, 1, 1, 2, 3), (1, 1, 1, 3)),
])
def test_shape_mismatch(plo_shape, ferw_shape):
    with pytest.raises(ValueError):
        write_plocar(io.BytesIO(), np.zeros(plo_shape, complex), np.zeros(ferw_shape))


def test_bad_nlm():
    plo, ferw = random_plo((2, 1, 1, 1, 3), [3, 3])
    with pytest.raises(ValueError, match="expected 2"):
        write_plocar(io.BytesIO(), plo, ferw, nlm=[3])
    with pytest.raises(ValueError, match="outside"):
        write_plocar(io.BytesIO(), plo, ferw, nlm=[3, 4])


def test_bad_precision():
    plo, ferw = random_plo((1, 1, 1, 1, 1), [1])
    with pytest.raises(UnsupportedPrecisionError):
        write_plocar(io.BytesIO(), plo, ferw, precision=2)
