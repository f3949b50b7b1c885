#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
plocar_reader.py — Binary PLOCAR reader for plocarkit
=====================================================
Decodes the PLOCAR file (projected local orbitals, PLO) into two dense
numpy arrays and a small parameter dictionary.

File layout (native byte order, no endianness marker)
------------------------------------------------------
    int32 precision                       # 4 or 8
    int32 nion, ns, nk, nb, nlmmax, nc_flag
    repeat nion times:
        int32 nlm
        repeat ns*nk*nb times (order: is, ik, ib):
            precision 8 : float64 weight; complex128[nlm]
            precision 4 : float32 weight; complex64[nlm]

Major components
----------------
- **read_header(fh)**
    Reads the seven header integers into a `PlocarHeader` and checks the
    precision code.

- **allocate_arrays(header, max_bytes)**
    Validates the dimensions against an allocation ceiling and returns the
    zeroed PLO `(nion, ns, nk, nb, nlmmax)` complex128 array and the Fermi
    weight `(nion, ns, nk, nb)` float64 array.

- **read_records(fh, header, plo, ferw)**
    Streams the per-ion blocks. Each `(ion, is, ik)` slab of `nb` records
    is read in one call and decoded through a packed structured dtype;
    single-precision data is widened exactly to double precision.

- **parameter_dict(header)**
    `{nion, ns, nk, nb, nc_flag}`; `nlmmax` and precision stay internal.

- **PlocarReader / read_plocar()**
    Own the file handle, run the steps above and return
    `PlocarData(params, plo, ferw)`.

Notes
-----
`nlm` is stored once per ion and assumed constant over all
`(is, ik, ib)` records of that ion. If a file ever varies it within an
ion, the records go out of step; the only visible symptom is trailing
data (or an early end-of-file), which is reported.

Usage
------
```python
from plocarkit.io import read_plocar

params, plo, ferw = read_plocar("PLOCAR", verbose=True)
```

License:
    MIT License (see LICENSE file)

Version:
    1.0.0
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple
import logging
import math
import os

import numpy as np
from tqdm import tqdm

from ..config import DecodeOptions
from ..constants import (
    HEADER_FIELDS, HEADER_DTYPE, HEADER_NBYTES, NLM_DTYPE,
    SUPPORTED_PRECISIONS, WEIGHT_DTYPES, COEFF_DTYPES,
    PLO_DTYPE, FERW_DTYPE, DEFAULT_PLOCAR, DEFAULT_MAX_BYTES,
)
from ..errors import (
    FileOpenError, InvalidHeaderError, InvalidRecordError,
    ReadError, UnexpectedEOFError, UnsupportedPrecisionError,
)

logger = logging.getLogger(__name__)


###############################################################################
# DATA TYPES
###############################################################################
@dataclass(frozen=True)
class PlocarHeader:
    precision: int
    nion: int
    ns: int
    nk: int
    nb: int
    nlmmax: int
    nc_flag: int

    @property
    def is_double(self) -> bool:
        return self.precision == 8

    @property
    def ferw_shape(self) -> tuple[int, int, int, int]:
        return (self.nion, self.ns, self.nk, self.nb)

    @property
    def plo_shape(self) -> tuple[int, int, int, int, int]:
        return (self.nion, self.ns, self.nk, self.nb, self.nlmmax)


class PlocarData(NamedTuple):
    params: dict
    plo: np.ndarray
    ferw: np.ndarray


class DecodeStage(Enum):
    IDLE = "idle"
    HEADER_PARSED = "header-parsed"
    ARRAYS_ALLOCATED = "arrays-allocated"
    DECODING = "decoding"
    DONE = "done"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (DecodeStage.DONE, DecodeStage.ERROR)


def record_dtype(precision: int, nlm: int) -> np.dtype:
    """
    Packed on-disk dtype of a single (is, ik, ib) record:
    one weight followed by `nlm` complex coefficients, no padding.
    """
    fields = [("weight", WEIGHT_DTYPES[precision])]
    if nlm > 0:
        fields.append(("coeffs", COEFF_DTYPES[precision], (nlm,)))
    return np.dtype(fields)


###############################################################################
# LOW-LEVEL READS
###############################################################################
def _read_exact(fh, nbytes: int, filename: str, what: str) -> bytes:
    try:
        buf = fh.read(nbytes)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise ReadError(f"Error reading {filename}: {reason}",
                        filename, strerror=reason) from exc
    got = 0 if buf is None else len(buf)
    if got < nbytes:
        raise UnexpectedEOFError(
            f"End-of-file reading {filename} ({what}: expected {nbytes} bytes, got {got})",
            filename,
        )
    return buf


def read_header(fh, filename: str = "<stream>") -> PlocarHeader:
    """
    Parse the fixed header from a binary stream positioned at offset 0.

    Raises UnexpectedEOFError on a short read, ReadError on other stream
    failures and UnsupportedPrecisionError when the precision code is not
    4 or 8. Dimensions are checked later by `allocate_arrays`.
    """
    buf = _read_exact(fh, HEADER_NBYTES, filename, "header")
    values = np.frombuffer(buf, dtype=HEADER_DTYPE, count=len(HEADER_FIELDS))
    header = PlocarHeader(**{name: int(v) for name, v in zip(HEADER_FIELDS, values)})

    if header.precision not in SUPPORTED_PRECISIONS:
        raise UnsupportedPrecisionError(
            f"Error reading {filename}: only 'prec = 4, 8' are supported "
            f"(found prec = {header.precision})",
            filename,
        )
    return header


###############################################################################
# ALLOCATION / PARAMETERS
###############################################################################
def allocate_arrays(header: PlocarHeader,
                    max_bytes: int = DEFAULT_MAX_BYTES,
                    filename: str = "<stream>") -> tuple[np.ndarray, np.ndarray]:
    """Return zeroed (plo, ferw) arrays sized from the header."""
    dims = {
        "nion": header.nion, "ns": header.ns, "nk": header.nk,
        "nb": header.nb, "nlmmax": header.nlmmax,
    }
    bad = {k: v for k, v in dims.items() if v <= 0}
    if bad:
        listing = ", ".join(f"{k}={v}" for k, v in bad.items())
        raise InvalidHeaderError(
            f"Invalid header in {filename}: dimensions must be positive ({listing})",
            filename,
        )

    total_ferw = math.prod(header.ferw_shape)
    total_plo = total_ferw * header.nlmmax
    nbytes = total_plo * PLO_DTYPE.itemsize + total_ferw * FERW_DTYPE.itemsize
    if nbytes > max_bytes:
        raise InvalidHeaderError(
            f"Invalid header in {filename}: arrays of shape {header.plo_shape} "
            f"need {nbytes / 1024**3:.2f} GiB, above the {max_bytes / 1024**3:.2f} GiB limit",
            filename,
        )

    plo = np.zeros(header.plo_shape, dtype=PLO_DTYPE)
    ferw = np.zeros(header.ferw_shape, dtype=FERW_DTYPE)
    return plo, ferw


def parameter_dict(header: PlocarHeader) -> dict:
    return {
        "nion": header.nion,
        "ns": header.ns,
        "nk": header.nk,
        "nb": header.nb,
        "nc_flag": header.nc_flag,
    }


###############################################################################
# RECORDS
###############################################################################
def _read_nlm(fh, ion: int, header: PlocarHeader, filename: str) -> int:
    buf = _read_exact(fh, NLM_DTYPE.itemsize, filename, f"nlm of ion {ion}")
    nlm = int(np.frombuffer(buf, dtype=NLM_DTYPE, count=1)[0])
    if not 0 <= nlm <= header.nlmmax:
        raise InvalidRecordError(
            f"Invalid record in {filename}: ion {ion} has nlm = {nlm}, "
            f"expected 0 <= nlm <= nlmmax = {header.nlmmax}",
            filename, ion=ion, nlm=nlm,
        )
    return nlm


def read_records(fh, header: PlocarHeader, plo: np.ndarray, ferw: np.ndarray,
                 filename: str = "<stream>", options: DecodeOptions | None = None) -> None:
    """
    Fill `plo` and `ferw` from a stream positioned right after the header.

    Fill order is ion → is → ik → ib → lm. Entries beyond the per-ion
    `nlm` on the last PLO axis are left untouched (zero).
    """
    options = options or DecodeOptions()
    ions = tqdm(range(header.nion), desc="Reading PLOCAR", unit="ion",
                leave=False, disable=not options.progress)

    for ion in ions:
        nlm = _read_nlm(fh, ion, header, filename)
        logger.debug(f"[read_records] ion={ion:4d}: nlm={nlm}")

        rec = record_dtype(header.precision, nlm)
        slab_nbytes = rec.itemsize * header.nb

        for isp in range(header.ns):
            for ik in range(header.nk):
                buf = _read_exact(fh, slab_nbytes, filename,
                                  f"ion {ion}, spin {isp}, k-point {ik}")
                slab = np.frombuffer(buf, dtype=rec, count=header.nb)

                # float32/complex64 → float64/complex128 is an exact widening
                ferw[ion, isp, ik, :] = slab["weight"]
                if nlm:
                    plo[ion, isp, ik, :, :nlm] = slab["coeffs"]


###############################################################################
# ORCHESTRATION
###############################################################################
class PlocarReader:
    """
    One-shot reader for a PLOCAR file.

    `read()` walks the stages IDLE → HEADER_PARSED → ARRAYS_ALLOCATED →
    DECODING → DONE; any failure moves it to ERROR and re-raises. The file
    handle is closed on every path. A reader cannot be reused once it has
    reached DONE or ERROR.
    """

    def __init__(self, filename: str | os.PathLike = DEFAULT_PLOCAR,
                 options: DecodeOptions | None = None):
        self.filename = os.fspath(filename)
        self.options = options or DecodeOptions()
        self.stage = DecodeStage.IDLE
        self.header: PlocarHeader | None = None

    def __repr__(self):
        return f"PlocarReader({self.filename!r}, stage={self.stage.value})"

    def _advance(self, stage: DecodeStage) -> None:
        logger.debug(f"[PlocarReader] {self.stage.value} -> {stage.value}")
        self.stage = stage

    def _log_header(self, header: PlocarHeader) -> None:
        lvl = self.options.log_level
        logger.log(lvl, "  Data in %s precision", "double" if header.is_double else "single")
        for name in HEADER_FIELDS[1:]:
            logger.log(lvl, "  %s: %d", name, getattr(header, name))

    def _check_trailing(self, fh) -> None:
        # pipes and FIFOs cannot report their remaining length
        if not fh.seekable():
            logger.debug(f"[PlocarReader] {self.filename} is not seekable; trailing-data check skipped")
            return
        try:
            pos = fh.tell()
            end = fh.seek(0, os.SEEK_END)
        except OSError as exc:
            logger.debug(f"[PlocarReader] trailing-data check skipped for {self.filename}: {exc}")
            return
        if end > pos:
            logger.warning(
                f"[PlocarReader] {end - pos} trailing bytes after the last record of "
                f"{self.filename}; nlm may vary within an ion, which this format cannot express"
            )

    def read(self) -> PlocarData:
        if self.stage is not DecodeStage.IDLE:
            raise RuntimeError(f"{self!r} has already been used; create a new reader")

        logger.log(self.options.log_level, "  Reading PLO data from file: %s", self.filename)

        try:
            fh = open(self.filename, "rb")
        except OSError as exc:
            self.stage = DecodeStage.ERROR
            raise FileOpenError(
                f"Error opening {self.filename}: {exc.strerror or exc}", self.filename,
                errno=exc.errno, strerror=exc.strerror,
            ) from exc

        try:
            with fh:
                header = read_header(fh, self.filename)
                self.header = header
                self._advance(DecodeStage.HEADER_PARSED)
                self._log_header(header)

                params = parameter_dict(header)
                plo, ferw = allocate_arrays(header, self.options.max_bytes, self.filename)
                self._advance(DecodeStage.ARRAYS_ALLOCATED)

                self._advance(DecodeStage.DECODING)
                read_records(fh, header, plo, ferw, self.filename, self.options)
                self._check_trailing(fh)
        except BaseException:
            self.stage = DecodeStage.ERROR
            raise

        self._advance(DecodeStage.DONE)
        return PlocarData(params, plo, ferw)


def read_plocar(filename: str | os.PathLike = DEFAULT_PLOCAR,
                verbose: bool = False,
                options: DecodeOptions | None = None) -> PlocarData:
    """
    Read a PLOCAR file and return `(params, plo, ferw)`.

    params : dict with keys nion, ns, nk, nb, nc_flag
    plo    : complex128 array, shape (nion, ns, nk, nb, nlmmax)
    ferw   : float64 array,    shape (nion, ns, nk, nb)

    `verbose` raises the reader's messages from DEBUG to INFO on the
    `plocarkit` logger; nothing is printed. Without a configured handler
    (e.g. `logging.basicConfig(level=logging.INFO)` or
    `plocarkit.logging_utils.setup_logger()`) the messages stay silent.
    """
    opts = options or DecodeOptions()
    if verbose and not opts.verbose:
        opts = opts.with_overrides(verbose=True)
    return PlocarReader(filename, opts).read()
