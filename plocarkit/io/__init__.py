from .plocar_reader import (
    PlocarHeader, PlocarData, PlocarReader, DecodeStage,
    read_header, allocate_arrays, read_records, parameter_dict, record_dtype, read_plocar,
)
from .plocar_writer import write_plocar

__all__ = [
    "PlocarHeader","PlocarData","PlocarReader","DecodeStage",
    "read_header","allocate_arrays","read_records","parameter_dict","record_dtype","read_plocar",
    "write_plocar",
]
