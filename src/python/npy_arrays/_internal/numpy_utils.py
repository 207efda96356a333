# npy_arrays/_internal/numpy_utils.py

"""
Internal utilities for interacting with NumPy arrays.

This module handles the conversion between NumPy's data types and the
library's `ElementKind` registry, and the memory-order helpers used by the
writers.
"""

from typing import Any, Optional, TypeAlias
import numpy as np

from ..types import ArrayOrder, ElementKind
from ..exceptions import ElementKindMismatchError, UnsupportedDtypeError

# Anything accepted where an element kind is expected.
KindLike: TypeAlias = ElementKind | str | np.dtype | type

# --- Mappings ---

# Maps element kinds to little-endian NumPy dtype objects.
_KIND_TO_NP_DTYPE: dict[ElementKind, np.dtype] = {
    ElementKind.INT8: np.dtype('<i1'),
    ElementKind.INT16: np.dtype('<i2'),
    ElementKind.INT32: np.dtype('<i4'),
    ElementKind.INT64: np.dtype('<i8'),
    ElementKind.UINT8: np.dtype('<u1'),
    ElementKind.UINT16: np.dtype('<u2'),
    ElementKind.UINT32: np.dtype('<u4'),
    ElementKind.UINT64: np.dtype('<u8'),
    ElementKind.FLOAT32: np.dtype('<f4'),
    ElementKind.FLOAT64: np.dtype('<f8'),
}

# --- Functions ---

def numpy_dtype(kind: ElementKind) -> np.dtype:
    """Returns the little-endian NumPy dtype for an element kind."""
    return _KIND_TO_NP_DTYPE[kind]

def kind_from_dtype(dtype: Any) -> ElementKind:
    """
    Converts anything `np.dtype()` understands into an element kind.

    Raises:
        UnsupportedDtypeError: If the dtype is big-endian, structured, or
            outside the registry.
    """
    try:
        dt = np.dtype(dtype)
    except TypeError:
        raise UnsupportedDtypeError(dtype) from None

    if dt.names is not None or dt.byteorder == '>' or dt.kind not in 'iuf':
        raise UnsupportedDtypeError(dt.str)
    return ElementKind.from_type(dt.kind, dt.itemsize)

def resolve_kind(kind: KindLike) -> ElementKind:
    """
    Normalizes the many ways callers name an element kind.

    Accepts an `ElementKind`, an enum member name (``'FLOAT32'``), an NPY
    descriptor (``'<f4'``), or any NumPy dtype-like (``np.float32``,
    ``'float32'``).
    """
    if isinstance(kind, ElementKind):
        return kind
    if isinstance(kind, str):
        if kind.upper() in ElementKind.__members__:
            return ElementKind[kind.upper()]
        if kind[:1] in '<|':
            return ElementKind.from_descr(kind)
    return kind_from_dtype(kind)

def isfortran(arr: np.ndarray) -> bool:
    """True only for arrays that are Fortran-contiguous and not also C-contiguous."""
    return (not arr.flags.c_contiguous) and arr.flags.f_contiguous

def validate_order(order: Optional[str]) -> Optional[ArrayOrder]:
    if order is None or order in ('C', 'F'):
        return order
    raise ValueError(f"order must be 'C' or 'F', got {order!r}")

def coerce_payload(data: Any, kind: ElementKind) -> np.ndarray:
    """
    Turns caller data into an array of the NumPy dtype matching `kind`.

    NumPy arrays must already carry the matching dtype; their bytes are never
    silently reinterpreted or cast. Other buffers and sequences are converted.

    Raises:
        ElementKindMismatchError: If `data` is an array of another dtype.
    """
    expected = numpy_dtype(kind)
    if isinstance(data, np.ndarray):
        if data.dtype != expected:
            raise ElementKindMismatchError(expected.str, data.dtype.str)
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=expected)
    return np.asarray(data, dtype=expected)
