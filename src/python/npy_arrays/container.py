# npy_arrays/container.py
"""The in-memory array container filled by the reader and consumed by the writers."""

from typing import Any, Optional, Sequence
import numpy as np

from .dataclasses import HeaderDescriptor
from .exceptions import ElementKindMismatchError, UnsupportedDtypeError
from .types import ElementKind, Shape
from ._internal import numpy_utils

# Kind assumed for each word size when the caller gives only a width.
_DEFAULT_KIND_FOR_WIDTH: dict[int, ElementKind] = {
    1: ElementKind.INT8,
    2: ElementKind.INT16,
    4: ElementKind.FLOAT32,
    8: ElementKind.FLOAT64,
}


class NpyArray:
    """
    Owns the raw payload of one NPY array.

    The payload is a zero-filled `bytearray` of exactly
    ``word_size * prod(shape)`` bytes and is never reallocated. Typed access
    goes through NumPy views of that buffer; the element type is the caller's
    assertion and is not checked against `element_kind`.

    Handles returned by `share()` alias the same payload, and so do views
    returned by `data()`. The buffer is released when the last of them is
    dropped.
    """

    __slots__ = ("_header", "_buffer")

    def __init__(
        self,
        shape: Sequence[int],
        word_size: int,
        fortran_order: bool = False,
        *,
        element_kind: Optional[ElementKind] = None,
    ):
        """
        Allocates a zeroed container.

        Args:
            shape: Dimension sizes, at least one. Zero-size dimensions are allowed.
            word_size: Byte width of one element.
            fortran_order: True if the payload is column-major.
            element_kind: The declared kind. Defaults to the float kind for
                widths 4 and 8 and the signed integer kind for widths 1 and 2.

        Raises:
            UnsupportedDtypeError: If no kind has `word_size` bytes.
            ElementKindMismatchError: If `element_kind` is not `word_size` wide.
            ValueError: If `shape` is empty or has negative entries.
        """
        if element_kind is None:
            try:
                element_kind = _DEFAULT_KIND_FOR_WIDTH[word_size]
            except KeyError:
                raise UnsupportedDtypeError(f"word size {word_size}") from None
        elif ElementKind(element_kind).word_size != word_size:
            raise ElementKindMismatchError(
                f"{word_size}-byte elements", ElementKind(element_kind).name
            )

        self._header = HeaderDescriptor(element_kind, tuple(shape), fortran_order)
        self._buffer = bytearray(self._header.num_bytes)

    @classmethod
    def from_header(cls, header: HeaderDescriptor) -> "NpyArray":
        return cls(header.shape, header.word_size, header.fortran_order, element_kind=header.element_kind)

    @classmethod
    def from_numpy(cls, arr: np.ndarray, *, order: Optional[str] = None) -> "NpyArray":
        """
        Copies a NumPy array into a new container.

        The payload is linearized in `order`; by default Fortran order is used
        only for arrays that are Fortran- but not C-contiguous.
        """
        order = numpy_utils.validate_order(order)
        fortran_order = numpy_utils.isfortran(arr) if order is None else order == 'F'
        kind = numpy_utils.kind_from_dtype(arr.dtype)
        out = cls(arr.shape, kind.word_size, fortran_order, element_kind=kind)
        out.data()[:] = arr.ravel(order=out.header.order)
        return out

    def share(self) -> "NpyArray":
        """Returns a new handle aliasing this container's payload."""
        other = object.__new__(NpyArray)
        other._header = self._header
        other._buffer = self._buffer
        return other

    # --- Properties ---

    @property
    def header(self) -> HeaderDescriptor:
        return self._header

    @property
    def shape(self) -> Shape:
        return self._header.shape

    @property
    def element_kind(self) -> ElementKind:
        return self._header.element_kind

    @property
    def word_size(self) -> int:
        return self._header.word_size

    @property
    def fortran_order(self) -> bool:
        return self._header.fortran_order

    @property
    def num_vals(self) -> int:
        return self._header.num_vals

    @property
    def num_bytes(self) -> int:
        return len(self._buffer)

    @property
    def buffer(self) -> memoryview:
        """A writable byte view of the payload."""
        return memoryview(self._buffer)

    def shares_payload(self, other: "NpyArray") -> bool:
        return self._buffer is other._buffer

    # --- Typed access ---

    def _dtype(self, dtype: Any) -> np.dtype:
        if dtype is None:
            return numpy_utils.numpy_dtype(self.element_kind)
        return np.dtype(dtype)

    def data(self, dtype: Any = None) -> np.ndarray:
        """
        A writable flat view of the payload as `dtype` (default: the declared kind).

        Writes through the view mutate the container in place.
        """
        dtype = self._dtype(dtype)
        if not self._buffer:
            return np.empty(0, dtype=dtype)
        return np.frombuffer(self._buffer, dtype=dtype)

    def as_vec(self, dtype: Any = None) -> np.ndarray:
        """A fresh flat copy of the payload as `dtype`."""
        return self.data(dtype).copy()

    def to_numpy(self, dtype: Any = None) -> np.ndarray:
        """A copy of the payload shaped to `shape` in the stored memory order."""
        return self.as_vec(dtype).reshape(self.shape, order=self._header.order)

    def __len__(self) -> int:
        return self.shape[0]

    def __repr__(self) -> str:
        return (
            f"NpyArray(shape={self.shape}, element_kind={self.element_kind.name}, "
            f"fortran_order={self.fortran_order})"
        )
