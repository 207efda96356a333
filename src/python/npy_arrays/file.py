# npy_arrays/file.py
"""High-level Reader, Writer, the `open` factory and the load/save functions."""

import logging
import os
from functools import cached_property
from typing import Any, Optional, Union
import numpy as np

from .abc import NpyFileBase
from .container import NpyArray
from .dataclasses import HeaderDescriptor, RawPayload
from .exceptions import NpyHeaderError, RankMismatchError, ShapeMismatchError
from .header import DEFAULT_VERSION, encode_header, read_header
from .lowlevel import RawFile
from ._internal import numpy_utils
from ._internal.numpy_utils import KindLike

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def open(path: PathLike, mode: str = 'r') -> Union["Reader", "Writer"]:
    """
    Opens an NPY file for reading or writing.

    Args:
        path: Path to the .npy file.
        mode: 'r' (read-only) or 'w' (write, truncates if exists).

    Returns:
        A Reader or Writer object, typically used within a `with` statement.

    Raises:
        OpenFailedError: If the file cannot be opened.
        ValueError: If mode is invalid.
    """
    if mode == 'r':
        return Reader(RawFile(path, 'rb'))
    elif mode == 'w':
        return Writer(RawFile(path, 'wb'))
    raise ValueError(f"Unsupported mode: '{mode}'. Must be 'r' or 'w'.")


class Reader(NpyFileBase):
    """
    A file handle for reading an NPY file.
    Created via `npy_arrays.open(..., mode='r')`.

    The header is parsed on first access; the payload can then be read once,
    either into a new container with `read()` or into caller memory with
    `readinto()`.
    """
    def __init__(self, raw: RawFile):
        self._raw = raw
        self._consumed = False
        self._header_error: Optional[NpyHeaderError] = None

    @cached_property
    def header(self) -> HeaderDescriptor:
        """
        The decoded header. Reading it never touches payload bytes.

        A header that failed to decode keeps failing with the same error;
        the stream is not rewound and parsed again.
        """
        if self._header_error is not None:
            raise self._header_error
        try:
            return read_header(self._raw.stream)
        except NpyHeaderError as e:
            self._header_error = e
            raise

    def _take_payload(self) -> HeaderDescriptor:
        header = self.header
        if self._consumed:
            raise ValueError("The payload of this file has already been read.")
        self._consumed = True
        return header

    def read(self) -> NpyArray:
        """
        Reads the payload into a new container.

        Raises:
            ShortReadError: If the file holds fewer bytes than the header declares.
        """
        arr = NpyArray.from_header(self._take_payload())
        if arr.num_bytes:
            self._raw.readinto_exact(arr.buffer)
        return arr

    def readinto(self, buffer: Any) -> None:
        """
        Reads the payload directly into a writable, contiguous buffer whose
        size is exactly the payload size.
        """
        header = self._take_payload()
        nbytes = memoryview(buffer).nbytes
        if nbytes != header.num_bytes:
            raise ValueError(
                f"Buffer holds {nbytes} bytes but the payload is {header.num_bytes} bytes."
            )
        if nbytes:
            self._raw.readinto_exact(buffer)

    @property
    def path(self) -> str:
        return self._raw.path

    def close(self) -> None:
        self._raw.close()

    @property
    def closed(self) -> bool:
        return self._raw.closed


class Writer(NpyFileBase):
    """
    A file handle for writing an NPY file.
    Created via `npy_arrays.open(..., mode='w')`.
    """
    def __init__(self, raw: RawFile):
        self._raw = raw
        self._written = False

    def write(
        self,
        header: HeaderDescriptor,
        payload: Any,
        *,
        version: tuple[int, int] = DEFAULT_VERSION,
    ) -> int:
        """
        Writes the header followed by the payload.

        Args:
            header: The header describing `payload`.
            payload: A contiguous buffer of exactly `header.num_bytes` bytes,
                linearized in the order the header declares.
            version: The format version of the header.

        Returns:
            The total number of bytes written.
        """
        if self._written:
            raise ValueError("An NPY file holds a single array; it was already written.")

        encoded = encode_header(header, version)
        payload_view = memoryview(payload)
        if payload_view.nbytes != header.num_bytes:
            raise ValueError(
                f"Payload holds {payload_view.nbytes} bytes but the header "
                f"declares {header.num_bytes} bytes."
            )

        self._written = True
        self._raw.write_all(encoded)
        if payload_view.nbytes:
            self._raw.write_all(payload_view)
        return len(encoded) + payload_view.nbytes

    def flush(self) -> None:
        """Flushes any buffered data to the underlying storage."""
        self._raw.flush()

    @property
    def path(self) -> str:
        return self._raw.path

    def close(self) -> None:
        try:
            if not self._raw.closed:
                self.flush()
        finally:
            self._raw.close()

    @property
    def closed(self) -> bool:
        return self._raw.closed


# =============================================================================
# Whole-file operations
# =============================================================================

def load(path: PathLike) -> NpyArray:
    """
    Loads an NPY file into a new container.

    Raises:
        OpenFailedError: If the file cannot be opened.
        ShortReadError: If the payload is shorter than the header declares.
        NpyHeaderError: Any header decoding error.
    """
    with open(path, 'r') as f:
        arr = f.read()
    logger.debug(f"Loaded {path}: shape={arr.shape}, kind={arr.element_kind.name}")
    return arr

def load_raw(path: PathLike) -> RawPayload:
    """
    Loads only the payload bytes of an NPY file, together with the element width.
    """
    with open(path, 'r') as f:
        header = f.header
        data = bytearray(header.num_bytes)
        f.readinto(data)
    return RawPayload(data=bytes(data), num_bytes=header.num_bytes, word_size=header.word_size)

def save(path: PathLike, arr: NpyArray, *, version: tuple[int, int] = DEFAULT_VERSION) -> None:
    """Writes a container to `path`, header first."""
    with open(path, 'w') as f:
        f.write(arr.header, arr.buffer, version=version)
    logger.debug(f"Saved {path}: shape={arr.shape}, kind={arr.element_kind.name}")

def save_array_1d(
    path: PathLike,
    kind: KindLike,
    data: Any,
    length: Optional[int] = None,
) -> None:
    """
    Saves a one-dimensional array.

    Args:
        path: The file to create.
        kind: The element kind (an `ElementKind`, ``'<f4'``, ``np.float32``, ...).
        data: A NumPy array of the matching dtype, a buffer, or a sequence.
        length: Number of leading elements to write; defaults to all of them.

    Raises:
        UnsupportedDtypeError: If `kind` is outside the registry.
        ElementKindMismatchError: If `data` is an array of another dtype.
        OpenFailedError: If the file cannot be created.
    """
    element_kind = numpy_utils.resolve_kind(kind)
    flat = numpy_utils.coerce_payload(data, element_kind).reshape(-1)
    if length is None:
        length = flat.size
    elif length > flat.size:
        raise ValueError(f"length={length} exceeds the {flat.size} elements provided.")

    header = HeaderDescriptor(element_kind, (length,), False)
    with open(path, 'w') as f:
        f.write(header, np.ascontiguousarray(flat[:length]))
    logger.debug(f"Saved {path}: shape={header.shape}, kind={element_kind.name}")

def save_matrix(
    path: PathLike,
    kind: KindLike,
    rows: int,
    cols: int,
    fortran_order: bool,
    data: Any,
) -> None:
    """
    Saves a two-dimensional array.

    `data` is either a flat buffer of ``rows * cols`` elements already
    linearized in the requested order, or a 2-D array of shape
    ``(rows, cols)``, which is linearized here.

    Raises:
        UnsupportedDtypeError: If `kind` is outside the registry.
        ElementKindMismatchError: If `data` is an array of another dtype.
        ShapeMismatchError: If a 2-D `data` is not ``(rows, cols)``.
        OpenFailedError: If the file cannot be created.
    """
    element_kind = numpy_utils.resolve_kind(kind)
    header = HeaderDescriptor(element_kind, (rows, cols), fortran_order)
    arr = numpy_utils.coerce_payload(data, element_kind)

    if arr.ndim == 2:
        if arr.shape != (rows, cols):
            raise ShapeMismatchError((rows, cols), arr.shape)
        flat = arr.ravel(order=header.order)
    elif arr.ndim == 1:
        flat = arr
    else:
        raise RankMismatchError(2, arr.ndim)

    if flat.size != header.num_vals:
        raise ValueError(f"Expected {header.num_vals} elements for a {rows}x{cols} matrix, got {flat.size}.")

    with open(path, 'w') as f:
        f.write(header, np.ascontiguousarray(flat))
    logger.debug(f"Saved matrix to {path}: shape={header.shape}, order={header.order}")
