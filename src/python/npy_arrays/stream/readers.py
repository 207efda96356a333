# npy_arrays/stream/readers.py
"""
Readers for numbered sequences of NPY files, e.g. ``a0.npy, a1.npy, ...``.
"""
import logging
import os
from functools import cached_property
from typing import Any, Iterator, List, Optional, Union, overload
import numpy as np

from ..dataclasses import HeaderDescriptor
from ..exceptions import (
    ElementKindMismatchError,
    OpenFailedError,
    OrderMismatchError,
    RankMismatchError,
    ShapeMismatchError,
)
from ..file import PathLike, open as npy_open
from ..lowlevel import RawFile
from ..types import ArrayOrder
from .._internal import numpy_utils

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".npy"


class NumberedFileSequence:
    """
    The files ``folder/{prefix}{i}{suffix}`` for ``i = start, start + 1, ...``.

    Discovery stops at the first index whose file cannot be opened, so a hole
    in the numbering ends the sequence.

    Usage:
        seq = NumberedFileSequence("frames", "a", start=0)
        for path in seq:
            ...
        seq.first_header.shape
    """
    def __init__(
        self,
        folder: PathLike,
        prefix: str,
        start: int = 0,
        suffix: str = DEFAULT_SUFFIX,
    ):
        """
        Initializes the sequence and discovers its files.

        Raises:
            OpenFailedError: If the first file (index `start`) cannot be opened.
            NpyHeaderError: If the first file's header cannot be decoded.
        """
        self.folder = os.fspath(folder)
        self.prefix = prefix
        self.start = start
        self.suffix = suffix

        # The first header is needed before probing for the rest.
        _ = self.first_header
        self._paths = self._discover()

    def path_for(self, index: int) -> str:
        """The path of the file numbered `index` (not a position in the sequence)."""
        return os.path.join(self.folder, f"{self.prefix}{index}{self.suffix}")

    @cached_property
    def first_header(self) -> HeaderDescriptor:
        with npy_open(self.path_for(self.start), 'r') as f:
            return f.header

    def _discover(self) -> List[str]:
        paths: List[str] = []
        index = self.start
        while True:
            path = self.path_for(index)
            try:
                RawFile(path, 'rb').close()
            except OpenFailedError:
                break
            paths.append(path)
            index += 1

        logger.debug(
            f"Discovered {len(paths)} files {self.prefix}{{i}}{self.suffix} "
            f"in {self.folder} from i={self.start}"
        )
        return paths

    def headers(self) -> Iterator[HeaderDescriptor]:
        """Parses and yields the header of every file in the sequence."""
        for path in self._paths:
            with npy_open(path, 'r') as f:
                yield f.header

    def __len__(self) -> int:
        return len(self._paths)

    @overload
    def __getitem__(self, key: int) -> str: ...

    @overload
    def __getitem__(self, key: slice) -> List[str]: ...

    def __getitem__(self, key: Union[int, slice]) -> Union[str, List[str]]:
        """Returns the path at a position in the sequence, or a list for a slice."""
        if isinstance(key, (int, slice)):
            return self._paths[key]
        raise TypeError(f"Index must be an integer or slice, not {type(key).__name__}")

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._paths))


def _check_homogeneous(header: HeaderDescriptor, first: HeaderDescriptor, path: str) -> None:
    if header.ndim != first.ndim:
        raise RankMismatchError(first.ndim, header.ndim)
    if header.shape != first.shape:
        raise ShapeMismatchError(first.shape, header.shape, path)
    if header.element_kind != first.element_kind:
        raise ElementKindMismatchError(first.element_kind.name, header.element_kind.name)
    if header.fortran_order != first.fortran_order:
        raise OrderMismatchError(first.fortran_order, header.fortran_order)


def stack_folder(
    folder: PathLike,
    prefix: str,
    start: int = 0,
    suffix: str = DEFAULT_SUFFIX,
    dtype: Optional[Any] = None,
    order: ArrayOrder = 'C',
) -> np.ndarray:
    """
    Stacks a numbered sequence of same-shaped 2-D NPY files vertically.

    The k-th file of the sequence (named ``{prefix}{start + k}{suffix}``)
    fills output rows ``[k * rows, (k + 1) * rows)``, so the result has
    ``len(sequence) * rows`` rows and ``cols`` columns.

    Args:
        folder: Directory holding the files.
        prefix: File name part before the number.
        start: Number of the first file.
        suffix: File name part after the number.
        dtype: Element type of the result; defaults to the files' element
            kind. Only its width is checked against the files.
        order: Memory layout of the result. Every file must be stored in
            this order.

    Raises:
        OpenFailedError: If the first file does not exist.
        OrderMismatchError: If the files are not stored in `order`.
        RankMismatchError: If the files are not 2-D.
        ShapeMismatchError, ElementKindMismatchError: If a later file differs
            from the first one.
        ShortReadError: If a payload is truncated.
    """
    order = numpy_utils.validate_order(order) or 'C'
    seq = NumberedFileSequence(folder, prefix, start, suffix)
    first = seq.first_header

    if first.fortran_order != (order == 'F'):
        raise OrderMismatchError(order == 'F', first.fortran_order)
    if first.ndim != 2:
        raise RankMismatchError(2, first.ndim)

    target = numpy_utils.numpy_dtype(first.element_kind) if dtype is None else np.dtype(dtype)
    if target.itemsize != first.word_size:
        raise ElementKindMismatchError(
            f"{target.itemsize}-byte {target.name}",
            f"{first.word_size}-byte {first.element_kind.name}",
        )

    rows, cols = first.shape
    out = np.empty((len(seq) * rows, cols), dtype=target, order=order)

    for k, path in enumerate(seq):
        with npy_open(path, 'r') as f:
            _check_homogeneous(f.header, first, path)
            block = out[k * rows:(k + 1) * rows]
            if order == 'C':
                # A band of whole rows is contiguous in a C-ordered matrix.
                f.readinto(block)
            else:
                block[...] = f.read().data(target).reshape((rows, cols), order='F')

    logger.debug(f"Stacked {len(seq)} files into a {out.shape} matrix ({order} order)")
    return out
