# npy_arrays/matrix.py
"""
Adapters between 2-D NPY files and NumPy matrices.

A matrix on disk is stored either row-major (``fortran_order=False``) or
column-major (``fortran_order=True``). Loading into the other layout performs
a transposing copy: for a column-major source of ``rows`` rows, logical
element ``(i, j)`` is read from raw offset ``j * rows + i``; for a row-major
source of ``cols`` columns, from ``i * cols + j``.
"""

import logging
from typing import Any, Optional
import numpy as np

from .exceptions import ElementKindMismatchError, RankMismatchError
from .file import PathLike, open as npy_open, save_matrix
from .types import ArrayOrder
from ._internal import numpy_utils

logger = logging.getLogger(__name__)


def load_matrix_2d(path: PathLike, dtype: Any, order: ArrayOrder = 'C') -> np.ndarray:
    """
    Loads a 2-D NPY file as a matrix with elements of type `dtype`.

    Args:
        path: The .npy file.
        dtype: The element type of the returned matrix. Only its width is
            checked against the file; the bytes are reinterpreted as `dtype`.
        order: Memory layout of the returned matrix, 'C' (default) or 'F'.

    Returns:
        A matrix contiguous in `order`. When the file already has that layout
        the result is a view of the loaded payload, otherwise a copy.

    Raises:
        RankMismatchError: If the file is not 2-D.
        ElementKindMismatchError: If the file's word size is not `dtype`'s size.
    """
    order = numpy_utils.validate_order(order) or 'C'
    target = np.dtype(dtype)

    with npy_open(path, 'r') as f:
        header = f.header
        if header.ndim != 2:
            raise RankMismatchError(2, header.ndim)
        if header.word_size != target.itemsize:
            raise ElementKindMismatchError(
                f"{target.itemsize}-byte {target.name}",
                f"{header.word_size}-byte {header.element_kind.name}",
            )
        arr = f.read()

    matrix = arr.data(target).reshape(header.shape, order=header.order)
    if header.order == order:
        return matrix

    logger.debug(f"Converting {path} from {header.order} to {order} order")
    return np.array(matrix, order=order)

def save_matrix_2d(path: PathLike, matrix: np.ndarray, order: Optional[ArrayOrder] = None) -> None:
    """
    Saves a 2-D NumPy array, taking the element kind from its dtype.

    Args:
        path: The file to create.
        matrix: The 2-D array.
        order: Storage order, 'C' or 'F'. By default Fortran order is used
            only when `matrix` is Fortran- but not C-contiguous.
    """
    matrix = np.asarray(matrix)
    if matrix.ndim != 2:
        raise RankMismatchError(2, matrix.ndim)

    order = numpy_utils.validate_order(order)
    fortran_order = numpy_utils.isfortran(matrix) if order is None else order == 'F'
    kind = numpy_utils.kind_from_dtype(matrix.dtype)
    rows, cols = matrix.shape
    save_matrix(path, kind, rows, cols, fortran_order, matrix.astype(numpy_utils.numpy_dtype(kind), copy=False))
