# npy_arrays/stream/writers.py
"""
Writers producing numbered sequences of NPY files that `stack_folder` reads back.
"""
import os
from typing import Iterable, List, Optional
import numpy as np

from ..file import PathLike
from ..matrix import save_matrix_2d
from ..types import ArrayOrder
from .._internal import numpy_utils
from .readers import DEFAULT_SUFFIX


class NumberedFileWriter:
    """
    Writes each appended 2-D array to the next file of a numbered sequence.

    All appended arrays must share the dtype and shape of the first one, which
    is what `stack_folder` expects when reading the sequence back.
    """
    def __init__(
            self,
            folder: PathLike,
            prefix: str,
            *,
            start: int = 0,
            suffix: str = DEFAULT_SUFFIX,
            order: Optional[ArrayOrder] = None,
    ):
        """
        Initializes the writer.

        Args:
            folder: Existing directory to write into.
            prefix: File name part before the number.
            start: Number of the first file.
            suffix: File name part after the number.
            order: (Optional) Storage order for every file. If not provided,
                   it is inferred from the first appended array and reused.
        """
        self.folder = os.fspath(folder)
        self.prefix = prefix
        self.suffix = suffix
        self.order = numpy_utils.validate_order(order)
        self.paths: List[str] = []

        self._next_index = start
        self._dtype: Optional[np.dtype] = None
        self._shape: Optional[tuple[int, ...]] = None

    def append(self, matrix: np.ndarray) -> str:
        """Writes `matrix` to the next file and returns its path."""
        matrix = np.asarray(matrix)
        if self._dtype is None:
            self._dtype = matrix.dtype
            self._shape = matrix.shape
            if self.order is None:
                self.order = 'F' if numpy_utils.isfortran(matrix) else 'C'
        elif matrix.dtype != self._dtype or matrix.shape != self._shape:
            raise ValueError(
                "Appended arrays must share the first array's dtype and shape. "
                f"Expected {self._dtype} {self._shape}, got {matrix.dtype} {matrix.shape}."
            )

        path = os.path.join(self.folder, f"{self.prefix}{self._next_index}{self.suffix}")
        save_matrix_2d(path, matrix, order=self.order)
        self.paths.append(path)
        self._next_index += 1
        return path


def save_sequence(
    folder: PathLike,
    prefix: str,
    arrays: Iterable[np.ndarray],
    *,
    start: int = 0,
    suffix: str = DEFAULT_SUFFIX,
    order: Optional[ArrayOrder] = None,
) -> List[str]:
    """Writes `arrays` as ``{prefix}{start}{suffix}, {prefix}{start + 1}{suffix}, ...``."""
    writer = NumberedFileWriter(folder, prefix, start=start, suffix=suffix, order=order)
    for arr in arrays:
        writer.append(arr)
    return writer.paths
