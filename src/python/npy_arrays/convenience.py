# npy_arrays/convenience.py
"""
High-level convenience functions for NumPy arrays of any supported rank.
"""
from typing import Optional
import numpy as np

from .container import NpyArray
from .file import PathLike, load, save
from .header import DEFAULT_VERSION
from .types import ArrayOrder

def save_array(
    filepath: PathLike,
    data: np.ndarray,
    *,
    order: Optional[ArrayOrder] = None,
    version: tuple[int, int] = DEFAULT_VERSION,
) -> None:
    """
    Saves a NumPy array to a new .npy file.

    This is a high-level wrapper for the most common write operation.

    Args:
        filepath: The path to the file to be created.
        data: The array to save. Its dtype must be one of the supported
              little-endian integer or float types.
        order: (Optional) 'C' or 'F'. If None, Fortran order is used only for
               arrays that are Fortran- but not C-contiguous.
        version: (Optional) The header format version, (2, 0) or (1, 0).
    """
    save(filepath, NpyArray.from_numpy(np.asarray(data), order=order), version=version)


def load_array(filepath: PathLike) -> np.ndarray:
    """
    Loads a .npy file as a NumPy array with its stored shape and memory order.

    This is a high-level wrapper for the most common read operation.
    """
    return load(filepath).to_numpy()
