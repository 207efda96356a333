# tests/conftest.py
"""
Pytest configuration and shared fixtures for the test suite.
"""
import pytest
from pathlib import Path
import numpy as np

from npy_arrays import ElementKind, save_matrix

# The 2x3 matrix [[1, 2, 3], [4, 5, 6]] used by the layout scenarios.
MATRIX_2X3 = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.int32)


@pytest.fixture(scope="session")
def row_major_file(tmp_path_factory) -> Path:
    """An int32 2x3 matrix saved in C order."""
    filepath = tmp_path_factory.getbasetemp() / "matrix_c.npy"
    save_matrix(filepath, ElementKind.INT32, 2, 3, False, MATRIX_2X3)
    return filepath

@pytest.fixture(scope="session")
def column_major_file(tmp_path_factory) -> Path:
    """The same int32 2x3 matrix saved in Fortran order."""
    filepath = tmp_path_factory.getbasetemp() / "matrix_f.npy"
    save_matrix(filepath, ElementKind.INT32, 2, 3, True, MATRIX_2X3)
    return filepath

@pytest.fixture
def numbered_folder(tmp_path: Path) -> Path:
    """
    Five 3x2 float64 matrices saved as a0.npy ... a4.npy. Row r of file k
    holds [10 * k + r, -(10 * k + r)].
    """
    for k in range(5):
        base = 10 * k + np.arange(3, dtype=np.float64)
        np.save(tmp_path / f"a{k}.npy", np.stack([base, -base], axis=1))
    return tmp_path
