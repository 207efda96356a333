# tests/test_convenience.py
"""
Tests for the high-level functions in npy_arrays.convenience.
"""
import pytest
import numpy as np
from pathlib import Path

from npy_arrays import UnsupportedDtypeError, load_array, save_array


def test_save_and_load_roundtrip(tmp_path: Path):
    """
    Tests a basic save/load cycle with a 3-D array.
    `tmp_path` is a pytest fixture that provides a temporary directory.
    """
    filepath = tmp_path / "test.npy"
    original_data = np.arange(24, dtype=np.int64).reshape(2, 3, 4)

    save_array(filepath, original_data)

    assert filepath.exists()
    loaded_data = load_array(filepath)
    assert loaded_data.dtype == original_data.dtype
    assert loaded_data.shape == original_data.shape
    np.testing.assert_array_equal(loaded_data, original_data)

    # NumPy reads the same file.
    np.testing.assert_array_equal(np.load(filepath), original_data)

def test_fortran_arrays_keep_their_order(tmp_path: Path):
    filepath = tmp_path / "fortran.npy"
    original_data = np.asfortranarray(np.random.rand(10, 5).astype(np.float32))

    save_array(filepath, original_data)
    loaded_data = load_array(filepath)

    assert loaded_data.flags.f_contiguous
    np.testing.assert_array_equal(loaded_data, original_data)

def test_load_array_reads_numpy_files(tmp_path: Path):
    filepath = tmp_path / "np.npy"
    original_data = np.array([[-1, 2], [3, -4]], dtype=np.int8)
    np.save(filepath, original_data)
    np.testing.assert_array_equal(load_array(filepath), original_data)

def test_version_1_output(tmp_path: Path):
    filepath = tmp_path / "v1.npy"
    save_array(filepath, np.ones(3, dtype=np.uint32), version=(1, 0))
    assert filepath.read_bytes()[6:8] == b"\x01\x00"
    np.testing.assert_array_equal(np.load(filepath), [1, 1, 1])

@pytest.mark.parametrize("dtype", [">f4", np.complex128, np.bool_, "U3"])
def test_unsupported_arrays_are_rejected(tmp_path: Path, dtype):
    with pytest.raises(UnsupportedDtypeError):
        save_array(tmp_path / "bad.npy", np.zeros(2, dtype=dtype))
