# npy_arrays/lowlevel.py
"""
A low-level wrapper around the operating system file handle.

This module isolates the OS boundary from the rest of the library: it is the
only place that opens files, and it translates `OSError` and short transfers
into the library's exception types.
"""

import builtins
import os
from typing import IO, Any

from .exceptions import NpyIOError, OpenFailedError, ShortReadError, ShortWriteError


class RawFile:
    """
    A thin, direct wrapper over a binary file object.
    It enforces exact-size transfers and handles exception translation.
    """
    def __init__(self, path: "os.PathLike[str] | str", mode: str):
        if mode not in ('rb', 'wb'):
            raise ValueError(f"Unsupported raw mode: '{mode}'. Must be 'rb' or 'wb'.")
        self.path = os.fspath(path)
        try:
            self._handle: IO[bytes] = builtins.open(self.path, mode)
        except OSError as e:
            raise OpenFailedError(self.path, e.strerror) from e
        self._closed = False

    @property
    def stream(self) -> IO[bytes]:
        """The underlying file object, for the header codec."""
        if self._closed:
            raise ValueError("Operation attempted on a closed NPY file.")
        return self._handle

    def readinto_exact(self, buffer: Any) -> None:
        """Fills a writable, contiguous buffer completely from the file."""
        view = memoryview(buffer).cast('B')
        expected = view.nbytes
        total = 0
        while total < expected:
            count = self.stream.readinto(view[total:])
            if not count:
                break
            total += count
        if total != expected:
            raise ShortReadError(expected, total, self.path)

    def write_all(self, data: Any) -> None:
        view = memoryview(data).cast('B')
        try:
            written = self.stream.write(view)
        except OSError as e:
            raise NpyIOError(f"Failed to write {self.path}: {e}") from e
        if written is not None and written != view.nbytes:
            raise ShortWriteError(view.nbytes, written, self.path)

    def flush(self) -> None:
        try:
            self.stream.flush()
        except OSError as e:
            raise NpyIOError(f"Failed to flush {self.path}: {e}") from e

    def close(self) -> None:
        if not self._closed:
            try:
                self._handle.close()
            except OSError as e:
                raise NpyIOError(f"Failed to close {self.path}: {e}") from e
            finally:
                self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed
