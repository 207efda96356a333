# npy_arrays/exceptions.py
"""Custom exception types for the npy_arrays library."""

from typing import Any, Optional


class NpyError(Exception):
    """Base exception for all errors raised by this library."""
    pass


# --- File boundary ---

class NpyIOError(NpyError):
    """Error raised while opening, reading or writing an NPY file."""
    pass

class OpenFailedError(NpyIOError):
    """
    The file could not be opened.

    Attributes:
        path (str): The path that failed to open.
    """
    def __init__(self, path: Any, reason: Optional[str] = None):
        self.path = str(path)
        self.reason = reason
        message = f"Unable to open file {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

class _CountMismatch(NpyIOError):
    """Common shape of the short read/write errors."""
    verb = "transfer"

    def __init__(self, expected: int, actual: int, path: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.path = path
        super().__init__(expected, actual, path)

    def __str__(self) -> str:
        where = f" ({self.path})" if self.path else ""
        return f"Failed to {self.verb} payload{where}: expected {self.expected} bytes, got {self.actual}"

class ShortReadError(_CountMismatch):
    """Fewer payload bytes were available than the header declares."""
    verb = "read"

class ShortWriteError(_CountMismatch):
    """The file accepted fewer bytes than were written."""
    verb = "write"


# --- Header codec ---

class NpyHeaderError(NpyError):
    """Error raised while decoding or encoding an NPY header."""
    pass

class MagicMismatchError(NpyHeaderError):
    """The file does not start with the NPY magic string."""
    def __init__(self, found: bytes):
        self.found = found
        super().__init__(f"Not an NPY file: magic prefix is {found!r}")

class UnsupportedVersionError(NpyHeaderError):
    """The format version is not 1.x or 2.x."""
    def __init__(self, version: tuple[int, int], reason: Optional[str] = None):
        self.version = version
        message = f"Unsupported NPY format version {version[0]}.{version[1]}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

class MalformedHeaderError(NpyHeaderError):
    """The header dictionary is truncated or missing a required key."""
    pass

class UnsupportedEndiannessError(NpyHeaderError):
    """The descriptor declares big-endian data."""
    def __init__(self, descr: str):
        self.descr = descr
        super().__init__(f"Only little endian data is supported, got descr '{descr}'")

class UnsupportedDtypeError(NpyHeaderError, TypeError):
    """The type letter / width pair has no element kind."""
    def __init__(self, dtype: Any):
        self.dtype = dtype
        super().__init__(f"Unsupported dtype: '{dtype}'")


# --- Layout checks ---

class NpyLayoutError(NpyError):
    """The array in the file does not fit the requested target."""
    pass

class RankMismatchError(NpyLayoutError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected a {expected}D array but found {actual}D")

class ShapeMismatchError(NpyLayoutError):
    def __init__(self, expected: tuple[int, ...], actual: tuple[int, ...], path: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f"Shape mismatch{where}: expected {expected}, found {actual}")

class ElementKindMismatchError(NpyLayoutError, TypeError):
    def __init__(self, expected: Any, actual: Any):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Element kind mismatch: expected {expected}, found {actual}")

class OrderMismatchError(NpyLayoutError):
    def __init__(self, expected_fortran: bool, actual_fortran: bool):
        self.expected_fortran = expected_fortran
        self.actual_fortran = actual_fortran
        super().__init__(
            "Matrix order mismatch: expected "
            f"{'Fortran' if expected_fortran else 'C'} order, file is "
            f"{'Fortran' if actual_fortran else 'C'} order"
        )
