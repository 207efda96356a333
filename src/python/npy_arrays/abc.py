# npy_arrays/abc.py
"""Abstract Base Classes for the npy_arrays library."""

import abc

class NpyFileBase(abc.ABC):
    """
    Abstract base class for NPY file handles.

    Handles own exactly one open file and release it on `close()`, which the
    context-manager protocol calls on every exit path.
    """

    @property
    @abc.abstractmethod
    def path(self) -> str:
        """The filesystem path of the underlying file."""
        raise NotImplementedError

    @abc.abstractmethod
    def close(self) -> None:
        """Releases the file. Subsequent reads or writes raise `ValueError`."""
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def closed(self) -> bool:
        raise NotImplementedError

    def __enter__(self) -> "NpyFileBase":
        if self.closed:
            raise ValueError("Cannot enter context with a closed file handle.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<{type(self).__name__} {self.path!r} ({state})>"
