# npy_arrays/dataclasses.py
"""
Dataclasses for structured data within the npy_arrays library.
"""
import math
from dataclasses import dataclass

from .exceptions import UnsupportedDtypeError
from .types import ArrayOrder, ElementKind, Shape


@dataclass(frozen=True, slots=True)
class HeaderDescriptor:
    """
    The decoded content of an NPY header.

    `fortran_order=True` means the payload is linearized column-major
    (leftmost index varies fastest); `False` means row-major.
    """
    element_kind: ElementKind
    shape: Shape
    fortran_order: bool = False

    def __post_init__(self) -> None:
        # Normalize lists and numpy integers so equality is field-wise on tuples of int.
        object.__setattr__(self, "shape", tuple(int(d) for d in self.shape))
        if not isinstance(self.element_kind, ElementKind):
            object.__setattr__(self, "element_kind", _coerce_kind(self.element_kind))
        object.__setattr__(self, "fortran_order", bool(self.fortran_order))
        if not self.shape:
            raise ValueError("Rank-0 arrays are not supported; shape must have at least one dimension.")
        if any(d < 0 for d in self.shape):
            raise ValueError(f"Shape dimensions must be non-negative, got {self.shape}")

    @property
    def word_size(self) -> int:
        return self.element_kind.word_size

    @property
    def ndim(self) -> int:
        return len(self.shape)

    @property
    def num_vals(self) -> int:
        return math.prod(self.shape)

    @property
    def num_bytes(self) -> int:
        return self.num_vals * self.word_size

    @property
    def order(self) -> ArrayOrder:
        return 'F' if self.fortran_order else 'C'


def _coerce_kind(value: object) -> ElementKind:
    try:
        return ElementKind(value)
    except (ValueError, TypeError):
        raise UnsupportedDtypeError(value) from None


@dataclass(frozen=True, slots=True)
class RawPayload:
    """Untyped payload bytes of an NPY file together with their element width."""
    data: bytes
    num_bytes: int
    word_size: int
