# npy_arrays/types.py

"""
Core type-safe enumerations and aliases for the npy_arrays library.
"""
from enum import IntEnum
from typing import TYPE_CHECKING, Literal, TypeAlias

from .exceptions import UnsupportedDtypeError

if TYPE_CHECKING:
    from .container import NpyArray

Shape: TypeAlias = tuple[int, ...]
ArrayOrder = Literal['C', 'F']

# Declared for archive readers; no .npz support is provided here.
NpzMapping: TypeAlias = "dict[str, NpyArray]"


class ElementKind(IntEnum):
    """
    Enumeration of the element kinds that can be stored in an NPY payload.

    Each member carries its byte width and its canonical little-endian NPY
    dtype descriptor (e.g. ``<f4``). One-byte kinds use the ``|`` marker as
    NumPy does.
    """
    INT8 = 0
    INT16 = 1
    INT32 = 2
    INT64 = 3
    UINT8 = 4
    UINT16 = 5
    UINT32 = 6
    UINT64 = 7
    FLOAT32 = 8
    FLOAT64 = 9

    @property
    def type_char(self) -> str:
        return _KIND_TRAITS[self][0]

    @property
    def word_size(self) -> int:
        return _KIND_TRAITS[self][1]

    @property
    def descr(self) -> str:
        marker = '|' if self.word_size == 1 else '<'
        return f"{marker}{self.type_char}{self.word_size}"

    @classmethod
    def from_type(cls, type_char: str, word_size: int) -> "ElementKind":
        """
        Looks up the kind for a type letter and byte width, e.g. ``('f', 4)``.

        Raises:
            UnsupportedDtypeError: If the pair is not in the registry.
        """
        try:
            return _TRAITS_TO_KIND[(type_char, word_size)]
        except KeyError:
            raise UnsupportedDtypeError(f"{type_char}{word_size}") from None

    @classmethod
    def from_descr(cls, descr: str) -> "ElementKind":
        """
        Looks up the kind for a little-endian or width-agnostic descriptor
        such as ``'<i4'`` or ``'|u1'``.
        """
        if len(descr) < 3 or descr[0] not in '<|' or not descr[2:].isdigit():
            raise UnsupportedDtypeError(descr)
        return cls.from_type(descr[1], int(descr[2:]))


_KIND_TRAITS: dict[ElementKind, tuple[str, int]] = {
    ElementKind.INT8: ('i', 1),
    ElementKind.INT16: ('i', 2),
    ElementKind.INT32: ('i', 4),
    ElementKind.INT64: ('i', 8),
    ElementKind.UINT8: ('u', 1),
    ElementKind.UINT16: ('u', 2),
    ElementKind.UINT32: ('u', 4),
    ElementKind.UINT64: ('u', 8),
    ElementKind.FLOAT32: ('f', 4),
    ElementKind.FLOAT64: ('f', 8),
}

_TRAITS_TO_KIND: dict[tuple[str, int], ElementKind] = {
    v: k for k, v in _KIND_TRAITS.items()
}
