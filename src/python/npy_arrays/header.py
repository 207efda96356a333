# npy_arrays/header.py
"""
Encoder and decoder for the NPY header.

An NPY file starts with the magic string ``\\x93NUMPY``, one byte each for the
major and minor format version, a little-endian header length (2 bytes for
version 1.x, 4 bytes for 2.x) and an ASCII dictionary literal such as::

    {'descr': '<f4', 'fortran_order': False, 'shape': (3,), }

padded with spaces and terminated by a newline. The payload follows
immediately.

The dictionary grammar written by NumPy is a small fixed subset of Python
literal syntax, so the decoder locates the three known keys by substring
search instead of evaluating the literal.
"""

import struct
from typing import IO, Union

from .dataclasses import HeaderDescriptor
from .exceptions import (
    MagicMismatchError,
    MalformedHeaderError,
    UnsupportedDtypeError,
    UnsupportedEndiannessError,
    UnsupportedVersionError,
)
from .types import ElementKind, Shape

MAGIC_PREFIX = b"\x93NUMPY"
MAGIC_LEN = len(MAGIC_PREFIX) + 2
HEADER_ALIGN = 16
DEFAULT_VERSION = (2, 0)
# Largest header dictionary accepted on read, as in numpy.lib.format.
MAX_HEADER_SIZE = 10000

# Struct format of the header length field, keyed by major version.
_LENGTH_FORMATS: dict[int, str] = {1: "<H", 2: "<I"}
_WRITABLE_VERSIONS = ((1, 0), (2, 0))


# --- Decoding ---

def read_magic(fp: IO[bytes]) -> tuple[int, int]:
    """
    Reads the magic string and the version bytes.

    Returns:
        The ``(major, minor)`` format version.

    Raises:
        MagicMismatchError: If the stream does not start with the magic string.
        MalformedHeaderError: If the stream ends before the version bytes.
    """
    magic = fp.read(len(MAGIC_PREFIX))
    if magic != MAGIC_PREFIX:
        raise MagicMismatchError(magic)
    version = fp.read(2)
    if len(version) != 2:
        raise MalformedHeaderError("Truncated header: missing format version bytes")
    return version[0], version[1]

def read_header(fp: IO[bytes], max_header_size: int = MAX_HEADER_SIZE) -> HeaderDescriptor:
    """
    Reads an NPY header from a binary stream.

    The stream is consumed up to and including the newline that terminates
    the header dictionary, leaving it positioned at the first payload byte.
    No payload bytes are read. A declared header length above
    `max_header_size` is rejected before anything is read past the length
    field.

    Raises:
        MagicMismatchError, UnsupportedVersionError, MalformedHeaderError,
        UnsupportedEndiannessError, UnsupportedDtypeError
    """
    major, minor = read_magic(fp)
    try:
        length_fmt = _LENGTH_FORMATS[major]
    except KeyError:
        raise UnsupportedVersionError((major, minor)) from None

    length_size = struct.calcsize(length_fmt)
    raw_length = fp.read(length_size)
    if len(raw_length) != length_size:
        raise MalformedHeaderError("Truncated header: incomplete header length field")
    (header_len,) = struct.unpack(length_fmt, raw_length)
    if header_len > max_header_size:
        raise MalformedHeaderError(
            f"Header length {header_len} exceeds the limit of {max_header_size} bytes"
        )

    raw = fp.read(header_len)
    if len(raw) != header_len:
        raise MalformedHeaderError(
            f"Truncated header: expected {header_len} bytes, got {len(raw)}"
        )
    return parse_header(raw)

def parse_header(header: Union[str, bytes]) -> HeaderDescriptor:
    """
    Decodes the header dictionary (the bytes after the length field).

    Raises:
        MalformedHeaderError: If the text is not newline-terminated, a key is
            missing, or a value cannot be parsed.
        UnsupportedEndiannessError: If `descr` declares big-endian data.
        UnsupportedDtypeError: If `descr` names a type outside the registry.
    """
    if isinstance(header, (bytes, bytearray)):
        try:
            header = bytes(header).decode("ascii")
        except UnicodeDecodeError as e:
            raise MalformedHeaderError(f"Header is not ASCII: {e}") from e

    if not header.endswith("\n"):
        raise MalformedHeaderError("Failed to read header: missing terminating newline")
    if not header.lstrip().startswith("{"):
        raise MalformedHeaderError("Failed to read header: expected a dictionary literal")

    return HeaderDescriptor(
        element_kind=_parse_descr(_value_after(header, "descr")),
        shape=_parse_shape(_value_after(header, "shape")),
        fortran_order=_parse_bool(_value_after(header, "fortran_order")),
    )

def _value_after(header: str, key: str) -> str:
    """Returns the header text following ``'key':``."""
    for quote in ("'", '"'):
        loc = header.find(f"{quote}{key}{quote}")
        if loc != -1:
            break
    else:
        raise MalformedHeaderError(f"Failed to find header keyword: '{key}'")

    rest = header[loc + len(key) + 2:].lstrip()
    if not rest.startswith(":"):
        raise MalformedHeaderError(f"Missing ':' after header keyword '{key}'")
    return rest[1:].lstrip()

def _parse_descr(text: str) -> ElementKind:
    if text.startswith("["):
        raise UnsupportedDtypeError("structured dtype")
    quote = text[:1]
    end = text.find(quote, 1) if quote in ("'", '"') else -1
    if end == -1:
        raise MalformedHeaderError("Failed to parse header value for 'descr'")

    descr = text[1:end]
    marker = descr[:1]
    if marker == ">":
        raise UnsupportedEndiannessError(descr)
    if marker not in ("<", "|"):
        raise MalformedHeaderError(f"Unrecognized byte order marker in descr '{descr}'")

    type_char, width = descr[1:2], descr[2:]
    if not type_char.isalpha() or not width.isdigit():
        raise UnsupportedDtypeError(descr)
    return ElementKind.from_type(type_char, int(width))

def _parse_bool(text: str) -> bool:
    if text.startswith("True"):
        return True
    if text.startswith("False"):
        return False
    raise MalformedHeaderError("Failed to parse header value for 'fortran_order'")

def _parse_shape(text: str) -> Shape:
    close = text.find(")")
    if not text.startswith("(") or close == -1:
        raise MalformedHeaderError("Failed to find header keyword: '(' or ')'")

    parts = [p.strip() for p in text[1:close].split(",")]
    if parts[-1] == "":
        parts.pop()  # trailing comma, as in (3,)
    # Headers written by Python 2 builds of NumPy carry long-integer suffixes.
    parts = [p[:-1] if p.endswith("L") else p for p in parts]

    if not parts:
        raise MalformedHeaderError("Rank-0 arrays are not supported")
    if not all(p.isdigit() for p in parts):
        raise MalformedHeaderError(f"Failed to parse shape '{text[:close + 1]}'")
    return tuple(int(p) for p in parts)


# --- Encoding ---

def format_shape(shape: Shape) -> str:
    """Formats a shape the way NumPy does: ``(N,)`` for rank 1, ``(N1, N2)`` otherwise."""
    if len(shape) == 1:
        return f"({shape[0]},)"
    return "(" + ", ".join(str(d) for d in shape) + ")"

def encode_header(descriptor: HeaderDescriptor, version: tuple[int, int] = DEFAULT_VERSION) -> bytes:
    """
    Encodes the full header prefix for `descriptor`.

    The dictionary is space-padded so that the total prefix length (magic,
    version, length field, dictionary, padding and newline) is a multiple of
    16 bytes.

    Args:
        descriptor: The header to encode.
        version: ``(1, 0)`` or ``(2, 0)`` (default).

    Returns:
        The header bytes, ready to be followed by the payload.

    Raises:
        UnsupportedVersionError: If `version` cannot be written, or the header
            does not fit the version 1.0 length field.
    """
    version = (int(version[0]), int(version[1]))
    if version not in _WRITABLE_VERSIONS:
        raise UnsupportedVersionError(version)

    length_fmt = _LENGTH_FORMATS[version[0]]
    prefix_len = MAGIC_LEN + struct.calcsize(length_fmt)

    header = (
        f"{{'descr': '{descriptor.element_kind.descr}', "
        f"'fortran_order': {descriptor.fortran_order}, "
        f"'shape': {format_shape(descriptor.shape)}, }}"
    )
    padlen = -(prefix_len + len(header) + 1) % HEADER_ALIGN
    header = header + " " * padlen + "\n"

    try:
        length_field = struct.pack(length_fmt, len(header))
    except struct.error:
        raise UnsupportedVersionError(version, "header too long for this version") from None

    return MAGIC_PREFIX + bytes(version) + length_field + header.encode("ascii")
