# tests/test_header.py
"""
Tests for the NPY header encoder and decoder.
"""
import io
import struct

import pytest
import numpy as np
from numpy.lib import format as npy_format

from npy_arrays import (
    ElementKind,
    HeaderDescriptor,
    MagicMismatchError,
    MalformedHeaderError,
    UnsupportedDtypeError,
    UnsupportedEndiannessError,
    UnsupportedVersionError,
    encode_header,
    parse_header,
    read_header,
    read_magic,
)
from npy_arrays.header import MAGIC_PREFIX, format_shape


def _v1_header(text: str) -> bytes:
    """Builds a version 1.0 prefix around an arbitrary dictionary text."""
    raw = text.encode("ascii")
    return MAGIC_PREFIX + b"\x01\x00" + struct.pack("<H", len(raw)) + raw


# --- Encoding ---

def test_encode_float32_vector_header():
    """A float32 vector of 3 elements gets the canonical version 2.0 header."""
    header = encode_header(HeaderDescriptor(ElementKind.FLOAT32, (3,), False))

    assert header.startswith(b"\x93NUMPY\x02\x00")
    assert len(header) == 80
    assert struct.unpack("<I", header[8:12])[0] == 80 - 12

    text = header[12:].decode("ascii")
    assert text.endswith("\n")
    assert text.rstrip() == "{'descr': '<f4', 'fortran_order': False, 'shape': (3,), }"

@pytest.mark.parametrize("shape", [(0,), (7,), (2, 3), (1000000, 17), (0, 4), (2, 3, 4)])
@pytest.mark.parametrize("version", [(1, 0), (2, 0)])
def test_encoded_header_is_16_byte_aligned(shape, version):
    header = encode_header(HeaderDescriptor(ElementKind.INT64, shape, True), version)
    assert len(header) % 16 == 0
    assert header[6:8] == bytes(version)

def test_format_shape():
    assert format_shape((5,)) == "(5,)"
    assert format_shape((2, 3)) == "(2, 3)"
    assert format_shape((2, 0, 4)) == "(2, 0, 4)"

def test_encode_rejects_unknown_version():
    with pytest.raises(UnsupportedVersionError, match="3.0"):
        encode_header(HeaderDescriptor(ElementKind.UINT8, (4,)), version=(3, 0))

def test_descriptor_rejects_kinds_outside_registry():
    with pytest.raises(UnsupportedDtypeError):
        HeaderDescriptor(np.dtype("complex64"), (4,))

def test_one_byte_kinds_use_pipe_marker():
    assert ElementKind.INT8.descr == "|i1"
    assert ElementKind.UINT8.descr == "|u1"
    assert ElementKind.UINT16.descr == "<u2"
    assert ElementKind.FLOAT64.descr == "<f8"

@pytest.mark.parametrize("kind", list(ElementKind))
def test_numpy_decodes_encoded_header(kind: ElementKind):
    """NumPy's own header reader agrees with what we write."""
    descriptor = HeaderDescriptor(kind, (4, 5), True)
    fp = io.BytesIO(encode_header(descriptor))

    assert npy_format.read_magic(fp) == (2, 0)
    shape, fortran_order, dtype = npy_format.read_array_header_2_0(fp)
    assert shape == (4, 5)
    assert fortran_order is True
    assert dtype.str == kind.descr
    assert dtype.itemsize == kind.word_size

@pytest.mark.parametrize("kind", list(ElementKind))
def test_decode_encode_roundtrip(kind: ElementKind):
    for descriptor in (
        HeaderDescriptor(kind, (9,), False),
        HeaderDescriptor(kind, (3, 0), True),
    ):
        fp = io.BytesIO(encode_header(descriptor) + b"payload")
        assert read_header(fp) == descriptor
        # The stream is left on the first payload byte.
        assert fp.read() == b"payload"


# --- Decoding ---

def test_parse_keys_in_any_order():
    descriptor = parse_header("{'shape': (2, 3), 'fortran_order': True, 'descr': '<i4'}   \n")
    assert descriptor == HeaderDescriptor(ElementKind.INT32, (2, 3), True)

def test_parse_rank1_with_and_without_trailing_comma():
    assert parse_header("{'descr': '|u1', 'fortran_order': False, 'shape': (12,), }\n").shape == (12,)
    assert parse_header("{'descr': '|u1', 'fortran_order': False, 'shape': (12), }\n").shape == (12,)

def test_parse_accepts_bytes():
    descriptor = parse_header(b"{'descr': '<u8', 'fortran_order': False, 'shape': (1, 1), }\n")
    assert descriptor.element_kind is ElementKind.UINT64

def test_big_endian_descr_is_rejected():
    with pytest.raises(UnsupportedEndiannessError, match="'>f4'"):
        parse_header("{'descr': '>f4', 'fortran_order': False, 'shape': (4,), }\n")

@pytest.mark.parametrize("descr", ["<c8", "<f2", "|b1", "<U10", "<M8[ns]", "|O"])
def test_unsupported_descr_is_rejected(descr):
    with pytest.raises(UnsupportedDtypeError):
        parse_header(f"{{'descr': '{descr}', 'fortran_order': False, 'shape': (4,), }}\n")

def test_structured_descr_is_rejected():
    with pytest.raises(UnsupportedDtypeError):
        parse_header("{'descr': [('a', '<f4')], 'fortran_order': False, 'shape': (4,), }\n")

@pytest.mark.parametrize("text, match", [
    ("{'descr': '<f4', 'fortran_order': False, 'shape': (4,), }", "newline"),
    ("{'descr': '<f4', 'shape': (4,), }\n", "fortran_order"),
    ("{'fortran_order': False, 'shape': (4,), }\n", "descr"),
    ("{'descr': '<f4', 'fortran_order': False, }\n", "shape"),
    ("{'descr': '<f4', 'fortran_order': Maybe, 'shape': (4,), }\n", "fortran_order"),
    ("{'descr': '<f4', 'fortran_order': False, 'shape': (4, -1), }\n", "shape"),
    ("{'descr': '<f4', 'fortran_order': False, 'shape': (4,\n", r"'\(' or '\)'"),
    ("{'descr': '<f4', 'fortran_order': False, 'shape': (), }\n", "Rank-0"),
    ("{'descr': '=f4', 'fortran_order': False, 'shape': (4,), }\n", "byte order"),
])
def test_malformed_headers(text, match):
    with pytest.raises(MalformedHeaderError, match=match):
        parse_header(text)

def test_read_magic_reports_version():
    fp = io.BytesIO(_v1_header("{'descr': '<f8', 'fortran_order': False, 'shape': (8,), }\n"))
    assert read_magic(fp) == (1, 0)

def test_version_1_header_with_2_byte_length():
    fp = io.BytesIO(_v1_header("{'descr': '<f8', 'fortran_order': False, 'shape': (8,), }\n"))
    assert read_header(fp) == HeaderDescriptor(ElementKind.FLOAT64, (8,), False)

def test_altered_magic_is_rejected_before_payload():
    data = bytearray(encode_header(HeaderDescriptor(ElementKind.FLOAT32, (2,))) + b"\x00" * 8)
    data[3] ^= 0xFF
    fp = io.BytesIO(bytes(data))
    with pytest.raises(MagicMismatchError):
        read_header(fp)
    assert fp.tell() == len(MAGIC_PREFIX)

def test_endianness_rejection_does_not_touch_payload():
    prefix = _v1_header("{'descr': '>f4', 'fortran_order': False, 'shape': (4,), }\n")
    fp = io.BytesIO(prefix + b"\x01" * 16)
    with pytest.raises(UnsupportedEndiannessError):
        read_header(fp)
    assert fp.tell() == len(prefix)

def test_unsupported_version_is_rejected():
    fp = io.BytesIO(MAGIC_PREFIX + b"\x03\x00" + struct.pack("<I", 0))
    with pytest.raises(UnsupportedVersionError, match="3.0"):
        read_header(fp)

@pytest.mark.parametrize("data", [
    MAGIC_PREFIX + b"\x02",
    MAGIC_PREFIX + b"\x02\x00\x40",
    MAGIC_PREFIX + b"\x02\x00" + struct.pack("<I", 64) + b"{'descr': '<f4'",
])
def test_truncated_headers(data):
    with pytest.raises(MalformedHeaderError, match="Truncated"):
        read_header(io.BytesIO(data))

def test_short_input_is_a_magic_mismatch():
    with pytest.raises(MagicMismatchError):
        read_header(io.BytesIO(b"\x93NU"))

def test_oversized_header_length_is_rejected_before_reading():
    fp = io.BytesIO(MAGIC_PREFIX + b"\x02\x00" + struct.pack("<I", 2**31) + b"{'descr'")
    with pytest.raises(MalformedHeaderError, match="exceeds the limit of 10000 bytes"):
        read_header(fp)
    assert fp.tell() == len(MAGIC_PREFIX) + 6

def test_header_size_limit_is_configurable():
    header = encode_header(HeaderDescriptor(ElementKind.FLOAT32, (3,), False))
    with pytest.raises(MalformedHeaderError, match="exceeds the limit of 16 bytes"):
        read_header(io.BytesIO(header), max_header_size=16)
    assert read_header(io.BytesIO(header), max_header_size=len(header)).shape == (3,)
