# npy_arrays/__init__.py
"""
Reading and writing of NumPy .npy files, and stacking of numbered .npy
sequences into one matrix.
"""
import logging

from .file import Reader, Writer, open, load, load_raw, save, save_array_1d, save_matrix
from .container import NpyArray
from .convenience import load_array, save_array
from .dataclasses import HeaderDescriptor, RawPayload
from .header import encode_header, parse_header, read_header, read_magic
from .matrix import load_matrix_2d, save_matrix_2d
from .stream import NumberedFileSequence, NumberedFileWriter, save_sequence, stack_folder
from .types import ArrayOrder, ElementKind, NpzMapping, Shape
from .exceptions import (
    NpyError,
    NpyIOError,
    NpyHeaderError,
    NpyLayoutError,
    OpenFailedError,
    ShortReadError,
    ShortWriteError,
    MagicMismatchError,
    UnsupportedVersionError,
    MalformedHeaderError,
    UnsupportedEndiannessError,
    UnsupportedDtypeError,
    RankMismatchError,
    ShapeMismatchError,
    ElementKindMismatchError,
    OrderMismatchError,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Define what gets imported with 'from npy_arrays import *'
__all__ = [
    'open',
    'Reader',
    'Writer',
    'load',
    'load_raw',
    'save',
    'save_array_1d',
    'save_matrix',
    'load_matrix_2d',
    'save_matrix_2d',
    'load_array',
    'save_array',
    'stack_folder',
    'save_sequence',
    'NumberedFileSequence',
    'NumberedFileWriter',
    'NpyArray',
    'HeaderDescriptor',
    'RawPayload',
    'ElementKind',
    'ArrayOrder',
    'Shape',
    'NpzMapping',
    'read_magic',
    'read_header',
    'parse_header',
    'encode_header',
    'NpyError',
    'NpyIOError',
    'NpyHeaderError',
    'NpyLayoutError',
    'OpenFailedError',
    'ShortReadError',
    'ShortWriteError',
    'MagicMismatchError',
    'UnsupportedVersionError',
    'MalformedHeaderError',
    'UnsupportedEndiannessError',
    'UnsupportedDtypeError',
    'RankMismatchError',
    'ShapeMismatchError',
    'ElementKindMismatchError',
    'OrderMismatchError',
    '__version__',
]
