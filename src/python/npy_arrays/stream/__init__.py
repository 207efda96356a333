# npy_arrays/stream/__init__.py
"""Readers and writers for numbered sequences of NPY files."""
from .readers import NumberedFileSequence, stack_folder
from .writers import NumberedFileWriter, save_sequence
