"""
Conversion between caller sequences and fixed-width symbol arrays.
"""
from typing import Union, Final

import numpy as np


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class SymbolError(ValueError):
    """Raised when a sequence cannot be represented as single-byte symbols."""


# Constants ------------------------------------------------------------------------------------------------------------
DTYPE: Final = np.uint8
ENCODING: Final = 'ascii'
GAP: Final = ord('-')

SeqLike = Union[str, bytes, bytearray, memoryview, np.ndarray]


# Functions ------------------------------------------------------------------------------------------------------------
def as_symbols(seq: SeqLike) -> np.ndarray:
    """
    Returns the sequence as a read-only contiguous array of uint8 symbols.

    Args:
        seq: A str (ASCII only), a bytes-like object or a 1-D integer array with values in 0-255.

    Returns:
        A 1-D ``np.uint8`` array. Bytes-like inputs are viewed, not copied.

    Raises:
        SymbolError: If a str contains non-ASCII characters or an array holds values outside 0-255.
        TypeError: If the input is not a supported sequence type.

    Examples:
        >>> as_symbols('ACGT')
        array([65, 67, 71, 84], dtype=uint8)
    """
    if isinstance(seq, str):
        try: seq = seq.encode(ENCODING)
        except UnicodeEncodeError as e: raise SymbolError(f'Sequence must be {ENCODING}: {e}') from e
    if isinstance(seq, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(seq, dtype=DTYPE)
    elif isinstance(seq, np.ndarray):
        if seq.ndim != 1: raise SymbolError(f'Symbol arrays must be 1-D, got {seq.ndim} dimensions')
        if seq.dtype != DTYPE:
            if seq.dtype.kind not in 'iu': raise SymbolError(f'Symbol arrays must hold integers, got {seq.dtype}')
            if len(seq) and (seq.min() < 0 or seq.max() > np.iinfo(DTYPE).max):
                raise SymbolError('Symbol values must be in the range 0-255')
            seq = seq.astype(DTYPE)
        arr = np.ascontiguousarray(seq)
    else:
        raise TypeError(f'Cannot convert {type(seq).__name__} to symbols')
    if arr.flags.writeable:
        arr = arr.view()
        arr.flags.writeable = False
    return arr


def from_symbols(arr: np.ndarray, like: SeqLike) -> Union[str, bytes]:
    """Decodes a uint8 array to ``str`` if ``like`` is a str, otherwise to ``bytes``."""
    data = np.asarray(arr, dtype=DTYPE).tobytes()
    return data.decode(ENCODING) if isinstance(like, str) else data
