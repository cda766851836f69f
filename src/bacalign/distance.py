"""
distance.py

Distance metrics between two symbol sequences.
"""
import sys
from typing import Callable

import numpy as np

from bacalign.core.symbols import as_symbols, SeqLike
from bacalign.utils.resources import jit

__all__ = [
    "hamming_distance",
    "levenshtein_distance",
    "normalized_hamming_distance",
    "normalized_levenshtein_distance",
]


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class LengthMismatchError(ValueError):
    """Raised when a metric requires equal-length sequences and the inputs differ."""
    def __init__(self, length_a: int, length_b: int):
        self.length_a = length_a
        self.length_b = length_b
        super().__init__(f'Sequences are of unequal length: len(seq_a) = {length_a}, len(seq_b) = {length_b}')


# Functions ------------------------------------------------------------------------------------------------------------
def get_distance_metric(metric_name: str) -> Callable:
    """
    Retrieves a distance function from this module by its public name.

    Raises:
        ValueError: If the name is not one of ``__all__``.
    """
    if metric_name not in __all__:
        raise ValueError(f"Invalid distance metric: {metric_name}. Select from {__all__}")
    return getattr(sys.modules[__name__], metric_name)


def more_similar_is_larger(value: bool):
    """
    A decorator that tags a metric with whether larger values mean more similar sequences.

    Args:
        value (bool): True for similarity-like metrics, False for distance-like metrics.
    """
    def decorator(func):
        setattr(func, "more_similar_is_larger", value)
        return func
    return decorator


@more_similar_is_larger(False)
def hamming_distance(seq_a: SeqLike, seq_b: SeqLike) -> int:
    """
    Returns the number of positions at which two equal-length sequences differ.

    Args:
        seq_a: The first sequence.
        seq_b: The second sequence.

    Returns:
        int: The Hamming distance.

    Raises:
        LengthMismatchError: If the sequences are of different lengths.

    Examples:
        >>> hamming_distance('karolin', 'kathrin')
        3
    """
    a, b = as_symbols(seq_a), as_symbols(seq_b)
    if len(a) != len(b): raise LengthMismatchError(len(a), len(b))
    return int(_hamming_kernel(a, b))


@more_similar_is_larger(False)
def levenshtein_distance(seq_a: SeqLike, seq_b: SeqLike) -> int:
    """
    Returns the Levenshtein distance between two sequences, which is defined as
    the minimum number of single-symbol edits (insertions, deletions, or
    substitutions) required to transform one sequence into the other.

    The distance is 0 if and only if the sequences are identical.

    Args:
        seq_a: The first sequence.
        seq_b: The second sequence.

    Returns:
        int: The Levenshtein distance between the two sequences.

    Examples:
        >>> levenshtein_distance('kitten', 'sitting')
        3
    """
    a, b = as_symbols(seq_a), as_symbols(seq_b)
    # The rolling rows span the shorter sequence
    if len(a) > len(b): a, b = b, a
    return int(_levenshtein_kernel(a, b))


@more_similar_is_larger(False)
def normalized_hamming_distance(seq_a: SeqLike, seq_b: SeqLike) -> float:
    """
    Returns the Hamming distance divided by the sequence length, in the range [0, 1].
    Two empty sequences have a distance of 0.
    """
    a, b = as_symbols(seq_a), as_symbols(seq_b)
    if len(a) != len(b): raise LengthMismatchError(len(a), len(b))
    if len(a) == 0: return 0.0
    return int(_hamming_kernel(a, b)) / len(a)


@more_similar_is_larger(False)
def normalized_levenshtein_distance(seq_a: SeqLike, seq_b: SeqLike) -> float:
    """
    Returns the Levenshtein distance divided by the length of the longer sequence,
    in the range [0, 1]. Two empty sequences have a distance of 0.
    """
    longest = max(len(as_symbols(seq_a)), len(as_symbols(seq_b)))
    if longest == 0: return 0.0
    return levenshtein_distance(seq_a, seq_b) / longest


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def _hamming_kernel(a, b):
    count = 0
    for i in range(len(a)):
        if a[i] != b[i]: count += 1
    return count


@jit(nopython=True, cache=True, nogil=True)
def _levenshtein_kernel(a, b):
    """Two-row edit distance; ``a`` spans the columns, one row per symbol of ``b``."""
    width = len(a) + 1
    prev = np.arange(width).astype(np.int64)
    curr = np.empty(width, dtype=np.int64)
    for r in range(1, len(b) + 1):
        curr[0] = r
        sym = b[r - 1]
        for c in range(1, width):
            best = prev[c - 1] + (0 if a[c - 1] == sym else 1)
            insertion = curr[c - 1] + 1
            deletion = prev[c] + 1
            if insertion < best: best = insertion
            if deletion < best: best = deletion
            curr[c] = best
        prev, curr = curr, prev
    return prev[width - 1]
