"""
Module for representing pairwise alignments.
"""
from typing import Final

import numpy as np

from bacalign.core.interval import Interval
from bacalign.core.symbols import from_symbols, SeqLike
from bacalign.utils.resources import jit


# Constants ------------------------------------------------------------------------------------------------------------
# Column operations, from the point of view of ``a``. Values match ``bacalign.align.pairwise.Source``.
OP_MATCH: Final = 1
OP_GAP_A: Final = 2  # Symbol from b against a gap in a
OP_GAP_B: Final = 3  # Symbol from a against a gap in b


# Classes --------------------------------------------------------------------------------------------------------------
class CigarParser:
    """Builds CIGAR strings from alignment column operations"""
    _OP_BYTES_LOOKUP = (b'M', b'I', b'D', b'=', b'X')

    @classmethod
    def make(cls, ops: np.ndarray, a: np.ndarray, b: np.ndarray, extended: bool = False) -> str:
        """
        Run-length encodes alignment columns with ``a`` as the query.

        Args:
            ops: Column operations (OP_MATCH, OP_GAP_A, OP_GAP_B).
            a: Aligned symbols of the query.
            b: Aligned symbols of the target.
            extended: Use '='/'X' instead of 'M' for aligned columns.

        Returns:
            The CIGAR string, empty for an empty alignment.
        """
        if len(ops) == 0: return ""
        counts, codes = _cigar_rle_kernel(ops, a, b, extended)
        return b"".join([b"%d" % n + cls._OP_BYTES_LOOKUP[o] for n, o in zip(counts, codes)]).decode('ascii')


class PairwiseAlignment:
    """
    Represents a pairwise alignment of two sequences, reported in the caller's argument order.

    Iterating yields the two aligned sequences, so the result unpacks like a pair:

    Examples:
        >>> a, b = align_global('similarity', 'molarity')
        >>> b
        '--molarity'
    """
    __slots__ = ('aligned_a', 'aligned_b', 'mode', 'score', 'interval_a', 'interval_b', 'length_a', 'length_b',
                 'swapped', '_a', '_b', '_ops')

    def __init__(self, a: np.ndarray, b: np.ndarray, ops: np.ndarray, score: int, interval_a: Interval,
                 interval_b: Interval, length_a: int, length_b: int, mode: str = 'global', swapped: bool = False,
                 like_a: SeqLike = b'', like_b: SeqLike = b''):
        """
        Initializes a PairwiseAlignment.

        Args:
            a: Aligned symbols of the first sequence, with gaps.
            b: Aligned symbols of the second sequence, with gaps.
            ops: Column operations, one per column.
            score: The alignment score.
            interval_a: Region of the first input covered by the alignment.
            interval_b: Region of the second input covered by the alignment.
            length_a: Length of the first input.
            length_b: Length of the second input.
            mode: 'global' or 'local'.
            swapped: Whether the second input was aligned on the row dimension.
            like_a: Object whose type (str or bytes-like) the first aligned sequence is decoded to.
            like_b: As ``like_a`` for the second sequence.
        """
        if not (len(a) == len(b) == len(ops)): raise ValueError('Aligned sequences must have equal lengths')
        self._a = a
        self._b = b
        self._ops = ops
        for arr in (self._a, self._b, self._ops): arr.flags.writeable = False
        self.aligned_a = from_symbols(a, like_a)
        self.aligned_b = from_symbols(b, like_b)
        self.mode = mode
        self.score = int(score)
        self.interval_a = interval_a
        self.interval_b = interval_b
        self.length_a = int(length_a)
        self.length_b = int(length_b)
        self.swapped = swapped

    def __repr__(self):
        return (f"PairwiseAlignment({self.mode}, {self.interval_a}->{self.interval_b}, score={self.score}, "
                f"cigar={self.cigar() or '*'})")

    def __len__(self): return len(self._ops)
    def __iter__(self): return iter((self.aligned_a, self.aligned_b))

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return (self.mode == other.mode and
                    self.aligned_a == other.aligned_a and
                    self.aligned_b == other.aligned_b and
                    self.score == other.score and
                    self.interval_a == other.interval_a and
                    self.interval_b == other.interval_b)
        return False

    __hash__ = None

    @property
    def ops(self) -> np.ndarray: return self._ops

    @property
    def n_matches(self) -> int:
        return int(np.count_nonzero((self._ops == OP_MATCH) & (self._a == self._b)))

    @property
    def n_mismatches(self) -> int:
        return int(np.count_nonzero((self._ops == OP_MATCH) & (self._a != self._b)))

    @property
    def n_gaps(self) -> int:
        """Number of gap columns."""
        return int(np.count_nonzero(self._ops != OP_MATCH))

    @property
    def n_gap_runs(self) -> int:
        """Number of maximal runs of gap columns of the same kind."""
        if len(self._ops) == 0: return 0
        starts = np.empty(len(self._ops), dtype=bool)
        starts[0] = True
        np.not_equal(self._ops[1:], self._ops[:-1], out=starts[1:])
        return int(np.count_nonzero(starts & (self._ops != OP_MATCH)))

    def identity(self) -> float:
        return self.n_matches / len(self) if len(self) > 0 else 0.0

    def coverage_a(self) -> float:
        return len(self.interval_a) / self.length_a if self.length_a > 0 else 0.0

    def coverage_b(self) -> float:
        return len(self.interval_b) / self.length_b if self.length_b > 0 else 0.0

    def cigar(self, extended: bool = False) -> str:
        """Returns the CIGAR string of the alignment with the first sequence as the query."""
        return CigarParser.make(self._ops, self._a, self._b, extended)

    def format(self, width: int = 60) -> str:
        """
        Renders the alignment as text blocks of ``width`` columns.

        Each block has the first sequence, a match line ('|' identical, '.' mismatch, ' ' gap)
        and the second sequence, each line prefixed with its 1-based start coordinate.

        Args:
            width: Number of alignment columns per block.

        Returns:
            The rendered alignment, without a trailing newline.
        """
        if width < 1: raise ValueError('width must be positive')
        a = self._a.tobytes().decode('latin-1')
        b = self._b.tobytes().decode('latin-1')
        mid = np.full(len(self), ord(' '), dtype=np.uint8)
        aligned = self._ops == OP_MATCH
        mid[aligned & (self._a == self._b)] = ord('|')
        mid[aligned & (self._a != self._b)] = ord('.')
        mid = mid.tobytes().decode('ascii')
        # Running coordinates of each block start
        pos_a = self.interval_a.start + np.concatenate(([0], np.cumsum(self._ops != OP_GAP_A)))
        pos_b = self.interval_b.start + np.concatenate(([0], np.cumsum(self._ops != OP_GAP_B)))
        pad = len(str(max(self.length_a, self.length_b, 1)))
        blocks = []
        for i in range(0, len(self), width):
            blocks.append('\n'.join((
                f'{pos_a[i] + 1:>{pad}} {a[i:i + width]}',
                f'{"":>{pad}} {mid[i:i + width]}',
                f'{pos_b[i] + 1:>{pad}} {b[i:i + width]}'
            )))
        return '\n\n'.join(blocks)


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def _cigar_rle_kernel(ops, a, b, extended):
    n = len(ops)
    counts = np.empty(n, dtype=np.int64); codes = np.empty(n, dtype=np.uint8); idx = 0
    curr_op = -1; curr_count = 0
    for i in range(n):
        o = ops[i]
        if o == OP_GAP_B: op = 1  # I
        elif o == OP_GAP_A: op = 2  # D
        elif extended: op = 3 if a[i] == b[i] else 4  # = / X
        else: op = 0  # M
        if op == curr_op:
            curr_count += 1
        else:
            if curr_count: counts[idx] = curr_count; codes[idx] = curr_op; idx += 1
            curr_op = op; curr_count = 1
    if curr_count: counts[idx] = curr_count; codes[idx] = curr_op; idx += 1
    return counts[:idx], codes[:idx]
