"""
Pairwise global (Needleman-Wunsch) and local (Smith-Waterman) alignment.

Both aligners score a contiguous run of insertions or deletions as a single mutation event: only the first
step of a run is penalised and steps extending the run are free. Inputs are normalised once so the longer
sequence spans the rows of the DP grid; results are always reported in the caller's argument order.
"""
from enum import IntEnum
from typing import Literal, Callable
from warnings import warn

import numpy as np

from bacalign.align.alignment import PairwiseAlignment, OP_MATCH
from bacalign.core.interval import Interval
from bacalign.core.symbols import as_symbols, GAP, SeqLike
from bacalign.utils.resources import RESOURCES, BacalignWarning, jit, require


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class TracebackError(RuntimeError):
    """Raised when a traceback reaches a cell without a valid source tag."""
    def __init__(self, row: int, col: int, mode: str):
        self.row = row
        self.col = col
        self.mode = mode
        super().__init__(f'Invalid {mode} traceback state at cell ({row}, {col}): no source tag to follow')


class AlignmentSizeWarning(BacalignWarning):
    """Issued when an alignment grid exceeds ``RESOURCES.cell_warning_limit`` cells."""


# Constants ------------------------------------------------------------------------------------------------------------
class Source(IntEnum):
    """Traceback tags stored per cell of the DP grid."""
    START = 0
    DIAGONAL = 1  # Match or mismatch
    INSERTION = 2  # Left: consumes a column symbol only
    DELETION = 3  # Up: consumes a row symbol only


_SRC_START = 0
_SRC_DIAGONAL = 1
_SRC_INSERTION = 2
_SRC_DELETION = 3
_TAG_DTYPE = np.uint8
_SCORE_DTYPE = np.int64

# Local scoring
MATCH_SCORE = 3
MISMATCH_PENALTY = 3
GAP_PENALTY = 2


# Functions ------------------------------------------------------------------------------------------------------------
def normalize(seq_a: SeqLike, seq_b: SeqLike) -> tuple[np.ndarray, np.ndarray, bool]:
    """
    Orients two sequences so the longer one spans the rows of the DP grid.

    Args:
        seq_a: The first sequence.
        seq_b: The second sequence.

    Returns:
        The row symbols, the column symbols and whether the inputs were swapped.
        Sequences of equal length keep the argument order.
    """
    a, b = as_symbols(seq_a), as_symbols(seq_b)
    if len(a) < len(b): return b, a, True
    return a, b, False


def global_score(seq_a: SeqLike, seq_b: SeqLike) -> int:
    """
    Returns the minimum global alignment cost without reconstructing the alignment.

    Only two rows of scores and tags are held, so memory is linear in the shorter sequence.
    """
    rows, cols, _ = normalize(seq_a, seq_b)
    return int(_global_score_kernel(rows, cols))


def align_global(seq_a: SeqLike, seq_b: SeqLike) -> PairwiseAlignment:
    """
    Globally aligns two sequences with the event-based cost model.

    A mismatch costs 1 and each run of insertions or deletions costs 1 regardless of its length.
    Ties between equal-cost moves prefer a match/mismatch, then a deletion, then an insertion.

    Args:
        seq_a: The first sequence.
        seq_b: The second sequence.

    Returns:
        A PairwiseAlignment spanning both sequences in full, with '-' as the gap symbol.
        The score is the minimum cost.

    Raises:
        TracebackError: If the tag grid cannot be traced back to the origin.

    Examples:
        >>> tuple(align_global('GAAAATAAAT', 'GATAAT'))
        ('GAAAATAAAT', 'G---AT-AAT')
    """
    rows, cols, swapped = normalize(seq_a, seq_b)
    n_rows, n_cols = len(rows) + 1, len(cols) + 1
    _check_grid_size(n_rows, n_cols)
    # Tags for every cell, addressed by row * n_cols + col; scores only live in two rolling rows
    trace = np.empty(n_rows * n_cols, dtype=_TAG_DTYPE)
    score = _global_fill_kernel(rows, cols, trace)
    out_r, out_c, ops, r, c, ok = _traceback_kernel(
        trace, trace, rows, cols, len(rows), len(cols), GAP, False
    )
    if not ok: raise TracebackError(r, c, 'global')
    return _build_alignment(seq_a, seq_b, out_r, out_c, ops, score, 0, len(rows), 0, len(cols), swapped, 'global')


def align_local(seq_a: SeqLike, seq_b: SeqLike) -> PairwiseAlignment:
    """
    Locally aligns two sequences (Smith-Waterman).

    Matches score +3, mismatches -3 and each run of insertions or deletions costs 2 regardless of its length.
    Cell scores are floored at 0. The alignment ends at the highest scoring cell (the first one in row-major
    order on ties) and extends back until a cell scoring 0.

    Args:
        seq_a: The first sequence.
        seq_b: The second sequence.

    Returns:
        A PairwiseAlignment of the best local region, with ``interval_a`` and ``interval_b`` giving the
        covered region of each input. If no pair of symbols scores positively the alignment is empty and
        its score is 0.

    Raises:
        TracebackError: If the traceback reaches a tag that cannot be followed.

    Examples:
        >>> aln = align_local('TTACGTTT', 'GGACGTGG')
        >>> tuple(aln), aln.interval_a
        (('ACGT', 'ACGT'), 2:6)
    """
    rows, cols, swapped = normalize(seq_a, seq_b)
    n_rows, n_cols = len(rows) + 1, len(cols) + 1
    _check_grid_size(n_rows, n_cols)
    # Full grids are kept: the traceback may start from any interior cell
    scores = np.zeros(n_rows * n_cols, dtype=_SCORE_DTYPE)
    trace = np.zeros(n_rows * n_cols, dtype=_TAG_DTYPE)
    best, end_r, end_c = _local_fill_kernel(rows, cols, scores, trace, MATCH_SCORE, MISMATCH_PENALTY, GAP_PENALTY)
    out_r, out_c, ops, r, c, ok = _traceback_kernel(trace, scores, rows, cols, end_r, end_c, GAP, True)
    if not ok: raise TracebackError(r, c, 'local')
    return _build_alignment(seq_a, seq_b, out_r, out_c, ops, best, r, end_r, c, end_c, swapped, 'local')


def align(seq_a: SeqLike, seq_b: SeqLike, mode: Literal['global', 'local'] = 'global') -> PairwiseAlignment:
    """
    Aligns two sequences with the aligner registered for ``mode``.

    Raises:
        ValueError: If the mode is not registered.
    """
    if (aligner := _ALIGNMENT_REGISTRY.get(mode)) is None:
        raise ValueError(f'Invalid alignment mode: {mode}. Select from {list(_ALIGNMENT_REGISTRY)}')
    return aligner(seq_a, seq_b)


@require('numba')
def compile_kernels() -> bool:
    """Triggers JIT compilation of the alignment kernels ahead of the first real alignment."""
    probe = as_symbols(b'ACGT')
    for aligner in _ALIGNMENT_REGISTRY.values(): aligner(probe, probe[::-1].copy())
    global_score(probe, probe)
    return True


def _check_grid_size(n_rows: int, n_cols: int):
    if (n := n_rows * n_cols) > RESOURCES.cell_warning_limit:
        warn(f'Allocating an alignment grid of {n:,} cells ({n_rows:,} x {n_cols:,})', AlignmentSizeWarning,
             stacklevel=3)


def _build_alignment(seq_a: SeqLike, seq_b: SeqLike, out_r: np.ndarray, out_c: np.ndarray, ops: np.ndarray,
                     score: int, start_r: int, end_r: int, start_c: int, end_c: int, swapped: bool,
                     mode: str) -> PairwiseAlignment:
    """Maps a row/column oriented traceback back to the caller's argument order."""
    interval_r, interval_c = Interval(start_r, end_r), Interval(start_c, end_c)
    if swapped:
        # Row symbols belong to seq_b, so gaps swap sides
        out_r, out_c, interval_r, interval_c = out_c, out_r, interval_c, interval_r
        ops = np.where(ops == OP_MATCH, ops, _SRC_INSERTION + _SRC_DELETION - ops).astype(_TAG_DTYPE)
    return PairwiseAlignment(
        out_r, out_c, ops, score, interval_r, interval_c, len(as_symbols(seq_a)), len(as_symbols(seq_b)),
        mode=mode, swapped=swapped, like_a=seq_a, like_b=seq_b
    )


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def _global_cell(diagonal, up, up_source, left, left_source, mismatch):
    """Scores one cell from its three neighbours; a gap only costs when it opens a new run."""
    diagonal += mismatch
    deletion = up + (0 if up_source == _SRC_DELETION else 1)
    insertion = left + (0 if left_source == _SRC_INSERTION else 1)
    if diagonal <= deletion and diagonal <= insertion: return diagonal, _SRC_DIAGONAL
    if deletion <= insertion: return deletion, _SRC_DELETION
    return insertion, _SRC_INSERTION


@jit(nopython=True, cache=True, nogil=True)
def _global_base_row(cols):
    # Any gap run along the boundary is one event, so every cell past the origin costs 1
    row = np.ones(cols, dtype=np.int64)
    row[0] = 0
    return row


@jit(nopython=True, cache=True, nogil=True)
def _global_score_kernel(seq_r, seq_c):
    cols = len(seq_c) + 1
    prev = _global_base_row(cols)
    curr = np.empty(cols, dtype=np.int64)
    prev_src = np.full(cols, _SRC_INSERTION, dtype=np.uint8)
    curr_src = np.empty(cols, dtype=np.uint8)
    prev_src[0] = _SRC_START
    for r in range(1, len(seq_r) + 1):
        curr[0] = 1
        curr_src[0] = _SRC_DELETION
        sym = seq_r[r - 1]
        for c in range(1, cols):
            curr[c], curr_src[c] = _global_cell(
                prev[c - 1], prev[c], prev_src[c], curr[c - 1], curr_src[c - 1], 0 if sym == seq_c[c - 1] else 1
            )
        prev, curr = curr, prev
        prev_src, curr_src = curr_src, prev_src
    return prev[cols - 1]


@jit(nopython=True, cache=True, nogil=True)
def _global_fill_kernel(seq_r, seq_c, trace):
    """Fills the tag grid, holding scores for the previous and current rows only."""
    cols = len(seq_c) + 1
    prev = _global_base_row(cols)
    curr = np.empty(cols, dtype=np.int64)
    for c in range(cols): trace[c] = _SRC_INSERTION
    trace[0] = _SRC_START
    for r in range(1, len(seq_r) + 1):
        row = r * cols
        up = row - cols
        curr[0] = 1
        trace[row] = _SRC_DELETION
        sym = seq_r[r - 1]
        for c in range(1, cols):
            curr[c], trace[row + c] = _global_cell(
                prev[c - 1], prev[c], trace[up + c], curr[c - 1], trace[row + c - 1], 0 if sym == seq_c[c - 1] else 1
            )
        prev, curr = curr, prev
    return prev[cols - 1]


@jit(nopython=True, cache=True, nogil=True)
def _local_fill_kernel(seq_r, seq_c, scores, trace, match, mismatch, gap):
    """Fills the zero-initialised score and tag grids, returning the best score and its cell."""
    cols = len(seq_c) + 1
    best = 0
    best_r = 0
    best_c = 0
    for r in range(1, len(seq_r) + 1):
        row = r * cols
        up = row - cols
        sym = seq_r[r - 1]
        for c in range(1, cols):
            diagonal = scores[up + c - 1] + (match if sym == seq_c[c - 1] else -mismatch)
            deletion = scores[up + c] - (0 if trace[up + c] == _SRC_DELETION else gap)
            insertion = scores[row + c - 1] - (0 if trace[row + c - 1] == _SRC_INSERTION else gap)
            if diagonal >= deletion and diagonal >= insertion:
                value = diagonal; source = _SRC_DIAGONAL
            elif deletion >= insertion:
                value = deletion; source = _SRC_DELETION
            else:
                value = insertion; source = _SRC_INSERTION
            if value <= 0: value = 0; source = _SRC_START
            scores[row + c] = value
            trace[row + c] = source
            if value > best: best = value; best_r = r; best_c = c
    return best, best_r, best_c


@jit(nopython=True, cache=True, nogil=True)
def _traceback_kernel(trace, scores, seq_r, seq_c, r, c, gap, local):
    """
    Follows tags back from (r, c). Global tracebacks stop at the origin, local ones at the first cell scoring
    0 (``scores`` is unused for global tracebacks). Returns the reversed-back aligned row and column symbols,
    the row/column operations, the cell the traceback stopped at and whether it completed.
    """
    cols = len(seq_c) + 1
    out_r = np.empty(r + c, dtype=np.uint8)
    out_c = np.empty(r + c, dtype=np.uint8)
    ops = np.empty(r + c, dtype=np.uint8)
    k = 0
    ok = True
    while r > 0 or c > 0:
        if local and scores[r * cols + c] == 0: break
        source = trace[r * cols + c]
        if source == _SRC_DIAGONAL and r > 0 and c > 0:
            out_r[k] = seq_r[r - 1]; out_c[k] = seq_c[c - 1]; r -= 1; c -= 1
        elif source == _SRC_DELETION and r > 0:
            out_r[k] = seq_r[r - 1]; out_c[k] = gap; r -= 1
        elif source == _SRC_INSERTION and c > 0:
            out_r[k] = gap; out_c[k] = seq_c[c - 1]; c -= 1
        else:
            ok = False
            break
        ops[k] = source
        k += 1
    return out_r[:k][::-1].copy(), out_c[:k][::-1].copy(), ops[:k][::-1].copy(), r, c, ok


_ALIGNMENT_REGISTRY: dict[str, Callable[[SeqLike, SeqLike], PairwiseAlignment]] = {
    'global': align_global,
    'local': align_local,
}
