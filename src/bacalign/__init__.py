"""
Pairwise sequence comparison: distance metrics and global/local alignment.

Examples:
    >>> from bacalign import align_global, levenshtein_distance
    >>> tuple(align_global('similarity', 'molarity'))
    ('similarity', '--molarity')
    >>> levenshtein_distance('kitten', 'sitting')
    3
"""
__version__ = '0.1.0'

from bacalign.utils.resources import RESOURCES, BacalignWarning, DependencyWarning
from bacalign.core import Interval, SymbolError
from bacalign.distance import (
    LengthMismatchError, hamming_distance, levenshtein_distance, normalized_hamming_distance,
    normalized_levenshtein_distance, get_distance_metric
)
from bacalign.align import (
    PairwiseAlignment, Source, TracebackError, AlignmentSizeWarning, align, align_global, align_local, global_score
)
