"""
Pairwise alignment: global and local aligners and the alignment result container.
"""
from bacalign.align.alignment import PairwiseAlignment, CigarParser
from bacalign.align.pairwise import (
    Source, TracebackError, AlignmentSizeWarning, align, align_global, align_local, global_score, normalize,
    compile_kernels
)
