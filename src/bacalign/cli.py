"""
Command-line interface for bacalign.

Examples:
    $ bacalign distance levenshtein kitten sitting
    3
    $ bacalign align global GAAAATAAAT GATAAT
"""
import argparse
import sys
from typing import Optional, List

from bacalign import __version__
from bacalign.distance import __all__ as DISTANCE_METRICS, get_distance_metric, LengthMismatchError
from bacalign.align.pairwise import align, TracebackError
from bacalign.core.symbols import SymbolError


def positive_int_type(value: str) -> int:
    """Argparse type for strictly positive integers."""
    try: number = int(value)
    except ValueError: raise argparse.ArgumentTypeError(f"Expected an integer, got {value!r}")
    if number < 1: raise argparse.ArgumentTypeError(f"Expected a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='bacalign', description='Pairwise sequence distances and alignments.')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    distance = subparsers.add_parser('distance', help='Compute a distance between two sequences')
    distance.add_argument('metric', choices=[m.removesuffix('_distance') for m in DISTANCE_METRICS],
                          help='Distance metric')
    distance.add_argument('seq_a', help='First sequence')
    distance.add_argument('seq_b', help='Second sequence')
    distance.set_defaults(func=_run_distance)

    aligner = subparsers.add_parser('align', help='Align two sequences')
    aligner.add_argument('mode', choices=['global', 'local'], help='Alignment mode')
    aligner.add_argument('seq_a', help='First sequence')
    aligner.add_argument('seq_b', help='Second sequence')
    aligner.add_argument('--width', type=positive_int_type, default=60, help='Alignment columns per block')
    aligner.add_argument('--cigar', action='store_true', help='Print the CIGAR string instead of the alignment')
    aligner.set_defaults(func=_run_align)
    return parser


def _run_distance(args: argparse.Namespace) -> str:
    return str(get_distance_metric(f'{args.metric}_distance')(args.seq_a, args.seq_b))


def _run_align(args: argparse.Namespace) -> str:
    alignment = align(args.seq_a, args.seq_b, mode=args.mode)
    if args.cigar: return alignment.cigar() or '*'
    lines = [f'# mode={alignment.mode} score={alignment.score} a={alignment.interval_a} b={alignment.interval_b}']
    if len(alignment): lines.append(alignment.format(width=args.width))
    return '\n'.join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Runs the CLI and returns the process exit status."""
    args = build_parser().parse_args(argv)
    try:
        print(args.func(args))
    except (LengthMismatchError, SymbolError, TracebackError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    return 0
