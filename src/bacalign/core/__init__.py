"""
Core sequence primitives: symbol arrays and coordinate intervals.
"""
from bacalign.core.symbols import as_symbols, from_symbols, SymbolError, GAP
from bacalign.core.interval import Interval
