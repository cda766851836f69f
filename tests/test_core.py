import numpy as np
import pytest

from bacalign.core.interval import Interval
from bacalign.core.symbols import SymbolError, as_symbols, from_symbols


class TestSymbols:
    def test_str(self):
        np.testing.assert_array_equal(as_symbols("ACGT"), [65, 67, 71, 84])

    def test_bytes_like(self):
        for seq in (b"ACGT", bytearray(b"ACGT"), memoryview(b"ACGT")):
            arr = as_symbols(seq)
            assert arr.dtype == np.uint8
            assert arr.tobytes() == b"ACGT"

    def test_read_only(self):
        arr = as_symbols(bytearray(b"ACGT"))
        assert not arr.flags.writeable
        with pytest.raises(ValueError):
            arr[0] = 0

    def test_does_not_freeze_caller_array(self):
        source = np.array([65, 67], dtype=np.uint8)
        as_symbols(source)
        assert source.flags.writeable

    def test_integer_arrays(self):
        assert as_symbols(np.array([65, 67], dtype=np.int64)).tobytes() == b"AC"

    def test_non_ascii(self):
        with pytest.raises(SymbolError, match="ascii"):
            as_symbols("ACGTé")

    def test_out_of_range_array(self):
        with pytest.raises(SymbolError, match="0-255"):
            as_symbols(np.array([65, 300]))

    def test_invalid_arrays(self):
        with pytest.raises(SymbolError, match="1-D"):
            as_symbols(np.zeros((2, 2), dtype=np.uint8))
        with pytest.raises(SymbolError, match="integers"):
            as_symbols(np.array([1.5]))

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            as_symbols(["A", "C"])

    def test_from_symbols(self):
        arr = as_symbols("AC-G")
        assert from_symbols(arr, "x") == "AC-G"
        assert from_symbols(arr, b"x") == b"AC-G"
        assert from_symbols(arr, arr) == b"AC-G"


class TestInterval:
    def test_basic(self):
        interval = Interval(2, 6)
        assert len(interval) == 4
        assert tuple(interval) == (2, 6)
        assert interval == Interval(2, 6)
        assert interval == (2, 6)
        assert interval != Interval(2, 7)
        assert hash(interval) == hash(Interval(2, 6))
        assert repr(interval) == "2:6"

    def test_invalid(self):
        with pytest.raises(ValueError):
            Interval(5, 2)
        with pytest.raises(ValueError):
            Interval(-1, 2)

    def test_slice(self):
        assert "TTACGTTT"[Interval(2, 6).slice()] == "ACGT"
        assert "TTACGTTT"[Interval(0, 0).slice()] == ""
