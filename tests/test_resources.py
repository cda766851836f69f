import pytest

from bacalign.align import pairwise
from bacalign.align.pairwise import AlignmentSizeWarning, align_global, align_local, compile_kernels
from bacalign.utils.resources import RESOURCES, BacalignWarning, DependencyWarning, jit, require


class TestResources:
    def test_package(self):
        assert RESOURCES.package == 'bacalign'

    def test_has_module(self):
        assert RESOURCES.has_module('numpy')
        assert not RESOURCES.has_module('bacalign_no_such_module')

    def test_default_cell_limit(self, monkeypatch, reset_resources):
        monkeypatch.delenv('BACALIGN_CELL_WARNING_LIMIT', raising=False)
        assert reset_resources.cell_warning_limit == 100_000_000

    def test_cell_limit_from_environment(self, monkeypatch, reset_resources):
        monkeypatch.setenv('BACALIGN_CELL_WARNING_LIMIT', '4')
        assert reset_resources.cell_warning_limit == 4
        with pytest.warns(AlignmentSizeWarning, match="25 cells"):
            align_global("ACGT", "ACGT")
        with pytest.warns(AlignmentSizeWarning):
            align_local("ACGT", "ACGT")

    def test_invalid_cell_limit(self, monkeypatch, reset_resources):
        monkeypatch.setenv('BACALIGN_CELL_WARNING_LIMIT', 'lots')
        with pytest.warns(BacalignWarning, match="non-integer"):
            assert reset_resources.cell_warning_limit == 100_000_000


class TestDecorators:
    def test_require_missing(self):
        @require('bacalign_no_such_module')
        def needs_missing():
            return True

        with pytest.warns(DependencyWarning, match="bacalign_no_such_module"):
            assert needs_missing() is None

    def test_require_present(self):
        @require('numpy')
        def needs_numpy():
            return True

        assert needs_numpy() is True

    def test_compile_kernels_without_numba(self, monkeypatch):
        monkeypatch.setattr(RESOURCES, 'has_module', lambda name: False)
        with pytest.warns(DependencyWarning, match="numba"):
            assert compile_kernels() is None

    @pytest.mark.skipif(not RESOURCES.has_module('numba'), reason="numba not installed")
    def test_compile_kernels(self):
        assert compile_kernels() is True

    def test_jit_bare_and_configured(self):
        @jit
        def double(x): return x * 2

        @jit(nopython=True, cache=False)
        def triple(x): return x * 3

        assert double(2) == 4
        assert triple(2) == 6

    def test_kernels_are_module_level(self):
        for name in ('_global_cell', '_global_fill_kernel', '_global_score_kernel', '_local_fill_kernel', '_traceback_kernel'):
            assert callable(getattr(pairwise, name))
