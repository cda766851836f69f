"""
Package utilities: resources, optional dependencies and JIT compilation.
"""
from bacalign.utils.resources import RESOURCES, BacalignWarning, DependencyWarning, jit, require
