"""
Resource and optional dependency management.
"""
from functools import cached_property, lru_cache, wraps
from importlib import import_module
from pathlib import Path
from typing import Callable
from warnings import warn
import os


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class BacalignWarning(Warning): pass
class DependencyWarning(BacalignWarning): pass


# Classes --------------------------------------------------------------------------------------------------------------
class Resources:
    """
    Manages package-wide settings and optional dependencies.

    Attributes:
        package (str): The package name.
    """
    _CELL_WARNING_ENV = 'BACALIGN_CELL_WARNING_LIMIT'
    _CELL_WARNING_DEFAULT = 100_000_000

    def __init__(self) -> None:
        self.package = Path(__file__).parent.parent.name

    @cached_property
    def cell_warning_limit(self) -> int:
        """
        Number of DP cells above which aligners warn before allocating.
        Read once from the ``BACALIGN_CELL_WARNING_LIMIT`` environment variable.
        """
        if (value := os.environ.get(self._CELL_WARNING_ENV)) is None: return self._CELL_WARNING_DEFAULT
        try: return int(value)
        except ValueError:
            warn(f'Ignoring non-integer {self._CELL_WARNING_ENV}={value!r}', BacalignWarning)
            return self._CELL_WARNING_DEFAULT

    @staticmethod
    @lru_cache(maxsize=None)
    def has_module(module_name: str) -> bool:
        """Checks if a python package is installed."""
        try:
            import_module(module_name)
            return True
        except ImportError: return False

    def reset(self):
        """Drops cached settings so they are re-read on next access."""
        self.__dict__.pop('cell_warning_limit', None)


# Decorators -----------------------------------------------------------------------------------------------------------
def require(*packages: str) -> Callable:
    """
    A decorator to check for required optional packages before executing a function.

    Args:
        *packages: Variable number of package names (strings) that are required.

    Returns:
        A decorator that wraps the function. If any required packages are missing,
        it issues a DependencyWarning and returns None. Otherwise, it executes
        the original function.

    Examples:
        >>> @require('numba')
        ... def compiled_only(): ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            if missing_deps := [dep for dep in packages if not RESOURCES.has_module(dep)]:
                warn(
                    f"Function '{func.__name__}' requires the following missing dependencies: "
                    f"{', '.join(missing_deps)}. Skipping execution.",
                    DependencyWarning
                )
                return None
            return func(*args, **kwargs)
        return wrapper
    return decorator


def jit(signature_or_function=None, **options) -> Callable:
    """
    Conditional Numba JIT decorator.

    If 'numba' is installed (checked via RESOURCES), this applies `numba.jit`
    with the provided arguments. Otherwise, it returns the original function unmodified,
    ignoring any compilation options.

    Examples:
        >>> @jit  # Bare usage
        ... def func(): ...

        >>> @jit(nopython=True, cache=True)  # Configured usage
        ... def func(): ...
    """
    # 1. Fallback: Numba not installed
    if not RESOURCES.has_module('numba'):
        if callable(signature_or_function): return signature_or_function  # Handle bare @jit
        def passthrough(func: Callable) -> Callable: return func  # Handle @jit(...)
        return passthrough
    # 2. Apply Numba
    from numba import jit as real_jit
    if callable(signature_or_function): return real_jit(signature_or_function)  # Handle bare @jit
    return real_jit(signature_or_function, **options)  # Handle @jit(...)


# Constants ------------------------------------------------------------------------------------------------------------
RESOURCES = Resources()
