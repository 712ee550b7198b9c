"""
Optional dependency detection and the kernel compilation decorator.
"""
from functools import lru_cache
from importlib import import_module
from typing import Callable


# Classes --------------------------------------------------------------------------------------------------------------
class Resources:
    """
    Reports which optional accelerators can be imported.

    Examples:
        >>> RESOURCES.has_module('numpy')
        True
    """
    __slots__ = ()

    @staticmethod
    @lru_cache(maxsize=None)
    def has_module(module_name: str) -> bool:
        """Returns True if ``module_name`` imports cleanly; the answer is cached per name."""
        try: import_module(module_name)
        except ImportError: return False
        return True

    @property
    def compiled_kernels(self) -> bool:
        """Whether the alignment kernels are compiled with numba rather than run as plain Python."""
        return self.has_module('numba')


# Decorators -----------------------------------------------------------------------------------------------------------
def jit(signature_or_function=None, **options) -> Callable:
    """
    Compiles a kernel with ``numba.jit`` when numba is installed.

    Without numba the kernel is returned as-is and ``options`` are dropped, so the fill and traceback loops run as
    ordinary numpy code with identical results.

    Examples:
        >>> @jit(nopython=True, cache=True, nogil=True)
        ... def kernel(x): return x + 1
        >>> kernel(1)
        2
    """
    bare = callable(signature_or_function)
    if not RESOURCES.compiled_kernels:
        return signature_or_function if bare else (lambda func: func)
    from numba import jit as numba_jit
    if bare: return numba_jit(signature_or_function)
    return numba_jit(signature_or_function, **options)


# Constants ------------------------------------------------------------------------------------------------------------
RESOURCES = Resources()
