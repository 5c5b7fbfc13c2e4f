"""
Linear algebra routines of krylovspace.

Subpackages:
------------
- krylov : Arnoldi/Lanczos construction of Krylov subspace bases
- utils  : configuration read from the environment and dtype helpers

Example:
    >>> from krylovspace.algebra import krylov
    >>> ks = krylov.arnoldi(A, b, m=20)
"""

import importlib

__all__ = ["krylov", "utils"]

def __getattr__(name):
    if name in __all__:
        return importlib.import_module(f".{name}", __name__)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

def __dir__():
    return sorted(list(globals().keys()) + __all__)

# ---------------------------------------------------------------------
#! EOF
# ---------------------------------------------------------------------
