# krylovspace/__init__.py

"""
krylovspace - orthonormal bases of Krylov subspaces.

Arnoldi (with incomplete orthogonalization) and Lanczos iterations filling a
reusable workspace with the basis V and the projected Hessenberg/tridiagonal
matrix H of an operator A. Higher level methods (eigensolvers, linear solvers,
exponential integrators) consume V and H.

Modules:
--------
- algebra   : Krylov iterations, workspace, configuration
- common    : logging

Examples:
---------
>>> import numpy as np
>>> from krylovspace import arnoldi
>>> ks = arnoldi(np.diag([1.0, 2.0, 3.0]), np.ones(3), m=3)
>>> V, H = ks.get_V(), ks.get_H()

Version : 0.1.0
License : MIT
"""

import importlib

# Package metadata
__version__         = "0.1.0"
__license__         = "MIT"

# Subpackages (not imported by default)
__all__             = ["algebra", "common",
                       "KrylovSubspace", "KrylovState", "KrylovError",
                       "arnoldi", "arnoldi_inplace", "lanczos", "lanczos_inplace"]

_SUBPACKAGES        = ("algebra", "common")

def get_module_description(module_name):
    """
    Get the description of a specific module in the krylovspace package.

    Parameters
    ----------
    module_name : str
        The name of the module.

    Returns
    -------
    str
        The description of the module.
    """
    descriptions = {
        "algebra"   : "Arnoldi/Lanczos iterations, Krylov subspace workspace and configuration.",
        "common"    : "Logging with verbosity control and optional file output.",
    }
    return descriptions.get(module_name, "Module not found.")

def list_available_modules():
    """
    List all available subpackages of krylovspace.
    """
    return list(_SUBPACKAGES)

# Lazy import subpackages and the Krylov API on attribute access (PEP 562)
def __getattr__(name):  # pragma: no cover - simple indirection
    if name in _SUBPACKAGES:
        return importlib.import_module(f".{name}", __name__)
    if name in __all__:
        return getattr(importlib.import_module(".algebra.krylov", __name__), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

def __dir__():  # pragma: no cover
    return sorted(list(globals().keys()) + __all__)

# ---------------------------------------------------------------------
#! EOF
# ---------------------------------------------------------------------
