"""
Krylov Subspace Module

Orthonormal bases of Krylov subspaces K_m(A, b), the building block of
iterative eigensolvers, linear solvers and matrix-function approximations.

Available routines:
    - arnoldi / arnoldi_inplace : Arnoldi with incomplete orthogonalization (IOP),
                                  dispatching to Lanczos for Hermitian operators
    - lanczos / lanczos_inplace : three-term Lanczos recurrence

Workspace:
    - KrylovSubspace : reusable storage of the basis V and the coefficients H
    - KrylovState    : UNFILLED / FILLED / TRUNCATED

Utilities:
    - project_coefficient, breakdown_tolerance, operator_norm, is_hermitian

Errors:
    - KrylovError, KrylovErrorMsg

This module uses lazy imports to minimize startup overhead.
"""

from typing import TYPE_CHECKING
import importlib

# -----------------------------------------------------------------------------------------------
# Lazy Import Configuration
# -----------------------------------------------------------------------------------------------

_LAZY_IMPORTS = {
    # Workspace
    'KrylovSubspace'                : ('.subspace', 'KrylovSubspace'),
    'KrylovState'                   : ('.subspace', 'KrylovState'),
    # Iterations
    'arnoldi'                       : ('.arnoldi_iteration', 'arnoldi'),
    'arnoldi_inplace'               : ('.arnoldi_iteration', 'arnoldi_inplace'),
    'lanczos'                       : ('.lanczos_iteration', 'lanczos'),
    'lanczos_inplace'               : ('.lanczos_iteration', 'lanczos_inplace'),
    # Utilities
    'project_coefficient'           : ('.helpers', 'project_coefficient'),
    'breakdown_tolerance'           : ('.helpers', 'breakdown_tolerance'),
    'operator_norm'                 : ('.helpers', 'operator_norm'),
    'is_hermitian'                  : ('.helpers', 'is_hermitian'),
    # Errors
    'KrylovError'                   : ('.errors', 'KrylovError'),
    'KrylovErrorMsg'                : ('.errors', 'KrylovErrorMsg'),
}

_LAZY_CACHE = {}

# For type checking only
if TYPE_CHECKING:
    from .subspace          import KrylovSubspace, KrylovState
    from .arnoldi_iteration import arnoldi, arnoldi_inplace
    from .lanczos_iteration import lanczos, lanczos_inplace
    from .helpers           import project_coefficient, breakdown_tolerance, operator_norm, is_hermitian
    from .errors            import KrylovError, KrylovErrorMsg

# -----------------------------------------------------------------------------------------------

def __getattr__(name: str):
    """
    Module-level __getattr__ for lazy imports.
    """
    if name in _LAZY_CACHE:
        return _LAZY_CACHE[name]

    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module_path, attr_name  = _LAZY_IMPORTS[name]
    module                  = importlib.import_module(module_path, package=__name__)
    result                  = getattr(module, attr_name)
    _LAZY_CACHE[name]       = result
    return result

def __dir__():
    return sorted(list(globals().keys()) + __all__)

__all__ = list(_LAZY_IMPORTS.keys())

# ------------------------------------------------------------------------------------------------
#! EOF
# ------------------------------------------------------------------------------------------------
