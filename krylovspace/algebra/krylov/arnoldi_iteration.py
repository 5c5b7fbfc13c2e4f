r"""
Arnoldi Iteration (with incomplete orthogonalization)

Builds an orthonormal basis of the Krylov subspace
    $$
    K_m(A, b) = span\{b, Ab, A^2 b, \ldots, A^{m-1} b\}
    $$
for a general square operator A. The n x (m + 1) basis `ks.get_V()` and the
(m + 1) x m upper Hessenberg matrix `ks.get_H()` are related by
    $$
    v_0 = b / \|b\|, \quad A v_j = \sum_{i=0}^{j+1} h_{ij} v_i \quad (j = 0, \ldots, m - 1).
    $$

`iop` sets the length of the incomplete orthogonalization procedure [1]:
every new vector is orthogonalized (modified Gram-Schmidt) against the last
`iop` basis vectors only. The default 0 means full Arnoldi. For
symmetric/Hermitian A the iteration dispatches to the Lanczos recurrence and
`iop` is ignored.

Happy breakdown occurs whenever $\|w_j\| < tol \cdot \|A\|_\infty$; the
dimension of the subspace is then smaller than requested.

References:
    [1] Koskela, A. (2015). Approximating the matrix exponential of an
        advection-diffusion operator using the incomplete orthogonalization
        method. In Numerical Mathematics and Advanced Applications - ENUMATH
        2013 (pp. 345-353). Springer, Cham.
"""

from typing import Optional

import numpy as np
from numpy.typing import NDArray, DTypeLike

from ..utils import DEFAULT_TOL, DEFAULT_MAXITER, result_dtype, _log_message
from .errors import KrylovError, KrylovErrorMsg
from .helpers import (OpNormFunc, operator_norm, project_coefficient, breakdown_tolerance,
                    apply_operator, is_hermitian)
from .subspace import KrylovSubspace
from .lanczos_iteration import lanczos_inplace

# ----------------------------------------------------------------------------------------
#! Arnoldi
# ----------------------------------------------------------------------------------------

def arnoldi_inplace(ks          : KrylovSubspace,
                    A,
                    b           : NDArray,
                    *,
                    m           : Optional[int]     = None,
                    tol         : float             = DEFAULT_TOL,
                    opnorm      : OpNormFunc        = operator_norm,
                    iop         : int               = 0,
                    cache       : Optional[NDArray] = None,
                    hermitian   : Optional[bool]    = None) -> KrylovSubspace:
    """
    Non-allocating Arnoldi iteration, filling `ks` in place.

    Parameters:
    -----------
        ks:
            Workspace to fill. Resized (destructively) only if `m > ks.maxiter`.
        A:
            Square operator of shape (n, n), see `helpers` for the contract.
        b:
            Starting vector of length n.
        m:
            Requested subspace dimension, default min(ks.maxiter, n).
        tol:
            Breakdown tolerance factor, scaled by opnorm(A, inf).
        opnorm:
            Operator norm function called as opnorm(A, np.inf).
        iop:
            Orthogonalization window, 0 for full orthogonalization.
        cache:
            Scratch vector of length n, written during the call. Do not share
            one cache between iterations running at the same time.
        hermitian:
            Skip the symmetry check: True forces the Lanczos recurrence,
            False forces Arnoldi. None (default) runs `is_hermitian(A)`.

    Returns:
        ks, with `ks.m` the dimension actually reached.
    """
    if hermitian is None:
        hermitian = is_hermitian(A)
    if hermitian:
        _log_message("Hermitian operator, using the Lanczos recurrence.", lvl=1)
        return lanczos_inplace(ks, A, b, m=m, tol=tol, opnorm=opnorm, cache=cache)

    if iop < 0:
        raise KrylovError(KrylovErrorMsg.INVALID_INPUT, f"iop must be >= 0, got {iop}")

    vtol        = breakdown_tolerance(A, tol, opnorm)
    b, m, cache = ks._prepare(A, b, m, cache)
    if m == 0:
        return ks._finish(m)

    V, H    = ks.V, ks.H
    if iop == 0:
        iop = m

    for j in range(m):
        apply_operator(A, V[:, j], cache)
        for i in range(max(0, j - iop + 1), j + 1):
            vi      = V[:, i]
            alpha   = project_coefficient(ks.hdtype, np.vdot(vi, cache))
            H[i, j] = alpha
            cache  -= alpha * vi
        beta        = np.linalg.norm(cache)
        H[j + 1, j] = beta
        if beta < vtol or beta == 0.0: # happy-breakdown
            _log_message(f"Arnoldi happy breakdown at step {j + 1}/{m}, beta={beta:.3e}", lvl=1)
            ks._breakdown(j)
            break
        V[:, j + 1] = cache / beta

    return ks._finish(m)

# ----------------------------------------------------------------------------------------

def arnoldi(A,
            b           : NDArray,
            *,
            m           : Optional[int]         = None,
            tol         : float                 = DEFAULT_TOL,
            opnorm      : OpNormFunc            = operator_norm,
            iop         : int                   = 0,
            cache       : Optional[NDArray]     = None,
            hermitian   : Optional[bool]        = None,
            hdtype      : Optional[DTypeLike]   = None) -> KrylovSubspace:
    """
    Performs `m` Arnoldi iterations to obtain the Krylov subspace K_m(A, b).

    Allocates a KrylovSubspace of capacity `m` (default min(DEFAULT_MAXITER, n))
    whose basis type is the common type of A and b, then runs `arnoldi_inplace`.
    Callers repeating the computation should keep the workspace and call
    `arnoldi_inplace` instead.

    Example:
        >>> A  = np.diag([2.0, 3.0])
        >>> ks = arnoldi(A, np.ones(2), m=2)
        >>> ks.m, ks.get_H().shape
        (2, (3, 2))
    """
    b       = np.asarray(b)
    if b.ndim != 1:
        raise KrylovError(KrylovErrorMsg.DIM_MISMATCH, f"b must be a vector, got shape {b.shape}")
    m       = min(DEFAULT_MAXITER, b.shape[0]) if m is None else m
    ks      = KrylovSubspace(b.shape[0], max(m, 1), dtype=result_dtype(A, b), hdtype=hdtype)
    return arnoldi_inplace(ks, A, b, m=m, tol=tol, opnorm=opnorm, iop=iop, cache=cache, hermitian=hermitian)

# ----------------------------------------------------------------------------------------
#! EOF
# ----------------------------------------------------------------------------------------
