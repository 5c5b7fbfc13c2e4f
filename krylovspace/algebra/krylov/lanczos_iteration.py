r"""
Lanczos Iteration

Three-term recurrence building an orthonormal basis of the Krylov subspace
K_m(A, b) of a symmetric/Hermitian operator A.

Mathematical Background:
    Starting from $v_0 = b / \|b\|$,
    $$
    \beta_j v_{j+1} = A v_j - \alpha_j v_j - \beta_{j-1} v_{j-1},
    \qquad \alpha_j = \langle v_j, A v_j \rangle,
    $$
    so that
    $$
    A V_m = V_{m+1} T_m,
    $$
    with T_m the (m+1) x m tridiagonal matrix of the $\alpha_j$ (diagonal) and
    $\beta_j$ (off-diagonals). Symmetry makes orthogonality against the
    vectors before $v_{j-1}$ automatic, so a step costs O(n) instead of the
    O(jn) of full Arnoldi.

Happy breakdown occurs whenever $\beta_j < tol \cdot \|A\|_\infty$; the
subspace dimension is then smaller than requested.
"""

from typing import Optional

import numpy as np
from numpy.typing import NDArray, DTypeLike

from ..utils import DEFAULT_TOL, DEFAULT_MAXITER, result_dtype, _log_message
from .helpers import OpNormFunc, operator_norm, project_coefficient, breakdown_tolerance, apply_operator
from .subspace import KrylovSubspace
from .errors import KrylovError, KrylovErrorMsg

# ----------------------------------------------------------------------------------------
#! Lanczos
# ----------------------------------------------------------------------------------------

def lanczos_inplace(ks          : KrylovSubspace,
                    A,
                    b           : NDArray,
                    *,
                    m           : Optional[int]     = None,
                    tol         : float             = DEFAULT_TOL,
                    opnorm      : OpNormFunc        = operator_norm,
                    cache       : Optional[NDArray] = None) -> KrylovSubspace:
    """
    Non-allocating Lanczos iteration for Hermitian `A`, filling `ks` in place.

    Parameters:
    -----------
        ks:
            Workspace to fill. Resized (destructively) only if `m > ks.maxiter`.
        A:
            Hermitian operator of shape (n, n). Symmetry is assumed, not checked.
        b:
            Starting vector of length n.
        m:
            Requested subspace dimension, default min(ks.maxiter, n).
        tol:
            Breakdown tolerance factor, scaled by opnorm(A, inf).
        opnorm:
            Operator norm function called as opnorm(A, np.inf).
        cache:
            Scratch vector of length n, written during the call. Do not share
            one cache between iterations running at the same time.

    Returns:
        ks, with `ks.m` the dimension actually reached.
    """
    # the norm may fail for the operator, nothing is written before it
    vtol        = breakdown_tolerance(A, tol, opnorm)
    b, m, cache = ks._prepare(A, b, m, cache)
    if m == 0:
        return ks._finish(m)

    V, H    = ks.V, ks.H

    for j in range(m):
        vj      = V[:, j]
        apply_operator(A, vj, cache)
        alpha   = project_coefficient(ks.hdtype, np.vdot(vj, cache))
        H[j, j] = alpha
        cache  -= alpha * vj
        if j > 0:
            cache -= H[j - 1, j] * V[:, j - 1]
        beta        = np.linalg.norm(cache)
        H[j + 1, j] = beta
        if j < m - 1:
            H[j, j + 1] = beta
        if beta < vtol or beta == 0.0: # happy-breakdown
            _log_message(f"Lanczos happy breakdown at step {j + 1}/{m}, beta={beta:.3e}", lvl=1)
            ks._breakdown(j)
            break
        V[:, j + 1] = cache / beta

    return ks._finish(m)

# ----------------------------------------------------------------------------------------

def lanczos(A,
            b           : NDArray,
            *,
            m           : Optional[int]         = None,
            tol         : float                 = DEFAULT_TOL,
            opnorm      : OpNormFunc            = operator_norm,
            cache       : Optional[NDArray]     = None,
            hdtype      : Optional[DTypeLike]   = None) -> KrylovSubspace:
    """
    Allocating version of `lanczos_inplace`.

    The coefficients are stored as reals by default (`hdtype` is the real
    counterpart of the basis type), since they are real for Hermitian A.
    """
    b       = np.asarray(b)
    if b.ndim != 1:
        raise KrylovError(KrylovErrorMsg.DIM_MISMATCH, f"b must be a vector, got shape {b.shape}")
    m       = min(DEFAULT_MAXITER, b.shape[0]) if m is None else m
    dtype   = result_dtype(A, b)
    hdtype  = np.finfo(dtype).dtype if hdtype is None else hdtype
    ks      = KrylovSubspace(b.shape[0], max(m, 1), dtype=dtype, hdtype=hdtype)
    return lanczos_inplace(ks, A, b, m=m, tol=tol, opnorm=opnorm, cache=cache)

# ----------------------------------------------------------------------------------------
#! EOF
# ----------------------------------------------------------------------------------------
