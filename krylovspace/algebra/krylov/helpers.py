'''
file    : krylovspace/algebra/krylov/helpers.py
desc    : Coefficient and breakdown utilities, and the operator contract used
          by the Arnoldi/Lanczos iterations.

An operator A is anything with
    - `A.shape == (n, n)`,
    - `A @ v` returning a vector of length n,
and optionally an `ishermitian` / `is_hermitian` attribute (bool or callable)
that short-circuits the symmetry check. Dense numpy arrays, scipy.sparse
matrices and scipy.sparse.linalg.LinearOperator objects all qualify.
'''

from typing import Any, Callable, Tuple

import numpy as np
import scipy.sparse as sp
import scipy.sparse.linalg as spla
from numpy.typing import NDArray

from ..utils import is_complex_dtype
from .errors import KrylovError, KrylovErrorMsg

OpNormFunc = Callable[[Any, Any], float]

# ----------------------------------------------------------------------------------------
#! Coefficients
# ----------------------------------------------------------------------------------------

def project_coefficient(hdtype, value):
    '''
    Cast a Gram-Schmidt coefficient to the storage type of H.

    Returns the real part of `value` when `hdtype` is real and `value` is
    complex (Hermitian operators have real Lanczos coefficients), otherwise
    `value` itself.
    '''
    if np.iscomplexobj(value) and not is_complex_dtype(hdtype):
        return value.real
    return value

def breakdown_tolerance(A, tol: float, opnorm: OpNormFunc) -> float:
    r'''
    Absolute happy-breakdown threshold $tol \cdot \|A\|_\infty$.
    '''
    return tol * opnorm(A, np.inf)

# ----------------------------------------------------------------------------------------
#! Operator contract
# ----------------------------------------------------------------------------------------

def operator_norm(A, ord=np.inf) -> float:
    """
    Default operator norm.

    Dense arrays use numpy, sparse matrices use scipy. For a LinearOperator the
    1-norm is estimated with `onenormest`; the infinity norm is the 1-norm of
    the adjoint, so the operator must define `rmatvec`.

    Raises:
        KrylovError: if the norm of A cannot be computed.
    """
    if isinstance(A, np.ndarray):
        return float(np.linalg.norm(A, ord))
    if sp.issparse(A):
        return float(spla.norm(A, ord))
    if isinstance(A, spla.LinearOperator):
        if ord not in (1, np.inf):
            raise KrylovError(KrylovErrorMsg.INVALID_INPUT, f"Norm ord={ord} is not available for a LinearOperator")
        try:
            return float(spla.onenormest(A.H if ord == np.inf else A))
        except (TypeError, NotImplementedError) as e:
            # the infinity norm needs rmatvec, the 1-norm needs matvec
            raise KrylovError(KrylovErrorMsg.INVALID_INPUT,
                            f"Cannot estimate the norm of {type(A).__name__} ({e}), pass `opnorm`") from e
    raise KrylovError(KrylovErrorMsg.INVALID_INPUT, f"Cannot compute the norm of {type(A).__name__}, pass `opnorm`")

def is_hermitian(A, atol: float = 0.0) -> bool:
    """
    Check if A is symmetric/Hermitian, works for dense, sparse and flagged operators.

    Args:
        A:
            The operator.
        atol:
            Absolute tolerance of the comparison with the conjugate transpose.
    """
    for attr in ('ishermitian', 'is_hermitian'):
        flag = getattr(A, attr, None)
        if flag is not None:
            return bool(flag() if callable(flag) else flag)

    shape = getattr(A, 'shape', None)
    if shape is None or len(shape) != 2 or shape[0] != shape[1]:
        return False

    if sp.issparse(A):
        diff = (A - A.conj().T).tocoo()
        return diff.nnz == 0 or bool(np.all(np.abs(diff.data) <= atol))
    if isinstance(A, np.ndarray):
        return bool(np.allclose(A, A.conj().T, rtol=0.0, atol=atol))
    return False

def operator_shape(A) -> Tuple[int, int]:
    ''' Dimension query of the operator contract. '''
    shape = getattr(A, 'shape', None)
    if shape is None or len(shape) != 2:
        raise KrylovError(KrylovErrorMsg.INVALID_INPUT,
                        f"Operator must expose a 2D `shape`, got {type(A).__name__}")
    return int(shape[0]), int(shape[1])

def apply_operator(A, v: NDArray, out: NDArray) -> NDArray:
    '''
    Write `A @ v` into `out`. Dense arrays multiply in place.
    '''
    if isinstance(A, np.ndarray):
        return np.matmul(A, v, out=out)
    out[:] = np.ravel(A @ v)
    return out

# ----------------------------------------------------------------------------------------
#! EOF
# ----------------------------------------------------------------------------------------
