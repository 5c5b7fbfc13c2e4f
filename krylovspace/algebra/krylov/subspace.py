r"""
Krylov Subspace Workspace

Reusable storage for the Arnoldi/Lanczos iterations. A single instance is
meant to be filled over and over again by `arnoldi_inplace` / `lanczos_inplace`,
so that the iterations never allocate unless a larger subspace is requested.

Storage:
    V : n x (maxiter + 1)          orthonormal basis vectors (columns)
    H : (maxiter + 1) x maxiter    Gram-Schmidt coefficients

and after an iteration of dimension m the views

    get_V() = V[:, :m + 1],    get_H() = H[:m + 1, :m]

satisfy the recurrence
    $$
    A v_j = \sum_{i=0}^{j+1} h_{ij} v_i, \quad j = 0, \ldots, m - 1.
    $$

For Hermitian operators the coefficients are real even if the basis is
complex; pass a real `hdtype` to store them as such.
"""

from typing import Optional
from enum import Enum, auto, unique

import numpy as np
from numpy.typing import NDArray, DTypeLike

from ..utils import default_dtype, is_complex_dtype, _log_message
from .errors import KrylovError, KrylovErrorMsg
from .helpers import operator_shape

# ----------------------------------------------------------------------------------------
#! State
# ----------------------------------------------------------------------------------------

@unique
class KrylovState(Enum):
    '''
    Fill state of a KrylovSubspace.
    '''
    UNFILLED    = auto() # allocated or resized, no valid content
    FILLED      = auto() # iteration reached the requested dimension
    TRUNCATED   = auto() # happy breakdown, m is smaller than requested

# ----------------------------------------------------------------------------------------
#! KrylovSubspace
# ----------------------------------------------------------------------------------------

class KrylovSubspace:
    r"""
    Krylov subspace workspace for vectors of length `n`.

    The dimension of the subspace, `m`, changes with every iteration call (and
    shrinks on happy breakdown) but never exceeds `maxiter`, the number of
    Arnoldi steps the storage can hold.

    Parameters:
    -----------
        n:
            Length of the basis vectors.
        maxiter:
            Storage capacity (maximum subspace dimension).
        dtype:
            Element type of the basis V. Defaults to the configured real floating type.
        hdtype:
            Element type of the coefficients H. Defaults to `dtype`. A real `hdtype`
            together with a complex `dtype` stores Lanczos coefficients as reals.

    Example:
        >>> ks = KrylovSubspace(100, 20)
        >>> arnoldi_inplace(ks, A, b, m=10)
        >>> V, H = ks.get_V(), ks.get_H()
    """

    def __init__(self,
                n       : int,
                maxiter : int                   = 30,
                dtype   : Optional[DTypeLike]   = None,
                hdtype  : Optional[DTypeLike]   = None):
        if n < 1:
            raise KrylovError(KrylovErrorMsg.INVALID_INPUT, f"Vector length must be >= 1, got {n}")
        if maxiter < 1:
            raise KrylovError(KrylovErrorMsg.INVALID_INPUT, f"maxiter must be >= 1, got {maxiter}")

        dtype           = np.dtype(dtype) if dtype is not None else default_dtype()
        hdtype          = np.dtype(hdtype) if hdtype is not None else dtype
        if is_complex_dtype(hdtype) and not is_complex_dtype(dtype):
            raise KrylovError(KrylovErrorMsg.TYPE_MISMATCH,
                            f"Complex coefficients ({hdtype}) require a complex basis, got {dtype}")

        self.m          = maxiter       # subspace dimension
        self.maxiter    = maxiter       # maximum allowed subspace size
        self.beta       = 0.0           # norm(b, 2)
        self.state      = KrylovState.UNFILLED
        self.V, self.H  = self._allocate(n, maxiter, dtype, hdtype)

    # ------------------------------------------------------------------------------------

    @staticmethod
    def _allocate(n: int, maxiter: int, dtype: np.dtype, hdtype: np.dtype):
        V = np.zeros((n, maxiter + 1), dtype=dtype)
        H = np.zeros((maxiter + 1, maxiter), dtype=hdtype)
        return V, H

    @property
    def n(self) -> int:
        return self.V.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self.V.dtype

    @property
    def hdtype(self) -> np.dtype:
        return self.H.dtype

    # ------------------------------------------------------------------------------------
    #! Views
    # ------------------------------------------------------------------------------------

    def get_V(self) -> NDArray:
        '''
        Extended basis, a view of shape n x (m + 1).

        The columns are orthonormal unless the last iteration ended in a happy
        breakdown (state TRUNCATED, or FILLED with H[m, m - 1] below the
        tolerance). The last column is then zero, not a unit vector, and only
        the first m columns form the basis.
        '''
        return self.V[:, :self.m + 1]

    def get_H(self) -> NDArray:
        ''' Extended coefficient matrix, a view of shape (m + 1) x m. '''
        return self.H[:self.m + 1, :self.m]

    # ------------------------------------------------------------------------------------

    def resize(self, maxiter: int) -> 'KrylovSubspace':
        """
        Reallocate the storage for a new `maxiter`, destroying its contents.

        This is an expensive operation and should be used scarcely; the
        iterations call it only when asked for more than `maxiter` steps.
        Afterwards `m == maxiter`, `beta == 0` and the subspace is UNFILLED.
        """
        if maxiter < 1:
            raise KrylovError(KrylovErrorMsg.INVALID_INPUT, f"maxiter must be >= 1, got {maxiter}")
        _log_message(f"Resizing Krylov subspace: maxiter {self.maxiter} -> {maxiter}", lvl=1)

        self.V, self.H  = self._allocate(self.n, maxiter, self.dtype, self.hdtype)
        self.m          = self.maxiter = maxiter
        self.beta       = 0.0
        self.state      = KrylovState.UNFILLED
        return self

    # ------------------------------------------------------------------------------------
    #! Iteration setup
    # ------------------------------------------------------------------------------------

    def _prepare(self, A, b, m: Optional[int], cache: Optional[NDArray]):
        """
        Common setup of `arnoldi_inplace` and `lanczos_inplace`.

        Validates the input before anything is touched, resizes the storage if
        `m > maxiter`, clears the active block of H and writes the normalised
        starting vector into V[:, 0].

        Returns:
            (b, m, cache): the starting vector as an array, the requested
            dimension (0 for a zero starting vector) and the scratch vector.

        Raises:
            KrylovError: on dimension or type mismatches and invalid `m`.
        """
        rows, cols  = operator_shape(A)
        b           = np.asarray(b)
        n           = self.n

        if b.ndim != 1:
            raise KrylovError(KrylovErrorMsg.DIM_MISMATCH, f"b must be a vector, got shape {b.shape}")
        if not (b.shape[0] == rows == cols == n):
            raise KrylovError(KrylovErrorMsg.DIM_MISMATCH,
                            f"Dimension mismatch: len(b)={b.shape[0]}, A.shape={(rows, cols)}, subspace n={n}")
        if cache is not None and np.shape(cache) != (n,):
            raise KrylovError(KrylovErrorMsg.DIM_MISMATCH, f"cache must have shape {(n,)}, got {np.shape(cache)}")

        for name, obj in (('b', b), ('A', A)):
            dt = getattr(obj, 'dtype', None)
            if dt is not None and not np.can_cast(dt, self.dtype, casting='same_kind'):
                raise KrylovError(KrylovErrorMsg.TYPE_MISMATCH, f"{name} of type {dt} does not fit a {self.dtype} basis")
        if cache is not None and not np.can_cast(self.dtype, cache.dtype, casting='same_kind'):
            raise KrylovError(KrylovErrorMsg.TYPE_MISMATCH, f"cache of type {cache.dtype} cannot hold a {self.dtype} basis")

        m = min(self.maxiter, n) if m is None else int(m)
        if m < 1:
            raise KrylovError(KrylovErrorMsg.INVALID_INPUT, f"Subspace dimension must be >= 1, got {m}")

        if m > self.maxiter:
            self.resize(m)
        else:
            self.m = m # might change if happy-breakdown occurs

        if cache is None:
            cache = np.empty(n, dtype=self.dtype)

        self.get_H().fill(0)
        self.beta = float(np.linalg.norm(b))
        if self.beta == 0.0:
            _log_message("Zero starting vector, the Krylov subspace is empty.", log='warning')
            self.V[:, 0]    = 0
            self.m          = 0
            return b, 0, cache

        self.V[:, 0] = b / self.beta
        return b, m, cache

    def _breakdown(self, j: int):
        ''' Truncate to j + 1 vectors after a happy breakdown at (0-based) step j, zeroing column j + 1. '''
        self.m          = j + 1
        self.V[:, j + 1] = 0

    def _finish(self, m: int) -> 'KrylovSubspace':
        self.state = KrylovState.FILLED if (m > 0 and self.m == m) else KrylovState.TRUNCATED
        return self

    # ------------------------------------------------------------------------------------

    def __repr__(self):
        return (f"KrylovSubspace(m={self.m}, maxiter={self.maxiter}, n={self.n}, "
                f"beta={self.beta:.6g}, state={self.state.name})")

    def __str__(self):
        return f'{self.m}-dimensional Krylov subspace, beta={self.beta:.6g}'

# ------------------------------------------------------------------------------------------------
#! EOF
# ------------------------------------------------------------------------------------------------
