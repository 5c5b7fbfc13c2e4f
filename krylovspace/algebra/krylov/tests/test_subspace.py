"""
Tests of the KrylovSubspace workspace: allocation, views and resizing.
"""

import numpy as np
import pytest

from krylovspace.algebra.krylov import (
    KrylovSubspace, KrylovState, KrylovError, KrylovErrorMsg, arnoldi_inplace
)

# ----------------------------------

class TestSubspaceCreation:

    def test_shapes_and_defaults(self):
        ks = KrylovSubspace(100, 20)
        assert ks.n == 100
        assert ks.m == 20
        assert ks.maxiter == 20
        assert ks.beta == 0.0
        assert ks.state is KrylovState.UNFILLED
        assert ks.V.shape == (100, 21)
        assert ks.H.shape == (21, 20)
        assert ks.get_V().shape == (100, 21)
        assert ks.get_H().shape == (21, 20)

    def test_default_maxiter(self):
        assert KrylovSubspace(5).maxiter == 30

    def test_dtypes(self):
        ks = KrylovSubspace(10, 4, dtype=np.complex128)
        assert ks.dtype == np.complex128
        assert ks.hdtype == np.complex128

        ks = KrylovSubspace(10, 4, dtype=np.complex128, hdtype=np.float64)
        assert ks.V.dtype == np.complex128
        assert ks.H.dtype == np.float64

    def test_complex_coefficients_need_complex_basis(self):
        with pytest.raises(KrylovError) as excinfo:
            KrylovSubspace(10, 4, dtype=np.float64, hdtype=np.complex128)
        assert excinfo.value.code is KrylovErrorMsg.TYPE_MISMATCH

    @pytest.mark.parametrize("n, maxiter", [(0, 5), (5, 0), (-1, 3)])
    def test_invalid_sizes(self, n, maxiter):
        with pytest.raises(KrylovError) as excinfo:
            KrylovSubspace(n, maxiter)
        assert excinfo.value.code is KrylovErrorMsg.INVALID_INPUT

# ----------------------------------

class TestSubspaceViews:

    def test_views_follow_dimension(self):
        ks      = KrylovSubspace(8, 6)
        ks.m    = 3
        assert ks.get_V().shape == (8, 4)
        assert ks.get_H().shape == (4, 3)

    def test_last_column_zero_after_breakdown(self):
        ks      = KrylovSubspace(4, 4)
        arnoldi_inplace(ks, np.diag([1.0, 1.0, 2.0, 2.0]), np.array([1.0, 0.0, 1.0, 0.0]), m=4)
        V       = ks.get_V()
        assert ks.state is KrylovState.TRUNCATED
        assert V.shape == (4, ks.m + 1)
        assert np.all(V[:, -1] == 0)
        np.testing.assert_allclose(V[:, :-1].T @ V[:, :-1], np.eye(ks.m), atol=1e-14)

    def test_views_share_storage(self):
        ks      = KrylovSubspace(8, 6)
        ks.get_H()[0, 0] = 5.0
        ks.get_V()[1, 0] = 2.0
        assert ks.H[0, 0] == 5.0
        assert ks.V[1, 0] == 2.0

# ----------------------------------

class TestSubspaceResize:

    def test_resize_is_destructive(self):
        n       = 10
        A       = np.triu(np.ones((n, n)))
        ks      = KrylovSubspace(n, 4)
        arnoldi_inplace(ks, A, np.arange(1.0, n + 1), m=4)
        V, H    = ks.V, ks.H
        assert ks.beta > 0

        out     = ks.resize(7)

        assert out is ks
        assert ks.V is not V and ks.H is not H
        assert ks.V.shape == (n, 8)
        assert ks.H.shape == (8, 7)
        assert ks.m == ks.maxiter == 7
        assert ks.beta == 0.0
        assert ks.state is KrylovState.UNFILLED
        assert np.all(ks.V == 0) and np.all(ks.H == 0)

    def test_resize_keeps_types(self):
        ks = KrylovSubspace(6, 3, dtype=np.complex128, hdtype=np.float64).resize(2)
        assert ks.dtype == np.complex128
        assert ks.hdtype == np.float64
        assert ks.n == 6

    def test_resize_rejects_zero(self):
        ks = KrylovSubspace(6, 3)
        with pytest.raises(KrylovError):
            ks.resize(0)
        assert ks.maxiter == 3

# ----------------------------------

class TestSubspaceRepr:

    def test_repr(self):
        ks = KrylovSubspace(12, 5)
        assert repr(ks) == "KrylovSubspace(m=5, maxiter=5, n=12, beta=0, state=UNFILLED)"
        assert str(ks) == "5-dimensional Krylov subspace, beta=0"

# ----------------------------------
#! EOF
# ----------------------------------
