# 文件: tests/test_tensor.py
"""
张量运算核心单元测试
"""

import numpy as np
import pytest

from pyudg.core.tensor import (
    VOIGT_INDICES,
    ddot,
    dev,
    dyad,
    dyad1,
    dyad1s,
    dyad4s,
    dyads,
    from_voigt,
    identity4s,
    is_major_symmetric,
    is_minor_symmetric,
    odot,
    rotation_matrix,
    stress_to_voigt,
    sym,
    to_voigt,
    voigt_to_stress,
)


@pytest.fixture
def A():
    return np.array([
        [2.0, 0.3, -0.1],
        [0.3, 1.5, 0.4],
        [-0.1, 0.4, 0.7],
    ])


@pytest.fixture
def B():
    return np.array([
        [1.0, -0.2, 0.5],
        [-0.2, 0.8, 0.1],
        [0.5, 0.1, 1.2],
    ])


class TestSecondOrder:
    """测试二阶张量运算"""

    def test_dev_is_traceless(self, A):
        """偏量部分迹为零"""
        assert np.isclose(np.trace(dev(A)), 0.0)
        assert np.allclose(A - dev(A), np.trace(A) / 3.0 * np.eye(3))

    def test_sym(self):
        M = np.arange(9.0).reshape(3, 3)
        S = sym(M)
        assert np.allclose(S, S.T)
        assert np.allclose(S + 0.5 * (M - M.T), M)

    def test_vector_dyads(self):
        a = np.array([1.0, 2.0, 3.0])
        b = np.array([0.0, -1.0, 1.0])
        assert np.allclose(dyad(a), np.outer(a, a))
        assert np.allclose(dyads(a, b), dyads(b, a))
        assert np.allclose(dyads(a, b), np.outer(a, b) + np.outer(b, a))


class TestFourthOrder:
    """测试四阶张量运算"""

    def test_identity4s_maps_to_sym(self):
        """𝕀:M = sym(M)"""
        M = np.arange(9.0).reshape(3, 3)
        assert np.allclose(ddot(identity4s(), M), sym(M))

    def test_dyad1_contraction(self, A, B):
        """(A⊗B):M = (B:M) A"""
        M = np.array([[1.0, 2.0, 0.0], [2.0, -1.0, 0.5], [0.0, 0.5, 3.0]])
        assert np.allclose(ddot(dyad1(A, B), M), np.sum(B * M) * A)

    def test_dyad1s(self, A, B):
        assert np.allclose(dyad1s(A), dyad1(A, A))
        assert np.allclose(dyad1s(A, B), dyad1(A, B) + dyad1(B, A))
        assert is_major_symmetric(dyad1s(A, B))

    def test_dyad4s_symmetries(self, A, B):
        """A⊙B + B⊙A 同时具有主对称和次对称性"""
        C = dyad4s(A, B)
        assert is_major_symmetric(C)
        assert is_minor_symmetric(C)
        assert np.allclose(dyad4s(A, A), 2.0 * dyad4s(A))

    def test_odot_contraction(self, A, B):
        """(A⊙B):M = A sym(M) B^T 对对称 M 成立"""
        M = np.array([[1.0, 0.2, 0.0], [0.2, -1.0, 0.5], [0.0, 0.5, 3.0]])
        assert np.allclose(ddot(odot(A, B), M), A @ M @ B.T)

    def test_major_symmetry_detection(self, A, B):
        C = dyad1(A, B)
        assert not is_major_symmetric(C)
        assert not is_major_symmetric(to_voigt(C))


class TestVoigt:
    """测试 Voigt 存储"""

    def test_order(self):
        """Voigt 顺序为 [xx, yy, zz, yz, xz, xy]"""
        assert VOIGT_INDICES == ((0, 0), (1, 1), (2, 2), (1, 2), (0, 2), (0, 1))
        s = np.array([[1.0, 6.0, 5.0], [6.0, 2.0, 4.0], [5.0, 4.0, 3.0]])
        assert np.allclose(stress_to_voigt(s), [1, 2, 3, 4, 5, 6])
        assert np.allclose(voigt_to_stress(stress_to_voigt(s)), s)

    def test_fourth_order_storage(self, A, B):
        """Voigt 矩阵保留全部 21 个独立分量"""
        C = dyad4s(A, B) + dyad1s(A, B)
        V = to_voigt(C)
        assert V.shape == (6, 6)
        assert np.allclose(V, V.T)
        assert np.allclose(from_voigt(V), C)
        assert np.isclose(V[3, 5], C[1, 2, 0, 1])


class TestRotation:
    """测试旋转张量"""

    def test_orthogonal(self):
        Q = rotation_matrix([1.0, 2.0, -0.5], 0.7)
        assert np.allclose(Q @ Q.T, np.eye(3))
        assert np.isclose(np.linalg.det(Q), 1.0)

    def test_axis_is_fixed(self):
        n = np.array([0.0, 0.0, 1.0])
        Q = rotation_matrix(n, np.pi / 2)
        assert np.allclose(Q @ n, n)
        assert np.allclose(Q @ [1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
