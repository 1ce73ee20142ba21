# 文件: pyudg/core/tensor.py
"""
张量运算核心

约定:
- 二阶张量: numpy 数组 (3,3)
- 四阶张量: 内部使用 (3,3,3,3) 数组，对外以 Voigt 形式 (6,6) 返回
- Voigt 顺序: [xx, yy, zz, yz, xz, xy]，与应力向量保持一致

所有函数都是纯函数，不修改输入。
"""

import numpy as np

# Voigt 分量与张量下标的对应关系
VOIGT_INDICES = ((0, 0), (1, 1), (2, 2), (1, 2), (0, 2), (0, 1))
_VI = np.array([i for i, _ in VOIGT_INDICES])
_VJ = np.array([j for _, j in VOIGT_INDICES])


# =============================================================================
# 二阶张量
# =============================================================================

def identity() -> np.ndarray:
    """二阶单位张量 I"""
    return np.eye(3)


def trace(A: np.ndarray) -> float:
    return float(np.trace(A))


def dev(A: np.ndarray) -> np.ndarray:
    """偏量部分 dev(A) = A - tr(A)/3 I"""
    return A - np.trace(A) / 3.0 * np.eye(3)


def sym(A: np.ndarray) -> np.ndarray:
    """对称部分 (A + A^T)/2"""
    return 0.5 * (A + A.T)


def dyad(a: np.ndarray) -> np.ndarray:
    """向量并矢 a⊗a"""
    return np.outer(a, a)


def dyads(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """对称向量并矢 a⊗b + b⊗a"""
    return np.outer(a, b) + np.outer(b, a)


# =============================================================================
# 四阶张量 (完整下标形式)
# =============================================================================

def dyad1(A: np.ndarray, B: np.ndarray) -> np.ndarray:
    """(A⊗B)_ijkl = A_ij B_kl"""
    return np.einsum('ij,kl->ijkl', A, B)


def dyad1s(A: np.ndarray, B: np.ndarray = None) -> np.ndarray:
    """
    对称并矢积

    dyad1s(A)    = A⊗A
    dyad1s(A, B) = A⊗B + B⊗A
    """
    if B is None:
        return dyad1(A, A)
    return dyad1(A, B) + dyad1(B, A)


def odot(A: np.ndarray, B: np.ndarray) -> np.ndarray:
    """(A⊙B)_ijkl = 1/2 (A_ik B_jl + A_il B_jk)"""
    return 0.5 * (np.einsum('ik,jl->ijkl', A, B) + np.einsum('il,jk->ijkl', A, B))


def dyad4s(A: np.ndarray, B: np.ndarray = None) -> np.ndarray:
    """
    对称 ⊙ 积

    dyad4s(A)    = A⊙A        (dyad4s(I) 为对称四阶单位张量)
    dyad4s(A, B) = A⊙B + B⊙A  (注意 dyad4s(A, A) = 2 dyad4s(A))
    """
    if B is None:
        return odot(A, A)
    return odot(A, B) + odot(B, A)


def ddot(C: np.ndarray, A: np.ndarray) -> np.ndarray:
    """双点积 (C:A)_ij = C_ijkl A_kl"""
    return np.einsum('ijkl,kl->ij', C, A)


def identity4s() -> np.ndarray:
    """对称四阶单位张量 𝕀"""
    return dyad4s(np.eye(3))


# =============================================================================
# Voigt 转换
# =============================================================================

def to_voigt(C: np.ndarray) -> np.ndarray:
    """
    四阶张量 (3,3,3,3) -> Voigt 矩阵 (6,6)

    要求 C 具有次对称性 (C_ijkl = C_jikl = C_ijlk)，否则信息会丢失。
    """
    return C[_VI[:, None], _VJ[:, None], _VI[None, :], _VJ[None, :]].copy()


def from_voigt(V: np.ndarray) -> np.ndarray:
    """Voigt 矩阵 (6,6) -> 具有次对称性的四阶张量 (3,3,3,3)"""
    C = np.zeros((3, 3, 3, 3))
    for I, (i, j) in enumerate(VOIGT_INDICES):
        for K, (k, l) in enumerate(VOIGT_INDICES):
            value = V[I, K]
            C[i, j, k, l] = value
            C[j, i, k, l] = value
            C[i, j, l, k] = value
            C[j, i, l, k] = value
    return C


def stress_to_voigt(s: np.ndarray) -> np.ndarray:
    """3x3 应力张量 -> Voigt 向量 (剪切分量不乘 2)"""
    return np.array([s[0, 0], s[1, 1], s[2, 2], s[1, 2], s[0, 2], s[0, 1]])


def voigt_to_stress(v: np.ndarray) -> np.ndarray:
    """Voigt 应力向量 -> 3x3 对称张量"""
    return np.array([
        [v[0], v[5], v[4]],
        [v[5], v[1], v[3]],
        [v[4], v[3], v[2]]
    ])


# =============================================================================
# 对称性检查 (测试使用)
# =============================================================================

def is_major_symmetric(C: np.ndarray, rtol: float = 1e-10, atol: float = 1e-12) -> bool:
    """C_ijkl == C_klij；也接受 Voigt 矩阵 (6,6)"""
    if C.shape == (6, 6):
        return np.allclose(C, C.T, rtol=rtol, atol=atol)
    return np.allclose(C, np.transpose(C, (2, 3, 0, 1)), rtol=rtol, atol=atol)


def is_minor_symmetric(C: np.ndarray, rtol: float = 1e-10, atol: float = 1e-12) -> bool:
    """C_ijkl == C_jikl == C_ijlk"""
    left = np.allclose(C, np.transpose(C, (1, 0, 2, 3)), rtol=rtol, atol=atol)
    right = np.allclose(C, np.transpose(C, (0, 1, 3, 2)), rtol=rtol, atol=atol)
    return left and right


def rotation_matrix(axis, angle: float) -> np.ndarray:
    """绕单位轴 axis 旋转 angle (弧度) 的正交张量 (Rodrigues 公式)"""
    n = np.asarray(axis, dtype=float)
    n = n / np.linalg.norm(n)
    K = np.array([
        [0.0, -n[2], n[1]],
        [n[2], 0.0, -n[0]],
        [-n[1], n[0], 0.0]
    ])
    return np.eye(3) + np.sin(angle) * K + (1.0 - np.cos(angle)) * (K @ K)
