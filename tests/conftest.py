# 文件: tests/conftest.py
"""
测试公共夹具
"""

import numpy as np
import pytest

from pyudg.core.element import NODE_LOCAL
from pyudg.core.materials import ArrudaBoyce, MaterialPoint
from pyudg.core.mesh import Mesh
from pyudg.core.node import Node


def make_box_mesh(nx=1, ny=1, nz=1, size=(1.0, 1.0, 1.0)):
    """
    结构化六面体网格

    Returns:
        mesh: Mesh
        connectivity: [(element_id, node_ids), ...]
    """
    hx, hy, hz = size[0] / nx, size[1] / ny, size[2] / nz

    def nid(i, j, k):
        return 1 + i + (nx + 1) * (j + (ny + 1) * k)

    nodes = []
    for k in range(nz + 1):
        for j in range(ny + 1):
            for i in range(nx + 1):
                nodes.append(Node(nid(i, j, k), i * hx, j * hy, k * hz))

    corners = ((NODE_LOCAL + 1) // 2).astype(int)
    connectivity = []
    eid = 1
    for k in range(nz):
        for j in range(ny):
            for i in range(nx):
                ids = [nid(i + a, j + b, k + c) for a, b, c in corners]
                connectivity.append((eid, ids))
                eid += 1
    return Mesh(nodes), connectivity


@pytest.fixture
def box_mesh():
    """网格构建函数"""
    return make_box_mesh


@pytest.fixture
def unit_cube():
    """单位立方体单元网格 (节点 1..8 按局部节点顺序)"""
    mesh, connectivity = make_box_mesh()
    return mesh, connectivity[0][1]


@pytest.fixture
def rubber():
    """近不可压 Arruda-Boyce 橡胶"""
    return ArrudaBoyce(mu=1.0, N=10.0, k=1000.0)


@pytest.fixture
def general_F():
    """一般的非对称变形梯度 (det > 0)"""
    return np.array([
        [1.15, 0.20, 0.05],
        [0.10, 0.95, 0.10],
        [0.00, 0.05, 0.92],
    ])


@pytest.fixture
def truesdell_check():
    """
    切线一致性检查函数

    对 F(ε) = (I + εD)F，中心差分 dσ/dε 应等于 c:D + Dσ + σD - tr(D)σ。
    返回所有 6 个对称扰动方向上的最大相对误差。
    """
    def check(material, F, r0=(0.0, 0.0, 0.0), h=1e-6):
        mp = MaterialPoint(F=F, r0=r0)
        sigma = material.stress(mp)
        c = material.tangent_tensor(mp)

        scale = max(np.max(np.abs(c)), np.max(np.abs(sigma)), 1e-12)
        worst = 0.0
        for k, l in ((0, 0), (1, 1), (2, 2), (1, 2), (0, 2), (0, 1)):
            D = np.zeros((3, 3))
            D[k, l] += 0.5
            D[l, k] += 0.5

            sp = material.stress(MaterialPoint(F=(np.eye(3) + h * D) @ F, r0=r0))
            sm = material.stress(MaterialPoint(F=(np.eye(3) - h * D) @ F, r0=r0))
            numeric = (sp - sm) / (2.0 * h)

            analytic = (
                np.einsum('ijkl,kl->ij', c, D)
                + D @ sigma + sigma @ D - np.trace(D) * sigma
            )
            worst = max(worst, np.max(np.abs(numeric - analytic)) / scale)
        return worst

    return check
