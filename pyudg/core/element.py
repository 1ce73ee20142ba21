# 文件: pyudg/core/element.py
import numpy as np
from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from .quadrature import Quadrature

# 8 节点六面体的局部节点坐标 (r, s, t)
NODE_LOCAL = np.array([
    [-1, -1, -1], [1, -1, -1], [1, 1, -1], [-1, 1, -1],
    [-1, -1, 1],  [1, -1, 1],  [1, 1, 1],  [-1, 1, 1]
], dtype=float)


def hex8_shape_functions(xi, eta, zeta):
    """
    计算局部坐标 (xi, eta, zeta) 处的三线性插值形函数。

    Returns:
        N: 形函数向量 (8,)
        dN_dxi: 局部导数矩阵 (3, 8)
    """
    # 预计算位置变量
    rp, rm = 1 + xi, 1 - xi
    sp, sm = 1 + eta, 1 - eta
    tp, tm = 1 + zeta, 1 - zeta

    # 1. 计算 8 个形函数的值
    N = 0.125 * np.array([
        rm * sm * tm, rp * sm * tm, rp * sp * tm, rm * sp * tm,
        rm * sm * tp, rp * sm * tp, rp * sp * tp, rm * sp * tp
    ])

    # 2. 计算形函数对局部坐标 (xi, eta, zeta) 的偏导数
    dN_dxi = np.zeros((3, 8))

    # dN/dxi
    dN_dxi[0, :] = 0.125 * np.array([
        -(sm * tm), (sm * tm), (sp * tm), -(sp * tm),
        -(sm * tp), (sm * tp), (sp * tp), -(sp * tp)
    ])
    # dN/deta
    dN_dxi[1, :] = 0.125 * np.array([
        -(rm * tm), -(rp * tm), (rp * tm), (rm * tm),
        -(rm * tp), -(rp * tp), (rp * tp), (rm * tp)
    ])
    # dN/dzeta
    dN_dxi[2, :] = 0.125 * np.array([
        -(rm * sm), -(rp * sm), -(rp * sp), -(rm * sp),
        (rm * sm),  (rp * sm),  (rp * sp),  (rm * sp)
    ])

    return N, dN_dxi


_GAUSS_CACHE = {}


def hex8_gauss_derivatives(order=2) -> List[Tuple[np.ndarray, float]]:
    """
    预计算 order×order×order 高斯点上的局部导数和组合权重。

    Returns:
        [(dN_dxi (3, 8), w), ...]，结果按阶数缓存，调用方不得修改
    """
    if order not in _GAUSS_CACHE:
        points, weights = Quadrature.get_points_3d(order)
        table = []
        for (xi, eta, zeta), w in zip(points, weights):
            _, dN = hex8_shape_functions(xi, eta, zeta)
            dN.setflags(write=False)
            table.append((dN, float(w)))
        _GAUSS_CACHE[order] = table
    return _GAUSS_CACHE[order]


class BaseElement(ABC):
    """
    有限元单元抽象基类。

    单元只保存节点 ID 和共享的材料引用，坐标从 Mesh 中按构型读取，
    方程号由 Mesh 的编号结果给出。
    """
    num_nodes = 8
    dofs_per_node = 3

    def __init__(self, element_id, node_ids: Sequence[int], material):
        """
        初始化单元基础属性。

        Args:
            element_id (int): 单元唯一标识 ID
            node_ids (sequence): 节点 ID 列表 (按局部节点顺序)
            material (Material): 材料对象 (多个单元共享)
        """
        node_ids = tuple(int(n) for n in node_ids)
        if len(node_ids) != self.num_nodes:
            raise ValueError(
                f"单元 {element_id} 需要 {self.num_nodes} 个节点，收到 {len(node_ids)}"
            )
        self.id = element_id
        self.node_ids = node_ids
        self.material = material

    def get_dof_indices(self, mesh) -> np.ndarray:
        """全局方程号列表 (24,)，约束自由度为 FIXED"""
        return mesh.equations(self.node_ids)

    @abstractmethod
    def evaluate(self, mesh, **kwargs):
        """抽象方法：计算单元内力和切线刚度。"""
        pass

    def __repr__(self):
        return f"{type(self).__name__}({self.id}, {list(self.node_ids)})"
