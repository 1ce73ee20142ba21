# 文件: pyudg/solver/assembler.py
import logging

import numpy as np
from scipy.sparse import coo_matrix

from ..core.mesh import FIXED

logger = logging.getLogger(__name__)


def scatter_vector(R, fe, eqs, sign=1.0):
    """
    将单元向量累加到全局向量 R[eq] += sign * fe，跳过约束自由度

    Args:
        R (np.ndarray): 全局向量 (调用方持有)
        fe (np.ndarray): 单元向量 (24,)
        eqs (np.ndarray): 单元方程映射 (24,)
        sign (float): 累加符号，残差装配时为 -1
    """
    eqs = np.asarray(eqs)
    mask = eqs != FIXED
    # 退化单元 (重复节点) 的方程号可能重复，np.add.at 逐项累加
    np.add.at(R, eqs[mask], sign * np.asarray(fe)[mask])


class GlobalMatrix:
    """
    全局稀疏刚度矩阵构建器
    使用 COO (Coordinate) 格式高效构建稀疏矩阵

    Example:
        K = GlobalMatrix(mesh.num_equations)
        domain.stiffness_matrix(K)
        K_csr = K.to_csr()
        K.clear()  # 下一次牛顿迭代
    """

    def __init__(self, num_equations, capacity=0):
        """
        Args:
            num_equations (int): 全局方程数 (矩阵阶数)
            capacity (int): 预分配的三元组数量
        """
        self.num_equations = int(num_equations)
        capacity = max(int(capacity), 576)

        # 预分配 NumPy 数组 (Pre-allocation)
        # 容量不足时按倍数扩展，避免每个单元都重新分配
        self._rows = np.zeros(capacity, dtype=np.int32)
        self._cols = np.zeros(capacity, dtype=np.int32)
        self._data = np.zeros(capacity, dtype=np.float64)
        self._ptr = 0  # 指针，记录当前填到了哪个位置

    @property
    def nnz_entries(self):
        """已累积的三元组数量 (含重复项)"""
        return self._ptr

    def _reserve(self, n):
        need = self._ptr + n
        if need <= len(self._data):
            return
        size = max(need, 2 * len(self._data))
        self._rows = np.resize(self._rows, size)
        self._cols = np.resize(self._cols, size)
        self._data = np.resize(self._data, size)

    def add(self, ke, eqs):
        """
        添加单元矩阵

        Args:
            ke (np.ndarray): 单元刚度矩阵 (24, 24)
            eqs (np.ndarray): 单元方程映射 (24,)，FIXED 行列被跳过
        """
        eqs = np.asarray(eqs)
        # 构建索引网格
        # indexing='ij' 确保顺序与 ke.flatten() 匹配
        r_grid, c_grid = np.meshgrid(eqs, eqs, indexing='ij')
        mask = (r_grid != FIXED) & (c_grid != FIXED)
        n = int(np.count_nonzero(mask))

        self._reserve(n)
        end_ptr = self._ptr + n
        self._rows[self._ptr:end_ptr] = r_grid[mask]
        self._cols[self._ptr:end_ptr] = c_grid[mask]
        self._data[self._ptr:end_ptr] = np.asarray(ke)[mask]
        self._ptr = end_ptr

    def to_csr(self):
        """
        创建稀疏矩阵

        Returns:
            K_csr (scipy.sparse.csr_matrix): 压缩稀疏行格式的全局刚度矩阵
        """
        n = self.num_equations
        # coo_matrix 会自动处理重复索引的累加 (Assembly by summation)
        K_coo = coo_matrix(
            (self._data[:self._ptr], (self._rows[:self._ptr], self._cols[:self._ptr])),
            shape=(n, n)
        )
        # 转换为 CSR (Compressed Sparse Row) 格式，更适合线性方程组求解
        return K_coo.tocsr()

    def clear(self):
        """清空三元组，保留已分配的容量"""
        self._ptr = 0

    def __repr__(self):
        return f"GlobalMatrix(n={self.num_equations}, entries={self._ptr})"
