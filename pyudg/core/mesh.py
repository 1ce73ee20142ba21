# 文件: pyudg/core/mesh.py
"""
网格 (节点存储)

管理三种构型下的节点坐标和全局方程编号:
- 参考构型 X: 初始坐标，不随计算改变
- 当前构型 x: 当前迭代的坐标 x = X + u
- 上一构型 x_prev: 上一个收敛时间步的坐标
"""

import logging
from enum import Enum
from typing import Iterable, List, Sequence, Union

import numpy as np

from .node import Node

logger = logging.getLogger(__name__)

# 约束自由度的方程号
FIXED = -1


class Configuration(Enum):
    """坐标构型"""
    REFERENCE = 'reference'
    CURRENT = 'current'
    PREVIOUS = 'previous'


class Mesh:
    """
    节点存储

    节点 ID 从 1 开始，可以不连续；内部按传入顺序保存。

    Example:
        mesh = Mesh([Node(1, 0, 0, 0), ...])
        mesh.fix(1, 0)
        mesh.number_equations()
        mesh.set_displacements(u)
        x = mesh.positions([1, 2, 3, 4, 5, 6, 7, 8])
    """

    def __init__(self, nodes: Iterable[Node]):
        self.nodes: List[Node] = list(nodes)
        self._index = {}
        for i, node in enumerate(self.nodes):
            if node.id in self._index:
                raise ValueError(f"重复的节点 ID: {node.id}")
            self._index[node.id] = i

        n = len(self.nodes)
        self.X = np.array([node.coords for node in self.nodes], dtype=float).reshape(n, 3)
        self.x = self.X.copy()
        self.x_prev = self.X.copy()

        self._fixed = np.zeros((n, 3), dtype=bool)
        self._eq = np.full((n, 3), FIXED, dtype=int)
        self.num_equations = 0
        self.number_equations()

    def __len__(self):
        return len(self.nodes)

    def __contains__(self, node_id):
        return node_id in self._index

    def index(self, node_id: int) -> int:
        """节点 ID -> 内部行号，未知 ID 抛出 KeyError"""
        try:
            return self._index[node_id]
        except KeyError:
            raise KeyError(f"未知的节点 ID: {node_id}") from None

    def _coords(self, configuration: Configuration) -> np.ndarray:
        configuration = Configuration(configuration)
        if configuration is Configuration.REFERENCE:
            return self.X
        if configuration is Configuration.PREVIOUS:
            return self.x_prev
        return self.x

    def position(self, node_id: int, configuration=Configuration.CURRENT) -> np.ndarray:
        """单个节点的坐标 (3,)"""
        return self._coords(configuration)[self.index(node_id)].copy()

    def positions(self, node_ids: Sequence[int], configuration=Configuration.CURRENT) -> np.ndarray:
        """一组节点的坐标 (n, 3)"""
        rows = [self.index(i) for i in node_ids]
        return self._coords(configuration)[rows].copy()

    @property
    def displacements(self) -> np.ndarray:
        """当前位移 u = x - X (n, 3)"""
        return self.x - self.X

    def set_displacements(self, u: np.ndarray) -> None:
        """
        设置节点位移 x = X + u

        Args:
            u: (n, 3) 或展平的 (3n,) 位移，按节点存储顺序
        """
        u = np.asarray(u, dtype=float).reshape(self.X.shape)
        self.x = self.X + u

    def update_from_equations(self, U: np.ndarray) -> None:
        """
        用全局方程解向量设置自由自由度的位移 (约束自由度位移不变)

        Args:
            U: (num_equations,) 位移向量
        """
        U = np.asarray(U, dtype=float)
        if U.shape != (self.num_equations,):
            raise ValueError(f"期望长度 {self.num_equations}，收到 {U.shape}")
        u = self.displacements
        free = self._eq != FIXED
        u[free] = U[self._eq[free]]
        self.x = self.X + u

    def commit(self) -> None:
        """时间步收敛后保存当前坐标"""
        self.x_prev = self.x.copy()

    # ------------------------------------------------------------------
    # 自由度编号
    # ------------------------------------------------------------------

    def fix(self, node_id: int, dof: Union[int, Sequence[int]]) -> None:
        """约束节点自由度 (0/1/2 对应 x/y/z)，需要重新调用 number_equations()"""
        dofs = [dof] if np.isscalar(dof) else list(dof)
        for d in dofs:
            if d not in (0, 1, 2):
                raise ValueError(f"无效的自由度: {d}")
            self._fixed[self.index(node_id), d] = True

    def number_equations(self) -> int:
        """为所有自由自由度按节点顺序分配连续的方程号，返回方程总数"""
        self._eq[:] = FIXED
        free = ~self._fixed
        n_free = int(np.count_nonzero(free))
        # 行优先顺序: 节点 0 的 x,y,z, 节点 1 的 x,y,z, ...
        self._eq[free] = np.arange(n_free)
        self.num_equations = n_free
        logger.debug("Numbered %d equations for %d nodes", n_free, len(self.nodes))
        return n_free

    def equation(self, node_id: int, dof: int) -> int:
        """节点自由度对应的方程号，约束时返回 FIXED"""
        return int(self._eq[self.index(node_id), dof])

    def equations(self, node_ids: Sequence[int]) -> np.ndarray:
        """单元方程映射 (3 * len(node_ids),)，顺序为 [n1x, n1y, n1z, n2x, ...]"""
        rows = [self.index(i) for i in node_ids]
        return self._eq[rows].reshape(-1).copy()

    def __repr__(self):
        return f"Mesh(nodes={len(self.nodes)}, equations={self.num_equations})"
