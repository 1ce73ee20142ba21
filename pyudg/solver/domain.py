# 文件: pyudg/solver/domain.py
"""
UDG 六面体单元域

同一材料、同一单元类型的单元集合，负责把单元内力和刚度装配进
调用方持有的全局残差向量和稀疏矩阵构建器。

装配分两步:
1. 计算: 逐个 (或在线程池中并发) 计算单元结果，每个单元只写自己的缓冲区
2. 累加: 在调用线程上按单元顺序把缓冲区累加进全局容器

任何单元失败都会中止整个装配，全局容器保持不变。
"""

import logging
import numbers
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..core.element_udg import UDGHexElement
from ..core.exceptions import RecoverableError
from ..core.mesh import Configuration
from ..core.tensor import stress_to_voigt
from .assembler import scatter_vector

logger = logging.getLogger(__name__)


class UDGHexDomain:
    """
    UDG 六面体单元域

    Attributes:
        mesh: 节点存储 (共享，不持有)
        material: 材料对象 (共享，不持有)
        config: 配置字典
            'hourglass'     - 沙漏系数 (>= 0)
            'configuration' - 计算构型 ('reference' / 'current' / 'previous')
            'workers'       - 并发线程数 (1 为串行)

    Example:
        domain = UDGHexDomain(mesh, material, config={'hourglass': 0.5})
        domain.add_element(1, [1, 2, 3, 4, 5, 6, 7, 8])

        R = np.zeros(mesh.num_equations)
        domain.residual(R)

        K = GlobalMatrix(mesh.num_equations)
        domain.stiffness_matrix(K)
    """

    DEFAULT_CONFIG = {
        'hourglass': 1.0,
        'configuration': 'current',
        'workers': 1,
    }

    def __init__(self, mesh, material, elements=None, config=None):
        """
        Args:
            mesh: Mesh 对象
            material: Material 对象
            elements: 可选的 [(element_id, node_ids), ...]
            config: 可选的配置字典，未给出的键取默认值
        """
        self.mesh = mesh
        self.material = material
        self.config = self._validate_config(config)
        self._elements = []
        self._ids = set()

        for element_id, node_ids in (elements or []):
            self.add_element(element_id, node_ids)

    @classmethod
    def _validate_config(cls, config):
        cfg = dict(cls.DEFAULT_CONFIG)
        if config:
            unknown = set(config) - set(cfg)
            if unknown:
                raise ValueError(f"未知的域配置项: {sorted(unknown)}")
            cfg.update(config)

        hourglass = cfg['hourglass']
        if (isinstance(hourglass, bool) or not isinstance(hourglass, numbers.Real)
                or not np.isfinite(hourglass) or hourglass < 0.0):
            raise ValueError(f"hourglass 必须为非负数，收到 {cfg['hourglass']}")
        cfg['hourglass'] = float(hourglass)

        cfg['configuration'] = Configuration(
            cfg['configuration'].value
            if isinstance(cfg['configuration'], Configuration)
            else str(cfg['configuration']).lower()
        )

        workers = cfg['workers']
        if (isinstance(workers, bool) or not isinstance(workers, numbers.Real)
                or int(workers) != workers or workers < 1):
            raise ValueError(f"workers 必须为正整数，收到 {workers}")
        cfg['workers'] = int(workers)
        return cfg

    # ------------------------------------------------------------------
    # 单元管理
    # ------------------------------------------------------------------

    def add_element(self, element_id, node_ids) -> UDGHexElement:
        """添加单元，节点 ID 必须存在于网格中"""
        if element_id in self._ids:
            raise ValueError(f"重复的单元 ID: {element_id}")
        for node_id in node_ids:
            self.mesh.index(node_id)
        elem = UDGHexElement(element_id, node_ids, self.material)
        self._elements.append(elem)
        self._ids.add(element_id)
        return elem

    @property
    def elements(self):
        return tuple(self._elements)

    def __len__(self):
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    # ------------------------------------------------------------------
    # 单元计算
    # ------------------------------------------------------------------

    def _map(self, routine, what):
        """对所有单元执行 routine，结果按单元顺序返回"""
        workers = self.config['workers']
        try:
            if workers > 1 and len(self._elements) > 1:
                with ThreadPoolExecutor(max_workers=workers) as pool:
                    return list(pool.map(routine, self._elements))
            return [routine(elem) for elem in self._elements]
        except RecoverableError as exc:
            logger.warning("%s aborted: %s", what, exc)
            raise

    def _evaluate(self, elem):
        res = elem.evaluate(
            self.mesh,
            hourglass=self.config['hourglass'],
            configuration=self.config['configuration']
        )
        return elem.get_dof_indices(self.mesh), res

    def residual(self, R):
        """
        装配残差 R[eq] -= f_int (R = F_ext - F_int)

        Args:
            R (np.ndarray): 全局向量 (num_equations,)
        """
        results = self._map(self._evaluate, "Residual assembly")
        for eqs, res in results:
            scatter_vector(R, res.force, eqs, sign=-1.0)
        logger.debug("Residual assembled for %d elements", len(results))
        return R

    def stiffness_matrix(self, K):
        """
        装配切线刚度

        Args:
            K (GlobalMatrix): 全局稀疏矩阵构建器
        """
        results = self._map(self._evaluate, "Stiffness assembly")
        for eqs, res in results:
            K.add(res.stiffness, eqs)
        logger.debug("Stiffness assembled for %d elements", len(results))
        return K

    def assemble(self, R, K):
        """一次单元计算同时装配残差和刚度"""
        results = self._map(self._evaluate, "Assembly")
        for eqs, res in results:
            scatter_vector(R, res.force, eqs, sign=-1.0)
            K.add(res.stiffness, eqs)
        logger.debug("Residual and stiffness assembled for %d elements", len(results))
        return R, K

    def update_stresses(self):
        """
        重新计算每个单元的平均柯西应力并缓存在单元材料点中

        Returns:
            np.ndarray: (n, 6) Voigt 应力，按单元顺序
        """
        configuration = self.config['configuration']
        stresses = self._map(
            lambda elem: elem.update_stress(self.mesh, configuration),
            "Stress update"
        )
        if not stresses:
            return np.zeros((0, 6))
        return np.array([stress_to_voigt(s) for s in stresses])

    def commit(self):
        """时间步收敛后提交所有单元材料点的历史和网格坐标"""
        for elem in self._elements:
            elem.commit(self.mesh)
        self.mesh.commit()
        logger.info("Committed %d elements", len(self._elements))

    def clone(self):
        """共享网格、材料和配置，单元列表独立"""
        return UDGHexDomain(
            self.mesh,
            self.material,
            elements=[(e.id, e.node_ids) for e in self._elements],
            config=dict(self.config)
        )

    def __repr__(self):
        return (
            f"UDGHexDomain(elements={len(self._elements)}, "
            f"material={self.material!r}, hourglass={self.config['hourglass']})"
        )
