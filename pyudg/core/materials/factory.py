# 文件: pyudg/core/materials/factory.py
"""
材料工厂模块

提供统一的材料创建入口。
"""

import logging
from typing import Any, Dict, Optional

from ..exceptions import MaterialParameterError
from .active.active_fiber_stress import ActiveFiberStress
from .functions import FiberDirection, LoadCurve
from .hyperelastic.arruda_boyce import ArrudaBoyce
from .hyperelastic.muscle import MuscleMaterial
from .interfaces import Material
from .models.mixture import ElasticMixture

logger = logging.getLogger(__name__)


class MaterialFactory:
    """
    材料工厂

    根据材料属性字典创建对应的材料对象。
    提供便捷的工厂方法简化常见材料的创建。

    Example:
        # 从属性字典创建
        mat = MaterialFactory.create('Rubber', {
            'type': 'Arruda-Boyce',
            'mu': 1.0,
            'N': 10.0,
            'k': 1000.0
        })

        mat = MaterialFactory.create('Muscle', {
            'type': 'muscle material',
            'g1': 500, 'g2': 500, 'g3': 0,
            'p1': 0.05, 'p2': 6.6, 'Lofl': 1.07,
            'smax': 3e5, 'lam_max': 1.4, 'activation': 0.0,
            'k': 1e5, 'fiber': [1, 0, 0]
        })

        # 使用便捷方法
        mat = MaterialFactory.create_arruda_boyce(mu=1.0, N=10.0, k=1000.0)
    """

    # 类型名 (小写) -> (类, 必需参数, 可选参数)
    _REGISTRY = {
        'arruda-boyce': (ArrudaBoyce, ('mu', 'N'), ('k',)),
        'muscle material': (
            MuscleMaterial,
            ('g1', 'g2', 'g3', 'p1', 'p2', 'Lofl', 'smax', 'lam_max'),
            ('activation', 'k', 'fiber'),
        ),
        'active fiber stress': (ActiveFiberStress, ('smax',), ('activation', 'stl', 'stv', 'fiber')),
    }

    @staticmethod
    def create(name: str, props: Dict[str, Any]) -> Material:
        """
        根据属性字典创建材料

        Args:
            name: 材料名称 (用于错误消息)
            props: 材料属性字典，结构:
                {
                    'type': str,          # 'Arruda-Boyce' / 'muscle material' /
                                          # 'active fiber stress' / 'mixture'
                    ...                   # 对应材料的参数
                    'fiber': [x, y, z],   # 纤维方向 (可选)
                    'stl': [(x, y), ...], # 长度-张力曲线 (可选)
                    'stv': [(x, y), ...], # 力-速度曲线 (可选)
                    'components': [...]   # 混合材料的组分属性字典
                }

        Returns:
            Material: 材料对象

        Raises:
            MaterialParameterError: 类型未知、缺少必需参数、参数未知或越界
        """
        props = dict(props)
        mat_type = props.pop('type', None)
        if mat_type is None:
            raise MaterialParameterError(f"Material '{name}' has no 'type'")

        key = str(mat_type).strip().lower()

        if key in ('mixture', 'elastic mixture', 'solid mixture'):
            components = props.pop('components', None)
            if not components:
                raise MaterialParameterError(f"Material '{name}' mixture has no 'components'")
            if props:
                raise MaterialParameterError(
                    f"Material '{name}' has unknown parameters: {sorted(props)}"
                )
            materials = [
                MaterialFactory.create(f"{name}[{i}]", comp) for i, comp in enumerate(components)
            ]
            logger.debug("Created mixture material '%s' with %d components", name, len(materials))
            return ElasticMixture(materials)

        if key not in MaterialFactory._REGISTRY:
            raise MaterialParameterError(f"Material '{name}' has unknown type '{mat_type}'")

        cls, required, optional = MaterialFactory._REGISTRY[key]

        missing = [p for p in required if p not in props]
        if missing:
            raise MaterialParameterError(
                f"Material '{name}' missing required parameters: {missing}"
            )

        unknown = [p for p in props if p not in required and p not in optional]
        if unknown:
            raise MaterialParameterError(
                f"Material '{name}' has unknown parameters: {sorted(unknown)}"
            )

        if 'fiber' in props:
            props['fiber'] = MaterialFactory._fiber(props['fiber'])
        for curve in ('stl', 'stv'):
            if props.get(curve) is not None and not isinstance(props[curve], LoadCurve):
                props[curve] = LoadCurve(props[curve])

        mat = cls(**props)
        logger.debug("Created material '%s': %r", name, mat)
        return mat

    @staticmethod
    def _fiber(value) -> Optional[FiberDirection]:
        if value is None or isinstance(value, FiberDirection):
            return value
        if callable(value):
            return FiberDirection(field=value)
        return FiberDirection(vector=value)

    @staticmethod
    def create_arruda_boyce(mu: float, N: float, k: float = 0.0) -> ArrudaBoyce:
        """
        创建 Arruda-Boyce 材料

        Args:
            mu: 剪切模量参数 (> 0)
            N: 链段数 (> 0)
            k: 体积模量 (>= 0)
        """
        return ArrudaBoyce(mu=mu, N=N, k=k)

    @staticmethod
    def create_muscle(fiber=None, **params) -> MuscleMaterial:
        """
        创建骨骼肌材料

        Args:
            fiber: 纤维方向 (向量、FiberDirection 或 r0 的函数)
            **params: g1, g2, g3, p1, p2, Lofl, smax, lam_max, activation, k
        """
        return MuscleMaterial(fiber=MaterialFactory._fiber(fiber), **params)

    @staticmethod
    def create_active_fiber(
        smax: float,
        activation: float = 0.0,
        stl=None,
        fiber=None,
        stv=None
    ) -> ActiveFiberStress:
        """
        创建主动纤维应力

        Args:
            smax: 最大主动应力
            activation: 激活水平 (0~1)
            stl: 长度-张力曲线 (LoadCurve 或点列表)
            fiber: 纤维方向
            stv: 力-速度曲线 (LoadCurve 或点列表)
        """
        if stl is not None and not isinstance(stl, LoadCurve):
            stl = LoadCurve(stl)
        if stv is not None and not isinstance(stv, LoadCurve):
            stv = LoadCurve(stv)
        return ActiveFiberStress(
            smax=smax,
            activation=activation,
            stl=stl,
            fiber=MaterialFactory._fiber(fiber),
            stv=stv
        )
