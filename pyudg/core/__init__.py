# 文件: pyudg/core/__init__.py
"""
PyUDG 核心模块

导出材料、网格、单元等核心类
"""

# ==============================================================================
# 材料系统
# ==============================================================================
from .materials import (
    # 核心接口
    Material,
    StressResult,

    # 状态
    MaterialPoint,

    # 工厂
    MaterialFactory,

    # 材料
    UncoupledMaterial,
    ArrudaBoyce,
    MuscleMaterial,
    ActiveFiberStress,
    ElasticMixture,

    # 子模型
    LoadCurve,
    FiberDirection,
)

# ==============================================================================
# 单元
# ==============================================================================
from .element import BaseElement, hex8_shape_functions
from .element_udg import (
    UDGHexElement,
    UDGResult,
    avg_cart_derivs,
    avg_def_grad,
    hex_volume,
    hourglass_vectors,
)

# ==============================================================================
# 其他
# ==============================================================================
from .exceptions import (
    PyUDGError,
    MaterialParameterError,
    RecoverableError,
    DegenerateDeformationError,
    InvertedElementError,
)
from .mesh import Configuration, Mesh, FIXED
from .node import Node
from .quadrature import Quadrature


__all__ = [
    # === 材料系统 ===
    'Material',
    'StressResult',
    'MaterialPoint',
    'MaterialFactory',
    'UncoupledMaterial',
    'ArrudaBoyce',
    'MuscleMaterial',
    'ActiveFiberStress',
    'ElasticMixture',
    'LoadCurve',
    'FiberDirection',

    # === 单元 ===
    'BaseElement',
    'hex8_shape_functions',
    'UDGHexElement',
    'UDGResult',
    'avg_cart_derivs',
    'avg_def_grad',
    'hex_volume',
    'hourglass_vectors',

    # === 异常 ===
    'PyUDGError',
    'MaterialParameterError',
    'RecoverableError',
    'DegenerateDeformationError',
    'InvertedElementError',

    # === 其他 ===
    'Configuration',
    'Mesh',
    'FIXED',
    'Node',
    'Quadrature',
]
