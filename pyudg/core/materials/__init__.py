# 文件: pyudg/core/materials/__init__.py
"""
PyUDG 材料系统

分层架构:
- interfaces.py: 抽象基类和协议
- state.py: 材料点状态
- parameters.py: 参数范围与校验
- functions.py: 子模型 (长度-张力曲线、纤维方向场)
- uncoupled.py: 解耦 (偏量 + 体积) 超弹性基类
- hyperelastic/: 超弹性模型 (Arruda-Boyce、骨骼肌)
- active/: 主动应力模型
- models/: 组合材料模型
- factory.py: 材料工厂

使用方法:
    from pyudg.core.materials import MaterialFactory, MaterialPoint

    # 创建材料
    mat = MaterialFactory.create_arruda_boyce(mu=1.0, N=10.0, k=1000.0)

    # 在材料点上计算
    mp = MaterialPoint(F=F)
    sigma = mat.stress(mp)     # 柯西应力 (3,3)
    c = mat.tangent(mp)        # 空间弹性张量 Voigt (6,6)

扩展指南:
    添加新的解耦超弹性材料:
        1. 在 hyperelastic/ 目录添加新文件
        2. 继承 UncoupledMaterial，声明 bounds
        3. 实现 dev_stress()、dev_tangent() (可选 dev_strain_energy_density())

    添加新的耦合材料:
        1. 继承 Material
        2. 实现 calc_stress() 和 calc_tangent()
"""

# 核心接口
from .interfaces import (
    Material,
    StressResult,
    Function1D,
    FiberField,
)

# 状态
from .state import MaterialPoint

# 参数
from .parameters import ParamRange, greater, greater_or_equal, closed

# 子模型
from .functions import LoadCurve, FiberDirection

# 解耦材料基类
from .uncoupled import UncoupledMaterial

# 超弹性组件
from .hyperelastic import ArrudaBoyce, MuscleMaterial

# 主动应力组件
from .active import ActiveFiberStress

# 组合模型
from .models import ElasticMixture

# 工厂
from .factory import MaterialFactory


__all__ = [
    # 核心接口
    'Material',
    'StressResult',
    'Function1D',
    'FiberField',

    # 状态
    'MaterialPoint',

    # 参数
    'ParamRange',
    'greater',
    'greater_or_equal',
    'closed',

    # 子模型
    'LoadCurve',
    'FiberDirection',

    # 材料
    'UncoupledMaterial',
    'ArrudaBoyce',
    'MuscleMaterial',
    'ActiveFiberStress',
    'ElasticMixture',

    # 工厂
    'MaterialFactory',
]
