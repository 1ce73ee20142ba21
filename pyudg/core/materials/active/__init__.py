# 文件: pyudg/core/materials/active/__init__.py
"""
主动应力模块

- ActiveFiberStress: 沿纤维方向的主动收缩应力
"""

from .active_fiber_stress import ActiveFiberStress

__all__ = ['ActiveFiberStress']
