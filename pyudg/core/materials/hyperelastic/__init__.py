# 文件: pyudg/core/materials/hyperelastic/__init__.py
"""
超弹性模型模块

提供解耦 (偏量 + 体积) 超弹性材料:
- ArrudaBoyce: 各向同性橡胶弹性
- MuscleMaterial: 横观各向同性骨骼肌 (被动 + 主动纤维)
"""

from .arruda_boyce import ArrudaBoyce
from .muscle import MuscleMaterial

__all__ = ['ArrudaBoyce', 'MuscleMaterial']
