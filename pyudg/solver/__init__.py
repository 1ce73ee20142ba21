# 文件: pyudg/solver/__init__.py
"""
PyUDG 装配模块

- assembler.py: 全局残差累加与稀疏矩阵构建器
- domain.py: UDG 六面体单元域
"""

from .assembler import GlobalMatrix, scatter_vector
from .domain import UDGHexDomain

__all__ = ['GlobalMatrix', 'scatter_vector', 'UDGHexDomain']
