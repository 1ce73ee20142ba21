# 文件: pyudg/__init__.py
"""
PyUDG: 均匀变形梯度六面体单元与软组织超弹性材料库
"""

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .logging_config import setup_logging
from .solver import GlobalMatrix, UDGHexDomain, scatter_vector

__version__ = '0.1.0'

__all__ = list(_core_all) + [
    'GlobalMatrix',
    'UDGHexDomain',
    'scatter_vector',
    'setup_logging',
]
