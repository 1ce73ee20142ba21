# 文件: pyudg/core/materials/models/__init__.py
"""
组合材料模型

- ElasticMixture: 多个材料响应相加
"""

from .mixture import ElasticMixture

__all__ = ['ElasticMixture']
