# 文件: pyudg/core/materials/models/mixture.py
"""
弹性混合材料

把多个材料的响应相加 (例如被动肌肉基体 + 主动纤维应力)。
"""

from typing import Sequence
import numpy as np

from ...exceptions import MaterialParameterError
from ..interfaces import Material
from ..state import MaterialPoint


class ElasticMixture(Material):
    """
    弹性混合材料

    σ = Σ σ_i,  c = Σ c_i,  W = Σ W_i

    Args:
        materials: 组分材料列表 (至少一个)

    Example:
        mat = ElasticMixture([
            MuscleMaterial(...),
            ActiveFiberStress(smax=3e5, activation=0.2),
        ])
    """

    name = 'elastic mixture'

    def __init__(self, materials: Sequence[Material]):
        self.materials = list(materials)
        self.validate()

    def validate(self) -> None:
        if not self.materials:
            raise MaterialParameterError(f"{self.name}: at least one component material is required")
        for mat in self.materials:
            if not isinstance(mat, Material):
                raise MaterialParameterError(
                    f"{self.name}: component {mat!r} is not a Material"
                )

    def calc_stress(self, mp: MaterialPoint) -> np.ndarray:
        return sum(mat.stress(mp) for mat in self.materials)

    def calc_tangent(self, mp: MaterialPoint) -> np.ndarray:
        return sum(mat.tangent_tensor(mp) for mat in self.materials)

    def calc_strain_energy_density(self, mp: MaterialPoint) -> float:
        return sum(mat.strain_energy_density(mp) for mat in self.materials)

    def __repr__(self) -> str:
        return f"ElasticMixture({self.materials})"
