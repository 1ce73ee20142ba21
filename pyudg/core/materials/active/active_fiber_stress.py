# 文件: pyudg/core/materials/active/active_fiber_stress.py
"""
主动纤维应力

沿纤维方向的主动收缩应力 (耦合形式，不做偏量/体积分解):
    σ = α smax stl(λ) stv(v) / J  a⊗a,    λ = |F a0|,  a = F a0 / λ
    c = (λ sf' - 2 sf) / J  a⊗a⊗a⊗a

stl 为可选的长度-张力曲线，stv 为可选的力-速度曲线，缺省时均取 1。
准静态计算中纤维速度 v 恒为 0，stv 只提供常数缩放 stv(0)。
"""

from typing import Optional
import numpy as np

from ...tensor import dyad, dyad1
from ..functions import FiberDirection, current_fiber
from ..interfaces import Function1D, Material
from ..parameters import closed, greater_or_equal
from ..state import MaterialPoint


class ActiveFiberStress(Material):
    """
    主动纤维应力

    单独使用时没有刚度，通常与被动基体一起放入 ElasticMixture。

    Attributes:
        smax: 最大主动应力 (>= 0)
        activation: 激活水平 α (0 <= α <= 1)，可为材料点函数
        stl: 长度-张力曲线 (Function1D，可选)
        stv: 力-速度曲线 (Function1D，可选，按 v = 0 取值)
        fiber: 纤维方向场
    """

    name = 'active fiber stress'
    bounds = {
        'smax': greater_or_equal(0.0),
        'activation': closed(0.0, 1.0),
    }

    def __init__(
        self,
        smax: float,
        activation: float = 0.0,
        stl: Optional[Function1D] = None,
        fiber: Optional[FiberDirection] = None,
        stv: Optional[Function1D] = None
    ):
        self.smax = smax
        self.activation = activation
        self.stl = stl
        self.stv = stv
        self.fiber = fiber if fiber is not None else FiberDirection()
        self.validate()

    def _scale(self, lam: float, mp: MaterialPoint):
        """(sf, dsf/dλ)"""
        ac = self.param('activation', mp)
        smax = self.param('smax', mp)

        stl = self.stl.value(lam) if self.stl is not None else 1.0
        dstl = self.stl.derive(lam) if self.stl is not None else 0.0

        stv = self.stv.value(0.0) if self.stv is not None else 1.0

        return ac * smax * stl * stv, ac * smax * dstl * stv

    def calc_stress(self, mp: MaterialPoint) -> np.ndarray:
        a0 = self.fiber.unit_vector(mp)
        a, lam = current_fiber(mp.F, a0, self.name)

        sf, _ = self._scale(lam, mp)
        return dyad(a) * (sf / mp.J)

    def calc_tangent(self, mp: MaterialPoint) -> np.ndarray:
        a0 = self.fiber.unit_vector(mp)
        a, lam = current_fiber(mp.F, a0, self.name)

        A = dyad(a)
        sf, sf_l = self._scale(lam, mp)
        return dyad1(A, A) * ((lam * sf_l - 2.0 * sf) / mp.J)

    def __repr__(self) -> str:
        return f"ActiveFiberStress(smax={self.smax}, activation={self.activation})"
