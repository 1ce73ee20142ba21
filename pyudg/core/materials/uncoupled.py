# 文件: pyudg/core/materials/uncoupled.py
"""
解耦超弹性材料基类

应变能分解为等容部分与体积部分:
    W = W_dev(B̄) + U(J),    B̄ = J^(-2/3) B
    U(J) = 1/2 k (ln J)^2

所有等容 (偏量) 材料共用这一体积罚项，子类只需给出偏量响应。
"""

import numpy as np

from ..tensor import dyad1, dyad1s, identity4s
from .interfaces import Material
from .parameters import greater_or_equal
from .state import MaterialPoint


class UncoupledMaterial(Material):
    """
    解耦超弹性材料

    子类实现:
    - dev_stress(mp): 偏量柯西应力 (3,3)
    - dev_tangent(mp): 偏量空间弹性张量 (3,3,3,3)
    - dev_strain_energy_density(mp): 可选

    Attributes:
        k: 体积模量 (k >= 0)
    """

    name = 'uncoupled'
    bounds = {'k': greater_or_equal(0.0)}

    def __init__(self, k: float = 0.0):
        self.k = k

    # ------------------------------------------------------------------
    # 体积部分
    # ------------------------------------------------------------------

    def U(self, J: float, k: float) -> float:
        """体积应变能 U(J) = 1/2 k (ln J)^2"""
        return 0.5 * k * np.log(J) ** 2

    def UJ(self, J: float, k: float) -> float:
        """压力 p = dU/dJ"""
        return k * np.log(J) / J

    def UJJ(self, J: float, k: float) -> float:
        """d2U/dJ2"""
        return k * (1.0 - np.log(J)) / (J * J)

    # ------------------------------------------------------------------
    # 完整响应
    # ------------------------------------------------------------------

    def calc_stress(self, mp: MaterialPoint) -> np.ndarray:
        k = self.param('k', mp)
        p = self.UJ(mp.J, k)
        return self.dev_stress(mp) + p * np.eye(3)

    def calc_tangent(self, mp: MaterialPoint) -> np.ndarray:
        J = mp.J
        k = self.param('k', mp)
        p = self.UJ(J, k)

        I = np.eye(3)
        IxI = dyad1(I, I)
        I4 = identity4s()

        return self.dev_tangent(mp) + (IxI - 2.0 * I4) * p + IxI * (self.UJJ(J, k) * J)

    def calc_strain_energy_density(self, mp: MaterialPoint) -> float:
        k = self.param('k', mp)
        return self.dev_strain_energy_density(mp) + self.U(mp.J, k)

    # ------------------------------------------------------------------
    # 偏量部分
    # ------------------------------------------------------------------

    def dev_stress(self, mp: MaterialPoint) -> np.ndarray:
        raise NotImplementedError

    def dev_tangent(self, mp: MaterialPoint) -> np.ndarray:
        raise NotImplementedError

    def dev_strain_energy_density(self, mp: MaterialPoint) -> float:
        raise NotImplementedError(
            f"{self.name} does not define a strain energy density"
        )


def uncoupled_dev_tangent(J, devs, WCC, CW2CCC, WCCC, W2CC) -> np.ndarray:
    """
    等容部分的空间弹性张量 (推前后的通用组合式)

        c = -2/3 (dev σ ⊗ I + I ⊗ dev σ)
            + 4 WCC / (3J) (𝕀 - 1/3 I⊗I)
            + 4 / (9J) (C̄:W_CC:C̄) I⊗I
            + 4 / J W_CC
            - 4 / (3J) (W_CC:C̄ ⊗ I + I ⊗ W_CC:C̄)

    Args:
        J: det(F)
        devs: 偏量柯西应力
        WCC: C̄ : ∂W/∂C̄
        CW2CCC: C̄ : ∂²W/∂C̄∂C̄ : C̄
        WCCC: 推前后的 ∂²W/∂C̄∂C̄ : C̄ (3,3)
        W2CC: 推前后的 ∂²W/∂C̄∂C̄ (3,3,3,3)
    """
    I = np.eye(3)
    IxI = dyad1(I, I)
    I4 = identity4s()

    cw = IxI * (4.0 / (9.0 * J) * CW2CCC) + W2CC * (4.0 / J) - dyad1s(WCCC, I) * (4.0 / (3.0 * J))

    return dyad1s(devs, I) * (-2.0 / 3.0) + (I4 - IxI / 3.0) * (4.0 * WCC / (3.0 * J)) + cw
