# 文件: pyudg/core/materials/hyperelastic/arruda_boyce.py
"""
Arruda-Boyce 解耦超弹性模型

Kaliske & Rothert, Eng Computations 14(2) (1997) 216-232

逆 Langevin 统计级数截断到五项:
    W_dev = mu * Σ_{i=0..4} a_i (Ī1^(i+1) - 3^(i+1)) / N^i
    a = {1/2, 1/10, 11/350, 19/1750, 519/134750}
"""

import numpy as np

from ...tensor import dev, dyad1
from ..parameters import greater, greater_or_equal
from ..state import MaterialPoint
from ..uncoupled import UncoupledMaterial, uncoupled_dev_tangent

# 级数系数
AB_COEFFS = (0.5, 0.1, 11.0 / 350.0, 19.0 / 1750.0, 519.0 / 134750.0)


class ArrudaBoyce(UncoupledMaterial):
    """
    Arruda-Boyce 橡胶弹性 (8 链模型)

    Attributes:
        mu: 初始剪切模量参数 (mu > 0)
        N: 链段数 (N > 0)，决定锁定伸长 √N
        k: 体积模量 (k >= 0)

    Example:
        mat = ArrudaBoyce(mu=1.0, N=10.0, k=1000.0)
        sigma = mat.stress(MaterialPoint(F=F))
    """

    name = 'Arruda-Boyce'
    bounds = {
        'mu': greater(0.0),
        'N': greater(0.0),
        'k': greater_or_equal(0.0),
    }

    def __init__(self, mu: float, N: float, k: float = 0.0):
        super().__init__(k=k)
        self.mu = mu
        self.N = N
        self.validate()

    def _W1(self, I1: float, mu: float, N: float) -> float:
        """dW/dĪ1"""
        a = AB_COEFFS
        f = I1 / N
        return mu * (a[0] + (2.0 * a[1] + (3.0 * a[2] + (4.0 * a[3] + 5.0 * a[4] * f) * f) * f) * f)

    def _W11(self, I1: float, mu: float, N: float) -> float:
        """d2W/dĪ1^2"""
        a = AB_COEFFS
        f = I1 / N
        return 2.0 * mu * (a[1] + (3.0 * a[2] + (6.0 * a[3] + 10.0 * a[4] * f) * f) * f) / N

    def dev_stress(self, mp: MaterialPoint) -> np.ndarray:
        """σ_dev = 2/J dev(W1 B̄)"""
        mu = self.param('mu', mp)
        N = self.param('N', mp)

        B = mp.dev_left_cauchy_green()
        I1 = np.trace(B)

        T = B * self._W1(I1, mu, N)
        return dev(T) * (2.0 / mp.J)

    def dev_tangent(self, mp: MaterialPoint) -> np.ndarray:
        mu = self.param('mu', mp)
        N = self.param('N', mp)
        J = mp.J

        B = mp.dev_left_cauchy_green()
        I1 = np.trace(B)

        W1 = self._W1(I1, mu, N)
        W11 = self._W11(I1, mu, N)

        devs = self.dev_stress(mp)

        # C̄:dW/dC̄ 与 C̄:d2W/dC̄dC̄:C̄
        WCC = W1 * I1
        CW2CCC = W11 * I1 * I1

        # 推前后的 d2W/dC̄dC̄:C̄ 与 d2W/dC̄dC̄
        WCCC = B * (W11 * I1)
        W2CC = dyad1(B, B) * W11

        return uncoupled_dev_tangent(J, devs, WCC, CW2CCC, WCCC, W2CC)

    def dev_strain_energy_density(self, mp: MaterialPoint) -> float:
        mu = self.param('mu', mp)
        N = self.param('N', mp)

        B = mp.dev_left_cauchy_green()
        I1 = np.trace(B)

        a = AB_COEFFS
        sed = a[0] * (I1 - 3.0)
        I1i, ti, Ni = I1, 3.0, 1.0
        for i in range(1, 5):
            Ni *= N
            ti *= 3.0
            I1i *= I1
            sed += a[i] * (I1i - ti) / Ni
        return mu * sed

    def __repr__(self) -> str:
        return f"ArrudaBoyce(mu={self.mu}, N={self.N}, k={self.k})"
