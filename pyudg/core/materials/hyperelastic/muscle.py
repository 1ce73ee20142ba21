# 文件: pyudg/core/materials/hyperelastic/muscle.py
"""
骨骼肌材料 (横观各向同性，被动 + 主动纤维)

Blemker, Pinsky & Delp, J Biomech 38 (2005) 657-665

应变能由三部分组成:
    W(Ī1, Ī4, Ī5, α) = F1(B1(Ī4, Ī5)) + F2(B2(Ī1, Ī4, Ī5)) + F3(λ̃(Ī4), α)

- F1 = g1 * b1^2       沿纤维剪切 (b1^2 = Ī5/Ī4^2 - 1)
- F2 = g2 * b2^2       横截面剪切 (b2 = acosh(ω))
- F3                   纤维: 被动指数/线性曲线 + 主动钟形曲线，另加
                       9/16 g3 (ln Ī4)^2 修正零应力问题

其中 ω = 1/2 (Ī1 Ī4 - Ī5) / √Ī4，λ̃ = √Ī4 为等容纤维伸长比。
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from ...exceptions import MaterialParameterError
from ...tensor import dev, dyad, dyad1, dyad1s, dyad4s, dyads
from ..functions import FiberDirection, current_fiber
from ..parameters import closed, greater, greater_or_equal, is_field
from ..state import MaterialPoint
from ..uncoupled import UncoupledMaterial, uncoupled_dev_tangent

# ω 接近 1 时 β、ξ 的闭式表达奇异，阈值以下改用极限值 β = 1, ξ = -1/3
OMEGA_THRESHOLD = 1.0001


def omega_terms(w: float) -> Tuple[float, float]:
    """
    返回 (β, ξ)

    β = acosh(ω) / √(ω²-1)
    ξ = dβ/dω = (1 - ω β) / (ω²-1)
    """
    beta = 1.0
    ksi = -1.0 / 3.0
    if w > OMEGA_THRESHOLD:
        s = np.sqrt(w * w - 1.0)
        beta = np.arccosh(w) / s
        ksi = (1.0 - w * beta) / (w * w - 1.0)
    return beta, ksi


def passive_fiber_force(lat: float, P1: float, P2: float, Lofl: float, lam1: float) -> Tuple[float, float]:
    """
    被动纤维力 (按纤维伸长比归一化) 及其导数

    λ̃ <= Lofl: 0
    λ̃ <  λ_max: P1 (exp(P2 (λ̃/Lofl - 1)) - 1)
    否则: 在 λ_max 处线性延伸 P3 λ̃/Lofl + P4

    Returns:
        (Fp, dFp/dλ̃)
    """
    if lat <= Lofl:
        return 0.0, 0.0
    if lat < lam1:
        e = np.exp(P2 * (lat / Lofl - 1.0))
        return P1 * (e - 1.0), P1 * P2 * e / Lofl

    P3 = P1 * P2 * np.exp(P2 * (lam1 / Lofl - 1.0))
    P4 = P1 * (np.exp(P2 * (lam1 / Lofl - 1.0)) - 1.0) - P3 * lam1 / Lofl
    return P3 * lat / Lofl + P4, P3 / Lofl


def active_fiber_force(lat: float, Lofl: float) -> Tuple[float, float]:
    """
    主动纤维力-长度曲线 (钟形，峰值 1 位于 λ̃ = Lofl) 及其导数

    在 [0.4, 1.6] Lofl 之外为零。

    Returns:
        (Fa, dFa/dλ̃)
    """
    x = lat / Lofl
    if x <= 0.4 or x >= 1.6:
        return 0.0, 0.0
    if x <= 0.6:
        return 9.0 * (x - 0.4) ** 2, 18.0 * (x - 0.4) / Lofl
    if x >= 1.4:
        return 9.0 * (x - 1.6) ** 2, 18.0 * (x - 1.6) / Lofl
    return 1.0 - 4.0 * (1.0 - x) ** 2, 8.0 * (1.0 - x) / Lofl


@dataclass
class _MuscleKinematics:
    """单次计算用到的运动学量"""
    J: float
    a: np.ndarray
    lat: float
    B: np.ndarray
    B2: np.ndarray
    Ba: np.ndarray
    I1: float
    I2: float
    I4: float
    I5: float
    w: float
    beta: float
    ksi: float


class MuscleMaterial(UncoupledMaterial):
    """
    骨骼肌材料

    Attributes:
        g1: 沿纤维剪切模量 (>= 0)
        g2: 横截面剪切模量 (>= 0)
        g3: 纤维方向零应力修正系数 (>= 0)
        p1: 被动纤维应力系数 (>= 0)
        p2: 被动纤维指数系数 (>= 0)
        Lofl: 最优纤维伸长比 (> 0)
        smax: 最大等长应力 (>= 0)
        lam_max: 被动曲线由指数转为线性的伸长比 (> Lofl)
        activation: 激活水平 α (0 <= α <= 1)，可为材料点函数
        k: 体积模量 (>= 0)
        fiber: 纤维方向场 (默认 x 轴)

    Example:
        mat = MuscleMaterial(g1=500, g2=500, g3=0, p1=0.05, p2=6.6,
                             Lofl=1.07, smax=3e5, lam_max=1.4,
                             activation=0.5, k=1e5)
    """

    name = 'muscle material'
    bounds = {
        'g1': greater_or_equal(0.0),
        'g2': greater_or_equal(0.0),
        'g3': greater_or_equal(0.0),
        'p1': greater_or_equal(0.0),
        'p2': greater_or_equal(0.0),
        'Lofl': greater(0.0),
        'smax': greater_or_equal(0.0),
        'lam_max': greater(0.0),
        'activation': closed(0.0, 1.0),
        'k': greater_or_equal(0.0),
    }

    def __init__(
        self,
        g1: float,
        g2: float,
        g3: float,
        p1: float,
        p2: float,
        Lofl: float,
        smax: float,
        lam_max: float,
        activation: float = 0.0,
        k: float = 0.0,
        fiber: Optional[FiberDirection] = None
    ):
        super().__init__(k=k)
        self.g1 = g1
        self.g2 = g2
        self.g3 = g3
        self.p1 = p1
        self.p2 = p2
        self.Lofl = Lofl
        self.smax = smax
        self.lam_max = lam_max
        self.activation = activation
        self.fiber = fiber if fiber is not None else FiberDirection()
        self.validate()

    def validate(self) -> None:
        super().validate()
        if not is_field(self.Lofl) and not is_field(self.lam_max) and self.lam_max <= self.Lofl:
            raise MaterialParameterError(
                f"{self.name}: lam_max = {self.lam_max} must be greater than Lofl = {self.Lofl}"
            )

    # ------------------------------------------------------------------
    # 运动学与应变能导数
    # ------------------------------------------------------------------

    def _kinematics(self, mp: MaterialPoint) -> _MuscleKinematics:
        J = mp.J

        # 当前纤维方向 λa = F a0
        a0 = self.fiber.unit_vector(mp)
        a, la = current_fiber(mp.F, a0, self.name)
        lat = la * J ** (-1.0 / 3.0)

        B = mp.dev_left_cauchy_green()
        B2 = B @ B
        Ba = B @ a

        I1 = np.trace(B)
        I2 = 0.5 * (I1 * I1 - np.trace(B2))
        I4 = lat * lat
        I5 = I4 * (a @ Ba)

        w = 0.5 * (I1 * I4 - I5) / lat
        beta, ksi = omega_terms(w)

        return _MuscleKinematics(J, a, lat, B, B2, Ba, I1, I2, I4, I5, w, beta, ksi)

    def _params(self, mp: MaterialPoint) -> dict:
        keys = ('g1', 'g2', 'g3', 'p1', 'p2', 'Lofl', 'smax', 'lam_max', 'activation')
        return {key: self.param(key, mp) for key in keys}

    def _first_derivatives(self, kin: _MuscleKinematics, prm: dict) -> Tuple[float, float, float, float]:
        """(W1, W2, W4, W5)"""
        G1, G2, G3 = prm['g1'], prm['g2'], prm['g3']
        I1, I4, I5 = kin.I1, kin.I4, kin.I5
        lat, beta = kin.lat, kin.beta

        # F1
        F1D4 = -2.0 * G1 * (I5 / (I4 * I4 * I4))
        F1D5 = G1 / (I4 * I4)

        # F2
        F2D1 = G2 * beta * lat
        F2D4 = G2 * beta * (I1 * I4 + I5) * 0.5 * I4 ** (-1.5)
        F2D5 = -G2 * beta / lat

        # F3 零应力修正项
        F3D4 = 9.0 * G3 * 0.125 * np.log(I4) / I4

        # 纤维力
        FfDl, _ = self._fiber_force(lat, prm)
        FfD4 = 0.5 * FfDl / lat

        W1 = F2D1
        W2 = 0.0
        W4 = F1D4 + F2D4 + F3D4 + FfD4
        W5 = F1D5 + F2D5
        return W1, W2, W4, W5

    def _fiber_force(self, lat: float, prm: dict) -> Tuple[float, float]:
        """总纤维力 dW/dλ̃ 及其导数 d2W/dλ̃2"""
        Lofl = prm['Lofl']
        smax = prm['smax']
        alpha = prm['activation']

        Fp, FpDl = passive_fiber_force(lat, prm['p1'], prm['p2'], Lofl, prm['lam_max'])
        Fa, FaDl = active_fiber_force(lat, Lofl)

        FfDl = smax * (Fp + alpha * Fa) / Lofl
        FfDll = smax * (FpDl + alpha * FaDl) / Lofl
        return FfDl, FfDll

    # ------------------------------------------------------------------
    # 偏量响应
    # ------------------------------------------------------------------

    def _dev_stress(self, kin: _MuscleKinematics, prm: dict) -> np.ndarray:
        W1, W2, W4, W5 = self._first_derivatives(kin, prm)

        AxA = dyad(kin.a)
        ABA = dyads(kin.a, kin.Ba)

        T = kin.B * (W1 + W2 * kin.I1) - kin.B2 * W2 + AxA * (kin.I4 * W4) + ABA * (kin.I4 * W5)
        return dev(T) * (2.0 / kin.J)

    def dev_stress(self, mp: MaterialPoint) -> np.ndarray:
        return self._dev_stress(self._kinematics(mp), self._params(mp))

    def dev_tangent(self, mp: MaterialPoint) -> np.ndarray:
        kin = self._kinematics(mp)
        prm = self._params(mp)

        J, B, B2 = kin.J, kin.B, kin.B2
        I1, I2, I4, I5 = kin.I1, kin.I2, kin.I4, kin.I5
        lat, beta, ksi = kin.lat, kin.beta, kin.ksi
        G1, G2, G3 = prm['g1'], prm['g2'], prm['g3']

        devs = self._dev_stress(kin, prm)
        W1, W2, W4, W5 = self._first_derivatives(kin, prm)

        # --- A. 基体二阶导数 ---
        F1D44 = 6.0 * G1 * (I5 / (I4 * I4 * I4 * I4))
        F1D45 = -2.0 * G1 / (I4 * I4 * I4)

        F2D11 = ksi * G2 * I4 * 0.5
        F2D44 = (2.0 * G2 * ksi * (0.25 * (I1 * I4 + I5) / I4 ** 1.5) ** 2
                 - G2 * beta * (0.25 * (I1 * I4 + 3.0 * I5) / I4 ** 2.5))
        F2D55 = 0.5 * G2 * ksi / I4
        F2D14 = G2 * beta * 0.5 / lat + G2 * ksi * (I1 * I4 + I5) * 0.25 / I4
        F2D15 = -0.5 * G2 * ksi
        F2D45 = G2 * beta * 0.5 * I4 ** (-1.5) - G2 * ksi * 0.25 * (I1 * I4 + I5) / (I4 * I4)

        F3D44 = 9.0 * G3 * 0.125 * (1.0 - np.log(I4)) / (I4 * I4)

        # --- B. 纤维二阶导数 ---
        FfDl, FfDll = self._fiber_force(lat, prm)
        FfD44 = 0.25 * (FfDll - FfDl / lat) / I4

        W11 = F2D11
        W12 = 0.0
        W22 = 0.0
        W14 = F2D14
        W24 = 0.0
        W15 = F2D15
        W25 = 0.0
        W44 = F1D44 + F2D44 + F3D44 + FfD44
        W45 = F1D45 + F2D45
        W55 = F2D55

        # C̄:dW/dC̄
        WCC = W1 * I1 + 2.0 * W2 * I2 + W4 * I4 + 2.0 * W5 * I5

        # 推前后各项系数
        cB = (W11 * I1 + W12 * I1 * I1 + W2 * I1 + 2.0 * W12 * I2 + 2.0 * W22 * I1 * I2
              + W14 * I4 + W24 * I1 * I4 + 2.0 * W15 * I5 + 2.0 * W25 * I1 * I5)
        cB2 = W12 * I1 + 2.0 * W22 * I2 + W2 + W24 * I4 + 2.0 * W25 * I5
        cA = W14 * I1 + 2.0 * W24 * I2 + W44 * I4 + 2.0 * W45 * I5
        c5 = W15 * I1 + 2.0 * W25 * I2 + W45 * I4 + 2.0 * W55 * I5

        # C̄:d2W/dC̄dC̄:C̄
        CW2CCC = cB * I1 - cB2 * (I1 * I1 - 2.0 * I2) + cA * I4 + c5 * 2.0 * I5 + 2.0 * W5 * I5

        AxA = dyad(kin.a)

        # dI5/dC̄ 的推前 I4 (a⊗Ba + Ba⊗a)
        I5C = dyads(kin.a, kin.Ba) * I4

        # d2I5/dC̄dC̄ 的推前
        I5CC = dyad4s(AxA, B) * I4

        # d2I2/dC̄dC̄ 中 𝕀 项的推前
        Ib = dyad4s(B)

        # d2W/dC̄dC̄:C̄ 的推前
        WCCC = B * cB - B2 * cB2 + AxA * (cA * I4) + I5C * (c5 + W5)

        # d2W/dC̄dC̄ 的推前
        W2CC = (dyad1(B, B) * (W11 + 2.0 * W12 * I1 + W2 + W22 * I1 * I1)
                + dyad1s(B, B2) * (-(W12 + W22 * I1))
                + dyad1(B2, B2) * W22
                - Ib * W2
                + dyad1s(B, AxA) * ((W14 + W24 * I1) * I4)
                + dyad1s(B, I5C) * (W15 + W25 * I1)
                + dyad1s(B2, AxA) * (-W24 * I4)
                + dyad1s(B2, I5C) * (-W25)
                + dyad1(AxA, AxA) * (W44 * I4 * I4)
                + dyad1s(AxA, I5C) * (W45 * I4)
                + dyad1(I5C, I5C) * W55
                + I5CC * W5)

        return uncoupled_dev_tangent(J, devs, WCC, CW2CCC, WCCC, W2CC)

    def fiber_stretch(self, mp: MaterialPoint) -> float:
        """等容纤维伸长比 λ̃ (输出用)"""
        return self._kinematics(mp).lat

    def __repr__(self) -> str:
        return (
            f"MuscleMaterial(g1={self.g1}, g2={self.g2}, g3={self.g3}, "
            f"Lofl={self.Lofl}, smax={self.smax}, activation={self.activation})"
        )
