# 文件: pyudg/core/materials/interfaces.py
"""
材料系统核心接口定义

设计原则:
1. Material: 所有材料的抽象基类，统一 stress / tangent / strain_energy_density 接口
2. StressResult: 标准化的应力计算返回值 (compute_stress 便捷接口)
3. Protocol: 子模型接口 (一维函数、纤维方向场)，使用鸭子类型实现松耦合
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Literal, Optional, Protocol, runtime_checkable
import numpy as np

from ..exceptions import DegenerateDeformationError
from ..tensor import stress_to_voigt, to_voigt
from .parameters import ParamRange, check_value, is_field
from .state import MaterialPoint


@dataclass
class StressResult:
    """
    统一的应力计算结果

    Attributes:
        stress: 柯西应力 Voigt 向量 (6,) [σxx, σyy, σzz, σyz, σxz, σxy]
        tangent: 空间弹性张量 Voigt 矩阵 (6,6)
        state: 计算所用的材料点 (应力已缓存)
        stress_type: 应力类型，本库的材料统一返回 'cauchy'
    """
    stress: np.ndarray
    tangent: np.ndarray
    state: Optional[MaterialPoint] = None
    stress_type: Literal['cauchy', 'pk2', 'kirchhoff'] = 'cauchy'


class Material(ABC):
    """
    材料抽象基类

    子类需要实现:
    - calc_stress(mp): 柯西应力 (3,3)
    - calc_tangent(mp): 空间弹性张量 (3,3,3,3)
    - calc_strain_energy_density(mp): 可选

    对外接口 stress() / tangent() 先检查 J > 0，再检查结果是否有限，
    任何一项失败都抛出 DegenerateDeformationError，不返回 NaN。

    切线与应力在 Truesdell 意义下一致: 对 F(ε) = (I + εD)F (D 对称)，
        dσ/dε = c:D + Dσ + σD - tr(D) σ

    一个材料实例被所有引用它的材料点只读共享，自身不保存逐点状态。

    Example:
        mat = ArrudaBoyce(mu=1.0, N=10.0, k=100.0)
        mp = MaterialPoint(F=F)
        sigma = mat.stress(mp)
        c = mat.tangent(mp)
    """

    name: str = 'material'

    # 参数名 -> 允许范围，子类覆盖
    bounds: Dict[str, ParamRange] = {}

    def validate(self) -> None:
        """
        检查所有常数参数是否在允许范围内

        Raises:
            MaterialParameterError: 参数越界
        """
        for key, rng in self.bounds.items():
            value = getattr(self, key)
            if is_field(value):
                continue
            setattr(self, key, check_value(self.name, key, value, rng))

    def param(self, key: str, mp: MaterialPoint) -> float:
        """在材料点 mp 处取参数值 (常数直接返回，函数参数先求值再检查)"""
        value = getattr(self, key)
        if is_field(value):
            return check_value(self.name, key, value(mp), self.bounds[key])
        return value

    # ------------------------------------------------------------------
    # 对外接口
    # ------------------------------------------------------------------

    def stress(self, mp: MaterialPoint) -> np.ndarray:
        """柯西应力 σ (3,3)"""
        self._check_point(mp)
        s = self.calc_stress(mp)
        self._check_finite(s, 'stress')
        return s

    def tangent(self, mp: MaterialPoint) -> np.ndarray:
        """空间弹性张量 c 的 Voigt 矩阵 (6,6)"""
        return to_voigt(self.tangent_tensor(mp))

    def tangent_tensor(self, mp: MaterialPoint) -> np.ndarray:
        """空间弹性张量 c (3,3,3,3)"""
        self._check_point(mp)
        c = self.calc_tangent(mp)
        self._check_finite(c, 'tangent')
        return c

    def strain_energy_density(self, mp: MaterialPoint) -> float:
        """应变能密度 (单位参考体积)"""
        self._check_point(mp)
        W = float(self.calc_strain_energy_density(mp))
        self._check_finite(np.array(W), 'strain energy density')
        return W

    def compute_stress(
        self,
        F: np.ndarray,
        state: Optional[MaterialPoint] = None,
        dt: float = 1.0
    ) -> StressResult:
        """
        从变形梯度计算应力和切线 (便捷接口)

        Args:
            F: 变形梯度张量 (3,3)
            state: 材料点 (None 时新建；传入的对象不会被修改)
            dt: 时间增量 (超弹性材料不使用)

        Returns:
            StressResult: 柯西应力、空间切线和带应力缓存的材料点副本
        """
        mp = state.copy() if state is not None else MaterialPoint()
        mp.update(F)

        sigma = self.stress(mp)
        c = self.tangent(mp)
        mp.stress = sigma.copy()

        return StressResult(
            stress=stress_to_voigt(sigma),
            tangent=c,
            state=mp,
            stress_type='cauchy'
        )

    # ------------------------------------------------------------------
    # 子类实现
    # ------------------------------------------------------------------

    @abstractmethod
    def calc_stress(self, mp: MaterialPoint) -> np.ndarray:
        pass

    @abstractmethod
    def calc_tangent(self, mp: MaterialPoint) -> np.ndarray:
        pass

    def calc_strain_energy_density(self, mp: MaterialPoint) -> float:
        raise NotImplementedError(
            f"{self.name} does not define a strain energy density"
        )

    # ------------------------------------------------------------------
    # 检查
    # ------------------------------------------------------------------

    def _check_point(self, mp: MaterialPoint) -> None:
        J = mp.J
        if not J > 0.0:
            raise DegenerateDeformationError(
                f"{self.name}: non-positive Jacobian J = {J:.6e}"
            )

    def _check_finite(self, value: np.ndarray, what: str) -> None:
        if not np.all(np.isfinite(value)):
            raise DegenerateDeformationError(
                f"{self.name}: non-finite {what} at the current deformation"
            )


# =============================================================================
# 子模型协议 (Protocol for duck typing)
# =============================================================================

@runtime_checkable
class Function1D(Protocol):
    """
    一维函数协议 (例如长度-张力曲线)

    - value(x): 函数值
    - derive(x): 一阶导数
    """

    def value(self, x: float) -> float:
        ...

    def derive(self, x: float) -> float:
        ...


@runtime_checkable
class FiberField(Protocol):
    """
    纤维方向场协议

    - unit_vector(mp): 参考构型中的单位纤维方向 (3,)
    """

    def unit_vector(self, mp: MaterialPoint) -> np.ndarray:
        ...
