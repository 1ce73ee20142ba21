# 文件: pyudg/core/materials/state.py
"""
材料点状态

MaterialPoint: 单个计算位置在当前时间步的力学状态视图
"""

from dataclasses import dataclass, field
import numpy as np


@dataclass
class MaterialPoint:
    """
    材料点 (瞬态视图，而非历史记录)

    每次非线性迭代由单元核心覆盖 F，材料根据当前 F 重新计算应力和切线，
    不做增量更新。历史变量只在时间步收敛后通过 commit() 提交。

    Attributes:
        F: 变形梯度 (3,3)，要求 det(F) > 0
        r0: 参考构型中的位置 (3,)，供随位置变化的材料参数使用
        J: det(F)，由 update() 维护
        stress: 最近一次缓存的柯西应力 (3,3)，仅供输出使用，材料不读取
        F_prev: 上一个收敛时间步的变形梯度

    Example:
        mp = MaterialPoint()
        mp.update(F)
        sigma = material.stress(mp)
        # ... 时间步收敛后 ...
        mp.commit()
    """

    F: np.ndarray = field(default_factory=lambda: np.eye(3))
    r0: np.ndarray = field(default_factory=lambda: np.zeros(3))
    stress: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))
    F_prev: np.ndarray = field(default_factory=lambda: np.eye(3))
    J: float = field(init=False, default=1.0)

    def __post_init__(self):
        self.F = np.array(self.F, dtype=float)
        self.r0 = np.array(self.r0, dtype=float)
        self.J = float(np.linalg.det(self.F))

    def update(self, F: np.ndarray) -> 'MaterialPoint':
        """覆盖当前变形梯度并重新计算 J"""
        self.F = np.array(F, dtype=float)
        self.J = float(np.linalg.det(self.F))
        return self

    def left_cauchy_green(self) -> np.ndarray:
        """左 Cauchy-Green 张量 B = F F^T"""
        return self.F @ self.F.T

    def dev_left_cauchy_green(self) -> np.ndarray:
        """等容左 Cauchy-Green 张量 B̄ = J^(-2/3) F F^T"""
        return self.J ** (-2.0 / 3.0) * (self.F @ self.F.T)

    def commit(self) -> None:
        """提交历史变量 (仅由时间步驱动在收敛后调用)"""
        self.F_prev = self.F.copy()

    def copy(self) -> 'MaterialPoint':
        """
        深拷贝

        Returns:
            MaterialPoint: 独立的状态副本
        """
        mp = MaterialPoint(
            F=self.F.copy(),
            r0=self.r0.copy(),
            stress=self.stress.copy(),
            F_prev=self.F_prev.copy()
        )
        return mp

    def clone(self) -> 'MaterialPoint':
        """深拷贝 (copy 的别名)"""
        return self.copy()

    def reset(self) -> None:
        """重置为未变形的初始状态 (保留位置 r0)"""
        self.update(np.eye(3))
        self.stress = np.zeros((3, 3))
        self.F_prev = np.eye(3)

    def __repr__(self) -> str:
        return (
            f"MaterialPoint(J={self.J:.6f}, "
            f"stress_max={np.max(np.abs(self.stress)):.2e})"
        )
