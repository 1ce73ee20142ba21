# 文件: pyudg/core/materials/functions.py
"""
材料子模型

- LoadCurve: 分段线性曲线 (长度-张力曲线等)，满足 Function1D 协议
- FiberDirection: 纤维方向场，满足 FiberField 协议
"""

from typing import Callable, Optional, Sequence, Tuple, Union
import numpy as np

from ..exceptions import DegenerateDeformationError, MaterialParameterError
from .state import MaterialPoint


class LoadCurve:
    """
    分段线性曲线

    Args:
        points: [(x0, y0), (x1, y1), ...]，x 严格递增，至少一个点
        extend: 超出定义域时的处理
            'constant'    - 取端点值，导数为 0
            'extrapolate' - 沿端部线段线性外推

    Example:
        stl = LoadCurve([(0.6, 0.0), (1.0, 1.0), (1.4, 0.0)])
        stl.value(0.8)   # 0.5
        stl.derive(0.8)  # 2.5
    """

    def __init__(self, points: Sequence[Tuple[float, float]], extend: str = 'constant'):
        pts = np.asarray(points, dtype=float)
        if pts.ndim != 2 or pts.shape[1] != 2 or len(pts) == 0:
            raise MaterialParameterError("LoadCurve: points must be a non-empty list of (x, y) pairs")
        if np.any(np.diff(pts[:, 0]) <= 0):
            raise MaterialParameterError("LoadCurve: x values must be strictly increasing")
        if extend not in ('constant', 'extrapolate'):
            raise MaterialParameterError(f"LoadCurve: unknown extend mode '{extend}'")

        self.x = pts[:, 0].copy()
        self.y = pts[:, 1].copy()
        self.extend = extend

    def _segment(self, x: float) -> int:
        """x 所在线段的起点下标 (端点处取右侧线段)"""
        i = int(np.searchsorted(self.x, x, side='right')) - 1
        return min(max(i, 0), len(self.x) - 2)

    def value(self, x: float) -> float:
        if len(self.x) == 1:
            return float(self.y[0])
        if self.extend == 'extrapolate' and (x < self.x[0] or x > self.x[-1]):
            i = self._segment(x)
            return float(self.y[i] + self.derive(x) * (x - self.x[i]))
        return float(np.interp(x, self.x, self.y))

    def derive(self, x: float) -> float:
        if len(self.x) == 1:
            return 0.0
        if self.extend == 'constant' and (x < self.x[0] or x > self.x[-1]):
            return 0.0
        i = self._segment(x)
        return float((self.y[i + 1] - self.y[i]) / (self.x[i + 1] - self.x[i]))

    def __repr__(self) -> str:
        return f"LoadCurve(n_points={len(self.x)}, extend='{self.extend}')"


class FiberDirection:
    """
    纤维方向场

    给定常向量，或参考位置的函数 field(r0) -> (3,)。
    返回值总是单位化的参考构型方向 a0。

    Args:
        vector: 常纤维方向 (默认 x 轴)
        field: 随位置变化的纤维方向函数，给出时忽略 vector

    Raises:
        MaterialParameterError: 常向量长度为零
    """

    def __init__(
        self,
        vector: Union[Sequence[float], np.ndarray] = (1.0, 0.0, 0.0),
        field: Optional[Callable[[np.ndarray], Sequence[float]]] = None
    ):
        self.field = field
        self.vector = None

        if field is None:
            v = np.asarray(vector, dtype=float)
            if v.shape != (3,):
                raise MaterialParameterError(f"FiberDirection: vector must have 3 components, got {v.shape}")
            norm = np.linalg.norm(v)
            if not norm > 0.0 or not np.isfinite(norm):
                raise MaterialParameterError("FiberDirection: fiber vector has zero length")
            self.vector = v / norm

    def unit_vector(self, mp: MaterialPoint) -> np.ndarray:
        if self.field is None:
            return self.vector.copy()

        v = np.asarray(self.field(mp.r0), dtype=float)
        norm = np.linalg.norm(v)
        if not norm > 0.0 or not np.isfinite(norm):
            raise DegenerateDeformationError(
                f"FiberDirection: fiber field has zero length at r0 = {mp.r0}"
            )
        return v / norm

    def __repr__(self) -> str:
        if self.field is None:
            return f"FiberDirection(vector={self.vector})"
        return "FiberDirection(field)"


def current_fiber(F: np.ndarray, a0: np.ndarray, owner: str) -> Tuple[np.ndarray, float]:
    """
    当前构型中的纤维方向

    Args:
        F: 变形梯度
        a0: 参考单位纤维方向
        owner: 材料名称 (用于错误消息)

    Returns:
        (a, lam): 当前单位方向 a 与纤维伸长比 λ = |F a0|

    Raises:
        DegenerateDeformationError: F a0 长度为零
    """
    a = F @ a0
    lam = float(np.linalg.norm(a))
    if not lam > 0.0 or not np.isfinite(lam):
        raise DegenerateDeformationError(
            f"{owner}: fiber direction has zero length after deformation"
        )
    return a / lam, lam
