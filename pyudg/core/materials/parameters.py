# 文件: pyudg/core/materials/parameters.py
"""
材料参数范围与校验

每个材料类在类属性 bounds 中声明参数名及其允许范围，
构造时调用 Material.validate() 统一检查。

参数值可以是常数，也可以是 f(mp) -> float 的可调用对象
(例如随位置变化的参数或激活水平)。常数在构造时检查，
可调用参数在计算时取值后检查。
"""

from dataclasses import dataclass
import math
from typing import Optional

from ..exceptions import MaterialParameterError


@dataclass(frozen=True)
class ParamRange:
    """
    参数允许范围

    Attributes:
        lower: 下限 (None 表示无下限)
        upper: 上限 (None 表示无上限)
        lower_open: True 表示不含下限 (严格大于)
        upper_open: True 表示不含上限 (严格小于)
    """
    lower: Optional[float] = None
    upper: Optional[float] = None
    lower_open: bool = False
    upper_open: bool = False

    def contains(self, value: float) -> bool:
        if not math.isfinite(value):
            return False
        if self.lower is not None:
            if self.lower_open and not value > self.lower:
                return False
            if not self.lower_open and not value >= self.lower:
                return False
        if self.upper is not None:
            if self.upper_open and not value < self.upper:
                return False
            if not self.upper_open and not value <= self.upper:
                return False
        return True

    def __str__(self) -> str:
        lo = '-inf' if self.lower is None else f"{self.lower:g}"
        hi = 'inf' if self.upper is None else f"{self.upper:g}"
        left = '(' if self.lower_open or self.lower is None else '['
        right = ')' if self.upper_open or self.upper is None else ']'
        return f"{left}{lo}, {hi}{right}"


def greater(value: float) -> ParamRange:
    """x > value"""
    return ParamRange(lower=value, lower_open=True)


def greater_or_equal(value: float) -> ParamRange:
    """x >= value"""
    return ParamRange(lower=value)


def closed(lower: float, upper: float) -> ParamRange:
    """lower <= x <= upper"""
    return ParamRange(lower=lower, upper=upper)


def is_field(value) -> bool:
    """参数是否为随材料点变化的函数"""
    return callable(value)


def check_value(owner: str, name: str, value, bounds: ParamRange) -> float:
    """
    检查单个参数值

    Args:
        owner: 材料名称 (用于错误消息)
        name: 参数名
        value: 参数值
        bounds: 允许范围

    Returns:
        float: 转换为浮点数的参数值

    Raises:
        MaterialParameterError: 参数不是数值或超出范围
    """
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise MaterialParameterError(
            f"{owner}: parameter '{name}' must be a number, got {value!r}"
        ) from None
    if not bounds.contains(value):
        raise MaterialParameterError(
            f"{owner}: parameter '{name}' = {value} must be within {bounds}"
        )
    return value
