# 文件: pyudg/core/exceptions.py
"""
异常类型

分类:
1. MaterialParameterError: 材料参数越界 (构造时抛出，不可恢复)
2. DegenerateDeformationError: 材料点变形退化 (J <= 0 或纤维方向长度为零)
3. InvertedElementError: 单元体积或平均雅可比非正 (单元翻转)

2 和 3 都继承自 RecoverableError，全局求解器捕获后可以缩小载荷步重试。
"""


class PyUDGError(Exception):
    """PyUDG 所有异常的基类"""


class MaterialParameterError(PyUDGError, ValueError):
    """材料参数缺失或超出允许范围"""


class RecoverableError(PyUDGError, ArithmeticError):
    """可通过缩小载荷步恢复的计算失败"""


class DegenerateDeformationError(RecoverableError):
    """材料点的变形状态退化 (J <= 0、纤维长度为零或结果非有限值)"""


class InvertedElementError(RecoverableError):
    """
    单元翻转

    Attributes:
        element_id: 出错单元的 ID (未知时为 None)
    """

    def __init__(self, message, element_id=None):
        super().__init__(message)
        self.element_id = element_id
