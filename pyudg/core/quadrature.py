# 文件: pyudg/core/quadrature.py
import numpy as np


class Quadrature:
    """
    数值积分模块
    负责生成 Gauss-Legendre 积分点和权重。

    UDG 单元用 2x2x2 规则计算体积和平均梯度：
    detJ · ∂N/∂x 在每个方向上至多为三次多项式，2 点规则已精确。
    """

    @staticmethod
    def get_points(order):
        """
        根据积分阶数返回一维积分点坐标和权重。

        Args:
            order (int): 积分点的数量 (1, 2, or 3)

        Returns:
            points (np.array): 局部坐标 ξ 的位置列表
            weights (np.array): 对应的权重列表
        """
        if order == 1:
            points = np.array([0.0])
            weights = np.array([2.0])

        elif order == 2:
            # 坐标 = ±1/sqrt(3), 权重 = 1.0
            val = 1.0 / np.sqrt(3.0)
            points = np.array([-val, val])
            weights = np.array([1.0, 1.0])

        elif order == 3:
            # 坐标 = ±sqrt(0.6), 0
            # 权重 = 5/9, 8/9, 5/9
            val = np.sqrt(0.6)
            points = np.array([-val, 0.0, val])
            weights = np.array([5.0/9.0, 8.0/9.0, 5.0/9.0])

        else:
            raise ValueError(f"Integration order {order} not supported yet.")

        return points, weights

    @staticmethod
    def get_points_3d(order):
        """
        六面体张量积积分规则。

        Returns:
            points (np.array): (order^3, 3)，顺序为 xi 最慢、zeta 最快
            weights (np.array): (order^3,)
        """
        p, w = Quadrature.get_points(order)
        xi, eta, zeta = np.meshgrid(p, p, p, indexing='ij')
        wx, wy, wz = np.meshgrid(w, w, w, indexing='ij')
        points = np.column_stack([xi.ravel(), eta.ravel(), zeta.ravel()])
        weights = (wx * wy * wz).ravel()
        return points, weights
