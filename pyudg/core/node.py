# 文件: pyudg/core/node.py
import numpy as np


class Node:
    """
    有限元节点类。

    负责存储节点的全局 ID (从 1 开始) 以及参考构型中的三维坐标 (x, y, z)。
    当前/上一步坐标和自由度编号由 Mesh 统一管理。
    """
    def __init__(self, node_id, x, y, z):
        self.id = int(node_id)
        if self.id < 1:
            raise ValueError(f"节点 ID 必须从 1 开始，收到 {node_id}")
        self.coords = np.array([float(x), float(y), float(z)])

    def __repr__(self):
        return f"Node({self.id}, {self.coords})"
