"""
space/bounds.py - 欧氏子空间的轴对齐边界

RealVectorBounds 描述 R^n 状态空间的取值范围 [low, high]，
提供体积（状态空间测度）、包含判断与裁剪。
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class RealVectorBounds:
    """R^n 的轴对齐边界

    Attributes:
        low: 各维下界
        high: 各维上界
    """
    low: np.ndarray
    high: np.ndarray

    def __post_init__(self) -> None:
        self.low = np.asarray(self.low, dtype=np.float64).ravel()
        self.high = np.asarray(self.high, dtype=np.float64).ravel()
        if self.low.shape != self.high.shape:
            raise ValueError("low 和 high 维度不匹配")
        if np.any(self.low > self.high):
            raise ValueError(f"下界大于上界: low={self.low.tolist()}, "
                             f"high={self.high.tolist()}")

    @classmethod
    def uniform(cls, dimension: int, low: float, high: float) -> 'RealVectorBounds':
        """所有维度使用相同区间 [low, high]"""
        return cls(np.full(dimension, low), np.full(dimension, high))

    @property
    def dimension(self) -> int:
        return self.low.shape[0]

    @property
    def difference(self) -> np.ndarray:
        """各维宽度"""
        return self.high - self.low

    @property
    def volume(self) -> float:
        """超矩形体积"""
        return float(np.prod(self.difference))

    def contains(self, point: np.ndarray, tol: float = 0.0) -> bool:
        """点是否落在边界内（闭区间）"""
        point = np.asarray(point)
        return bool(np.all(point >= self.low - tol) and np.all(point <= self.high + tol))

    def enforce(self, point: np.ndarray) -> np.ndarray:
        """裁剪到边界内, 返回新数组"""
        return np.clip(point, self.low, self.high)
