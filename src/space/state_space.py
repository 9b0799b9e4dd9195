"""
space/state_space.py - 状态空间模型

状态统一用一维 numpy 数组表示：
- RealVectorStateSpace: R^n, 状态即坐标
- SO2StateSpace: [yaw], yaw ∈ [-π, π]
- SO3StateSpace: 单位四元数 [x, y, z, w]
- CompoundStateSpace: 各子空间状态首尾拼接, 按 slice 取出/写回
- SE2StateSpace = R^2 × SO(2), SE3StateSpace = R^3 × SO(3)

复合空间的距离为各子空间距离的加权和, 测度为各子空间测度之积。
"""

from __future__ import annotations

import abc
import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from utils.seed import SeedLike
from .bounds import RealVectorBounds
from .samplers import (CompoundStateSampler, RealVectorStateSampler,
                       SO2StateSampler, SO3StateSampler, StateSampler,
                       wrap_angle)

logger = logging.getLogger(__name__)

# 四元数模长允许误差
MAX_QUATERNION_NORM_ERROR = 1e-9


class StateSpace(abc.ABC):
    """状态空间统一接口."""

    name: str = "StateSpace"

    @property
    @abc.abstractmethod
    def dimension(self) -> int:
        """流形维度"""

    @property
    def size(self) -> int:
        """状态向量长度 (SO3 为 4, 大于流形维度)"""
        return self.dimension

    @property
    @abc.abstractmethod
    def measure(self) -> float:
        """空间总测度 (体积)"""

    @property
    def is_compound(self) -> bool:
        return False

    @abc.abstractmethod
    def satisfies_bounds(self, state: np.ndarray) -> bool:
        """状态是否在空间边界内"""

    @abc.abstractmethod
    def enforce_bounds(self, state: np.ndarray) -> np.ndarray:
        """返回投影回边界内的新状态"""

    @abc.abstractmethod
    def distance(self, s1: np.ndarray, s2: np.ndarray) -> float:
        """两状态间距离"""

    @abc.abstractmethod
    def alloc_default_sampler(self, rng: SeedLike = None) -> StateSampler:
        """分配该空间的均匀采样器"""

    def alloc_state(self) -> np.ndarray:
        return np.zeros(self.size, dtype=np.float64)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dimension={self.dimension})"


class RealVectorStateSpace(StateSpace):
    """R^n 欧氏空间

    Args:
        dimension: 维度 n
        bounds: 边界; None 表示尚未设置 (测度为 inf, 边界检查恒为真)
    """

    name = "RealVector"

    def __init__(self, dimension: int,
                 bounds: Optional[RealVectorBounds] = None) -> None:
        if dimension < 1:
            raise ValueError(f"维度必须 >= 1, 得到 {dimension}")
        self._dimension = int(dimension)
        self.bounds: Optional[RealVectorBounds] = None
        if bounds is not None:
            self.set_bounds(bounds)

    def set_bounds(self, bounds: RealVectorBounds) -> None:
        if bounds.dimension != self._dimension:
            raise ValueError(f"边界维度 {bounds.dimension} 与空间维度 "
                             f"{self._dimension} 不一致")
        self.bounds = bounds

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def measure(self) -> float:
        if self.bounds is None:
            return math.inf
        return self.bounds.volume

    def satisfies_bounds(self, state: np.ndarray) -> bool:
        if self.bounds is None:
            return True
        return self.bounds.contains(state)

    def enforce_bounds(self, state: np.ndarray) -> np.ndarray:
        if self.bounds is None:
            return np.array(state, dtype=np.float64)
        return self.bounds.enforce(state)

    def distance(self, s1: np.ndarray, s2: np.ndarray) -> float:
        return float(np.linalg.norm(np.asarray(s2) - np.asarray(s1)))

    def alloc_default_sampler(self, rng: SeedLike = None) -> StateSampler:
        if self.bounds is None:
            raise ValueError("RealVectorStateSpace 未设置边界, 无法均匀采样")
        return RealVectorStateSampler(self, rng)


class SO2StateSpace(StateSpace):
    """平面旋转 SO(2)"""

    name = "SO2"

    @property
    def dimension(self) -> int:
        return 1

    @property
    def measure(self) -> float:
        return 2.0 * math.pi

    def satisfies_bounds(self, state: np.ndarray) -> bool:
        return bool(-math.pi <= state[0] <= math.pi)

    def enforce_bounds(self, state: np.ndarray) -> np.ndarray:
        return np.array([wrap_angle(state[0])])

    def distance(self, s1: np.ndarray, s2: np.ndarray) -> float:
        d = abs(float(s2[0]) - float(s1[0])) % (2.0 * math.pi)
        return min(d, 2.0 * math.pi - d)

    def alloc_default_sampler(self, rng: SeedLike = None) -> StateSampler:
        return SO2StateSampler(self, rng)


class SO3StateSpace(StateSpace):
    """三维旋转 SO(3), 状态为单位四元数 [x, y, z, w]"""

    name = "SO3"

    @property
    def dimension(self) -> int:
        return 3

    @property
    def size(self) -> int:
        return 4

    @property
    def measure(self) -> float:
        # S^3 面积 2π² 的一半 (q 与 -q 表示同一旋转)
        return math.pi ** 2

    def alloc_state(self) -> np.ndarray:
        return np.array([0.0, 0.0, 0.0, 1.0])

    def satisfies_bounds(self, state: np.ndarray) -> bool:
        return abs(float(np.linalg.norm(state)) - 1.0) < MAX_QUATERNION_NORM_ERROR

    def enforce_bounds(self, state: np.ndarray) -> np.ndarray:
        norm = float(np.linalg.norm(state))
        if norm < MAX_QUATERNION_NORM_ERROR:
            return self.alloc_state()
        return np.asarray(state, dtype=np.float64) / norm

    def distance(self, s1: np.ndarray, s2: np.ndarray) -> float:
        dq = abs(float(np.dot(s1, s2)))
        return math.acos(min(dq, 1.0))

    def alloc_default_sampler(self, rng: SeedLike = None) -> StateSampler:
        return SO3StateSampler(self, rng)


class CompoundStateSpace(StateSpace):
    """复合状态空间: 若干加权子空间的笛卡尔积

    Example:
        >>> space = CompoundStateSpace()
        >>> space.add_subspace(RealVectorStateSpace(2, bounds), 1.0)
        >>> space.add_subspace(SO2StateSpace(), 0.5)
    """

    name = "Compound"

    def __init__(self) -> None:
        self._subspaces: List[StateSpace] = []
        self._weights: List[float] = []
        self._slices: List[slice] = []
        self._size = 0

    def add_subspace(self, subspace: StateSpace, weight: float) -> int:
        """追加子空间, 返回其索引"""
        if weight < 0.0:
            raise ValueError(f"子空间权重必须非负, 得到 {weight}")
        self._subspaces.append(subspace)
        self._weights.append(float(weight))
        self._slices.append(slice(self._size, self._size + subspace.size))
        self._size += subspace.size
        logger.debug("%s: 添加子空间 %r (weight=%.3f)", self.name,
                     subspace, weight)
        return len(self._subspaces) - 1

    @property
    def is_compound(self) -> bool:
        return True

    @property
    def subspaces(self) -> Tuple[StateSpace, ...]:
        return tuple(self._subspaces)

    @property
    def n_subspaces(self) -> int:
        return len(self._subspaces)

    def subspace(self, index: int) -> StateSpace:
        return self._subspaces[index]

    def subspace_weight(self, index: int) -> float:
        return self._weights[index]

    def set_subspace_weight(self, index: int, weight: float) -> None:
        if weight < 0.0:
            raise ValueError(f"子空间权重必须非负, 得到 {weight}")
        self._weights[index] = float(weight)

    @property
    def dimension(self) -> int:
        return sum(s.dimension for s in self._subspaces)

    @property
    def size(self) -> int:
        return self._size

    @property
    def measure(self) -> float:
        m = 1.0
        for s in self._subspaces:
            m *= s.measure
        return m

    def get_component(self, state: np.ndarray, index: int) -> np.ndarray:
        """取出第 index 个子空间的状态 (副本)"""
        return np.array(state[self._slices[index]], dtype=np.float64)

    def set_component(self, state: np.ndarray, index: int,
                      value: np.ndarray) -> None:
        """原地写入第 index 个子空间的状态"""
        state[self._slices[index]] = value

    def compose(self, components: Sequence[np.ndarray]) -> np.ndarray:
        """由各子空间状态拼装完整状态"""
        if len(components) != len(self._subspaces):
            raise ValueError(f"期望 {len(self._subspaces)} 个子状态, "
                             f"得到 {len(components)}")
        state = self.alloc_state()
        for i, comp in enumerate(components):
            self.set_component(state, i, comp)
        return state

    def alloc_state(self) -> np.ndarray:
        return np.concatenate([s.alloc_state() for s in self._subspaces]) \
            if self._subspaces else np.zeros(0)

    def satisfies_bounds(self, state: np.ndarray) -> bool:
        return all(
            s.satisfies_bounds(state[sl])
            for s, sl in zip(self._subspaces, self._slices)
        )

    def enforce_bounds(self, state: np.ndarray) -> np.ndarray:
        return self.compose([
            s.enforce_bounds(state[sl])
            for s, sl in zip(self._subspaces, self._slices)
        ])

    def distance(self, s1: np.ndarray, s2: np.ndarray) -> float:
        return sum(
            w * s.distance(s1[sl], s2[sl])
            for s, w, sl in zip(self._subspaces, self._weights, self._slices)
        )

    def alloc_default_sampler(self, rng: SeedLike = None) -> StateSampler:
        return CompoundStateSampler(self, rng)


class SE2StateSpace(CompoundStateSpace):
    """SE(2) = R^2 (权重 1.0) × SO(2) (权重 0.5), 状态 [x, y, yaw]"""

    name = "SE2"

    def __init__(self, bounds: Optional[RealVectorBounds] = None) -> None:
        super().__init__()
        self.add_subspace(RealVectorStateSpace(2, bounds), 1.0)
        self.add_subspace(SO2StateSpace(), 0.5)

    def set_bounds(self, bounds: RealVectorBounds) -> None:
        self._subspaces[0].set_bounds(bounds)

    @property
    def bounds(self) -> Optional[RealVectorBounds]:
        return self._subspaces[0].bounds


class SE3StateSpace(CompoundStateSpace):
    """SE(3) = R^3 (权重 1.0) × SO(3) (权重 1.0), 状态 [x, y, z, qx, qy, qz, qw]"""

    name = "SE3"

    def __init__(self, bounds: Optional[RealVectorBounds] = None) -> None:
        super().__init__()
        self.add_subspace(RealVectorStateSpace(3, bounds), 1.0)
        self.add_subspace(SO3StateSpace(), 1.0)

    def set_bounds(self, bounds: RealVectorBounds) -> None:
        self._subspaces[0].set_bounds(bounds)

    @property
    def bounds(self) -> Optional[RealVectorBounds]:
        return self._subspaces[0].bounds
