"""
space/samplers.py - 状态空间均匀采样器

每种状态空间对应一个 StateSampler：
- RealVectorStateSampler: 边界内均匀采样
- SO2StateSampler: 偏航角 [-π, π) 均匀采样
- SO3StateSampler: 单位四元数 (Haar 测度) 均匀采样，基于 scipy Rotation
- CompoundStateSampler: 各子空间独立采样后拼装

所有采样器从构造时传入的 numpy Generator 取随机数，
同一个 Generator 可被复合采样器的各子采样器共享。
"""

from __future__ import annotations

import abc
import math
from typing import TYPE_CHECKING, List

import numpy as np
from scipy.spatial.transform import Rotation

from utils.seed import SeedLike, make_rng

if TYPE_CHECKING:
    from .state_space import (CompoundStateSpace, RealVectorStateSpace,
                              StateSpace)


def wrap_angle(theta):
    """归一化到 [-π, π)"""
    return (theta + math.pi) % (2.0 * math.pi) - math.pi


class StateSampler(abc.ABC):
    """状态采样器统一接口.

    Args:
        space: 被采样的状态空间
        rng: 随机数发生器或种子
    """

    def __init__(self, space: 'StateSpace', rng: SeedLike = None) -> None:
        self.space = space
        self.rng = make_rng(rng)

    @abc.abstractmethod
    def sample_uniform(self) -> np.ndarray:
        """在整个状态空间内均匀采样"""

    @abc.abstractmethod
    def sample_uniform_near(self, near: np.ndarray, distance: float) -> np.ndarray:
        """在 near 附近 distance 范围内均匀采样"""

    @abc.abstractmethod
    def sample_gaussian(self, mean: np.ndarray, stddev: float) -> np.ndarray:
        """以 mean 为中心的高斯采样"""


class RealVectorStateSampler(StateSampler):
    """R^n 边界内均匀采样"""

    space: 'RealVectorStateSpace'

    def sample_uniform(self) -> np.ndarray:
        b = self.space.bounds
        return self.rng.uniform(b.low, b.high)

    def sample_uniform_near(self, near: np.ndarray, distance: float) -> np.ndarray:
        b = self.space.bounds
        lo = np.maximum(b.low, near - distance)
        hi = np.minimum(b.high, near + distance)
        return self.rng.uniform(lo, hi)

    def sample_gaussian(self, mean: np.ndarray, stddev: float) -> np.ndarray:
        return self.space.bounds.enforce(self.rng.normal(mean, stddev))


class SO2StateSampler(StateSampler):
    """SO(2) 偏航角采样"""

    def sample_uniform(self) -> np.ndarray:
        return np.array([self.rng.uniform(-math.pi, math.pi)])

    def sample_uniform_near(self, near: np.ndarray, distance: float) -> np.ndarray:
        yaw = near[0] + self.rng.uniform(-distance, distance)
        return np.array([wrap_angle(yaw)])

    def sample_gaussian(self, mean: np.ndarray, stddev: float) -> np.ndarray:
        return np.array([wrap_angle(self.rng.normal(mean[0], stddev))])


class SO3StateSampler(StateSampler):
    """SO(3) 四元数采样, 四元数顺序 [x, y, z, w] (与 scipy 一致)"""

    def sample_uniform(self) -> np.ndarray:
        return Rotation.random(random_state=self.rng).as_quat()

    def _perturb(self, near: np.ndarray, rotvec: np.ndarray) -> np.ndarray:
        return (Rotation.from_rotvec(rotvec) * Rotation.from_quat(near)).as_quat()

    def sample_uniform_near(self, near: np.ndarray, distance: float) -> np.ndarray:
        # 旋转向量在半径 distance 的球内均匀
        direction = self.rng.standard_normal(3)
        direction /= np.linalg.norm(direction)
        radius = distance * self.rng.uniform() ** (1.0 / 3.0)
        return self._perturb(near, radius * direction)

    def sample_gaussian(self, mean: np.ndarray, stddev: float) -> np.ndarray:
        return self._perturb(mean, self.rng.normal(0.0, stddev, size=3))


class CompoundStateSampler(StateSampler):
    """复合空间采样：各子采样器独立采样，再拼装完整状态"""

    space: 'CompoundStateSpace'

    def __init__(self, space: 'CompoundStateSpace', rng: SeedLike = None) -> None:
        super().__init__(space, rng)
        self.samplers: List[StateSampler] = [
            sub.alloc_default_sampler(self.rng) for sub in space.subspaces
        ]

    def sample_uniform(self) -> np.ndarray:
        return self.space.compose([s.sample_uniform() for s in self.samplers])

    def sample_uniform_near(self, near: np.ndarray, distance: float) -> np.ndarray:
        return self.space.compose([
            s.sample_uniform_near(self.space.get_component(near, i), distance)
            for i, s in enumerate(self.samplers)
        ])

    def sample_gaussian(self, mean: np.ndarray, stddev: float) -> np.ndarray:
        return self.space.compose([
            s.sample_gaussian(self.space.get_component(mean, i), stddev)
            for i, s in enumerate(self.samplers)
        ])
