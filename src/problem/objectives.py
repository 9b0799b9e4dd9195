"""
problem/objectives.py - 优化目标

代价统一用 float 表示, 越小越好; 无解时代价为 +inf。
目前只有路径长度目标能够分配直接椭球 informed 采样器。
"""

from __future__ import annotations

import abc
import math
from typing import TYPE_CHECKING

import numpy as np

from space.state_space import StateSpace

if TYPE_CHECKING:
    from informed.base import InformedSampler
    from .definition import ProblemDefinition


class OptimizationObjective(abc.ABC):
    """优化目标统一接口.

    Args:
        space: 目标所在的状态空间
    """

    description: str = "Optimization objective"

    def __init__(self, space: StateSpace) -> None:
        self.space = space

    @abc.abstractmethod
    def motion_cost(self, s1: np.ndarray, s2: np.ndarray) -> float:
        """s1 → s2 直线运动的代价"""

    def combine_costs(self, c1: float, c2: float) -> float:
        return c1 + c2

    def identity_cost(self) -> float:
        return 0.0

    def infinite_cost(self) -> float:
        return math.inf

    def is_cost_better_than(self, c1: float, c2: float) -> bool:
        return c1 < c2

    def cost_to_go(self, state: np.ndarray, goal: np.ndarray) -> float:
        """state 到 goal 的可采纳下界, 默认 0 (无信息)"""
        return self.identity_cost()

    def alloc_informed_sampler(self, problem: 'ProblemDefinition',
                               max_calls: int = 100,
                               **kwargs) -> 'InformedSampler':
        """分配与该目标匹配的 informed 采样器

        Raises:
            UnsupportedProblemError: 该目标没有可用的 informed 采样器
        """
        from informed.errors import UnsupportedProblemError

        raise UnsupportedProblemError(
            f"{type(self).__name__} 没有可用的 informed 采样器, "
            f"仅支持路径长度目标")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.space!r})"


class PathLengthOptimizationObjective(OptimizationObjective):
    """路径长度目标: 运动代价 = 状态空间距离"""

    description = "Path length"

    def motion_cost(self, s1: np.ndarray, s2: np.ndarray) -> float:
        return self.space.distance(s1, s2)

    def cost_to_go(self, state: np.ndarray, goal: np.ndarray) -> float:
        # 三角不等式保证直线距离不高估
        return self.space.distance(state, goal)

    def alloc_informed_sampler(self, problem: 'ProblemDefinition',
                               max_calls: int = 100,
                               **kwargs) -> 'InformedSampler':
        """分配 PathLengthDirectInfSampler.

        Args:
            problem: 规划问题
            max_calls: 单次采样的最大尝试次数
            **kwargs: InformedSamplerConfig 的其余字段, 以及 ``rng``
        """
        from informed.direct import PathLengthDirectInfSampler
        from informed.models import InformedSamplerConfig

        rng = kwargs.pop('rng', None)
        config = InformedSamplerConfig(max_calls=max_calls, **kwargs)
        return PathLengthDirectInfSampler(problem, config=config, rng=rng)
