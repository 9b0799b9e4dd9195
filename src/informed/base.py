"""
informed/base.py - informed 采样器接口

InformedSampler ABC       ：在 "可能改进当前解" 的状态子集中采样
InformedStateSampler      ：面向规划器的普通采样器封装，每次采样
                            从回调读取当前最优代价
"""

from __future__ import annotations

import abc
import logging
import math
from typing import Callable, Optional

import numpy as np

from problem.definition import ProblemDefinition
from space.samplers import StateSampler
from space.state_space import StateSpace
from utils.seed import SeedLike, make_rng

logger = logging.getLogger(__name__)


class InformedSampler(abc.ABC):
    """informed 采样器统一接口.

    生命周期::

        sampler = SomeInformedSampler(problem, config)
        x = sampler.sample_uniform(best_cost)       # None 表示本轮未采到
        h = sampler.heuristic_soln_cost(x)          # 经过 x 的代价下界
        m = sampler.get_informed_measure(best_cost)

    Args:
        problem: 规划问题定义
        max_calls: 单次采样调用的最大尝试次数
        rng: 随机数发生器或种子 (每个实例独占)
    """

    def __init__(self, problem: ProblemDefinition, max_calls: int,
                 rng: SeedLike = None) -> None:
        self._problem = problem
        self._space: StateSpace = problem.space
        self.max_calls = max_calls
        self.rng = make_rng(rng)

    @property
    def problem(self) -> ProblemDefinition:
        return self._problem

    @property
    def space(self) -> StateSpace:
        return self._space

    @property
    def max_calls(self) -> int:
        return self._max_calls

    @max_calls.setter
    def max_calls(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"max_calls 必须 >= 1, 得到 {value}")
        self._max_calls = int(value)

    @abc.abstractmethod
    def sample_uniform(self, max_cost: float) -> Optional[np.ndarray]:
        """在启发式代价 ≤ max_cost 的子集中均匀采样.

        Returns:
            采样状态; 尝试次数耗尽时返回 None
        """

    @abc.abstractmethod
    def sample_uniform_between(self, min_cost: float,
                               max_cost: float) -> Optional[np.ndarray]:
        """在启发式代价 ∈ [min_cost, max_cost] 的壳层中均匀采样."""

    @abc.abstractmethod
    def heuristic_soln_cost(self, state: np.ndarray) -> float:
        """经过 state 的解代价的可采纳下界."""

    @abc.abstractmethod
    def has_informed_measure(self) -> bool:
        """是否能给出 informed 子集的测度."""

    @abc.abstractmethod
    def get_informed_measure(self, current_cost: float) -> float:
        """current_cost 对应 informed 子集的测度."""


class InformedStateSampler:
    """面向规划器的采样器: 以普通 StateSampler 的方式使用 informed 采样.

    每次 ``sample_uniform()`` 通过 ``cost_fn()`` 取得规划器当前最优代价
    (无解时为 inf), 交给 informed 采样器; ``sample_uniform_near`` /
    ``sample_gaussian`` 直接使用整个空间上的均匀采样器。

    Args:
        problem: 规划问题 (其优化目标负责分配 informed 采样器)
        cost_fn: 返回当前最优解代价的回调
        max_calls: 单次采样的最大尝试次数
        rng: 随机数发生器或种子, informed 与普通采样器共用

    Example:
        >>> best = {'cost': math.inf}
        >>> sampler = InformedStateSampler(pdef, lambda: best['cost'])
        >>> q = sampler.sample_uniform()
    """

    def __init__(self, problem: ProblemDefinition,
                 cost_fn: Callable[[], float],
                 max_calls: int = 100,
                 rng: SeedLike = None) -> None:
        self._cost_fn = cost_fn
        self._informed = problem.objective.alloc_informed_sampler(
            problem, max_calls, rng=rng)
        self._base: StateSampler = problem.space.alloc_default_sampler(
            self._informed.rng)
        logger.info("InformedStateSampler: %s, max_calls=%d",
                    type(self._informed).__name__, max_calls)

    @property
    def informed_sampler(self) -> InformedSampler:
        return self._informed

    def current_cost(self) -> float:
        cost = self._cost_fn()
        return math.inf if cost is None else float(cost)

    def sample_uniform(self) -> Optional[np.ndarray]:
        """按当前最优代价采样; 失败返回 None"""
        return self._informed.sample_uniform(self.current_cost())

    def sample_uniform_near(self, near: np.ndarray, distance: float) -> np.ndarray:
        return self._base.sample_uniform_near(near, distance)

    def sample_gaussian(self, mean: np.ndarray, stddev: float) -> np.ndarray:
        return self._base.sample_gaussian(mean, stddev)
