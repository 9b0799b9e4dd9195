"""
informed/direct.py - 路径长度直接椭球 informed 采样

PathLengthDirectInfSampler 只在 "可能改进当前解" 的状态子集中采样。
对路径长度目标, 该子集恰为以 (起点, 目标) 为焦点、以当前最优代价为
横径的长椭球; 对每个起点各维护一个长椭球, 直接在其中均匀采样。

两种工作模式：
1. pass-through: 尚无有限代价 (无解) 时, 退化为整个空间上的均匀采样
2. informed: 收到有限代价后, 从合格椭球中直接采样, 再做边界拒绝

复合空间 (SE2 / SE3) 中椭球只覆盖平移分量, 旋转分量由独立的均匀
采样器补齐后拼装为完整状态。

单次调用的拒绝循环受 max_calls 约束; 耗尽时返回 None, 不抛异常。
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import List, Optional, Tuple

import numpy as np

from problem.definition import ProblemDefinition
from problem.objectives import PathLengthOptimizationObjective
from space.samplers import StateSampler
from space.state_space import (RealVectorStateSpace, SE2StateSpace,
                               SE3StateSpace, StateSpace)
from utils.seed import SeedLike
from .base import InformedSampler
from .errors import DegenerateGeometryError, UnsupportedProblemError
from .hyperspheroid import ProlateHyperspheroid
from .models import InformedSamplerConfig, SubspaceSplit

logger = logging.getLogger(__name__)


def decompose_space(space: StateSpace) -> SubspaceSplit:
    """把状态空间划分为 informed / uninformed 子空间.

    支持:
        - RealVectorStateSpace: 整个空间 informed
        - SE2StateSpace: R^2 informed, SO(2) uninformed
        - SE3StateSpace: R^3 informed, SO(3) uninformed

    Raises:
        UnsupportedProblemError: 其他空间, 或平移分量权重不为 1
    """
    if isinstance(space, RealVectorStateSpace):
        return SubspaceSplit(space=space, informed_space=space)

    if isinstance(space, (SE2StateSpace, SE3StateSpace)):
        # 平移分量权重不为 1 时, 欧氏距离不再是空间度量下的可采纳启发
        if space.subspace_weight(0) != 1.0:
            raise UnsupportedProblemError(
                f"{space.name}: 平移子空间权重必须为 1.0, "
                f"得到 {space.subspace_weight(0)}")
        return SubspaceSplit(
            space=space,
            informed_space=space.subspace(0), informed_idx=0,
            uninformed_space=space.subspace(1), uninformed_idx=1,
        )

    raise UnsupportedProblemError(
        f"不支持的状态空间 {type(space).__name__}: 仅支持 R^n, SE(2), SE(3)")


class PathLengthDirectInfSampler(InformedSampler):
    """路径长度目标的直接椭球 informed 采样器

    Args:
        problem: 规划问题 (单一目标, 路径长度目标, 受支持的状态空间)
        config: 采样参数, 默认 InformedSamplerConfig()
        rng: 随机数发生器或种子; None 时使用 ``config.seed``

    Raises:
        UnsupportedProblemError: 目标数不为 1 / 无起点 / 非路径长度目标 /
            状态空间不可分解
        DegenerateGeometryError: 某个起点与目标的 informed 分量重合

    Example:
        >>> sampler = PathLengthDirectInfSampler(pdef, InformedSamplerConfig(seed=1))
        >>> x = sampler.sample_uniform(best_cost)
        >>> if x is not None:
        ...     assert sampler.heuristic_soln_cost(x) <= best_cost
    """

    def __init__(self, problem: ProblemDefinition,
                 config: Optional[InformedSamplerConfig] = None,
                 rng: SeedLike = None) -> None:
        # 复制一份, max_calls 的修改不影响调用方的配置对象
        self.config = (dataclasses.replace(config) if config is not None
                       else InformedSamplerConfig())
        super().__init__(problem, self.config.max_calls,
                         rng if rng is not None else self.config.seed)

        goals = problem.goal_states
        if len(goals) != 1:
            raise UnsupportedProblemError(
                f"直接 informed 采样只支持单一目标状态, 得到 {len(goals)} 个")
        starts = problem.start_states
        if not starts:
            raise UnsupportedProblemError("问题没有起点状态")
        if not isinstance(problem.objective, PathLengthOptimizationObjective):
            raise UnsupportedProblemError(
                f"直接 informed 采样只支持路径长度目标, "
                f"得到 {type(problem.objective).__name__}")

        self._split = decompose_space(self.space)
        dim = self._split.informed_dimension
        goal = self._split.informed_component(goals[0])

        self._phs: List[ProlateHyperspheroid] = []
        for i, start in enumerate(starts):
            try:
                phs = ProlateHyperspheroid(
                    dim, self._split.informed_component(start), goal)
            except DegenerateGeometryError as e:
                raise DegenerateGeometryError(
                    f"起点 #{i} 与目标重合, 无法构建椭球: {e}") from e
            self._phs.append(phs)

        self._base_sampler: StateSampler = self.space.alloc_default_sampler(self.rng)
        self._uninformed_sampler: Optional[StateSampler] = None
        if self._split.uninformed_space is not None:
            self._uninformed_sampler = \
                self._split.uninformed_space.alloc_default_sampler(self.rng)

        self._is_informed = False
        self._n_failures = 0

        logger.info(
            "PathLengthDirectInfSampler: space=%s, informed_dim=%d, "
            "n_phs=%d, max_calls=%d",
            self.space.name, dim, len(self._phs), self.max_calls)

    # ── 属性 ──

    @property
    def hyperspheroids(self) -> Tuple[ProlateHyperspheroid, ...]:
        return tuple(self._phs)

    @property
    def subspace_split(self) -> SubspaceSplit:
        return self._split

    @property
    def base_sampler(self) -> StateSampler:
        return self._base_sampler

    @InformedSampler.max_calls.setter
    def max_calls(self, value: int) -> None:
        InformedSampler.max_calls.fset(self, value)
        self.config.max_calls = self._max_calls

    @property
    def is_informed(self) -> bool:
        """是否已进入 informed 模式 (收到过有限代价)"""
        return self._is_informed

    @property
    def n_failures(self) -> int:
        """尝试次数耗尽或无合格椭球的累计调用数"""
        return self._n_failures

    # ── 采样接口 ──

    def sample_uniform(self, max_cost: float) -> Optional[np.ndarray]:
        return self._sample(float(max_cost), None)

    def sample_uniform_between(self, min_cost: float,
                               max_cost: float) -> Optional[np.ndarray]:
        if min_cost > max_cost:
            logger.debug("空代价壳层 [%.6g, %.6g]", min_cost, max_cost)
            self._n_failures += 1
            return None
        return self._sample(float(max_cost), float(min_cost))

    def heuristic_soln_cost(self, state: np.ndarray) -> float:
        x = self._split.informed_component(state)
        return min(phs.path_length_through(x) for phs in self._phs)

    def has_informed_measure(self) -> bool:
        return True

    def get_informed_measure(self, current_cost: float) -> float:
        """informed 子集测度, 不超过整个空间的测度"""
        space_measure = self.space.measure
        if not math.isfinite(current_cost):
            return space_measure
        return min(space_measure, self._summed_measure(current_cost))

    # ── 内部实现 ──

    def _qualifying(self, max_cost: float) -> List[ProlateHyperspheroid]:
        """最小横径不超过 max_cost 的椭球 (几何上可能改进当前解)"""
        return [phs for phs in self._phs
                if phs.min_transverse_diameter <= max_cost]

    def _summed_measure(self, cost: float) -> float:
        total = sum(phs.measure(cost) for phs in self._qualifying(cost))
        return total * self._split.uninformed_measure

    def _sample(self, max_cost: float,
                min_cost: Optional[float]) -> Optional[np.ndarray]:
        if not math.isfinite(max_cost):
            if min_cost is None:
                return self._base_sampler.sample_uniform()
            return self._rejection_sample(max_cost, min_cost)

        if not self._is_informed:
            self._is_informed = True
            logger.debug("进入 informed 模式: max_cost=%.6g", max_cost)

        candidates = self._qualifying(max_cost)
        if not candidates:
            logger.debug("无合格椭球: max_cost=%.6g < 所有最小横径", max_cost)
            self._n_failures += 1
            return None
        for phs in candidates:
            phs.set_transverse_diameter(max_cost)

        if (self.config.rejection_when_covered
                and self._summed_measure(max_cost) >= self.space.measure):
            return self._rejection_sample(max_cost, min_cost)
        return self._direct_sample(candidates, min_cost)

    def _rejection_sample(self, max_cost: float,
                          min_cost: Optional[float]) -> Optional[np.ndarray]:
        """整个空间均匀采样, 按启发式代价拒绝"""
        for _ in range(self.max_calls):
            state = self._base_sampler.sample_uniform()
            h = self.heuristic_soln_cost(state)
            if h > max_cost:
                continue
            if min_cost is not None and h < min_cost:
                continue
            return state
        return self._exhausted(max_cost, min_cost)

    def _direct_sample(self, candidates: List[ProlateHyperspheroid],
                       min_cost: Optional[float]) -> Optional[np.ndarray]:
        """从合格椭球直接采样, 拼装 uninformed 分量后做边界拒绝"""
        weights = None
        if self.config.weight_by_measure and len(candidates) > 1:
            measures = np.array([phs.measure() for phs in candidates])
            total = float(measures.sum())
            # 测度饱和为 inf 时无法加权, 退回均匀选择
            if 0.0 < total < math.inf:
                weights = measures / total

        for _ in range(self.max_calls):
            if weights is not None:
                phs = candidates[int(self.rng.choice(len(candidates), p=weights))]
            else:
                phs = candidates[int(self.rng.integers(len(candidates)))]

            informed = phs.sample_uniform(self.rng)
            uninformed = None
            if self._uninformed_sampler is not None:
                uninformed = self._uninformed_sampler.sample_uniform()
            state = self._split.compose(informed, uninformed)

            if not self.space.satisfies_bounds(state):
                continue
            if weights is not None and not self._keep_overlapping(informed, candidates):
                continue
            if min_cost is not None and self.heuristic_soln_cost(state) < min_cost:
                continue
            return state

        return self._exhausted(candidates[0].transverse_diameter, min_cost)

    def _keep_overlapping(self, informed: np.ndarray,
                          candidates: List[ProlateHyperspheroid]) -> bool:
        """落在 k 个椭球中的样本以 1/k 概率保留, 抵消重叠区域的重复计数"""
        k = sum(1 for phs in candidates if phs.is_in_phs(informed))
        return k <= 1 or self.rng.uniform() < 1.0 / k

    def _exhausted(self, max_cost: float,
                   min_cost: Optional[float]) -> None:
        self._n_failures += 1
        logger.debug("informed 采样失败: %d 次尝试耗尽 (min_cost=%s, max_cost=%.6g)",
                     self.max_calls, min_cost, max_cost)
        return None
