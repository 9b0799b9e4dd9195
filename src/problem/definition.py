"""
problem/definition.py - 规划问题定义

ProblemDefinition 汇总状态空间、起点集合、目标状态与优化目标。
起点可以有多个 (每个起点与目标构成一对椭球焦点)。
"""

import logging
from typing import List, Optional

import numpy as np

from space.state_space import StateSpace
from .objectives import OptimizationObjective, PathLengthOptimizationObjective

logger = logging.getLogger(__name__)


class ProblemDefinition:
    """规划问题

    Args:
        space: 状态空间
        objective: 优化目标, 默认路径长度

    Example:
        >>> pdef = ProblemDefinition(space)
        >>> pdef.add_start_state([0.0, 0.0])
        >>> pdef.set_goal_state([4.0, 0.0])
    """

    def __init__(self, space: StateSpace,
                 objective: Optional[OptimizationObjective] = None) -> None:
        self.space = space
        self.objective: OptimizationObjective = (
            objective if objective is not None
            else PathLengthOptimizationObjective(space))
        self._starts: List[np.ndarray] = []
        self._goals: List[np.ndarray] = []

    def _as_state(self, state) -> np.ndarray:
        arr = np.array(state, dtype=np.float64).ravel()
        if arr.shape[0] != self.space.size:
            raise ValueError(f"期望长度 {self.space.size} 的状态, "
                             f"得到 {arr.shape[0]}")
        return arr

    # ── 起点 ──

    def add_start_state(self, state) -> None:
        s = self._as_state(state)
        self._starts.append(s)
        logger.debug("添加起点 #%d: %s", len(self._starts) - 1, s.tolist())

    def clear_start_states(self) -> None:
        self._starts.clear()

    @property
    def start_states(self) -> List[np.ndarray]:
        return [s.copy() for s in self._starts]

    @property
    def n_start_states(self) -> int:
        return len(self._starts)

    # ── 目标 ──

    def add_goal_state(self, state) -> None:
        """追加目标状态 (informed 采样只接受单一目标)"""
        g = self._as_state(state)
        self._goals.append(g)
        logger.debug("添加目标 #%d: %s", len(self._goals) - 1, g.tolist())

    def set_goal_state(self, state) -> None:
        """设置唯一目标状态, 覆盖已有目标"""
        self._goals.clear()
        self.add_goal_state(state)

    @property
    def goal_states(self) -> List[np.ndarray]:
        return [g.copy() for g in self._goals]

    @property
    def goal_state(self) -> Optional[np.ndarray]:
        """唯一目标; 没有或多于一个时返回 None"""
        if len(self._goals) != 1:
            return None
        return self._goals[0].copy()

    def __repr__(self) -> str:
        return (f"ProblemDefinition(space={self.space!r}, "
                f"starts={len(self._starts)}, goals={len(self._goals)}, "
                f"objective={type(self.objective).__name__})")
