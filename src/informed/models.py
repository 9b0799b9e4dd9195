"""
informed/models.py - informed 采样数据模型

- SubspaceSplit: 状态空间的 informed / uninformed 子空间划分
- InformedSamplerConfig: 采样器参数
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, cast

import numpy as np

from space.state_space import CompoundStateSpace, StateSpace


@dataclass(frozen=True)
class SubspaceSplit:
    """状态空间划分

    非复合空间时整个空间都是 informed 的 (trivial 划分, 索引为 None)。
    SE2 / SE3 中 informed 为平移分量, uninformed 为旋转分量。

    Attributes:
        space: 完整状态空间
        informed_space: 椭球所覆盖的子空间
        informed_idx: informed 子空间在复合空间中的索引
        uninformed_space: 与椭球无关的子空间 (可选)
        uninformed_idx: uninformed 子空间在复合空间中的索引
    """
    space: StateSpace
    informed_space: StateSpace
    informed_idx: Optional[int] = None
    uninformed_space: Optional[StateSpace] = None
    uninformed_idx: Optional[int] = None

    def __post_init__(self) -> None:
        if self.informed_idx is not None and not isinstance(
                self.space, CompoundStateSpace):
            raise TypeError(
                f"按索引划分需要复合空间, 得到 {type(self.space).__name__}")

    @property
    def is_trivial(self) -> bool:
        return self.informed_idx is None

    @property
    def informed_dimension(self) -> int:
        return self.informed_space.dimension

    @property
    def uninformed_measure(self) -> float:
        if self.uninformed_space is None:
            return 1.0
        return self.uninformed_space.measure

    def informed_component(self, state: np.ndarray) -> np.ndarray:
        """取出状态的 informed 分量"""
        if self.is_trivial:
            return np.asarray(state, dtype=np.float64)
        space = cast(CompoundStateSpace, self.space)
        return space.get_component(state, self.informed_idx)

    def compose(self, informed: np.ndarray,
                uninformed: Optional[np.ndarray] = None) -> np.ndarray:
        """由 informed 与 uninformed 分量拼装完整状态"""
        if self.is_trivial:
            return np.asarray(informed, dtype=np.float64)
        space = cast(CompoundStateSpace, self.space)
        state = space.alloc_state()
        space.set_component(state, self.informed_idx, informed)
        if uninformed is not None:
            space.set_component(state, self.uninformed_idx, uninformed)
        return state


@dataclass
class InformedSamplerConfig:
    """informed 采样器参数配置

    Attributes:
        max_calls: 单次采样调用的最大尝试次数 (边界拒绝与代价壳层拒绝共享)
        seed: 随机种子 (0 = 按时间自动生成)
        weight_by_measure: 多起点时按椭球测度加权选择, 并按包含次数拒绝重叠
            区域, 使样本在椭球并集上均匀; False 时在合格椭球中均匀选择
        rejection_when_covered: informed 测度不小于空间测度时, 改为
            在整个空间均匀采样并按启发式代价拒绝
    """
    max_calls: int = 100
    seed: int = 0
    weight_by_measure: bool = False
    rejection_when_covered: bool = True

    def __post_init__(self) -> None:
        if self.max_calls < 1:
            raise ValueError(f"max_calls 必须 >= 1, 得到 {self.max_calls}")

    def to_dict(self) -> Dict[str, Any]:
        """转为字典"""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InformedSamplerConfig':
        """从字典创建（忽略未知字段，缺失字段用默认值）"""
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)
