"""
space - 状态空间与均匀采样器

为 informed 采样提供状态空间接口：维度、边界判断、测度、距离，
以及复合空间 (SE2 / SE3) 的子空间取出与拼装。
"""

from .bounds import RealVectorBounds
from .state_space import (
    StateSpace,
    RealVectorStateSpace,
    SO2StateSpace,
    SO3StateSpace,
    CompoundStateSpace,
    SE2StateSpace,
    SE3StateSpace,
)
from .samplers import (
    StateSampler,
    RealVectorStateSampler,
    SO2StateSampler,
    SO3StateSampler,
    CompoundStateSampler,
)

__all__ = [
    'RealVectorBounds',
    # 状态空间
    'StateSpace',
    'RealVectorStateSpace',
    'SO2StateSpace',
    'SO3StateSpace',
    'CompoundStateSpace',
    'SE2StateSpace',
    'SE3StateSpace',
    # 采样器
    'StateSampler',
    'RealVectorStateSampler',
    'SO2StateSampler',
    'SO3StateSampler',
    'CompoundStateSampler',
]
