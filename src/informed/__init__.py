"""
informed - 路径长度 informed 采样

找到初始解之后, 只在可能改进当前解的状态子集 (以起点/目标为焦点、
当前最优代价为横径的长椭球) 中采样, 避免在无法改进解的区域浪费样本。

模块:
- hyperspheroid: 长椭球几何 (焦点、旋转、单位球采样、测度)
- direct: PathLengthDirectInfSampler, 椭球直接采样 + 子空间拼装 + 边界拒绝
- base: InformedSampler 接口与面向规划器的 InformedStateSampler

参考论文:
    Gammell, Srinivasa, Barfoot, "Informed RRT*: Optimal Sampling-based
    Path Planning Focused via Direct Sampling of an Admissible Ellipsoidal
    Heuristic", IROS 2014. DOI: 10.1109/IROS.2014.6942976
"""

from .errors import (
    InformedSamplingError,
    UnsupportedProblemError,
    DegenerateGeometryError,
)
from .models import SubspaceSplit, InformedSamplerConfig
from .hyperspheroid import (
    ProlateHyperspheroid,
    unit_nball_measure,
    compute_conjugate_diameter,
    prolate_hyperspheroid_measure,
    rotation_from_foci,
)
from .base import InformedSampler, InformedStateSampler
from .direct import PathLengthDirectInfSampler, decompose_space

__all__ = [
    # 错误
    'InformedSamplingError',
    'UnsupportedProblemError',
    'DegenerateGeometryError',
    # 数据模型
    'SubspaceSplit',
    'InformedSamplerConfig',
    # 几何
    'ProlateHyperspheroid',
    'unit_nball_measure',
    'compute_conjugate_diameter',
    'prolate_hyperspheroid_measure',
    'rotation_from_foci',
    # 采样器
    'InformedSampler',
    'InformedStateSampler',
    'PathLengthDirectInfSampler',
    'decompose_space',
]
