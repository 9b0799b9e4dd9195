"""informed/errors.py - informed 采样的配置错误"""


class InformedSamplingError(ValueError):
    """informed 采样器无法用于当前问题 (构造期错误)"""


class UnsupportedProblemError(InformedSamplingError):
    """问题不受支持: 多目标 / 非路径长度目标 / 无法分解的状态空间"""


class DegenerateGeometryError(InformedSamplingError):
    """椭球退化: 两焦点重合, 长轴方向无定义"""
