"""
problem - 规划问题定义与优化目标
"""

from .objectives import OptimizationObjective, PathLengthOptimizationObjective
from .definition import ProblemDefinition

__all__ = [
    'OptimizationObjective',
    'PathLengthOptimizationObjective',
    'ProblemDefinition',
]
