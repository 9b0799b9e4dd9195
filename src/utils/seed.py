"""
utils/seed.py — 随机数发生器管理

每个采样器持有独立的 numpy Generator，互不共享，便于复现。
"""

from __future__ import annotations

import time
from typing import Optional, Union

import numpy as np

SeedLike = Union[int, np.random.Generator, None]


def make_seed(seed: Optional[int] = 0) -> int:
    """seed 为 0 或 None 时用当前时间戳生成; 否则原样返回."""
    if not seed:
        return time.time_ns() % (2**31)
    return int(seed)


def make_rng(seed: SeedLike = 0) -> np.random.Generator:
    """返回 numpy Generator.

    已有的 Generator 原样返回 (调用方显式共享), 整数按 ``make_seed`` 处理.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(make_seed(seed))
