"""
informed/hyperspheroid.py - 长椭球 (prolate hyperspheroid) 几何

由两焦点与横径 (transverse diameter) 定义的 n 维旋转椭球：
    {x : ‖x - f_a‖ + ‖x - f_b‖ ≤ d}

- 最小横径 d_min = ‖f_b - f_a‖, 构造时固定
- 共轭径 c = sqrt(d² - d_min²), n-1 个短轴共享
- 旋转矩阵 C 满足 C·e1 = 焦点方向, det(C) = +1, 构造时计算一次
- 单位球 → 世界坐标的变换 C·diag(d/2, c/2, ..., c/2) 随横径缓存

单位球内均匀采样经该仿射变换后即为椭球内均匀分布 (仿射变换保持
体积比例)，因此无需拒绝。

参考: J. D. Gammell, S. S. Srinivasa, T. D. Barfoot,
"Informed RRT*: Optimal Sampling-based Path Planning Focused via Direct
Sampling of an Admissible Ellipsoidal Heuristic", IROS 2014.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

import numpy as np

from .errors import DegenerateGeometryError

logger = logging.getLogger(__name__)

# 焦点重合判定阈值
_DEGENERATE_EPS = 1e-12


def unit_nball_measure(n: int) -> float:
    """n 维单位球体积 π^(n/2) / Γ(n/2 + 1)"""
    return math.exp(0.5 * n * math.log(math.pi) - math.lgamma(0.5 * n + 1.0))


def compute_conjugate_diameter(min_transverse: float, transverse: float) -> float:
    """共轭径 sqrt(d² - d_min²), 按因式分解计算, 有限横径不会溢出"""
    return math.sqrt(transverse - min_transverse) * math.sqrt(
        transverse + min_transverse)


def prolate_hyperspheroid_measure(n: int, min_transverse: float,
                                  transverse: float) -> float:
    """长椭球体积 = 单位球体积 · (d/2) · (c/2)^(n-1)"""
    if transverse < min_transverse:
        raise ValueError(f"横径 {transverse} 小于最小横径 {min_transverse}")
    if math.isinf(transverse):
        return math.inf
    conjugate = compute_conjugate_diameter(min_transverse, transverse)
    # 超出 float64 范围时饱和为 inf
    with np.errstate(over='ignore'):
        measure = (np.float64(unit_nball_measure(n)) * np.float64(transverse / 2.0)
                   * np.float64(conjugate / 2.0) ** (n - 1))
    return float(measure)


def sample_unit_nball(rng: np.random.Generator, n: int) -> np.ndarray:
    """单位 n 球内均匀采样: 高斯方向 + 半径 u^(1/n)"""
    direction = rng.standard_normal(n)
    norm = np.linalg.norm(direction)
    while norm < 1e-12:
        direction = rng.standard_normal(n)
        norm = np.linalg.norm(direction)
    radius = rng.uniform() ** (1.0 / n)
    return (radius / norm) * direction


def rotation_from_foci(focus_a: np.ndarray, focus_b: np.ndarray) -> np.ndarray:
    """椭球坐标系 → 世界坐标系的旋转矩阵.

    求解 Wahba 问题: 对 M = a1 · e1ᵀ 做 SVD 得 M = U Σ Vᵀ, 取
    C = U · diag(1, ..., 1, det(U)·det(V)) · Vᵀ。最后一项的符号修正
    保证 C 为旋转 (det = +1) 而非反射。n ≥ 2 时 C·e1 = a1。

    Args:
        focus_a, focus_b: 两焦点 (n,)

    Returns:
        (n, n) 正交矩阵

    Raises:
        DegenerateGeometryError: 两焦点重合
    """
    diff = np.asarray(focus_b, dtype=np.float64) - np.asarray(focus_a, dtype=np.float64)
    dist = float(np.linalg.norm(diff))
    if dist < _DEGENERATE_EPS:
        raise DegenerateGeometryError(
            f"焦点重合, 无法确定椭球长轴方向: {np.asarray(focus_a).tolist()}")
    n = diff.shape[0]
    a1 = diff / dist
    e1 = np.zeros(n)
    e1[0] = 1.0
    U, _, Vt = np.linalg.svd(np.outer(a1, e1))
    D = np.ones(n)
    D[-1] = np.linalg.det(U) * np.linalg.det(Vt)
    return (U * D) @ Vt


class ProlateHyperspheroid:
    """n 维长椭球

    Args:
        dimension: 空间维度 n
        focus_a: 第一焦点 (通常为起点)
        focus_b: 第二焦点 (通常为目标)

    Raises:
        ValueError: 焦点维度与 dimension 不符
        DegenerateGeometryError: 两焦点重合

    Example:
        >>> phs = ProlateHyperspheroid(2, [0.0, 0.0], [4.0, 0.0])
        >>> phs.set_transverse_diameter(6.0)
        >>> x = phs.sample_uniform(np.random.default_rng(0))
        >>> phs.is_in_phs(x)
        True
    """

    def __init__(self, dimension: int, focus_a, focus_b) -> None:
        self._dim = int(dimension)
        self._focus_a = np.array(focus_a, dtype=np.float64).ravel()
        self._focus_b = np.array(focus_b, dtype=np.float64).ravel()
        if self._focus_a.shape != (self._dim,) or self._focus_b.shape != (self._dim,):
            raise ValueError(
                f"焦点维度必须为 {self._dim}, 得到 "
                f"{self._focus_a.shape[0]} 和 {self._focus_b.shape[0]}")

        self._min_transverse = float(np.linalg.norm(self._focus_b - self._focus_a))
        self._centre = 0.5 * (self._focus_a + self._focus_b)
        self._rotation = rotation_from_foci(self._focus_a, self._focus_b)

        # 随横径变化的缓存
        self._transverse: Optional[float] = None
        self._conjugate: Optional[float] = None
        self._transform: Optional[np.ndarray] = None
        self._measure: Optional[float] = None
        logger.debug("长椭球: dim=%d, d_min=%.6g, centre=%s", self._dim,
                     self._min_transverse, self._centre.tolist())

    # ── 只读属性 ──

    @property
    def dimension(self) -> int:
        return self._dim

    @property
    def foci(self) -> Tuple[np.ndarray, np.ndarray]:
        return self._focus_a.copy(), self._focus_b.copy()

    @property
    def centre(self) -> np.ndarray:
        return self._centre.copy()

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation.copy()

    @property
    def min_transverse_diameter(self) -> float:
        return self._min_transverse

    @property
    def transverse_diameter(self) -> Optional[float]:
        return self._transverse

    @property
    def conjugate_diameter(self) -> Optional[float]:
        return self._conjugate

    @property
    def is_transformation_set(self) -> bool:
        return self._transform is not None

    # ── 横径 ──

    def set_transverse_diameter(self, transverse: float) -> None:
        """设置横径 (即路径长度上界), 仅在数值变化时重算缓存.

        Raises:
            ValueError: 横径小于最小横径 (椭球为空)
        """
        transverse = float(transverse)
        if transverse == self._transverse:
            return
        if not transverse >= self._min_transverse:
            raise ValueError(
                f"横径 {transverse:.6g} 小于最小横径 {self._min_transverse:.6g}")
        if math.isinf(transverse):
            raise ValueError("横径必须有限")

        self._transverse = transverse
        self._conjugate = compute_conjugate_diameter(self._min_transverse, transverse)
        scales = np.full(self._dim, self._conjugate / 2.0)
        scales[0] = transverse / 2.0
        self._transform = self._rotation * scales[np.newaxis, :]
        self._measure = prolate_hyperspheroid_measure(
            self._dim, self._min_transverse, transverse)

    # ── 采样 ──

    def transform(self, sphere_point: np.ndarray) -> np.ndarray:
        """单位球坐标 → 世界坐标"""
        if self._transform is None:
            raise RuntimeError("尚未设置横径, 变换未定义")
        return self._transform @ np.asarray(sphere_point) + self._centre

    def sample_uniform(self, rng: np.random.Generator) -> np.ndarray:
        """椭球内均匀采样 (不考虑任何状态空间边界)"""
        return self.transform(sample_unit_nball(rng, self._dim))

    # ── 查询 ──

    def path_length_through(self, point: np.ndarray) -> float:
        """经过 point 的直线路径长度 ‖p - f_a‖ + ‖p - f_b‖"""
        p = np.asarray(point, dtype=np.float64)
        return float(np.linalg.norm(p - self._focus_a)
                     + np.linalg.norm(p - self._focus_b))

    def is_in_phs(self, point: np.ndarray, tol: float = 1e-9) -> bool:
        """point 是否在当前横径定义的椭球内 (含相对容差 tol)"""
        if self._transverse is None:
            raise RuntimeError("尚未设置横径")
        return self.path_length_through(point) <= self._transverse * (1.0 + tol) + tol

    def is_on_phs(self, point: np.ndarray, tol: float = 1e-9) -> bool:
        """point 是否在椭球表面上"""
        if self._transverse is None:
            raise RuntimeError("尚未设置横径")
        return abs(self.path_length_through(point) - self._transverse) <= tol

    def measure(self, transverse: Optional[float] = None) -> float:
        """椭球体积; transverse 为 None 时使用当前横径, 不修改缓存"""
        if transverse is None:
            if self._measure is None:
                raise RuntimeError("尚未设置横径")
            return self._measure
        return prolate_hyperspheroid_measure(
            self._dim, self._min_transverse, float(transverse))

    def __repr__(self) -> str:
        return (f"ProlateHyperspheroid(dim={self._dim}, "
                f"d_min={self._min_transverse:.4g}, "
                f"d={self._transverse})")
