"""utils — 通用工具 (随机种子)"""

from .seed import make_rng, make_seed

__all__ = ["make_rng", "make_seed"]
