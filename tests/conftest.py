"""
conftest.py — pytest fixtures shared across the test suite.

Puts ``src/`` on the import path and provides standard spaces and a
problem factory so that individual test modules stay short and focused.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for path in (ROOT, SRC):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from problem.definition import ProblemDefinition  # noqa: E402
from space.bounds import RealVectorBounds  # noqa: E402
from space.state_space import (RealVectorStateSpace, SE2StateSpace,  # noqa: E402
                               SE3StateSpace)


# =========================================================================
# Random generator
# =========================================================================

@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


# =========================================================================
# State spaces
# =========================================================================

@pytest.fixture()
def plane_space() -> RealVectorStateSpace:
    """R^2 bounded by [-10, 10]^2."""
    return RealVectorStateSpace(2, RealVectorBounds.uniform(2, -10.0, 10.0))


@pytest.fixture()
def open_plane_space() -> RealVectorStateSpace:
    """R^2 with bounds far enough away that they never reject a sample."""
    return RealVectorStateSpace(2, RealVectorBounds.uniform(2, -1e3, 1e3))


@pytest.fixture()
def se2_space() -> SE2StateSpace:
    return SE2StateSpace(RealVectorBounds.uniform(2, -10.0, 10.0))


@pytest.fixture()
def se3_space() -> SE3StateSpace:
    return SE3StateSpace(RealVectorBounds.uniform(3, -10.0, 10.0))


# =========================================================================
# Problem factory
# =========================================================================

@pytest.fixture()
def make_problem():
    """make_problem(space, starts, goal, objective=None) -> ProblemDefinition"""
    def _make(space, starts, goal, objective=None):
        pdef = ProblemDefinition(space, objective)
        for s in starts:
            pdef.add_start_state(s)
        pdef.set_goal_state(goal)
        return pdef
    return _make
