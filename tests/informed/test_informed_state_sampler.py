"""
Tests for the planner-facing InformedStateSampler wrapper and the
objective-driven allocation of informed samplers.
"""

import math

import numpy as np
import pytest

from informed.base import InformedSampler, InformedStateSampler
from informed.direct import PathLengthDirectInfSampler
from informed.errors import InformedSamplingError, UnsupportedProblemError
from informed.models import InformedSamplerConfig
from problem.objectives import OptimizationObjective, PathLengthOptimizationObjective


class _ConstantObjective(OptimizationObjective):
    def motion_cost(self, s1, s2):
        return 1.0


class TestObjectiveAllocation:

    def test_path_length_allocates_direct_sampler(self, plane_space, make_problem):
        pdef = make_problem(plane_space, [[0, 0]], [4, 0])
        sampler = pdef.objective.alloc_informed_sampler(pdef, max_calls=25, seed=5)
        assert isinstance(sampler, PathLengthDirectInfSampler)
        assert isinstance(sampler, InformedSampler)
        assert sampler.max_calls == 25
        assert sampler.config.seed == 5

    def test_base_objective_has_no_informed_sampler(self, plane_space, make_problem):
        obj = _ConstantObjective(plane_space)
        pdef = make_problem(plane_space, [[0, 0]], [4, 0], objective=obj)
        with pytest.raises(UnsupportedProblemError):
            obj.alloc_informed_sampler(pdef)

    def test_wrapper_rejects_non_path_length_objective(self, plane_space, make_problem):
        obj = _ConstantObjective(plane_space)
        pdef = make_problem(plane_space, [[0, 0]], [4, 0], objective=obj)
        # planners catch configuration errors as ValueError
        with pytest.raises(InformedSamplingError):
            InformedStateSampler(pdef, lambda: math.inf)
        with pytest.raises(ValueError):
            InformedStateSampler(pdef, lambda: math.inf)

    def test_abc_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            InformedSampler()  # type: ignore


class TestInformedStateSampler:

    def test_follows_current_cost(self, plane_space, make_problem):
        start, goal = np.array([0.0, 0.0]), np.array([4.0, 0.0])
        pdef = make_problem(plane_space, [start], goal)
        best = {"cost": math.inf}
        sampler = InformedStateSampler(pdef, lambda: best["cost"], max_calls=50, rng=11)

        before = [sampler.sample_uniform() for _ in range(500)]
        assert all(plane_space.satisfies_bounds(x) for x in before)
        assert max(np.linalg.norm(x - start) + np.linalg.norm(x - goal) for x in before) > 6.0

        best["cost"] = 6.0
        after = [sampler.sample_uniform() for _ in range(500)]
        for x in after:
            assert x is not None
            assert np.linalg.norm(x - start) + np.linalg.norm(x - goal) <= 6.0 + 1e-9
        assert sampler.informed_sampler.is_informed

    def test_none_cost_means_no_solution(self, plane_space, make_problem):
        pdef = make_problem(plane_space, [[0, 0]], [4, 0])
        sampler = InformedStateSampler(pdef, lambda: None, rng=1)
        assert sampler.current_cost() == math.inf
        assert sampler.sample_uniform() is not None

    def test_near_and_gaussian_pass_through(self, plane_space, make_problem):
        pdef = make_problem(plane_space, [[0, 0]], [4, 0])
        sampler = InformedStateSampler(pdef, lambda: 6.0, rng=2)
        centre = np.array([9.5, -9.5])
        for _ in range(200):
            x = sampler.sample_uniform_near(centre, 1.0)
            assert plane_space.satisfies_bounds(x)
            assert np.all(np.abs(x - centre) <= 1.0)
            g = sampler.sample_gaussian(centre, 0.5)
            assert plane_space.satisfies_bounds(g)

    def test_unreachable_cost_reports_failure(self, plane_space, make_problem):
        pdef = make_problem(plane_space, [[0, 0]], [4, 0])
        sampler = InformedStateSampler(pdef, lambda: 2.0, max_calls=10, rng=3)
        assert sampler.sample_uniform() is None


class TestInformedSamplerConfig:

    def test_defaults(self):
        cfg = InformedSamplerConfig()
        assert cfg.max_calls == 100
        assert cfg.weight_by_measure is False
        assert cfg.rejection_when_covered is True

    def test_dict_round_trip_ignores_unknown(self):
        cfg = InformedSamplerConfig.from_dict(
            {"max_calls": 7, "weight_by_measure": True, "unknown_key": 1})
        assert cfg.max_calls == 7
        assert cfg.weight_by_measure is True
        assert InformedSamplerConfig.from_dict(cfg.to_dict()) == cfg

    def test_invalid_max_calls(self):
        with pytest.raises(ValueError, match="max_calls"):
            InformedSamplerConfig(max_calls=0)

    def test_max_calls_setter_validates(self, plane_space, make_problem):
        pdef = make_problem(plane_space, [[0, 0]], [4, 0])
        sampler = PathLengthOptimizationObjective(plane_space).alloc_informed_sampler(pdef)
        sampler.max_calls = 3
        assert sampler.max_calls == 3
        with pytest.raises(ValueError):
            sampler.max_calls = 0

    def test_max_calls_setter_updates_config(self, plane_space, make_problem):
        pdef = make_problem(plane_space, [[0, 0]], [4, 0])
        cfg = InformedSamplerConfig(max_calls=20, seed=4)
        sampler = PathLengthDirectInfSampler(pdef, cfg)
        sampler.max_calls = 3
        assert sampler.config.max_calls == 3
        assert sampler.config.to_dict()["max_calls"] == 3
        # caller's config object is left alone
        assert cfg.max_calls == 20
