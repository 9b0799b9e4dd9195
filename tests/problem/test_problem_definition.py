"""test_problem_definition.py - ProblemDefinition 与优化目标测试"""
import math

import numpy as np
import pytest

from problem.definition import ProblemDefinition
from problem.objectives import PathLengthOptimizationObjective


class TestProblemDefinition:

    def test_default_objective_is_path_length(self, plane_space):
        pdef = ProblemDefinition(plane_space)
        assert isinstance(pdef.objective, PathLengthOptimizationObjective)

    def test_start_states(self, plane_space):
        pdef = ProblemDefinition(plane_space)
        pdef.add_start_state([0, 0])
        pdef.add_start_state(np.array([1.0, 2.0]))
        assert pdef.n_start_states == 2
        np.testing.assert_array_equal(pdef.start_states[1], [1.0, 2.0])
        pdef.clear_start_states()
        assert pdef.start_states == []

    def test_state_length_checked(self, plane_space):
        pdef = ProblemDefinition(plane_space)
        with pytest.raises(ValueError, match="长度"):
            pdef.add_start_state([0.0, 0.0, 0.0])

    def test_set_goal_replaces(self, plane_space):
        pdef = ProblemDefinition(plane_space)
        pdef.add_goal_state([1, 1])
        pdef.add_goal_state([2, 2])
        assert pdef.goal_state is None
        pdef.set_goal_state([3, 3])
        assert len(pdef.goal_states) == 1
        np.testing.assert_array_equal(pdef.goal_state, [3.0, 3.0])

    def test_returned_states_are_copies(self, plane_space):
        pdef = ProblemDefinition(plane_space)
        pdef.add_start_state([0, 0])
        pdef.start_states[0][0] = 99.0
        assert pdef.start_states[0][0] == 0.0


class TestPathLengthObjective:

    def test_costs(self, plane_space):
        obj = PathLengthOptimizationObjective(plane_space)
        a, b = np.array([0.0, 0.0]), np.array([3.0, 4.0])
        assert obj.motion_cost(a, b) == pytest.approx(5.0)
        assert obj.cost_to_go(a, b) == pytest.approx(5.0)
        assert obj.combine_costs(1.0, 2.5) == 3.5
        assert obj.identity_cost() == 0.0
        assert obj.infinite_cost() == math.inf
        assert obj.is_cost_better_than(1.0, 2.0)
        assert not obj.is_cost_better_than(2.0, 2.0)
