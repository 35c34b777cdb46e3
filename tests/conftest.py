"""Pytest configuration and shared fixtures for dualfallback tests."""

import os

import numpy as np
import pytest

from dualfallback import Model, Results, ResultStatus, Sense
from dualfallback.sets import GreaterThan


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture
def small_lp():
    """min 2x + 3y  s.t.  x + y >= 1, x >= 0, y >= 0, solved at x = 1, y = 0.

    The optimal dual of ``x + y >= 1`` is 2, so the bound duals (reduced
    costs) are 0 for x and 1 for y.
    """
    model = Model(name="small_lp")
    x = model.add_variable("x")
    y = model.add_variable("y")
    model.set_objective(2*x + 3*y, Sense.MINIMIZE)
    cover = model.add_constraint(x + y, GreaterThan(1.0), name="cover")
    bound_x = model.add_constraint(x, GreaterThan(0.0))
    bound_y = model.add_constraint(y, GreaterThan(0.0))
    model.add_result(Results(
        ResultStatus.FEASIBLE_POINT, ResultStatus.FEASIBLE_POINT,
        variable_primal={x: 1.0, y: 0.0},
        constraint_dual={cover: 2.0},
    ))
    return model, (x, y), (cover, bound_x, bound_y)
