import numpy as np
import pytest
from scipy import sparse

from dualfallback import (
    AmbiguousVariableConstraint, ConstraintDual, Model, Parameters, Results, ResultStatus,
    Sense, UnsupportedConstraintKind, UnsupportedObjectiveKind, constraint_dual_fallback
)
from dualfallback.dual import (
    constraint_contribution, family_contribution, variable_coefficient, variable_dual
)
from dualfallback.modeling import (
    FunctionKind, ScalarAffineTerm, ScalarQuadraticFunction, ScalarQuadraticTerm, Variable,
    VectorAffineFunction, VectorAffineTerm, VectorQuadraticFunction, VectorQuadraticTerm
)
from dualfallback.sets import (
    EqualTo, GreaterThan, LessThan, Nonnegatives, PositiveSemidefiniteConeTriangle
)


def _feasible(variable_primal=None, constraint_dual=None, dual_status=ResultStatus.FEASIBLE_POINT):
    return Results(ResultStatus.FEASIBLE_POINT, dual_status,
                   variable_primal=variable_primal, constraint_dual=constraint_dual)


def test_variable_coefficient_scalar_sums_duplicates():
    x, y, z = Variable(0), Variable(1), Variable(2)
    f = 2*x + y - 0.5*x
    assert variable_coefficient(f, x) == 1.5
    assert variable_coefficient(f, y) == 1.0
    assert variable_coefficient(f, z) == 0.0


def test_variable_coefficient_vector_accumulates_rows():
    x, y = Variable(0), Variable(1)
    f = VectorAffineFunction([
        VectorAffineTerm(0, ScalarAffineTerm(1.0, x)),
        VectorAffineTerm(2, ScalarAffineTerm(3.0, x)),
        VectorAffineTerm(2, ScalarAffineTerm(-1.0, x)),
        VectorAffineTerm(1, ScalarAffineTerm(4.0, y)),
    ], np.zeros(3))
    np.testing.assert_array_equal(variable_coefficient(f, x), [1.0, 0.0, 2.0])
    np.testing.assert_array_equal(variable_coefficient(f, y), [0.0, 4.0, 0.0])
    np.testing.assert_array_equal(variable_coefficient(f, Variable(5)), np.zeros(3))


def test_reduced_costs_of_small_lp(small_lp):
    model, (x, y), (cover, bound_x, bound_y) = small_lp
    attr = ConstraintDual()
    # stationarity: c - A'y with c = (2, 3), A = (1, 1), y = 2
    assert pytest.approx(0.0) == variable_dual(model, attr, bound_x, x)
    assert pytest.approx(1.0) == variable_dual(model, attr, bound_y, y)


@pytest.mark.parametrize("sense, expected", [(Sense.MINIMIZE, 1.0), (Sense.MAXIMIZE, -1.0)])
def test_single_variable_objective_sign(sense, expected):
    model = Model()
    x = model.add_variable("x")
    model.set_objective(x, sense)
    bound = model.add_constraint(x, GreaterThan(0.0))
    model.add_result(_feasible({x: 0.0}))
    assert variable_dual(model, ConstraintDual(), bound, x) == expected


def test_single_variable_objective_on_other_variable_contributes_nothing():
    model = Model()
    x, y = model.add_variables(2)
    model.set_objective(y, Sense.MINIMIZE)
    bound = model.add_constraint(x, GreaterThan(0.0))
    model.add_result(_feasible())
    assert variable_dual(model, ConstraintDual(), bound, x) == 0.0


def test_maximization_gives_same_duals_as_negated_minimization():
    model = Model()
    x, y = model.add_variables(2)
    model.set_objective(-2*x - 3*y, Sense.MAXIMIZE)
    cover = model.add_constraint(x + y, GreaterThan(1.0))
    bound_y = model.add_constraint(y, GreaterThan(0.0))
    model.add_result(_feasible({x: 1.0, y: 0.0}, {cover: 2.0}))
    assert pytest.approx(1.0) == variable_dual(model, ConstraintDual(), bound_y, y)


def test_ray_leaves_objective_out(small_lp):
    model, (x, y), (cover, bound_x, bound_y) = small_lp
    model.clear_results()
    model.add_result(_feasible(constraint_dual={cover: 2.0},
                               dual_status=ResultStatus.INFEASIBILITY_CERTIFICATE))
    assert variable_dual(model, ConstraintDual(), bound_x, x) == -2.0


def test_nearly_infeasible_ray_is_configurable(small_lp):
    model, (x, y), (cover, bound_x, bound_y) = small_lp
    model.clear_results()
    model.add_result(_feasible(constraint_dual={cover: 2.0},
                               dual_status=ResultStatus.NEARLY_INFEASIBILITY_CERTIFICATE))
    attr = ConstraintDual()
    assert variable_dual(model, attr, bound_x, x) == -2.0
    params = Parameters()
    params.nearly_infeasible_is_ray = False
    assert variable_dual(model, attr, bound_x, x, params) == 0.0


def test_vector_affine_constraint_uses_adjoint():
    model = Model()
    x, y = model.add_variables(2)
    model.set_objective(x + y, Sense.MINIMIZE)
    A = sparse.csr_matrix(np.array([[1.0, 2.0], [3.0, 1.0]]))
    rows = model.add_constraint(VectorAffineFunction.from_matrix(A, [x, y], [-2.0, -3.0]),
                                Nonnegatives(2))
    bounds = model.add_constraint([x, y], Nonnegatives(2))
    model.add_result(_feasible(constraint_dual={rows: [0.2, 0.2]}))
    attr = ConstraintDual()
    # c - A'y = (1, 1) - (0.8, 0.6)
    assert pytest.approx(0.2) == variable_dual(model, attr, bounds, x)
    assert pytest.approx(0.4) == variable_dual(model, attr, bounds, y)
    assert pytest.approx(0.8) == constraint_contribution(model, attr, x, rows)


def test_vector_affine_in_psd_cone_doubles_off_diagonal_rows():
    model = Model()
    w, x = model.add_variables(2)
    model.set_objective(5*x, Sense.MINIMIZE)
    psd = model.add_constraint(VectorAffineFunction.from_rows([w, x, w]),
                               PositiveSemidefiniteConeTriangle(2))
    bound_w = model.add_constraint(w, GreaterThan(0.0))
    bound_x = model.add_constraint(x, GreaterThan(0.0))
    model.add_result(_feasible(constraint_dual={psd: [1.0, 2.0, 3.0]}))
    attr = ConstraintDual()
    assert constraint_contribution(model, attr, w, psd) == 4.0
    assert constraint_contribution(model, attr, x, psd) == 4.0
    assert variable_dual(model, attr, bound_w, w) == -4.0
    assert variable_dual(model, attr, bound_x, x) == 1.0


def test_family_contribution_sums_affine_family(small_lp):
    model, (x, y), (cover, bound_x, bound_y) = small_lp
    extra = model.add_constraint(3*x, GreaterThan(0.0))
    model.clear_results()
    model.add_result(_feasible(constraint_dual={cover: 2.0, extra: 0.5}))
    total = family_contribution(model, ConstraintDual(), bound_x, x,
                                FunctionKind.SCALAR_AFFINE, GreaterThan)
    assert total == 2.0 + 1.5


def test_other_variable_wise_constraint_is_ambiguous(small_lp):
    model, (x, y), (cover, bound_x, bound_y) = small_lp
    upper = model.add_constraint(x, LessThan(10.0))
    with pytest.raises(AmbiguousVariableConstraint) as excinfo:
        variable_dual(model, ConstraintDual(), bound_x, x)
    assert excinfo.value.variable == x
    assert excinfo.value.constraint_index == bound_x
    assert excinfo.value.other_index == upper
    # y is not in the new constraint
    assert pytest.approx(1.0) == variable_dual(model, ConstraintDual(), bound_y, y)


def test_same_family_variable_wise_constraint_is_ambiguous():
    model = Model()
    x, y = model.add_variables(2)
    first = model.add_constraint([x, y], Nonnegatives(2))
    second = model.add_constraint([x], Nonnegatives(1))
    model.add_result(_feasible())
    with pytest.raises(AmbiguousVariableConstraint):
        family_contribution(model, ConstraintDual(), first, x,
                            FunctionKind.VECTOR_OF_VARIABLES, Nonnegatives)
    assert family_contribution(model, ConstraintDual(), first, y,
                               FunctionKind.VECTOR_OF_VARIABLES, Nonnegatives) == 0.0
    with pytest.raises(AmbiguousVariableConstraint):
        variable_dual(model, ConstraintDual(), second, x)


def test_quadratic_constraint_family_is_unsupported(small_lp):
    model, (x, y), (cover, bound_x, bound_y) = small_lp
    z = model.add_variable("z")
    model.add_constraint(
        ScalarQuadraticFunction([], [ScalarQuadraticTerm(1.0, z, z)]), LessThan(1.0)
    )
    # raised even though x is not in the quadratic constraint
    with pytest.raises(UnsupportedConstraintKind) as excinfo:
        variable_dual(model, ConstraintDual(), bound_x, x)
    assert excinfo.value.function_kind == FunctionKind.SCALAR_QUADRATIC
    assert excinfo.value.set_type is LessThan


def test_quadratic_objective_is_unsupported():
    model = Model()
    x = model.add_variable("x")
    model.set_objective(ScalarQuadraticFunction([], [ScalarQuadraticTerm(1.0, x, x)]))
    bound = model.add_constraint(x, GreaterThan(0.0))
    model.add_result(_feasible({x: 0.0}))
    with pytest.raises(UnsupportedObjectiveKind) as excinfo:
        variable_dual(model, ConstraintDual(), bound, x)
    assert excinfo.value.kind == FunctionKind.SCALAR_QUADRATIC

    # on a ray the objective is never looked at
    model.clear_results()
    model.add_result(_feasible(dual_status=ResultStatus.INFEASIBILITY_CERTIFICATE))
    assert variable_dual(model, ConstraintDual(), bound, x) == 0.0


def test_result_index_selects_duals(small_lp):
    model, (x, y), (cover, bound_x, bound_y) = small_lp
    model.add_result(_feasible(constraint_dual={cover: 3.0}))
    assert pytest.approx(1.0) == variable_dual(model, ConstraintDual(0), bound_y, y)
    assert pytest.approx(0.0) == variable_dual(model, ConstraintDual(1), bound_y, y)


def test_equality_constraint_dual_enters_with_coefficient():
    model = Model()
    x = model.add_variable("x")
    model.set_objective(4*x, Sense.MINIMIZE)
    eq = model.add_constraint(2*x, EqualTo(2.0))
    bound = model.add_constraint(x, GreaterThan(0.0))
    model.add_result(_feasible({x: 1.0}, {eq: 1.5}))
    assert variable_dual(model, ConstraintDual(), bound, x) == 4.0 - 2.0 * 1.5


def test_vector_quadratic_constraint_family_is_unsupported(small_lp):
    model, (x, y), (cover, bound_x, bound_y) = small_lp
    z = model.add_variable("z")
    quad = VectorQuadraticFunction([], [VectorQuadraticTerm(0, ScalarQuadraticTerm(1.0, z, z))], [0.0])
    model.add_constraint(quad, Nonnegatives(1))
    with pytest.raises(UnsupportedConstraintKind) as excinfo:
        variable_dual(model, ConstraintDual(), bound_y, y)
    assert excinfo.value.function_kind == FunctionKind.VECTOR_QUADRATIC
    assert excinfo.value.set_type is Nonnegatives


def test_vector_objective_is_unsupported():
    model = Model()
    x, y = model.add_variables(2)
    model.set_objective(VectorAffineFunction.from_rows([x, y]))
    bounds = model.add_constraint([x, y], Nonnegatives(2))
    model.add_result(_feasible({x: 0.0, y: 0.0}))
    with pytest.raises(UnsupportedObjectiveKind) as excinfo:
        constraint_dual_fallback(model, bounds)
    assert excinfo.value.kind == FunctionKind.VECTOR_AFFINE
