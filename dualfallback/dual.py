"""
Dual of variable-wise constraints from the duals of the other constraints.

In the primal we have::

    min  a_0' x + b_0
         A_i x + b_i in C_i      for all i

and in the dual::

    max  b_0 - sum_i <b_i, y_i>_{C_i}
         a_0 - sum_i A_i* y_i = 0
         y_i in C_i*             for all i

where ``A_i*`` is the adjoint of ``A_i`` with respect to the scalar product
:func:`~dualfallback.scalar_product.set_dot` of ``C_i``:
``<A_i x, y_i>_{C_i} = <x, A_i* y_i>``.

For a variable-wise constraint ``A_j x in C_j``, ``A_j`` is zero except for
an identity block, so ``A_j* y_j = a_0 - sum_{i != j} A_i* y_i``. Component
``k`` of ``A_i* y_i`` is ``<A_i e_k, y_i>_{C_i}``, where ``A_i e_k`` is
:func:`variable_coefficient`. Inverting ``A_j*`` is
:func:`~dualfallback.scalar_product.dot_coefficients`.
"""
from typing import List, Type, Union

import numpy as np

from .attributes import ConstraintDual
from .errors import AmbiguousVariableConstraint, UnsupportedConstraintKind, UnsupportedObjectiveKind
from .logging import get_logger
from .model import ConstraintIndex, ModelLike
from .modeling import (
    FunctionKind, ScalarAffineFunction, Sense, SingleVariable, Variable,
    VectorAffineFunction, VectorOfVariables
)
from .parameters import Parameters
from .results import is_ray
from .scalar_product import dot_coefficients, set_dot
from .sets import AbstractSet

logger = get_logger(__name__)


def variable_coefficient(func: Union[ScalarAffineFunction, VectorAffineFunction],
                         variable: Variable) -> Union[float, np.ndarray]:
    """
    Coefficient of ``variable`` in an affine function.

    Parameters
    ----------
    func : ScalarAffineFunction or VectorAffineFunction
        Function to probe; duplicate terms are summed
    variable : Variable
        Variable whose coefficient is wanted

    Returns
    -------
    float or np.ndarray
        A float for a scalar function. For a vector function, the vector of
        length ``func.output_dimension`` whose row ``i`` is the coefficient of
        ``variable`` in row ``i``. Zero where the variable does not appear.
    """
    if isinstance(func, VectorAffineFunction):
        coef = np.zeros(func.output_dimension)
        for output_index, term in func.terms:
            if term.variable == variable:
                coef[output_index] += term.coefficient
        return coef
    coef = 0.0
    for term in func.terms:
        if term.variable == variable:
            coef += term.coefficient
    return coef


def constraint_contribution(model: ModelLike, attr: ConstraintDual,
                            variable: Variable, ci: ConstraintIndex) -> float:
    """Component of ``A_i* y_i`` for ``variable``, ``i`` being the affine constraint ``ci``"""
    func = model.constraint_function(ci)
    dual = model.constraint_dual(ci, attr.result_index)
    coef = variable_coefficient(func, variable)
    if ci.function_kind == FunctionKind.VECTOR_AFFINE:
        return set_dot(coef, dual, model.constraint_set(ci))
    return coef * float(dual)


def _references(func, variable: Variable) -> bool:
    if isinstance(func, SingleVariable):
        return func.variable == variable
    return variable in func.variables


def family_contribution(model: ModelLike, attr: ConstraintDual,
                        excluded_ci: ConstraintIndex, variable: Variable,
                        function_kind: FunctionKind,
                        set_type: Type[AbstractSet]) -> float:
    """
    Sum of the contributions of the ``function_kind``-in-``set_type`` constraints.

    Variable-wise constraints contribute nothing, but one other than
    ``excluded_ci`` on ``variable`` would make the dual of ``excluded_ci``
    ambiguous.

    Raises
    ------
    AmbiguousVariableConstraint
        If a variable-wise constraint other than ``excluded_ci`` references
        ``variable``
    UnsupportedConstraintKind
        If the family is quadratic
    """
    if function_kind.is_affine:
        dual = 0.0
        for ci in model.list_of_constraint_indices(function_kind, set_type):
            dual += constraint_contribution(model, attr, variable, ci)
        return dual
    elif function_kind.is_variablewise:
        for ci in model.list_of_constraint_indices(function_kind, set_type):
            if ci != excluded_ci and _references(model.constraint_function(ci), variable):
                raise AmbiguousVariableConstraint(variable, excluded_ci, ci)
        return 0.0
    raise UnsupportedConstraintKind(function_kind, set_type)


def _objective_contribution(model: ModelLike, variable: Variable) -> float:
    # Duals of a maximization problem are those of the minimization of the
    # negated objective
    sign = -1.0 if model.objective_sense() == Sense.MAXIMIZE else 1.0
    kind = model.objective_function_type()
    if kind == FunctionKind.SINGLE_VARIABLE:
        return sign if model.objective_function().variable == variable else 0.0
    elif kind == FunctionKind.SCALAR_AFFINE:
        return sign * variable_coefficient(model.objective_function(), variable)
    raise UnsupportedObjectiveKind(kind)


def variable_dual(model: ModelLike, attr: ConstraintDual,
                  excluded_ci: ConstraintIndex, variable: Variable,
                  parameters: Parameters = None) -> float:
    """
    Component of ``A_j* y_j`` for ``variable``, ``j`` being ``excluded_ci``.

    Computed as the objective coefficient of ``variable`` minus the
    contributions of every other constraint. The objective is left out when
    the dual result is an infeasibility certificate.

    Raises
    ------
    UnsupportedObjectiveKind
        If the objective is neither a single variable nor scalar affine
    UnsupportedConstraintKind
        If the model has quadratic constraints
    AmbiguousVariableConstraint
        If another variable-wise constraint references ``variable``
    """
    if parameters is None:
        parameters = Parameters()
    status = model.dual_status(attr.result_index)
    dual = 0.0
    if is_ray(status, parameters.nearly_infeasible_is_ray):
        logger.debug("Dual status %s is a ray, objective left out for %s", status.name, variable)
    else:
        dual += _objective_contribution(model, variable)
    for function_kind, set_type in model.list_of_constraints():
        dual -= family_contribution(model, attr, excluded_ci, variable, function_kind, set_type)
    return dual


def constraint_dual(model: ModelLike, attr: ConstraintDual, ci: ConstraintIndex,
                    func: Union[SingleVariable, VectorOfVariables],
                    parameters: Parameters = None) -> Union[float, np.ndarray]:
    """
    Dual of the variable-wise constraint ``ci`` whose function is ``func``.

    Returns
    -------
    float or np.ndarray
        A float for a SingleVariable constraint. For a VectorOfVariables
        constraint, the dual vector expressed in the basis of the
        constraint's set, so that pairing it with primal elements through
        ``set_dot`` gives the standard dot product of the reconstructed
        ``A_j* y_j``.
    """
    if isinstance(func, SingleVariable):
        return variable_dual(model, attr, ci, func.variable, parameters)
    dual: List[float] = [variable_dual(model, attr, ci, v, parameters) for v in func.variables]
    return dot_coefficients(dual, model.constraint_set(ci))
