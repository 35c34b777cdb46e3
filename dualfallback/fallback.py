"""
Fallback getters for solver wrappers.

These functions compute results a solver backend does not report from the
results it does report. A wrapper whose solver has no constraint primal
values can, for instance, answer with::

    def constraint_primal(self, ci):
        return constraint_primal_fallback(self, ci)

None of them special-cases a primal result that is a ray: the constants of
the functions are included in the values they evaluate.
"""
from typing import Optional, Union

import numpy as np

from .attributes import AbstractResultAttribute, ConstraintDual, ConstraintPrimal, ObjectiveValue
from .dual import constraint_dual
from .logging import get_logger
from .model import ConstraintIndex, ModelLike
from .parameters import Parameters

logger = get_logger(__name__)


def objective_value_fallback(model: ModelLike, attr: Optional[ObjectiveValue] = None,
                             parameters: Optional[Parameters] = None) -> Union[float, np.ndarray]:
    """
    Compute the objective value from the variable primal values.

    Parameters
    ----------
    model : ModelLike
        Model to query
    attr : ObjectiveValue, optional
        Selects the result (default: ``ObjectiveValue()``)
    parameters : Parameters, optional
        Unused by this getter, accepted for a uniform signature

    Returns
    -------
    float or np.ndarray
        Value of the objective function; an array for a vector objective
    """
    attr = attr or ObjectiveValue()
    func = model.objective_function()
    logger.debug("Evaluating %s objective for result %d",
                 model.objective_function_type().value, attr.result_index)
    return func.evaluate(lambda v: model.variable_primal(v, attr.result_index))


def constraint_primal_fallback(model: ModelLike, ci: ConstraintIndex,
                               attr: Optional[ConstraintPrimal] = None,
                               parameters: Optional[Parameters] = None) -> Union[float, np.ndarray]:
    """
    Compute the value of the function of the constraint ``ci`` from the
    variable primal values.

    Parameters
    ----------
    model : ModelLike
        Model to query
    ci : ConstraintIndex
        Constraint whose function is evaluated
    attr : ConstraintPrimal, optional
        Selects the result (default: ``ConstraintPrimal()``)
    parameters : Parameters, optional
        Unused by this getter, accepted for a uniform signature

    Returns
    -------
    float or np.ndarray
        Value of the constraint function; an array for a vector constraint
    """
    attr = attr or ConstraintPrimal()
    func = model.constraint_function(ci)
    logger.debug("Evaluating function of %r for result %d", ci, attr.result_index)
    return func.evaluate(lambda v: model.variable_primal(v, attr.result_index))


def constraint_dual_fallback(model: ModelLike, ci: ConstraintIndex,
                             attr: Optional[ConstraintDual] = None,
                             parameters: Optional[Parameters] = None) -> Union[float, np.ndarray]:
    """
    Compute the dual of the variable-wise constraint ``ci`` from the duals
    of the other constraints and the constraint functions.

    Parameters
    ----------
    model : ModelLike
        Model to query
    ci : ConstraintIndex
        A SingleVariable or VectorOfVariables constraint
    attr : ConstraintDual, optional
        Selects the result (default: ``ConstraintDual()``)
    parameters : Parameters, optional
        Configuration (default: ``Parameters()``)

    Returns
    -------
    float or np.ndarray
        Dual value of ``ci``

    Raises
    ------
    TypeError
        If ``ci`` is not a variable-wise constraint
    UnsupportedObjectiveKind
        If the objective is neither a single variable nor scalar affine
    UnsupportedConstraintKind
        If some constraints are quadratic
    AmbiguousVariableConstraint
        If another variable-wise constraint references a variable of ``ci``
    """
    attr = attr or ConstraintDual()
    if not ci.function_kind.is_variablewise:
        raise TypeError(
            f"Dual fallback only applies to variable-wise constraints, got {ci!r}"
        )
    func = model.constraint_function(ci)
    logger.debug("Reconstructing dual of %r for result %d", ci, attr.result_index)
    return constraint_dual(model, attr, ci, func, parameters)


def get_fallback(model: ModelLike, attr: AbstractResultAttribute,
                 ci: Optional[ConstraintIndex] = None,
                 parameters: Optional[Parameters] = None) -> Union[float, np.ndarray]:
    """
    Compute ``attr`` (of the constraint ``ci`` for constraint attributes).

    Examples
    --------
    >>> get_fallback(model, ObjectiveValue())
    >>> get_fallback(model, ConstraintDual(), ci)
    """
    if isinstance(attr, ObjectiveValue):
        return objective_value_fallback(model, attr, parameters)
    if not isinstance(attr, (ConstraintPrimal, ConstraintDual)):
        raise TypeError(f"No fallback is available for {attr!r}")
    if ci is None:
        raise ValueError(f"{attr!r} requires a constraint index")
    if isinstance(attr, ConstraintPrimal):
        return constraint_primal_fallback(model, ci, attr, parameters)
    return constraint_dual_fallback(model, ci, attr, parameters)
