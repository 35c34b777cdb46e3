"""
dualfallback Python Package

Fallback getters computing objective values, constraint primal values and
duals of variable-wise conic constraints from the results a solver reports.
"""

from .attributes import ObjectiveValue, ConstraintPrimal, ConstraintDual
from .errors import (
    FallbackError, UnsupportedObjectiveKind, UnsupportedConstraintKind,
    AmbiguousVariableConstraint
)
from .fallback import (
    get_fallback, objective_value_fallback, constraint_primal_fallback,
    constraint_dual_fallback
)
from .model import ConstraintIndex, ModelLike, Model
from .modeling import (
    Variable, Sense, FunctionKind, SingleVariable, VectorOfVariables,
    ScalarAffineFunction, VectorAffineFunction, ScalarQuadraticFunction,
    VectorQuadraticFunction, ScalarAffineTerm, VectorAffineTerm,
    ScalarQuadraticTerm, VectorQuadraticTerm
)
from .parameters import Parameters
from .results import Results, ResultStatus
from .scalar_product import set_dot, dot_coefficients

__version__ = "0.1.0"

__all__ = [
    # Fallback getters
    'get_fallback',
    'objective_value_fallback',
    'constraint_primal_fallback',
    'constraint_dual_fallback',
    'ObjectiveValue',
    'ConstraintPrimal',
    'ConstraintDual',
    'Parameters',
    # Errors
    'FallbackError',
    'UnsupportedObjectiveKind',
    'UnsupportedConstraintKind',
    'AmbiguousVariableConstraint',
    # Model
    'ConstraintIndex',
    'ModelLike',
    'Model',
    'Results',
    'ResultStatus',
    # Modeling interface
    'Variable',
    'Sense',
    'FunctionKind',
    'SingleVariable',
    'VectorOfVariables',
    'ScalarAffineFunction',
    'VectorAffineFunction',
    'ScalarQuadraticFunction',
    'VectorQuadraticFunction',
    'ScalarAffineTerm',
    'VectorAffineTerm',
    'ScalarQuadraticTerm',
    'VectorQuadraticTerm',
    # Scalar products
    'set_dot',
    'dot_coefficients',
    '__version__',
]
