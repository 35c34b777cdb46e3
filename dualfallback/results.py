"""
Results reported by a solver backend
"""
import numpy as np
from enum import Enum
from typing import Any, Dict, Optional


class ResultStatus(Enum):
    """Status of a primal or dual result vector"""
    NO_SOLUTION = 'no_solution'
    FEASIBLE_POINT = 'feasible_point'
    NEARLY_FEASIBLE_POINT = 'nearly_feasible_point'
    INFEASIBLE_POINT = 'infeasible_point'
    INFEASIBILITY_CERTIFICATE = 'infeasibility_certificate'
    NEARLY_INFEASIBILITY_CERTIFICATE = 'nearly_infeasibility_certificate'
    UNKNOWN_RESULT_STATUS = 'unknown_result_status'
    OTHER_RESULT_STATUS = 'other_result_status'


def is_ray(status: ResultStatus, include_nearly: bool = True) -> bool:
    """Check if a result status denotes an infeasibility certificate"""
    if status == ResultStatus.INFEASIBILITY_CERTIFICATE:
        return True
    return include_nearly and status == ResultStatus.NEARLY_INFEASIBILITY_CERTIFICATE


class Results:
    """
    Values a backend reports for one result.

    Only what a backend reports lives here: everything the fallback getters
    derive is recomputed from these values on every call.

    Attributes
    ----------
    primal_status : ResultStatus
        Status of the primal result
    dual_status : ResultStatus
        Status of the dual result; an infeasibility certificate is a ray
    variable_primal : dict
        Maps each Variable to its primal value
    constraint_dual : dict
        Maps each ConstraintIndex to its dual value (float, or np.ndarray for
        vector constraints)

    Methods
    -------
    to_dict()
        Convert results to dictionary
    """

    def __init__(self, primal_status: ResultStatus = ResultStatus.NO_SOLUTION,
                 dual_status: ResultStatus = ResultStatus.NO_SOLUTION,
                 variable_primal: Optional[Dict] = None,
                 constraint_dual: Optional[Dict] = None):
        self.primal_status = primal_status
        self.dual_status = dual_status
        self.variable_primal: Dict = {}
        self.constraint_dual: Dict = {}
        for var, value in (variable_primal or {}).items():
            self.variable_primal[var] = float(value)
        for ci, value in (constraint_dual or {}).items():
            self.set_constraint_dual(ci, value)

    def set_constraint_dual(self, ci, value):
        """Store the dual of ``ci``, as a float or a float64 vector"""
        if np.ndim(value) == 0:
            self.constraint_dual[ci] = float(value)
        else:
            self.constraint_dual[ci] = np.array(value, dtype=np.float64)

    def __repr__(self):
        return (f"Results(primal_status={self.primal_status.name}, "
                f"dual_status={self.dual_status.name}, "
                f"n_vars={len(self.variable_primal)}, "
                f"n_duals={len(self.constraint_dual)})")

    def to_dict(self) -> Dict[str, Any]:
        """Convert results to dictionary keyed by variable and constraint indices"""
        return {
            'primal_status': self.primal_status.value,
            'dual_status': self.dual_status.value,
            'variable_primal': {var.index: value for var, value in self.variable_primal.items()},
            'constraint_dual': {
                ci.value: value.tolist() if isinstance(value, np.ndarray) else value
                for ci, value in self.constraint_dual.items()
            },
        }
