"""
Model query surface and an in-memory model
"""
from abc import ABC, abstractmethod
from typing import Dict, List, NamedTuple, Optional, Tuple, Type, Union

import numpy as np

from .modeling import (
    AbstractFunction, FunctionKind, ScalarAffineFunction, Sense, Variable, as_function
)
from .results import Results, ResultStatus
from .sets import AbstractScalarSet, AbstractSet, AbstractVectorSet


class ConstraintIndex(NamedTuple):
    """
    Opaque reference to a constraint.

    Besides its ``value``, an index records the kind of the constraint
    function and the type of its set, i.e. the family it belongs to.
    """
    value: int
    function_kind: FunctionKind
    set_type: Type[AbstractSet]

    def __repr__(self):
        return f"ConstraintIndex({self.value}, {self.function_kind.value}-in-{self.set_type.__name__})"


Family = Tuple[FunctionKind, Type[AbstractSet]]


class ModelLike(ABC):
    """
    Queries the fallback getters make against a model.

    Any object implementing these methods can be passed to the functions of
    :mod:`dualfallback.fallback`: an in-memory :class:`Model`, or an adapter
    over a live solver. The fallbacks only read from the model.
    """

    @abstractmethod
    def variable_primal(self, variable: Variable, result_index: int = 0) -> float:
        """Primal value of ``variable`` in result ``result_index``"""

    @abstractmethod
    def constraint_function(self, ci: ConstraintIndex) -> AbstractFunction:
        """Function of the constraint ``ci``"""

    @abstractmethod
    def constraint_set(self, ci: ConstraintIndex) -> AbstractSet:
        """Set of the constraint ``ci``"""

    @abstractmethod
    def list_of_constraint_indices(self, function_kind: FunctionKind,
                                   set_type: Type[AbstractSet]) -> List[ConstraintIndex]:
        """Indices of the constraints of the family ``function_kind``-in-``set_type``"""

    @abstractmethod
    def list_of_constraints(self) -> List[Family]:
        """Families ``(function_kind, set_type)`` with at least one constraint"""

    @abstractmethod
    def objective_function_type(self) -> FunctionKind:
        """Kind of the objective function"""

    @abstractmethod
    def objective_function(self) -> AbstractFunction:
        """The objective function"""

    @abstractmethod
    def objective_sense(self) -> Sense:
        """The objective sense"""

    @abstractmethod
    def dual_status(self, result_index: int = 0) -> ResultStatus:
        """Status of the dual result ``result_index``"""

    @abstractmethod
    def constraint_dual(self, ci: ConstraintIndex,
                        result_index: int = 0) -> Union[float, np.ndarray]:
        """Dual value of the constraint ``ci`` in result ``result_index``"""


class Model(ModelLike):
    """
    In-memory conic model holding the results a solver reported.

    The model stores variables, an objective, constraints grouped by family
    and a list of :class:`Results`. It answers every :class:`ModelLike` query
    from what was stored and never derives missing values itself.

    Parameters
    ----------
    name : str, optional
        Name of the model

    Examples
    --------
    >>> from dualfallback import Model, Results, ResultStatus, Sense
    >>> from dualfallback.sets import GreaterThan
    >>>
    >>> model = Model()
    >>> x, y = model.add_variables(2)
    >>> model.set_objective(2*x + 3*y, Sense.MINIMIZE)
    >>> c = model.add_constraint(x + y, GreaterThan(1.0))
    >>> model.add_result(Results(ResultStatus.FEASIBLE_POINT, ResultStatus.FEASIBLE_POINT,
    ...                          variable_primal={x: 1.0, y: 0.0},
    ...                          constraint_dual={c: 2.0}))
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or "Model"

        self.variables: List[Variable] = []
        self._objective: AbstractFunction = ScalarAffineFunction.from_constant(0.0)
        self._sense = Sense.MINIMIZE

        self._constraints: Dict[ConstraintIndex, Tuple[AbstractFunction, AbstractSet]] = {}
        self._constraint_names: Dict[ConstraintIndex, str] = {}
        self._families: Dict[Family, List[ConstraintIndex]] = {}
        self._next_constraint = 0

        self._results: List[Results] = []

    def add_variable(self, name: Optional[str] = None) -> Variable:
        """
        Add a decision variable to the model.

        Parameters
        ----------
        name : str, optional
            Name of the variable

        Returns
        -------
        Variable
            The created variable object
        """
        index = len(self.variables)
        var = Variable(index, name)
        self.variables.append(var)
        return var

    def add_variables(self, n: int, name_prefix: str = 'x') -> List[Variable]:
        """
        Add multiple variables at once.

        Examples
        --------
        >>> x = model.add_variables(5, name_prefix='x')  # Creates x0, x1, x2, x3, x4
        """
        return [self.add_variable(f"{name_prefix}{i}") for i in range(n)]

    def set_objective(self, function, sense: Union[str, Sense] = Sense.MINIMIZE):
        """
        Set the objective function and sense.

        Parameters
        ----------
        function : function object, Variable, or float
            Objective; a Variable becomes a SingleVariable objective
        sense : str or Sense, optional
            'minimize' or 'maximize' (default: minimize)
        """
        if isinstance(sense, str):
            sense = Sense(sense.lower())
        self._objective = as_function(function)
        self._sense = sense

    def add_constraint(self, function, constraint_set: AbstractSet,
                       name: Optional[str] = None) -> ConstraintIndex:
        """
        Add the constraint ``function``-in-``set``.

        Parameters
        ----------
        function : function object, Variable, or list of Variable
            Constraint function; a Variable becomes SingleVariable and a list
            of Variable becomes VectorOfVariables
        constraint_set : AbstractSet
            Set the function must lie in
        name : str, optional
            Name for the constraint

        Returns
        -------
        ConstraintIndex
            Index of the added constraint

        Raises
        ------
        TypeError
            If a scalar function is paired with a vector set or vice versa
        ValueError
            If the function and set dimensions differ
        """
        function = as_function(function)
        if not isinstance(constraint_set, AbstractSet):
            raise TypeError("Must provide a set object")
        if function.kind.is_vector:
            if not isinstance(constraint_set, AbstractVectorSet):
                raise TypeError(f"Vector function requires a vector set, got {constraint_set!r}")
            if function.output_dimension != constraint_set.dimension:
                raise ValueError(
                    f"Function dimension {function.output_dimension} does not match "
                    f"set dimension {constraint_set.dimension}"
                )
        elif not isinstance(constraint_set, AbstractScalarSet):
            raise TypeError(f"Scalar function requires a scalar set, got {constraint_set!r}")

        ci = ConstraintIndex(self._next_constraint, function.kind, type(constraint_set))
        self._next_constraint += 1
        self._constraints[ci] = (function, constraint_set)
        self._constraint_names[ci] = name or f"c{ci.value}"
        self._families.setdefault((ci.function_kind, ci.set_type), []).append(ci)
        return ci

    def delete_constraint(self, ci: ConstraintIndex):
        """Remove the constraint ``ci`` and any dual stored for it"""
        if ci not in self._constraints:
            raise KeyError(f"Invalid constraint index {ci!r}")
        del self._constraints[ci]
        del self._constraint_names[ci]
        family = (ci.function_kind, ci.set_type)
        self._families[family].remove(ci)
        if not self._families[family]:
            del self._families[family]
        for results in self._results:
            results.constraint_dual.pop(ci, None)

    def constraint_name(self, ci: ConstraintIndex) -> str:
        return self._constraint_names[ci]

    def add_result(self, results: Results):
        """Append the values a solver reported for one result"""
        self._results.append(results)

    def clear_results(self):
        self._results = []

    @property
    def result_count(self) -> int:
        return len(self._results)

    def _result(self, result_index: int) -> Results:
        if not 0 <= result_index < len(self._results):
            raise IndexError(
                f"Result index {result_index} out of range, the model has {len(self._results)} result(s)"
            )
        return self._results[result_index]

    # ModelLike queries
    def variable_primal(self, variable: Variable, result_index: int = 0) -> float:
        return self._result(result_index).variable_primal[variable]

    def constraint_function(self, ci: ConstraintIndex) -> AbstractFunction:
        return self._constraints[ci][0]

    def constraint_set(self, ci: ConstraintIndex) -> AbstractSet:
        return self._constraints[ci][1]

    def list_of_constraint_indices(self, function_kind: FunctionKind,
                                   set_type: Type[AbstractSet]) -> List[ConstraintIndex]:
        return list(self._families.get((function_kind, set_type), []))

    def list_of_constraints(self) -> List[Family]:
        return list(self._families)

    def objective_function_type(self) -> FunctionKind:
        return self._objective.kind

    def objective_function(self) -> AbstractFunction:
        return self._objective

    def objective_sense(self) -> Sense:
        return self._sense

    def dual_status(self, result_index: int = 0) -> ResultStatus:
        return self._result(result_index).dual_status

    def constraint_dual(self, ci: ConstraintIndex,
                        result_index: int = 0) -> Union[float, np.ndarray]:
        return self._result(result_index).constraint_dual[ci]

    def __repr__(self):
        return (f"Model(name='{self.name}', sense={self._sense.value}, "
                f"variables={len(self.variables)}, constraints={len(self._constraints)})")
