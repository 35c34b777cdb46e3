"""
Modeling objects for dualfallback

This module provides the symbolic functions a model stores: variables,
scalar and vector affine functions, variable references and quadratic
functions. Functions can be evaluated against any primal value oracle, which
is all the objective and constraint primal fallbacks need.

Example
-------
>>> from dualfallback.modeling import Variable
>>>
>>> x = Variable(0, name='x')
>>> y = Variable(1, name='y')
>>> f = 2*x + 3*y + 5
>>> f.evaluate({x: 1.0, y: 2.0}.__getitem__)
13.0
"""

import numpy as np
from scipy import sparse
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence, Union
from enum import Enum


class Sense(Enum):
    """Optimization sense"""
    MINIMIZE = 'minimize'
    MAXIMIZE = 'maximize'


class FunctionKind(Enum):
    """Kind of a constraint or objective function"""
    SINGLE_VARIABLE = 'single_variable'
    VECTOR_OF_VARIABLES = 'vector_of_variables'
    SCALAR_AFFINE = 'scalar_affine'
    VECTOR_AFFINE = 'vector_affine'
    SCALAR_QUADRATIC = 'scalar_quadratic'
    VECTOR_QUADRATIC = 'vector_quadratic'

    @property
    def is_variablewise(self) -> bool:
        return self in (FunctionKind.SINGLE_VARIABLE, FunctionKind.VECTOR_OF_VARIABLES)

    @property
    def is_affine(self) -> bool:
        return self in (FunctionKind.SCALAR_AFFINE, FunctionKind.VECTOR_AFFINE)

    @property
    def is_quadratic(self) -> bool:
        return self in (FunctionKind.SCALAR_QUADRATIC, FunctionKind.VECTOR_QUADRATIC)

    @property
    def is_vector(self) -> bool:
        return self in (FunctionKind.VECTOR_OF_VARIABLES, FunctionKind.VECTOR_AFFINE,
                        FunctionKind.VECTOR_QUADRATIC)


ValueOracle = Callable[['Variable'], float]

_NUMBER = (int, float, np.number)


class Variable:
    """
    Opaque decision variable identifier.

    A variable carries no value of its own; its value is whatever the model
    reports for it. Variables compare and hash by index, and can be combined
    with arithmetic operators to form affine functions.

    Parameters
    ----------
    index : int
        Index of the variable in the model
    name : str, optional
        Name of the variable for display

    Examples
    --------
    >>> x = Variable(0, name='x')
    >>> f = 3*x + 5  # ScalarAffineFunction
    """

    def __init__(self, index: int, name: Optional[str] = None):
        self.index = index
        self.name = name or f"x{index}"

    def __repr__(self):
        return f"Variable({self.name})"

    def __eq__(self, other):
        if isinstance(other, Variable):
            return self.index == other.index
        return NotImplemented

    def __hash__(self):
        return hash(('Variable', self.index))

    # Arithmetic operations
    def __add__(self, other):
        return ScalarAffineFunction.from_variable(self) + other

    def __radd__(self, other):
        return ScalarAffineFunction.from_variable(self) + other

    def __sub__(self, other):
        return ScalarAffineFunction.from_variable(self) - other

    def __rsub__(self, other):
        return (-1) * ScalarAffineFunction.from_variable(self) + other

    def __mul__(self, other):
        return ScalarAffineFunction.from_variable(self) * other

    def __rmul__(self, other):
        return ScalarAffineFunction.from_variable(self) * other

    def __neg__(self):
        return -1 * self

    def __truediv__(self, other):
        if not isinstance(other, _NUMBER):
            raise TypeError("Can only divide variable by scalar")
        return self * (1.0 / other)


class ScalarAffineTerm(NamedTuple):
    """Term ``coefficient * variable``"""
    coefficient: float
    variable: Variable


class VectorAffineTerm(NamedTuple):
    """Scalar affine term placed in row ``output_index`` of a vector function"""
    output_index: int
    scalar_term: ScalarAffineTerm


class ScalarQuadraticTerm(NamedTuple):
    """Term ``coefficient * variable_1 * variable_2``"""
    coefficient: float
    variable_1: Variable
    variable_2: Variable


class VectorQuadraticTerm(NamedTuple):
    output_index: int
    scalar_term: ScalarQuadraticTerm


class SingleVariable:
    """The function ``x`` for a single variable ``x``"""

    kind = FunctionKind.SINGLE_VARIABLE

    def __init__(self, variable: Variable):
        if not isinstance(variable, Variable):
            raise TypeError("SingleVariable requires a Variable")
        self.variable = variable

    def evaluate(self, value_of: ValueOracle) -> float:
        return float(value_of(self.variable))

    def __repr__(self):
        return f"SingleVariable({self.variable.name})"


class VectorOfVariables:
    """The function ``[x_1, ..., x_n]`` stacking variables in order"""

    kind = FunctionKind.VECTOR_OF_VARIABLES

    def __init__(self, variables: Sequence[Variable]):
        variables = list(variables)
        if not all(isinstance(v, Variable) for v in variables):
            raise TypeError("VectorOfVariables requires a sequence of Variable")
        self.variables = variables

    @property
    def output_dimension(self) -> int:
        return len(self.variables)

    def evaluate(self, value_of: ValueOracle) -> np.ndarray:
        return np.array([value_of(v) for v in self.variables], dtype=np.float64)

    def __repr__(self):
        names = ', '.join(v.name for v in self.variables)
        return f"VectorOfVariables([{names}])"


class ScalarAffineFunction:
    """
    Scalar affine function: sum of (coefficient * variable) + constant.

    Terms are stored as a list and the same variable may appear in several
    terms; their coefficients add up. Use :meth:`canonical` to merge them.

    Parameters
    ----------
    terms : iterable of ScalarAffineTerm, optional
        Terms of the function
    constant : float, optional
        Constant term

    Examples
    --------
    >>> x = Variable(0)
    >>> y = Variable(1)
    >>> f = 3*x + 2*y - 5
    >>> print(f)
    3.0*x0 + 2.0*x1 - 5.0
    """

    kind = FunctionKind.SCALAR_AFFINE

    def __init__(self, terms: Optional[Iterable[ScalarAffineTerm]] = None,
                 constant: float = 0.0):
        self.terms: List[ScalarAffineTerm] = [
            ScalarAffineTerm(float(c), v) for c, v in (terms or [])
        ]
        self.constant = float(constant)

    @staticmethod
    def from_variable(var: Variable) -> 'ScalarAffineFunction':
        """Create function from a single variable"""
        return ScalarAffineFunction([ScalarAffineTerm(1.0, var)], 0.0)

    @staticmethod
    def from_constant(value: float) -> 'ScalarAffineFunction':
        """Create function from a constant"""
        return ScalarAffineFunction([], value)

    def copy(self) -> 'ScalarAffineFunction':
        """Create a copy of this function"""
        return ScalarAffineFunction(self.terms, self.constant)

    def canonical(self) -> 'ScalarAffineFunction':
        """Return an equivalent function with duplicates merged and zeros removed"""
        merged = {}
        for coef, var in self.terms:
            merged[var] = merged.get(var, 0.0) + coef
        terms = [ScalarAffineTerm(c, v) for v, c in merged.items() if c != 0.0]
        return ScalarAffineFunction(terms, self.constant)

    def evaluate(self, value_of: ValueOracle) -> float:
        """Value of the function when each variable takes ``value_of(variable)``"""
        value = self.constant
        for coef, var in self.terms:
            value += coef * value_of(var)
        return float(value)

    def __repr__(self):
        if not self.terms and self.constant == 0:
            return "0"

        terms = [f"{coef}*{var.name}" for coef, var in self.terms]
        if self.constant != 0:
            terms.append(f"{self.constant}")

        result = terms[0]
        for term in terms[1:]:
            if term.startswith('-'):
                result += f" - {term[1:]}"
            else:
                result += f" + {term}"
        return result

    # Arithmetic operations
    def __add__(self, other):
        if isinstance(other, _NUMBER):
            result = self.copy()
            result.constant += float(other)
            return result
        elif isinstance(other, Variable):
            result = self.copy()
            result.terms.append(ScalarAffineTerm(1.0, other))
            return result
        elif isinstance(other, ScalarAffineFunction):
            result = self.copy()
            result.terms.extend(other.terms)
            result.constant += other.constant
            return result
        else:
            return NotImplemented

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, (Variable, ScalarAffineFunction)):
            return self + (-1) * other
        elif isinstance(other, _NUMBER):
            return self + (-float(other))
        else:
            return NotImplemented

    def __rsub__(self, other):
        return (-1 * self) + other

    def __mul__(self, other):
        if isinstance(other, _NUMBER):
            scalar = float(other)
            return ScalarAffineFunction(
                [ScalarAffineTerm(c * scalar, v) for c, v in self.terms],
                self.constant * scalar
            )
        else:
            raise TypeError("Can only multiply function by scalar (no quadratic terms)")

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self):
        return self * (-1)

    def __truediv__(self, other):
        if not isinstance(other, _NUMBER):
            raise TypeError("Can only divide function by scalar")
        return self * (1.0 / float(other))


class VectorAffineFunction:
    """
    Vector affine function ``A x + b``.

    Each term places a scalar term in one output row; a variable may appear
    in several rows, and several times in the same row.

    Parameters
    ----------
    terms : iterable of VectorAffineTerm
        Terms of the function
    constants : array_like
        Constant vector ``b``; its length is the output dimension

    Examples
    --------
    >>> x, y = Variable(0), Variable(1)
    >>> f = VectorAffineFunction.from_rows([x + y, 2*x - 1])
    >>> f.output_dimension
    2
    """

    kind = FunctionKind.VECTOR_AFFINE

    def __init__(self, terms: Iterable[VectorAffineTerm], constants):
        self.constants = np.array(constants, dtype=np.float64).reshape(-1)
        self.terms: List[VectorAffineTerm] = []
        for output_index, (coef, var) in terms:
            if not 0 <= output_index < len(self.constants):
                raise ValueError(
                    f"Output index {output_index} out of range for dimension {len(self.constants)}"
                )
            self.terms.append(VectorAffineTerm(int(output_index), ScalarAffineTerm(float(coef), var)))

    @property
    def output_dimension(self) -> int:
        return len(self.constants)

    @classmethod
    def from_rows(cls, rows: Sequence[Union[ScalarAffineFunction, Variable, float]]) -> 'VectorAffineFunction':
        """
        Stack scalar affine functions into a vector function.

        Parameters
        ----------
        rows : sequence of ScalarAffineFunction, Variable or float
            One entry per output row

        Returns
        -------
        VectorAffineFunction
        """
        terms = []
        constants = np.zeros(len(rows))
        for i, row in enumerate(rows):
            if isinstance(row, Variable):
                row = ScalarAffineFunction.from_variable(row)
            elif isinstance(row, _NUMBER):
                row = ScalarAffineFunction.from_constant(float(row))
            elif not isinstance(row, ScalarAffineFunction):
                raise TypeError("Rows must be Variable, scalar, or ScalarAffineFunction")
            terms.extend(VectorAffineTerm(i, term) for term in row.terms)
            constants[i] = row.constant
        return cls(terms, constants)

    @classmethod
    def from_matrix(cls, A: Union[np.ndarray, sparse.spmatrix],
                    variables: Sequence[Variable],
                    constants: Optional[np.ndarray] = None) -> 'VectorAffineFunction':
        """
        Build ``A x + b`` from a coefficient matrix.

        Parameters
        ----------
        A : np.ndarray or scipy.sparse matrix
            Coefficient matrix (m x n); column ``j`` belongs to ``variables[j]``
        variables : sequence of Variable
            The n variables of ``x``
        constants : np.ndarray, optional
            Constant vector ``b`` (length m, default: zeros)

        Returns
        -------
        VectorAffineFunction
        """
        coo = sparse.coo_matrix(A)
        m, n = coo.shape
        if n != len(variables):
            raise ValueError(f"Matrix has {n} columns but {len(variables)} variables were given")
        if constants is None:
            constants = np.zeros(m)
        elif len(constants) != m:
            raise ValueError(f"Matrix has {m} rows but constants has length {len(constants)}")
        terms = [
            VectorAffineTerm(int(i), ScalarAffineTerm(float(v), variables[j]))
            for i, j, v in zip(coo.row, coo.col, coo.data)
        ]
        return cls(terms, constants)

    def evaluate(self, value_of: ValueOracle) -> np.ndarray:
        """Value of the function when each variable takes ``value_of(variable)``"""
        value = self.constants.copy()
        for output_index, (coef, var) in self.terms:
            value[output_index] += coef * value_of(var)
        return value

    def __repr__(self):
        return f"VectorAffineFunction(dimension={self.output_dimension}, terms={len(self.terms)})"


class ScalarQuadraticFunction:
    """
    Scalar quadratic function.

    ``sum(c_k * x_i * x_j) + sum(a_k * x_k) + constant``. Quadratic terms are
    taken literally: a term on the diagonal contributes ``c * x_i**2``.
    """

    kind = FunctionKind.SCALAR_QUADRATIC

    def __init__(self, affine_terms: Iterable[ScalarAffineTerm],
                 quadratic_terms: Iterable[ScalarQuadraticTerm],
                 constant: float = 0.0):
        self.affine_terms = [ScalarAffineTerm(float(c), v) for c, v in affine_terms]
        self.quadratic_terms = [
            ScalarQuadraticTerm(float(c), v1, v2) for c, v1, v2 in quadratic_terms
        ]
        self.constant = float(constant)

    def evaluate(self, value_of: ValueOracle) -> float:
        value = self.constant
        for coef, var in self.affine_terms:
            value += coef * value_of(var)
        for coef, var_1, var_2 in self.quadratic_terms:
            value += coef * value_of(var_1) * value_of(var_2)
        return float(value)

    def __repr__(self):
        return (f"ScalarQuadraticFunction(affine_terms={len(self.affine_terms)}, "
                f"quadratic_terms={len(self.quadratic_terms)})")


class VectorQuadraticFunction:
    """Vector quadratic function, the row-wise analogue of ScalarQuadraticFunction"""

    kind = FunctionKind.VECTOR_QUADRATIC

    def __init__(self, affine_terms: Iterable[VectorAffineTerm],
                 quadratic_terms: Iterable[VectorQuadraticTerm],
                 constants):
        self.constants = np.array(constants, dtype=np.float64).reshape(-1)
        self.affine_terms = [
            VectorAffineTerm(int(i), ScalarAffineTerm(float(c), v))
            for i, (c, v) in affine_terms
        ]
        self.quadratic_terms = [
            VectorQuadraticTerm(int(i), ScalarQuadraticTerm(float(c), v1, v2))
            for i, (c, v1, v2) in quadratic_terms
        ]

    @property
    def output_dimension(self) -> int:
        return len(self.constants)

    def evaluate(self, value_of: ValueOracle) -> np.ndarray:
        value = self.constants.copy()
        for output_index, (coef, var) in self.affine_terms:
            value[output_index] += coef * value_of(var)
        for output_index, (coef, var_1, var_2) in self.quadratic_terms:
            value[output_index] += coef * value_of(var_1) * value_of(var_2)
        return value

    def __repr__(self):
        return f"VectorQuadraticFunction(dimension={self.output_dimension})"


AbstractFunction = Union[SingleVariable, VectorOfVariables, ScalarAffineFunction,
                         VectorAffineFunction, ScalarQuadraticFunction,
                         VectorQuadraticFunction]


def as_function(value) -> AbstractFunction:
    """
    Promote a number, variable or list of variables to a function object.

    Numbers become constant ScalarAffineFunction, a Variable becomes
    SingleVariable and a list of Variable becomes VectorOfVariables.
    Function objects are returned unchanged.
    """
    if isinstance(value, Variable):
        return SingleVariable(value)
    elif isinstance(value, _NUMBER):
        return ScalarAffineFunction.from_constant(float(value))
    elif isinstance(value, (list, tuple)) and all(isinstance(v, Variable) for v in value):
        return VectorOfVariables(value)
    elif hasattr(value, 'kind') and isinstance(value.kind, FunctionKind):
        return value
    raise TypeError(f"Cannot interpret {value!r} as a function")
