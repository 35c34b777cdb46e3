"""
Attributes the fallback getters can compute.

Each attribute names a quantity and the result it is read from; the
``result_index`` is passed through to every result query of the model.
"""


class AbstractResultAttribute:
    """Solution quantity of the result number ``result_index``"""

    def __init__(self, result_index: int = 0):
        if result_index < 0:
            raise ValueError(f"Result index must be nonnegative, got {result_index}")
        self.result_index = result_index

    def __eq__(self, other):
        return type(self) is type(other) and self.result_index == other.result_index

    def __hash__(self):
        return hash((type(self).__name__, self.result_index))

    def __repr__(self):
        return f"{type(self).__name__}(result_index={self.result_index})"


class ObjectiveValue(AbstractResultAttribute):
    """Value of the objective function at the primal solution"""


class ConstraintPrimal(AbstractResultAttribute):
    """Value of a constraint function at the primal solution"""


class ConstraintDual(AbstractResultAttribute):
    """Dual value associated with a constraint"""
