"""
Errors raised when a fallback value cannot be computed.

All of them derive from :class:`FallbackError`, so a solver wrapper can catch
that one class and report the attribute as not available. Malformed input
(wrong function kind for an entry point, mismatched dimensions) raises
``TypeError`` / ``ValueError`` instead.
"""

_REPORT = "Please report this issue to the solver wrapper package."


class FallbackError(Exception):
    """Raised when the fallback's mathematical preconditions do not hold."""


class UnsupportedObjectiveKind(FallbackError):
    """Raised when the objective is neither a single variable nor scalar affine."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(
            f"Fallback getter for variable constraint dual only supports affine "
            f"objective function, got {kind}. {_REPORT}"
        )


class UnsupportedConstraintKind(FallbackError):
    """Raised when a constraint family needed for the dual is quadratic."""

    def __init__(self, function_kind, set_type):
        self.function_kind = function_kind
        self.set_type = set_type
        set_name = getattr(set_type, '__name__', set_type)
        super().__init__(
            f"Fallback getter for variable constraint dual only supports affine "
            f"constraint functions, got {function_kind}-in-{set_name}. {_REPORT}"
        )


class AmbiguousVariableConstraint(FallbackError):
    """Raised when a variable is in more than one variable-wise constraint."""

    def __init__(self, variable, constraint_index, other_index):
        self.variable = variable
        self.constraint_index = constraint_index
        self.other_index = other_index
        super().__init__(
            f"Fallback getter for variable constraint dual does not support other "
            f"variable-wise constraints on the variable: {variable} is in both "
            f"{constraint_index} and {other_index}. {_REPORT}"
        )
