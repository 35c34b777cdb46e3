"""
Example: Reconstructing the dual of a PSD constraint

A solver reported the primal solution and the dual of the trace constraint,
but not the dual of the variable-wise PSD constraint:

Problem:
    minimize    <C, X>,   C = [[2, 1], [1, 2]]
    subject to  trace(X) == 1
                X psd  (packed lower triangle [x11, x21, x22])
"""

import numpy as np
import dualfallback
from dualfallback.sets import EqualTo, PositiveSemidefiniteConeTriangle


def main():
    print()
    print("=" * 70)
    print("dualfallback Example: PSD constraint dual")
    print("=" * 70)
    print()

    # Step 1: Build the model
    model = dualfallback.Model(name="trace_sdp")
    x11, x21, x22 = model.add_variables(3, name_prefix='x')
    model.set_objective(2*x11 + 2*x21 + 2*x22, dualfallback.Sense.MINIMIZE)
    trace = model.add_constraint(x11 + x22, EqualTo(1.0), name="trace")
    psd = model.add_constraint([x11, x21, x22], PositiveSemidefiniteConeTriangle(2), name="psd")

    # Step 2: Store what the solver reported
    model.add_result(dualfallback.Results(
        dualfallback.ResultStatus.FEASIBLE_POINT,
        dualfallback.ResultStatus.FEASIBLE_POINT,
        variable_primal={x11: 0.5, x21: -0.5, x22: 0.5},
        constraint_dual={trace: 1.0},
    ))

    # Step 3: Compute the missing results
    objective = dualfallback.get_fallback(model, dualfallback.ObjectiveValue())
    primal = dualfallback.get_fallback(model, dualfallback.ConstraintPrimal(), psd)
    dual = dualfallback.get_fallback(model, dualfallback.ConstraintDual(), psd)

    print(f"Objective value:   {objective:.6f}")
    print(f"PSD primal:        {primal}")
    print(f"PSD dual (packed): {dual}")
    print(f"<X, S>:            {dualfallback.set_dot(primal, dual, model.constraint_set(psd)):.6f}")
    print()

    S = np.array([[dual[0], dual[1]], [dual[1], dual[2]]])
    print(f"Eigenvalues of S:  {np.linalg.eigvalsh(S)}")
    print()
    print("=" * 70)
    print()


if __name__ == "__main__":
    try:
        main()
    except dualfallback.FallbackError as e:
        print(f"Dual not available: {e}")
