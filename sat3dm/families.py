"""
Formula Family Builders
=======================

Random and named 3-CNF formulas used by the runner and the tests.

Functions:
    random_3cnf  -- seeded uniform random 3-CNF
    example      -- look up a named formula

Author: Carmen Esteban
License: MIT
"""

import random

from sat3dm.formula import Formula


def random_3cnf(num_vars, num_clauses, seed=42):
    """Random 3-CNF with num_clauses clauses over num_vars variables.

    With num_vars >= 3 each clause uses three distinct variables;
    below that variables are drawn with replacement. Signs are uniform.
    Same seed, same formula.
    """
    if num_vars < 1 or num_clauses < 1:
        raise ValueError("need num_vars >= 1 and num_clauses >= 1")
    rng = random.Random(seed)
    variables = list(range(1, num_vars + 1))
    clauses = []
    for _ in range(num_clauses):
        if num_vars >= 3:
            chosen = rng.sample(variables, 3)
        else:
            chosen = [rng.choice(variables) for _ in range(3)]
        clauses.append(tuple(v if rng.getrandbits(1) == 0 else -v for v in chosen))
    return Formula(num_vars, tuple(clauses))


EXAMPLES = {
    # (a ∨ ¬b ∨ c) ∧ (¬a ∨ b ∨ ¬c)
    "basic-3x2": Formula(3, ((1, -2, 3), (-1, 2, -3))),
    "single-1x1": Formula(1, ((1, 1, 1),)),
    "mixed-2x3": Formula(2, ((1, 2, -1), (-2, -2, 1), (2, -1, -2))),
    "four-vars-4x3": Formula(4, ((1, -2, 4), (-1, 3, -4), (2, 3, 4))),
}


def example(name):
    try:
        return EXAMPLES[name]
    except KeyError:
        raise KeyError("unknown example {!r}, choose from {}".format(
            name, ", ".join(sorted(EXAMPLES))))
