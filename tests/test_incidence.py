"""
VERIFY: Incidence matrix and matching checks
============================================

Ground sets are disjoint and balanced (|W| = |X| = |Y| = 2nm), every
tip reaches a candidate outside its own ring, and a satisfying
assignment induces a selection that covers every element once.

Author: Carmen Esteban
"""

import os
import sys
from itertools import product

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

import numpy as np

from sat3dm.core import VARIABLE_TRUE, VARIABLE_FALSE
from sat3dm.formula import Formula
from sat3dm.families import random_3cnf, example
from sat3dm.incidence import (
    ground_sets, incidence_matrix, instance_summary,
    is_perfect_matching, witness_matching,
)
from sat3dm.reduction import reduce_formula


def test_ground_sets_disjoint_and_balanced():
    for n, m in ((1, 1), (3, 2), (4, 3)):
        result = reduce_formula(random_3cnf(n, m, seed=5))
        w, x, y = ground_sets(result.triples)
        assert not (set(w) & set(x)) and not (set(x) & set(y)) and not (set(w) & set(y))
        assert len(w) == len(x) == len(y) == 2 * n * m


def test_incidence_shape():
    result = reduce_formula(example("basic-3x2"))
    A, elem_to_idx = incidence_matrix(result.triples)
    assert A.shape == (36, 66)
    col_sums = np.asarray(A.sum(axis=0)).ravel()
    assert np.all(col_sums == 3)
    assert elem_to_idx[("W", "w_neg_a_1")] == 0


def test_summary_counts():
    info = instance_summary(reduce_formula(example("basic-3x2")))
    assert info["num_triples"] == 66
    assert info["ground_sets"] == {"W": 12, "X": 12, "Y": 12}
    assert info["target_size"] == 6
    assert info["triples_by_kind"] == {
        "variable-true": 6, "variable-false": 6, "clause": 6, "garbage": 48}
    assert info["degree_min"] >= 1


def test_every_tip_leaves_its_gadget():
    # with n >= 2, each tip appears in some garbage triple
    result = reduce_formula(random_3cnf(3, 4, seed=8))
    ring_tips = {t.w for t in result.triples
                 if t.kind in (VARIABLE_TRUE, VARIABLE_FALSE)}
    garbage_tips = {t.w for t in result.triples if t.kind == "garbage"}
    assert ring_tips == garbage_tips


def _satisfying_assignments(formula):
    for bits in product((False, True), repeat=formula.num_vars):
        assignment = dict(zip(formula.variables(), bits))
        if formula.is_satisfied_by(assignment):
            yield assignment


def test_witness_is_perfect_matching():
    for formula in (example("basic-3x2"), example("single-1x1"),
                    example("four-vars-4x3"), random_3cnf(4, 3, seed=21)):
        result = reduce_formula(formula)
        found = 0
        for assignment in _satisfying_assignments(formula):
            selection = witness_matching(formula, result.triples, assignment)
            n, m = formula.num_vars, formula.num_clauses
            assert len(selection) == 2 * n * m
            assert is_perfect_matching(result.triples, selection)
            found += 1
        assert found > 0


def test_witness_rejects_falsifying_assignment():
    formula = example("basic-3x2")
    result = reduce_formula(formula)
    # a=True, b=False, c=True falsifies (¬a ∨ b ∨ ¬c)
    try:
        witness_matching(formula, result.triples, {1: True, 2: False, 3: True})
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError")


def test_mixed_ring_is_not_a_matching():
    result = reduce_formula(Formula(1, ((1, 1, 1), (-1, -1, -1))))
    # True at stage 0, False at stage 1 double-covers x_a_1
    ring = [i for i, t in enumerate(result.triples)
            if t.kind in (VARIABLE_TRUE, VARIABLE_FALSE)]
    assert not is_perfect_matching(result.triples, [ring[0], ring[3]])


def test_invalid_selections_rejected():
    formula = example("single-1x1")
    result = reduce_formula(formula)
    selection = witness_matching(formula, result.triples, {1: True})
    assert selection == [0, 2]
    assert is_perfect_matching(result.triples, selection)
    # negative indices would alias the same columns
    assert not is_perfect_matching(result.triples, [-5, -3])
    assert not is_perfect_matching(result.triples, [0, 2, 0, 2])
    assert not is_perfect_matching(result.triples, [0, 2, 99])


def test_empty_instance():
    assert is_perfect_matching((), [])
    assert not is_perfect_matching((), [0])


if __name__ == "__main__":
    print("=" * 60)
    print("INCIDENCE: Verification")
    print("=" * 60)
    failed = 0
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            try:
                fn()
                print("  [PASS] {}".format(name))
            except AssertionError as e:
                failed += 1
                print("  [FAIL] {} {}".format(name, e))
    print("=" * 60)
    sys.exit(1 if failed else 0)
