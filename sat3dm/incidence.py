"""
3DM Instance Analysis
=====================

Sparse incidence view of a candidate set M and checks on given
selections. Nothing here searches for a matching.

Functions:
    ground_sets          -- W, X, Y element lists
    incidence_matrix     -- elements x triples CSR matrix
    instance_summary     -- sizes and degree statistics
    is_perfect_matching  -- does a given selection cover every element once
    witness_matching     -- selection induced by a satisfying assignment

Author: Carmen Esteban
License: MIT
"""

import numpy as np
from scipy import sparse

from sat3dm.core import VARIABLE_TRUE, VARIABLE_FALSE, CLAUSE, GARBAGE
from sat3dm.formula import variable_letter


# =====================================================================
# GROUND SETS AND INCIDENCE
# =====================================================================

def ground_sets(triples):
    """W, X, Y element lists in order of first appearance."""
    sets = ([], [], [])
    seen = (set(), set(), set())
    for t in triples:
        for pos, elem in enumerate(t.elements()):
            if elem not in seen[pos]:
                seen[pos].add(elem)
                sets[pos].append(elem)
    return sets


def incidence_matrix(triples):
    """Build the element-by-triple incidence matrix.

    Rows are W elements, then X, then Y. Column c has three ones, one
    per coordinate of triple c.

    Returns
    -------
    A : scipy.sparse.csr_matrix, shape (|W|+|X|+|Y|, |M|)
    elem_to_idx : dict mapping (set_name, element) -> row
    """
    w_set, x_set, y_set = ground_sets(triples)
    elem_to_idx = {}
    for name, elems in (("W", w_set), ("X", x_set), ("Y", y_set)):
        for e in elems:
            elem_to_idx[(name, e)] = len(elem_to_idx)
    num_elems = len(elem_to_idx)

    rows, cols, vals = [], [], []
    for col, t in enumerate(triples):
        for name, e in zip("WXY", t.elements()):
            rows.append(elem_to_idx[(name, e)])
            cols.append(col)
            vals.append(1)
    if not triples:
        return sparse.csr_matrix((num_elems, 0), dtype=np.int64), elem_to_idx
    A = sparse.csr_matrix((vals, (rows, cols)), shape=(num_elems, len(triples)),
                          dtype=np.int64)
    return A, elem_to_idx


def instance_summary(result):
    """Ground-set sizes and element degree statistics for a ReductionResult."""
    triples = result.triples
    w_set, x_set, y_set = ground_sets(triples)
    A, _ = incidence_matrix(triples)
    degrees = np.asarray(A.sum(axis=1)).ravel()
    kinds = {}
    for t in triples:
        kinds[t.kind] = kinds.get(t.kind, 0) + 1
    return {
        "num_triples": len(triples),
        "ground_sets": {"W": len(w_set), "X": len(x_set), "Y": len(y_set)},
        "target_size": result.target_size,
        "triples_by_kind": kinds,
        "degree_min": int(degrees.min()) if degrees.size else 0,
        "degree_max": int(degrees.max()) if degrees.size else 0,
        "degree_mean": float(degrees.mean()) if degrees.size else 0.0,
    }


# =====================================================================
# MATCHING CHECKS
# =====================================================================

def is_perfect_matching(triples, selection):
    """True if the selected triple indices cover each element exactly once.

    selection: iterable of column indices into triples. Repeated or
    out-of-range indices make the selection invalid.
    """
    selection = list(selection)
    if len(selection) != len(set(selection)):
        return False
    if any(not 0 <= i < len(triples) for i in selection):
        return False
    if not triples:
        return not selection
    A, _ = incidence_matrix(triples)
    x = np.zeros(len(triples), dtype=np.int64)
    x[selection] = 1
    coverage = A @ x
    return bool(np.all(coverage == 1))


def witness_matching(formula, triples, assignment):
    """Selection of triple indices induced by a satisfying assignment.

    Ring i takes its True triples if assignment[i] else its False ones;
    clause j takes the first literal whose tip the ring left free; the
    remaining free tips are absorbed by garbage pairs 1..m(n-1) in order.

    Raises ValueError if some clause has no true literal.
    """
    selection = []
    free_tips = []
    for i in formula.variables():
        v = variable_letter(i)
        kind = VARIABLE_TRUE if assignment[i] else VARIABLE_FALSE
        for idx, t in enumerate(triples):
            if t.kind == kind and t.owner == v:
                selection.append(idx)
    used = {triples[idx].w for idx in selection}

    for idx, t in enumerate(triples):
        if t.kind in (VARIABLE_TRUE, VARIABLE_FALSE) and t.w not in used:
            free_tips.append(t.w)

    claimed = set()
    for j, clause in enumerate(formula.clauses, 1):
        chosen = None
        for idx, t in enumerate(triples):
            if t.kind == CLAUSE and t.owner == j and t.w in free_tips \
                    and t.w not in claimed:
                chosen = idx
                break
        if chosen is None:
            raise ValueError("clause {} not satisfied by assignment".format(j))
        selection.append(chosen)
        claimed.add(triples[chosen].w)

    leftover = [w for w in free_tips if w not in claimed]
    for k, w in enumerate(leftover, 1):
        idx = next((i for i, t in enumerate(triples)
                    if t.kind == GARBAGE and t.owner == k and t.w == w), None)
        if idx is None:
            raise ValueError("no garbage pair {} for tip {}".format(k, w))
        selection.append(idx)
    return selection
