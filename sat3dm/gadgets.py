"""
Gadget Generators
=================

The three construction phases of the 3SAT -> 3DM reduction. Each
generator appends its triples to a ReductionContext and returns how
many it emitted.

    truth_setting         -- one cyclic ring of m stages per variable (2nm)
    satisfaction_testing  -- one gadget per clause (3m)
    garbage_collection    -- filler pairs linked to every tip (2nm * m(n-1))

Ring for variable v, stage j (0-based):

    True  : (w_neg_v_j, x_v_j,           y_v_j)
    False : (w_v_j,     x_v_((j+1) mod m), y_v_j)

Taking every True triple consumes the negative tips and leaves the
positive ones free for clauses; taking every False triple does the
opposite. Mixing branches double-covers some x node.

Author: Carmen Esteban
License: MIT
"""

from sat3dm.core import (
    Triple, VARIABLE_TRUE, VARIABLE_FALSE, CLAUSE, GARBAGE,
    TRUTH_SETTING, SATISFACTION_TESTING, GARBAGE_COLLECTION,
)
from sat3dm.formula import variable_letter
from sat3dm.tips import (
    x_node, y_node, pos_tip, neg_tip, clause_nodes, garbage_nodes,
)


# =====================================================================
# TRUTH-SETTING
# =====================================================================

def truth_setting(ctx):
    """Build every variable ring and register its tips.

    Seals the registry and marks the phase complete on return.
    """
    ctx.start(TRUTH_SETTING)
    m = ctx.m
    emitted = 0
    for i in ctx.formula.variables():
        v = variable_letter(i)
        for j in range(m):
            x_ij = x_node(v, j)
            y_ij = y_node(v, j)
            w_ij = pos_tip(v, j)
            w_bar_ij = neg_tip(v, j)
            ctx.registry.register(i, j, w_ij, w_bar_ij)

            ctx.emit(Triple(w_bar_ij, x_ij, y_ij, VARIABLE_TRUE, v))
            # last stage links back to stage 0 to close the ring
            ctx.emit(Triple(w_ij, x_node(v, (j + 1) % m), y_ij, VARIABLE_FALSE, v))
            emitted += 2
    ctx.registry.seal()
    ctx.mark_complete(TRUTH_SETTING)
    return emitted


# =====================================================================
# SATISFACTION-TESTING
# =====================================================================

def satisfaction_testing(ctx):
    """One gadget per clause: three triples sharing (s1_cj, s2_cj).

    Repeated literals inside a clause are kept as separate triples.
    """
    ctx.start(SATISFACTION_TESTING)
    ctx.require(TRUTH_SETTING)
    emitted = 0
    for j, clause in enumerate(ctx.formula.clauses):
        s1, s2 = clause_nodes(j)
        for lit in clause:
            tip = ctx.registry.lookup(lit, j)
            ctx.emit(Triple(tip, s1, s2, CLAUSE, j + 1))
            emitted += 1
    ctx.mark_complete(SATISFACTION_TESTING)
    return emitted


# =====================================================================
# GARBAGE COLLECTION
# =====================================================================

def garbage_collection(ctx):
    """m*(n-1) garbage pairs, each a candidate partner for every tip.

    n = 1 gives zero pairs. Tips are visited variable-major, positive
    before negative within a slot.
    """
    ctx.start(GARBAGE_COLLECTION)
    ctx.require(TRUTH_SETTING, SATISFACTION_TESTING)
    total_garbage = ctx.m * (ctx.n - 1)
    emitted = 0
    for k in range(1, total_garbage + 1):
        g1, g2 = garbage_nodes(k)
        for pos, neg in ctx.registry.all_tips():
            ctx.emit(Triple(pos, g1, g2, GARBAGE, k))
            ctx.emit(Triple(neg, g1, g2, GARBAGE, k))
            emitted += 2
    ctx.mark_complete(GARBAGE_COLLECTION)
    return emitted


PHASES = (
    (TRUTH_SETTING, truth_setting),
    (SATISFACTION_TESTING, satisfaction_testing),
    (GARBAGE_COLLECTION, garbage_collection),
)
