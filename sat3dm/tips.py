"""
Node Naming and Tip Registry
============================

Deterministic identifiers for every node of the 3DM instance, and the
table of ring tips shared between the gadget generators.

Identifier scheme (slot and index fields are 1-based):

    x_<v>_<j>       ring node, ground set X
    y_<v>_<j>       ring node, ground set Y
    w_<v>_<j>       positive tip, ground set W
    w_neg_<v>_<j>   negative tip, ground set W
    s1_c<j>         clause node, ground set X
    s2_c<j>         clause node, ground set Y
    g1_<k>          garbage node, ground set X
    g2_<k>          garbage node, ground set Y

<v> is a variable letter (only a-z, never '_'), numbers are decimal.
Splitting on '_' therefore gives a kind prefix and a field count fixed
per kind (w_<v>_<j> has 3 fields, w_neg_<v>_<j> has 4), so no two
distinct nodes share a name. parse_identifier() is the inverse.

Functions:
    x_node, y_node, pos_tip, neg_tip  -- ring node names
    clause_nodes, garbage_nodes       -- internal node pairs
    parse_identifier                  -- name -> (kind, fields)

Classes:
    TipRegistry  -- per-run (variable, slot) -> (pos, neg) table

Author: Carmen Esteban
License: MIT
"""

from sat3dm.formula import letter_index


class RegistryError(LookupError):
    """Tip lookup or registration outside the built ranges or phases."""


# =====================================================================
# IDENTIFIER SYNTHESIS
# =====================================================================

def x_node(letter, j):
    return "x_{}_{}".format(letter, j + 1)


def y_node(letter, j):
    return "y_{}_{}".format(letter, j + 1)


def pos_tip(letter, j):
    return "w_{}_{}".format(letter, j + 1)


def neg_tip(letter, j):
    return "w_neg_{}_{}".format(letter, j + 1)


def clause_nodes(j):
    """Internal (X, Y) nodes of clause j (0-based)."""
    return "s1_c{}".format(j + 1), "s2_c{}".format(j + 1)


def garbage_nodes(k):
    """Internal (X, Y) nodes of garbage pair k (1-based)."""
    return "g1_{}".format(k), "g2_{}".format(k)


def parse_identifier(name):
    """Recover (kind, fields) from a synthesized identifier.

    Kinds: 'x', 'y', 'w', 'w_neg' -> (variable, slot) with 1-based slot;
    's1', 's2' -> (clause,); 'g1', 'g2' -> (garbage_index,).

    Raises ValueError on names that no synthesis function produces.
    """
    parts = name.split("_")
    try:
        if parts[0] in ("x", "y", "w") and len(parts) == 3:
            return parts[0], (letter_index(parts[1]), _positive(parts[2]))
        if parts[:2] == ["w", "neg"] and len(parts) == 4:
            return "w_neg", (letter_index(parts[2]), _positive(parts[3]))
        if parts[0] in ("s1", "s2") and len(parts) == 2 and parts[1].startswith("c"):
            return parts[0], (_positive(parts[1][1:]),)
        if parts[0] in ("g1", "g2") and len(parts) == 2:
            return parts[0], (_positive(parts[1]),)
    except ValueError:
        pass
    raise ValueError("not a node identifier: {!r}".format(name))


def _positive(text):
    if not text.isdigit() or text.startswith("0"):
        raise ValueError(text)
    return int(text)


# =====================================================================
# TIP REGISTRY
# =====================================================================

class TipRegistry:
    """Positive/negative tip names per (variable, clause slot).

    Filled by Truth-Setting, then sealed. Lookups are only allowed
    after seal(), registrations only before.
    """

    def __init__(self, num_vars, num_clauses):
        self.num_vars = num_vars
        self.num_clauses = num_clauses
        self._pos = {}
        self._neg = {}
        self.sealed = False

    def register(self, var, j, pos, neg):
        if self.sealed:
            raise RegistryError("registry is sealed, cannot register tips")
        self._check_range(var, j)
        if (var, j) in self._pos:
            raise RegistryError("tips for variable {} slot {} already registered".format(
                var, j))
        self._pos[(var, j)] = pos
        self._neg[(var, j)] = neg

    def seal(self):
        expected = self.num_vars * self.num_clauses
        if len(self._pos) != expected:
            raise RegistryError("registry incomplete: {} of {} slots".format(
                len(self._pos), expected))
        self.sealed = True

    def lookup(self, literal, j):
        """Tip a clause literal claims: negative tip if negated, else positive."""
        if not self.sealed:
            raise RegistryError("lookup before truth-setting completed")
        var = abs(literal)
        self._check_range(var, j)
        if literal < 0:
            return self._neg[(var, j)]
        return self._pos[(var, j)]

    def tips(self, var, j):
        self._check_range(var, j)
        return self._pos[(var, j)], self._neg[(var, j)]

    def all_tips(self):
        """Yield (pos, neg) for every variable and slot, variable-major."""
        for var in range(1, self.num_vars + 1):
            for j in range(self.num_clauses):
                yield self._pos[(var, j)], self._neg[(var, j)]

    def _check_range(self, var, j):
        if not 1 <= var <= self.num_vars:
            raise RegistryError("variable {} outside 1..{}".format(var, self.num_vars))
        if not 0 <= j < self.num_clauses:
            raise RegistryError("clause slot {} outside 0..{}".format(
                j, self.num_clauses - 1))

    def __len__(self):
        return len(self._pos)

    def __repr__(self):
        return "TipRegistry({} vars, {} slots, sealed={})".format(
            self.num_vars, self.num_clauses, self.sealed)
