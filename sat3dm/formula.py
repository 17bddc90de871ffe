"""
3-CNF Formula Model
===================

Immutable representation of a 3SAT instance.

A literal is a non-zero int: abs value is the 1-based variable index,
sign is the polarity (-2 means "not b"). A clause is exactly three
literals. Variables are displayed with letters a, b, ..., z, aa, ab, ...

Author: Carmen Esteban
License: MIT
"""

from dataclasses import dataclass
from typing import Tuple


class FormulaError(ValueError):
    """Malformed formula: bad counts, clause arity or literal range."""


def variable_letter(i):
    """Display letter for variable i (1-based): 1 -> 'a', 27 -> 'aa'.

    Bijective base-26, so every positive index gets a distinct name made
    only of lowercase letters.
    """
    if i < 1:
        raise ValueError("variable index must be >= 1, got {}".format(i))
    chars = []
    while i > 0:
        i, rem = divmod(i - 1, 26)
        chars.append(chr(ord('a') + rem))
    return "".join(reversed(chars))


def letter_index(letter):
    """Inverse of variable_letter."""
    if not letter or not all('a' <= ch <= 'z' for ch in letter):
        raise ValueError("not a variable letter: {!r}".format(letter))
    i = 0
    for ch in letter:
        i = i * 26 + (ord(ch) - ord('a') + 1)
    return i


def literal_to_string(lit):
    name = variable_letter(abs(lit))
    return "¬" + name if lit < 0 else name


def clause_to_string(clause):
    return "(" + " ∨ ".join(literal_to_string(l) for l in clause) + ")"


@dataclass(frozen=True)
class Formula:
    """A 3-CNF formula: variable count plus ordered clauses.

    n = 0 or m = 0 is accepted here and yields an empty reduction;
    the file loaders reject both as malformed input.
    """
    num_vars: int
    clauses: Tuple[Tuple[int, int, int], ...]

    def __post_init__(self):
        if not isinstance(self.num_vars, int) or isinstance(self.num_vars, bool):
            raise FormulaError("variable count must be an int")
        if self.num_vars < 0:
            raise FormulaError("variable count must be >= 0, got {}".format(
                self.num_vars))
        normalized = []
        for idx, clause in enumerate(self.clauses, 1):
            clause = tuple(clause)
            if len(clause) != 3:
                raise FormulaError("clause {} has {} literals, expected 3".format(
                    idx, len(clause)))
            for lit in clause:
                if not isinstance(lit, int) or isinstance(lit, bool):
                    raise FormulaError("clause {}: literal {!r} is not an int".format(
                        idx, lit))
                if lit == 0:
                    raise FormulaError("clause {}: literal cannot be 0".format(idx))
                if abs(lit) > self.num_vars:
                    raise FormulaError(
                        "clause {}: literal {} out of range [-{}, {}]".format(
                            idx, lit, self.num_vars, self.num_vars))
            normalized.append(clause)
        # frozen dataclass: bypass __setattr__ to store the canonical tuple
        object.__setattr__(self, "clauses", tuple(normalized))

    @property
    def num_clauses(self):
        return len(self.clauses)

    def variables(self):
        return range(1, self.num_vars + 1)

    def literals(self):
        """Yield (clause_index, literal) in clause order, 0-based index."""
        for j, clause in enumerate(self.clauses):
            for lit in clause:
                yield j, lit

    def is_satisfied_by(self, assignment):
        """True if every clause has a true literal.

        assignment: dict var -> bool. Evaluation only, no search.
        """
        for clause in self.clauses:
            if not any(assignment[abs(l)] == (l > 0) for l in clause):
                return False
        return True

    def describe(self):
        lines = ["Variables: {}".format(self.num_vars),
                 "Cláusulas: {}".format(self.num_clauses), ""]
        for j, clause in enumerate(self.clauses, 1):
            lines.append("C{}: {}".format(j, clause_to_string(clause)))
        return "\n".join(lines)

    def to_dict(self):
        return {"variables": self.num_vars,
                "clauses": [list(c) for c in self.clauses]}

    def __repr__(self):
        return "Formula({} vars, {} clauses)".format(
            self.num_vars, self.num_clauses)
