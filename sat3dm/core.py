"""Core definitions: Triple, ReductionContext."""

from dataclasses import dataclass

from sat3dm.tips import TipRegistry


VARIABLE_TRUE = "variable-true"
VARIABLE_FALSE = "variable-false"
CLAUSE = "clause"
GARBAGE = "garbage"

KINDS = (VARIABLE_TRUE, VARIABLE_FALSE, CLAUSE, GARBAGE)

TRUTH_SETTING = "truth-setting"
SATISFACTION_TESTING = "satisfaction-testing"
GARBAGE_COLLECTION = "garbage-collection"


class PhaseError(RuntimeError):
    """A generator ran before the phase it depends on completed."""


@dataclass(frozen=True)
class Triple:
    """One candidate triple (w, x, y) of the 3DM instance.

    owner is the variable letter for ring triples, the 1-based clause
    index for clause triples and the 1-based garbage index otherwise.
    """
    w: str
    x: str
    y: str
    kind: str
    owner: object = None

    def __post_init__(self):
        if self.kind not in KINDS:
            raise ValueError("unknown triple kind {!r}".format(self.kind))

    @property
    def tag(self):
        if self.kind == VARIABLE_TRUE:
            return "Var-{}-True".format(self.owner)
        if self.kind == VARIABLE_FALSE:
            return "Var-{}-False".format(self.owner)
        if self.kind == CLAUSE:
            return "Clausula-{}".format(self.owner)
        return "Garbage"

    def elements(self):
        return self.w, self.x, self.y

    def to_dict(self):
        return {"w": self.w, "x": self.x, "y": self.y, "type": self.tag}

    def __str__(self):
        return "Tipo [{}]: ({}, {}, {})".format(self.tag, self.w, self.x, self.y)


class ReductionContext:
    """State owned by a single reduction run.

    Holds the formula, the tip registry, the append-only triple list and
    the set of completed phases. A new context is created per run.
    """

    def __init__(self, formula):
        self.formula = formula
        self.n = formula.num_vars
        self.m = formula.num_clauses
        self.registry = TipRegistry(self.n, self.m)
        self.triples = []
        self.completed_phases = []

    def emit(self, triple):
        self.triples.append(triple)

    def start(self, phase):
        if phase in self.completed_phases:
            raise PhaseError("phase {} already completed".format(phase))

    def mark_complete(self, phase):
        self.start(phase)
        self.completed_phases.append(phase)

    def require(self, *phases):
        missing = [p for p in phases if p not in self.completed_phases]
        if missing:
            raise PhaseError("required phase(s) not completed: {}".format(
                ", ".join(missing)))

    def __repr__(self):
        return "ReductionContext({!r}, {} triples, phases={})".format(
            self.formula, len(self.triples), self.completed_phases)
