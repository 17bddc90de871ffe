"""
3SAT -> 3DM Reduction
=====================

Runs the gadget generators in fixed order on a fresh context:

    1. Truth-Setting          (fills and seals the tip registry)
    2. Satisfaction-Testing   (reads the registry)
    3. Garbage Collection     (reads the registry)

and collects the candidate triple set M.

Classes:
    ReductionConfig     -- run parameters
    ReductionResult     -- triples, per-phase counts, timings; JSON/text output
    Reduction3SATto3DM  -- object-style entry point (generate / print_results)

Functions:
    expected_phase_counts -- closed-form triple counts per phase
    reduce_formula        -- run the full pipeline

Author: Carmen Esteban
License: MIT
"""

import time
from dataclasses import dataclass, field
from typing import Dict, Tuple

from sat3dm.core import (
    PhaseError, ReductionContext, Triple,
    TRUTH_SETTING, SATISFACTION_TESTING, GARBAGE_COLLECTION,
)
from sat3dm.formula import Formula
from sat3dm.gadgets import PHASES
from sat3dm import formats


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass
class ReductionConfig:
    """Parameters controlling a reduction run."""
    verbose: bool = False
    validate_phase_counts: bool = True


def expected_phase_counts(n, m):
    """Triples each phase must emit for n variables and m clauses."""
    return {
        TRUTH_SETTING: 2 * n * m,
        SATISFACTION_TESTING: 3 * m,
        GARBAGE_COLLECTION: 2 * n * m * m * max(n - 1, 0),
    }


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass
class ReductionResult:
    """Output of one reduction run. triples is an immutable tuple."""
    formula: Formula
    triples: Tuple[Triple, ...]
    phase_counts: Dict[str, int] = field(default_factory=dict)
    timings: Dict[str, float] = field(default_factory=dict)

    @property
    def target_size(self):
        """Perfect-matching target reported by the transcript: n * m."""
        return self.formula.num_vars * self.formula.num_clauses

    def phase_triples(self, phase):
        """Slice of triples emitted by one phase, in emission order."""
        start = 0
        for name, _ in PHASES:
            count = self.phase_counts.get(name, 0)
            if name == phase:
                return self.triples[start:start + count]
            start += count
        raise KeyError(phase)

    def summary(self):
        return {
            "variables": self.formula.num_vars,
            "clauses": self.formula.num_clauses,
            "total_triples": len(self.triples),
            "phase_counts": dict(self.phase_counts),
            "target_size": self.target_size,
            "timings": {k: round(v, 6) for k, v in self.timings.items()},
        }

    def to_json(self):
        return formats.triples_to_json(self.triples)

    def transcript(self):
        return formats.render_transcript(self.formula, self.triples)

    def save(self, path):
        """.json -> structured triplets file, anything else -> transcript."""
        if str(path).endswith(".json"):
            formats.write_json(path, self.triples)
        else:
            formats.write_transcript(path, self.formula, self.triples)

    def __len__(self):
        return len(self.triples)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def reduce_formula(formula, config=None):
    """Build the 3DM candidate set M for a 3-CNF formula.

    Parameters
    ----------
    formula : Formula
        Validated formula. n = 0 or m = 0 gives an empty M.
    config : ReductionConfig, optional

    Returns
    -------
    ReductionResult
    """
    config = config or ReductionConfig()
    ctx = ReductionContext(formula)
    expected = expected_phase_counts(ctx.n, ctx.m)

    if config.verbose:
        print("--- Generando Reduccion 3SAT -> 3DM ---")
        print("  n={}, m={}".format(ctx.n, ctx.m))

    counts, timings = {}, {}
    for name, generator in PHASES:
        t0 = time.time()
        emitted = generator(ctx)
        timings[name] = time.time() - t0
        counts[name] = emitted
        if config.validate_phase_counts and emitted != expected[name]:
            raise PhaseError("{} emitted {} triples, expected {}".format(
                name, emitted, expected[name]))
        if config.verbose:
            print("  {:<22} {:>8} triples [{:.3f}s]".format(
                name, emitted, timings[name]))

    if config.verbose:
        print("  Total: {} triples, target matching {}".format(
            len(ctx.triples), ctx.n * ctx.m))

    return ReductionResult(formula=formula, triples=tuple(ctx.triples),
                           phase_counts=counts, timings=timings)


class Reduction3SATto3DM:
    """Object-style wrapper: construct, generate(), then read triples."""

    def __init__(self, num_vars, clauses, config=None):
        self.formula = Formula(num_vars, tuple(tuple(c) for c in clauses))
        self.config = config or ReductionConfig()
        self.result = None

    def generate(self):
        self.result = reduce_formula(self.formula, self.config)
        return self.result

    @property
    def triples(self):
        if self.result is None:
            return ()
        return self.result.triples

    def print_results(self):
        if self.result is None:
            self.generate()
        print(formats.render_triples_block(self.formula, self.result.triples))
