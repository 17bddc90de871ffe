"""
Runner configuration and job definitions.
=========================================

Default reduction parameters and the queue of formulas processed by
run_reduction.py --all (in addition to every file in data/).

Author: Carmen Esteban
"""

import os

from sat3dm.reduction import ReductionConfig


PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.path.join(PROJECT_ROOT, "data")
RESULTS_DIR = os.path.join(PROJECT_ROOT, "results")


# --- Default reduction parameters ---

DEFAULT_CONFIG = ReductionConfig(
    verbose=True,
    validate_phase_counts=True,
)


# --- Job queue ---
# Each entry: (job_name, source, params)
#   source "example": params = example name
#   source "random":  params = (num_vars, num_clauses, seed)

JOB_QUEUE = [
    # --- named formulas ---
    ("basic-3x2",       "example", "basic-3x2"),
    ("single-1x1",      "example", "single-1x1"),
    ("mixed-2x3",       "example", "mixed-2x3"),
    ("four-vars-4x3",   "example", "four-vars-4x3"),

    # --- random 3-CNF, growing n and m ---
    ("Random(5,4)",     "random",  (5, 4, 42)),
    ("Random(8,6)",     "random",  (8, 6, 42)),
    ("Random(12,8)",    "random",  (12, 8, 7)),
]
