"""
SAT-to-3DM Reduction
====================

Builds, from a 3-CNF formula with n variables and m clauses, the
candidate triple set M of a 3-Dimensional Matching instance using the
classical gadget reduction:

  1 - Truth-Setting: one cyclic ring of m stages per variable
  2 - Satisfaction-Testing: one gadget per clause
  3 - Garbage Collection: filler pairs linked to every tip

Author: Carmen Esteban
License: MIT
"""

__version__ = "0.1.0"
__author__ = "Carmen Esteban"

from sat3dm.formula import (
    Formula, FormulaError,
    variable_letter, literal_to_string, clause_to_string,
)
from sat3dm.tips import TipRegistry, RegistryError, parse_identifier
from sat3dm.core import (
    Triple, ReductionContext, PhaseError,
    VARIABLE_TRUE, VARIABLE_FALSE, CLAUSE, GARBAGE,
    TRUTH_SETTING, SATISFACTION_TESTING, GARBAGE_COLLECTION,
)
from sat3dm.gadgets import (
    truth_setting, satisfaction_testing, garbage_collection, PHASES,
)
from sat3dm.reduction import (
    ReductionConfig, ReductionResult, Reduction3SATto3DM,
    expected_phase_counts, reduce_formula,
)
from sat3dm.formats import (
    parse_text, parse_json, load_formula, list_data_files,
    triples_to_json, write_json, load_triples_json,
    render_transcript, write_transcript,
)
from sat3dm.incidence import (
    ground_sets, incidence_matrix, instance_summary,
    is_perfect_matching, witness_matching,
)
from sat3dm.families import random_3cnf, EXAMPLES, example
