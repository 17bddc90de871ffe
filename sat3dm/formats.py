"""
Formula Loaders and Result Writers
==================================

Plain-text formula format:

    # optional comment lines
    <numVars> <numClauses>
    <lit1> <lit2> <lit3>
    ...

JSON formula format:   {"variables": 3, "clauses": [[1, -2, 3], ...]}
JSON result format:    {"triplets": [{"w": ..., "x": ..., "y": ..., "type": ...}]}

The plain-text result transcript lists the formula, every triple as
"Tipo [<tag>]: (w, x, y)", the total and the matching target.

Author: Carmen Esteban
License: MIT
"""

import json
import os

from sat3dm.core import Triple, VARIABLE_TRUE, VARIABLE_FALSE, CLAUSE, GARBAGE
from sat3dm.formula import Formula, FormulaError


# =====================================================================
# FORMULA INPUT
# =====================================================================

def _check_counts(num_vars, num_clauses):
    if num_vars < 1:
        raise FormulaError("number of variables must be >= 1, got {}".format(num_vars))
    if num_clauses < 1:
        raise FormulaError("number of clauses must be >= 1, got {}".format(num_clauses))


def _parse_ints(tokens, lineno):
    try:
        return [int(t) for t in tokens]
    except ValueError:
        raise FormulaError("line {}: non-numeric token in {!r}".format(
            lineno, " ".join(tokens)))


def parse_text(text):
    """Parse the plain-text formula format. Raises FormulaError."""
    lines = [(i, line.strip()) for i, line in enumerate(text.splitlines(), 1)]
    lines = [(i, line) for i, line in lines if line and not line.startswith("#")]
    if not lines:
        raise FormulaError("no header line with <numVars> <numClauses>")

    lineno, header = lines[0]
    tokens = header.split()
    if len(tokens) < 2:
        raise FormulaError("line {}: expected <numVars> <numClauses>".format(lineno))
    num_vars, num_clauses = _parse_ints(tokens[:2], lineno)
    _check_counts(num_vars, num_clauses)

    body = lines[1:]
    if len(body) < num_clauses:
        raise FormulaError("expected {} clause lines, found {}".format(
            num_clauses, len(body)))

    clauses = []
    for lineno, line in body[:num_clauses]:
        tokens = line.split()
        if len(tokens) < 3:
            raise FormulaError("line {}: clause needs 3 literals".format(lineno))
        clause = _parse_ints(tokens[:3], lineno)
        try:
            clauses.append(Formula(num_vars, (clause,)).clauses[0])
        except FormulaError as e:
            raise FormulaError("line {}: {}".format(lineno, e))
    return Formula(num_vars, tuple(clauses))


def parse_json(data):
    """Build a Formula from a decoded JSON object (or JSON text)."""
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise FormulaError("invalid JSON: {}".format(e))
    if not isinstance(data, dict):
        raise FormulaError("expected a JSON object with 'variables' and 'clauses'")

    num_vars = data.get("variables")
    clauses = data.get("clauses")
    if not isinstance(num_vars, int) or isinstance(num_vars, bool):
        raise FormulaError("'variables' must be an integer")
    if not isinstance(clauses, list):
        raise FormulaError("'clauses' must be an array")
    _check_counts(num_vars, len(clauses))
    for idx, clause in enumerate(clauses, 1):
        if not isinstance(clause, list) or len(clause) != 3:
            raise FormulaError("clause {} must be an array of 3 integers".format(idx))
    return Formula(num_vars, tuple(tuple(c) for c in clauses))


def load_formula(path):
    """Load a formula file; '.json' selects the JSON format.

    OSError propagates. Parse failures raise FormulaError naming the path.
    """
    with open(path, encoding="utf-8") as f:
        content = f.read()
    try:
        if str(path).endswith(".json"):
            return parse_json(content)
        return parse_text(content)
    except FormulaError as e:
        raise FormulaError("{}: {}".format(path, e))


def list_data_files(directory):
    """Sorted .txt/.json file names in directory (empty if missing)."""
    if not os.path.isdir(directory):
        return []
    return sorted(
        name for name in os.listdir(directory)
        if os.path.isfile(os.path.join(directory, name))
        and os.path.splitext(name)[1] in (".txt", ".json"))


def format_formula_text(formula):
    """Inverse of parse_text."""
    lines = ["{} {}".format(formula.num_vars, formula.num_clauses)]
    lines.extend(" ".join(str(l) for l in c) for c in formula.clauses)
    return "\n".join(lines) + "\n"


# =====================================================================
# RESULT OUTPUT
# =====================================================================

def triples_to_json(triples):
    return json.dumps({"triplets": [t.to_dict() for t in triples]}, indent=2,
                      ensure_ascii=False)


def write_json(path, triples):
    with open(path, "w", encoding="utf-8") as f:
        f.write(triples_to_json(triples))
        f.write("\n")


def _triple_from_tag(w, x, y, tag):
    if tag.startswith("Var-") and tag.endswith("-True"):
        return Triple(w, x, y, VARIABLE_TRUE, tag[len("Var-"):-len("-True")])
    if tag.startswith("Var-") and tag.endswith("-False"):
        return Triple(w, x, y, VARIABLE_FALSE, tag[len("Var-"):-len("-False")])
    if tag.startswith("Clausula-"):
        return Triple(w, x, y, CLAUSE, int(tag[len("Clausula-"):]))
    if tag == "Garbage":
        # garbage index is not part of the tag; recover it from g1_<k>
        return Triple(w, x, y, GARBAGE, int(x.rsplit("_", 1)[1]))
    raise ValueError("unknown triple type {!r}".format(tag))


def load_triples_json(path):
    """Read a 'triplets' file back into Triple objects."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return [_triple_from_tag(t["w"], t["x"], t["y"], t["type"])
            for t in data["triplets"]]


def render_triples_block(formula, triples):
    """Triple listing, total and matching target (no formula header)."""
    lines = ["--- Conjunto M (Tripletas) Generado ---", "Formato: (W, X, Y)"]
    lines.extend(str(t) for t in triples)
    lines.append("")
    lines.append("Total de Tripletas: {}".format(len(triples)))
    lines.append("Matching Perfecto objetivo requiere seleccionar {} tripletas.".format(
        formula.num_vars * formula.num_clauses))
    return "\n".join(lines)


def render_transcript(formula, triples):
    """Full plain-text report: header, formula, triples, totals."""
    rule = "=" * 40
    parts = [
        rule,
        "  REDUCCIÓN 3SAT → 3DM",
        rule,
        "",
        "FÓRMULA 3SAT:",
        formula.describe(),
        "",
        "-" * 40,
        "",
        render_triples_block(formula, triples),
    ]
    return "\n".join(parts) + "\n"


def write_transcript(path, formula, triples):
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_transcript(formula, triples))
