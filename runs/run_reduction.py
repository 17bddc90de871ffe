#!/usr/bin/env python3
"""
3SAT -> 3DM Reduction Runner
============================

Loads formulas, runs the reduction and prints or saves the triple set.

Usage:
    python runs/run_reduction.py data/basico.txt             # full transcript
    python runs/run_reduction.py data/basico.txt --summary   # counts only
    python runs/run_reduction.py data/basico.txt -o out.json # save triplets
    python runs/run_reduction.py --all                       # data/ + job queue -> results/
    python runs/run_reduction.py --interactive               # type the formula in

Author: Carmen Esteban
"""

import os
import sys
import json
import argparse

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from runs.config import DEFAULT_CONFIG, DATA_DIR, RESULTS_DIR, JOB_QUEUE
from sat3dm.formula import Formula, FormulaError
from sat3dm.formats import load_formula, list_data_files
from sat3dm.families import example, random_3cnf
from sat3dm.incidence import instance_summary
from sat3dm.reduction import ReductionConfig, reduce_formula


def build_job(source, params):
    if source == "example":
        return example(params)
    if source == "random":
        num_vars, num_clauses, seed = params
        return random_3cnf(num_vars, num_clauses, seed=seed)
    raise ValueError(f"Unknown job source: {source}")


def _ask_int(prompt, minimum):
    try:
        text = input(prompt)
    except EOFError:
        raise FormulaError("input ended before the formula was complete")
    try:
        value = int(text.strip())
    except ValueError:
        raise FormulaError(f"expected an integer, got {text.strip()!r}")
    if value < minimum:
        raise FormulaError(f"value must be >= {minimum}, got {value}")
    return value


def read_formula_interactive():
    """Prompt for the counts and each clause on stdin.

    A clause with the wrong arity, a 0 or an out-of-range literal is
    reported and asked again. Bad counts or end of input raise FormulaError.
    """
    num_vars = _ask_int("Numero de variables: ", 1)
    num_clauses = _ask_int("Numero de clausulas: ", 1)
    print("Introduce cada clausula (3 literales separados por espacios)")
    print(f"Ejemplo: 1 -2 3 representa (a ∨ ¬b ∨ c), rango [-{num_vars}, {num_vars}]")

    clauses = []
    while len(clauses) < num_clauses:
        try:
            text = input(f"Clausula {len(clauses) + 1}: ")
        except EOFError:
            raise FormulaError("input ended before the formula was complete")
        try:
            clause = tuple(int(t) for t in text.split())
            clauses.append(Formula(num_vars, (clause,)).clauses[0])
        except ValueError as e:
            # FormulaError is a ValueError; non-numeric tokens land here too
            print(f"  Clausula invalida: {e}. Intenta de nuevo.")
    return Formula(num_vars, tuple(clauses))


def print_summary(result):
    info = instance_summary(result)
    print("  Variables:  {}".format(result.formula.num_vars))
    print("  Clausulas:  {}".format(result.formula.num_clauses))
    print("  Tripletas:  {}".format(info["num_triples"]))
    print("  |W|, |X|, |Y| = {W}, {X}, {Y}".format(**info["ground_sets"]))
    print("  Matching objetivo: {} tripletas".format(info["target_size"]))


def run_one(name, formula, config, output=None, summary_only=False):
    print(f"--- {name} ---")
    result = reduce_formula(formula, config)
    if summary_only:
        print(formula.describe())
        print_summary(result)
    else:
        print(result.transcript())
    if output:
        result.save(output)
        print(f"  Saved: {output}")
    return result


def run_all(config, summary_only=False):
    """Reduce every data/ file and every queued job into results/."""
    os.makedirs(RESULTS_DIR, exist_ok=True)
    jobs = [(fname, lambda f=fname: load_formula(os.path.join(DATA_DIR, f)))
            for fname in list_data_files(DATA_DIR)]
    jobs += [(name, lambda s=source, p=params: build_job(s, p))
             for name, source, params in JOB_QUEUE]

    failures = 0
    index = {}
    for name, build in jobs:
        try:
            formula = build()
            safe_name = os.path.splitext(name)[0].replace("(", "_") \
                .replace(")", "").replace(",", "_")
            out_path = os.path.join(RESULTS_DIR, f"{safe_name}.json")
            result = run_one(name, formula, config, output=out_path,
                             summary_only=summary_only)
            index[name] = result.summary()
        except (FormulaError, OSError) as e:
            print(f"  ERROR: {e}")
            failures += 1

    with open(os.path.join(RESULTS_DIR, "index.json"), "w") as f:
        json.dump(index, f, indent=2)
    print("\n=== Done ===")
    print(f"Completed: {len(jobs) - failures}/{len(jobs)}")
    return failures


# --- Entry point ---

def main(argv=None):
    parser = argparse.ArgumentParser(description="3SAT -> 3DM reduction runner")
    parser.add_argument("files", nargs="*",
                        help="Formula files (.txt or .json)")
    parser.add_argument("--all", action="store_true",
                        help="Reduce every file in data/ and every queued job")
    parser.add_argument("-o", "--output",
                        help="Save result (.json -> triplets, else transcript)")
    parser.add_argument("--summary", action="store_true",
                        help="Print counts instead of the full triple list")
    parser.add_argument("--interactive", action="store_true",
                        help="Type the formula in at the prompt")
    parser.add_argument("--quiet", action="store_true",
                        help="Do not print phase progress")
    args = parser.parse_args(argv)

    config = ReductionConfig(
        verbose=DEFAULT_CONFIG.verbose and not args.quiet,
        validate_phase_counts=DEFAULT_CONFIG.validate_phase_counts,
    )

    if args.all and args.interactive:
        parser.error("--all and --interactive are exclusive")
    if (args.all or args.interactive) and args.files:
        parser.error("formula files cannot be combined with --all or --interactive")

    if args.all:
        return 1 if run_all(config, summary_only=args.summary) else 0

    if args.interactive:
        try:
            formula = read_formula_interactive()
            run_one("interactive", formula, config, output=args.output,
                    summary_only=args.summary)
        except (FormulaError, OSError) as e:
            print(f"  ERROR: {e}")
            return 1
        return 0

    if not args.files:
        parser.error("give at least one formula file, --all or --interactive")
    if args.output and len(args.files) > 1:
        parser.error("--output needs exactly one input file")

    failures = 0
    for path in args.files:
        try:
            formula = load_formula(path)
            run_one(path, formula, config, output=args.output,
                    summary_only=args.summary)
        except (FormulaError, OSError) as e:
            print(f"  ERROR: {e}")
            failures += 1
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
