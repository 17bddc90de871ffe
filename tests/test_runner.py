"""
VERIFY: Command-line runner
===========================

Single-file runs, --summary, --output, per-file error reporting,
the --all batch into a results directory and interactive entry.

Author: Carmen Esteban
"""

import io
import json
import os
import sys
import tempfile
from contextlib import redirect_stdout, redirect_stderr

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

import runs.run_reduction as runner
from runs.config import JOB_QUEUE
from runs.run_reduction import main, build_job

DATA_DIR = os.path.join(PROJECT_ROOT, "data")


def _run(argv):
    buf = io.StringIO()
    with redirect_stdout(buf):
        code = main(argv)
    return code, buf.getvalue()


def test_full_transcript():
    code, out = _run([os.path.join(DATA_DIR, "basico.txt"), "--quiet"])
    assert code == 0
    assert "Total de Tripletas: 66" in out
    assert "Matching Perfecto objetivo requiere seleccionar 6 tripletas." in out
    assert "Generando" not in out
    # formula block printed once, inside the transcript
    assert out.count("Variables: 3") == 1


def test_summary_mode():
    code, out = _run([os.path.join(DATA_DIR, "cuatro_variables.json"), "--summary"])
    assert code == 0
    assert "|W|, |X|, |Y| = 24, 24, 24" in out
    assert "Matching objetivo: 12 tripletas" in out
    assert "Tipo [" not in out
    assert "--- Generando Reduccion 3SAT -> 3DM ---" in out


def test_output_json():
    with tempfile.TemporaryDirectory() as tmp:
        out_path = os.path.join(tmp, "r.json")
        code, _ = _run([os.path.join(DATA_DIR, "unitario.txt"),
                        "--summary", "--quiet", "-o", out_path])
        assert code == 0
        with open(out_path) as f:
            assert len(json.load(f)["triplets"]) == 5


def test_bad_file_reported():
    with tempfile.TemporaryDirectory() as tmp:
        bad = os.path.join(tmp, "bad.txt")
        with open(bad, "w") as f:
            f.write("3 2\n1 2 3\n")
        code, out = _run([bad, os.path.join(DATA_DIR, "unitario.txt"),
                          "--summary", "--quiet"])
        assert code == 1
        assert "ERROR:" in out
        assert "Tripletas:  5" in out
        code, out = _run([os.path.join(tmp, "missing.txt"), "--quiet"])
        assert code == 1


def test_build_job():
    assert build_job("example", "basic-3x2").num_vars == 3
    f = build_job("random", (5, 4, 42))
    assert (f.num_vars, f.num_clauses) == (5, 4)
    try:
        build_job("nope", None)
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError")


def _run_with_stdin(argv, text):
    saved = sys.stdin
    sys.stdin = io.StringIO(text)
    try:
        return _run(argv)
    finally:
        sys.stdin = saved


def _usage_error(argv):
    buf = io.StringIO()
    try:
        with redirect_stderr(buf), redirect_stdout(io.StringIO()):
            main(argv)
    except SystemExit as e:
        return e.code
    return None


def test_interactive_entry():
    # second clause line is rejected (literal 4 > 3 variables) and asked again
    text = "3\n2\n1 -2 3\n1 4 3\n-1 2 -3\n"
    code, out = _run_with_stdin(["--interactive", "--quiet"], text)
    assert code == 0
    assert out.count("Clausula 2:") == 2
    assert "Clausula invalida" in out
    assert "C2: (¬a ∨ b ∨ ¬c)" in out
    assert "Total de Tripletas: 66" in out


def test_interactive_rejects_zero_and_short_clause():
    text = "1\n1\n1 0 1\n1 1\nx 1 1\n1 1 1\n"
    code, out = _run_with_stdin(["--interactive", "--summary", "--quiet"], text)
    assert code == 0
    assert out.count("Clausula invalida") == 3
    assert "Tripletas:  5" in out


def test_interactive_bad_counts_and_eof():
    code, out = _run_with_stdin(["--interactive", "--quiet"], "0\n")
    assert code == 1 and "ERROR:" in out
    code, out = _run_with_stdin(["--interactive", "--quiet"], "3\n2\n1 2 3\n")
    assert code == 1 and "input ended" in out


def test_all_writes_results():
    saved = runner.RESULTS_DIR
    with tempfile.TemporaryDirectory() as tmp:
        runner.RESULTS_DIR = tmp
        try:
            code, out = _run(["--all", "--quiet"])
        finally:
            runner.RESULTS_DIR = saved
        assert code == 0
        assert "Tipo [" in out
        data_files = runner.list_data_files(DATA_DIR)
        jobs = len(data_files) + len(JOB_QUEUE)
        assert "Completed: {}/{}".format(jobs, jobs) in out

        written = sorted(f for f in os.listdir(tmp) if f != "index.json")
        assert len(written) == jobs
        assert all(f.endswith(".json") for f in written)
        with open(os.path.join(tmp, "Random_5_4.json")) as f:
            assert len(json.load(f)["triplets"]) == 2 * 5 * 4 + 3 * 4 + 2 * 5 * 4 * 4 * 4

        with open(os.path.join(tmp, "index.json")) as f:
            index = json.load(f)
        assert sorted(index) == sorted(data_files + [name for name, _, _ in JOB_QUEUE])
        for name, source, params in JOB_QUEUE:
            expected = runner.reduce_formula(build_job(source, params)).summary()
            got = index[name]
            for key in ("variables", "clauses", "total_triples",
                        "phase_counts", "target_size"):
                assert got[key] == expected[key], (name, key)


def test_all_summary_passes_through():
    saved = runner.RESULTS_DIR
    with tempfile.TemporaryDirectory() as tmp:
        runner.RESULTS_DIR = tmp
        try:
            code, out = _run(["--all", "--quiet", "--summary"])
        finally:
            runner.RESULTS_DIR = saved
    assert code == 0
    assert "Tipo [" not in out
    assert "Matching objetivo:" in out


def test_all_rejects_files():
    assert _usage_error(["--all", "--quiet", "does-not-exist.txt"]) == 2
    assert _usage_error(["--interactive", "data/basico.txt"]) == 2
    assert _usage_error(["--all", "--interactive"]) == 2


if __name__ == "__main__":
    print("=" * 60)
    print("RUNNER: Verification")
    print("=" * 60)
    failed = 0
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            try:
                fn()
                print("  [PASS] {}".format(name))
            except AssertionError as e:
                failed += 1
                print("  [FAIL] {} {}".format(name, e))
    print("=" * 60)
    sys.exit(1 if failed else 0)
