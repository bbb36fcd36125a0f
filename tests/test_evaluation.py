import json
import os
import sys

EVAL = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'evaluation'))
if EVAL not in sys.path:
	sys.path.insert(0, EVAL)

import evaluation


def test_parse_pytest_verbose_output():
	output = "\n".join([
		"tests/test_core.py::test_count_frequencies PASSED                [ 10%]",
		"tests/test_core.py::test_single_symbol_tree_is_one_leaf FAILED   [ 20%]",
		"tests/test_cli.py::test_missing_input_argument SKIPPED (reason)  [ 30%]",
		"collected 3 items",
	])
	tests = evaluation.parse_pytest_verbose_output(output)
	assert [t["outcome"] for t in tests] == ["passed", "failed", "skipped"]
	assert tests[0]["name"] == "test_count_frequencies"
	assert tests[1]["nodeid"] == "tests/test_core.py::test_single_symbol_tree_is_one_leaf"
	assert evaluation.summarize(tests) == {
		"total": 3, "passed": 1, "failed": 1, "error": 0, "skipped": 1,
	}


def test_run_benchmark_small_inputs():
	result = evaluation.run_benchmark({"text": b"benchmark me " * 100, "empty": b""})
	assert result["success"]
	rows = {r["name"]: r for r in result["samples"]}
	assert rows["text"]["compressed_size"] < rows["text"]["original_size"]
	assert rows["empty"]["compression_ratio"] is None


def test_sample_inputs_are_deterministic():
	assert evaluation.sample_inputs(3) == evaluation.sample_inputs(3)


def test_main_writes_report(tmp_path):
	report_path = tmp_path / "report.json"
	assert evaluation.main(["--skip-tests", "--output", str(report_path)]) == 0
	report = json.loads(report_path.read_text())
	assert report["success"] is True
	assert report["results"]["tests"] is None
	assert "python_version" in report["environment"]
