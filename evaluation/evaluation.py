#!/usr/bin/env python3
"""
Evaluation runner for the streaming Huffman codec.

This evaluation script:
- Runs pytest on the tests/ folder and collects individual test outcomes
- Compresses a set of generated sample inputs, checking round-trip integrity
  and recording sizes, ratios and timings
- Generates a structured JSON report with environment metadata

Run with:
    python evaluation/evaluation.py [--output PATH] [--skip-tests]
"""
import json
import os
import platform
import random
import subprocess
import sys
import time
import uuid
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from huffman_chunk import BLOCK_SIZE  # noqa: E402
from huffman_service import HuffmanService  # noqa: E402


def generate_run_id():
    """Generate a short unique run ID."""
    return uuid.uuid4().hex[:8]


def get_git_info():
    """Get git commit and branch information."""
    git_info = {"git_commit": "unknown", "git_branch": "unknown"}
    for key, cmd in (
        ("git_commit", ["git", "rev-parse", "HEAD"]),
        ("git_branch", ["git", "rev-parse", "--abbrev-ref", "HEAD"]),
    ):
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=5,
                                    cwd=str(PROJECT_ROOT))
        except (OSError, subprocess.SubprocessError):
            continue
        if result.returncode == 0:
            value = result.stdout.strip()
            git_info[key] = value[:8] if key == "git_commit" else value
    return git_info


def get_environment_info():
    """Collect environment information for the report."""
    git_info = get_git_info()

    return {
        "python_version": platform.python_version(),
        "platform": platform.platform(),
        "os": platform.system(),
        "os_release": platform.release(),
        "architecture": platform.machine(),
        "hostname": platform.node(),
        "git_commit": git_info["git_commit"],
        "git_branch": git_info["git_branch"],
    }


def parse_pytest_verbose_output(output):
    """Parse pytest verbose output to extract test results."""
    tests = []
    statuses = {
        " PASSED": "passed",
        " FAILED": "failed",
        " ERROR": "error",
        " SKIPPED": "skipped",
    }

    for line in output.split('\n'):
        line_stripped = line.strip()

        # Match lines like: tests/test_service.py::test_roundtrip_empty PASSED
        if '::' not in line_stripped:
            continue
        for status_word, outcome in statuses.items():
            if status_word in line_stripped:
                nodeid = line_stripped.split(status_word)[0].strip()
                tests.append({
                    "nodeid": nodeid,
                    "name": nodeid.split("::")[-1],
                    "outcome": outcome,
                })
                break

    return tests


def summarize(tests):
    summary = {"total": len(tests)}
    for outcome in ("passed", "failed", "error", "skipped"):
        summary[outcome] = sum(1 for t in tests if t.get("outcome") == outcome)
    return summary


def run_pytest(tests_dir, timeout=600):
    """Run pytest on ``tests_dir`` with src/ on PYTHONPATH and collect the outcomes."""
    print(f"\n{'=' * 60}")
    print("RUNNING TESTS")
    print(f"{'=' * 60}")
    print(f"Tests directory: {tests_dir}")

    cmd = [sys.executable, "-m", "pytest", str(tests_dir), "-v", "--tb=short"]
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))

    try:
        result = subprocess.run(cmd, capture_output=True, text=True,
                                cwd=str(PROJECT_ROOT), env=env, timeout=timeout)
    except subprocess.TimeoutExpired:
        print("❌ Test execution timed out")
        return {"success": False, "exit_code": -1, "tests": [],
                "summary": {"error": "Test execution timed out"}, "stdout": "", "stderr": ""}

    tests = parse_pytest_verbose_output(result.stdout)
    summary = summarize(tests)
    print(f"\nResults: {summary['passed']} passed, {summary['failed']} failed, "
          f"{summary['error']} errors, {summary['skipped']} skipped (total: {summary['total']})")

    return {
        "success": result.returncode == 0,
        "exit_code": result.returncode,
        "tests": tests,
        "summary": summary,
        "stdout": result.stdout[-3000:],
        "stderr": result.stderr[-1000:],
    }


def sample_inputs(seed=0):
    """Deterministic inputs covering the codec's interesting shapes."""
    rng = random.Random(seed)
    text = (b"The quick brown fox jumps over the lazy dog. " * 2000)[:90000]
    return {
        "empty": b"",
        "single_byte": b"A",
        "repeated_byte": b"\x00" * 20000,
        "all_byte_values": bytes(range(256)) * 4,
        "text_multi_chunk": text,
        "random_one_block": bytes(rng.getrandbits(8) for _ in range(BLOCK_SIZE)),
    }


def measure(service, name, data):
    t0 = time.perf_counter()
    encoded = service.compress(data)
    t1 = time.perf_counter()
    decoded = service.decompress(encoded)
    t2 = time.perf_counter()

    return {
        "name": name,
        "original_size": len(data),
        "compressed_size": len(encoded),
        "compression_ratio": round(len(encoded) / len(data), 4) if data else None,
        "compression_time_ms": round((t1 - t0) * 1000, 3),
        "decompression_time_ms": round((t2 - t1) * 1000, 3),
        "roundtrip_ok": decoded == data,
    }


def run_benchmark(inputs=None):
    print(f"\n{'=' * 60}")
    print("RUNNING BENCHMARK")
    print(f"{'=' * 60}")

    service = HuffmanService()
    rows = []
    for name, data in (inputs or sample_inputs()).items():
        row = measure(service, name, data)
        icon = "✅" if row["roundtrip_ok"] else "❌"
        print(f"  {icon} {name}: {row['original_size']} -> {row['compressed_size']} bytes "
              f"({row['compression_time_ms']} ms / {row['decompression_time_ms']} ms)")
        rows.append(row)

    return {"success": all(r["roundtrip_ok"] for r in rows), "samples": rows}


def generate_output_path():
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    output_dir = PROJECT_ROOT / "evaluation" / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S")
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / "report.json"


def main(argv=None):
    """Main entry point for evaluation."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the Huffman codec evaluation")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)"
    )
    parser.add_argument(
        "--skip-tests",
        action="store_true",
        help="Only run the compression benchmark"
    )
    args = parser.parse_args(argv)

    run_id = generate_run_id()
    started_at = datetime.now()
    print(f"Run ID: {run_id}")
    print(f"Started at: {started_at.isoformat()}")

    tests = None if args.skip_tests else run_pytest(PROJECT_ROOT / "tests")
    benchmark = run_benchmark()
    success = benchmark["success"] and (tests is None or tests["success"])

    finished_at = datetime.now()
    duration = (finished_at - started_at).total_seconds()

    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round(duration, 6),
        "success": success,
        "environment": get_environment_info(),
        "results": {"tests": tests, "benchmark": benchmark},
    }

    output_path = Path(args.output) if args.output else generate_output_path()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
    print(f"\n✅ Report saved to: {output_path}")

    print(f"\n{'=' * 60}")
    print("EVALUATION COMPLETE")
    print(f"{'=' * 60}")
    print(f"Run ID: {run_id}")
    print(f"Duration: {duration:.2f}s")
    print(f"Success: {'✅ YES' if success else '❌ NO'}")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
