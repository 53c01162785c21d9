#!/usr/bin/env python3
"""
Evaluation runner for the Huffman tree-header compressor.

This evaluation script:
- Runs the pytest suite in tests/ and collects individual test results
- Measures compression ratio and throughput on a few generated payloads
- Generates a structured JSON report with environment metadata

Run with:
    python evaluation/evaluation.py [--output report.json] [--benchmark-size BYTES]
"""
import os
import sys
import json
import uuid
import random
import platform
import subprocess
import time
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent


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
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=5, cwd=str(PROJECT_ROOT))
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
        "architecture": platform.machine(),
        "hostname": platform.node(),
        "git_commit": git_info["git_commit"],
        "git_branch": git_info["git_branch"],
    }


def parse_pytest_verbose_output(output):
    """Parse pytest verbose output to extract test results."""
    tests = []
    statuses = {" PASSED": "passed", " FAILED": "failed", " ERROR": "error", " SKIPPED": "skipped"}

    for line in output.split('\n'):
        line_stripped = line.strip()

        # Match lines like: tests/test_processor.py::test_round_trip_empty PASSED [ 10%]
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


def run_pytest(tests_dir, label="tests"):
    """
    Run pytest on the tests/ folder with the project root on PYTHONPATH.

    Returns:
        dict with test results
    """
    print(f"\n{'=' * 60}")
    print(f"RUNNING TESTS: {label.upper()}")
    print(f"{'=' * 60}")
    print(f"Tests directory: {tests_dir}")

    cmd = [sys.executable, "-m", "pytest", str(tests_dir), "-v", "--tb=short"]
    env = os.environ.copy()
    env["PYTHONPATH"] = str(PROJECT_ROOT)

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
            env=env,
            timeout=600
        )
    except subprocess.TimeoutExpired:
        print("❌ Test execution timed out")
        return {
            "success": False,
            "exit_code": -1,
            "tests": [],
            "summary": {"error": "Test execution timed out"},
            "stdout": "",
            "stderr": "",
        }

    stdout = result.stdout
    stderr = result.stderr
    tests = parse_pytest_verbose_output(stdout)
    summary = summarize(tests)

    print(f"\nResults: {summary['passed']} passed, {summary['failed']} failed, "
          f"{summary['errors']} errors, {summary['skipped']} skipped (total: {summary['total']})")
    for test in tests:
        status_icon = {
            "passed": "✅",
            "failed": "❌",
            "error": "💥",
            "skipped": "⏭️"
        }.get(test["outcome"], "❓")
        print(f"  {status_icon} {test['nodeid']}: {test['outcome']}")

    return {
        "success": result.returncode == 0,
        "exit_code": result.returncode,
        "tests": tests,
        "summary": summary,
        "stdout": stdout[-3000:],
        "stderr": stderr[-1000:],
    }


def summarize(tests):
    return {
        "total": len(tests),
        "passed": sum(1 for t in tests if t["outcome"] == "passed"),
        "failed": sum(1 for t in tests if t["outcome"] == "failed"),
        "errors": sum(1 for t in tests if t["outcome"] == "error"),
        "skipped": sum(1 for t in tests if t["outcome"] == "skipped"),
    }


def benchmark_payloads(size):
    rng = random.Random(2018)
    line = b"2018-10-19 12:00:01 INFO request served in 12ms\n"
    return {
        "random": bytes(rng.getrandbits(8) for _ in range(size)),
        "log_lines": (line * (size // len(line) + 1))[:size],
        "single_symbol": b"A" * size,
    }


def run_benchmark(size):
    """Compress and decompress each payload, recording ratio and timings."""
    if str(PROJECT_ROOT) not in sys.path:
        sys.path.insert(0, str(PROJECT_ROOT))
    from huffman_service import HuffmanService

    print(f"\n{'=' * 60}")
    print(f"BENCHMARK ({size} bytes per payload)")
    print(f"{'=' * 60}")

    svc = HuffmanService()
    results = {}
    for name, data in benchmark_payloads(size).items():
        t0 = time.time()
        compressed = svc.compress(data)
        t1 = time.time()
        restored = svc.decompress(compressed)
        t2 = time.time()

        results[name] = {
            "original_bytes": len(data),
            "compressed_bytes": len(compressed),
            "ratio": round(len(compressed) / len(data), 4) if data else None,
            "compress_seconds": round(t1 - t0, 4),
            "decompress_seconds": round(t2 - t1, 4),
            "round_trip_ok": restored == data,
        }
        print(f"  {name}: {len(data)} -> {len(compressed)} bytes "
              f"({t1 - t0:.3f}s / {t2 - t1:.3f}s) {'✅' if restored == data else '❌'}")
    return results


def generate_output_path():
    """Generate output path in format: evaluation/YYYY-MM-DD/HH-MM-SS/report.json"""
    now = datetime.now()
    output_dir = PROJECT_ROOT / "evaluation" / now.strftime("%Y-%m-%d") / now.strftime("%H-%M-%S")
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / "report.json"


def main(argv=None):
    """Main entry point for evaluation."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the Huffman compressor evaluation")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)"
    )
    parser.add_argument(
        "--benchmark-size",
        type=int,
        default=64 * 1024,
        help="Bytes per benchmark payload (0 skips the benchmark)"
    )
    parser.add_argument("--skip-tests", action="store_true", help="Only run the benchmark")

    args = parser.parse_args(argv)

    run_id = generate_run_id()
    started_at = datetime.now()

    print(f"Run ID: {run_id}")
    print(f"Started at: {started_at.isoformat()}")

    tests = None if args.skip_tests else run_pytest(PROJECT_ROOT / "tests")
    benchmark = run_benchmark(args.benchmark_size) if args.benchmark_size > 0 else None

    success = (tests is None or tests["success"]) and (
        benchmark is None or all(r["round_trip_ok"] for r in benchmark.values())
    )

    finished_at = datetime.now()
    duration = (finished_at - started_at).total_seconds()

    report = {
        "run_id": run_id,
        "started_at": started_at.isoformat(),
        "finished_at": finished_at.isoformat(),
        "duration_seconds": round(duration, 6),
        "success": success,
        "environment": get_environment_info(),
        "tests": tests,
        "benchmark": benchmark,
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
