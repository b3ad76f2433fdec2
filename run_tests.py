#!/usr/bin/env python3
# ## File: run_tests.py
# Version: 1.1.0
# Date: 2026-09-26
# Purpose: Test runner script for DocumentWise with various test configurations.

import sys
import subprocess
import argparse
from pathlib import Path

def run_command(cmd, description=""):
    """Run a command and return success status"""
    print(f"\n{'='*60}")
    if description:
        print(f"🧪 {description}")
    print(f"Running: {' '.join(cmd)}")
    print('='*60)

    try:
        subprocess.run(cmd, check=True, cwd=Path(__file__).parent)
        print(f"✅ {description or 'Command'} completed successfully")
        return True
    except subprocess.CalledProcessError as e:
        print(f"❌ {description or 'Command'} failed with exit code {e.returncode}")
        return False

def main():
    parser = argparse.ArgumentParser(description="Run DocumentWise tests")
    parser.add_argument(
        "--type",
        choices=["unit", "integration", "smoke", "all"],
        default="all",
        help="Type of tests to run"
    )
    parser.add_argument(
        "--coverage",
        action="store_true",
        help="Run with coverage reporting"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--file",
        type=str,
        help="Run specific test file"
    )

    args = parser.parse_args()

    # Base pytest command
    cmd = [sys.executable, "-m", "pytest"]

    # Add test type markers
    if args.type != "all":
        cmd.extend(["-m", args.type])

    # Add coverage if requested
    if args.coverage:
        cmd.extend([
            "--cov=documentwise_engine",
            "--cov-report=term-missing",
            "--cov-report=html:htmlcov"
        ])

    # Add verbosity
    if args.verbose:
        cmd.extend(["-v", "-s"])

    # Run specific file if specified
    if args.file:
        cmd.append(f"tests/{args.file}")
    else:
        cmd.append("tests/")

    success = run_command(cmd, f"Running {args.type} tests")

    if success:
        print(f"\n🎉 All tests passed!")
        if args.coverage:
            print(f"\n📊 Coverage report generated in htmlcov/index.html")
        return 0
    else:
        print(f"\n💥 Some tests failed!")
        return 1

if __name__ == "__main__":
    sys.exit(main())
