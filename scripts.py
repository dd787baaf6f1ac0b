#!/usr/bin/env python3
"""
Development scripts for the servicegraph project.

Each command shells out through uv so that the project's dev dependency
group is used. Run ``python scripts.py <command>``.
"""

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

PACKAGE_DIR = "src/servicegraph/"


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command, report the outcome and return True on success."""
    print(f"\n🔄 {description}: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed with exit code {e.returncode}")
        return False
    except FileNotFoundError:
        print(f"❌ Command not found: {cmd[0]}")
        return False

    print(f"✅ {description} passed")
    return True


def run_all(checks: list[tuple[list[str], str]]) -> int:
    """Run every check, even after a failure, and return a process exit code."""
    results = [run_command(cmd, description) for cmd, description in checks]
    return 0 if all(results) else 1


def run_tests() -> int:
    return run_all([(["uv", "run", "pytest", "-v"], "Tests")])


def run_lint() -> int:
    code = run_all(
        [
            (["uv", "run", "ruff", "check", "."], "Ruff linting"),
            (["uv", "run", "ruff", "format", "--check", "."], "Ruff formatting"),
        ]
    )
    if code:
        print("\n💡 Auto-fix with: uv run ruff format . && uv run ruff check --fix .")
    return code


def run_typecheck() -> int:
    return run_all(
        [
            (["uv", "run", "mypy", PACKAGE_DIR], "MyPy type checking"),
            (["uv", "run", "pyright", PACKAGE_DIR], "Pyright type checking"),
        ]
    )


def run_demos() -> int:
    """Run every script in demo/ so the examples keep working."""
    demo_files = sorted(p for p in Path("demo").glob("*.py") if not p.name.startswith("_"))
    if not demo_files:
        print("❌ No demo scripts found in demo/")
        return 1

    return run_all([(["uv", "run", "python", str(p)], f"Demo: {p.name}") for p in demo_files])


def run_readme_validation() -> int:
    """Extract the README code blocks with phmdoctest and run them as tests."""
    readme = Path("README.md")
    if not readme.exists():
        print("❌ README.md not found")
        return 1

    generated = Path("test_readme.py")
    generated.unlink(missing_ok=True)
    try:
        if not run_command(
            ["uv", "run", "phmdoctest", str(readme), "--outfile", str(generated)], "Generating README tests"
        ):
            return 1
        return run_all([(["uv", "run", "pytest", str(generated), "-v"], "README code examples")])
    finally:
        generated.unlink(missing_ok=True)


COMMANDS: dict[str, Callable[[], int]] = {
    "test": run_tests,
    "lint": run_lint,
    "typecheck": run_typecheck,
    "demos": run_demos,
    "readme": run_readme_validation,
}


def check_all() -> int:
    """Run all commands and print a summary table."""
    print("🚀 Running all checks for servicegraph")

    results: dict[str, bool] = {}
    for name, func in COMMANDS.items():
        if func is check_all:
            continue
        print(f"\n{'=' * 20} {name} {'=' * 20}")
        results[name] = func() == 0

    print(f"\n{'=' * 20} SUMMARY {'=' * 20}")
    for name, passed in results.items():
        print(f"{name:<15} {'✅ PASS' if passed else '❌ FAIL'}")

    if all(results.values()):
        print("\n🎉 All checks passed!")
        return 0
    print("\n💥 Some checks failed. Please fix the issues above.")
    return 1


COMMANDS["check"] = check_all


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in COMMANDS:
        print(f"Usage: python scripts.py <{'|'.join(COMMANDS)}>")
        sys.exit(1)
    sys.exit(COMMANDS[sys.argv[1]]())
