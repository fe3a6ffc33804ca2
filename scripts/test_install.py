#!/usr/bin/env python3
"""Test script to verify vtrack installation."""

import json
import subprocess
import sys
import tempfile
from pathlib import Path


def test_import():
    """Test that the package can be imported."""
    try:
        import vtrack
        print(f"✓ Package import successful (version: {vtrack.__version__})")
        return True
    except ImportError as e:
        print(f"✗ Package import failed: {e}")
        return False


def test_cli():
    """Test that the CLI command is available."""
    try:
        result = subprocess.run(
            [sys.executable, "-m", "vtrack.main", "--help"],
            capture_output=True,
            text=True,
            timeout=10,
        )
        if result.returncode == 0:
            print("✓ CLI command available")
            return True
        else:
            print(f"✗ CLI command failed: {result.stderr}")
            return False
    except Exception as e:
        print(f"✗ CLI test failed: {e}")
        return False


def test_records():
    """Test that init writes both records in a scratch repository."""
    try:
        with tempfile.TemporaryDirectory(prefix="vtrack_install_") as tmp:
            root = Path(tmp)
            (root / "hello.txt").write_text("hello")
            result = subprocess.run(
                [sys.executable, "-m", "vtrack.main", "--root", tmp, "init"],
                capture_output=True,
                text=True,
                timeout=30,
            )
            if result.returncode != 0:
                print(f"✗ init failed: {result.stdout or result.stderr}")
                return False

            history = json.loads((root / "data/.vcs/file_history.json").read_text())
            if "hello.txt" not in history:
                print("✗ History record does not list hello.txt")
                return False
            print("✓ Records written")
            return True
    except Exception as e:
        print(f"✗ Record test failed: {e}")
        return False


def main():
    """Run all installation tests."""
    print("Testing vtrack installation...")
    print("=" * 40)

    tests = [
        ("Package Import", test_import),
        ("CLI Command", test_cli),
        ("Repository Records", test_records),
    ]

    passed = 0
    total = len(tests)

    for name, test_func in tests:
        print(f"\n{name}:")
        if test_func():
            passed += 1

    print("\n" + "=" * 40)
    print(f"Tests passed: {passed}/{total}")

    if passed == total:
        print("✓ Installation test successful!")
        return 0
    else:
        print("✗ Installation test failed!")
        return 1


if __name__ == "__main__":
    sys.exit(main())
