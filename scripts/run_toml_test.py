#!/usr/bin/env python3
"""
Run toml-test suite against the tomlscan decoder.

Requires toml-test binary (Go):
  go install github.com/toml-lang/toml-test/v2/cmd/toml-test@latest

Then from project root:
  python scripts/run_toml_test.py [extra toml-test flags, e.g. -toml 1.0.0]
  # or
  toml-test test -decoder="python scripts/toml_test_decoder.py"
"""
import os
import shutil
import subprocess
import sys


def main():
    script_dir = os.path.dirname(os.path.abspath(__file__))
    root = os.path.dirname(script_dir)
    if shutil.which("toml-test") is None:
        print("toml-test not found. Install with: go install github.com/toml-lang/toml-test/v2/cmd/toml-test@latest", file=sys.stderr)
        return 127
    decoder_cmd = f'{sys.executable} "{os.path.join(script_dir, "toml_test_decoder.py")}"'
    result = subprocess.run(
        ["toml-test", "test", "-decoder", decoder_cmd, *sys.argv[1:]],
        cwd=root,
    )
    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
