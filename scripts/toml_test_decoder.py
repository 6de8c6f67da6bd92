#!/usr/bin/env python3
"""
toml-test decoder: read TOML from stdin, output tagged JSON to stdout.
Usage: toml-test test -decoder="python scripts/toml_test_decoder.py"
See https://github.com/toml-lang/toml-test

On invalid input every diagnostic is printed to stderr as "line L, column C: message"
and the exit status is 1.
"""
import json
import sys
from pathlib import Path

# Add project root for import
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
import tomlscan


def decode_to_tagged_json(toml_str: str):
    """Decode a TOML string; return (tagged JSON dict or None, formatted diagnostics)."""
    document, diagnostics = tomlscan.decode(toml_str)
    if diagnostics:
        text = toml_str.replace("\r\n", "\n")
        return None, tomlscan.format_diagnostics(text, diagnostics)
    return tomlscan.to_tagged(document, wrap_containers=False), []


def main():
    try:
        toml_str = sys.stdin.buffer.read().decode("utf-8")
    except UnicodeDecodeError as e:
        print(f"invalid UTF-8: {e}", file=sys.stderr)
        return 1
    tagged, messages = decode_to_tagged_json(toml_str)
    if messages:
        print("\n".join(messages), file=sys.stderr)
        return 1
    print(json.dumps(tagged, separators=(",", ":")))
    return 0


if __name__ == "__main__":
    sys.exit(main())
