"""
List invalid toml-test cases that the decoder currently accepts (should reject).

With -v, also print the diagnostics reported for every rejected case, which
helps to check that each one is rejected for the right reason.
"""
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
import tomlscan

ROOT = Path(__file__).resolve().parents[1]
tests_dir = ROOT / ".toml-test" / "tests"
files_list = tests_dir / "files-toml-1.0.0"
if not files_list.exists():
    print("Run from project root with .toml-test cloned", file=sys.stderr)
    sys.exit(1)
verbose = "-v" in sys.argv[1:]
lines = files_list.read_text(encoding="utf-8").strip().splitlines()
invalid = [l.strip() for l in lines if l.strip().startswith("invalid/") and l.strip().endswith(".toml")]

accepted = []
for rel in invalid:
    p = tests_dir / rel
    if not p.exists():
        continue
    try:
        s = p.read_bytes().decode("utf-8")
    except UnicodeDecodeError:
        continue
    _, diagnostics = tomlscan.decode(s)
    if not diagnostics:
        accepted.append(rel)
    elif verbose:
        print(f"{rel}:", file=sys.stderr)
        for d in diagnostics:
            print(f"    {d}", file=sys.stderr)

for a in sorted(accepted):
    print(a)
print(f"\n# Total: {len(accepted)} accepted of {len(invalid)} invalid", file=sys.stderr)
