"""TOML samples for benchmarking the decoder (small / medium / large / error-heavy)."""

# Small: a few scalar kinds in two tables
TOML_SMALL = """
name = "scanner"
enabled = true
[limits]
depth = 200
ratio = 0.75
"""

# Medium: every value kind, dotted keys and array-of-tables
TOML_MEDIUM = '''
# Service configuration
service.name = "ingest"
service."display name" = 'Ingest Worker'
started = 2021-03-04T05:06:07.25+01:00
window = 08:30:00

[storage]
path = 'C:\\data\\ingest'
retention-days = 0x1E
mode = 0o644
flags = 0b1010
quota = 1_000_000
scale = 6.02e23
fallback = -inf

[storage.replicas]
hosts = ["db-a", "db-b", "db-c"]
weights = [0.5, 0.25, 0.25]
since = [1999-12-31, 2000-01-01]

[[jobs]]
id = 1
cron = { minute = 0, hour = "*/2" }
notes = """
Runs every two hours.
Skips weekends."""

[[jobs]]
id = 2
cron = { minute = 30, hour = 4 }
tags = [
  "nightly",
  "cleanup", # retained
]
'''

# Large: medium content followed by many small sections
TOML_LARGE = (
    "# generated\n" + TOML_MEDIUM.strip() + "\n\n"
    + "\n".join(
        f"[shard_{i}]\nindex = {i}\nlabel = \"shard-{i}\"\nweight = {i}.5"
        for i in range(80)
    )
)

# Large, with one malformed number per section: decode() reports 80 diagnostics
TOML_LARGE_WITH_ERRORS = (
    "# generated\n" + TOML_MEDIUM.strip() + "\n\n"
    + "\n".join(
        f"[shard_{i}]\nindex = {i}\nbroken = 1__{i}\nlabel = \"shard-{i}\""
        for i in range(80)
    )
)

# Many [[array-of-tables]] headers, each with a sub-table that is reset per element
TOML_MANY_AOT = "\n".join(
    f"[[events]]\nseq = {i}\n[events.meta]\nsource = \"node-{i % 7}\"\n[[events.marks]]\nat = {i}"
    for i in range(300)
)

# Inline tables nested just under the default depth bound of 200
TOML_DEEP_INLINE = "a = " + "{b = " * 190 + "1" + " }" * 190

# Real-world style: a pyproject.toml
TOML_REALWORLD = '''
[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "tomlscan"
version = "0.1.0"
requires-python = ">=3.10"
dependencies = []

[project.optional-dependencies]
test = ["pytest>=7", "pytest-benchmark>=4", "tomli>=2.0"]

[tool.setuptools]
packages = ["tomlscan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
pythonpath = ["."]
'''
