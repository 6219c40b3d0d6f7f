"""
Validation script for deterministic world generation.

Builds the same world twice in this process and once in a fresh
interpreter, and compares the canonical JSON byte for byte.
"""

import argparse
import subprocess
import sys
from typing import Any, Optional, List

from ..compatibility import WorldAdapter
from ..engine import WorldComposer
from ..procgen.rng import parse_seed_text

_CHILD_SCRIPT = (
    "import sys\n"
    "from trailgen.compatibility import WorldAdapter\n"
    "from trailgen.engine import WorldComposer\n"
    "from trailgen.procgen.rng import parse_seed_text\n"
    "seed = parse_seed_text(sys.argv[1])\n"
    "sys.stdout.write(WorldAdapter().dumps(WorldComposer().generate(seed=seed)))\n"
)


def serialize(seed: Any) -> str:
    """Canonical JSON for the default configuration and `seed`."""
    return WorldAdapter().dumps(WorldComposer().generate(seed=seed))


def serialize_in_subprocess(seed: Any) -> str:
    """Same as serialize(), computed by a separate Python process."""

    result = subprocess.run(
        [sys.executable, "-c", _CHILD_SCRIPT, str(seed)],
        check=True,
        capture_output=True,
        text=True
    )
    return result.stdout


def check_seed(seed: Any, cross_process: bool = True) -> bool:
    """Whether repeated builds of `seed` agree byte for byte."""

    first = serialize(seed)
    second = serialize(seed)
    if first != second:
        print(f"❌ In-process mismatch for seed {seed!r}")
        return False

    if cross_process and serialize_in_subprocess(seed) != first:
        print(f"❌ Cross-process mismatch for seed {seed!r}")
        return False

    print(f"✅ Seed {seed!r}: {len(first)} bytes, identical across builds")
    return True


def main(argv: Optional[List[str]] = None) -> int:

    parser = argparse.ArgumentParser(description="Check that world generation is deterministic")
    parser.add_argument("seeds", nargs="*", default=["default", "42", "trail"], help="Seeds to check")
    parser.add_argument("--in-process", action="store_true", help="Skip the fresh-interpreter comparison")
    args = parser.parse_args(argv)

    print("🧪 Testing deterministic world generation...")
    results = []
    for raw in args.seeds:
        results.append(check_seed(parse_seed_text(raw), cross_process=not args.in_process))

    if all(results):
        print("🎉 All seeds reproducible")
        return 0
    return 1


if __name__ == "__main__":
    sys.exit(main())
