from __future__ import annotations

"""Guard: only game_time.utc_now() reads the host clock.

Standings, seeding and bracket resolution take "now" as an argument. This
tree imports datetime as `_dt`, and never needs the `time` module, so any
`time` import is flagged along with the datetime/date clock calls.

Run:
  python -m tools.check_no_os_time [ROOT]

Exit code:
  0 - clean
  1 - clock read found
"""

import re
import sys
from pathlib import Path
from typing import Dict, Iterator, List, NamedTuple, Optional


RULES: Dict[str, re.Pattern] = {
    "clock call": re.compile(r"\b(?:_dt\.|datetime\.)?(?:datetime|date)\.(?:now|utcnow|today)\s*\("),
    "time module": re.compile(r"^\s*(?:import\s+time\b|from\s+time\s+import\b)"),
}

SKIP_PARTS = frozenset({".git", "__pycache__", ".venv", "venv", ".pytest_cache", "build", "dist", "tests"})

# game_time.py is the sanctioned reader; this file names the patterns.
ALLOWED = frozenset({"game_time.py", "check_no_os_time.py"})


class Hit(NamedTuple):
    path: Path
    line_no: int
    line: str
    rule: str


def iter_sources(root: Path) -> Iterator[Path]:
    for fp in sorted(root.rglob("*.py")):
        rel = fp.relative_to(root)
        if SKIP_PARTS.intersection(rel.parts[:-1]) or fp.name in ALLOWED:
            continue
        yield fp


def find_hits(root: Path) -> List[Hit]:
    hits: List[Hit] = []
    for fp in iter_sources(root):
        for no, line in enumerate(fp.read_text(encoding="utf-8").splitlines(), start=1):
            code = line.split("#", 1)[0]
            for rule, rx in RULES.items():
                if rx.search(code):
                    hits.append(Hit(fp.relative_to(root), no, line.strip(), rule))
    return hits


def main(root: Optional[Path] = None) -> int:
    root = root or Path(__file__).resolve().parents[1]
    hits = find_hits(root)
    if not hits:
        print("[OK] No OS clock reads outside game_time.py.")
        return 0

    print(f"[FAIL] {len(hits)} OS clock read(s):")
    for hit in hits:
        print(f"- {hit.path}:{hit.line_no} [{hit.rule}] {hit.line}")
    print("Pass `now` in, or call game_time.utc_now() at the caller.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(Path(sys.argv[1]).resolve() if len(sys.argv) > 1 else None))
