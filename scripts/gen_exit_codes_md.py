#!/usr/bin/env python3
"""Write or check docs/exit_codes.md against the EXIT_CODES table in gzcap.errors.

  python scripts/gen_exit_codes_md.py           # regenerate
  python scripts/gen_exit_codes_md.py --check   # exit 1 if the doc is stale (CI)
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO = Path(__file__).resolve().parents[1]
DOC = REPO / "docs" / "exit_codes.md"


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="gzcap exit code doc generator")
    ap.add_argument("--check", action="store_true", help="Only compare, do not write")
    ns = ap.parse_args(argv)

    sys.path.insert(0, str(REPO / "src"))
    from gzcap.errors import EXIT_CODES, render_exit_codes_markdown  # noqa: E402

    want = render_exit_codes_markdown()
    have = DOC.read_text(encoding="utf-8") if DOC.exists() else None

    if ns.check:
        if have != want:
            print(f"[gzcap] {DOC} is stale; run scripts/gen_exit_codes_md.py", file=sys.stderr)
            return 1
        print(f"[gzcap] {DOC} up to date ({len(EXIT_CODES)} codes)")
        return 0

    DOC.parent.mkdir(parents=True, exist_ok=True)
    DOC.write_text(want, encoding="utf-8")
    print(f"[gzcap] wrote {DOC} ({len(EXIT_CODES)} codes)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
