#!/usr/bin/env python3
"""Randomized round-trip smoke run for the gzcap CLI.

Goal:
- deterministic, repeatable compress/decompress cycles through the real CLI
- check the byte cap on both sides (exact-size inputs must be rejected)
- produce a JSON report
- fail fast (non-zero exit) on any mismatch

Usage examples:
  python tools/smoke_roundtrip.py --iters 10
  python tools/smoke_roundtrip.py --iters 50 --seed 123 --keep
  python tools/smoke_roundtrip.py --iters 10 --codec zstd
"""

from __future__ import annotations

import argparse
import hashlib
import json
import random
import shutil
import subprocess
import sys
import tempfile
from dataclasses import asdict, dataclass
from pathlib import Path

EXIT_SIZE_LIMIT = 14


def _run(cmd: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(cmd, text=True, capture_output=True)


def _cli(*args: str) -> subprocess.CompletedProcess[str]:
    return _run([sys.executable, "-c", "from gzcap.cli import main; raise SystemExit(main())", *args])


def _sha256(b: bytes) -> str:
    return hashlib.sha256(b).hexdigest()


def _gen_payload(rng: random.Random) -> bytes:
    kind = rng.choice(["text", "random", "zeros", "empty"])
    n = rng.randint(1, 200_000)
    if kind == "text":
        words = ["HELLO", "FATTURA", "TOTALE", "qty=10", "prezzo=1.20", "\n"]
        return " ".join(rng.choice(words) for _ in range(n // 6)).encode("utf-8")
    if kind == "random":
        return rng.randbytes(n)
    if kind == "zeros":
        return b"\x00" * n
    return b""


@dataclass
class CaseResult:
    idx: int
    size: int
    sha256: str
    ok: bool
    detail: str = ""


def _one_case(work: Path, idx: int, data: bytes, codec: str, ext: str) -> CaseResult:
    src = work / f"case_{idx:04d}.bin"
    src.write_bytes(data)
    res = CaseResult(idx=idx, size=len(data), sha256=_sha256(data), ok=False)

    cp = _cli("compress", "--codec", codec, "-l", str(len(data) + 1), str(src))
    if cp.returncode != 0:
        res.detail = f"compress rc={cp.returncode}: {cp.stderr.strip()}"
        return res

    packed = Path(f"{src}{ext}")
    if len(data) > 0:
        # exact-size output must be refused on the way back
        cp = _cli("decompress", "--codec", codec, "-k", "-l", str(len(data)), str(packed))
        if cp.returncode != EXIT_SIZE_LIMIT or src.exists():
            res.detail = f"cap not enforced (rc={cp.returncode})"
            return res

    cp = _cli("decompress", "--codec", codec, "-l", str(len(data) + 1), str(packed))
    if cp.returncode != 0:
        res.detail = f"decompress rc={cp.returncode}: {cp.stderr.strip()}"
        return res

    back = src.read_bytes()
    if _sha256(back) != res.sha256:
        res.detail = "sha256 mismatch"
        return res

    src.unlink()
    res.ok = True
    return res


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="gzcap randomized round-trip smoke run")
    ap.add_argument("--iters", type=int, default=10)
    ap.add_argument("--seed", type=int, default=1234)
    ap.add_argument("--codec", default="gzip", choices=["gzip", "zstd"])
    ap.add_argument("--keep", action="store_true", help="Keep the work directory")
    ap.add_argument("--report", type=Path, default=None, help="Write JSON report here")
    ns = ap.parse_args(argv)

    ext = ".gz" if ns.codec == "gzip" else ".zst"
    rng = random.Random(ns.seed)
    work = Path(tempfile.mkdtemp(prefix="gzcap_smoke_"))
    results: list[CaseResult] = []
    try:
        for i in range(ns.iters):
            r = _one_case(work, i, _gen_payload(rng), ns.codec, ext)
            results.append(r)
            if not r.ok:
                break
    finally:
        if not ns.keep:
            shutil.rmtree(work, ignore_errors=True)

    report = {
        "seed": ns.seed,
        "codec": ns.codec,
        "iters": ns.iters,
        "ok": all(r.ok for r in results) and len(results) == ns.iters,
        "work_dir": str(work) if ns.keep else None,
        "cases": [asdict(r) for r in results],
    }
    text = json.dumps(report, indent=2, sort_keys=True)
    if ns.report is not None:
        ns.report.write_text(text + "\n", encoding="utf-8")
    print(text)
    return 0 if report["ok"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
