#!/usr/bin/env python3
"""Robust general smoke tests for glyph16.

Goal:
- deterministic, repeatable round trips through the CLI (encode -> verify -> decode)
- produce a JSON report
- fail fast (non-zero exit) on any mismatch

Adds:
- --unicode to include unicode + very long lines in generated text

Usage examples:
  python tools/smoke_general.py --iters 10
  python tools/smoke_general.py --iters 50 --seed 123 --keep
  python tools/smoke_general.py --iters 10 --unicode
"""

from __future__ import annotations

import argparse
import json
import random
import shutil
import string
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any


def _run(cmd: list[str], *, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        cmd,
        cwd=str(cwd) if cwd else None,
        text=True,
        capture_output=True,
    )


def _rand_ascii(rng: random.Random, n: int) -> str:
    alphabet = string.ascii_letters + string.digits + " _-.,;:/@"
    return "".join(rng.choice(alphabet) for _ in range(n))


def _gen_unicode_long_text(rng: random.Random, *, long_len: int = 20000) -> str:
    tokens = ["caffè", "☕", "—", "北京", "東京", "😀", "⚙️", "résumé", "naïve", "ﬁ", "€"]
    header = " ".join(rng.choice(tokens) for _ in range(20))
    long_line = ("ΑβΓδ" * (long_len // 4 + 1))[:long_len]
    return f"{header}\n{long_line}\n"


def _gen_payload(rng: random.Random, *, max_bytes: int, unicode_mode: bool) -> bytes:
    r = rng.random()
    if r < 0.4:
        return bytes(rng.getrandbits(8) for _ in range(rng.randint(0, max_bytes)))
    if unicode_mode and r < 0.7:
        return _gen_unicode_long_text(rng, long_len=rng.randint(100, 4000)).encode("utf-8")
    return _rand_ascii(rng, rng.randint(0, 400)).encode("utf-8")


@dataclass
class StepResult:
    name: str
    ok: bool
    rc: int
    stdout: str
    stderr: str


def main() -> int:
    ap = argparse.ArgumentParser(description="glyph16 robust general smoke tests")
    ap.add_argument("--iters", type=int, default=10, help="Number of iterations (default: 10)")
    ap.add_argument("--seed", type=int, default=12345, help="Deterministic RNG seed (default: 12345)")
    ap.add_argument("--max-bytes", type=int, default=20_000, help="Max binary payload size (default: 20000)")
    ap.add_argument("--unicode", action="store_true", help="Include unicode + very long lines in generated text")
    ap.add_argument("--keep", action="store_true", help="Keep temp workdir on exit")
    ap.add_argument("--workdir", type=Path, default=None, help="Optional workdir (default: temp)")
    ap.add_argument("--json-out", type=Path, default=None, help="Write JSON report to file")
    ap.add_argument("--python", dest="pyexe", default=sys.executable, help="Python executable to use")
    ns = ap.parse_args()

    rng = random.Random(ns.seed)

    if ns.workdir:
        wd = ns.workdir.resolve()
        wd.mkdir(parents=True, exist_ok=True)
        own_temp = False
    else:
        wd = Path(tempfile.mkdtemp(prefix="glyph16-smoke-"))
        own_temp = True

    report: dict[str, Any] = {
        "ok": True,
        "seed": ns.seed,
        "iters": ns.iters,
        "max_bytes": ns.max_bytes,
        "unicode": bool(ns.unicode),
        "workdir": str(wd),
        "steps": [],
    }

    def add_step(name: str, res: subprocess.CompletedProcess[str]) -> None:
        step = StepResult(name=name, ok=res.returncode == 0, rc=res.returncode, stdout=res.stdout, stderr=res.stderr)
        report["steps"].append(step.__dict__)
        if not step.ok:
            report["ok"] = False

    def run_cli(*args: str) -> subprocess.CompletedProcess[str]:
        return _run([ns.pyexe, "-m", "glyph16.cli", *args])

    try:
        add_step("cli_help", run_cli("--help"))
        add_step("alphabet_info", run_cli("alphabet", "info", "--json"))

        for it in range(ns.iters):
            it_dir = wd / f"iter_{it:03d}"
            it_dir.mkdir(parents=True, exist_ok=True)
            file_in = it_dir / "sample.bin"
            file_enc = it_dir / "sample.g16"
            file_back = it_dir / "sample.back.bin"
            file_in.write_bytes(_gen_payload(rng, max_bytes=ns.max_bytes, unicode_mode=bool(ns.unicode)))

            add_step(f"it{it:03d}_encode", run_cli("encode", str(file_in), str(file_enc), "--stats"))
            add_step(f"it{it:03d}_verify_json", run_cli("verify", str(file_enc), "--json"))
            add_step(f"it{it:03d}_decode", run_cli("decode", str(file_enc), str(file_back)))

            if file_back.is_file() and file_in.read_bytes() != file_back.read_bytes():
                report["ok"] = False
                report["steps"].append(
                    {
                        "name": f"it{it:03d}_diff",
                        "ok": False,
                        "rc": 1,
                        "stdout": "",
                        "stderr": "Roundtrip mismatch (bytes differ)",
                    }
                )

            # Tamper: a symbol outside the alphabet must be rejected with exit 13.
            if file_enc.is_file():
                txt = file_enc.read_text(encoding="utf-8")
                file_bad = it_dir / "sample.bad.g16"
                file_bad.write_text(txt + "0", encoding="utf-8")
                tam = run_cli("verify", str(file_bad))
                ok_tam = tam.returncode == 13
                report["steps"].append(
                    {
                        "name": f"it{it:03d}_tamper_verify_expect_13",
                        "ok": ok_tam,
                        "rc": tam.returncode,
                        "stdout": tam.stdout,
                        "stderr": tam.stderr,
                    }
                )
                if not ok_tam:
                    report["ok"] = False

        if ns.json_out:
            ns.json_out.parent.mkdir(parents=True, exist_ok=True)
            ns.json_out.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")

        print(
            json.dumps(
                {
                    "ok": report["ok"],
                    "seed": ns.seed,
                    "iters": ns.iters,
                    "unicode": bool(ns.unicode),
                    "workdir": str(wd),
                },
                ensure_ascii=False,
            )
        )
        return 0 if report["ok"] else 1

    finally:
        if own_temp and not ns.keep:
            shutil.rmtree(wd, ignore_errors=True)


if __name__ == "__main__":
    raise SystemExit(main())
