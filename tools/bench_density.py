#!/usr/bin/env python3
"""Density/timing benchmark: glyph16 vs base64 vs hex.

Encodes generated payloads (random bytes, ASCII text, unicode text, zlib of text)
and reports characters per input byte plus encode/decode timings.

Usage example:
  python tools/bench_density.py --sizes 1024,65536 --iters 3
  python tools/bench_density.py --json-out /tmp/density.json

Notes:
- Uses internal APIs (no subprocess). Run inside repo venv.
- Fails (exit 1) if any glyph16 roundtrip mismatches.
"""

from __future__ import annotations

import argparse
import base64
import json
import random
import time
import zlib
from pathlib import Path
from typing import Any


def _gen_payloads(rng: random.Random, size: int) -> dict[str, bytes]:
    words = ["fattura", "riga", "qty", "prezzo", "totale", "caffè", "北京", "ΑβΓδ", "😀"]
    ascii_txt = " ".join(rng.choice(words[:5]) for _ in range(size // 6 + 1)).encode("utf-8")[:size]
    uni_txt = " ".join(rng.choice(words) for _ in range(size // 6 + 1)).encode("utf-8")[:size]
    return {
        "random": bytes(rng.getrandbits(8) for _ in range(size)),
        "ascii": ascii_txt,
        "unicode": uni_txt,
        "zlib_ascii": zlib.compress(ascii_txt, 9),
    }


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="bench_density.py", description="glyph16 density benchmark")
    ap.add_argument("--sizes", default="16,1024,65536", help="Comma-separated payload sizes")
    ap.add_argument("--iters", type=int, default=3)
    ap.add_argument("--seed", type=int, default=12345)
    ap.add_argument("--json-out", type=Path, default=None, help="Write JSON report to file")
    ns = ap.parse_args(argv)

    from glyph16.core.codec_glyph16 import default_codec

    codec = default_codec()
    rng = random.Random(ns.seed)
    sizes = [int(s) for s in str(ns.sizes).split(",") if s.strip()]

    rows: list[dict[str, Any]] = []
    ok = True
    for size in sizes:
        for kind, data in _gen_payloads(rng, size).items():
            enc_s: list[float] = []
            dec_s: list[float] = []
            text = ""
            for _ in range(max(1, int(ns.iters))):
                t0 = time.perf_counter()
                text = codec.encode(data)
                t1 = time.perf_counter()
                back = codec.decode_to_bytes(text)
                t2 = time.perf_counter()
                enc_s.append(t1 - t0)
                dec_s.append(t2 - t1)
                if back != data:
                    ok = False

            n = max(1, len(data))
            rows.append(
                {
                    "kind": kind,
                    "size": len(data),
                    "glyph16_chars": len(text),
                    "glyph16_utf8_bytes": len(text.encode("utf-8")),
                    "base64_chars": len(base64.b64encode(data)),
                    "hex_chars": len(data) * 2,
                    "glyph16_chars_per_byte": round(len(text) / n, 4),
                    "base64_chars_per_byte": round(len(base64.b64encode(data)) / n, 4),
                    "encode_s_min": round(min(enc_s), 6),
                    "decode_s_min": round(min(dec_s), 6),
                }
            )

    report = {"ok": ok, "seed": ns.seed, "alphabet_len": len(codec.alphabet), "rows": rows}
    if ns.json_out:
        ns.json_out.parent.mkdir(parents=True, exist_ok=True)
        ns.json_out.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")

    print(json.dumps(report, ensure_ascii=False))
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
