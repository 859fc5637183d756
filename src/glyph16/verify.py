"""Verification helpers.

We implement:
  - inspect_encoded: walk an encoded string and report its shape
  - encode_stats: the same report, computed while encoding
  - verify_encoded_file: file-level check used by ``glyph16 verify``

Malformed input raises the same InvalidEncoding errors as decoding.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from glyph16.core.codec_glyph16 import Glyph16Codec, default_codec
from glyph16.core.constants import MAX_TIER
from glyph16.core.decoder import iter_words_with_tiers, read_flag
from glyph16.core.encoder import EncodeStats
from glyph16.errors import InvalidEncoding


@dataclass(frozen=True)
class EncodedReport:
    odd: bool
    n_symbols: int
    n_blocks: int
    n_words: int
    byte_length: int
    tier_histogram: tuple[int, ...]

    @property
    def overflow_words(self) -> int:
        return sum(self.tier_histogram[1:])

    @property
    def bytes_per_symbol(self) -> float:
        return self.byte_length / self.n_symbols if self.n_symbols else 0.0

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["tier_histogram"] = list(self.tier_histogram)
        d["overflow_words"] = self.overflow_words
        d["bytes_per_symbol"] = round(self.bytes_per_symbol, 4)
        return d


def inspect_encoded(text: str, codec: Glyph16Codec | None = None) -> EncodedReport:
    c = codec or default_codec()
    if not text:
        return EncodedReport(False, 0, 0, 0, 0, (0,) * (MAX_TIER + 1))

    odd = read_flag(text)
    hist = [0] * (MAX_TIER + 1)
    n_words = 0
    last_value = 0
    for value, tier, _is_last in iter_words_with_tiers(text, c.alphabet, c.constants):
        hist[tier] += 1
        n_words += 1
        last_value = value

    if odd and n_words and last_value > 0xFF:
        raise InvalidEncoding(f"byte finale fuori range: {last_value}")

    bs = c.constants.block_size
    byte_length = 2 * n_words - (1 if odd and n_words else 0)
    return EncodedReport(
        odd=odd,
        n_symbols=len(text),
        n_blocks=(n_words + bs - 1) // bs,
        n_words=n_words,
        byte_length=byte_length,
        tier_histogram=tuple(hist),
    )


def encode_stats(data: str | bytes, codec: Glyph16Codec | None = None) -> tuple[str, EncodedReport]:
    """Encode and return (text, report) in one pass."""
    c = codec or default_codec()
    st = EncodeStats()
    text = c.encode(data, stats=st)
    rep = EncodedReport(
        odd=bool(st.byte_length & 1),
        n_symbols=st.n_symbols,
        n_blocks=st.n_blocks,
        n_words=st.n_words,
        byte_length=st.byte_length,
        tier_histogram=tuple(st.tier_histogram),
    )
    return text, rep


def verify_encoded_file(path: Path, codec: Glyph16Codec | None = None) -> EncodedReport:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncoding(f"file non UTF-8: {path}: {e}") from e
    return inspect_encoded(text, codec)
