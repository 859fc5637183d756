from __future__ import annotations

from dataclasses import dataclass, field

from glyph16.core.alphabet import Alphabet
from glyph16.core.constants import MAX_TIER, TIER_BITS, CodecConstants
from glyph16.errors import UnencodableValue

FLAG_EVEN = "0"
FLAG_ODD = "1"


def as_bytes(data: str | bytes | bytearray | memoryview) -> bytes:
    """Text is encoded as UTF-8; byte-like input is taken as is."""
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"data must be str or bytes, got {type(data).__name__}")


def iter_words(raw: bytes):
    """Yield little-endian 16-bit words; an odd trailing byte is yielded alone."""
    n = len(raw)
    for i in range(0, n - 1, 2):
        yield raw[i] | (raw[i + 1] << 8)
    if n & 1:
        yield raw[-1]


def map_word(value: int, alphabet_len: int, offset: int) -> tuple[int, int]:
    """Return (alphabet index, tier) for a 16-bit word."""
    for tier in range(MAX_TIER + 1):
        idx = value - offset * tier
        if 0 <= idx < alphabet_len:
            return idx, tier
    raise UnencodableValue(value, MAX_TIER)


@dataclass
class EncodeStats:
    byte_length: int = 0
    n_words: int = 0
    n_blocks: int = 0
    n_symbols: int = 0
    tier_histogram: list[int] = field(default_factory=lambda: [0] * (MAX_TIER + 1))

    @property
    def overflow_words(self) -> int:
        return sum(self.tier_histogram[1:])


def encode_bytes(
    raw: bytes,
    alphabet: Alphabet,
    consts: CodecConstants,
    stats: EncodeStats | None = None,
) -> str:
    """Encode raw bytes as flag + (header + block_size data symbols)*.

    Each header symbol is the alphabet entry whose index packs the 2-bit tier of
    every word in its block; the first word sits in the least significant bits.
    """
    out: list[str] = [FLAG_ODD if len(raw) & 1 else FLAG_EVEN]
    a = len(alphabet)
    block_size = consts.block_size
    offset = consts.overflow_offset

    header_pos = 0
    header = 0
    slot = 0
    n_blocks = 0
    n_words = 0

    for value in iter_words(raw):
        if slot == 0:
            # reserved, overwritten when the block is closed
            header_pos = len(out)
            out.append("")
            n_blocks += 1

        idx, tier = map_word(value, a, offset)
        out.append(alphabet[idx])
        header |= tier << (TIER_BITS * slot)
        if stats is not None:
            stats.tier_histogram[tier] += 1
        n_words += 1
        slot += 1

        if slot == block_size:
            out[header_pos] = alphabet[header]
            header = 0
            slot = 0

    if slot:
        out[header_pos] = alphabet[header]

    if stats is not None:
        stats.byte_length = len(raw)
        stats.n_words = n_words
        stats.n_blocks = n_blocks
        stats.n_symbols = len(out)

    return "".join(out)
