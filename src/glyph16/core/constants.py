from __future__ import annotations

import math
from dataclasses import dataclass

from glyph16.errors import AlphabetTooSmall

MAX_SAFE_INT_16BIT = (1 << 16) - 1

# Header fields are 2 bits wide: tiers 0..3.
TIER_BITS = 2
MAX_TIER = (1 << TIER_BITS) - 1


@dataclass(frozen=True)
class CodecConstants:
    """Numbers derived from the alphabet length A.

    out_of_bound_difference: 65535 - A, values with no direct symbol
    safe_ratio_divisor:      floor(65535 / A), at most MAX_TIER
    overflow_offset:         step subtracted once per tier
    block_size:              words covered by one header symbol
    """

    alphabet_len: int
    out_of_bound_difference: int
    safe_ratio_divisor: int
    overflow_offset: int
    block_size: int

    @property
    def header_bits(self) -> int:
        return TIER_BITS * self.block_size

    @property
    def max_header(self) -> int:
        return (1 << self.header_bits) - 1


def derive_constants(alphabet_len: int) -> CodecConstants:
    a = int(alphabet_len)
    if a <= 0:
        raise AlphabetTooSmall("alfabeto vuoto")

    diff = MAX_SAFE_INT_16BIT - a
    ratio = MAX_SAFE_INT_16BIT // a
    if ratio > MAX_TIER:
        raise AlphabetTooSmall(
            f"alfabeto troppo piccolo per rappresentare 16 bit: len={a} ratio={ratio} (max {MAX_TIER})"
        )

    # Rounds half up. An alphabet covering the whole 16-bit space needs no offset.
    offset = math.floor(diff / ratio + 0.5) if diff > 0 else 0

    # Tier ranges [j*offset, j*offset + A) must be contiguous and reach 65535.
    if offset > a or a - 1 + MAX_TIER * offset < MAX_SAFE_INT_16BIT:
        raise AlphabetTooSmall(
            f"alfabeto non copre 0..{MAX_SAFE_INT_16BIT} con {MAX_TIER} tier: len={a} offset={offset}"
        )

    # floor(log2(A)) bits per header symbol, TIER_BITS per word.
    block_size = (a.bit_length() - 1) // TIER_BITS
    if block_size < 1:
        raise AlphabetTooSmall(f"alfabeto troppo piccolo per un header: len={a}")

    return CodecConstants(
        alphabet_len=a,
        out_of_bound_difference=diff,
        safe_ratio_divisor=ratio,
        overflow_offset=offset,
        block_size=block_size,
    )
