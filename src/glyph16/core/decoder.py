from __future__ import annotations

from collections.abc import Iterator

from glyph16.core.alphabet import Alphabet
from glyph16.core.constants import MAX_SAFE_INT_16BIT, MAX_TIER, TIER_BITS, CodecConstants
from glyph16.core.encoder import FLAG_EVEN, FLAG_ODD
from glyph16.errors import BadFlag, InvalidEncoding, UnknownSymbol


def _lookup(alphabet: Alphabet, ch: str, pos: int) -> int:
    idx = alphabet.index_of(ch)
    if idx is None:
        raise UnknownSymbol(ch, pos)
    return idx


def split_header(header: int, block_size: int) -> list[int]:
    """Unpack a header index into per-word tiers (first word first)."""
    return [(header >> (TIER_BITS * i)) & MAX_TIER for i in range(block_size)]


def read_flag(text: str) -> bool:
    """Return True when the encoded input had an odd byte length."""
    flag = text[0]
    if flag == FLAG_ODD:
        return True
    if flag == FLAG_EVEN:
        return False
    raise BadFlag(f"flag pari/dispari non valido: {flag!r}")


def iter_words_with_tiers(
    text: str, alphabet: Alphabet, consts: CodecConstants
) -> Iterator[tuple[int, int, bool]]:
    """Yield (word, tier, is_last) for every data symbol after the flag.

    A block whose header is the last element carries no data: end of input.
    """
    n = len(text)
    block_size = consts.block_size
    offset = consts.overflow_offset
    pos = 1
    while pos < n:
        header = _lookup(alphabet, text[pos], pos)
        if header > consts.max_header:
            raise InvalidEncoding(f"header fuori range @ {pos}: {header} > {consts.max_header}")
        tiers = split_header(header, block_size)
        pos += 1

        for tier in tiers:
            if pos >= n:
                return
            value = _lookup(alphabet, text[pos], pos) + offset * tier
            if value > MAX_SAFE_INT_16BIT:
                raise InvalidEncoding(f"valore fuori range 16 bit @ {pos}: {value}")
            pos += 1
            yield value, tier, pos >= n


def decode_to_bytes(text: str, alphabet: Alphabet, consts: CodecConstants) -> bytes:
    if not text:
        return b""
    odd = read_flag(text)

    out = bytearray()
    for value, _tier, is_last in iter_words_with_tiers(text, alphabet, consts):
        if odd and is_last:
            # the high byte of the trailing word is padding
            if value > 0xFF:
                raise InvalidEncoding(f"byte finale fuori range: {value}")
            out.append(value)
        else:
            out.append(value & 0xFF)
            out.append(value >> 8)
    return bytes(out)
