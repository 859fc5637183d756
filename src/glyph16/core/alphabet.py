from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

# Walk the Basic Multilingual Plane (plane 0) by default.
SIZE_INT_16BIT = 1 << 16

# Closed code point ranges, matched case-insensitively (see _in_script_ranges).
SCRIPT_RANGES: tuple[tuple[int, int], ...] = (
    (0x0061, 0x007A),  # latin a-z
    (0x03B1, 0x03C9),  # greek α-ω
    (0x0430, 0x044F),  # cyrillic а-я
    (0x4E00, 0x9FAF),  # CJK unified ideographs 一-龯
)

# Control and format characters, invisible separators, BOM.
NON_PRINTABLE_RANGES: tuple[tuple[int, int], ...] = (
    (0x0000, 0x0008),
    (0x000B, 0x001F),
    (0x007F, 0x009F),
    (0x1C80, 0x1C86),
    (0x2000, 0x200F),
    (0x2028, 0x202F),
    (0x205F, 0x206F),
    (0x3000, 0x3000),
    (0xFEFF, 0xFEFF),
    (0xE0100, 0xE01EF),
)

URI_RESERVED = frozenset("&$+,:;~\"`'=?@#<>/[]{}|\\^%")


def _in_ranges(cp: int, ranges: tuple[tuple[int, int], ...]) -> bool:
    return any(lo <= cp <= hi for lo, hi in ranges)


def _in_script_ranges(ch: str) -> bool:
    if _in_ranges(ord(ch), SCRIPT_RANGES):
        return True
    # Simple case folding only: multi-char folds (e.g. ß -> ss) never match.
    folded = ch.casefold()
    return len(folded) == 1 and _in_ranges(ord(folded), SCRIPT_RANGES)


def is_printable(ch: str) -> bool:
    return not _in_ranges(ord(ch), NON_PRINTABLE_RANGES)


def is_uri_safe(ch: str) -> bool:
    return ch not in URI_RESERVED and not ch.isspace()


def iter_alphabet(
    size: int = SIZE_INT_16BIT, printable_only: bool = True, uri_safe: bool = True
) -> Iterator[str]:
    """Yield the alphabet symbols in code point order.

    Restartable: every call walks code points 0..size-1 again.
    """
    for i in range(size):
        ch = chr(i)
        if not _in_script_ranges(ch):
            continue
        if printable_only and not is_printable(ch):
            continue
        if uri_safe and not is_uri_safe(ch):
            continue
        yield ch


@dataclass(frozen=True)
class Alphabet:
    """Ordered, immutable symbol table (index <-> symbol)."""

    symbols: str
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError("alfabeto: simboli duplicati")
        object.__setattr__(self, "_index", {ch: i for i, ch in enumerate(self.symbols)})

    def __len__(self) -> int:
        return len(self.symbols)

    def __getitem__(self, idx: int) -> str:
        return self.symbols[idx]

    def __contains__(self, ch: object) -> bool:
        return ch in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def index_of(self, ch: str) -> int | None:
        return self._index.get(ch)


def make_alphabet(
    size: int = SIZE_INT_16BIT, printable_only: bool = True, uri_safe: bool = True
) -> Alphabet:
    if not (0 < size <= SIZE_INT_16BIT):
        raise ValueError(f"alfabeto: size deve essere 1..{SIZE_INT_16BIT}, got {size}")
    return Alphabet("".join(iter_alphabet(size, printable_only, uri_safe)))
