from __future__ import annotations

import pytest

from glyph16.core.alphabet import (
    NON_PRINTABLE_RANGES,
    URI_RESERVED,
    Alphabet,
    is_printable,
    is_uri_safe,
    iter_alphabet,
    make_alphabet,
)
from glyph16.core.codec_glyph16 import default_codec

DEFAULT_LEN = 21091

# Non-CJK members: case variants of a-z, α-ω, а-я plus their case-fold aliases.
FOLD_ALIASES = "µſͅϐϑϕϖϰϱϴϵιΩK"


def test_default_alphabet_length_is_pinned() -> None:
    a = make_alphabet()
    assert len(a) == DEFAULT_LEN
    assert len(default_codec().alphabet) == DEFAULT_LEN


def test_default_alphabet_layout() -> None:
    a = make_alphabet()
    assert a[0] == "A"
    assert a[25] == "Z"
    assert a[26] == "a"
    assert a[51] == "z"
    assert a[52] == "µ"
    assert a[len(a) - 1] == "龯"
    assert a.index_of("一") == 179

    # 179 non-CJK symbols + the whole 4E00..9FAF block
    non_cjk = [ch for ch in a if ord(ch) < 0x4E00]
    assert len(non_cjk) == 179
    assert len(a) - len(non_cjk) == 0x9FAF - 0x4E00 + 1
    for ch in FOLD_ALIASES:
        assert ch in a


def test_alphabet_is_sorted_unique_bmp() -> None:
    a = make_alphabet()
    cps = [ord(ch) for ch in a]
    assert cps == sorted(cps)
    assert len(set(cps)) == len(cps)
    assert all(0 <= cp < 0x10000 for cp in cps)


def test_alphabet_is_printable_and_uri_safe() -> None:
    for ch in make_alphabet():
        assert is_printable(ch)
        assert is_uri_safe(ch)
        assert ch not in URI_RESERVED
        assert not ch.isdigit()


def test_printable_only_false_adds_cyrillic_extended_c() -> None:
    a = make_alphabet(printable_only=False)
    assert len(a) == DEFAULT_LEN + 7
    for cp in range(0x1C80, 0x1C87):
        assert chr(cp) in a
    assert any(lo <= 0x1C80 <= hi for lo, hi in NON_PRINTABLE_RANGES)


def test_uri_safe_false_is_noop_on_script_ranges() -> None:
    assert make_alphabet(uri_safe=False).symbols == make_alphabet().symbols


def test_size_limits_the_walk() -> None:
    a = make_alphabet(size=0x80)
    assert a.symbols == "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

    with pytest.raises(ValueError, match="size"):
        make_alphabet(size=0)
    with pytest.raises(ValueError, match="size"):
        make_alphabet(size=0x10001)


def test_iter_alphabet_is_restartable() -> None:
    first = "".join(iter_alphabet(0x500))
    second = "".join(iter_alphabet(0x500))
    assert first == second
    assert first == make_alphabet(0x500).symbols


def test_alphabet_lookup() -> None:
    a = Alphabet("xyz")
    assert a.index_of("y") == 1
    assert a.index_of("0") is None
    assert "z" in a
    assert "0" not in a

    with pytest.raises(ValueError, match="duplicati"):
        Alphabet("xyx")
