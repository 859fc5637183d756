from __future__ import annotations

from pathlib import Path

import pytest

from glyph16.core.codec_glyph16 import encode
from glyph16.errors import InvalidEncoding, UnknownSymbol
from glyph16.verify import encode_stats, inspect_encoded, verify_encoded_file


def test_inspect_matches_encode_stats() -> None:
    data = bytes.fromhex("ffffffff000052a553a501") * 3
    text, rep_enc = encode_stats(data)
    rep = inspect_encoded(text)

    assert rep == rep_enc
    assert rep.odd is True
    assert rep.byte_length == len(data)
    assert rep.n_words == (len(data) + 1) // 2
    assert rep.n_blocks == (rep.n_words + 6) // 7
    assert rep.n_symbols == len(text)
    assert sum(rep.tier_histogram) == rep.n_words
    assert rep.tier_histogram[3] == 6
    assert rep.tier_histogram[1:3] == (1, 4)
    assert rep.overflow_words == 11


def test_inspect_empty() -> None:
    rep = inspect_encoded("")
    assert rep.n_symbols == 0
    assert rep.byte_length == 0
    assert rep.bytes_per_symbol == 0.0

    text, rep0 = encode_stats(b"")
    assert text == "0"
    assert inspect_encoded(text) == rep0


def test_report_to_dict() -> None:
    _, rep = encode_stats("Hello, world!")
    d = rep.to_dict()
    assert d["byte_length"] == 13
    assert d["n_symbols"] == 9
    assert d["n_blocks"] == 1
    assert isinstance(d["tier_histogram"], list)
    assert d["overflow_words"] == rep.overflow_words
    assert d["bytes_per_symbol"] == round(13 / 9, 4)


def test_inspect_rejects_malformed() -> None:
    with pytest.raises(UnknownSymbol):
        inspect_encoded(encode(b"abcd") + "0")
    with pytest.raises(InvalidEncoding):
        inspect_encoded("x")


def test_verify_encoded_file(tmp_path: Path) -> None:
    p = tmp_path / "a.g16"
    p.write_text(encode(b"payload"), encoding="utf-8")
    rep = verify_encoded_file(p)
    assert rep.byte_length == 7

    bad = tmp_path / "bad.g16"
    bad.write_bytes(b"\xff\xfe\x00")
    with pytest.raises(InvalidEncoding, match="UTF-8"):
        verify_encoded_file(bad)
