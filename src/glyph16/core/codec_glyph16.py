from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from glyph16.core.alphabet import SIZE_INT_16BIT, Alphabet, make_alphabet
from glyph16.core.constants import CodecConstants, derive_constants
from glyph16.core.decoder import decode_to_bytes as _decode_to_bytes
from glyph16.core.encoder import EncodeStats, as_bytes, encode_bytes


@dataclass(frozen=True)
class Glyph16Codec:
    """
    Codec bytes <-> stringa di simboli URI-safe (2 byte per simbolo quando possibile).

    Holds the alphabet and the constants derived from it; both are read-only, so
    one instance can be shared by any number of threads.
    """

    alphabet: Alphabet
    constants: CodecConstants
    codec_id: str = "glyph16"

    @classmethod
    def from_alphabet(cls, alphabet: Alphabet) -> Glyph16Codec:
        # fails fast (AlphabetTooSmall) before any encode/decode
        return cls(alphabet=alphabet, constants=derive_constants(len(alphabet)))

    @classmethod
    def from_params(
        cls, size: int = SIZE_INT_16BIT, printable_only: bool = True, uri_safe: bool = True
    ) -> Glyph16Codec:
        return cls.from_alphabet(make_alphabet(size, printable_only, uri_safe))

    def encode(self, data: str | bytes, stats: EncodeStats | None = None) -> str:
        return encode_bytes(as_bytes(data), self.alphabet, self.constants, stats=stats)

    def decode_to_bytes(self, text: str) -> bytes:
        if not isinstance(text, str):
            raise TypeError("text must be str")
        return _decode_to_bytes(text, self.alphabet, self.constants)

    def decode_to_text(self, text: str) -> str:
        return self.decode_to_bytes(text).decode("utf-8")


@lru_cache(maxsize=None)
def default_codec() -> Glyph16Codec:
    """Process-wide codec over the default alphabet (built once)."""
    return Glyph16Codec.from_params()


def encode(data: str | bytes) -> str:
    return default_codec().encode(data)


def decode_to_bytes(text: str) -> bytes:
    return default_codec().decode_to_bytes(text)


def decode_to_text(text: str) -> str:
    return default_codec().decode_to_text(text)
