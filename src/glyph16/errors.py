"""Typed errors for glyph16.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_ALPHABET = 11
EXIT_UNENCODABLE = 12
EXIT_INVALID_ENCODING = 13


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid alphabet spec, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (I/O error, unexpected error, etc.)"),
    ExitCodeInfo(EXIT_ALPHABET, "ALPHABET", "Alphabet too small for the 16-bit value space"),
    ExitCodeInfo(EXIT_UNENCODABLE, "UNENCODABLE", "A 16-bit word could not be mapped into the alphabet"),
    ExitCodeInfo(EXIT_INVALID_ENCODING, "INVALID_ENCODING", "Malformed encoded input (unknown symbol, bad flag/header)"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/glyph16/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every library error extends `Glyph16Error` and carries an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append("- Alphabet spec errors are usage errors (exit 2).\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class Glyph16Error(Exception):
    """Base error for glyph16."""

    exit_code: int = EXIT_GENERIC


class UsageError(Glyph16Error):
    exit_code = EXIT_USAGE


class AlphabetTooSmall(Glyph16Error):
    """The alphabet cannot cover 0..65535 with at most 3 overflow tiers."""

    exit_code = EXIT_ALPHABET


class UnencodableValue(Glyph16Error):
    exit_code = EXIT_UNENCODABLE

    def __init__(self, value: int, max_tier: int) -> None:
        super().__init__(f"valore non codificabile dopo {max_tier} tier: {value}")
        self.value = value
        self.max_tier = max_tier


class InvalidEncoding(Glyph16Error, ValueError):
    exit_code = EXIT_INVALID_ENCODING


class BadFlag(InvalidEncoding):
    pass


class UnknownSymbol(InvalidEncoding):
    def __init__(self, symbol: str, position: int) -> None:
        super().__init__(f"simbolo non presente nell'alfabeto: U+{ord(symbol):04X} @ {position}")
        self.symbol = symbol
        self.position = position
