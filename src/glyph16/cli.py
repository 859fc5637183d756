"""glyph16 CLI.

This is the stable CLI entrypoint (console-script: ``glyph16``).

UX policy:
  - INPUT/OUTPUT are paths; ``-`` means stdin/stdout.
  - Encoded files are UTF-8 text without a trailing newline.
  - Errors are one ``[glyph16] ...`` line on stderr; ``--debug`` re-raises.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from glyph16.alphabet_spec import AlphabetSpecError, load_alphabet_spec
from glyph16.errors import EXIT_GENERIC, EXIT_USAGE, Glyph16Error, InvalidEncoding

TAG = "[glyph16]"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _add_alphabet_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--alphabet",
        default=None,
        help="Alphabet spec (JSON). Use '@file.json' to load from file, or pass JSON inline.",
    )


def _codec(alphabet_arg: str | None):
    from glyph16.core.codec_glyph16 import default_codec

    if alphabet_arg is None:
        return default_codec()
    return load_alphabet_spec(alphabet_arg).build_codec()


def _read_bytes(p: str) -> bytes:
    if p == "-":
        return sys.stdin.buffer.read()
    return Path(p).read_bytes()


def _read_text(p: str) -> str:
    raw = _read_bytes(p)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncoding(f"input non UTF-8: {p}: {e}") from e


def _write_bytes(p: str, data: bytes) -> None:
    if p == "-":
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return
    Path(p).write_bytes(data)


def _cmd_encode(input_arg: str, output_arg: str, *, alphabet_arg: str | None, stats: bool) -> int:
    from glyph16.verify import encode_stats

    codec = _codec(alphabet_arg)
    text, rep = encode_stats(_read_bytes(input_arg), codec)
    _write_bytes(output_arg, text.encode("utf-8"))
    if stats:
        print(
            f"{TAG} bytes={rep.byte_length} symbols={rep.n_symbols} blocks={rep.n_blocks} "
            f"overflow_words={rep.overflow_words} bytes_per_symbol={rep.bytes_per_symbol:.3f}",
            file=sys.stderr,
        )
    return 0


def _cmd_decode(input_arg: str, output_arg: str, *, alphabet_arg: str | None) -> int:
    codec = _codec(alphabet_arg)
    _write_bytes(output_arg, codec.decode_to_bytes(_read_text(input_arg)))
    return 0


def _cmd_verify(input_arg: str, *, alphabet_arg: str | None, as_json: bool) -> int:
    from glyph16.verify import inspect_encoded

    rep = inspect_encoded(_read_text(input_arg), _codec(alphabet_arg))
    if as_json:
        print(json.dumps({"ok": True, **rep.to_dict()}, sort_keys=True))
    else:
        print("OK")
    return 0


def _cmd_alphabet_info(*, alphabet_arg: str | None, as_json: bool) -> int:
    codec = _codec(alphabet_arg)
    k = codec.constants
    info = {
        "length": len(codec.alphabet),
        "out_of_bound_difference": k.out_of_bound_difference,
        "safe_ratio_divisor": k.safe_ratio_divisor,
        "overflow_offset": k.overflow_offset,
        "block_size": k.block_size,
        "header_bits": k.header_bits,
        "first": codec.alphabet[0],
        "last": codec.alphabet[len(codec.alphabet) - 1],
    }
    if as_json:
        print(json.dumps(info, ensure_ascii=False, sort_keys=True))
    else:
        for key, v in info.items():
            print(f"{key}: {v}")
    return 0


def _cmd_alphabet_dump(output_arg: str, *, alphabet_arg: str | None) -> int:
    codec = _codec(alphabet_arg)
    _write_bytes(output_arg, codec.alphabet.symbols.encode("utf-8"))
    return 0


def _cmd_alphabet_validate(spec_arg: str) -> int:
    # load is the validation; build checks the density invariant
    load_alphabet_spec(spec_arg).build_codec()
    print("OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="glyph16", description="glyph16: bytes <-> URI-safe Unicode symbols"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_e = sub.add_parser("encode", help="Encode a binary file into a symbol string")
    p_e.add_argument("input", help="Input file ('-' for stdin)")
    p_e.add_argument("output", help="Output file ('-' for stdout)")
    p_e.add_argument("--stats", action="store_true", help="Print a summary line on stderr")
    _add_alphabet_arg(p_e)
    _add_common_args(p_e)

    p_d = sub.add_parser("decode", help="Decode a symbol string back into bytes")
    p_d.add_argument("input", help="Input file ('-' for stdin)")
    p_d.add_argument("output", help="Output file ('-' for stdout)")
    _add_alphabet_arg(p_d)
    _add_common_args(p_d)

    p_v = sub.add_parser("verify", help="Check that a file is a well-formed encoding")
    p_v.add_argument("input", help="Input file ('-' for stdin)")
    p_v.add_argument("--json", action="store_true", help="Print a JSON report")
    _add_alphabet_arg(p_v)
    _add_common_args(p_v)

    p_a = sub.add_parser("alphabet", help="Alphabet operations (info, dump, validate)")
    sub_a = p_a.add_subparsers(dest="alphabet_cmd", required=True)

    p_ai = sub_a.add_parser("info", help="Show alphabet length and derived constants")
    p_ai.add_argument("--json", action="store_true", help="Print a JSON object")
    _add_alphabet_arg(p_ai)
    _add_common_args(p_ai)

    p_ad = sub_a.add_parser("dump", help="Write the alphabet as a UTF-8 string")
    p_ad.add_argument("output", help="Output file ('-' for stdout)")
    _add_alphabet_arg(p_ad)
    _add_common_args(p_ad)

    p_av = sub_a.add_parser("validate", help="Validate an alphabet spec (v1)")
    p_av.add_argument("spec", help="Alphabet spec JSON (@file.json or inline JSON)")
    _add_common_args(p_av)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "encode":
            return _cmd_encode(ns.input, ns.output, alphabet_arg=ns.alphabet, stats=bool(ns.stats))
        if ns.cmd == "decode":
            return _cmd_decode(ns.input, ns.output, alphabet_arg=ns.alphabet)
        if ns.cmd == "verify":
            return _cmd_verify(ns.input, alphabet_arg=ns.alphabet, as_json=bool(ns.json))
        if ns.cmd == "alphabet":
            if ns.alphabet_cmd == "info":
                return _cmd_alphabet_info(alphabet_arg=ns.alphabet, as_json=bool(ns.json))
            if ns.alphabet_cmd == "dump":
                return _cmd_alphabet_dump(ns.output, alphabet_arg=ns.alphabet)
            if ns.alphabet_cmd == "validate":
                return _cmd_alphabet_validate(str(ns.spec))
            raise AssertionError("unreachable")

        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except AlphabetSpecError as e:
        # Treat as usage/config error.
        if getattr(ns, "debug", False):
            raise
        print(f"{TAG} {e}", file=sys.stderr)
        return EXIT_USAGE
    except Glyph16Error as e:
        if getattr(ns, "debug", False):
            raise
        if getattr(ns, "json", False):
            print(json.dumps({"ok": False, "error": str(e), "exit_code": e.exit_code}), file=sys.stderr)
        else:
            print(f"{TAG} {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"{TAG} error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
