from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

from glyph16.cli import main

SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(*args: str, stdin: bytes | None = None) -> subprocess.CompletedProcess[bytes]:
    """Run glyph16 CLI through a python -c wrapper.

    This avoids assuming the console-script entrypoint is installed.
    """
    cmd = [
        sys.executable,
        "-c",
        "from glyph16.cli import main; raise SystemExit(main())",
        *args,
    ]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join([str(SRC), env.get("PYTHONPATH", "")])
    return subprocess.run(cmd, input=stdin, capture_output=True, env=env)


def test_cli_encode_decode_roundtrip(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    enc = tmp_path / "out.g16"
    back = tmp_path / "back.bin"

    data = "HELLO 123\nRIGA ARTICOLO: vite M3 qty=10 prezzo=1.20\n".encode("utf-8") + bytes(range(256))
    inp.write_bytes(data)

    assert main(["encode", str(inp), str(enc)]) == 0
    assert enc.read_text(encoding="utf-8")[0] == "0"

    assert main(["verify", str(enc)]) == 0
    assert main(["decode", str(enc), str(back)]) == 0
    assert back.read_bytes() == data


def test_cli_hello_world_vector(tmp_path: Path) -> None:
    inp = tmp_path / "hello.txt"
    enc = tmp_path / "hello.g16"
    inp.write_text("Hello, world!", encoding="utf-8")

    assert main(["encode", str(inp), str(enc)]) == 0
    assert enc.read_text(encoding="utf-8") == "1劒碶翚禼誎藝矚h"


def test_cli_stdin_stdout_and_stats() -> None:
    r = _run_cli("encode", "-", "-", "--stats", stdin=bytes([0x0B, 0x0A, 0x0B, 0x0E]))
    assert r.returncode == 0, r.stderr
    assert r.stdout.decode("utf-8") == "0A坘存"
    assert b"[glyph16] bytes=4 symbols=4 blocks=1" in r.stderr

    r = _run_cli("decode", "-", "-", stdin="0A坘存".encode("utf-8"))
    assert r.returncode == 0, r.stderr
    assert r.stdout == bytes([0x0B, 0x0A, 0x0B, 0x0E])


def test_cli_verify_json_and_invalid_exit_13(tmp_path: Path) -> None:
    good = tmp_path / "good.g16"
    bad = tmp_path / "bad.g16"
    good.write_text("1劒碶翚禼誎藝矚h", encoding="utf-8")
    bad.write_text("1劒碶翚禼誎藝矚h0", encoding="utf-8")

    r = _run_cli("verify", str(good), "--json")
    assert r.returncode == 0, r.stderr
    obj = json.loads(r.stdout.decode("utf-8"))
    assert obj["ok"] is True
    assert obj["byte_length"] == 13

    r = _run_cli("verify", str(bad))
    assert r.returncode == 13
    assert b"[glyph16]" in r.stderr

    r = _run_cli("verify", str(bad), "--json")
    assert r.returncode == 13
    err = json.loads(r.stderr.decode("utf-8"))
    assert err["ok"] is False
    assert err["exit_code"] == 13

    r = _run_cli("decode", str(bad), str(tmp_path / "x.bin"))
    assert r.returncode == 13


def test_cli_alphabet_info_and_dump(tmp_path: Path, capsys) -> None:
    assert main(["alphabet", "info", "--json"]) == 0
    info = json.loads(capsys.readouterr().out)
    assert info["length"] == 21091
    assert info["block_size"] == 7
    assert info["overflow_offset"] == 14815
    assert info["first"] == "A"

    out = tmp_path / "alphabet.txt"
    assert main(["alphabet", "dump", str(out)]) == 0
    assert len(out.read_text(encoding="utf-8")) == 21091


def test_cli_alphabet_validate(capsys) -> None:
    ok = json.dumps({"spec": "glyph16.alphabet.v1", "name": "smoke", "uri_safe": False})
    assert main(["alphabet", "validate", ok]) == 0
    assert "OK" in capsys.readouterr().out

    # usage error
    assert main(["alphabet", "validate", "{}"]) == 2
    assert "[glyph16]" in capsys.readouterr().err

    # density error
    small = json.dumps({"spec": "glyph16.alphabet.v1", "size": 0x9000})
    assert main(["alphabet", "validate", small]) == 11
    assert "[glyph16]" in capsys.readouterr().err


def test_cli_encode_with_alphabet_spec(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    enc = tmp_path / "out.g16"
    inp.write_bytes(b"\x0b\x0a\x0b\x0e")
    spec = json.dumps({"spec": "glyph16.alphabet.v1", "size": 0x9FB0})

    assert main(["encode", str(inp), str(enc), "--alphabet", spec]) == 0
    assert enc.read_text(encoding="utf-8") == "0A坘存"


def test_cli_missing_input_is_generic_error(tmp_path: Path, capsys) -> None:
    rc = main(["encode", str(tmp_path / "nope.bin"), str(tmp_path / "out.g16")])
    assert rc == 10
    assert "[glyph16] error:" in capsys.readouterr().err
