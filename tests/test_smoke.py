import io
import os
import sys

import pytest

from foreach.main import cli

PRINT_ARGS = [sys.executable, "-c", "import sys; print('|'.join(sys.argv[1:]))"]


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        cli(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == "for-each 1.0.0"


def test_help_mentions_placeholders(capsys):
    with pytest.raises(SystemExit) as exc:
        cli(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "$1, $2" in out
    assert "--space-delim" in out


def test_no_command_given(capsys):
    status = cli([], stdin=io.BytesIO(b"a\n"))
    assert status == 1
    assert "for-each: no command given" in capsys.readouterr().err


def test_implicit_append_runs_once_per_line(capfd):
    status = cli(PRINT_ARGS, stdin=io.BytesIO(b"a\n\nb\n"))
    assert status == 0
    assert capfd.readouterr().out.splitlines() == ["a", "b"]


def test_placeholders_suppress_implicit_append(capfd):
    status = cli(PRINT_ARGS + ["$1", "->", "$2"], stdin=io.BytesIO(b"x\ty\n"))
    assert status == 0
    assert capfd.readouterr().out.splitlines() == ["x|->|y"]


def test_line_number_and_raw_line(capfd):
    status = cli(PRINT_ARGS + ["$#", "$*"], stdin=io.BytesIO(b"\xef\xbb\xbf  one \r\n\n two\r\n"))
    assert status == 0
    assert capfd.readouterr().out.splitlines() == ["1|  one ", "3| two"]


def test_child_failure_does_not_stop_run(capfd):
    fail = [sys.executable, "-c", "import sys; print(sys.argv[1]); sys.exit(3)"]
    status = cli(fail, stdin=io.BytesIO(b"first\nsecond\n"))
    assert status == 0
    assert capfd.readouterr().out.splitlines() == ["first", "second"]


@pytest.mark.skipif(os.name == "nt", reason="uses the POSIX echo program")
def test_echo(capfd):
    status = cli(["echo"], stdin=io.BytesIO(b"a\nb\n"))
    assert status == 0
    assert capfd.readouterr().out == "a\nb\n"


@pytest.mark.skipif(os.name == "nt", reason="exec failure maps to status 127 on POSIX only")
def test_missing_program_is_reported_and_skipped(capfd):
    status = cli(["for-each-no-such-program-xyz"], stdin=io.BytesIO(b"a\nb\n"))
    assert status == 0
    err = capfd.readouterr().err
    assert err.count("for-each-no-such-program-xyz") == 2


DUMP_HEX = [sys.executable, "-c", "import os, sys; print(os.fsencode(sys.argv[1]).hex())"]


@pytest.mark.skipif(os.name == "nt", reason="byte-exact arguments are a POSIX property")
def test_line_bytes_reach_child_unchanged(capfd):
    status = cli(DUMP_HEX, stdin=io.BytesIO(b"caf\xe9.txt\n"))
    assert status == 0
    assert capfd.readouterr().out.splitlines() == [b"caf\xe9.txt".hex()]


@pytest.mark.skipif(os.name == "nt", reason="byte-exact arguments are a POSIX property")
def test_field_bytes_reach_child_unchanged(capfd):
    status = cli(DUMP_HEX + ["$2"], stdin=io.BytesIO(b"x\t\xff\xfe name\n"))
    assert status == 0
    assert capfd.readouterr().out.splitlines() == [b"\xff\xfe name".hex()]


def test_nul_byte_truncates_argument_and_run_continues(capfd):
    status = cli(PRINT_ARGS, stdin=io.BytesIO(b"a\x00b\nnext\n"))
    assert status == 0
    assert capfd.readouterr().out.splitlines() == ["a", "next"]
