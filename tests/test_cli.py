#!/usr/bin/env python3
"""
Command line tests: running files, dump modes and exit codes.
"""

import io
import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfvm.cli import build_parser, main

EXAMPLES = os.path.join(os.path.dirname(__file__), '..', 'examples')


def feed_stdin(monkeypatch, data=b""):
    """Patch stdin from inside the test body so output capture stays in place."""
    monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(data), encoding='utf-8'))


def test_runs_example_file(monkeypatch, capsysbinary):
    feed_stdin(monkeypatch)
    assert main([os.path.join(EXAMPLES, 'hello.b')]) == 0
    assert capsysbinary.readouterr().out == b"Hello World!\n"


def test_program_reads_stdin(monkeypatch, capsysbinary):
    feed_stdin(monkeypatch, b"xyz")
    assert main([os.path.join(EXAMPLES, 'cat.b')]) == 0
    assert capsysbinary.readouterr().out == b"xyz"


def test_program_from_stdin(monkeypatch, capsysbinary):
    feed_stdin(monkeypatch, b"++++++++[>++++++++<-]>+.,.")
    assert main(["-"]) == 0
    # the program text used up stdin, so ',' reads 0
    assert capsysbinary.readouterr().out == b"A\x00"


def test_stdin_program_help_mentions_empty_input():
    action = [a for a in build_parser()._actions if a.dest == "program"][0]
    assert "reads 0" in action.help


def test_dump_listing(monkeypatch, capsysbinary, tmp_path):
    p = tmp_path / "clear.b"
    p.write_bytes(b"[-]")
    feed_stdin(monkeypatch)
    assert main(["--dump", "listing", str(p)]) == 0
    assert capsysbinary.readouterr().out.decode("ascii").splitlines() == [
        "0000  BranchIfZero 3",
        "0001  Decrement",
        "0002  BranchIfNonZero 1",
    ]


def test_dump_source_strips_comments(monkeypatch, capsysbinary, tmp_path):
    p = tmp_path / "commented.b"
    p.write_bytes(b"add two: ++ then print .")
    feed_stdin(monkeypatch)
    assert main(["--dump", "source", str(p)]) == 0
    assert capsysbinary.readouterr().out == b"++.\n"


def test_unmatched_bracket_exit_code(monkeypatch, capsysbinary, tmp_path):
    p = tmp_path / "bad.b"
    p.write_bytes(b"[]]")
    feed_stdin(monkeypatch)
    assert main([str(p)]) == 1
    captured = capsysbinary.readouterr()
    assert captured.out == b""
    assert b"unmatched bracket" in captured.err


def test_missing_file_exit_code(monkeypatch, capsysbinary, tmp_path):
    feed_stdin(monkeypatch)
    assert main([str(tmp_path / "nope.b")]) == 1
    assert b"io error" in capsysbinary.readouterr().err


def test_tape_length_option(monkeypatch, capsysbinary, tmp_path):
    p = tmp_path / "move.b"
    p.write_bytes(b">>>+++++++++++++++++++++++++++++++++++++++++++++++++.<.")
    feed_stdin(monkeypatch)
    assert main(["-t", "2", str(p)]) == 0
    assert capsysbinary.readouterr().out == b"1\x00"


@pytest.mark.parametrize("value", ["0", "-5", "many"])
def test_bad_tape_length_is_usage_error(monkeypatch, capsysbinary, value):
    feed_stdin(monkeypatch)
    with pytest.raises(SystemExit) as excinfo:
        main(["--tape-length", value, os.path.join(EXAMPLES, 'hello.b')])
    assert excinfo.value.code == 2
    assert capsysbinary.readouterr().out == b""
