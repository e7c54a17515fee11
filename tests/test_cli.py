#!/usr/bin/env python3
"""
Tests for the bfvm command line.
"""

import io
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfvm.cli import main


@pytest.fixture
def program(tmp_path):
    def write(text):
        path = tmp_path / "prog.bf"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return write


@pytest.fixture
def stdin(monkeypatch):
    def feed(data):
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))
    return feed


def test_run_program(program, stdin, capsys):
    stdin(b"")
    assert main(["-f", program("++++++++[>+++++++++<-]>.")]) == 0
    assert capsys.readouterr().out == "H"


def test_echo_from_stdin(program, stdin, capsys):
    stdin(b"hi\n")
    assert main(["--file", program(",.,.")]) == 0
    assert capsys.readouterr().out == "hi"


def test_dump(program, capsys):
    assert main(["-f", program("+[-]"), "--dump"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "0  CHANGE  +1",
        "1  JZ      3",
        "2    CHANGE  -1",
        "3  JNZ     1",
    ]


def test_dump_tape(program, stdin, capsys):
    stdin(b"")
    assert main(["-f", program("+++>++"), "--dump-tape"]) == 0
    err = capsys.readouterr().err
    assert "pointer=1 steps=6" in err
    assert "[    0]   3" in err
    assert "[    1]   2" in err


def test_syntax_error(program, capsys):
    assert main(["-f", program("+\n+]")]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "unmatched closing marker (line 2, column 2)" in captured.err


def test_eof_error_policy(program, stdin, capsys):
    stdin(b"")
    assert main(["-f", program(","), "--eof", "error"]) == 1
    assert "Input exhausted" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["-f", str(tmp_path / "nope.bf")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_file_is_required(capsys):
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2
