"""Test bin/uniq.py"""

import io
import sys

import uniq


def run_uniq(*args):
    return uniq.main(["uniq.py"] + list(args))


def set_stdin(monkeypatch, chars):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(chars)))


def test_drops_repeats_in_a_row(monkeypatch, capsysbinary):
    set_stdin(monkeypatch, chars=b"a\na\nb\na\n")

    assert run_uniq() == 0
    assert capsysbinary.readouterr().out == b"a\nb\na\n"


def test_counts_repeats(monkeypatch, capsysbinary):
    set_stdin(monkeypatch, chars=b"a\na\nb\na\n")

    assert run_uniq("-c") == 0
    assert capsysbinary.readouterr().out == b"      2 a\n      1 b\n      1 a\n"


def test_last_line_without_line_feed_still_repeats(monkeypatch, capsysbinary):
    set_stdin(monkeypatch, chars=b"a\nb\nb")

    assert run_uniq("-c", "-") == 0
    assert capsysbinary.readouterr().out == b"      1 a\n      2 b\n"


def test_empty_input(monkeypatch, capsysbinary):
    set_stdin(monkeypatch, chars=b"")

    assert run_uniq() == 0
    assert capsysbinary.readouterr().out == b""


def test_reads_and_writes_files(tmp_path, capsysbinary):
    in_path = tmp_path / "in.txt"
    in_path.write_bytes(b"x\nx\ny\n")
    out_path = tmp_path / "out.txt"

    assert run_uniq(str(in_path), str(out_path)) == 0
    assert out_path.read_bytes() == b"x\ny\n"
    assert capsysbinary.readouterr().out == b""


def test_reports_missing_input(tmp_path, capsysbinary):
    missing = tmp_path / "missing.txt"

    assert run_uniq(str(missing)) == 1

    err = capsysbinary.readouterr().err
    assert err.startswith(b"uniq.py: error: ")
    assert str(missing).encode() in err
