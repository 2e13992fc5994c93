"""Test bin/cat.py"""

import io
import sys

import cat


def run_cat(*args):
    return cat.main(["cat.py"] + list(args))


def write_file(tmp_path, name, chars):
    path = tmp_path / name
    path.write_bytes(chars)
    return str(path)


def test_copies_each_file_in_order(tmp_path, capsysbinary):
    a = write_file(tmp_path, "a.txt", b"alpha\n")
    b = write_file(tmp_path, "b.txt", b"beta\xff")

    assert run_cat(a, b) == 0
    assert capsysbinary.readouterr().out == b"alpha\nbeta\xff"


def test_copies_stdin(monkeypatch, capsysbinary):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"x\ny")))

    assert run_cat() == 0
    assert capsysbinary.readouterr().out == b"x\ny"


def test_numbers_lines_across_files(tmp_path, capsysbinary):
    a = write_file(tmp_path, "a.txt", b"a\n\n")
    b = write_file(tmp_path, "b.txt", b"b\n")

    assert run_cat("-n", a, b) == 0
    assert capsysbinary.readouterr().out == b"     1\ta\n     2\t\n     3\tb\n"


def test_numbers_nonblank_lines_only(tmp_path, capsysbinary):
    a = write_file(tmp_path, "a.txt", b"a\n\nb\n")

    assert run_cat("-b", "-n", a) == 0
    assert capsysbinary.readouterr().out == b"     1\ta\n\n     2\tb\n"


def test_shows_ends(tmp_path, capsysbinary):
    a = write_file(tmp_path, "a.txt", b"a\n\nb")

    assert run_cat("-E", a) == 0
    assert capsysbinary.readouterr().out == b"a$\n$\nb"


def test_squeezes_blank_lines(tmp_path, capsysbinary):
    a = write_file(tmp_path, "a.txt", b"a\n\n\n\nb\n\n")

    assert run_cat("-s", a) == 0
    assert capsysbinary.readouterr().out == b"a\n\nb\n\n"


def test_reports_missing_file_and_goes_on(tmp_path, capsysbinary):
    missing = str(tmp_path / "missing.txt")
    a = write_file(tmp_path, "a.txt", b"a\n")

    assert run_cat(missing, a) == 1

    (out, err) = capsysbinary.readouterr()
    assert out == b"a\n"
    assert err.startswith(b"cat.py: error: ")
    assert b"FileNotFoundError" in err
