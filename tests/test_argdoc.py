"""Test bin/argdoc.py compiling ArgumentParser's out of DocStrings"""

import json

import pytest

import argdoc


DOC = r"""
usage: p.py [-h] [-c COUNT] [-n COUNT] [-v] [--silent] [-z] [FILE ...]

do good stuff

positional arguments:
  FILE                  a file to read (default: stdin)

options:
  -h, --help            show this help message and exit
  -c COUNT, --bytes COUNT
                        how many bytes, such as 100%
  -n, --lines COUNT     how many lines
  -v, --verbose         say more
  --silent              say less
  -z, --zero-terminated
                        end lines with nul

quirks:
  doesn't do much

examples:
  p.py -v
"""


def test_parse_defaults():
    args = argdoc.parse_args([], doc=DOC)

    assert args.files == []
    assert args.bytes is None
    assert args.lines is None
    assert args.verbose == 0
    assert args.silent == 0
    assert args.zero_terminated == 0


def test_parse_options_and_args():
    args = argdoc.parse_args("-vv -c 5 --lines -3 -z a b".split(), doc=DOC)

    assert args.verbose == 2
    assert args.bytes == "5"
    assert args.lines == "-3"
    assert args.zero_terminated == 1
    assert args.files == ["a", "b"]


def test_parser_takes_prog_description_and_epilog():
    parser = argdoc.ArgumentParser(doc=DOC)

    assert parser.prog == "p.py"
    assert parser.description == "do good stuff"
    assert parser.epilog.startswith("quirks:")
    assert "p.py -v" in parser.epilog


def test_parser_formats_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        argdoc.parse_args(["--help"], doc=DOC)

    assert excinfo.value.code == 0

    out = capsys.readouterr().out
    assert out.startswith("usage: p.py")
    assert "how many bytes, such as 100%" in out
    assert "quirks:" in out


def test_parser_rejects_unknown_option(capsys):
    with pytest.raises(SystemExit) as excinfo:
        argdoc.parse_args(["--nope"], doc=DOC)

    assert excinfo.value.code == 2
    assert "unrecognized arguments" in capsys.readouterr().err


def test_parser_without_help_option():
    doc = "usage: q.py [-x]\n\nsay x\n\noptions:\n  -x  the x\n"
    parser = argdoc.ArgumentParser(doc=doc)

    assert not parser.add_help
    assert parser.parse_args(["-x"]).x == 1


def test_parse_optional_and_required_args():
    doc = """
    usage: r.py [-h] TOP [IN_FILE] [OUT_FILE]

    copy something

    positional arguments:
      TOP         the top
      IN_FILE     the input
      OUT_FILE    the output

    options:
      -h, --help  show this help message and exit
    """

    args = argdoc.parse_args(["t", "i"], doc=doc)

    assert args.top == "t"
    assert args.in_file == "i"
    assert args.out_file is None


def test_unwraps_usage_and_upgrades_doc():
    doc = "usage: s.py [-h] [WORD [WORD ...]]\n  [FILE]\n\nsay\n\noptional arguments:\n"
    alt_doc = argdoc.argparse_doc_upgrade(doc)

    assert alt_doc.splitlines()[0] == "usage: s.py [-h] [WORD ...] [FILE]"
    assert "\noptions:" in alt_doc


def test_plural_en():
    singulars = "file path word entry index basis match box".split()
    plurals = "files paths words entries indices bases matches boxes".split()

    assert list(argdoc.plural_en(_) for _ in singulars) == plurals


def test_split_paras_and_unbreakdent():
    paras = argdoc.textwrap_split_paras("a\n  b\n\n\nc\n")
    assert paras == [["a", "  b"], ["c"]]

    lines = argdoc.textwrap_para_unbreakdent_lines([" a", "    b", " c"])
    assert lines == [" a  b", " c"]


def test_eval_doc_from_pychars():
    pychars = '#!/usr/bin/env python3\n\nr"""\nusage: t.py\n"""\n\nimport sys\n'
    assert argdoc.eval_doc_from_pychars(pychars) == "\nusage: t.py\n"

    assert argdoc.eval_doc_from_pychars("import sys\n") is None


def test_main_rips_help_doc_and_args(tmp_path, capsys):
    path = tmp_path / "p.py"
    path.write_text('"""{}"""\n'.format(DOC))

    assert argdoc.main(["argdoc.py", str(path)]) == 0
    assert capsys.readouterr().out.startswith("usage: p.py")

    assert argdoc.main(["argdoc.py", "--rip", "doc", str(path)]) == 0
    assert capsys.readouterr().out.strip() == DOC.strip()

    assert argdoc.main(["argdoc.py", "--rip", "args", str(path), "--", "-v", "x"]) == 0
    ripped = json.loads(capsys.readouterr().out)
    assert ripped["verbose"] == 1
    assert ripped["files"] == ["x"]


def test_main_rejects_bad_rip(tmp_path, capsys):
    path = tmp_path / "p.py"
    path.write_text('"""{}"""\n'.format(DOC))

    assert argdoc.main(["argdoc.py", "--rip", "nope", str(path)]) == 2
    assert "argdoc.py: error:" in capsys.readouterr().err
