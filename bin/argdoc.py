#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
usage: argdoc.py [-h] [--rip SHRED] [FILE] [WORD ...]

parse command line args as per a top-of-file docstring of help lines

positional arguments:
  FILE         some python file begun by a docstring (often your main py file)
  WORD         an arg to parse for the file

options:
  -h, --help   show this help message and exit
  --rip SHRED  rip one of doc|help|args

quirks:
  plural args go to an english plural key, such as '[FILE ...]' to '.files'
  options without a metavar count up from zero, such as '-v' to '.verbose == 1'
  options with a metavar default to None, such as '-n COUNT' to '.lines is None'
  you lose your '-h' and '--help' options if you drop them from your 'options:'

unsurprising quirks:
  takes file '-' as meaning '/dev/stdin'
  prompts before reading a tty, like mac bash 'grep -R .', unlike bash 'cat -'

examples:
  argdoc.py -h                              # show this help message and exit
  argdoc.py bin/head.py                     # show the help compiled from the doc
  argdoc.py --rip doc bin/head.py           # show the doc from top of file
  argdoc.py --rip args bin/head.py -- -n -3 # show how the doc parses:  -n -3
"""


import argparse
import ast
import inspect
import json
import re
import sys
import textwrap


SHREDS = "doc|help|args".split("|")


#
# Run as a command line:  ./argdoc.py ...
#


def main(argv):
    """Run an Arg Doc Py command line"""

    args = parse_args(argv[1:])

    shred = args.rip if args.rip else "help"
    if shred not in SHREDS:
        stderr_print(
            "argdoc.py: error: choose one of {}, not:  --rip {}".format(
                "|".join(SHREDS), shred
            )
        )

        return 2  # exit 2 to reject usage

    if not args.file:
        stderr_print("argdoc.py: error: the following arguments are required: FILE")

        return 2  # exit 2 to reject usage

    doc = eval_doc_from_path(args.file)
    if doc is None:
        stderr_print("argdoc.py: error: no docstring at top of:  {}".format(args.file))

        return 1

    if shred == "doc":
        print(doc.strip())

        return 0

    parser = ArgumentParser(doc=doc)

    if shred == "help":
        print(parser.format_help().rstrip())

        return 0

    words = list(args.words)
    if words[:1] == ["--"]:
        words = words[1:]

    parsed = parser.parse_args(words)
    print(json.dumps(vars(parsed), indent=4))

    return 0


#
# Work with an ArgumentParser compiled from the DocString of the Calling Module
#


def parse_args(args=None, namespace=None, doc=None):
    """
    Call 'argparse.parse_args' on a Parser of the calling Module's DocString

    However,
    + work instead from the given Doc, if any
    + mutate the given Namespace, if any, rather than creating a new Namespace
    """

    alt_argv = sys.argv[1:] if (args is None) else args

    alt_doc = doc
    if doc is None:
        f = inspect.currentframe()
        alt_doc = f.f_back.f_globals.get("__doc__")

    parser = ArgumentParser(doc=alt_doc)
    alt_namespace = parser.parse_args(alt_argv, namespace=namespace)

    return alt_namespace


class ArgumentParser(argparse.ArgumentParser):
    """Form an ArgumentParser with Args and Options and Epilog, from a Doc"""

    def __init__(self, doc):

        alt_doc = argparse_doc_upgrade(doc) if doc else ""
        paras = textwrap_split_paras(alt_doc)
        if not paras[1:]:
            alt_doc = "usage: prog\n\ndesc"
            paras = textwrap_split_paras(alt_doc)

        usage = " ".join(paras[0])
        assert usage.startswith("usage: "), repr(usage)

        # Pick the Prog out of the Usage, and the Description out of the 2nd Para

        usage_words = usage.split()
        prog = usage_words[1] if usage_words[1:] else "prog"

        description = " ".join(_.strip() for _ in paras[1])

        # Sort the remaining Paras into Args, Options, and Epilog

        args_para = None
        options_para = None

        paras = paras[2:]
        if paras and paras[0][0].startswith("positional arguments"):
            args_para = paras[0]
            paras = paras[1:]

        if paras and paras[0][0].startswith("options"):
            options_para = paras[0]
            paras = paras[1:]

        epilog = None
        if paras:
            epilog = alt_doc[alt_doc.index("\n" + paras[0][0]) + 1 :]

        add_help = doc_has_help_option(options_para)

        super(ArgumentParser, self).__init__(
            prog=prog,
            description=description,
            add_help=add_help,
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=epilog,
        )

        # Add zero or more Args and/or Options from the Doc

        if args_para:
            for line in textwrap_para_unbreakdent_lines(args_para[1:]):
                parser_add_arg_line(self, usage=usage, line=line)

        if options_para:
            for line in textwrap_para_unbreakdent_lines(options_para[1:]):
                parser_add_option_line(self, line=line)


def doc_has_help_option(options_para):
    """Say if the Options Para lists the conventional H/ Help Option"""

    if not options_para:

        return False

    for line in textwrap_para_unbreakdent_lines(options_para[1:]):
        if " ".join(line.split()) == "-h, --help show this help message and exit":

            return True

    return False


#
# Rip Add_Argument calls out from the Doc
#


def parser_add_arg_line(parser, usage, line):
    """Rip out one Add_Argument Call of a Positional Arg from one Doc Line"""

    words = line.split()
    if not words:

        return

    # Divide the Line into Metavar and Help

    metavar = words[0]
    help_tail = line.strip()[len(metavar) :].strip()

    dest = metavar.lower()

    # Take mentions of NArgs ? or NArgs * or NArgs + from Usage

    nargs = None
    if "[{} ...]".format(metavar) in usage:
        dest = plural_en(dest)
        nargs = "*"  # argparse.ZERO_OR_MORE
        if " {} [{} ...]".format(metavar, metavar) in usage:
            nargs = "+"  # argparse.ONE_OR_MORE
    elif "[{}]".format(metavar) in usage:
        nargs = "?"  # argparse.OPTIONAL

    help_ = help_tail.replace("%", "%%") if help_tail else None
    parser.add_argument(dest, metavar=metavar, nargs=nargs, help=help_)


def parser_add_option_line(parser, line):
    """Rip one Add_Argument Call of an Option or two from one Doc Line"""

    # Divide the Line into Invocation and Help, at the first wide gap

    split = re.split(r"\s{2,}", line.strip(), maxsplit=1)
    invocation = split[0]
    help_tail = split[1] if split[1:] else ""

    # Take each Option String, and at most one Metavar

    option_strings = list()
    metavar = None
    for part in invocation.split(","):
        part_words = part.split()
        if not part_words:
            continue

        option_strings.append(part_words[0])
        if part_words[1:]:
            metavar = part_words[1]

    if not option_strings:

        return

    if option_strings == ["-h", "--help"]:
        if parser.add_help:

            return

    # Count up from zero when the Option takes no Arg, else default to None

    help_ = help_tail.replace("%", "%%") if help_tail else None
    if metavar is None:
        parser.add_argument(*option_strings, action="count", default=0, help=help_)
    else:
        parser.add_argument(*option_strings, metavar=metavar, help=help_)


# deffed in many files  # missing from docs.python.org
def plural_en(word):
    """Guess the English plural of a word"""

    consonants = "bcdfghjklmnpqrstvwxz"  # without "y"

    if re.match(r"^.*ex$", string=word):
        plural = word[: -len("ex")] + "ices"  # index, indices
    elif re.match(r"^.*is$", string=word):
        plural = word[: -len("is")] + "es"  # basis, bases
    elif re.match(r"^.*[{}]y$".format(consonants), string=word):
        plural = word[: -len("y")] + "ies"  # entry, entries
    elif re.match(r"^.*(ch|s|sh|x|z)$", string=word):
        plural = word + "es"  # match, matches
    else:
        plural = word + "s"  # file, files

    return plural


#
# Split the Doc into Paragraphs of Lines
#


# deffed in many files  # missing from docs.python.org
def argparse_doc_upgrade(doc):
    """Cut the jitter in Doc from ArgParse evolving across Python 3, from Python 2"""

    if doc is None:

        return None

    alt_doc = textwrap.dedent(doc).strip()

    # Join the wrapped Lines of the Usage

    index = (alt_doc + "\n\n").index("\n\n")
    usage = " ".join(_.strip() for _ in alt_doc[:index].splitlines())
    alt_doc = usage + alt_doc[index:]

    alt_doc = re.sub(r" \[([A-Z_]+) \[[A-Z_]+ [.][.][.]\]\]", r" [\1 ...]", alt_doc)
    alt_doc = alt_doc.replace("\noptional arguments:", "\noptions:")

    return alt_doc


# deffed in many files  # missing from docs.python.org
def textwrap_split_paras(text):
    """Divide the Chars into a List of non-empty Lists of possibly dented Lines"""

    if text is None:

        return None

    paras = list()

    para = None
    for line in (text + "\n\n").splitlines():
        if not line.strip():
            if para is not None:
                paras.append(para)
            para = None
        elif not para:
            para = [line]
        else:
            para.append(line)

    return paras

    # such as:  "  a\n    b\n  c\n"  ->  [['  a', '    b', '  c']]


def textwrap_para_unbreakdent_lines(para):
    """Join the continuation lines dented beneath each leading line"""

    above_dent = None

    lines = list()
    for line in para:
        lstripped = line.lstrip()
        dent = line[: -len(lstripped)] if lstripped else line

        if lines and (len(dent) > len(above_dent)):
            lines[-1] += "  " + line.strip()  # keep the wide gap before Help

            continue

        lines.append(line)
        above_dent = dent

    return lines

    # such as:  [' a', '    b', ' c']  ->  [' a  b', ' c']


#
# Pick the DocString out of a Python Source File
#


def eval_doc_from_path(path):
    """Pick the DocString out from top of a File, else None"""

    alt_path = "/dev/stdin" if (path == "-") else path
    try:
        with open(alt_path, "r") as reading:
            if reading.isatty():
                stderr_print("Press ⌃D EOF to quit")
            chars = reading.read()
    except OSError as exc:
        stderr_print("argdoc.py: error: {}: {}".format(type(exc).__name__, exc))

        sys.exit(1)  # exit 1 to require input file found

    doc = eval_doc_from_pychars(chars)

    return doc


def eval_doc_from_pychars(pychars):
    """Pick the DocString out from top of a File of Python Source Chars, else None"""

    marks = ['"""', "'''", 'r"""', "r'''", '"', "'", 'r"', "r'"]

    # Skip over comments and blank lines

    pylines = pychars.splitlines()
    for (index, pyline) in enumerate(pylines):
        stripped = pyline.strip()
        if not stripped or stripped.startswith("#"):
            continue

        # Fail if first sourceline is Not a quoted String of Chars

        matches = list(_ for _ in marks if stripped.startswith(_))
        if not matches:

            return None

        mark1 = matches[0]
        mark2 = mark1.lstrip("r")

        # Fail if DocString starts without ending

        tail = "\n".join(pylines[index:])
        start = tail.index(mark1) + len(mark1)
        end = tail.find(mark2, start)
        if end < 0:

            return None

        evallable = mark1 + tail[start:end] + mark2
        evalled = ast.literal_eval(evallable)

        return evalled

    return None


# deffed in many files  # missing from docs.python.org
def stderr_print(*args):
    """Print the Args, but to Stderr, not to Stdout"""

    sys.stdout.flush()
    print(*args, file=sys.stderr)
    sys.stderr.flush()  # like for kwargs["end"] != "\n"


if __name__ == "__main__":
    sys.exit(main(sys.argv))
