#!/usr/bin/env python3

"""
usage: wc.py [-h] [-c] [-m] [-l] [-w] [FILE ...]

count lines and words and characters and bytes

positional arguments:
  FILE           a file to examine (default: stdin)

options:
  -h, --help     show this help message and exit
  -c, --bytes    count bytes
  -m, --chars    count characters
  -l, --lines    count line-feeds
  -w, --words    count words

quirks:
  acts like 'wc -lwc' if called without options, same as Bash 'wc'
  counts characters as utf-8, and counts each byte that isn't utf-8 as one character
  reports each file it can't read, but then goes on to the next file

unsurprising quirks:
  prompts Tty Stdin, like Mac 'grep -R .', unlike Bash 'wc'
  takes '-' as meaning stdin, like Linux 'wc -', unlike Mac 'wc -'
  prints the columns in the order lines, words, chars, bytes, whatever order you ask
  prints a 'total' row when given more than one file

examples:
  wc.py wc.py
  wc.py -l wc.py cat.py
  echo 'Hello, Wc World' |wc.py -w
"""


import collections
import contextlib
import os
import sys

import argdoc


class WcCounts(collections.namedtuple("WcCounts", "lines words chars bytes".split())):
    """Count the Lines, Words, Chars, and Bytes of one Source"""

    def __add__(self, other):
        return WcCounts(*(a + b for (a, b) in zip(self, other)))


def main(argv):
    """Run from the Command Line"""

    args = argdoc.parse_args(argv[1:])

    # Show lines, words, bytes by default

    keys = list()
    if args.lines:
        keys.append("lines")
    if args.words:
        keys.append("words")
    if args.chars:
        keys.append("chars")
    if args.bytes:
        keys.append("bytes")
    if not keys:
        keys = "lines words bytes".split()

    paths = args.files if args.files else ["-"]

    if "-" in paths:
        prompt_tty_stdin()

    # Count each file

    exit_status = 0

    rows = list()
    total = WcCounts(0, 0, 0, 0)
    for path in paths:
        try:
            if path == "-":
                counts = wc_incoming(sys.stdin.buffer)
            else:
                with open(path, mode="rb") as incoming:
                    counts = wc_incoming(incoming)
        except OSError as exc:
            stderr_print(
                "wc.py: error: {}: {}: {}".format(
                    path, type(exc).__name__, exc.strerror
                )
            )
            exit_status = 1

            continue

        name = "" if (path == "-") else path
        rows.append((counts, name))
        total += counts

    if len(paths) > 1:
        rows.append((total, "total"))

    # Print each row

    for line in wc_format_rows(rows, keys=keys):
        print(line)

    sys.stdout.flush()

    return exit_status


def wc_incoming(incoming):
    """Count the Lines, Words, Chars, and Bytes of one Stream"""

    counts = WcCounts(0, 0, 0, 0)
    while True:
        line = incoming.readline()
        if not line:
            break

        counts += WcCounts(
            lines=line.count(b"\n"),
            words=len(line.split()),
            chars=len(line.decode("utf-8", errors="replace")),
            bytes=len(line),
        )

    return counts


def wc_format_rows(rows, keys):
    """Right-justify the chosen Counts into Columns of one width, and add the Names"""

    ints = list(getattr(counts, key) for (counts, _) in rows for key in keys)
    width = max(len(str(_)) for _ in ints) if ints else 1

    lines = list()
    for (counts, name) in rows:
        columns = list(str(getattr(counts, key)).rjust(width) for key in keys)
        line = " ".join(columns)
        if name:
            line += " " + name

        lines.append(line)

    return lines


#
# Define some Python idioms
#


# deffed in many files  # missing from docs.python.org
def prompt_tty_stdin():
    if sys.stdin.isatty():
        stderr_print("Press ⌃D EOF to quit")


# deffed in many files  # missing from docs.python.org
def stderr_print(*args, **kwargs):
    sys.stdout.flush()
    print(*args, **kwargs, file=sys.stderr)
    sys.stderr.flush()  # esp. when kwargs["end"] != "\n"


# deffed in many files  # missing from docs.python.org
class BrokenPipeErrorSink(contextlib.ContextDecorator):
    """Cut unhandled BrokenPipeError down to sys.exit(1)"""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        (exc_type, exc, exc_traceback) = exc_info
        if isinstance(exc, BrokenPipeError):  # catch this one

            null_fileno = os.open(os.devnull, flags=os.O_WRONLY)
            os.dup2(null_fileno, sys.stdout.fileno())  # avoid the next one

            sys.exit(1)


if __name__ == "__main__":
    with BrokenPipeErrorSink():
        sys.exit(main(sys.argv))
