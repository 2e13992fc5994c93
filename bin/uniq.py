#!/usr/bin/env python3

r"""
usage: uniq.py [-h] [-c] [IN_FILE] [OUT_FILE]

drop each line that repeats the line before it

positional arguments:
  IN_FILE      a file to read (default: stdin)
  OUT_FILE     a file to write (default: stdout)

options:
  -h, --help   show this help message and exit
  -c, --count  lead each line with how many times it came in a row

quirks:
  takes a last line without a line-feed as equal to the same line with a line-feed
  ends each line of output with a line-feed, even when the last line of input doesn't

unsurprising quirks:
  prompts for stdin, like mac bash "grep -R .", unlike bash "uniq"
  takes file "-" as meaning stdin, like bash "uniq -"
  drops only repeats in a row, so often called after 'sort', like bash "uniq"

examples:
  printf 'a\na\nb\na\n' |uniq.py
  printf 'a\na\nb\na\n' |uniq.py -c
  sort cat.py |uniq.py -c |sort -n |tail
"""


import contextlib
import itertools
import os
import sys

import argdoc


def main(argv):
    """Run from the Command Line"""

    args = argdoc.parse_args(argv[1:])

    in_path = args.in_file if args.in_file else "-"
    out_path = args.out_file

    if in_path == "-":
        prompt_tty_stdin()

    try:
        with open_readable(in_path) as incoming:
            with open_writable(out_path) as outgoing:
                uniq_incoming(incoming, outgoing=outgoing, count=args.count)
    except BrokenPipeError:
        raise
    except OSError as exc:
        stderr_print(
            "uniq.py: error: {}: {}: {}".format(
                exc.filename, type(exc).__name__, exc.strerror
            )
        )

        return 1

    return 0


def open_readable(path):
    """Open a File to read Bytes from, else borrow Stdin"""

    if path == "-":
        return contextlib.nullcontext(sys.stdin.buffer)

    return open(path, mode="rb")


def open_writable(path):
    """Open a File to write Bytes to, else borrow Stdout"""

    if path is None:
        return contextlib.nullcontext(sys.stdout.buffer)

    return open(path, mode="wb")


def uniq_incoming(incoming, outgoing, count):
    """Copy out the first of each run of equal lines, and maybe its count"""

    lines = iter(incoming.readline, b"")
    for (key, group) in itertools.groupby(lines, key=uniq_key):
        if count:
            repeats = sum(1 for _ in group)
            outgoing.write("{:7} ".format(repeats).encode())

        outgoing.write(key + b"\n")

    outgoing.flush()


def uniq_key(line):
    """Compare Lines without their line-feeds"""

    if line.endswith(b"\n"):
        return line[: -len(b"\n")]

    return line


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
