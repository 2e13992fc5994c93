#!/usr/bin/env python3

r"""
usage: cat.py [-h] [-b] [-E] [-n] [-s] [FILE ...]

copy each line of input bytes to output (as if "cat"enating them)

positional arguments:
  FILE                  a file to copy out (default: stdin)

options:
  -h, --help            show this help message and exit
  -b, --number-nonblank
                        number each line of output that isn't empty, overriding -n
  -E, --show-ends       show each "\n" line-feed as "$\n"
  -n, --number          number each line of output
  -s, --squeeze-blank   show each run of empty lines as just one empty line

quirks:
  numbers lines across all the files, not from 1 again at each file
  leaves the last line without a line-feed, when it ends without one
  reports each file it can't read, but then goes on to the next file

unsurprising quirks:
  prompts for stdin, like mac bash "grep -R .", unlike bash "cat -" and "cat"
  prints a hard b"\x09" tab after each line number, via "{:6}\t", same as bash "cat"

examples:
  cat.py -  # copy out each line of input
  echo a b c |tr ' ' '\n' |cat.py -n  # number each line
  printf 'a\n\n\n\nb\n' |cat.py -s  # squeeze the empty lines
  printf 'a\n\nb\n' |cat.py -bE  # number only the non-empty lines, and show their ends
"""


import argparse
import contextlib
import os
import sys

import argdoc


def main(argv):
    """Run from the Command Line"""

    args = argdoc.parse_args(argv[1:])

    paths = args.files if args.files else ["-"]

    # Catenate each binary (or text) file

    if "-" in paths:
        prompt_tty_stdin()

    state = argparse.Namespace(line_index=0, above_blank=False)

    exit_status = 0
    for path in paths:
        try:
            if path == "-":
                cat_incoming(sys.stdin.buffer, args=args, state=state)
            else:
                with open(path, mode="rb") as incoming:
                    cat_incoming(incoming, args=args, state=state)
        except BrokenPipeError:
            raise
        except OSError as exc:
            stderr_print(
                "cat.py: error: {}: {}: {}".format(
                    path, type(exc).__name__, exc.strerror
                )
            )
            exit_status = 1

    sys.stdout.flush()

    return exit_status


def cat_incoming(incoming, args, state):
    """Copy out some form of each line as it arrives"""

    stdout = sys.stdout.buffer

    while True:
        line = incoming.readline()
        if not line:

            break

        blank = line == b"\n"

        # Squeeze each run of empty lines down to its first

        if args.squeeze_blank:
            if blank and state.above_blank:

                continue

        state.above_blank = blank

        # Number the line, if numbering

        if args.number_nonblank:
            if not blank:
                state.line_index += 1
                stdout.write("{:6}\t".format(state.line_index).encode())
        elif args.number:
            state.line_index += 1
            stdout.write("{:6}\t".format(state.line_index).encode())

        # Show the end of the line, if showing ends

        if args.show_ends and line.endswith(b"\n"):
            line = line[: -len(b"\n")] + b"$\n"

        stdout.write(line)


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
    """Cut unhandled BrokenPipeError down to sys.exit(1)

    More narrowly than:  signal.signal(signal.SIGPIPE, handler=signal.SIG_DFL)
    As per https://docs.python.org/3/library/signal.html#note-on-sigpipe
    """

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
