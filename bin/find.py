#!/usr/bin/env python3

r"""
usage: find.py [-h] [--type TYPE] [--name NAME] [PATH ...]

print the path of each dir and file inside a dir

positional arguments:
  PATH         a dir to walk (default: .)

options:
  -h, --help   show this help message and exit
  --type TYPE  print only paths of these types, such as 'f' file, 'd' dir, or 'l' link
  --name NAME  print only paths whose last name matches this glob, such as '*.py'

quirks:
  takes '-type' and '-name' to mean '--type' and '--name', same as bash "find"
  takes a comma-separated list of types, such as 'f,l' to mean files and links
  walks the names inside each dir in sorted order, unlike bash "find"
  doesn't follow sym links, same as bash "find"
  reports each path it can't walk, but then goes on to the next path

examples:
  find.py ~/bin/
  find.py . -type f -name '*.py'
  find.py /dev/null  # device, not dir
"""


import contextlib
import fnmatch
import os
import signal
import sys

import argdoc


TYPES = "f d l".split()


def main(argv):
    """Run from the Command Line"""

    args = argdoc.parse_args(find_argv_upgrade(argv[1:]))

    types = args.type.split(",") if args.type else list()
    for type_ in types:
        if type_ not in TYPES:
            stderr_print(
                "find.py: error: argument --type: invalid choice: {!r} "
                "(choose from {})".format(type_, ", ".join(repr(_) for _ in TYPES))
            )

            return 2  # exit 2 to reject usage

    tops = args.paths if args.paths else ["."]

    try:
        exit_status = print_found_paths(tops, types=types, name=args.name)
    except KeyboardInterrupt:
        sys.exit(0x80 + signal.SIGINT)  # "128+n if terminated by signal n" <= man bash

    sys.stdout.flush()

    return exit_status


def find_argv_upgrade(argv):
    """Take the classic single-dash '-type' and '-name' as double-dash options"""

    alt_argv = list()
    for arg in argv:
        if arg in ("-type", "-name"):
            alt_argv.append("-" + arg)
        else:
            alt_argv.append(arg)

    return alt_argv


def print_found_paths(tops, types, name):
    """Print each path found inside each Top, and return an exit status"""

    exit_status = 0

    def onerror(exc):
        nonlocal exit_status
        stderr_print(
            "find.py: error: {}: {}: {}".format(
                exc.filename, type(exc).__name__, exc.strerror
            )
        )
        exit_status = 1

    for top in tops:
        if not os.path.lexists(top):
            onerror(FileNotFoundError(2, os.strerror(2), top))

            continue

        for path in os_walk_sorted_paths(top, onerror=onerror):
            if find_path_matches(path, types=types, name=name):
                print(path)

    return exit_status


def find_path_matches(path, types, name):
    """Say if the Path is of a chosen Type, and matches the chosen Name"""

    if types:
        if not any(path_is_type(path, type_=_) for _ in types):

            return False

    if name is not None:
        basename = os.path.basename(os.path.normpath(path))
        if not fnmatch.fnmatchcase(basename, name):

            return False

    return True


def path_is_type(path, type_):
    """Say if the Path is a 'f' file, 'd' dir, or 'l' link, without following links"""

    if type_ == "l":
        return os.path.islink(path)

    if os.path.islink(path):
        return False

    if type_ == "d":
        return os.path.isdir(path)

    assert type_ == "f", repr(type_)

    return os.path.isfile(path)


# deffed in many files  # missing from docs.python.org
def os_walk_sorted_paths(top, onerror):
    """Walk the dirs and files in a top dir, yielding each path, dir before contents"""

    yield top

    if os.path.islink(top) or not os.path.isdir(top):

        return

    try:
        names = sorted(os.listdir(top))
    except OSError as exc:
        onerror(exc)

        return

    for name in names:
        path = os.path.join(top, name)
        for found in os_walk_sorted_paths(path, onerror=onerror):
            yield found


#
# Define some Python idioms
#


# deffed in many files  # missing from docs.python.org
def stderr_print(*args, **kwargs):
    sys.stdout.flush()
    print(*args, **kwargs, file=sys.stderr)
    sys.stderr.flush()  # esp. when kwargs["end"] != "\n"


# deffed in many files  # missing from docs.python.org
class BrokenPipeErrorSink(contextlib.ContextDecorator):
    """Cut unhandled BrokenPipeError down to sys.exit(1)

    Test with large Stdout cut sharply, such as:  find.py ~ |head
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
