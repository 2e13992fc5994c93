#!/usr/bin/env python3

r"""
usage: head.py [-h] [-c COUNT] [-n COUNT] [-q] [--silent] [-v] [-z] [FILE ...]

show just the leading bytes or lines of each file

positional arguments:
  FILE                  a file to copy from (default: stdin)

options:
  -h, --help            show this help message and exit
  -c COUNT, --bytes COUNT
                        how many leading bytes to show, or with a leading '-' how many trailing bytes to drop
  -n COUNT, --lines COUNT
                        how many leading lines to show (default: 10), or with a leading '-' how many trailing lines to drop
  -q, --quiet           never show the '==> FILE <==' banners
  --silent              same as --quiet
  -v, --verbose         always show the '==> FILE <==' banners
  -z, --zero-terminated
                        end each line with a nul b"\x00", not with a line-feed b"\n"

quirks:
  takes a COUNT led by '+' as meaning the same as a COUNT led by no sign
  counts the last line of a file as a line, even when it doesn't end with a line-feed
  copies the last line without adding a line-feed, when the last line ends without one
  exits 2 to reject '-c' with '-n', or '-q' with '-v', or any COUNT not '[-]NUM'

unsurprising quirks:
  prompts for stdin, like mac bash "grep -R .", unlike bash "head"
  takes file "-" as meaning stdin, like linux "head -", unlike mac "head -"
  shows a banner before each file when given more than one file, like bash "head"
  reports each file it can't read, but then goes on to the next file, like bash "head"

examples:
  head.py /dev/null
  head.py head.py
  head.py -n 5 head.py
  head.py -n -5 head.py  # all but the last 5 lines
  head.py -c 5 head.py
  head.py -c -1 head.py  # all but the last byte
  head.py -v head.py  # banner even for one file
  head.py head.py /dev/null  # banner for each file
  yes |head.py -n 3  # stop reading early
"""


import codecs
import collections
import contextlib
import os
import re
import sys

import argdoc


BYTES = "bytes"
LINES = "lines"

ZERO = "0"
POSITIVE = "+"
NEGATIVE = "-"

DEFAULT_COUNT = "10"

CHUNK_SIZE = 64 * 1024

STDIN_NAME = "standard input"  # the banner name of the "-" file


def main(argv):
    """Run from the Command Line"""

    args = argdoc.parse_args(argv[1:])

    # Reject conflicting options

    if (args.bytes is not None) and (args.lines is not None):
        stderr_print(
            "head.py: error: argument -c/--bytes: not allowed with argument -n/--lines"
        )

        return 2  # exit 2 to reject usage

    quiet = args.quiet or args.silent
    if quiet and args.verbose:
        stderr_print(
            "head.py: error: argument -q/--quiet: not allowed with argument -v/--verbose"
        )

        return 2  # exit 2 to reject usage

    # Parse the Count, before touching any file

    try:
        if args.bytes is not None:
            policy = policy_from_count(BYTES, count=args.bytes)
        else:
            lines = DEFAULT_COUNT if (args.lines is None) else args.lines
            policy = policy_from_count(LINES, count=lines)
    except InvalidCount as exc:
        stderr_print("head.py: error: {}".format(exc))

        return 2  # exit 2 to reject usage

    # Show the Bytes or Lines of each file

    paths = args.files if args.files else ["-"]
    banners = decide_banners(
        verbose=args.verbose, quiet=quiet, source_count=len(paths)
    )
    sep = b"\x00" if args.zero_terminated else b"\n"

    if "-" in paths:
        prompt_tty_stdin()

    exit_status = run(policy, banners=banners, paths=paths, sep=sep)

    sys.stdout.flush()

    return exit_status


#
# Parse the Count into a Policy
#


class InvalidCount(ValueError):
    """Reject a Count that isn't a '[-]NUM' inside the range of lengths"""

    def __init__(self, unit, token):
        super(InvalidCount, self).__init__(
            "invalid number of {}: {!r}".format(unit, token)
        )
        self.unit = unit
        self.token = token


class ExtractionPolicy(
    collections.namedtuple("ExtractionPolicy", "unit magnitude sign".split())
):
    """Say which Bytes or Lines to take from each Source"""


def policy_from_count(unit, count):
    """Parse a '[-]NUM' Count into an ExtractionPolicy, else raise InvalidCount"""

    assert unit in (BYTES, LINES), repr(unit)

    sign = POSITIVE
    digits = count
    if count.startswith("-"):
        sign = NEGATIVE
        digits = count[len("-") :]
    elif count.startswith("+"):
        digits = count[len("+") :]

    if not re.fullmatch(r"[0-9]+", string=digits):
        raise InvalidCount(unit, token=count)

    magnitude = int(digits)
    if magnitude > sys.maxsize:
        raise InvalidCount(unit, token=count)

    if magnitude == 0:
        sign = ZERO  # even for "-0"

    policy = ExtractionPolicy(unit, magnitude=magnitude, sign=sign)

    return policy


def decide_banners(verbose, quiet, source_count):
    """Choose to show a banner before each Source, or not"""

    if verbose:
        return True
    if quiet:
        return False

    return source_count > 1


#
# Extract the chosen Bytes or Lines from one Source
#


def extract(policy, stream, sep=b"\n"):
    """Take the chosen Bytes or Lines of one Stream, all at once"""

    chars = b"".join(iter_extract(policy, stream=stream, sep=sep))

    return chars


def iter_extract(policy, stream, sep=b"\n"):
    """Yield the chosen Bytes or Lines of one Stream, as soon as they're known"""

    strategy = STRATEGIES[policy.sign]
    for chunk in strategy(policy, stream=stream, sep=sep):
        yield chunk


def take_nothing(policy, stream, sep):
    """Yield nothing, and never read the Stream"""

    return iter(())


def take_leading(policy, stream, sep):
    """Yield the leading Bytes or Lines, and read no further than needed"""

    if policy.unit == BYTES:
        more = policy.magnitude
        while more:
            chunk = read_chunk(stream, size=min(more, CHUNK_SIZE))
            if not chunk:
                break

            more -= len(chunk)
            yield chunk

        return

    lines = iter_lines(stream, sep=sep)
    for _ in range(policy.magnitude):
        line = next(lines, None)
        if line is None:
            break

        yield line


def drop_trailing(policy, stream, sep):
    """Yield all but the trailing Bytes or Lines, after reading to the end"""

    # Hold back a window of the last so many Bytes or Lines, till the end proves them last

    if policy.unit == BYTES:
        chunks = collections.deque()
        held = 0  # the count of Bytes in the Chunks
        while True:
            chunk = read_chunk(stream, size=CHUNK_SIZE)
            if not chunk:
                break

            chunks.append(chunk)
            held += len(chunk)

            while (held - len(chunks[0])) >= policy.magnitude:
                leftmost = chunks.popleft()
                held -= len(leftmost)
                yield leftmost

            if held > policy.magnitude:
                cut = held - policy.magnitude  # slice only the Chunk that straddles
                yield chunks[0][:cut]
                chunks[0] = chunks[0][cut:]
                held -= cut

        return

    window = collections.deque()
    for line in iter_lines(stream, sep=sep):
        window.append(line)
        if len(window) > policy.magnitude:
            yield window.popleft()


STRATEGIES = {
    ZERO: take_nothing,
    POSITIVE: take_leading,
    NEGATIVE: drop_trailing,
}


def iter_lines(stream, sep=b"\n"):
    """Yield each Line of a Stream, each ended by Sep, except maybe the last"""

    if sep == b"\n":
        while True:
            line = read_line(stream)
            if not line:
                break

            yield line

        return

    held = list()  # the pieces of a Line begun but not yet ended
    while True:
        chunk = read_chunk(stream, size=CHUNK_SIZE, partial=True)
        if not chunk:
            break

        splits = chunk.split(sep)
        if len(splits) == 1:
            held.append(chunk)

            continue

        held.append(splits[0])
        yield b"".join(held) + sep

        for split in splits[1:-1]:
            yield split + sep

        held = [splits[-1]] if splits[-1] else list()

    if held:
        yield b"".join(held)  # the last Line, when it ends without Sep


def read_chunk(stream, size, partial=False):
    """Read some Bytes, else raise StreamReadError"""

    try:
        if partial and hasattr(stream, "read1"):
            chunk = stream.read1(size)  # don't block to fill the chunk
        else:
            chunk = stream.read(size)
    except OSError as exc:
        raise StreamReadError(stream_name(stream), cause=exc) from exc

    return chunk


def read_line(stream):
    """Read one Line ended by a line-feed, else the last Line, else raise StreamReadError"""

    try:
        line = stream.readline()
    except OSError as exc:
        raise StreamReadError(stream_name(stream), cause=exc) from exc

    return line


def stream_name(stream):
    """Name the Stream as a Source, when it came from a named File"""

    name = getattr(stream, "name", None)
    if not isinstance(name, str):
        return STDIN_NAME

    return name


#
# Run across each Source in order
#


class SourceError(Exception):
    """Say which Source failed, and why"""

    def __init__(self, name, cause):
        super(SourceError, self).__init__(name, cause)
        self.name = name
        self.cause = cause

    def __str__(self):
        strerror = getattr(self.cause, "strerror", None)
        return "{}: {}: {}".format(
            self.name, type(self.cause).__name__, strerror if strerror else self.cause
        )


class SourceOpenError(SourceError):
    """Say a Source could not be opened"""


class StreamReadError(SourceError):
    """Say an opened Source could not be read to its end"""


def open_source(path):
    """Open a File to read its Bytes, else Stdin for "-", else raise SourceOpenError"""

    if path == "-":
        return contextlib.nullcontext(sys.stdin.buffer)  # don't close Stdin

    try:
        incoming = open(path, mode="rb")
    except OSError as exc:
        raise SourceOpenError(path, cause=exc) from exc

    return incoming


def run(policy, banners, paths, sep=b"\n"):
    """Copy out the chosen Bytes or Lines of each Source, and return an exit status"""

    exit_status = 0

    bannered = False
    for path in paths:
        name = STDIN_NAME if (path == "-") else path
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

        try:
            with open_source(path) as incoming:

                if banners:
                    if bannered:
                        stdout_write_bytes(b"\n", decoder=decoder)
                    banner = "==> {} <==\n".format(name)
                    stdout_write_bytes(os.fsencode(banner), decoder=decoder)
                    bannered = True

                for chunk in iter_extract(policy, stream=incoming, sep=sep):
                    stdout_write_bytes(chunk, decoder=decoder)

        except SourceError as exc:
            exc.name = name
            stderr_print("head.py: error: {}".format(exc))
            exit_status = 1

        stdout_write_bytes(b"", decoder=decoder, final=True)

    return exit_status


def stdout_write_bytes(chars, decoder, final=False):
    """Write Bytes to Stdout, else decode them permissively when Stdout takes Str only

    Decode through one incremental Decoder per Source, so that a Char split
    across two Chunks decodes as one Char
    """

    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is not None:
        buffer.write(chars)
    else:
        sys.stdout.write(decoder.decode(chars, final=final))


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

    Test with large Stdout cut sharply, such as:  head.py -n 1000000 /dev/zero |head -c 1
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
