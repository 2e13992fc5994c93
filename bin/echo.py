#!/usr/bin/env python3

r"""
usage: echo.py [-h] [-n] [-s] [-e] [-E] [WORD ...]

print some words

positional arguments:
  WORD        a word to print

options:
  -h, --help  show this help message and exit
  -n          print just the words, don't add an end-of-line
  -s          print the words without a space between them
  -e          take each backslash escape, such as "\t" or "\n" or "\c", as meaning a char
  -E          take each backslash as just a backslash (default)

quirks:
  understands "-n" like bash or zsh echo, unlike sh echo
  ends all output at the first "\c", even the end-of-line, when given -e

examples:
  echo.py 'Hello, Echo World!'
  echo.py -n 'Hello, ' && echo.py 'World'
  echo.py -s a b c
  echo.py -e 'a\tb\nc'
"""


import re
import sys

import argdoc


ESCAPES = {
    "\\": "\\",
    "a": "\a",
    "b": "\b",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


def main(argv):
    """Run from the Command Line"""

    args = argdoc.parse_args(argv[1:])

    if args.e and args.E:
        stderr_print("echo.py: error: argument -e: not allowed with argument -E")

        return 2  # exit 2 to reject usage

    sep = "" if args.s else " "
    line = sep.join(args.words)
    end = "" if args.n else "\n"

    if args.e:
        (line, stopped) = echo_unescape(line)
        if stopped:
            end = ""

    sys.stdout.write(line + end)
    sys.stdout.flush()

    return 0


def echo_unescape(chars):
    """Take each Backslash Escape as meaning a Char, and say if '\\c' stopped early"""

    pattern = r"\\(0[0-7]{0,3}|x[0-9A-Fa-f]{1,2}|.)"

    unescaped = ""
    index = 0
    for match in re.finditer(pattern, string=chars, flags=re.DOTALL):
        unescaped += chars[index : match.start()]
        index = match.end()

        escape = match.group(1)
        if escape == "c":

            return (unescaped, True)

        if escape.startswith("0"):
            unescaped += chr(int(escape, base=8))
        elif escape.startswith("x"):
            unescaped += chr(int(escape[len("x") :], base=16))
        elif escape in ESCAPES.keys():
            unescaped += ESCAPES[escape]
        else:
            unescaped += match.group(0)  # keep the unknown escape as it came

    unescaped += chars[index:]

    return (unescaped, False)


# deffed in many files  # missing from docs.python.org
def stderr_print(*args, **kwargs):
    sys.stdout.flush()
    print(*args, **kwargs, file=sys.stderr)
    sys.stderr.flush()  # esp. when kwargs["end"] != "\n"


if __name__ == "__main__":
    sys.exit(main(sys.argv))
