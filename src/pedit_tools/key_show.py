#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""Print the code of each key pressed until 'q' is pressed."""

from __future__ import annotations

import argparse
import sys
import termios
import tty
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, TextIO

QUIT_KEY = "q"


@contextmanager
def raw_mode(stream: TextIO) -> Iterator[None]:
    fd = stream.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def read_char(stream: Optional[TextIO] = None) -> str:
    """Read a single key from ``stream`` with the terminal in raw mode.

    The terminal is back in its normal mode by the time this returns or
    raises.
    """
    if stream is None:
        stream = sys.stdin
    with raw_mode(stream):
        char = stream.read(1)
    if not char:
        raise EOFError("stdin closed")
    return char


def describe_key(char: str) -> str:
    code = ord(char)
    return f"{code} <{char if code >= 32 else '-'}>"


def inspect_keys(read: Callable[[], str], out: Optional[TextIO] = None) -> None:
    if out is None:
        out = sys.stdout
    while True:
        char = read()
        if char == QUIT_KEY:
            break
        print(describe_key(char), file=out)
    print(file=out)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.parse_args(argv)
    inspect_keys(read_char)
    return 0


if __name__ == "__main__":  # pragma: no cover - interactive
    sys.exit(main(sys.argv[1:]))
