#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

"""Generate the C++ test harness from the test template and run it via make."""

from __future__ import annotations

import argparse
import os
import re
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

DEFAULT_TEMPLATE = Path(os.environ.get("RUNTESTS_TEMPLATE", "tests/test.cpp"))
DEFAULT_OUTPUT = Path(os.environ.get("RUNTESTS_OUTPUT", "test.cpp"))
DEFAULT_MAKE_BIN = os.environ.get("MAKE", "make")
DEFAULT_ONLY = os.environ.get("ONLY")

BUILD_TARGETS = ("clean", "runtests")
HEADER = "// AUTO GENERATED FILE. DO NOT EDIT.\n\n"
TEST_PREFIX = "test_"
IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
ENCODING = "utf-8"


class CommandRunner(Protocol):
    def run(self, args: Sequence[str]) -> int:
        ...


class SubprocessRunner:
    """Run commands in the foreground, sharing this process's stdio."""

    def __init__(self, base_cmd: Sequence[str]):
        self.base_cmd = list(base_cmd)

    def run(self, args: Sequence[str]) -> int:
        return subprocess.run(self.base_cmd + list(args), check=False).returncode


def parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--template", type=Path, default=DEFAULT_TEMPLATE, help="Test template to scan")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="Generated harness path")
    parser.add_argument("--make-bin", default=DEFAULT_MAKE_BIN, help="Build tool command")
    parser.add_argument("--only", default=DEFAULT_ONLY, help="Comma-separated test functions to run")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--no-build", action="store_true", help="Write the harness without invoking make")
    group.add_argument("--list", action="store_true", help="Print the selected test functions and exit")
    return parser.parse_args(argv)


def load_template(path: Path) -> str:
    if not path.is_file():
        raise FileNotFoundError(f"template not found: {path}")
    with path.open(encoding=ENCODING, errors="surrogateescape", newline="") as fh:
        return fh.read()


def parse_only(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    names = value.split(",")
    # Trailing separators add no names: "test_a," selects only test_a.
    while names and not names[-1]:
        names.pop()
    return names or None


def discover_tests(template: str) -> List[str]:
    """Return every identifier in ``template`` that starts with ``test_``.

    Names come back in the order they appear. A name that shows up twice is
    listed twice.
    """
    return [
        token
        for token in IDENTIFIER.findall(template)
        if token.startswith(TEST_PREFIX) and len(token) > len(TEST_PREFIX)
    ]


def select_tests(template: str, only: Optional[List[str]] = None) -> List[str]:
    # Explicit names are trusted as given, even if the template lacks them.
    if only:
        return list(only)
    return discover_tests(template)


def render_harness(template: str, tests: Sequence[str]) -> str:
    parts = [HEADER, template, "\nint main() {\n"]
    parts.extend(f"  {name}();\n" for name in tests)
    parts.append("  cout << endl;\n}\n")
    return "".join(parts)


def write_harness(path: Path, content: str) -> None:
    with path.open("w", encoding=ENCODING, errors="surrogateescape", newline="") as fh:
        fh.write(content)


def run_build(runner: CommandRunner, targets: Sequence[str] = BUILD_TARGETS) -> int:
    status = 0
    for target in targets:
        status = runner.run([target])
        if status != 0:
            print(f"[runtests] '{target}' exited with status {status}", file=sys.stderr)
            return status
    return status


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        template = load_template(args.template)
    except OSError as exc:
        print(f"[runtests] {exc}", file=sys.stderr)
        return 1

    tests = select_tests(template, parse_only(args.only))

    if args.list:
        for name in tests:
            print(name)
        return 0

    try:
        write_harness(args.output, render_harness(template, tests))
    except OSError as exc:
        print(f"[runtests] cannot write {args.output}: {exc.strerror or exc}", file=sys.stderr)
        return 1

    if args.no_build:
        print(f"[runtests] wrote {args.output} ({len(tests)} tests)", file=sys.stderr)
        return 0

    make_cmd = args.make_bin.split() or ["make"]
    try:
        return run_build(SubprocessRunner(make_cmd))
    except OSError as exc:
        print(f"[runtests] cannot start {make_cmd[0]}: {exc.strerror or exc}", file=sys.stderr)
        return 127


if __name__ == "__main__":  # pragma: no cover - exercised via callers
    sys.exit(main(sys.argv[1:]))
