# SPDX-FileCopyrightText: 2025 Blackcat Informatics® Inc.
# SPDX-License-Identifier: MIT

import io

import pytest

from pedit_tools import key_show
from pedit_tools.key_show import describe_key, inspect_keys, read_char


class FakeTerminal:
    """Stands in for a tty: records mode switches made through termios/tty."""

    def __init__(self, keys, fail_read=False):
        self.keys = list(keys)
        self.fail_read = fail_read
        self.raw = False
        self.events = []

    def fileno(self):
        return 7

    def read(self, size):
        assert size == 1
        self.events.append(("read", self.raw))
        if self.fail_read:
            raise OSError(5, "Input/output error")
        return self.keys.pop(0) if self.keys else ""


@pytest.fixture
def terminal(monkeypatch):
    term = FakeTerminal([])

    def tcgetattr(fd):
        assert fd == 7
        return ["saved"]

    def setraw(fd):
        term.raw = True
        term.events.append("raw")

    def tcsetattr(fd, when, attrs):
        assert attrs == ["saved"]
        term.raw = False
        term.events.append("restore")

    monkeypatch.setattr(key_show.termios, "tcgetattr", tcgetattr)
    monkeypatch.setattr(key_show.termios, "tcsetattr", tcsetattr)
    monkeypatch.setattr(key_show.tty, "setraw", setraw)
    return term


def feed(*keys):
    it = iter(keys)
    return lambda: next(it)


def test_describe_printable_key():
    assert describe_key("A") == "65 <A>"
    assert describe_key(" ") == "32 < >"


def test_describe_control_key():
    assert describe_key("\t") == "9 <->"
    assert describe_key("\x1b") == "27 <->"


def test_quit_first_prints_only_blank_line():
    out = io.StringIO()
    inspect_keys(feed("q"), out)
    assert out.getvalue() == "\n"


def test_inspect_keys_until_quit():
    out = io.StringIO()
    inspect_keys(feed("A", "\t", "Q", "q", "never read"), out)
    assert out.getvalue() == "65 <A>\n9 <->\n81 <Q>\n\n"


def test_read_char_restores_mode(terminal):
    terminal.keys = ["x"]
    assert read_char(terminal) == "x"
    assert terminal.events == ["raw", ("read", True), "restore"]
    assert terminal.raw is False


def test_read_char_restores_mode_on_failure(terminal):
    terminal.fail_read = True
    with pytest.raises(OSError):
        read_char(terminal)
    assert terminal.events == ["raw", ("read", True), "restore"]
    assert terminal.raw is False


def test_read_char_eof(terminal):
    with pytest.raises(EOFError):
        read_char(terminal)
    assert terminal.raw is False


def test_inspect_keys_reads_through_raw_mode(terminal):
    terminal.keys = ["a", "q"]
    out = io.StringIO()
    inspect_keys(lambda: read_char(terminal), out)
    assert out.getvalue() == "97 <a>\n\n"
    assert terminal.events == [
        "raw", ("read", True), "restore",
        "raw", ("read", True), "restore",
    ]


def test_main_reads_until_quit(monkeypatch, capsys):
    keys = iter(["A", "q"])
    monkeypatch.setattr(key_show, "read_char", lambda: next(keys))

    assert key_show.main([]) == 0
    assert capsys.readouterr().out == "65 <A>\n\n"


def test_main_quit_immediately(monkeypatch, capsys):
    monkeypatch.setattr(key_show, "read_char", lambda: "q")

    assert key_show.main([]) == 0
    assert capsys.readouterr().out == "\n"
