import io

import pytest

from chainkeeper.term2 import Attr, AutomationFriendlyTerminal, Color, stderr, stdout


class TtyBuffer(io.StringIO):
    def isatty(self):
        return True


class BrokenTty(TtyBuffer):
    def write(self, data):
        raise OSError("broken")


def test_non_tty_gets_no_controls():
    buf = io.StringIO()
    term = AutomationFriendlyTerminal(buf, "xterm")
    term.fg(Color.RED)
    term.bg(Color.BLUE)
    term.attr(Attr.BOLD)
    term.reset()
    term.cursor_up()
    assert buf.getvalue() == ""


def test_tty_foreground_colour():
    buf = TtyBuffer()
    AutomationFriendlyTerminal(buf, "xterm").fg(Color.RED)
    assert buf.getvalue() == "\x1b[31m"


def test_no_terminfo_swallows_everything():
    buf = TtyBuffer()
    term = AutomationFriendlyTerminal(buf, None)
    term.fg(Color.RED)
    term.bg(Color.GREEN)
    term.attr(Attr.BOLD)
    term.attr(Attr.UNDERLINE)
    term.reset()
    term.cursor_up()
    term.delete_line()
    term.carriage_return()
    assert buf.getvalue() == ""
    assert term.supports_color() is False
    assert term.supports_reset() is False
    assert term.supports_attr(Attr.BOLD) is False


def test_capable_terminal_reports_support():
    term = AutomationFriendlyTerminal(TtyBuffer(), "xterm")
    assert term.supports_color() is True
    assert term.supports_reset() is True
    assert term.supports_attr(Attr.BOLD) is True


def test_delete_line_ignores_tty_check():
    buf = io.StringIO()
    AutomationFriendlyTerminal(buf, "xterm").delete_line()
    assert buf.getvalue() == "\x1b[K"


def test_carriage_return_same_on_tty_and_not():
    plain, tty = io.StringIO(), TtyBuffer()
    AutomationFriendlyTerminal(plain, "xterm").carriage_return()
    AutomationFriendlyTerminal(tty, "xterm").carriage_return()
    assert plain.getvalue() == tty.getvalue()
    assert len(tty.getvalue()) > 0


def test_colour_out_of_range_is_swallowed():
    buf = TtyBuffer()
    AutomationFriendlyTerminal(buf, "xterm").fg(200)
    assert buf.getvalue() == ""


def test_extended_colour_on_256_colour_terminal():
    buf = TtyBuffer()
    AutomationFriendlyTerminal(buf, "xterm-256color").fg(200)
    assert "200" in buf.getvalue()


def test_bright_colours_fold_on_eight_colour_terminal():
    bright, normal = TtyBuffer(), TtyBuffer()
    AutomationFriendlyTerminal(bright, "xterm").fg(Color.BRIGHT_RED)
    AutomationFriendlyTerminal(normal, "xterm").fg(Color.RED)
    assert bright.getvalue() == normal.getvalue()


def test_bold_on_dumb_terminal_is_swallowed():
    buf = TtyBuffer()
    term = AutomationFriendlyTerminal(buf, "dumb")
    term.attr(Attr.BOLD)
    assert buf.getvalue() == ""
    assert term.supports_color() is False


def test_write_passes_through():
    buf = io.StringIO()
    term = AutomationFriendlyTerminal(buf, None)
    assert term.write("hello") == 5
    term.flush()
    assert buf.getvalue() == "hello"


def test_io_errors_propagate():
    term = AutomationFriendlyTerminal(BrokenTty(), "xterm")
    with pytest.raises(OSError):
        term.fg(Color.RED)


def test_stdout_writes_to_sys_stdout(capsys):
    term = stdout()
    term.write("hi")
    term.flush()
    assert capsys.readouterr().out == "hi"


def test_stderr_writes_to_sys_stderr(capsys):
    term = stderr()
    term.write("oops")
    term.flush()
    assert capsys.readouterr().err == "oops"