"""Test raw mode switching and terminal geometry."""

import termios
from unittest.mock import MagicMock, patch, PropertyMock

import pytest
from termed.errors import TerminalModeError, WindowSizeError
from termed.terminal import RawModeController, TerminalInterface, make_raw


class FakeTermios:
    """In-memory attribute store standing in for a tty."""
    
    def __init__(self):
        cc = [0] * 32
        cc[termios.VMIN] = 0
        cc[termios.VTIME] = 5
        self.attrs = {
            0: [
                termios.ICRNL | termios.IXON | termios.BRKINT,
                termios.OPOST,
                termios.CS7 | termios.PARENB,
                termios.ECHO | termios.ICANON | termios.ISIG | termios.IEXTEN,
                38400,
                38400,
                cc,
            ]
        }
        self.set_calls = []
        
    def tcgetattr(self, fd):
        attrs = self.attrs[fd]
        return list(attrs[:6]) + [list(attrs[6])]
    
    def tcsetattr(self, fd, when, attrs):
        self.set_calls.append((fd, when))
        self.attrs[fd] = list(attrs[:6]) + [list(attrs[6])]


@pytest.fixture
def fake_tty():
    fake = FakeTermios()
    with patch('termed.terminal.os.isatty', return_value=True), \
         patch('termed.terminal.termios.tcgetattr', side_effect=fake.tcgetattr), \
         patch('termed.terminal.termios.tcsetattr', side_effect=fake.tcsetattr):
        yield fake


def test_make_raw_clears_canonical_flags():
    original = FakeTermios().tcgetattr(0)
    raw = make_raw(original)
    assert raw[3] & termios.ECHO == 0
    assert raw[3] & termios.ICANON == 0
    assert raw[3] & termios.ISIG == 0
    assert raw[3] & termios.IEXTEN == 0
    assert raw[0] & termios.IXON == 0
    assert raw[0] & termios.ICRNL == 0
    assert raw[1] & termios.OPOST == 0
    assert raw[2] & termios.CSIZE == termios.CS8
    assert raw[6][termios.VMIN] == 1
    assert raw[6][termios.VTIME] == 0
    # The input is left alone
    assert original[3] & termios.ECHO


def test_enable_then_restore_round_trip(fake_tty):
    before = fake_tty.tcgetattr(0)
    controller = RawModeController(fd=0)
    saved = controller.enable()
    assert controller.active
    assert fake_tty.attrs[0] != before
    assert fake_tty.attrs[0][3] & termios.ECHO == 0
    controller.restore(saved)
    assert not controller.active
    assert fake_tty.attrs[0] == before


def test_restore_only_applies_once(fake_tty):
    controller = RawModeController(fd=0)
    saved = controller.enable()
    controller.restore(saved)
    controller.restore(saved)
    assert len(fake_tty.set_calls) == 2


def test_enable_twice_is_refused(fake_tty):
    controller = RawModeController(fd=0)
    controller.enable()
    with pytest.raises(TerminalModeError):
        controller.enable()


def test_raw_mode_context_restores_on_error(fake_tty):
    before = fake_tty.tcgetattr(0)
    controller = RawModeController(fd=0)
    with pytest.raises(RuntimeError):
        with controller.raw_mode():
            raise RuntimeError("boom")
    assert fake_tty.attrs[0] == before
    assert not controller.active


def test_enable_without_tty():
    with patch('termed.terminal.os.isatty', return_value=False):
        with pytest.raises(TerminalModeError) as excinfo:
            RawModeController(fd=0).enable()
    assert 'enable raw mode' in str(excinfo.value)


def test_enable_syscall_failure():
    with patch('termed.terminal.os.isatty', return_value=True), \
         patch('termed.terminal.termios.tcgetattr', side_effect=termios.error(25, 'Inappropriate ioctl')):
        controller = RawModeController(fd=0)
        with pytest.raises(TerminalModeError):
            controller.enable()
        assert not controller.active


def test_restore_failure_raises(fake_tty):
    controller = RawModeController(fd=0)
    saved = controller.enable()
    with patch('termed.terminal.termios.tcsetattr', side_effect=termios.error(5, 'EIO')):
        with pytest.raises(TerminalModeError) as excinfo:
            controller.restore(saved)
    assert excinfo.value.operation == 'restore terminal mode'


def make_interface(width=80, height=24, is_a_tty=True):
    term = MagicMock()
    term.width = width
    term.height = height
    term.is_a_tty = is_a_tty
    return TerminalInterface(terminal=term, output=MagicMock())


def test_window_size():
    assert make_interface(132, 43).get_window_size() == (132, 43)


def test_window_size_without_tty():
    with pytest.raises(WindowSizeError):
        make_interface(is_a_tty=False).get_window_size()


def test_window_size_zero():
    with pytest.raises(WindowSizeError):
        make_interface(width=0).get_window_size()


def test_window_size_query_failure():
    term = MagicMock()
    term.is_a_tty = True
    type(term).width = PropertyMock(side_effect=OSError("ioctl failed"))
    term.height = 24
    interface = TerminalInterface(terminal=term, output=MagicMock())
    with pytest.raises(WindowSizeError):
        interface.get_window_size()


def test_write_goes_straight_out():
    interface = make_interface()
    interface.write(b"\x1b[2J")
    interface.output.write.assert_called_once_with(b"\x1b[2J")
    interface.output.flush.assert_called_once()
