import sys
import types

import pytest

from workspace_indicator.exceptions import HotkeyError
from workspace_indicator.hotkey import ReloadHotkeyListener, parse_hotkey


@pytest.mark.parametrize("raw, expected", [
    ("cmd+alt+r", "<cmd>+<alt>+r"),
    ("Ctrl + Shift + F5", "<ctrl>+<shift>+f5"),
    ("option+control+space", "<alt>+<ctrl>+<space>"),
    ("f8", "f8"),
])
def test_parse_hotkey(raw, expected):
    assert parse_hotkey(raw) == expected


class FakeGlobalHotKeys:
    instances = []

    def __init__(self, hotkeys):
        self.hotkeys = hotkeys
        self.started = False
        self.stopped = False
        FakeGlobalHotKeys.instances.append(self)

    def start(self):
        self.started = True

    def join(self):
        pass

    def stop(self):
        self.stopped = True


@pytest.fixture
def fake_pynput(monkeypatch):
    FakeGlobalHotKeys.instances = []
    keyboard = types.SimpleNamespace(GlobalHotKeys=FakeGlobalHotKeys)
    pynput = types.SimpleNamespace(keyboard=keyboard)
    monkeypatch.setitem(sys.modules, "pynput", pynput)
    monkeypatch.setitem(sys.modules, "pynput.keyboard", keyboard)
    return FakeGlobalHotKeys


def test_hotkey_triggers_callback(fake_pynput):
    calls = []
    listener = ReloadHotkeyListener(lambda: calls.append("reload"), "cmd+alt+r")

    listener.start()
    registered = fake_pynput.instances[-1]
    registered.hotkeys["<cmd>+<alt>+r"]()
    listener.stop()

    assert calls == ["reload"]
    assert registered.stopped
    assert not listener.running


def test_failing_callback_is_contained(fake_pynput):
    def broken():
        raise RuntimeError("reload failed")

    listener = ReloadHotkeyListener(broken, "cmd+alt+r")
    listener.start()
    fake_pynput.instances[-1].hotkeys["<cmd>+<alt>+r"]()
    listener.stop()


def test_registration_failure_raises_hotkey_error(monkeypatch):
    def refuse(hotkeys):
        raise ValueError("bad key")

    keyboard = types.SimpleNamespace(GlobalHotKeys=refuse)
    monkeypatch.setitem(sys.modules, "pynput", types.SimpleNamespace(keyboard=keyboard))

    listener = ReloadHotkeyListener(lambda: None, "cmd+alt+r")
    with pytest.raises(HotkeyError, match="Accessibility"):
        listener.start()
    assert not listener.running
