"""Global hotkey that reloads the workspace mapping file."""

import logging
import threading
from typing import Callable, Optional
from .config import RELOAD_HOTKEY
from .exceptions import HotkeyError

logger = logging.getLogger(__name__)

# Map common key names to pynput format
_KEY_MAP = {
    'cmd': '<cmd>',
    'ctrl': '<ctrl>',
    'control': '<ctrl>',
    'alt': '<alt>',
    'option': '<alt>',
    'shift': '<shift>',
    'space': '<space>',
}


def parse_hotkey(hotkey_str: str) -> str:
    """
    Parse hotkey string into pynput format.

    Examples:
        'cmd+alt+r' -> '<cmd>+<alt>+r'
        'ctrl+shift+f5' -> '<ctrl>+<shift>+f5'
    """
    parsed = []
    for part in hotkey_str.lower().split('+'):
        part = part.strip()
        if not part:
            continue
        parsed.append(_KEY_MAP.get(part, part))
    return '+'.join(parsed)


class ReloadHotkeyListener:
    """Global hotkey listener that works from any application."""

    def __init__(self, on_trigger: Callable[[], None], hotkey: Optional[str] = None):
        """
        Initialize hotkey listener.

        Args:
            on_trigger: Called (on the listener thread) each time the hotkey fires
            hotkey: Hotkey combination (e.g., 'cmd+alt+r'); defaults to config value
        """
        self.hotkey = hotkey or RELOAD_HOTKEY
        self._on_trigger = on_trigger
        self.listener = None
        self.running = False

    def _on_hotkey_press(self) -> None:
        logger.info("Reload hotkey pressed")
        try:
            self._on_trigger()
        except Exception as e:
            logger.warning("Reload hotkey handler failed: %s", e)

    def start(self) -> None:
        """
        Start listening for the hotkey in a background thread.

        Raises:
            HotkeyError: If the hotkey cannot be registered
        """
        if self.running:
            return

        try:
            from pynput import keyboard
            self.listener = keyboard.GlobalHotKeys({
                parse_hotkey(self.hotkey): self._on_hotkey_press
            })
        except Exception as e:
            raise HotkeyError(
                f"Failed to register hotkey '{self.hotkey}': {e}\n"
                "On macOS, you may need to grant Accessibility permissions:\n"
                "System Settings > Privacy & Security > Accessibility > Add Terminal"
            ) from e

        self.running = True

        def run_listener():
            try:
                self.listener.start()
                self.listener.join()
            except KeyError as e:
                # pynput raises KeyError('AXIsProcessTrusted') without Accessibility permissions
                if 'AXIsProcessTrusted' not in str(e):
                    logger.error("Error in hotkey listener: %s", e)
            except Exception as e:
                logger.error("Error in hotkey listener: %s", e)

        thread = threading.Thread(target=run_listener, name="reload-hotkey", daemon=True)
        thread.start()

        print(f"⌨️  Reload hotkey registered: {self.hotkey}")

    def stop(self) -> None:
        """Stop listening for the hotkey."""
        if self.listener:
            try:
                self.listener.stop()
            except Exception as e:
                logger.debug("Error stopping hotkey listener: %s", e)
        self.running = False
