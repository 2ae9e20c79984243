"""Configuration for the workspace indicator."""

import logging
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Configuration class for the workspace indicator."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        # Seconds between two polls of the space snapshot source
        self.poll_interval = float(os.getenv("WORKSPACE_INDICATOR_POLL_INTERVAL", "0.2"))

        # Ordinal -> name mapping file, a dotfile in the user's home directory
        self.mapping_file = os.path.expanduser(
            os.getenv("WORKSPACE_INDICATOR_MAPPING_FILE", "~/.macos_show_active_workspace.config")
        )

        # Global hotkey that reloads the mapping file (e.g., 'cmd+alt+r')
        self.reload_hotkey = os.getenv("WORKSPACE_INDICATOR_RELOAD_HOTKEY", "cmd+alt+r")
        self.hotkey_enabled = os.getenv("WORKSPACE_INDICATOR_HOTKEY_ENABLED", "true").lower() == "true"

        # Snapshot source backend: only "macos" for now
        self.space_source = os.getenv("WORKSPACE_INDICATOR_SPACE_SOURCE", "macos").lower()

        self.log_level = os.getenv("WORKSPACE_INDICATOR_LOG_LEVEL", "WARNING").upper()

        # Validate configuration
        self._validate()

    def _validate(self):
        """Validate configuration values."""
        if self.poll_interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {self.poll_interval}")

        if not self.mapping_file:
            raise ValueError("Mapping file path must not be empty")

        valid_sources = ["macos"]
        if self.space_source not in valid_sources:
            raise ValueError(
                f"Invalid space source '{self.space_source}'. "
                f"Must be one of: {', '.join(valid_sources)}"
            )

        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Invalid log level '{self.log_level}'")

        if self.hotkey_enabled and not self.reload_hotkey.strip():
            raise ValueError("Reload hotkey must not be empty when the hotkey is enabled")


# Create a global config instance
_config = Config()

# Expose configuration values as module-level variables
POLL_INTERVAL = _config.poll_interval
MAPPING_FILE = _config.mapping_file
RELOAD_HOTKEY = _config.reload_hotkey
HOTKEY_ENABLED = _config.hotkey_enabled
SPACE_SOURCE = _config.space_source
LOG_LEVEL = _config.log_level

__all__ = [
    "Config",
    "POLL_INTERVAL",
    "MAPPING_FILE",
    "RELOAD_HOTKEY",
    "HOTKEY_ENABLED",
    "SPACE_SOURCE",
    "LOG_LEVEL",
]
