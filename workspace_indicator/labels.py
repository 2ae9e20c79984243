"""Ordinal -> label mapping backed by an editable text file."""

import logging
import os
import re
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple
from .config import MAPPING_FILE
from .exceptions import MappingFileError

logger = logging.getLogger(__name__)

DEFAULT_NAME_FORMAT = "Desktop {ordinal}"

_ORDINAL_PATTERN = re.compile(r"[+-]?[0-9]+")

# Attempted mtime before any read, or after a read that failed before stat
_UNREAD = object()


@dataclass(frozen=True)
class _MappingState:
    """Names and the mtime they were read at; replaced as a whole on reload."""
    names: Mapping[int, str] = field(default_factory=lambda: MappingProxyType({}))
    mtime: Optional[int] = None


def parse_mapping(text: str) -> Dict[int, str]:
    """
    Parse mapping file content.

    Each accepted line has the form '<ordinal>: <name>'. Blank lines and lines
    starting with '#' are skipped, as is any line that does not split into
    exactly two parts on ':' with an integer ordinal and a non-empty name.
    Later duplicates overwrite earlier ones.

    Args:
        text: Full file content

    Returns:
        Dictionary mapping ordinals to names
    """
    names: Dict[int, str] = {}
    for line_number, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split(":")
        if len(parts) != 2:
            logger.debug("Skipping mapping line %d: %r", line_number, line)
            continue

        ordinal_text = parts[0].strip()
        name = parts[1].strip()
        if not name or not _ORDINAL_PATTERN.fullmatch(ordinal_text):
            logger.debug("Skipping mapping line %d: %r", line_number, line)
            continue

        ordinal = int(ordinal_text)
        if ordinal < 1:
            logger.debug("Skipping mapping line %d: ordinal %d is not positive", line_number, ordinal)
            continue

        names[ordinal] = name
    return names


def _read_mapping_file(path: str) -> Tuple[Dict[int, str], Optional[int]]:
    """
    Read and parse the mapping file.

    Returns:
        Tuple of (names, mtime_ns); a missing file gives ({}, None)

    Raises:
        MappingFileError: If the file exists but cannot be read
    """
    mtime = None
    try:
        # stat before reading: a write in between only causes one extra reload
        mtime = os.stat(path).st_mtime_ns
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except FileNotFoundError:
        return {}, None
    except (OSError, UnicodeDecodeError) as e:
        raise MappingFileError(f"Error loading mapping file '{path}': {e}", mtime=mtime) from e
    return parse_mapping(text), mtime


class LabelStore:
    """Translates ordinals into user-chosen names, reloading the file when it changes."""

    def __init__(self, path: Optional[str] = None):
        """
        Initialize the store and load the mapping file once.

        Args:
            path: Mapping file path (defaults to config value)
        """
        self._path = path or MAPPING_FILE
        self._state = _MappingState()
        self._loaded = False
        self._reload_lock = threading.Lock()
        # mtime of the last read attempt, successful or not
        self._attempted_mtime = _UNREAD
        self._stat_error: Optional[str] = None
        self.reload()

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_loaded(self) -> bool:
        """True once a read succeeded (a missing file counts as success)."""
        return self._loaded

    @property
    def mapping(self) -> Mapping[int, str]:
        """Current read-only mapping."""
        return self._state.names

    def name_for(self, ordinal: int) -> str:
        """
        Get the label for an ordinal.

        Reloads the file first if it changed since the last read.

        Args:
            ordinal: 1-based space ordinal

        Returns:
            Mapped name, or 'Desktop <ordinal>' if there is none
        """
        self.refresh_if_stale()
        return self._state.names.get(ordinal, DEFAULT_NAME_FORMAT.format(ordinal=ordinal))

    def refresh_if_stale(self) -> bool:
        """
        Reload the file if its modification time differs from the last read attempt.

        A file that failed to load is not retried until it changes again.

        Returns:
            True if a reload happened and succeeded
        """
        try:
            mtime: Optional[int] = os.stat(self._path).st_mtime_ns
        except FileNotFoundError:
            mtime = None
        except OSError as e:
            if str(e) != self._stat_error:
                logger.error("Error checking mapping file '%s': %s", self._path, e)
                self._stat_error = str(e)
            return False
        self._stat_error = None

        if mtime == self._attempted_mtime:
            return False

        logger.info("Mapping file changed, reloading...")
        return self.reload()

    def reload(self) -> bool:
        """
        Re-read the mapping file and swap in the new mapping.

        On failure the previous mapping is kept and the error is logged.

        Returns:
            True if the mapping was replaced
        """
        with self._reload_lock:
            try:
                names, mtime = _read_mapping_file(self._path)
            except MappingFileError as e:
                self._attempted_mtime = e.mtime if e.mtime is not None else _UNREAD
                logger.error("%s", e)
                return False

            self._attempted_mtime = mtime

            if mtime is None:
                logger.info("Mapping file does not exist at %s", self._path)
            for ordinal, name in sorted(names.items()):
                logger.debug("Loaded workspace mapping: %d -> %s", ordinal, name)

            self._state = _MappingState(names=MappingProxyType(names), mtime=mtime)
            self._loaded = True
            return True
