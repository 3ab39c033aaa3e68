"""
bubo/tools/toolkit.py
=====================

The context object that carries every bootstrapped client.

``Toolkit`` is built **once** at process start and passed explicitly to the
tool registry and the HTTP app.  Nothing in the package keeps a module-level
client: tests hand a ``Toolkit`` pre-built mocks instead of patching the
environment.

Bootstrap order
---------------
1. ``MemoryStore``      - creates the SQLite schema (synchronous).
2. ``RealtimeStore``    - Firebase, or the explicit unavailable state.
3. ``GoogleWorkspace``  - OAuth credentials, Drive and Sheets services.
4. ``SpreadsheetReader`` and ``ErrorHandler`` - stateless.

No constructor is guarded: a malformed credential raises here and aborts
startup.
"""

import logging
from typing import Optional

from ..config import Config
from .error_handler import ErrorHandler
from .firebase_client import RealtimeStore
from .google_client import GoogleWorkspace
from .memory_store import MemoryStore
from .spreadsheet_reader import SpreadsheetReader

logger = logging.getLogger(__name__)


class Toolkit:
    """Wires all infrastructure clients together into one injectable container.

    Attributes
    ----------
    config:
        Application configuration.
    memory:
        SQLite store owning the ``memory`` table.
    realtime:
        Firebase Realtime Database reader.
    workspace:
        Google Drive + Sheets client.
    spreadsheets:
        Local spreadsheet parser.
    error_handler:
        Stateless error classification utility.
    """

    def __init__(
        self,
        config: Config,
        *,
        memory: Optional[MemoryStore] = None,
        realtime: Optional[RealtimeStore] = None,
        workspace: Optional[GoogleWorkspace] = None,
        spreadsheets: Optional[SpreadsheetReader] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.config = config
        self.memory = memory or MemoryStore(config.database_path)
        self.realtime = realtime or RealtimeStore(config)
        self.workspace = workspace or GoogleWorkspace(config)
        self.spreadsheets = spreadsheets or SpreadsheetReader()
        self.error_handler = error_handler or ErrorHandler()
        logger.debug(
            "Toolkit initialised (firebase=%s, refresh_token=%s)",
            self.realtime.available,
            bool(config.google_refresh_token),
        )

    def close(self) -> None:
        self.memory.close()
