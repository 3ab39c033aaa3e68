"""
bubo/tools
==========

Infrastructure clients and shared utilities.  Nothing here is visible to the
model directly; the tool functions in ``bubo.tool_definitions`` use these.

Modules
-------
- ``firebase_client.py``    - Firebase Realtime Database reads.
- ``google_client.py``      - OAuth user credentials, Drive and Sheets.
- ``spreadsheet_reader.py`` - Local spreadsheet parsing (pandas).
- ``memory_store.py``       - SQLite ``memory`` table (SQLAlchemy).
- ``errors.py``             - Tool-layer exception kinds.
- ``error_handler.py``      - Error classification for the model.
- ``toolkit.py``            - The context object wiring the clients together.
"""

from .errors import ServiceUnavailableError, ToolError, ToolInputError, ToolNotFoundError  # noqa: F401
from .toolkit import Toolkit  # noqa: F401
