"""
bubo/tool_definitions/google_tools.py
=====================================

Google Drive and Google Sheets tools.

Both act with the OAuth user credentials built at bootstrap.  Without a
``GOOGLE_REFRESH_TOKEN`` they fail at call time with a ``RefreshError``,
which the agent reports to the model as ``AuthorizationRequired``.
"""

import asyncio
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from ..tools.google_client import DRIVE_PAGE_SIZE
from ..tools.toolkit import Toolkit
from .registry import ToolRegistry


class ListRemoteFilesInput(BaseModel):
    pass


class ReadGoogleSheetInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    spreadsheet_id: str = Field(
        ..., alias="spreadsheetId", description="Spreadsheet ID from the sheet's URL."
    )
    range: str = Field(
        "A1:Z1000", description="A1 notation range, e.g. 'Sheet1!A1:D20'."
    )


def register(registry: ToolRegistry, toolkit: Toolkit) -> None:

    @registry.register(
        "list_remote_files",
        f"List up to {DRIVE_PAGE_SIZE} files in the user's Google Drive.",
        ListRemoteFilesInput,
    )
    async def list_remote_files(params: ListRemoteFilesInput) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(toolkit.workspace.list_files, DRIVE_PAGE_SIZE)

    @registry.register(
        "read_google_sheet",
        "Read a cell range from a Google Sheet. Returns rows as lists of cell values.",
        ReadGoogleSheetInput,
    )
    async def read_google_sheet(params: ReadGoogleSheetInput) -> List[List[Any]]:
        return await asyncio.to_thread(
            toolkit.workspace.read_range, params.spreadsheet_id, params.range
        )
