"""
bubo/tool_definitions/spreadsheet_tools.py
==========================================

Local spreadsheet tools.

``read_spreadsheet`` only reads files already present on the server's disk;
the model cannot upload anything.  A missing or unparsable file fails the
call with the parser's own exception.
"""

import asyncio
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from ..tools.toolkit import Toolkit
from .registry import ToolRegistry


class ReadSpreadsheetInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_path: str = Field(
        ...,
        alias="filePath",
        description="Path of a local .xlsx, .xls, .ods or .csv file.",
    )


def register(registry: ToolRegistry, toolkit: Toolkit) -> None:

    @registry.register(
        "read_spreadsheet",
        "Read the first sheet of a local spreadsheet file. Returns one record per "
        "row, keyed by the header row.",
        ReadSpreadsheetInput,
    )
    async def read_spreadsheet(params: ReadSpreadsheetInput) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(toolkit.spreadsheets.read_records, params.file_path)
