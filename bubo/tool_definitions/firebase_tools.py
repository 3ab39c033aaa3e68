"""
bubo/tool_definitions/firebase_tools.py
=======================================

Realtime Database tools.
"""

import asyncio
from typing import Any

from pydantic import BaseModel, Field

from ..tools.toolkit import Toolkit
from .registry import ToolRegistry


class ReadRemoteValueInput(BaseModel):
    path: str = Field(..., description="Slash-separated database path, e.g. 'users/alice/profile'.")


def register(registry: ToolRegistry, toolkit: Toolkit) -> None:

    @registry.register(
        "read_remote_value",
        "Read the value stored at a path in the Firebase Realtime Database. "
        "Returns null when nothing is stored there.",
        ReadRemoteValueInput,
    )
    async def read_remote_value(params: ReadRemoteValueInput) -> Any:
        return await asyncio.to_thread(toolkit.realtime.read, params.path)
