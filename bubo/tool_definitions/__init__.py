"""
bubo/tool_definitions
=====================

Every tool the model can invoke.

How tools work
--------------
1. ``registry.py`` defines ``ToolRegistry``; each entry pairs a pydantic
   input model with an async executor.
2. Each domain module (``firebase_tools``, ``spreadsheet_tools``,
   ``google_tools``) exposes ``register(registry, toolkit)``, which closes its
   executors over the given ``Toolkit``.
3. ``build_registry`` runs every ``register`` against one Toolkit.
4. ``bubo/core/tool_bridge.py`` turns the registry into Gemini
   ``FunctionDeclaration`` objects.
"""

from ..tools.toolkit import Toolkit
from . import firebase_tools, google_tools, spreadsheet_tools
from .registry import ToolRegistry, ToolSpec

__all__ = ["ToolRegistry", "ToolSpec", "build_registry"]


def build_registry(toolkit: Toolkit) -> ToolRegistry:
    """Create a registry with every tool bound to ``toolkit``."""
    registry = ToolRegistry()
    firebase_tools.register(registry, toolkit)
    spreadsheet_tools.register(registry, toolkit)
    google_tools.register(registry, toolkit)
    return registry
