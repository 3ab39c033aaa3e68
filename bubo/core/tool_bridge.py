"""
tool_bridge.py
==============

Converts the tool registry into the format the **Gemini API** expects.

    ToolRegistry (pydantic input models)
        ↓  ``build_gemini_tools()``
    List[types.FunctionDeclaration]
        ↓  wrapped in types.Tool
    Passed to ``GenerateContentConfig.tools``

Why ``sanitize_schema``?
------------------------
Gemini rejects certain JSON Schema keywords (``additionalProperties``,
top-level ``title``).  ``sanitize_schema`` strips these from the
pydantic-generated schema before it is sent.
"""

import logging
from typing import Any

from google.genai import types

from ..tool_definitions.registry import ToolRegistry

logger = logging.getLogger(__name__)


def sanitize_schema(schema: dict[str, Any], is_root: bool = True) -> dict[str, Any]:
    """Recursively strip JSON Schema keywords that Gemini does not support.

    Parameters
    ----------
    schema:
        The raw JSON Schema dict produced by pydantic.
    is_root:
        ``True`` when processing the top-level schema object (strips ``title``).

    Returns
    -------
    dict
        A cleaned copy of the schema.
    """
    if not isinstance(schema, dict):
        return schema

    clean = {}
    for key, value in schema.items():
        if key == "additionalProperties":
            continue
        if is_root and key == "title":
            continue

        if isinstance(value, dict):
            clean[key] = (
                {k: sanitize_schema(v, is_root=False) for k, v in value.items()}
                if key == "properties"
                else sanitize_schema(value, is_root=False)
            )
        elif isinstance(value, list):
            clean[key] = [
                sanitize_schema(i, is_root=False) if isinstance(i, dict) else i
                for i in value
            ]
        else:
            clean[key] = value

    return clean


def build_gemini_tools(registry: ToolRegistry) -> list[types.Tool]:
    """Convert every registered tool into a Gemini ``FunctionDeclaration``.

    Tools without parameters are declared without a ``parameters`` schema;
    Gemini rejects an ``OBJECT`` schema with no properties.

    Returns
    -------
    list[types.Tool]
        A single-element list holding all declarations, or an empty list when
        the registry is empty.
    """
    declarations = []
    for spec in registry:
        schema = sanitize_schema(spec.parameters_schema())
        declarations.append(
            types.FunctionDeclaration(
                name=spec.name,
                description=spec.description,
                parameters=schema if schema.get("properties") else None,
            )
        )

    if not declarations:
        logger.warning("No tools registered; the agent can only answer from the model.")
        return []

    logger.info("Registered %d tools with Gemini.", len(declarations))
    return [types.Tool(function_declarations=declarations)]
