"""
bubo/tool_definitions/registry.py
=================================

The tool registry: tool name → ``ToolSpec``.

Each tool declares a pydantic **input model**.  The model does two jobs:

1. Its JSON schema becomes the Gemini ``FunctionDeclaration`` parameters
   (see ``bubo.core.tool_bridge``), so the model knows how to call the tool.
2. ``ToolRegistry.invoke`` validates incoming arguments against it before the
   executor runs.  Malformed calls fail with ``ToolInputError`` instead of
   whatever exception the SDK would have raised on bad input.

Once arguments are valid, the executor's own failures propagate unmodified.

The registry decides nothing about *when* a tool runs; that is up to the
model.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from ..tools.errors import ToolInputError, ToolNotFoundError

logger = logging.getLogger(__name__)

Executor = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True)
class ToolSpec:
    """One registered tool."""

    name: str
    description: str
    input_model: Type[BaseModel]
    executor: Executor

    def parameters_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)


class ToolRegistry:
    """Ordered, name-unique collection of ``ToolSpec`` objects."""

    def __init__(self):
        self._tools: Dict[str, ToolSpec] = {}

    def register(self, name: str, description: str, input_model: Type[BaseModel]):
        """Decorator registering an async executor under ``name``.

        Raises
        ------
        ValueError
            If ``name`` is already registered.
        """

        def decorator(fn: Executor) -> Executor:
            if name in self._tools:
                raise ValueError(f"Tool already registered: {name}")
            self._tools[name] = ToolSpec(
                name=name, description=description, input_model=input_model, executor=fn
            )
            logger.debug("Registered tool %s", name)
            return fn

        return decorator

    def get(self, name: str) -> ToolSpec:
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(name) from None

    def names(self) -> List[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    async def invoke(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Validate ``arguments`` for tool ``name`` and run its executor.

        Raises
        ------
        ToolNotFoundError
            If no tool is registered under ``name``.
        ToolInputError
            If ``arguments`` do not match the tool's input model.
        """
        spec = self.get(name)
        try:
            params = spec.input_model.model_validate(arguments if arguments is not None else {})
        except ValidationError as e:
            raise ToolInputError(name, e.errors(include_url=False)) from e
        return await spec.executor(params)
