"""
bubo/core
=========

The agent runtime:

- ``agent.py``         - ADK ``BaseAgent`` subclass driving the Gemini
                         generate-and-call-tool loop.
- ``facade.py``        - ``AgentFacade.generate(message)`` over an ADK runner.
- ``tool_bridge.py``   - Tool registry → Gemini ``FunctionDeclaration``.
- ``prompt_loader.py`` - Reads the instructions from ``prompts.md``.
"""

from .agent import BuboAgent  # noqa: F401
from .facade import AgentFacade  # noqa: F401
