"""
bubo/core/agent.py
==================

``BuboAgent``: the Google ADK agent that drives the **Gemini
generate-and-call-tool loop**.

    User message
        ↓
    Gemini ``generate_content`` (with tools available)
        ↓ model decides: answer directly OR call tools
    ┌───────────────────┐      ┌──────────────────────────────────┐
    │  Text response    │  OR  │  FunctionCall(name, args)         │
    │  → final Event    │      │  → ToolRegistry.invoke(name, args) │
    └───────────────────┘      │  → append FunctionResponse        │
                               │  → re-call generate_content      │
                               └──────────────────────────────────┘

Tool-call and tool-result turns are yielded as ADK events as they happen,
so ``AgentFacade`` can report which tools ran.

Failure handling
----------------
- A failing *tool* does not fail the turn: the error is classified by
  ``ErrorHandler`` and sent back to Gemini as the function response, so the
  model can explain it.
- A failing *generation* call propagates out of the runner, and the HTTP layer
  turns it into a 500.
- More than ``MAX_TOOL_ROUNDS`` consecutive tool rounds raise ``RuntimeError``.
"""

import asyncio
import logging
from typing import Any, AsyncGenerator, Optional

from google import genai
from google.adk.agents import BaseAgent
from google.adk.agents.invocation_context import InvocationContext
from google.adk.events import Event
from google.genai import types
from pydantic import Field, PrivateAttr

from ..config import Config
from ..tool_definitions.registry import ToolRegistry
from ..tools.error_handler import ErrorHandler
from .prompt_loader import load_prompt
from .tool_bridge import build_gemini_tools

logger = logging.getLogger(__name__)

AGENT_NAME = "bubo"
AGENT_DESCRIPTION = (
    "Data assistant for the Firebase Realtime Database, local spreadsheets, "
    "Google Drive and Google Sheets."
)
MAX_TOOL_ROUNDS = 10


class BuboAgent(BaseAgent):
    """Single-turn Gemini agent with access to the tool registry.

    Attributes
    ----------
    agent_config:
        Application configuration (model name, API key, Vertex AI fallback).
    model_name:
        Gemini model identifier.
    system_prompt:
        Instructions loaded from ``prompts.md``.
    gemini_tools:
        ``types.Tool`` list passed to each ``generate_content`` call.
    """

    model_config = {"extra": "allow", "arbitrary_types_allowed": True, "protected_namespaces": ()}

    agent_config: Optional[Config] = Field(default=None)
    model_name: str = Field(default="")
    system_prompt: str = Field(default="")
    gemini_tools: list = Field(default_factory=list)

    _client: Optional[genai.Client] = PrivateAttr(default=None)
    _registry: Optional[ToolRegistry] = PrivateAttr(default=None)
    _error_handler: Optional[ErrorHandler] = PrivateAttr(default=None)

    def __init__(
        self,
        config: Config,
        registry: ToolRegistry,
        *,
        client: Optional[genai.Client] = None,
        error_handler: Optional[ErrorHandler] = None,
        name: str = AGENT_NAME,
        **kwargs,
    ):
        super().__init__(
            name=name,
            description=kwargs.pop("description", AGENT_DESCRIPTION),
            agent_config=config,
            model_name=config.gemini_model,
            system_prompt=kwargs.pop("system_prompt", None) or load_prompt(),
            gemini_tools=build_gemini_tools(registry),
            **kwargs,
        )
        self._registry = registry
        self._client = client
        self._error_handler = error_handler or ErrorHandler()

    # ── Gemini client (lazy init) ─────────────────────────────────────────────

    @property
    def client(self) -> genai.Client:
        """Return the Gemini API client, constructing it on first access.

        1. ``GOOGLE_GENERATIVE_AI_API_KEY`` → API key auth.
        2. Otherwise Vertex AI with ``GOOGLE_CLOUD_PROJECT`` / ``GOOGLE_CLOUD_LOCATION``.
        """
        if self._client is None:
            config = self.agent_config
            if config.gemini_api_key:
                self._client = genai.Client(api_key=config.gemini_api_key)
            else:
                self._client = genai.Client(
                    vertexai=True,
                    project=config.google_cloud_project,
                    location=config.google_cloud_location,
                )
        return self._client

    # ── Tool execution ────────────────────────────────────────────────────────

    async def _execute_tool(self, tool_name: str, args: dict[str, Any]) -> dict[str, Any]:
        """Run one tool call and return the ``FunctionResponse`` payload.

        Returns ``{"result": value}`` on success, or
        ``{"error": {"type", "message"}}`` when the tool failed.
        """
        logger.info("Executing tool: %s | args: %s", tool_name, list(args.keys()))
        try:
            result = await self._registry.invoke(tool_name, args)
        except Exception as e:
            logger.warning("Tool '%s' failed: %s", tool_name, e, exc_info=True)
            return self._error_handler.to_payload(e)
        return {"result": result}

    async def _generate(
        self, contents: list[types.Content], config: types.GenerateContentConfig
    ) -> types.GenerateContentResponse:
        # The SDK call is blocking; keep the event loop free
        return await asyncio.to_thread(
            self.client.models.generate_content,
            model=self.model_name,
            contents=contents,
            config=config,
        )

    # ── ADK entry point ───────────────────────────────────────────────────────

    async def _run_async_impl(self, ctx: InvocationContext) -> AsyncGenerator[Event, None]:
        """Answer ``ctx.user_content``, calling tools until Gemini returns text."""
        invocation_id = ctx.invocation_id
        user_message = ctx.user_content

        if not user_message:
            yield Event(
                author=self.name,
                invocation_id=invocation_id,
                content=types.Content(role="model", parts=[types.Part(text="Please provide a message.")]),
            )
            return

        # Single turn: nothing from earlier requests is replayed
        contents = [user_message]
        gen_config = types.GenerateContentConfig(
            system_instruction=self.system_prompt,
            tools=self.gemini_tools or None,
        )

        response = await self._generate(contents, gen_config)
        rounds = 0

        while response.candidates:
            candidate = response.candidates[0]
            if not candidate.content or not candidate.content.parts:
                break

            func_calls = [p.function_call for p in candidate.content.parts if p.function_call]

            if not func_calls:
                text_parts = [p.text for p in candidate.content.parts if p.text]
                yield Event(
                    author=self.name,
                    invocation_id=invocation_id,
                    content=types.Content(role="model", parts=[types.Part(text="\n".join(text_parts))]),
                )
                return

            if rounds >= MAX_TOOL_ROUNDS:
                raise RuntimeError(f"Agent exceeded {MAX_TOOL_ROUNDS} tool-call rounds")
            rounds += 1

            # Model's tool-call turn
            contents.append(candidate.content)
            yield Event(author=self.name, invocation_id=invocation_id, content=candidate.content)

            tool_responses = []
            for fc in func_calls:
                result = await self._execute_tool(fc.name, dict(fc.args or {}))
                tool_responses.append(
                    types.Part(
                        function_response=types.FunctionResponse(id=fc.id, name=fc.name, response=result)
                    )
                )

            tool_turn = types.Content(role="user", parts=tool_responses)
            contents.append(tool_turn)
            yield Event(author=self.name, invocation_id=invocation_id, content=tool_turn)

            response = await self._generate(contents, gen_config)

        logger.warning("Gemini returned no content for invocation %s", invocation_id)
