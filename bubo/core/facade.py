"""
bubo/core/facade.py
===================

``AgentFacade.generate(message)``: one message in, one result out.

Each call runs the agent through an ADK ``Runner`` on a fresh in-memory
session that is deleted afterwards, so no conversation state is carried from
one request to the next.
"""

import logging
from typing import Any

from google.adk.agents import BaseAgent
from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

logger = logging.getLogger(__name__)

APP_NAME = "bubo_agent"
USER_ID = "http"


class AgentFacade:
    """Runs ``agent`` once per message and collects its answer."""

    def __init__(self, agent: BaseAgent, app_name: str = APP_NAME):
        self.agent = agent
        self.app_name = app_name
        self.session_service = InMemorySessionService()
        self.runner = Runner(
            app_name=app_name,
            agent=agent,
            session_service=self.session_service,
        )

    async def generate(self, message: Any) -> dict[str, Any]:
        """Answer ``message``.

        Returns
        -------
        dict
            ``{"text": str, "tool_calls": [{"name": str, "args": dict}, ...]}``

        Raises
        ------
        Exception
            Whatever the agent or the model client raised; nothing is retried.
        """
        # Rejects non-text messages before any session exists.
        new_message = types.Content(role="user", parts=[types.Part(text=message)])
        session = await self.session_service.create_session(app_name=self.app_name, user_id=USER_ID)

        text_parts: list[str] = []
        tool_calls: list[dict[str, Any]] = []
        try:
            async for event in self.runner.run_async(
                user_id=USER_ID,
                session_id=session.id,
                new_message=new_message,
            ):
                if event.author != self.agent.name:
                    continue
                for call in event.get_function_calls():
                    tool_calls.append({"name": call.name, "args": dict(call.args or {})})
                if event.is_final_response() and event.content and event.content.parts:
                    text_parts.extend(p.text for p in event.content.parts if p.text)
        finally:
            await self.session_service.delete_session(
                app_name=self.app_name, user_id=USER_ID, session_id=session.id
            )

        logger.info("Agent answered with %d tool call(s)", len(tool_calls))
        return {"text": "\n".join(text_parts), "tool_calls": tool_calls}
