import asyncio
import unittest
from unittest.mock import MagicMock

from google.genai import types
from pydantic import BaseModel, ValidationError

from bubo.config import Config
from bubo.core import AgentFacade, BuboAgent
from bubo.core.agent import MAX_TOOL_ROUNDS
from bubo.core.tool_bridge import build_gemini_tools, sanitize_schema
from bubo.tool_definitions.registry import ToolRegistry


class EchoInput(BaseModel):
    text: str


class MissingFileInput(BaseModel):
    pass


def _text_response(text):
    return types.GenerateContentResponse(candidates=[
        types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))
    ])


def _call_response(name, args):
    return types.GenerateContentResponse(candidates=[
        types.Candidate(content=types.Content(role="model", parts=[
            types.Part(function_call=types.FunctionCall(name=name, args=args))
        ]))
    ])


class TestAgentFacade(unittest.TestCase):

    def setUp(self):
        self.registry = ToolRegistry()
        self.echo_calls = []

        @self.registry.register("echo", "Echo text back.", EchoInput)
        async def echo(params):
            self.echo_calls.append(params.text)
            return params.text.upper()

        @self.registry.register("missing_file", "Always fails.", MissingFileInput)
        async def missing_file(params):
            raise FileNotFoundError(2, "No such file", "/data/report.xlsx")

        self.client = MagicMock()
        self.agent = BuboAgent(Config(), self.registry, client=self.client, system_prompt="Be brief.")
        self.facade = AgentFacade(self.agent)

    def run_async(self, coro):
        return asyncio.run(coro)

    def _contents_of_call(self, index):
        return self.client.models.generate_content.call_args_list[index].kwargs["contents"]

    def test_plain_answer(self):
        self.client.models.generate_content.return_value = _text_response("Hello!")

        result = self.run_async(self.facade.generate("hi"))

        self.assertEqual(result, {"text": "Hello!", "tool_calls": []})
        kwargs = self.client.models.generate_content.call_args.kwargs
        self.assertEqual(kwargs["model"], Config().gemini_model)
        self.assertEqual(kwargs["config"].system_instruction, "Be brief.")
        self.assertEqual(kwargs["contents"][0].parts[0].text, "hi")

    def test_tool_call_round_trip(self):
        self.client.models.generate_content.side_effect = [
            _call_response("echo", {"text": "owl"}),
            _text_response("The tool said OWL."),
        ]

        result = self.run_async(self.facade.generate("echo owl"))

        self.assertEqual(result["text"], "The tool said OWL.")
        self.assertEqual(result["tool_calls"], [{"name": "echo", "args": {"text": "owl"}}])
        self.assertEqual(self.echo_calls, ["owl"])

        tool_turn = self._contents_of_call(1)[-1]
        response = tool_turn.parts[0].function_response
        self.assertEqual(response.name, "echo")
        self.assertEqual(response.response, {"result": "OWL"})

    def test_tool_failure_is_reported_to_model(self):
        self.client.models.generate_content.side_effect = [
            _call_response("missing_file", {}),
            _text_response("That file does not exist."),
        ]

        result = self.run_async(self.facade.generate("read the report"))

        self.assertEqual(result["text"], "That file does not exist.")
        payload = self._contents_of_call(1)[-1].parts[0].function_response.response
        self.assertEqual(payload["error"]["type"], "FileNotFound")

    def test_invalid_tool_arguments_are_reported_to_model(self):
        self.client.models.generate_content.side_effect = [
            _call_response("echo", {"wrong": 1}),
            _text_response("Sorry."),
        ]

        self.run_async(self.facade.generate("echo"))

        payload = self._contents_of_call(1)[-1].parts[0].function_response.response
        self.assertEqual(payload["error"]["type"], "InvalidInput")
        self.assertEqual(self.echo_calls, [])

    def test_generation_error_propagates(self):
        self.client.models.generate_content.side_effect = RuntimeError("503 UNAVAILABLE")

        with self.assertRaises(RuntimeError) as cm:
            self.run_async(self.facade.generate("hi"))
        self.assertIn("503 UNAVAILABLE", str(cm.exception))

    def test_tool_round_limit(self):
        self.client.models.generate_content.return_value = _call_response("echo", {"text": "again"})

        with self.assertRaises(RuntimeError):
            self.run_async(self.facade.generate("loop forever"))
        self.assertEqual(len(self.echo_calls), MAX_TOOL_ROUNDS)

    def test_no_state_between_requests(self):
        self.client.models.generate_content.return_value = _text_response("ok")

        self.run_async(self.facade.generate("first"))
        self.run_async(self.facade.generate("second"))

        contents = self._contents_of_call(1)
        self.assertEqual(len(contents), 1)
        self.assertEqual(contents[0].parts[0].text, "second")

    def test_non_text_message_leaves_no_session(self):
        for message in (42, ["a"], {"k": 1}):
            with self.assertRaises(ValidationError):
                self.run_async(self.facade.generate(message))

        self.assertEqual(self.facade.session_service.sessions, {})
        self.client.models.generate_content.assert_not_called()


class TestToolBridge(unittest.TestCase):

    def test_sanitize_schema(self):
        schema = {
            "title": "Input",
            "type": "object",
            "additionalProperties": False,
            "properties": {"path": {"title": "Path", "type": "string"}},
        }
        self.assertEqual(
            sanitize_schema(schema),
            {"type": "object", "properties": {"path": {"title": "Path", "type": "string"}}},
        )

    def test_declarations(self):
        registry = ToolRegistry()

        @registry.register("echo", "Echo text back.", EchoInput)
        async def echo(params):
            return params.text

        @registry.register("noop", "No arguments.", MissingFileInput)
        async def noop(params):
            return None

        tools = build_gemini_tools(registry)
        declarations = tools[0].function_declarations
        self.assertEqual([d.name for d in declarations], ["echo", "noop"])
        self.assertIsNotNone(declarations[0].parameters)
        self.assertIsNone(declarations[1].parameters)

    def test_empty_registry(self):
        self.assertEqual(build_gemini_tools(ToolRegistry()), [])


if __name__ == '__main__':
    unittest.main()
