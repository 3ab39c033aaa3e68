import unittest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from bubo.api import create_app


class TestHttpRouter(unittest.TestCase):

    def setUp(self):
        self.facade = MagicMock()
        self.facade.generate = AsyncMock()
        self.client = TestClient(create_app(self.facade))

    # --- /health ---

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            "status": "ok",
            "services": ["fastapi", "google-adk", "firebase", "sqlite", "google-cloud"],
        })
        self.facade.generate.assert_not_called()

    def test_health_is_byte_identical(self):
        first = self.client.get("/health").content
        second = self.client.get("/health").content
        self.assertEqual(first, second)

    def test_health_ignores_agent_state(self):
        self.facade.generate.side_effect = RuntimeError("model down")
        self.assertEqual(self.client.get("/health").status_code, 200)

    # --- /ask ---

    def test_ask_success(self):
        result = {"text": "There are 3 files.", "tool_calls": [{"name": "list_remote_files", "args": {}}]}
        self.facade.generate.return_value = result

        response = self.client.post("/ask", json={"message": "How many files do I have?"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"response": result})
        self.facade.generate.assert_awaited_once_with("How many files do I have?")

    def test_ask_passes_any_value_through(self):
        for value in ("plain text", 42, [1, 2], None, {"nested": {"a": True}}):
            self.facade.generate.return_value = value
            response = self.client.post("/ask", json={"message": "hi"})
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json(), {"response": value})

    def test_ask_failure(self):
        self.facade.generate.side_effect = RuntimeError("429 RESOURCE_EXHAUSTED")

        response = self.client.post("/ask", json={"message": "hello"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "429 RESOURCE_EXHAUSTED"})

    def test_ask_missing_message_is_forwarded(self):
        self.facade.generate.return_value = "ok"
        response = self.client.post("/ask", json={})
        self.assertEqual(response.status_code, 200)
        self.facade.generate.assert_awaited_once_with(None)

    def test_ask_malformed_body_is_forwarded(self):
        self.facade.generate.return_value = "ok"
        response = self.client.post(
            "/ask", content=b"not json", headers={"Content-Type": "application/json"}
        )
        self.assertEqual(response.status_code, 200)
        self.facade.generate.assert_awaited_once_with(None)

    def test_ask_non_string_message_is_forwarded(self):
        self.facade.generate.return_value = "ok"
        self.client.post("/ask", json={"message": ["a", "b"]})
        self.facade.generate.assert_awaited_once_with(["a", "b"])

    # --- middleware ---

    def test_security_headers(self):
        response = self.client.get("/health")
        self.assertEqual(response.headers["X-Content-Type-Options"], "nosniff")
        self.assertEqual(response.headers["X-Frame-Options"], "SAMEORIGIN")

    def test_cors(self):
        response = self.client.get("/health", headers={"Origin": "https://example.com"})
        self.assertEqual(response.headers["access-control-allow-origin"], "*")

    def test_cors_preflight_has_security_headers(self):
        response = self.client.options("/ask", headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["access-control-allow-origin"], "*")
        self.assertEqual(response.headers["X-Content-Type-Options"], "nosniff")
        self.facade.generate.assert_not_called()


if __name__ == '__main__':
    unittest.main()
