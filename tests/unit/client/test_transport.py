"""
Test cases for the chat-completion transport.

The OpenAI client is replaced by a mock; no network traffic is issued.
"""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai

from lifekline.client.transport import OpenAIChatTransport
from lifekline.security.exceptions import UpstreamError
from lifekline.utils.config import ClientSettings

MESSAGES = [{"role": "user", "content": "hi"}]


def _response(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _transport(client):
    return OpenAIChatTransport(ClientSettings(api_key="test", model="test-model"), client=client)


class TestOpenAIChatTransport(unittest.TestCase):
    """Test request construction and error mapping."""

    def test_returns_first_choice_content(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _response('{"a": 1}')
        self.assertEqual(_transport(client).complete(MESSAGES), '{"a": 1}')

        kwargs = client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "test-model")
        self.assertEqual(kwargs["messages"], MESSAGES)
        self.assertEqual(kwargs["temperature"], 0.0)
        self.assertEqual(kwargs["max_tokens"], 4000)

    def test_single_request_per_call(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _response("x")
        _transport(client).complete(MESSAGES)
        self.assertEqual(client.chat.completions.create.call_count, 1)

    def test_status_error_maps_to_upstream(self):
        request = httpx.Request("POST", "https://api.example.test/v1/chat/completions")
        response = httpx.Response(503, request=request)
        client = MagicMock()
        client.chat.completions.create.side_effect = openai.APIStatusError(
            "service unavailable", response=response, body={"error": "busy"}
        )
        with self.assertRaises(UpstreamError) as cm:
            _transport(client).complete(MESSAGES)
        self.assertEqual(cm.exception.status_code, 503)
        self.assertEqual(cm.exception.body, {"error": "busy"})

    def test_connection_error_maps_to_upstream(self):
        request = httpx.Request("POST", "https://api.example.test/v1/chat/completions")
        client = MagicMock()
        client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)
        with self.assertRaises(UpstreamError) as cm:
            _transport(client).complete(MESSAGES)
        self.assertIsNone(cm.exception.status_code)

    def test_empty_content_is_upstream_error(self):
        for response in (_response(None), _response(""), SimpleNamespace(choices=[])):
            client = MagicMock()
            client.chat.completions.create.return_value = response
            with self.assertRaises(UpstreamError):
                _transport(client).complete(MESSAGES)

    def test_missing_api_key(self):
        with self.assertRaises(UpstreamError):
            OpenAIChatTransport(ClientSettings(api_key=""))

    def test_builds_client_from_settings(self):
        transport = OpenAIChatTransport(ClientSettings(api_key="sk-test"))
        self.assertIsInstance(transport.client, openai.OpenAI)
        self.assertEqual(transport.client.max_retries, 0)


if __name__ == "__main__":
    unittest.main()
