"""
Chat-completion transport.

The transport issues exactly one request per call; failures surface as
:class:`~lifekline.security.exceptions.UpstreamError` and are never retried.
"""

import logging
from typing import Any, Optional, Protocol

import openai
from openai import OpenAI

from ..security.exceptions import UpstreamError
from ..utils.config import ClientSettings

logger = logging.getLogger(__name__)


class ChatTransport(Protocol):
    """Anything that turns chat messages into completion text."""

    def complete(self, messages: list[dict[str, str]]) -> str:
        """Return the content of the first choice."""
        ...


class OpenAIChatTransport:
    """Thin wrapper around the OpenAI chat completions API."""

    def __init__(self, settings: Optional[ClientSettings] = None, client: Any = None):
        self.settings = settings or ClientSettings.from_env()
        if client is None:
            if not self.settings.api_key:
                raise UpstreamError(
                    "OpenAI API key is not set; configure LIFEKLINE_OPENAI_KEY "
                    "or OPENAI_API_KEY"
                )
            client = OpenAI(
                api_key=self.settings.api_key,
                base_url=self.settings.base_url,
                timeout=self.settings.timeout,
                max_retries=0,
            )
        self.client = client

    def complete(self, messages: list[dict[str, str]]) -> str:
        """
        Issue one chat-completion request.

        Raises:
            UpstreamError: On a non-success status, a transport failure or an
                empty response
        """
        try:
            response = self.client.chat.completions.create(
                model=self.settings.model,
                messages=messages,
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
        except openai.APIStatusError as e:
            logger.error("Chat completion failed with status %s", e.status_code)
            raise UpstreamError(
                f"API request failed: {e.message}",
                status_code=e.status_code,
                body=e.body,
            ) from e
        except openai.APIError as e:
            logger.error("Chat completion failed: %s", e)
            raise UpstreamError(f"API request failed: {e}") from e

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content:
            raise UpstreamError("Model returned no content")
        return content  # type: ignore[no-any-return]
