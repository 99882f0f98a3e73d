"""
End-to-end life analysis: prompt, one completion call, then the parsing pipeline.
"""

import logging
from typing import Optional

from ..core.engine import parse_life_analysis
from ..schema.models import LifeDestinyResult
from ..security.exceptions import LifeKlineError
from ..utils.config import ParseConfig
from .prompts import UserInput, build_messages
from .transport import ChatTransport, OpenAIChatTransport

logger = logging.getLogger(__name__)


def generate_life_analysis(
    user_input: UserInput,
    transport: Optional[ChatTransport] = None,
    config: Optional[ParseConfig] = None,
) -> LifeDestinyResult:
    """
    Request a life analysis for ``user_input`` and parse the reply.

    Args:
        user_input: The pre-computed birth chart
        transport: Chat transport; an OpenAIChatTransport from the environment
            when omitted
        config: Optional ParseConfig shared by the prompt and the parser

    Raises:
        UpstreamError: If the transport fails or returns nothing
        ExtractionError, JSONSyntaxError, SchemaError: If the reply cannot be
            turned into a LifeDestinyResult
    """
    config = config or ParseConfig()
    transport = transport or OpenAIChatTransport()

    messages = build_messages(user_input, config)
    try:
        content = transport.complete(messages)
        return parse_life_analysis(content, config)
    except LifeKlineError as e:
        logger.error("generate_life_analysis failed (%s): %s", e.category, e.message)
        raise
