"""
lifekline chat-completion client: prompt builder, transport and service.
"""

from .prompts import (
    BAZI_SYSTEM_INSTRUCTION,
    MINIMAL_EXAMPLE,
    Gender,
    StemPolarity,
    UserInput,
    build_messages,
    build_user_prompt,
    get_stem_polarity,
    is_forward,
)
from .service import generate_life_analysis
from .transport import ChatTransport, OpenAIChatTransport

__all__ = [
    'generate_life_analysis', 'ChatTransport', 'OpenAIChatTransport',
    'UserInput', 'Gender', 'StemPolarity', 'get_stem_polarity', 'is_forward',
    'build_user_prompt', 'build_messages', 'BAZI_SYSTEM_INSTRUCTION', 'MINIMAL_EXAMPLE',
]
