"""Generative AI services module."""

from foliogen.services.ai.chat import ChatAgentService, ChatTurn
from foliogen.services.ai.client import GeminiClient, GenerativeClientProtocol
from foliogen.services.ai.generation import ProfileGenerationService
from foliogen.services.ai.json_extraction import extract_json, parse_payload
from foliogen.services.ai.resilience import CallPolicy, TimeoutTier, execute, with_retry, with_timeout

__all__ = [
    "ChatAgentService",
    "ChatTurn",
    "GeminiClient",
    "GenerativeClientProtocol",
    "ProfileGenerationService",
    "extract_json",
    "parse_payload",
    "CallPolicy",
    "TimeoutTier",
    "execute",
    "with_retry",
    "with_timeout",
]
