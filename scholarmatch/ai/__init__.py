"""AI modules for open-ended advisor chat."""

from .llm_client import LLMClient, build_messages
from .prompts import GENERAL_SYSTEM_PROMPT, build_athlete_context

__all__ = ["LLMClient", "build_messages", "GENERAL_SYSTEM_PROMPT", "build_athlete_context"]
