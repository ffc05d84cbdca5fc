"""
OpenAI chat wrapper used when a chat message matches none of the canned topics.
"""
import logging
from typing import Any, Optional

from openai import OpenAI

from ..config import OpenAIConfig, get_config
from ..models.request import ChatMessage


logger = logging.getLogger(__name__)

MAX_HISTORY_TURNS = 10


def build_messages(
    system_prompt: str,
    message: str,
    history: Optional[list[ChatMessage]] = None,
    max_history: int = MAX_HISTORY_TURNS,
) -> list[dict[str, str]]:
    """
    Assemble the chat completion payload.

    Only the last max_history turns are replayed. System turns from the
    client are dropped so the advisor prompt stays the only instruction.
    """
    replayed = [
        {"role": turn.role, "content": turn.content}
        for turn in (history or [])[-max_history:]
        if turn.role != "system"
    ]
    return [
        {"role": "system", "content": system_prompt},
        *replayed,
        {"role": "user", "content": message},
    ]


class LLMClient:
    """Chat completions against the configured OpenAI model."""

    def __init__(self, settings: Optional[OpenAIConfig] = None, client: Any = None):
        self.settings = settings or get_config().openai

        if client is not None:
            self.client = client
        elif self.settings.api_key:
            self.client = OpenAI(api_key=self.settings.api_key)
        else:
            logger.warning("OPENAI_API_KEY is not set; open-ended chat falls back to the menu")
            self.client = None

    def is_available(self) -> bool:
        return self.client is not None

    def chat(
        self,
        system_prompt: str,
        message: str,
        history: Optional[list[ChatMessage]] = None,
    ) -> str:
        """Send one advisor turn and return the reply text."""
        if self.client is None:
            raise RuntimeError("OpenAI client is not configured")

        messages = build_messages(system_prompt, message, history)
        logger.info(f"Sending {len(messages)} messages to {self.settings.model}")
        completion = self.client.chat.completions.create(
            model=self.settings.model,
            messages=messages,
            max_tokens=self.settings.max_tokens,
            temperature=self.settings.temperature,
        )
        return completion.choices[0].message.content or ""
