"""Mentor reply generation.

Delegates to an injected LLM provider when one is configured and falls back
to the local deterministic simulation on any failure.
"""

import asyncio
import logging
from collections.abc import Sequence

from ..conversation.models import MentorStyle, Message, Profile, Role
from ..llm import ChatMessage, LLMProvider
from ..prompts import get_mentor_prompt, get_profile_prompt
from .simulator import simulate_reply, simulated_delay_ms

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 6
DEFAULT_TEMPERATURE = 0.6
DEFAULT_MAX_TOKENS = 600


class ReplyGenerator:
    """Produces mentor replies.

    Hidden design decisions:
    - Prompt layout sent to the completion API
    - How much history is forwarded
    - When and how the local simulation takes over
    """

    def __init__(
        self,
        llm: LLMProvider | None = None,
        model: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        history_limit: int = HISTORY_LIMIT,
        latency_scale: float = 1.0,
    ):
        """Initialize the generator.

        Args:
            llm: Completion provider; None means always use the local simulation
            model: Model override passed to the provider
            temperature: Sampling temperature for remote replies
            max_tokens: Token budget for remote replies
            history_limit: Number of trailing history messages sent to the API
            latency_scale: Multiplier for the simulated thinking delay (0 disables it)
        """
        self._llm = llm
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._history_limit = history_limit
        self._latency_scale = latency_scale

    @property
    def is_remote(self) -> bool:
        return self._llm is not None

    async def generate_reply(
        self,
        user_text: str,
        history: Sequence[Message] = (),
        profile: Profile | None = None,
        style: MentorStyle | str = MentorStyle.BALANCED,
    ) -> str:
        """Generate the mentor's reply to ``user_text``.

        Args:
            user_text: The new user message
            history: Earlier messages of the conversation, oldest first
            profile: Founder profile
            style: Requested tone

        Returns:
            Non-empty reply text
        """
        profile = profile or Profile()
        style = MentorStyle.parse(style)

        if self._llm is None:
            await self._think(user_text)
            return simulate_reply(user_text, profile, style)

        reply = await self._remote_reply(self._llm, user_text, history, profile, style)
        if reply:
            return reply
        return simulate_reply(user_text, profile, style)

    def build_messages(
        self,
        user_text: str,
        history: Sequence[Message],
        profile: Profile,
        style: MentorStyle,
    ) -> list[ChatMessage]:
        """Assemble the message list sent to the completion API."""
        messages = [
            ChatMessage(role="system", content=get_mentor_prompt(style.value)),
            ChatMessage(role="system", content=get_profile_prompt(profile.to_document())),
        ]
        recent = list(history)[-self._history_limit:] if self._history_limit > 0 else []
        for entry in recent:
            role = "user" if entry.role is Role.USER else "assistant"
            messages.append(ChatMessage(role=role, content=entry.text))
        messages.append(ChatMessage(role="user", content=user_text))
        return messages

    async def _remote_reply(
        self,
        llm: LLMProvider,
        user_text: str,
        history: Sequence[Message],
        profile: Profile,
        style: MentorStyle,
    ) -> str | None:
        """Ask the provider for a reply. Returns None on any failure."""
        try:
            messages = self.build_messages(user_text, history, profile, style)
            response = await llm.chat_completion(
                messages,
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
            text = (response.content or "").strip()
        except Exception as e:
            logger.warning("Completion request failed, using local reply: %s", e)
            return None

        if not text:
            logger.warning("Completion returned no content, using local reply")
            return None
        return text

    async def _think(self, user_text: str) -> None:
        if self._latency_scale <= 0:
            return
        await asyncio.sleep(simulated_delay_ms(user_text) / 1000 * self._latency_scale)
