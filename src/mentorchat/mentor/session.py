"""Mentor chat session.

Drives one exchange at a time: record the user's message, ask the generator
for a reply while a typing indicator is shown, then record the reply.
"""

import logging

from ..conversation import ConversationStore, EventType, Message, Role, StoreEvent
from ..conversation.models import Conversation
from .generator import ReplyGenerator

logger = logging.getLogger(__name__)

APOLOGY = "I'm having trouble responding. Please try again."
SAVED_NOTICE = "Conversation saved locally."


class MentorSession:
    """Glue between the conversation store and the reply generator."""

    def __init__(self, store: ConversationStore, generator: ReplyGenerator | None = None):
        self._store = store
        self._generator = generator or ReplyGenerator()

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def generator(self) -> ReplyGenerator:
        return self._generator

    def _emit(self, type_: EventType, **kwargs) -> None:
        self._store.events.emit(StoreEvent(type=type_, **kwargs))

    async def send_message(self, text: str) -> Message | None:
        """Send ``text`` to the mentor and record the reply.

        Returns:
            The assistant message appended, or None if ``text`` was blank
        """
        text = text.strip()
        if not text:
            return None

        conversation = self._store.current
        history = list(conversation.messages)
        self._store.append_message(conversation, Role.USER, text)

        self._emit(EventType.TYPING_STARTED, conversation=conversation)
        try:
            reply = await self._generator.generate_reply(
                text,
                history=history,
                profile=self._store.profile,
                style=self._store.style,
            )
        except Exception:
            logger.exception("Mentor reply generation failed")
            reply = APOLOGY
        finally:
            self._emit(EventType.TYPING_FINISHED, conversation=conversation)

        return self._store.append_message(conversation, Role.ASSISTANT, reply)

    def new_chat(self) -> Conversation:
        return self._store.create_conversation()

    def clear(self) -> None:
        self._store.clear_current()

    def save(self, name: str | None = None) -> None:
        self._store.commit_current_to_saved_list(name)
        self._emit(EventType.NOTICE, text=SAVED_NOTICE)

    def load(self, conversation_id: str) -> Conversation | None:
        return self._store.load_from_saved(conversation_id)
