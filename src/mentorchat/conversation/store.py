"""Conversation store.

Owns the saved conversation list, the current conversation, the founder
profile and the mentor style, and writes each of them to key-value storage
after every mutation. Rendering is left to event subscribers.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..storage import KeyValueStorage
from .events import EventEmitter, EventType, Listener, StoreEvent
from .models import (
    DEFAULT_CONVERSATION_NAME,
    Conversation,
    MentorStyle,
    Message,
    Profile,
    Role,
    now_iso,
)

logger = logging.getLogger(__name__)

KEY_CHATS = "smp_chats_v1"
KEY_CURRENT = "smp_current_v1"
KEY_PROFILE = "smp_profile_v1"
KEY_STYLE = "smp_style_v1"

# Credential keys, read but never written by the store
API_KEY_KEYS = ("OPENAI_API_KEY", "smp_openai_key")

MAX_SAVED_CONVERSATIONS = 50
RECENT_LIMIT = 5

_conversation_list = TypeAdapter(list[Conversation])


class StoreStats(BaseModel):
    """Counters shown on the dashboard."""

    conversations: int = Field(ge=0, description="Number of saved conversations")
    messages: int = Field(ge=0, description="Messages across saved and current conversations")


class ConversationStore:
    """Single owner of all chat state.

    Hidden design decisions:
    - Storage keys and document formats
    - Copy semantics between the current conversation and the saved list
    - Recovery from unreadable records
    """

    def __init__(self, storage: KeyValueStorage, emitter: EventEmitter | None = None):
        self._storage = storage
        self._events = emitter or EventEmitter()
        self._saved: list[Conversation] = []
        self._current: Conversation | None = None
        self._profile = Profile()
        self._style = MentorStyle.BALANCED
        self._load()

    # --- Persistence ---

    def _read_raw(self, key: str) -> str | None:
        """Raw record text, or None if it is absent or cannot be read."""
        try:
            return self._storage.get(key)
        except (ValueError, OSError) as e:
            logger.warning("Discarding unreadable record %s: %s", key, e)
            return None

    def _read_record(self, key: str, parse: Any, default: Any) -> Any:
        """Decode and validate one record, resetting to ``default`` on failure."""
        text = self._read_raw(key)
        if text is None:
            return default
        try:
            raw = json.loads(text)
        except ValueError as e:
            logger.warning("Discarding unreadable record %s: %s", key, e)
            return default
        try:
            return parse(raw)
        except ValidationError as e:
            logger.warning("Discarding invalid record %s: %s", key, e.errors()[:1])
            return default

    def _load(self) -> None:
        self._saved = self._read_record(KEY_CHATS, _conversation_list.validate_python, [])
        self._profile = self._read_record(KEY_PROFILE, Profile.model_validate, Profile())
        self._current = self._read_record(KEY_CURRENT, Conversation.model_validate, None)

        style = self._read_raw(KEY_STYLE)
        self._style = MentorStyle.parse(style.strip().strip("\"") if style else None)

        if self._current is None:
            self.create_conversation(DEFAULT_CONVERSATION_NAME)

        logger.debug(
            "Loaded %d saved conversations, current=%s",
            len(self._saved),
            self._current.id,
        )

    def _save_saved(self) -> None:
        self._storage.set_json(KEY_CHATS, [c.to_document() for c in self._saved])

    def _save_current(self) -> None:
        self._storage.set_json(KEY_CURRENT, self.current.to_document())

    def _save_profile(self) -> None:
        self._storage.set_json(KEY_PROFILE, self._profile.to_document())

    def _emit(self, type_: EventType, **kwargs: Any) -> None:
        self._events.emit(StoreEvent(type=type_, **kwargs))

    # --- Observers ---

    @property
    def events(self) -> EventEmitter:
        return self._events

    def subscribe(self, listener: Listener) -> None:
        self._events.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._events.unsubscribe(listener)

    # --- State accessors ---

    @property
    def current(self) -> Conversation:
        """The conversation being edited."""
        if self._current is None:
            raise RuntimeError("No current conversation loaded")
        return self._current

    @property
    def saved(self) -> list[Conversation]:
        """Copies of the saved conversations, most recently saved first."""
        return [c.model_copy(deep=True) for c in self._saved]

    @property
    def profile(self) -> Profile:
        return self._profile

    @property
    def style(self) -> MentorStyle:
        return self._style

    @property
    def api_key(self) -> str | None:
        """Credential provisioned in storage by an external tool, if any."""
        for key in API_KEY_KEYS:
            value = self._read_raw(key)
            if value is None:
                continue
            # Tolerate both raw strings and JSON-encoded strings
            value = value.strip().strip('"').strip()
            if value:
                return value
        return None

    # --- Conversation operations ---

    def create_conversation(self, name: str | None = None) -> Conversation:
        """Start a fresh conversation and make it current.

        The new conversation is not added to the saved list until committed.
        """
        conversation = Conversation(name=name or DEFAULT_CONVERSATION_NAME)
        self._current = conversation
        self._save_current()
        self._emit(EventType.CONVERSATION_CHANGED, conversation=conversation)
        return conversation

    def append_message(self, conversation: Conversation, role: Role | str, text: str) -> Message:
        """Append a timestamped message and persist the current conversation."""
        message = Message(role=Role(role), text=text)
        conversation.messages.append(message)
        self._save_current()
        self._emit(EventType.MESSAGE_APPENDED, conversation=conversation, message=message)
        return message

    def commit_current_to_saved_list(self, name: str | None = None) -> None:
        """Save a copy of the current conversation to the saved list.

        An entry with the same id is replaced in place; otherwise the copy is
        prepended and the list truncated to the most recent entries.

        Args:
            name: Optional new name for the current conversation; a blank
                name resets it to the default placeholder
        """
        current = self.current
        if name is not None:
            current.name = name.strip() or DEFAULT_CONVERSATION_NAME
        current.created_at = current.created_at or now_iso()

        snapshot = current.model_copy(deep=True)
        for idx, saved in enumerate(self._saved):
            if saved.id == current.id:
                self._saved[idx] = snapshot
                break
        else:
            self._saved.insert(0, snapshot)
            del self._saved[MAX_SAVED_CONVERSATIONS:]

        self._save_saved()
        self._save_current()
        logger.info("Saved conversation %s (%d saved)", current.id, len(self._saved))
        self._emit(EventType.SAVED_LIST_CHANGED, conversation=current)

    def clear_current(self) -> None:
        """Empty the current conversation. The saved list is untouched."""
        current = self.current
        current.messages = []
        current.name = DEFAULT_CONVERSATION_NAME
        current.created_at = now_iso()
        self._save_current()
        self._emit(EventType.CONVERSATION_CHANGED, conversation=current)

    def load_from_saved(self, conversation_id: str) -> Conversation | None:
        """Make a copy of a saved conversation current.

        Returns:
            The new current conversation, or None if no saved entry matches
        """
        found = self._find_saved(conversation_id)
        if found is None:
            logger.debug("No saved conversation with id %s", conversation_id)
            return None

        self._current = found.model_copy(deep=True)
        self._save_current()
        self._emit(EventType.CONVERSATION_CHANGED, conversation=self._current)
        return self._current

    def _find_saved(self, conversation_id: str) -> Conversation | None:
        return next((c for c in self._saved if c.id == conversation_id), None)

    def find_saved(self, conversation_id: str) -> Conversation | None:
        """Copy of the saved conversation with ``conversation_id``, if any."""
        found = self._find_saved(conversation_id)
        return found.model_copy(deep=True) if found is not None else None

    def recent(self, limit: int = RECENT_LIMIT) -> list[Conversation]:
        """Copies of the most recently saved conversations."""
        return [c.model_copy(deep=True) for c in self._saved[:limit]]

    def stats(self) -> StoreStats:
        total = sum(len(c.messages) for c in self._saved) + len(self.current.messages)
        return StoreStats(conversations=len(self._saved), messages=total)

    # --- Profile and style ---

    def save_profile(self, profile: Profile) -> None:
        """Replace the profile wholesale and persist it."""
        self._profile = profile.model_copy(deep=True)
        self._save_profile()
        self._emit(EventType.PROFILE_SAVED)

    def set_style(self, style: MentorStyle | str) -> MentorStyle:
        self._style = MentorStyle.parse(style)
        self._storage.set(KEY_STYLE, self._style.value)
        self._emit(EventType.STYLE_CHANGED, text=self._style.value)
        return self._style
