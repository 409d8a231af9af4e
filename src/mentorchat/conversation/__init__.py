"""Conversation state for mentorchat.

Holds the saved conversation list, the current conversation and the profile,
and persists them to key-value storage.
"""

from .events import EventEmitter, EventType, Listener, StoreEvent
from .models import (
    DEFAULT_CONVERSATION_NAME,
    Conversation,
    MentorStyle,
    Message,
    Profile,
    Role,
    TopicPreferences,
)
from .store import MAX_SAVED_CONVERSATIONS, ConversationStore, StoreStats

__all__ = [
    "DEFAULT_CONVERSATION_NAME",
    "MAX_SAVED_CONVERSATIONS",
    "Conversation",
    "ConversationStore",
    "EventEmitter",
    "EventType",
    "Listener",
    "MentorStyle",
    "Message",
    "Profile",
    "Role",
    "StoreEvent",
    "StoreStats",
    "TopicPreferences",
]
