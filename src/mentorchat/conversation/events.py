"""Change notifications emitted by the conversation store and mentor session.

Hides how front ends learn about state changes: the core only publishes
events, rendering is done by whoever subscribes.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .models import Conversation, Message


class EventType(str, Enum):
    """Kinds of state change a front end may react to."""

    MESSAGE_APPENDED = "message_appended"
    CONVERSATION_CHANGED = "conversation_changed"
    SAVED_LIST_CHANGED = "saved_list_changed"
    PROFILE_SAVED = "profile_saved"
    STYLE_CHANGED = "style_changed"
    TYPING_STARTED = "typing_started"
    TYPING_FINISHED = "typing_finished"
    NOTICE = "notice"


@dataclass(frozen=True)
class StoreEvent:
    """A single state-change notification."""

    type: EventType
    conversation: Conversation | None = None
    message: Message | None = None
    text: str | None = None


Listener = Callable[[StoreEvent], None]


class EventEmitter:
    """Minimal synchronous publisher.

    Listeners are called in subscription order on the caller's thread.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: StoreEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
