"""
mentorchat: a startup-mentorship chat core.

Persists chat transcripts and a founder profile to local storage and produces
mentor replies through a completion API or a deterministic local matcher.
"""

__version__ = "0.1.0"

from .config import MentorConfig
from .conversation import (
    Conversation,
    ConversationStore,
    MentorStyle,
    Message,
    Profile,
    Role,
)
from .mentor import MentorSession, ReplyGenerator
from .storage import KeyValueStorage, create_storage

__all__ = [
    "Conversation",
    "ConversationStore",
    "KeyValueStorage",
    "MentorConfig",
    "MentorSession",
    "MentorStyle",
    "Message",
    "Profile",
    "ReplyGenerator",
    "Role",
    "create_storage",
]
