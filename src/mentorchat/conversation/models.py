"""Data models for conversations and the founder profile.

These models define the persisted document shapes, independent of the
storage backend used. Field aliases keep the on-disk format compatible with
records written by the original browser app (``createdAt``, legacy ``ts``
timestamps and the legacy ``"ai"`` role).
"""

import random
import string
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONVERSATION_NAME = "Untitled"

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 7


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_conversation_id() -> str:
    """Generate a short random conversation id such as ``c_k3j9x0a``.

    Collisions are possible but not checked.
    """
    return "c_" + "".join(random.choices(_ID_ALPHABET, k=_ID_LENGTH))


class Role(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class MentorStyle(str, Enum):
    """Tone used by the mentor when phrasing replies."""

    SUPPORTIVE = "supportive"
    DIRECT = "direct"
    INVESTOR = "investor"
    BALANCED = "balanced"

    @classmethod
    def parse(cls, value: "str | MentorStyle | None") -> "MentorStyle":
        """Parse a style name, falling back to BALANCED for unknown values."""
        if isinstance(value, MentorStyle):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.BALANCED


class Message(BaseModel):
    """A single chat message. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    role: Role = Field(description="Who wrote the message")
    text: str = Field(description="Message body")
    timestamp: str = Field(
        default_factory=now_iso,
        validation_alias=AliasChoices("timestamp", "ts"),
        description="ISO-8601 creation time"
    )

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: Any) -> Any:
        """Accept the legacy ``ai`` role written by older clients."""
        if v == "ai":
            return Role.ASSISTANT
        return v


class Conversation(BaseModel):
    """A named, timestamped sequence of messages."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_conversation_id)
    name: str = Field(default=DEFAULT_CONVERSATION_NAME)
    created_at: str = Field(default_factory=now_iso, alias="createdAt")
    messages: list[Message] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v: Any) -> Any:
        return v or DEFAULT_CONVERSATION_NAME

    @field_validator("messages", mode="before")
    @classmethod
    def default_messages(cls, v: Any) -> Any:
        return v if v is not None else []

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON document persisted in storage."""
        return self.model_dump(mode="json", by_alias=True)


class TopicPreferences(BaseModel):
    """Topics the founder wants the mentor to focus on."""

    funding: bool = False
    marketing: bool = False
    legal: bool = False
    ops: bool = False


class Profile(BaseModel):
    """The founder's profile.

    There is exactly one profile; saving overwrites it wholesale.
    Unknown keys are preserved so hand-edited records survive a round trip.
    """

    model_config = ConfigDict(extra="allow")

    fullname: str = ""
    email: str = ""
    role: str = ""
    startup: str = ""
    stage: str = ""
    industry: str = ""
    description: str = ""
    prefs: TopicPreferences = Field(default_factory=TopicPreferences)

    @property
    def first_name(self) -> str:
        parts = self.fullname.split()
        return parts[0] if parts else ""

    @property
    def display_name(self) -> str:
        """Name used to personalise replies: first name, else startup name."""
        return self.first_name or self.startup.strip()

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
