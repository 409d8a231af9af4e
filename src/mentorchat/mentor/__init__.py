"""Mentor reply generation and the chat session flow."""

from .generator import ReplyGenerator
from .intents import INTENT_KEYWORDS, Intent, detect_intent, string_hash
from .session import APOLOGY, MentorSession
from .simulator import SimulatedReply, build_reply, simulate_reply, simulated_delay_ms

__all__ = [
    "APOLOGY",
    "INTENT_KEYWORDS",
    "Intent",
    "MentorSession",
    "ReplyGenerator",
    "SimulatedReply",
    "build_reply",
    "detect_intent",
    "simulate_reply",
    "simulated_delay_ms",
    "string_hash",
]
