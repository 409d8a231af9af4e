"""Local, deterministic mentor replies.

Used when no completion API is configured or the remote call fails.
Given the same input text, profile and style the reply is always the same.
"""

from dataclasses import dataclass

from ..conversation.models import MentorStyle, Profile
from .intents import Intent, detect_intent, string_hash

ADVICE: dict[Intent, tuple[str, ...]] = {
    Intent.FUNDING: (
        "Start with a 1-page summary, then a 10-slide deck: problem, solution, market size, "
        "traction, team, financials, and ask.",
        "Get 3 pilot customers and quantify metrics (MRR, conversion) before scaling outreach.",
    ),
    Intent.MARKETING: (
        "Pick 2 channels, run 3 experiments each week, measure CAC and retention for each.",
        "Create a 4-week content calendar targeting your top ICP segment.",
    ),
    Intent.LEGAL: (
        "Use a simple contractor agreement and an IP assignment clause for early hires/contractors.",
        "Document incorporation and cap table basics; keep records of founder agreements.",
    ),
    Intent.OPS: (
        "Define the first 3 hires and create onboarding checklists for them.",
        "Track weekly OKRs and run short retros to iterate operations.",
    ),
    Intent.PRICING: (
        "Run a pricing pilot with 3 customers to test willingness to pay and adjust tiers.",
        "Focus on value metrics (time saved, revenue uplift) when presenting price.",
    ),
    Intent.PITCH: (
        "I can draft a short investor email or a pitch deck outline. Which do you prefer?",
        "Highlight traction, clear market, and an explicit ask (amount + use of funds).",
    ),
    Intent.FALLBACK: (
        "Clarify the one problem you are solving and who you are solving it for.",
        "Design a small experiment to validate assumptions in 2 weeks.",
    ),
}

NUMBERED_ACTIONS = (
    "1) One-sentence value prop",
    "2) Top metric to improve",
    "3) Next experiment (1-week)",
    "4) Decide success criteria",
)

BULLET_ACTIONS = (
    "- Write a one-line value proposition",
    "- List top 3 assumptions",
    "- Run one small experiment to test an assumption",
)

FOLLOW_UPS: dict[Intent, str] = {
    Intent.FUNDING: "Do you have any traction metrics (revenue, users) I can use to draft a short pitch?",
    Intent.MARKETING: "Who is your ideal customer (one sentence)?",
    Intent.LEGAL: "Do you have any existing contracts or IP concerns?",
}
GENERIC_FOLLOW_UP = "Can you share one key metric or constraint to make this more actionable?"

OFFERS: dict[Intent, str] = {
    Intent.FUNDING: "(I can generate a sample pitch or investor email for you on request.)",
    Intent.MARKETING: "(I can create a short GTM checklist or content plan for you on request.)",
}

NEXT_STEPS_HEADER = "Suggested next steps:"


@dataclass(frozen=True)
class SimulatedReply:
    """A locally generated reply and how it was chosen."""

    intent: Intent
    advice: str
    text: str


def opener(style: MentorStyle, name: str = "") -> str:
    """First line of a reply, in the requested tone."""
    if style is MentorStyle.SUPPORTIVE:
        if name:
            return f"Thanks {name}, I hear you. Here's a friendly breakdown:"
        return "Thanks, I hear you. Here's a friendly breakdown:"
    if style is MentorStyle.DIRECT:
        return f"{name}, here's a concise plan:" if name else "Here's a concise plan:"
    if style is MentorStyle.INVESTOR:
        if name:
            return f"{name}, investor perspective. Focus on signal to investors:"
        return "Investor perspective. Focus on signal to investors:"
    return f"Good question, {name}. Here are the key points:" if name else "Good question. Here are the key points:"


def action_items(style: MentorStyle) -> tuple[str, ...]:
    if style in (MentorStyle.DIRECT, MentorStyle.INVESTOR):
        return NUMBERED_ACTIONS
    return BULLET_ACTIONS


def select_advice(text: str, intent: Intent) -> str:
    """Pick one advice line for ``intent``, deterministically from ``text``."""
    candidates = ADVICE[intent]
    return candidates[abs(string_hash(text.strip().lower())) % len(candidates)]


def build_reply(
    text: str,
    profile: Profile | None = None,
    style: MentorStyle | str = MentorStyle.BALANCED
) -> SimulatedReply:
    """Compose a full mentor reply for ``text``.

    Args:
        text: The user's message
        profile: Founder profile used to personalise the reply
        style: Tone of the reply

    Returns:
        SimulatedReply with the detected intent, chosen advice and final text
    """
    profile = profile or Profile()
    style = MentorStyle.parse(style)
    intent = detect_intent(text.strip())
    advice = select_advice(text, intent)

    stage = profile.stage.strip()
    sections = [
        opener(style, profile.display_name),
        f"{advice} (Stage: {stage})" if stage else advice,
        NEXT_STEPS_HEADER,
        "\n".join(action_items(style)),
        "Follow-up: " + FOLLOW_UPS.get(intent, GENERIC_FOLLOW_UP),
    ]
    if intent in OFFERS:
        sections.append(OFFERS[intent])

    return SimulatedReply(intent=intent, advice=advice, text="\n\n".join(sections))


def simulate_reply(
    text: str,
    profile: Profile | None = None,
    style: MentorStyle | str = MentorStyle.BALANCED
) -> str:
    """Reply text for ``text`` without any network access."""
    return build_reply(text, profile, style).text


def simulated_delay_ms(text: str) -> int:
    """Artificial thinking time for the local path, between 400 and 1199 ms."""
    return 400 + abs(string_hash(text)) % 800
