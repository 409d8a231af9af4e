"""Rich rendering of conversations, the saved list and store events.

The console renderer subscribes to the store and draws whatever changed.
"""

from datetime import datetime

from rich.console import Console
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text

from ..conversation import Conversation, EventType, Message, Role, StoreEvent, StoreStats
from ..conversation.models import Profile


def format_date(iso: str) -> str:
    """Render an ISO-8601 timestamp in local time; unparsable values pass through."""
    try:
        value = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return iso
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


def render_message(console: Console, message: Message) -> None:
    if message.role is Role.USER:
        console.print(Panel(Text(message.text), title="You", title_align="left", border_style="cyan"))
    else:
        console.print(Panel(Text(message.text), title="Mentor", title_align="left", border_style="magenta"))


def render_conversation(console: Console, conversation: Conversation) -> None:
    console.print(
        f"[bold]{conversation.name}[/bold] [dim]{conversation.id} | "
        f"{format_date(conversation.created_at)}[/dim]"
    )
    if not conversation.messages:
        console.print("[dim]No messages yet.[/dim]")
    for message in conversation.messages:
        render_message(console, message)


def render_saved_list(console: Console, conversations: list[Conversation]) -> None:
    if not conversations:
        console.print("[dim]No conversations yet. Start a chat and save it.[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=3)
    table.add_column("ID", style="yellow")
    table.add_column("Name")
    table.add_column("Created", style="dim")
    table.add_column("Msgs", justify="right")

    for i, conversation in enumerate(conversations, 1):
        table.add_row(
            str(i),
            conversation.id,
            conversation.name,
            format_date(conversation.created_at),
            str(len(conversation.messages)),
        )
    console.print(table)


def render_stats(console: Console, stats: StoreStats) -> None:
    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="bold cyan", width=15)
    table.add_column("Value")
    table.add_row("Conversations", str(stats.conversations))
    table.add_row("Messages", str(stats.messages))
    console.print(table)


def render_profile(console: Console, profile: Profile) -> None:
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold cyan", width=12)
    table.add_column("Value")
    for field in ("fullname", "email", "role", "startup", "stage", "industry", "description"):
        table.add_row(field, getattr(profile, field) or "[dim]-[/dim]")
    prefs = [name for name, enabled in profile.prefs.model_dump().items() if enabled]
    table.add_row("prefs", ", ".join(prefs) or "[dim]-[/dim]")
    console.print(table)


class ConsoleRenderer:
    """Store subscriber that prints changes as they happen."""

    def __init__(self, console: Console):
        self._console = console
        self._status: Status | None = None

    def __call__(self, event: StoreEvent) -> None:
        if event.type is EventType.MESSAGE_APPENDED and event.message is not None:
            render_message(self._console, event.message)
        elif event.type is EventType.TYPING_STARTED:
            self._status = self._console.status("[dim]Mentor is thinking...[/dim]")
            self._status.start()
        elif event.type is EventType.TYPING_FINISHED:
            if self._status is not None:
                self._status.stop()
                self._status = None
        elif event.type is EventType.CONVERSATION_CHANGED and event.conversation is not None:
            render_conversation(self._console, event.conversation)
        elif event.type is EventType.NOTICE and event.text:
            self._console.print(f"[green]{event.text}[/green]")
        elif event.type is EventType.PROFILE_SAVED:
            self._console.print("[green]Profile saved.[/green]")
        elif event.type is EventType.STYLE_CHANGED and event.text:
            self._console.print(f"[green]Mentor style set to {event.text}.[/green]")
