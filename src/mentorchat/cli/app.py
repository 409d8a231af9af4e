"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console

from ..config import MentorConfig
from ..conversation import MentorStyle, Profile, TopicPreferences
from ..mentor import MentorSession
from .providers import configure_logging, get_session, get_store
from .render import (
    ConsoleRenderer,
    render_conversation,
    render_profile,
    render_saved_list,
    render_stats,
)

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="mentorchat",
    help="Startup mentor chat with locally saved conversations",
    no_args_is_help=True,
    add_completion=True,
)
profile_app = typer.Typer(help="View or edit the founder profile", no_args_is_help=True)
app.add_typer(profile_app, name="profile")

# Console for rich output
console = Console()

CHAT_HELP = (
    "[dim]Commands: /new, /save [name], /clear, /load <id>, /history, "
    "/style <name>, /help, /quit[/dim]"
)
STYLE_NAMES = [s.value for s in MentorStyle]


def _config() -> MentorConfig:
    try:
        return MentorConfig.from_env()
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Error: invalid configuration: {e}[/red]")
        raise typer.Exit(code=1)


def _parse_style(value: str) -> MentorStyle:
    if value.strip().lower() not in STYLE_NAMES:
        raise typer.BadParameter(f"Style must be one of: {', '.join(STYLE_NAMES)}")
    return MentorStyle(value.strip().lower())


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging"
    )
):
    """Startup mentor chat."""
    configure_logging("DEBUG" if verbose else _config().log_level)


def _handle_chat_command(session: MentorSession, line: str) -> bool:
    """Run a slash command typed in the chat REPL. Returns False to quit."""
    command, _, arg = line.partition(" ")
    arg = arg.strip()
    store = session.store

    if command in ("/quit", "/exit"):
        return False
    if command == "/new":
        session.new_chat()
    elif command == "/save":
        session.save(arg or None)
    elif command == "/clear":
        session.clear()
    elif command == "/load":
        if not arg:
            console.print("[yellow]Usage: /load <id>[/yellow]")
        elif session.load(arg) is None:
            console.print(f"[yellow]No saved conversation with id {arg}[/yellow]")
    elif command == "/history":
        render_saved_list(console, store.saved)
    elif command == "/style":
        if arg.lower() in STYLE_NAMES:
            store.set_style(arg)
        else:
            console.print(f"[yellow]Style must be one of: {', '.join(STYLE_NAMES)}[/yellow]")
    elif command == "/help":
        console.print(CHAT_HELP)
    else:
        console.print(f"[yellow]Unknown command: {command}[/yellow]")
        console.print(CHAT_HELP)
    return True


@app.command()
def chat():
    """Interactive chat with the mentor in the current conversation."""
    config = _config()

    async def _chat():
        session, llm = get_session(config, console)
        session.store.subscribe(ConsoleRenderer(console))

        try:
            if llm:
                console.print(f"[dim]Mentor model: {llm.model}[/dim]")
            else:
                console.print("[dim]No API key configured, using local mentor replies[/dim]")
            console.print(f"[dim]Style: {session.store.style.value}[/dim]")
            console.print(CHAT_HELP)
            render_conversation(console, session.store.current)

            while True:
                try:
                    text = console.input("[bold cyan]You>[/bold cyan] ")
                except (EOFError, KeyboardInterrupt):
                    console.print()
                    break

                text = text.strip()
                if not text:
                    continue
                if text.startswith("/"):
                    if not _handle_chat_command(session, text):
                        break
                    continue

                await session.send_message(text)
        finally:
            if llm:
                await llm.close()

    asyncio.run(_chat())


@app.command()
def ask(
    text: str = typer.Argument(..., help="Message to send to the mentor")
):
    """Send one message in the current conversation and print the reply."""
    config = _config()

    async def _ask():
        session, llm = get_session(config, console)
        session.store.subscribe(ConsoleRenderer(console))
        try:
            if await session.send_message(text) is None:
                console.print("[yellow]Nothing to send[/yellow]")
                raise typer.Exit(code=1)
        finally:
            if llm:
                await llm.close()

    asyncio.run(_ask())


@app.command()
def show():
    """Show the current conversation."""
    store = get_store(_config())
    render_conversation(console, store.current)


@app.command()
def new(
    name: str = typer.Option(
        None,
        "--name",
        "-n",
        help="Name of the new conversation"
    )
):
    """Start a new conversation. The previous one is kept only if it was saved."""
    store = get_store(_config())
    conversation = store.create_conversation(name)
    console.print(f"[green]Started conversation {conversation.id}[/green]")


@app.command()
def save(
    name: str = typer.Option(
        None,
        "--name",
        "-n",
        help="Name to save the conversation under"
    )
):
    """Save the current conversation to the saved list."""
    store = get_store(_config())
    session = MentorSession(store)
    store.subscribe(ConsoleRenderer(console))
    session.save(name)


@app.command()
def clear(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    )
):
    """Clear the current conversation. Saved copies are not deleted."""
    if not yes:
        confirm = typer.confirm("Clear the current conversation? This will not delete saved copies.")
        if not confirm:
            console.print("[dim]Aborted.[/dim]")
            return

    store = get_store(_config())
    store.clear_current()
    console.print("[green]Current conversation cleared.[/green]")


@app.command()
def load(
    conversation_id: str = typer.Argument(..., help="ID of a saved conversation")
):
    """Make a copy of a saved conversation current."""
    store = get_store(_config())
    conversation = store.load_from_saved(conversation_id)
    if conversation is None:
        console.print(f"[red]Error: no saved conversation with id {conversation_id}[/red]")
        raise typer.Exit(code=1)
    render_conversation(console, conversation)


@app.command()
def history(
    limit: int = typer.Option(
        0,
        "--limit",
        "-l",
        help="Show only the most recent N conversations (0 shows all)"
    )
):
    """List saved conversations, most recent first."""
    store = get_store(_config())
    conversations = store.recent(limit) if limit > 0 else store.saved
    render_saved_list(console, conversations)


@app.command()
def stats():
    """Show conversation and message counts."""
    store = get_store(_config())
    render_stats(console, store.stats())


@app.command()
def style(
    value: str = typer.Argument(
        None,
        help="New mentor style: supportive, direct, investor or balanced"
    )
):
    """Show or set the mentor style."""
    store = get_store(_config())
    if value is None:
        console.print(store.style.value)
        return
    store.set_style(_parse_style(value))
    console.print(f"[green]Mentor style set to {store.style.value}.[/green]")


@app.command()
def health():
    """Check storage and API key configuration."""
    config = _config()

    try:
        store = get_store(config)
        console.print(f"[green]+[/green] Storage ({config.storage_backend}): OK")
    except OSError as e:
        console.print(f"[red]x[/red] Storage ({config.storage_backend}): FAILED ({e})")
        raise typer.Exit(code=1)

    if config.storage_backend == "json":
        console.print(f"[dim]  Data directory: {config.data_dir}[/dim]")

    if config.openai_api_key:
        console.print("[green]+[/green] OpenAI API key: SET (environment)")
    elif store.api_key:
        console.print("[green]+[/green] OpenAI API key: SET (storage)")
    else:
        console.print("[yellow]![/yellow] OpenAI API key: NOT SET (local mentor replies)")

    if config.deepseek_api_key:
        console.print("[green]+[/green] DeepSeek API key: SET")
    else:
        console.print("[yellow]![/yellow] DeepSeek API key: NOT SET")

    console.print(f"[dim]LLM provider: {config.llm_provider}[/dim]")


@profile_app.command("show")
def profile_show():
    """Show the founder profile."""
    store = get_store(_config())
    render_profile(console, store.profile)


@profile_app.command("set")
def profile_set(
    fullname: str = typer.Option(None, "--fullname", help="Full name"),
    email: str = typer.Option(None, "--email", help="Email address"),
    role: str = typer.Option(None, "--role", help="Your role, e.g. CEO"),
    startup: str = typer.Option(None, "--startup", help="Startup name"),
    stage: str = typer.Option(None, "--stage", help="Stage, e.g. idea, pre-seed, seed"),
    industry: str = typer.Option(None, "--industry", help="Industry"),
    description: str = typer.Option(None, "--description", help="One-paragraph description"),
    prefs: list[str] = typer.Option(
        None,
        "--pref",
        "-p",
        help="Topic preference (funding, marketing, legal, ops); repeat for several"
    ),
    clear_prefs: bool = typer.Option(False, "--clear-prefs", help="Turn off all topic preferences"),
):
    """Update profile fields; fields not given keep their current values."""
    store = get_store(_config())
    data = store.profile.to_document()

    updates = {
        "fullname": fullname,
        "email": email,
        "role": role,
        "startup": startup,
        "stage": stage,
        "industry": industry,
        "description": description,
    }
    for key, value in updates.items():
        if value is not None:
            data[key] = value.strip()

    if clear_prefs:
        data["prefs"] = TopicPreferences().model_dump()
    elif prefs:
        known = set(TopicPreferences.model_fields)
        unknown = [p for p in prefs if p not in known]
        if unknown:
            raise typer.BadParameter(
                f"Unknown preference(s): {', '.join(unknown)}. Choose from: {', '.join(sorted(known))}"
            )
        data["prefs"] = {name: name in prefs for name in known}

    store.save_profile(Profile.model_validate(data))
    console.print("[green]Profile saved.[/green]")
    render_profile(console, store.profile)


if __name__ == "__main__":
    app()
