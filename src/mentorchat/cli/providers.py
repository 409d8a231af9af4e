"""Factory functions for CLI.

Centralizes creation of storage, the LLM provider and the mentor session from
configuration. Hides configuration details from command implementations.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from ..config import MentorConfig
from ..conversation import ConversationStore
from ..llm import LLMProvider, create_llm_provider
from ..mentor import MentorSession, ReplyGenerator
from ..storage import KeyValueStorage, create_storage

# Default console for output
_console = Console()


def configure_logging(level: str, console: Console | None = None) -> None:
    """Route log records through Rich so they do not garble command output."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
        force=True,
    )


def get_storage(config: MentorConfig) -> KeyValueStorage:
    """Create the key-value storage backend.

    Returns:
        JSON-file storage rooted at ``config.data_dir``, or in-memory storage
    """
    if config.storage_backend == "memory":
        return create_storage("memory")
    return create_storage("json", path=config.data_dir)


def get_store(config: MentorConfig) -> ConversationStore:
    return ConversationStore(get_storage(config))


def get_llm(
    config: MentorConfig,
    store: ConversationStore | None = None,
    console: Console | None = None
) -> LLMProvider | None:
    """Create LLM provider from configuration.

    Falls back to a credential provisioned in storage when the environment
    has none for the OpenAI provider.

    Returns:
        LLM provider instance, or None if no credential is available
    """
    con = console or _console
    provider = config.llm_provider

    if provider == "openai":
        api_key = config.openai_api_key or (store.api_key if store else None)
        if not api_key:
            return None
        return create_llm_provider("openai", api_key=api_key, model=config.openai_chat_model)

    elif provider == "deepseek":
        if not config.deepseek_api_key:
            con.print("[yellow]Warning: DEEPSEEK_API_KEY not set, using local mentor replies[/yellow]")
            return None
        return create_llm_provider("deepseek", api_key=config.deepseek_api_key, model=config.deepseek_model)

    con.print(f"[red]Error: Unknown LLM provider: {provider}[/red]")
    return None


def get_session(
    config: MentorConfig,
    console: Console | None = None
) -> tuple[MentorSession, LLMProvider | None]:
    """Build a mentor session.

    Returns:
        The session and the LLM provider it uses (to be closed by the caller)
    """
    store = get_store(config)
    llm = get_llm(config, store, console)
    generator = ReplyGenerator(llm=llm, latency_scale=config.latency_scale)
    return MentorSession(store, generator), llm
