"""Prompt management module.

Externalizes prompts to text files for easy customization.
Prompts can be overridden by placing files in the working directory.
"""

import json
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

# Default prompts directory (package location)
_PROMPTS_DIR = Path(__file__).parent


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt from file.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: mentorchat/prompts/{name}.txt

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt text content

    Raises:
        FileNotFoundError: If prompt file not found in any location
    """
    filename = f"{name}.txt"

    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8")

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8")

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def render_prompt(name: str, **values: str) -> str:
    """Load a prompt and fill its ``{placeholder}`` fields.

    Only the named placeholders are replaced, so prompt files may contain
    other literal braces (JSON examples, templates) without escaping.

    Args:
        name: Prompt name (without .txt extension)
        **values: Placeholder values

    Returns:
        Prompt text with surrounding whitespace removed
    """
    text = load_prompt(name).strip()
    for key, value in values.items():
        text = text.replace("{" + key + "}", value)
    return text


def get_mentor_prompt(style: str) -> str:
    """Mentor system instruction for the given tone."""
    return render_prompt("mentor_system", style=style)


def get_profile_prompt(profile: Mapping[str, Any]) -> str:
    """System message carrying the founder profile as JSON."""
    return render_prompt("mentor_profile", profile=json.dumps(dict(profile), ensure_ascii=False))


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "load_prompt",
    "render_prompt",
    "get_mentor_prompt",
    "get_profile_prompt",
    "clear_cache",
]
