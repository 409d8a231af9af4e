"""Unit tests for prompt loading and rendering."""
import pytest

from mentorchat.prompts import (
    clear_cache,
    get_mentor_prompt,
    get_profile_prompt,
    load_prompt,
    render_prompt,
)


@pytest.fixture
def prompt_dir(tmp_path, monkeypatch):
    """Working directory with an empty ./prompts override folder."""
    monkeypatch.chdir(tmp_path)
    directory = tmp_path / "prompts"
    directory.mkdir()
    clear_cache()
    yield directory
    clear_cache()


class TestPrompts:
    """Tests for the packaged mentor prompts."""

    def test_mentor_prompt_embeds_style(self):
        prompt = get_mentor_prompt("direct")

        assert "Tone: direct." in prompt
        assert "{style}" not in prompt
        assert prompt == prompt.strip()

    def test_profile_prompt_is_json(self):
        prompt = get_profile_prompt({"fullname": "Zoë", "prefs": {"funding": True}})

        assert prompt == 'Profile: {"fullname": "Zoë", "prefs": {"funding": true}}'

    def test_missing_prompt_raises(self):
        with pytest.raises(FileNotFoundError):
            load_prompt("no_such_prompt")


class TestPromptOverrides:
    """Tests for prompts overridden from the working directory."""

    def test_local_file_takes_precedence(self, prompt_dir):
        (prompt_dir / "mentor_system.txt").write_text("Be {style} and brief.\n", encoding="utf-8")

        assert get_mentor_prompt("supportive") == "Be supportive and brief."

    def test_literal_braces_survive_rendering(self, prompt_dir):
        (prompt_dir / "mentor_system.txt").write_text(
            'Tone: {style}. Reply as {"advice": "..."}', encoding="utf-8"
        )

        assert get_mentor_prompt("investor") == 'Tone: investor. Reply as {"advice": "..."}'

    def test_unknown_placeholders_are_left_alone(self, prompt_dir):
        (prompt_dir / "greeting.txt").write_text("Hi {name}, {unknown}", encoding="utf-8")

        assert render_prompt("greeting", name="Ada") == "Hi Ada, {unknown}"
