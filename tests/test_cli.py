"""Tests for the command-line interface."""
import pytest
from typer.testing import CliRunner

from mentorchat.cli.app import app
from mentorchat.config import MentorConfig
from mentorchat.conversation import ConversationStore
from mentorchat.storage import JSONFileStorage

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the CLI at a temporary data directory with no API keys."""
    monkeypatch.setenv("MENTORCHAT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("MENTORCHAT_STORAGE", "json")
    monkeypatch.setenv("MENTORCHAT_SIMULATED_LATENCY", "0")
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    return tmp_path


def _store(path) -> ConversationStore:
    return ConversationStore(JSONFileStorage(path))


class TestConfig:
    """Tests for MentorConfig.from_env."""

    def test_defaults(self):
        config = MentorConfig.from_env({})
        assert config.storage_backend == "json"
        assert config.llm_provider == "openai"
        assert config.openai_chat_model == "gpt-3.5-turbo"
        assert config.openai_api_key is None
        assert config.latency_scale == 1.0

    def test_overrides(self, tmp_path):
        config = MentorConfig.from_env({
            "MENTORCHAT_DATA_DIR": str(tmp_path),
            "MENTORCHAT_STORAGE": "MEMORY",
            "MENTORCHAT_SIMULATED_LATENCY": "0",
            "OPENAI_API_KEY": "sk-x",
            "MENTORCHAT_LOG_LEVEL": "debug",
        })
        assert config.data_dir == tmp_path
        assert config.storage_backend == "memory"
        assert config.latency_scale == 0.0
        assert config.openai_api_key == "sk-x"
        assert config.log_level == "DEBUG"

    def test_invalid_backend_rejected(self):
        with pytest.raises(ValueError):
            MentorConfig.from_env({"MENTORCHAT_STORAGE": "redis"})


class TestCommands:
    """Tests for individual CLI commands."""

    def test_ask_uses_local_mentor(self, data_dir):
        result = runner.invoke(app, ["ask", "How do we raise a seed round?"])

        assert result.exit_code == 0, result.output
        assert "Follow-up" in result.output
        messages = _store(data_dir).current.messages
        assert [m.role.value for m in messages] == ["user", "assistant"]

    def test_save_history_and_load(self, data_dir):
        runner.invoke(app, ["ask", "growth ideas"])

        result = runner.invoke(app, ["save", "--name", "Growth"])
        assert result.exit_code == 0, result.output
        assert "Conversation saved locally." in result.output

        saved_id = _store(data_dir).saved[0].id
        history = runner.invoke(app, ["history"])
        assert saved_id in history.output
        assert "Growth" in history.output

        runner.invoke(app, ["new"])
        assert _store(data_dir).current.id != saved_id

        loaded = runner.invoke(app, ["load", saved_id])
        assert loaded.exit_code == 0
        assert _store(data_dir).current.id == saved_id

    def test_load_unknown_id_fails(self, data_dir):
        result = runner.invoke(app, ["load", "c_missing"])
        assert result.exit_code == 1
        assert "no saved conversation" in result.output

    def test_clear_requires_confirmation(self, data_dir):
        runner.invoke(app, ["ask", "hello"])

        aborted = runner.invoke(app, ["clear"], input="n\n")
        assert "Aborted" in aborted.output
        assert len(_store(data_dir).current.messages) == 2

        result = runner.invoke(app, ["clear", "--yes"])
        assert result.exit_code == 0
        assert _store(data_dir).current.messages == []

    def test_style_show_and_set(self, data_dir):
        assert runner.invoke(app, ["style"]).output.strip() == "balanced"

        result = runner.invoke(app, ["style", "investor"])
        assert result.exit_code == 0
        assert _store(data_dir).style.value == "investor"

    def test_style_rejects_unknown(self, data_dir):
        result = runner.invoke(app, ["style", "shouty"])
        assert result.exit_code != 0

    def test_profile_set_and_show(self, data_dir):
        result = runner.invoke(app, [
            "profile", "set",
            "--fullname", "Ada Lovelace",
            "--stage", "seed",
            "--pref", "funding",
            "--pref", "legal",
        ])
        assert result.exit_code == 0, result.output

        profile = _store(data_dir).profile
        assert profile.fullname == "Ada Lovelace"
        assert profile.prefs.funding and profile.prefs.legal
        assert not profile.prefs.marketing

        runner.invoke(app, ["profile", "set", "--startup", "Engine Labs"])
        profile = _store(data_dir).profile
        assert profile.fullname == "Ada Lovelace"
        assert profile.startup == "Engine Labs"

        shown = runner.invoke(app, ["profile", "show"])
        assert "Engine Labs" in shown.output

    def test_profile_set_rejects_unknown_pref(self, data_dir):
        result = runner.invoke(app, ["profile", "set", "--pref", "astrology"])
        assert result.exit_code != 0

    def test_stats(self, data_dir):
        runner.invoke(app, ["ask", "hello"])
        runner.invoke(app, ["save"])

        result = runner.invoke(app, ["stats"])
        assert result.exit_code == 0
        assert "Conversations" in result.output

    def test_health_without_keys(self, data_dir):
        result = runner.invoke(app, ["health"])
        assert result.exit_code == 0
        assert "NOT SET" in result.output

    def test_chat_repl(self, data_dir):
        result = runner.invoke(app, ["chat"], input="/save First\nwhat about pricing?\n/history\n/quit\n")

        assert result.exit_code == 0, result.output
        assert "local mentor replies" in result.output
        store = _store(data_dir)
        assert store.saved[0].name == "First"
        assert store.current.messages[0].text == "what about pricing?"
