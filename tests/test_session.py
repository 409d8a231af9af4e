"""Unit tests for the mentor chat session."""
import pytest

from mentorchat.conversation import EventType, MentorStyle, Role
from mentorchat.mentor import APOLOGY, MentorSession, ReplyGenerator, simulate_reply


class RecordingGenerator(ReplyGenerator):
    """Generator that records its inputs and returns a fixed reply."""

    def __init__(self, reply: str = "Canned reply."):
        super().__init__(latency_scale=0)
        self.reply = reply
        self.calls: list[dict] = []

    async def generate_reply(self, user_text, history=(), profile=None, style=MentorStyle.BALANCED):
        self.calls.append({"text": user_text, "history": list(history), "profile": profile, "style": style})
        return self.reply


class FailingGenerator(ReplyGenerator):
    """Generator that always raises."""

    async def generate_reply(self, user_text, history=(), profile=None, style=MentorStyle.BALANCED):
        raise RuntimeError("boom")


class TestSendMessage:
    """Tests for MentorSession.send_message."""

    @pytest.mark.asyncio
    async def test_appends_user_and_assistant_messages(self, store):
        session = MentorSession(store, RecordingGenerator())

        reply = await session.send_message("  How do I raise?  ")

        assert [(m.role, m.text) for m in store.current.messages] == [
            (Role.USER, "How do I raise?"),
            (Role.ASSISTANT, "Canned reply."),
        ]
        assert reply is store.current.messages[-1]

    @pytest.mark.asyncio
    async def test_blank_message_is_ignored(self, store):
        session = MentorSession(store, RecordingGenerator())

        assert await session.send_message("   ") is None
        assert store.current.messages == []

    @pytest.mark.asyncio
    async def test_generator_receives_prior_history_profile_and_style(self, store, sample_profile):
        generator = RecordingGenerator()
        session = MentorSession(store, generator)
        store.save_profile(sample_profile)
        store.set_style("direct")

        await session.send_message("first")
        await session.send_message("second")

        call = generator.calls[1]
        assert call["text"] == "second"
        assert [m.text for m in call["history"]] == ["first", "Canned reply."]
        assert call["profile"].fullname == "Ada Lovelace"
        assert call["style"] is MentorStyle.DIRECT

    @pytest.mark.asyncio
    async def test_failure_appends_apology_and_keeps_user_message(self, store):
        session = MentorSession(store, FailingGenerator())

        reply = await session.send_message("hello")

        assert reply.text == APOLOGY
        assert [m.text for m in store.current.messages] == ["hello", APOLOGY]

    @pytest.mark.asyncio
    async def test_typing_indicator_wraps_generation(self, store):
        events = []
        store.subscribe(lambda e: events.append(e.type))
        session = MentorSession(store, FailingGenerator())

        await session.send_message("hello")

        assert events == [
            EventType.MESSAGE_APPENDED,
            EventType.TYPING_STARTED,
            EventType.TYPING_FINISHED,
            EventType.MESSAGE_APPENDED,
        ]

    @pytest.mark.asyncio
    async def test_local_scenario(self, store):
        store.set_style("direct")
        session = MentorSession(store, ReplyGenerator(latency_scale=0))

        reply = await session.send_message("raise")

        assert reply.text == simulate_reply("raise", store.profile, MentorStyle.DIRECT)
        assert "1) One-sentence value prop" in reply.text
        assert "Follow-up: Do you have any traction metrics" in reply.text


class TestSessionCommands:
    """Tests for new/save/clear/load."""

    def test_save_emits_notice(self, store):
        notices = []
        store.subscribe(lambda e: notices.append(e.text) if e.type is EventType.NOTICE else None)
        session = MentorSession(store)

        session.save("Named")

        assert notices == ["Conversation saved locally."]
        assert store.saved[0].name == "Named"

    def test_new_clear_and_load(self, store):
        session = MentorSession(store)
        store.append_message(store.current, Role.USER, "keep me")
        session.save()
        saved_id = store.current.id

        fresh = session.new_chat()
        assert store.current is fresh and fresh.id != saved_id

        store.append_message(fresh, Role.USER, "scratch")
        session.clear()
        assert store.current.messages == []

        loaded = session.load(saved_id)
        assert [m.text for m in loaded.messages] == ["keep me"]
        assert session.load("c_unknown") is None
