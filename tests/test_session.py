"""Unit tests for chat session state."""
from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta

import pytest

from bubblechat.ui.models import Sender
from bubblechat.ui.session import ChatSession


@pytest.fixture
def session(surface, scheduler, fixed_clock):
    return ChatSession(surface=surface, scheduler=scheduler, clock=fixed_clock)


class TestAppend:
    """Tests for ChatSession.append."""

    def test_messages_kept_in_call_order(self, session):
        for i in range(5):
            session.append(Sender.SELF, f"message {i}")

        assert [m.text for m in session.messages] == [f"message {i}" for i in range(5)]

    def test_earlier_messages_unchanged(self, session):
        first = session.append(Sender.SELF, "first")
        snapshot = (first.id, first.sender, first.text, first.timestamp)
        session.append(Sender.COUNTERPARTY, "second")

        kept = session.messages[0]
        assert (kept.id, kept.sender, kept.text, kept.timestamp) == snapshot

    def test_messages_are_immutable(self, session):
        message = session.append(Sender.SELF, "hi")
        with pytest.raises(FrozenInstanceError):
            message.text = "changed"  # type: ignore

    def test_ids_are_unique(self, session):
        ids = {session.append(Sender.SELF, "x").id for _ in range(20)}
        assert len(ids) == 20

    def test_accepts_sender_names(self, session):
        message = session.append("counterparty", "hi")
        assert message.sender is Sender.COUNTERPARTY

    def test_rejects_unknown_sender(self, session):
        with pytest.raises(ValueError):
            session.append("narrator", "hi")

    def test_timestamps_never_go_backwards(self, surface):
        times = iter([datetime(2024, 1, 1, 12, 0), datetime(2024, 1, 1, 11, 0)])
        session = ChatSession(surface=surface, clock=lambda: next(times, datetime(2024, 1, 1, 11, 0)))

        first = session.append(Sender.SELF, "a")
        second = session.append(Sender.SELF, "b")
        assert second.timestamp >= first.timestamp

    def test_renders_after_each_append(self, session, surface):
        session.append(Sender.SELF, "hi")
        assert surface.calls == ["set", "scroll", "refresh"]
        assert "│ hi │" in surface.plain

    def test_messages_snapshot_is_read_only(self, session):
        session.append(Sender.SELF, "hi")
        assert isinstance(session.messages, tuple)


class TestTyping:
    """Tests for the typing indicator and its timer."""

    def test_start_creates_one_timer(self, session, scheduler):
        session.set_typing(True)
        session.set_typing(True)

        assert len(scheduler.timers) == 1
        assert scheduler.timers[0].interval == 0.3

    def test_double_start_advances_one_frame_per_tick(self, session, scheduler):
        session.set_typing(True)
        session.set_typing(True)
        scheduler.tick()
        assert session.typing_frame == 1

    def test_tick_rerenders_with_next_glyph(self, session, scheduler, surface):
        session.set_typing(True)
        scheduler.tick(2)
        assert "│ .. │" in surface.plain

    def test_stop_cancels_timer_and_resets_frame(self, session, scheduler, surface):
        session.set_typing(True)
        scheduler.tick(3)
        session.set_typing(False)

        assert scheduler.timers[0].stopped
        assert session.typing_frame == 0
        assert not session.typing_active
        assert "╭" not in surface.plain

    def test_stop_when_inactive_only_renders(self, session, scheduler, surface):
        session.set_typing(False)

        assert scheduler.timers == []
        assert surface.calls == ["set", "scroll", "refresh"]

    def test_restart_creates_fresh_timer(self, session, scheduler):
        session.set_typing(True)
        session.set_typing(False)
        session.set_typing(True)

        assert len(scheduler.timers) == 2
        assert len(scheduler.live) == 1

    def test_typing_without_scheduler_still_draws(self, surface, fixed_clock):
        session = ChatSession(surface=surface, clock=fixed_clock)
        session.set_typing(True)
        assert session.typing_active
        assert "╭───╮" in surface.plain

    def test_close_cancels_timer(self, session, scheduler):
        session.set_typing(True)
        session.close()
        assert scheduler.live == []

    def test_attach_starts_timer_for_pending_typing(self, surface, scheduler, fixed_clock):
        session = ChatSession(clock=fixed_clock)
        session.set_typing(True)
        session.attach(surface, scheduler=scheduler)

        assert len(scheduler.live) == 1
        scheduler.tick()
        assert session.typing_frame == 1

    def test_attach_does_not_add_second_timer(self, session, surface, scheduler):
        session.set_typing(True)
        session.attach(surface, scheduler=scheduler)
        assert len(scheduler.timers) == 1


class TestRender:
    """Tests for rendering into the display surface."""

    def test_render_without_surface_is_noop(self, fixed_clock):
        session = ChatSession(clock=fixed_clock)
        session.append(Sender.SELF, "hi")
        assert len(session.messages) == 1

    def test_attach_renders_existing_messages(self, surface, fixed_clock):
        session = ChatSession(clock=fixed_clock)
        session.append(Sender.SELF, "hi")
        session.attach(surface)

        assert surface.calls == ["set", "scroll", "refresh"]
        assert "│ hi │" in surface.plain

    def test_attach_keeps_existing_scheduler(self, surface, scheduler, fixed_clock):
        session = ChatSession(scheduler=scheduler, clock=fixed_clock)
        session.attach(surface)
        session.set_typing(True)
        assert len(scheduler.timers) == 1

    def test_layout_uses_surface_width(self, surface, fixed_clock):
        surface.width = 40
        session = ChatSession(surface=surface, clock=fixed_clock)
        session.append(Sender.SELF, "hi")

        first_row = surface.plain.split("\n")[0]
        assert len(first_row) == 40 - 2

    def test_typing_bubble_uses_clock(self, surface):
        moment = datetime(2024, 1, 1, 9, 30) + timedelta(minutes=1)
        session = ChatSession(surface=surface, clock=lambda: moment)
        session.set_typing(True)
        assert "09:31" in surface.plain
