"""Tests for the event channel and the frame scheduler."""

import logging
from unittest.mock import Mock

from snake_engine.events import EventChannel, GameEvent
from snake_engine.scheduler import FrameScheduler


class TestEventChannel:

    def test_all_subscribers_receive_payload_in_order(self):
        channel = EventChannel()
        calls = []
        channel.subscribe(GameEvent.GAME_OVER, lambda score: calls.append(("a", score)))
        channel.subscribe(GameEvent.GAME_OVER, lambda score: calls.append(("b", score)))

        channel.emit(GameEvent.GAME_OVER, 40)

        assert calls == [("a", 40), ("b", 40)]

    def test_events_are_routed_by_kind(self):
        channel = EventChannel()
        handler = Mock()
        channel.subscribe(GameEvent.FOOD_EATEN, handler)

        channel.emit(GameEvent.GAME_OVER, 10)

        handler.assert_not_called()

    def test_unsubscribe(self):
        channel = EventChannel()
        handler = Mock()
        unsubscribe = channel.subscribe(GameEvent.STATE_CHANGED, handler)

        unsubscribe()
        unsubscribe()  # second call is harmless
        channel.emit(GameEvent.STATE_CHANGED, object())

        handler.assert_not_called()
        assert channel.has_subscribers(GameEvent.STATE_CHANGED) is False

    def test_failing_handler_is_logged_and_others_still_run(self, caplog):
        channel = EventChannel()
        after = Mock()
        channel.subscribe(GameEvent.FOOD_EATEN, Mock(side_effect=RuntimeError("boom")))
        channel.subscribe(GameEvent.FOOD_EATEN, after)

        with caplog.at_level(logging.ERROR, logger="snake_engine.events"):
            channel.emit(GameEvent.FOOD_EATEN, (1, 2))

        after.assert_called_once_with((1, 2))
        assert "food_eaten" in caplog.text

    def test_clear(self):
        channel = EventChannel()
        handler = Mock()
        for event in GameEvent:
            channel.subscribe(event, handler)

        channel.clear()
        for event in GameEvent:
            channel.emit(event, None)

        handler.assert_not_called()


class TestFrameScheduler:

    def test_callback_runs_once_with_frame_time(self):
        scheduler = FrameScheduler()
        callback = Mock()
        scheduler.request(callback)

        assert scheduler.run_frame(16.0) == 1
        assert scheduler.run_frame(32.0) == 0
        callback.assert_called_once_with(16.0)

    def test_cancel_prevents_callback(self):
        scheduler = FrameScheduler()
        callback = Mock()
        handle = scheduler.request(callback)

        scheduler.cancel(handle)
        scheduler.run_frame(16.0)

        callback.assert_not_called()
        assert scheduler.pending == 0

    def test_cancel_unknown_or_none_handle_is_noop(self):
        scheduler = FrameScheduler()
        scheduler.cancel(None)
        scheduler.cancel(999)
        assert scheduler.pending == 0

    def test_rescheduling_defers_to_next_frame(self):
        scheduler = FrameScheduler()
        frames = []

        def loop(now):
            frames.append(now)
            scheduler.request(loop)

        scheduler.request(loop)
        scheduler.run_frame(1.0)
        scheduler.run_frame(2.0)

        assert frames == [1.0, 2.0]
        assert scheduler.pending == 1

    def test_callback_cancelled_mid_frame_does_not_run(self):
        scheduler = FrameScheduler()
        second = Mock()
        handles = {}

        def first(now):
            scheduler.cancel(handles["second"])

        scheduler.request(first)
        handles["second"] = scheduler.request(second)
        scheduler.run_frame(5.0)

        second.assert_not_called()
