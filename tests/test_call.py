from callpanel.call import CallController
from callpanel.config import CallConfig
from callpanel.feed import MockFeed
from callpanel.models import CallState
from callpanel.scheduler import ManualScheduler


def _controller(**overrides):
    scheduler = ManualScheduler()
    config = CallConfig(feed_seed=7, **overrides)
    call = CallController(
        scheduler, MockFeed(seed=7), config, clock_label=lambda: "10:31:00"
    )
    return call, scheduler


def test_full_lifecycle_with_delays():
    call, scheduler = _controller()
    assert call.state is CallState.IDLE
    assert call.start() is True
    assert call.state is CallState.CONNECTING

    scheduler.advance(1.5)
    assert call.state is CallState.CONNECTING
    scheduler.advance(0.5)
    assert call.state is CallState.ACTIVE

    assert call.end() is True
    assert call.state is CallState.ENDED
    scheduler.advance(0.5)
    assert call.state is CallState.ENDED
    scheduler.advance(0.5)
    assert call.state is CallState.IDLE


def test_feed_appends_while_active_only():
    call, scheduler = _controller()
    initial = len(call.transcript)
    call.start()
    scheduler.advance(2.0)
    scheduler.advance(15.0)
    assert len(call.transcript) == initial + 3

    scheduler.advance(3.0)  # mid-interval
    call.end()
    scheduler.advance(30.0)
    assert call.state is CallState.IDLE
    assert len(call.transcript) == initial + 3
    assert scheduler.pending_count == 0


def test_feed_entries_are_appended_in_order_with_unique_ids():
    call, scheduler = _controller(feed_period_seconds=1.0)
    before = call.transcript
    call.start()
    scheduler.advance(2.0)
    scheduler.advance(4.0)
    entries = call.transcript
    assert entries[: len(before)] == before
    ids = [entry.id for entry in entries]
    assert len(ids) == len(set(ids))
    for entry in entries[len(before):]:
        assert entry.timestamp == "10:31:00"
        assert 0.85 <= entry.confidence <= 1.0
        assert entry.speaker in ("John Doe", "Sarah Smith")


def test_start_only_from_idle():
    call, scheduler = _controller()
    call.start()
    assert call.start() is False
    scheduler.advance(2.0)
    assert call.start() is False
    call.end()
    assert call.start() is False
    scheduler.advance(1.0)
    assert call.start() is True


def test_end_while_connecting_cancels_connect():
    call, scheduler = _controller()
    states = []
    call.subscribe(states.append)
    call.start()
    scheduler.advance(1.0)
    assert call.end() is True
    scheduler.advance(10.0)
    assert states == [CallState.CONNECTING, CallState.ENDED, CallState.IDLE]


def test_end_is_rejected_when_idle():
    call, _ = _controller()
    assert call.end() is False
    assert call.state is CallState.IDLE


def test_toggles_only_while_active():
    call, scheduler = _controller()
    assert call.toggle_mute() is False
    assert call.toggle_video() is False
    assert call.is_muted is False and call.is_video_on is True

    call.start()
    scheduler.advance(2.0)
    assert call.toggle_mute() is True
    assert call.toggle_video() is True
    assert call.is_muted is True and call.is_video_on is False
    assert call.state is CallState.ACTIVE


def test_controls_follow_state():
    call, scheduler = _controller()
    controls = call.controls()
    assert controls["start"] and controls["close"]
    assert not controls["mute"] and not controls["end"]

    call.start()
    assert call.controls()["end"]
    assert call.status_text == "Connecting..."

    scheduler.advance(2.0)
    controls = call.controls()
    assert controls["mute"] and controls["video"] and controls["volume"]
    assert not controls["close"] and not controls["start"]
    assert call.is_live


def test_elapsed_seconds_counts_active_time():
    call, scheduler = _controller()
    call.start()
    scheduler.advance(2.0)
    scheduler.advance(10.0)
    assert call.elapsed_seconds() == 10.0
    call.end()
    scheduler.advance(5.0)
    assert call.elapsed_seconds() == 10.0


def test_teardown_cancels_pending_transition():
    call, scheduler = _controller()
    call.start()
    call.teardown()
    scheduler.advance(20.0)
    assert call.state is CallState.CONNECTING
    assert scheduler.pending_count == 0
    assert call.start() is False


def test_teardown_stops_feed():
    call, scheduler = _controller()
    call.start()
    scheduler.advance(2.0)
    count = len(call.transcript)
    call.teardown()
    scheduler.advance(60.0)
    assert len(call.transcript) == count


def test_end_from_a_listener_during_connect_is_cancelled_by_teardown():
    call, scheduler = _controller()
    call.subscribe(lambda state: call.end() if state is CallState.CONNECTING else None)
    assert call.start() is True
    assert call.state is CallState.ENDED
    assert scheduler.pending_count == 1

    call.teardown()
    assert scheduler.pending_count == 0
    scheduler.advance(5.0)
    assert call.state is CallState.ENDED


def test_end_is_refused_after_teardown():
    call, scheduler = _controller()
    call.start()
    call.teardown()
    assert call.end() is False
    assert call.state is CallState.CONNECTING
    assert scheduler.pending_count == 0
    assert call.controls()["end"] is False


def test_toggles_are_refused_after_teardown():
    call, scheduler = _controller()
    call.start()
    scheduler.advance(2.0)
    call.teardown()
    assert call.toggle_mute() is False
    assert call.toggle_video() is False
    assert call.is_muted is False and call.is_video_on is True
