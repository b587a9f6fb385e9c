"""Call lifecycle state machine and simulated transcript feed."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from .config import CallConfig
from .feed import MockFeed
from .models import CallState, TranscriptionEntry
from .scheduler import ScheduledTask, Scheduler

logger = logging.getLogger("callpanel")

STATUS_TEXT = {
    CallState.IDLE: "Ready to connect",
    CallState.CONNECTING: "Connecting...",
    CallState.ACTIVE: "Connected",
    CallState.ENDED: "Call ended",
}


def _clock_label() -> str:
    return datetime.now().strftime("%H:%M:%S")


class CallController:
    """Owns call state, mute/video flags and the transcript.

    Every delayed step is a ``ScheduledTask`` held in ``_transition_task`` or
    ``_feed_task``; both are cancelled whenever the state they were scheduled
    for is left, and on ``teardown``.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        feed: Optional[MockFeed] = None,
        config: Optional[CallConfig] = None,
        clock_label: Callable[[], str] = _clock_label,
    ) -> None:
        self.scheduler = scheduler
        self.config = config or CallConfig()
        self.feed = feed or MockFeed(seed=self.config.feed_seed)
        self._clock_label = clock_label

        self.state = CallState.IDLE
        self.is_muted = False
        self.is_video_on = True
        self._transcript: List[TranscriptionEntry] = list(self.feed.initial_transcript())
        self._next_entry_id = len(self._transcript) + 1
        self._transition_task: Optional[ScheduledTask] = None
        self._feed_task: Optional[ScheduledTask] = None
        self._active_since: Optional[float] = None
        self._active_seconds = 0.0
        self._torn_down = False
        self._listeners: List[Callable[[CallState], None]] = []

    @property
    def transcript(self) -> List[TranscriptionEntry]:
        return list(self._transcript)

    @property
    def status_text(self) -> str:
        return STATUS_TEXT[self.state]

    @property
    def is_live(self) -> bool:
        return self.state is CallState.ACTIVE

    def subscribe(self, listener: Callable[[CallState], None]) -> None:
        self._listeners.append(listener)

    def start(self) -> bool:
        if self._torn_down or self.state is not CallState.IDLE:
            logger.debug("Start ignored in state %s", self.state.value)
            return False
        self.is_muted = False
        self.is_video_on = True
        self._active_seconds = 0.0
        # Held before listeners run; a listener may end() and replace it.
        self._transition_task = self.scheduler.call_later(
            self.config.connect_delay_seconds, self._on_connected
        )
        self._set_state(CallState.CONNECTING)
        return True

    def end(self) -> bool:
        if self._torn_down or self.state not in (CallState.ACTIVE, CallState.CONNECTING):
            logger.debug("End ignored in state %s", self.state.value)
            return False
        self._cancel_transition()
        self._transition_task = self.scheduler.call_later(
            self.config.end_delay_seconds, self._on_reset
        )
        self._set_state(CallState.ENDED)
        return True

    def toggle_mute(self) -> bool:
        if self._torn_down or self.state is not CallState.ACTIVE:
            return False
        self.is_muted = not self.is_muted
        logger.info("Mute %s", "on" if self.is_muted else "off")
        return True

    def toggle_video(self) -> bool:
        if self._torn_down or self.state is not CallState.ACTIVE:
            return False
        self.is_video_on = not self.is_video_on
        logger.info("Video %s", "on" if self.is_video_on else "off")
        return True

    def controls(self) -> Dict[str, bool]:
        active = self.state is CallState.ACTIVE
        return {
            "mute": active,
            "video": active,
            "volume": active,
            "settings": active,
            "start": self.state is CallState.IDLE and not self._torn_down,
            "end": self.state in (CallState.ACTIVE, CallState.CONNECTING)
            and not self._torn_down,
            "close": not active,
        }

    def elapsed_seconds(self) -> float:
        if self._active_since is None:
            return self._active_seconds
        return self._active_seconds + self.scheduler.now() - self._active_since

    def teardown(self) -> None:
        self._cancel_transition()
        self._stop_feed()
        self._torn_down = True
        self._listeners.clear()
        logger.debug("Call controller torn down")

    def _set_state(self, state: CallState) -> None:
        previous = self.state
        if previous is state:
            return
        if previous is CallState.ACTIVE:
            self._stop_feed()
            if self._active_since is not None:
                self._active_seconds += self.scheduler.now() - self._active_since
                self._active_since = None
        self.state = state
        logger.info("Call state %s -> %s", previous.value, state.value)
        if state is CallState.ACTIVE:
            self._active_since = self.scheduler.now()
            self._schedule_feed()
        for listener in list(self._listeners):
            listener(state)

    def _on_connected(self) -> None:
        self._transition_task = None
        if self.state is CallState.CONNECTING:
            self._set_state(CallState.ACTIVE)

    def _on_reset(self) -> None:
        self._transition_task = None
        if self.state is CallState.ENDED:
            self._set_state(CallState.IDLE)

    def _cancel_transition(self) -> None:
        if self._transition_task is not None:
            self._transition_task.cancel()
            self._transition_task = None

    def _schedule_feed(self) -> None:
        task_ref: List[ScheduledTask] = []

        def _tick() -> None:
            # A tick from a superseded timer must not append.
            if not task_ref or self._feed_task is not task_ref[0]:
                return
            if self.state is not CallState.ACTIVE:
                return
            self._append_simulated_entry()
            self._schedule_feed()

        task = self.scheduler.call_later(self.config.feed_period_seconds, _tick)
        task_ref.append(task)
        self._feed_task = task

    def _stop_feed(self) -> None:
        if self._feed_task is not None:
            self._feed_task.cancel()
            self._feed_task = None

    def _append_simulated_entry(self) -> None:
        entry = self.feed.next_entry(str(self._next_entry_id), self._clock_label())
        self._next_entry_id += 1
        self._transcript.append(entry)
        logger.debug("Transcript entry %s from %s", entry.id, entry.speaker)
