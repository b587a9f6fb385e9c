"""Mock transcript and insight data for the simulated call."""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from .models import InsightData, TranscriptionEntry

DEFAULT_SPEAKERS = ("John Doe", "Sarah Smith")
SIMULATED_TEXT = "This is a simulated live transcription entry..."


class MockFeed:
    def __init__(
        self,
        speakers: Sequence[str] = DEFAULT_SPEAKERS,
        seed: Optional[int] = None,
        text: str = SIMULATED_TEXT,
    ) -> None:
        if not speakers:
            raise ValueError("MockFeed needs at least one speaker.")
        self.speakers = list(speakers)
        self.text = text
        self._rng = np.random.default_rng(seed)

    def initial_transcript(self) -> List[TranscriptionEntry]:
        return [
            TranscriptionEntry(
                id="1",
                speaker="John Doe",
                text=(
                    "Hello everyone, thanks for joining today's call. "
                    "Let's start by reviewing the quarterly results."
                ),
                timestamp="10:30:15",
                confidence=0.95,
            ),
            TranscriptionEntry(
                id="2",
                speaker="Sarah Smith",
                text=(
                    "Great! I have the numbers ready. "
                    "Our revenue increased by 23% this quarter."
                ),
                timestamp="10:30:45",
                confidence=0.92,
            ),
        ]

    def insights(self) -> InsightData:
        return InsightData(
            sentiment="positive",
            keywords=["revenue", "quarterly", "results", "growth", "performance"],
            topics=["Financial Performance", "Quarterly Review", "Revenue Growth"],
            action_items=[
                "Follow up on Q4 projections",
                "Schedule team meeting for next week",
                "Prepare detailed revenue breakdown",
            ],
            summary=(
                "Positive quarterly review discussing 23% revenue growth "
                "and planning next steps."
            ),
            speaking_time={"John Doe": 0.6, "Sarah Smith": 0.4},
            timeline=[
                {"time": "10:30:15", "event": "Call started"},
                {"time": "10:30:45", "event": "Revenue figures shared"},
            ],
        )

    def next_entry(self, entry_id: str, timestamp: str) -> TranscriptionEntry:
        speaker = self.speakers[int(self._rng.integers(len(self.speakers)))]
        confidence = float(0.85 + self._rng.random() * 0.15)
        return TranscriptionEntry(
            id=entry_id,
            speaker=speaker,
            text=self.text,
            timestamp=timestamp,
            confidence=min(1.0, confidence),
        )


def speaking_time_shares(entries: Sequence[TranscriptionEntry]) -> dict:
    """Share of words spoken per speaker, in first-appearance order."""
    if not entries:
        return {}
    speakers: List[str] = []
    for entry in entries:
        if entry.speaker not in speakers:
            speakers.append(entry.speaker)
    words = np.zeros(len(speakers))
    for entry in entries:
        words[speakers.index(entry.speaker)] += len(entry.text.split())
    total = words.sum()
    if total == 0:
        return {name: 0.0 for name in speakers}
    shares = np.round(words / total, 2)
    return {name: float(share) for name, share in zip(speakers, shares)}
