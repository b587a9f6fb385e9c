"""Transcript and call record persistence."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import List

from .models import CallRecord, TranscriptionEntry


def save_transcript(path: str, entries: List[TranscriptionEntry]) -> None:
    payload = [asdict(entry) for entry in entries]
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


def load_transcript(path: str) -> List[TranscriptionEntry]:
    with open(path, "r", encoding="utf-8") as handle:
        payload = json.load(handle)
    return [TranscriptionEntry(**item) for item in payload]


def save_call_record(path: str, record: CallRecord) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(asdict(record), handle, indent=2)


def load_call_record(path: str) -> CallRecord:
    with open(path, "r", encoding="utf-8") as handle:
        payload = json.load(handle)
    entries = [TranscriptionEntry(**item) for item in payload.pop("entries", [])]
    return CallRecord(entries=entries, **payload)
