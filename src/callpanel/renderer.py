"""Markdown rendering for transcript exports and insight reports."""

from __future__ import annotations

from typing import List, Optional
from .models import InsightData, TranscriptionEntry


def _yaml_quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f"\"{escaped}\""


def _clean_text(value: str) -> str:
    return " ".join(value.split())


def _percent(value: float) -> str:
    return f"{round(value * 100)}%"


def _transcript_lines(entries: List[TranscriptionEntry]) -> List[str]:
    lines = []
    for entry in entries:
        speaker = _clean_text(entry.speaker) if entry.speaker else "Unknown"
        lines.append(
            f"[{entry.timestamp}] {speaker} ({_percent(entry.confidence)}): "
            f"{_clean_text(entry.text)}"
        )
    return lines


def _participants(entries: List[TranscriptionEntry]) -> List[str]:
    names: List[str] = []
    for entry in entries:
        if entry.speaker and entry.speaker not in names:
            names.append(entry.speaker)
    return names


def render_transcript(
    title: str,
    date: str,
    entries: List[TranscriptionEntry],
    duration_seconds: Optional[int] = None,
    panels: Optional[List[str]] = None,
    started_at: Optional[str] = None,
) -> str:
    participants = _participants(entries)
    lines: List[str] = []
    lines.append("---")
    lines.append("schema: 1")
    lines.append(f"title: {_yaml_quote(title)}")
    lines.append(f"date: {_yaml_quote(date)}")
    if started_at:
        lines.append(f"started_at: {_yaml_quote(started_at)}")
    if duration_seconds is not None:
        lines.append(f"duration_seconds: {duration_seconds}")
    if participants:
        lines.append("participants:")
        for name in participants:
            lines.append(f"  - {_yaml_quote(name)}")
    if panels:
        lines.append("panels:")
        for panel in panels:
            lines.append(f"  - {_yaml_quote(panel)}")
    lines.append(f"entries: {len(entries)}")
    lines.append("---")
    lines.append("")
    lines.append("## Call Details")
    lines.append("")
    lines.append(f"- Title: {_clean_text(title)}")
    lines.append(f"- Date: {_clean_text(date)}")
    if duration_seconds is not None:
        lines.append(f"- Duration (s): {duration_seconds}")
    if participants:
        lines.append(f"- Participants: {', '.join(_clean_text(p) for p in participants)}")
    lines.append("")
    lines.append("## Transcript")
    lines.append("")
    lines.extend(_transcript_lines(entries))
    lines.append("")
    return "\n".join(lines)


def render_report(
    title: str,
    date: str,
    insights: InsightData,
    entries: Optional[List[TranscriptionEntry]] = None,
    duration_seconds: Optional[int] = None,
) -> str:
    entries = entries or []
    lines: List[str] = []
    lines.append("---")
    lines.append("schema: 1")
    lines.append(f"title: {_yaml_quote(title)}")
    lines.append(f"date: {_yaml_quote(date)}")
    lines.append(f"sentiment: {_yaml_quote(insights.sentiment)}")
    if duration_seconds is not None:
        lines.append(f"duration_seconds: {duration_seconds}")
    if insights.summary:
        lines.append("summary: >")
        for line in insights.summary.splitlines():
            lines.append(f"  {line}")
    lines.append("---")
    lines.append("")
    lines.append(f"# Call Report: {_clean_text(title)}")
    lines.append("")
    lines.append("## Sentiment")
    lines.append("")
    lines.append(insights.sentiment.capitalize())
    lines.append("")
    if insights.speaking_time:
        lines.append("## Speaking Time")
        lines.append("")
        for name, share in insights.speaking_time.items():
            lines.append(f"- {_clean_text(name)}: {_percent(share)}")
        lines.append("")
    if insights.topics:
        lines.append("## Key Topics")
        lines.append("")
        lines.append(", ".join(_clean_text(t) for t in insights.topics))
        lines.append("")
    if insights.keywords:
        lines.append("## Keywords")
        lines.append("")
        lines.append(", ".join(_clean_text(k) for k in insights.keywords))
        lines.append("")
    if insights.action_items:
        lines.append("## Action Items")
        lines.append("")
        for item in insights.action_items:
            lines.append(f"- [ ] {_clean_text(item)}")
        lines.append("")
    if insights.summary:
        lines.append("## Summary")
        lines.append("")
        lines.append(insights.summary)
        lines.append("")
    if insights.timeline:
        lines.append("## Timeline")
        lines.append("")
        for event in insights.timeline:
            lines.append(
                f"- {event.get('time', '--:--:--')} "
                f"{_clean_text(str(event.get('event', '')))}"
            )
        lines.append("")
    if entries:
        lines.append("## Transcript")
        lines.append("")
        lines.extend(_transcript_lines(entries))
        lines.append("")
    return "\n".join(lines)
