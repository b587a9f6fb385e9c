"""Configuration handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional
import yaml


@dataclass
class WindowConfig:
    width: float = 800
    height: float = 600
    min_width: float = 800
    min_height: float = 600
    minimized_width: float = 300
    minimized_height: float = 60
    minimized_margin: float = 20
    viewport_width: float = 1920
    viewport_height: float = 1080
    title_bar_height: float = 44
    controls_height: float = 64
    resize_handle_size: float = 16


@dataclass
class CallConfig:
    connect_delay_seconds: float = 2.0
    end_delay_seconds: float = 1.0
    feed_period_seconds: float = 5.0
    feed_seed: Optional[int] = None


@dataclass
class PanelConfig:
    max_panels: int = 4
    default_height: float = 200
    min_height: float = 100
    header_height: float = 36
    initial: List[str] = field(default_factory=lambda: ["sentiment"])


@dataclass
class LayoutConfig:
    transcript_min_width: float = 320
    insights_min_width: float = 240
    splitter_grab: float = 4
    edge_grab: float = 4
    panel_gap: float = 8


@dataclass
class Config:
    base_dir: str = ""
    window: WindowConfig = field(default_factory=WindowConfig)
    call: CallConfig = field(default_factory=CallConfig)
    panels: PanelConfig = field(default_factory=PanelConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)


def load_config(path: str) -> Config:
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    window = WindowConfig(**data.get("window", {}))
    call = CallConfig(**data.get("call", {}))
    panels = PanelConfig(**data.get("panels", {}))
    layout = LayoutConfig(**data.get("layout", {}))

    return Config(
        base_dir=data.get("base_dir", ""),
        window=window,
        call=call,
        panels=panels,
        layout=layout,
    )


def save_config(path: str, config: Config) -> None:
    data = {
        "base_dir": config.base_dir,
        "window": {
            "width": config.window.width,
            "height": config.window.height,
            "min_width": config.window.min_width,
            "min_height": config.window.min_height,
            "minimized_width": config.window.minimized_width,
            "minimized_height": config.window.minimized_height,
            "minimized_margin": config.window.minimized_margin,
            "viewport_width": config.window.viewport_width,
            "viewport_height": config.window.viewport_height,
            "title_bar_height": config.window.title_bar_height,
            "controls_height": config.window.controls_height,
            "resize_handle_size": config.window.resize_handle_size,
        },
        "call": {
            "connect_delay_seconds": config.call.connect_delay_seconds,
            "end_delay_seconds": config.call.end_delay_seconds,
            "feed_period_seconds": config.call.feed_period_seconds,
            "feed_seed": config.call.feed_seed,
        },
        "panels": {
            "max_panels": config.panels.max_panels,
            "default_height": config.panels.default_height,
            "min_height": config.panels.min_height,
            "header_height": config.panels.header_height,
            "initial": list(config.panels.initial),
        },
        "layout": {
            "transcript_min_width": config.layout.transcript_min_width,
            "insights_min_width": config.layout.insights_min_width,
            "splitter_grab": config.layout.splitter_grab,
            "edge_grab": config.layout.edge_grab,
            "panel_gap": config.layout.panel_gap,
        },
    }
    with open(path, "w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False)
