"""CLI entry point."""

from __future__ import annotations

import argparse
from datetime import datetime
import logging
import os

from .config import Config, load_config, save_config
from .feed import speaking_time_shares
from .layout import compute_arrangement
from .logging_utils import attach_console, setup_logging
from .models import CallRecord
from .renderer import render_report, render_transcript
from .scheduler import ManualScheduler
from .session_io import load_call_record, load_transcript, save_call_record, save_transcript
from .shell import DialogShell
from .storage import build_export_basename, ensure_structure


def _load(path: str) -> Config:
    if path and os.path.exists(path):
        return load_config(path)
    return Config()


def _print_arrangement(count: int) -> None:
    arrangement = compute_arrangement(count)
    columns = " | ".join(",".join(col) for col in arrangement.columns) or "-"
    print(
        f"panels={count} transcript={arrangement.transcript_width_share:.0%} "
        f"columns={arrangement.column_count} [{columns}]"
    )


def _run_demo(args: argparse.Namespace, config: Config) -> int:
    if args.seed is not None:
        config.call.feed_seed = args.seed
    if args.panels:
        config.panels.initial = list(args.panels)

    paths = ensure_structure(args.base_dir or config.base_dir)
    logger, log_path = setup_logging(
        log_dir=paths["logs"], level=logging.DEBUG if args.verbose else logging.INFO
    )
    if args.verbose:
        attach_console(logger, logging.DEBUG)

    scheduler = ManualScheduler()
    shell = DialogShell(config=config, scheduler=scheduler)
    call = shell.call
    arrangement = shell.arrangement
    print(f"Panels: {', '.join(shell.panels.panel_ids) or '-'}")
    print(
        f"Layout: {arrangement.column_count} column(s), "
        f"transcript {shell.transcript_share():.0%}"
    )

    call.start()
    print(f"State: {call.state.value}")
    scheduler.advance(config.call.connect_delay_seconds)
    print(f"State: {call.state.value}")
    scheduler.advance(args.seconds)
    if not shell.close():
        print("Close rejected while call is active.")
    duration = int(call.elapsed_seconds())
    call.end()
    print(f"State: {call.state.value}")
    scheduler.advance(config.call.end_delay_seconds)
    print(f"State: {call.state.value}")

    entries = call.transcript
    print(f"Transcript entries: {len(entries)}")
    for entry in entries:
        print(f"  [{entry.timestamp}] {entry.speaker}: {entry.text}")

    if args.export:
        now = datetime.now()
        basename = build_export_basename(args.title, now)
        date = now.strftime("%Y-%m-%d")
        insights = shell.feed.insights()
        insights.speaking_time = speaking_time_shares(entries)
        transcript_path = os.path.join(paths["transcripts"], f"{basename}.md")
        with open(transcript_path, "w", encoding="utf-8") as handle:
            handle.write(
                render_transcript(
                    title=args.title,
                    date=date,
                    entries=entries,
                    duration_seconds=duration,
                    panels=shell.panels.panel_ids,
                )
            )
        save_transcript(
            os.path.join(paths["transcripts"], f"{basename}.transcript.json"), entries
        )
        report_path = os.path.join(paths["reports"], f"{basename}.md")
        with open(report_path, "w", encoding="utf-8") as handle:
            handle.write(
                render_report(
                    title=args.title,
                    date=date,
                    insights=insights,
                    entries=entries,
                    duration_seconds=duration,
                )
            )
        record = CallRecord(
            call_id=basename,
            title=args.title,
            started_at=now.isoformat(timespec="seconds"),
            duration_seconds=duration,
            entries=entries,
            panels=shell.panels.panel_ids,
            transcript_path=transcript_path,
            report_path=report_path,
        )
        save_call_record(os.path.join(paths["calls"], f"{basename}.call.json"), record)
        print(f"Transcript saved: {transcript_path}")
        print(f"Report saved: {report_path}")

    shell.close()
    logger.info("Demo finished (log: %s)", log_path)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="callpanel")
    sub = parser.add_subparsers(dest="command")

    layout_cmd = sub.add_parser("layout")
    layout_cmd.add_argument(
        "counts", nargs="*", type=int, help="Panel counts (default 0-4)."
    )

    demo_cmd = sub.add_parser("demo")
    demo_cmd.add_argument("--config", default="callpanel_config.yml", help="Config.")
    demo_cmd.add_argument("--base-dir", help="Base output directory.")
    demo_cmd.add_argument("--title", default="Conference Call", help="Call title.")
    demo_cmd.add_argument(
        "--seconds", type=float, default=20.0, help="Simulated active call length."
    )
    demo_cmd.add_argument("--panels", nargs="*", help="Initial panel types.")
    demo_cmd.add_argument("--seed", type=int, help="Mock feed random seed.")
    demo_cmd.add_argument(
        "--export", action="store_true", help="Write transcript and report files."
    )
    demo_cmd.add_argument("--verbose", action="store_true", help="Debug logging.")

    config_cmd = sub.add_parser("config")
    config_cmd.add_argument(
        "--out", default="callpanel_config.yml", help="Where to write defaults."
    )

    show_cmd = sub.add_parser("show")
    show_cmd.add_argument("path", help="Path to .transcript.json or .call.json")

    gui_cmd = sub.add_parser("gui")
    gui_cmd.add_argument("--config", default="callpanel_config.yml", help="Config.")

    args = parser.parse_args(argv)
    if args.command == "layout":
        for count in args.counts or range(5):
            if count < 0:
                print(f"Invalid panel count: {count}")
                return 1
            _print_arrangement(count)
        return 0

    if args.command == "demo":
        return _run_demo(args, _load(args.config))

    if args.command == "config":
        save_config(args.out, Config())
        print(f"Wrote {args.out}")
        return 0

    if args.command == "show":
        if args.path.endswith(".call.json"):
            record = load_call_record(args.path)
            print(f"Call: {record.title}")
            print(f"Started: {record.started_at}")
            print(f"Duration (s): {record.duration_seconds}")
            print(f"Panels: {', '.join(record.panels) or '-'}")
            print(f"Entries: {len(record.entries)}")
        elif args.path.endswith(".transcript.json"):
            entries = load_transcript(args.path)
            print(f"Entries: {len(entries)}")
        else:
            print("Unsupported file. Use .call.json or .transcript.json")
        return 0

    if args.command == "gui":
        from .gui import launch_gui

        launch_gui(args.config)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
