"""Tkinter host page for the floating call dialog."""

from __future__ import annotations

import logging
import os

from .config import Config, load_config
from .logging_utils import setup_logging
from .models import Point, Size, WindowGeometry
from .scheduler import TkScheduler
from .shell import DialogShell
from .storage import ensure_structure

BG = "#0b0f14"
PANEL_BG = "#111827"
BORDER = "#1b2a44"
ACCENT = "#8bd3ff"
TEXT = "#d8e1ff"
MUTED = "#6b7a99"
LIVE = "#ff4d6d"


def launch_gui(config_path: str = "callpanel_config.yml") -> None:
    import tkinter as tk
    from tkinter import ttk

    root = tk.Tk()
    root.title("CallPanel")
    root.configure(bg=BG)
    root.geometry("1280x860")

    style = ttk.Style(root)
    try:
        style.theme_use("clam")
    except tk.TclError:
        pass
    style.configure("TFrame", background=BG)
    style.configure("TLabel", background=BG, foreground=TEXT)
    style.configure(
        "TButton",
        background="#132033",
        foreground="#e6f1ff",
        borderwidth=1,
        relief="flat",
    )
    style.map(
        "TButton",
        background=[("active", BORDER)],
        foreground=[("active", "#ffffff")],
    )
    style.configure(
        "TCombobox",
        fieldbackground=PANEL_BG,
        foreground="#e6f1ff",
        background=PANEL_BG,
        bordercolor=BORDER,
    )

    if os.path.exists(config_path):
        try:
            config = load_config(config_path)
        except Exception:
            config = Config()
    else:
        config = Config()

    base_paths = ensure_structure(config.base_dir)
    logger, log_path = setup_logging(log_dir=base_paths["logs"], level=logging.INFO)
    logger.info("GUI starting (log: %s)", log_path)

    toolbar = ttk.Frame(root)
    toolbar.pack(side="top", fill="x", padx=8, pady=6)
    canvas = tk.Canvas(root, bg=BG, highlightthickness=0)
    canvas.pack(side="top", fill="both", expand=True)

    status_var = tk.StringVar(value="")
    panel_var = tk.StringVar(value="")

    def _on_host_close() -> None:
        status_var.set("Dialog closed. Press Open to show it again.")
        logger.info("Host notified of dialog close")

    shell = DialogShell(
        on_close=_on_host_close,
        initial_position=Point(100, 60),
        config=config,
        scheduler=TkScheduler(root),
    )

    def _rect(bounds: WindowGeometry, **kwargs) -> None:
        canvas.create_rectangle(
            bounds.x, bounds.y, bounds.x + bounds.width, bounds.y + bounds.height, **kwargs
        )

    def _draw() -> None:
        canvas.delete("all")
        view = shell.view()
        if view is None:
            panel_combo.configure(values=[])
            return
        bounds = view["bounds"]
        _rect(bounds, fill=PANEL_BG, outline=ACCENT if view["live"] else BORDER, width=2)
        title = view["title"] + ("  LIVE" if view["live"] else "")
        canvas.create_text(
            bounds.x + 12, bounds.y + 20, text=title, anchor="w", fill=TEXT
        )
        glyphs = {"minimize_button": "_", "maximize_button": "[]", "close_button": "x"}
        for name, button in view["buttons"].items():
            _rect(button, fill="#132033", outline=BORDER)
            canvas.create_text(
                button.x + button.width / 2,
                button.y + button.height / 2,
                text=glyphs[name],
                fill=MUTED if name == "close_button" and view["live"] else TEXT,
            )
        if view["mode"] == "minimized":
            return

        header_h = config.window.title_bar_height
        canvas.create_line(
            bounds.x, bounds.y + header_h, bounds.x + bounds.width, bounds.y + header_h,
            fill=BORDER,
        )
        elapsed = view["elapsed_seconds"]
        status = view["status"]
        if view["call_state"] == "active":
            status = f"{status} - {elapsed // 60:02d}:{elapsed % 60:02d}"
        flags = []
        if view["muted"]:
            flags.append("muted")
        if not view["video_on"]:
            flags.append("video off")
        if flags:
            status = f"{status} ({', '.join(flags)})"
        canvas.create_text(
            bounds.x + 12,
            bounds.y + header_h + config.window.controls_height / 2,
            text=f"Conference Call - {status}",
            anchor="w",
            fill=ACCENT,
        )

        content = view["content"]
        transcript_w = view["transcript_width"]
        canvas.create_text(
            content.x + 12, content.y + 16, text="Live Transcription", anchor="w", fill=TEXT
        )
        y = content.y + 40
        limit = content.y + content.height - 20
        for entry in view["transcript"][-12:]:
            if y > limit:
                break
            line = (
                f"{entry.speaker} [{entry.timestamp}] {round(entry.confidence * 100)}%\n"
                f"{entry.text}"
            )
            item = canvas.create_text(
                content.x + 12,
                y,
                text=line,
                anchor="nw",
                width=max(40, transcript_w - 24),
                fill=TEXT,
            )
            box = canvas.bbox(item)
            y = (box[3] if box else y + 32) + 10
        if view["columns"]:
            x = content.x + transcript_w
            canvas.create_line(x, content.y, x, content.y + content.height, fill=ACCENT, width=2)

        insights = view["insights"]
        details = {
            "sentiment": insights.sentiment.capitalize(),
            "analytics": f"Duration {elapsed}s, {len(view['transcript'])} entries",
            "keywords": ", ".join(insights.keywords),
            "actions": "\n".join(f"- {item}" for item in insights.action_items),
            "summary": insights.summary,
            "participants": ", ".join(
                f"{name} {round(share * 100)}%"
                for name, share in insights.speaking_time.items()
            ),
            "timeline": "\n".join(
                f"{event.get('time')} {event.get('event')}" for event in insights.timeline
            ),
        }
        for column in view["columns"]:
            for panel in column:
                pb = panel["bounds"]
                _rect(pb, fill=BG, outline=BORDER)
                marker = "+" if panel["collapsed"] else "-"
                canvas.create_text(
                    pb.x + 8,
                    pb.y + config.panels.header_height / 2,
                    text=f"{marker} {panel['type'].capitalize()}",
                    anchor="w",
                    fill=ACCENT,
                )
                canvas.create_text(
                    pb.x + pb.width - 10,
                    pb.y + config.panels.header_height / 2,
                    text="x",
                    fill=MUTED,
                )
                if not panel["collapsed"]:
                    canvas.create_text(
                        pb.x + 8,
                        pb.y + config.panels.header_height,
                        text=details.get(panel["type"], ""),
                        anchor="nw",
                        width=max(40, pb.width - 16),
                        fill=TEXT,
                    )
                    canvas.create_line(
                        pb.x, pb.y + pb.height, pb.x + pb.width, pb.y + pb.height,
                        fill=ACCENT,
                    )
        if view["resizable"]:
            handle = config.window.resize_handle_size
            _rect(
                WindowGeometry(
                    bounds.x + bounds.width - handle,
                    bounds.y + bounds.height - handle,
                    handle,
                    handle,
                ),
                fill=BORDER,
                outline="",
            )

        panel_combo.configure(values=view["available_panels"])
        controls = view["controls"]
        for name, button in control_buttons.items():
            button.state(["!disabled"] if controls.get(name) else ["disabled"])

    def _panel_header_click(point: Point) -> bool:
        if shell.panels is None:
            return False
        for slot in shell.panel_slots():
            header = WindowGeometry(
                slot.bounds.x, slot.bounds.y, slot.bounds.width, config.panels.header_height
            )
            if not header.contains(point):
                continue
            if point.x >= header.x + header.width - 20:
                shell.panels.remove_panel(slot.panel_id)
            else:
                shell.panels.toggle_collapse(slot.panel_id)
            return True
        return False

    def _on_press(event) -> None:
        point = Point(event.x, event.y)
        if shell.pointer_down(point) is None and shell.active_gesture is None:
            _panel_header_click(point)
        _draw()

    def _on_motion(event) -> None:
        shell.pointer_move(Point(event.x, event.y))
        _draw()

    def _on_release(event) -> None:
        shell.pointer_up(Point(event.x, event.y))
        _draw()

    def _on_configure(event) -> None:
        if shell.window is not None:
            shell.window.set_viewport(Size(event.width, event.height))
        _draw()

    canvas.bind("<ButtonPress-1>", _on_press)
    canvas.bind("<B1-Motion>", _on_motion)
    canvas.bind("<ButtonRelease-1>", _on_release)
    canvas.bind("<Configure>", _on_configure)

    def _with_call(action):
        def _run() -> None:
            if shell.call is not None:
                action(shell.call)
            _draw()

        return _run

    def _add_panel() -> None:
        if shell.panels is not None and panel_var.get():
            shell.panels.add_panel(panel_var.get())
            panel_var.set("")
        _draw()

    def _open_dialog() -> None:
        shell.open()
        if shell.window is not None:
            shell.window.set_viewport(Size(canvas.winfo_width(), canvas.winfo_height()))
        status_var.set("")
        _draw()

    def _close_dialog() -> None:
        if not shell.close() and shell.is_open:
            status_var.set("End the call before closing the dialog.")
        _draw()

    control_buttons = {
        "start": ttk.Button(toolbar, text="Start Call", command=_with_call(lambda c: c.start())),
        "end": ttk.Button(toolbar, text="End Call", command=_with_call(lambda c: c.end())),
        "mute": ttk.Button(toolbar, text="Mute", command=_with_call(lambda c: c.toggle_mute())),
        "video": ttk.Button(toolbar, text="Video", command=_with_call(lambda c: c.toggle_video())),
    }
    for button in control_buttons.values():
        button.pack(side="left", padx=2)
    panel_combo = ttk.Combobox(toolbar, textvariable=panel_var, state="readonly", width=14)
    panel_combo.pack(side="left", padx=(12, 2))
    ttk.Button(toolbar, text="Add Panel", command=_add_panel).pack(side="left", padx=2)
    ttk.Button(toolbar, text="Open", command=_open_dialog).pack(side="left", padx=(12, 2))
    ttk.Button(toolbar, text="Close", command=_close_dialog).pack(side="left", padx=2)
    ttk.Label(toolbar, textvariable=status_var).pack(side="left", padx=12)

    def _refresh() -> None:
        _draw()
        root.after(500, _refresh)

    def _on_quit() -> None:
        logger.info("GUI closing")
        if shell.call is not None:
            shell.call.teardown()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", _on_quit)
    root.after(100, _refresh)
    root.mainloop()
