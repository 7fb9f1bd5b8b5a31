"""Command-line entry point: parse options, set up logging and open the window."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .config import APP_NAME, Settings
from .exceptions import TranslationUnavailableError
from .logging_setup import setup_logging
from .store import TaskStore
from .translations import Translations, load_translations

logger = logging.getLogger(__name__)


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Manage a todo.txt task list.",
    )
    parser.add_argument("file", nargs="?", help="task list to open at startup")
    parser.add_argument("--language", help="user interface language (en, de)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="console log level",
    )
    parser.add_argument("--log-dir", help="directory for the debug log file")
    return parser


def apply_arguments(settings: Settings, args: argparse.Namespace) -> Settings:
    """Command-line options take precedence over the environment."""
    updates = {}
    if args.language:
        updates["language"] = args.language
    if args.log_level:
        updates["log_level"] = args.log_level
    if args.log_dir:
        updates["log_dir"] = Path(args.log_dir).expanduser()
    if args.file:
        updates["default_file"] = Path(args.file).expanduser()
    return replace(settings, **updates)


def build_store(tr: Translations) -> TaskStore:
    return TaskStore(
        all_contexts=tr["filter.context.all"],
        no_context=tr["filter.context.without"],
        all_projects=tr["filter.project.all"],
        no_project=tr["filter.project.without"],
    )


def run_gui(settings: Settings, tr: Translations) -> None:
    import customtkinter as ctk

    from .gui import MainWindow
    from .store import open_task_list

    ctk.set_appearance_mode(settings.appearance)
    try:
        ctk.set_default_color_theme(settings.theme)
    except Exception:
        # Fallback to built-in if custom theme fails
        logger.warning("Unknown color theme %r, using dark-blue", settings.theme)
        ctk.set_default_color_theme("dark-blue")

    store = build_store(tr)
    window = MainWindow(store, tr)
    open_task_list(store, settings.default_file, report_error=window.show_load_error)
    window.mainloop()


def main(argv: list[str] | None = None) -> int:
    args = create_argument_parser().parse_args(argv)
    settings = apply_arguments(Settings.from_env(), args)
    setup_logging(level=settings.log_level, log_dir=settings.log_dir)

    try:
        tr = load_translations(settings.language)
    except TranslationUnavailableError as exc:
        logger.critical("Cannot start: %s", exc)
        return 1

    try:
        run_gui(settings, tr)
    except KeyboardInterrupt:
        pass  # Graceful shutdown
    return 0


if __name__ == "__main__":
    sys.exit(main())
