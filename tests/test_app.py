# tests/test_app.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from simpletasklist import app
from simpletasklist.config import Settings
from simpletasklist.logging_setup import setup_logging
from simpletasklist.translations import load_translations

ENV_NAMES = [
    "SIMPLETASKLIST_LANGUAGE",
    "SIMPLETASKLIST_LOG_LEVEL",
    "SIMPLETASKLIST_LOG_DIR",
    "SIMPLETASKLIST_DEFAULT_FILE",
    "SIMPLETASKLIST_APPEARANCE",
    "SIMPLETASKLIST_THEME",
]


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture()
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


# ----------------------- settings -----------------------
def test_settings_defaults(clean_env) -> None:
    settings = Settings.from_env()
    assert settings == Settings(
        language="en",
        log_level="INFO",
        log_dir=None,
        default_file=None,
        appearance="dark",
        theme="dark-blue",
    )


def test_settings_from_environment(clean_env, tmp_path) -> None:
    clean_env.setenv("SIMPLETASKLIST_LANGUAGE", " de ")
    clean_env.setenv("SIMPLETASKLIST_LOG_LEVEL", "debug")
    clean_env.setenv("SIMPLETASKLIST_DEFAULT_FILE", str(tmp_path / "todo.txt"))
    clean_env.setenv("SIMPLETASKLIST_THEME", "  ")

    settings = Settings.from_env()

    assert settings.language == "de"
    assert settings.log_level == "DEBUG"
    assert settings.default_file == tmp_path / "todo.txt"
    assert settings.theme == "dark-blue"


# ----------------------- command line -----------------------
def test_arguments_override_environment(clean_env, tmp_path) -> None:
    clean_env.setenv("SIMPLETASKLIST_LANGUAGE", "en")
    args = app.create_argument_parser().parse_args(
        [str(tmp_path / "list.txt"), "--language", "de", "--log-level", "warning"]
    )

    settings = app.apply_arguments(Settings.from_env(), args)

    assert settings.language == "de"
    assert settings.log_level == "WARNING"
    assert settings.default_file == tmp_path / "list.txt"
    assert settings.log_dir is None


def test_no_arguments_keep_settings(clean_env) -> None:
    settings = Settings.from_env()
    args = app.create_argument_parser().parse_args([])
    assert app.apply_arguments(settings, args) == settings


def test_invalid_log_level_is_rejected() -> None:
    with pytest.raises(SystemExit):
        app.create_argument_parser().parse_args(["--log-level", "LOUD"])


def test_build_store_uses_translated_labels() -> None:
    store = app.build_store(load_translations("de"))
    assert store.contexts.items() == ["Alle Kontexte", "Ohne Kontext"]
    assert store.projects.items() == ["Alle Projekte", "Ohne Projekt"]
    assert store.tasks == []


def test_unknown_language_stops_startup(clean_env, restore_logging, monkeypatch) -> None:
    started: list[Settings] = []
    monkeypatch.setattr(app, "run_gui", lambda settings, tr: started.append(settings))

    assert app.main(["--language", "xx"]) == 1
    assert started == []


def test_main_starts_gui_with_settings(clean_env, restore_logging, monkeypatch, tmp_path) -> None:
    started: list[tuple[Settings, str]] = []
    monkeypatch.setattr(app, "run_gui", lambda settings, tr: started.append((settings, tr.language)))

    assert app.main([str(tmp_path / "todo.txt"), "--language", "de"]) == 0

    settings, language = started[0]
    assert language == "de"
    assert settings.default_file == tmp_path / "todo.txt"


def test_keyboard_interrupt_exits_cleanly(clean_env, restore_logging, monkeypatch) -> None:
    def interrupted(settings, tr):
        raise KeyboardInterrupt

    monkeypatch.setattr(app, "run_gui", interrupted)
    assert app.main([]) == 0


# ----------------------- logging -----------------------
def test_setup_logging_writes_log_file(restore_logging, tmp_path) -> None:
    log_dir = tmp_path / "logs"
    setup_logging(level="warning", log_dir=log_dir)

    logging.getLogger("simpletasklist.test").debug("hello file")
    for h in restore_logging.handlers:
        h.flush()

    console, file_handler = restore_logging.handlers
    assert console.level == logging.WARNING
    assert Path(file_handler.baseFilename) == log_dir / "simpletasklist.log"
    assert "hello file" in (log_dir / "simpletasklist.log").read_text(encoding="utf-8")


def test_console_filters_third_party_noise(restore_logging) -> None:
    setup_logging(level=logging.DEBUG)
    (console,) = restore_logging.handlers

    def record(name: str, level: int) -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    assert console.filter(record("simpletasklist.store", logging.DEBUG))
    assert not console.filter(record("PIL.Image", logging.WARNING))
    assert console.filter(record("PIL.Image", logging.ERROR))
