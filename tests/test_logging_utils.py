import logging

from sfzkit.logging_utils import (
    LOG_DIR_ENV,
    LOGGER_NAME,
    configure_logging,
    format_exception_entry,
    get_log_dir,
    get_log_path,
    log_exception,
)


def test_log_dir_uses_env_override(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(LOG_DIR_ENV, str(tmp_path))
    assert get_log_dir() == tmp_path
    assert get_log_path() == tmp_path / "sfzkit.log"


def test_log_exception_appends_traceback(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(LOG_DIR_ENV, str(tmp_path / "logs"))
    try:
        raise ValueError("boom")
    except ValueError as exc:
        path = log_exception("loading piano.sfz", exc)
    assert path == tmp_path / "logs" / "sfzkit.log"
    content = path.read_text(encoding="utf-8")
    assert "loading piano.sfz failed: ValueError: boom" in content
    assert "Traceback" in content


def test_configure_logging_is_idempotent() -> None:
    logger = configure_logging(logging.INFO)
    configure_logging(logging.DEBUG)
    named = [handler for handler in logger.handlers if handler.get_name() == "sfzkit-stderr"]
    assert logger is logging.getLogger(LOGGER_NAME)
    assert len(named) == 1
    assert logger.level == logging.DEBUG
    logger.setLevel(logging.NOTSET)


def test_format_exception_entry_has_header_and_traceback() -> None:
    try:
        raise KeyError("lokey")
    except KeyError as exc:
        entry = format_exception_entry("parsing", exc)
    first, rest = entry.split("\n", 1)
    assert first.endswith("parsing failed: KeyError: 'lokey'")
    assert rest.startswith("Traceback")


def test_log_exception_returns_none_when_unwritable(tmp_path, monkeypatch) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    monkeypatch.setenv(LOG_DIR_ENV, str(blocker / "logs"))
    assert log_exception("loading", RuntimeError("nope")) is None
