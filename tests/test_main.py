import logging

from boxbreath.main import configure_logging, parse_args


def test_parse_args_defaults(monkeypatch) -> None:
    monkeypatch.delenv("BOXBREATH_LOG_LEVEL", raising=False)
    args = parse_args([])
    assert args.breaths == 6
    assert args.log_level == "WARNING"


def test_log_level_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("BOXBREATH_LOG_LEVEL", "DEBUG")
    args = parse_args(["--breaths", "3"])
    assert args.breaths == 3
    assert args.log_level == "DEBUG"


def test_configure_logging_ignores_unknown_level(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    configure_logging("loud")
    configure_logging("info")
    assert [c["level"] for c in calls] == [logging.WARNING, logging.INFO]
