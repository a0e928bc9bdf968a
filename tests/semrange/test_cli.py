# tests/semrange/test_cli.py
import logging

import pytest

from semrange import __version__
from semrange.cli import EXIT_BAD_INPUT, EXIT_NO_MATCH, EXIT_OK, main
from semrange.settings import loadSettings


@pytest.fixture(autouse=True)
def restoreLogger():
    logger = logging.getLogger("semrange")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


def test_check_all_match(capsys):
    assert main(["check", "^1.2.3", "1.2.3", "1.9.0"]) == EXIT_OK
    assert capsys.readouterr().out.splitlines() == ["1.2.3: yes", "1.9.0: yes"]


def test_check_some_fail(capsys):
    assert main(["check", "^1.2.3", "1.4.0", "2.0.0"]) == EXIT_NO_MATCH
    assert capsys.readouterr().out.splitlines() == ["1.4.0: yes", "2.0.0: no"]


def test_format(capsys):
    assert main(["format", ">=1.2.3 <=2.0.0 ||  1.x"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "1.2.3 - 2.0.0 || >=1.x.x <2.0.0"


def test_best(capsys):
    assert main(["best", "~1.2", "1.2.0", "1.2.7", "1.3.0"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "1.2.7"


def test_best_no_match(capsys):
    assert main(["best", ">=5", "1.0.0"]) == EXIT_NO_MATCH
    assert capsys.readouterr().out == ""


def test_bad_range_reports_on_stderr(capsys):
    assert main(["format", "1.2.3 ||"]) == EXIT_BAD_INPUT
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("semrange: ")


def test_bad_version_reports_on_stderr(capsys):
    assert main(["check", "*", "not-a-version"]) == EXIT_BAD_INPUT
    assert "semrange: " in capsys.readouterr().err


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_missing_command_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_invalid_settings_file_does_not_break_commands(tmp_path, monkeypatch, capsys, caplog):
    path = tmp_path / "broken.json5"
    path.write_text("{ logging: { colour: true } }", "utf-8")
    monkeypatch.setenv("SEMRANGE_SETTINGS", str(path))
    loadSettings.cache_clear()

    with caplog.at_level(logging.ERROR, logger="semrange.settings"):
        assert main(["format", "^1.2.3"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "^1.2.3"
    assert "Ignoring invalid settings" in caplog.text
