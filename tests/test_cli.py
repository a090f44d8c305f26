"""Tests for the wren CLI."""

import textwrap
from pathlib import Path

import pytest

from wren.cli import main

APP_SOURCE = textwrap.dedent(
    """
    from wren import App

    def list_users(request, response):
        response.send_json([])

    def get_user(request, response):
        response.send_json(request.params)

    app = App()
    app.include({"(GET)/users": list_users, "(GET)/users/:id": get_user})

    empty = App()

    def create_app():
        return App()

    not_an_app = 42
    """
)


@pytest.fixture
def app_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / "cli_sample_app.py").write_text(APP_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "cli_sample_app"


class TestRoutes:
    def test_prints_table(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", f"{app_module}:app"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["METHOD", "PATTERN", "HANDLER"]
        assert lines[2].split() == ["GET", "/users", "list_users"]
        assert lines[3].split() == ["GET", "/users/:id", "get_user"]

    def test_default_attribute(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", app_module])
        assert "list_users" in capsys.readouterr().out

    def test_empty(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", f"{app_module}:empty"])
        assert capsys.readouterr().out.strip() == "No routes registered."

    def test_factory(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", f"{app_module}:create_app"])
        assert "No routes registered." in capsys.readouterr().out

    def test_not_an_app(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", f"{app_module}:not_an_app"])
        assert exc_info.value.code == 1
        assert "not a wren.App instance" in capsys.readouterr().err


class TestRun:
    def test_passes_overrides(self, app_module: str, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[str, int, str | None]] = []
        monkeypatch.setattr(
            "wren.server.serve.run_server",
            lambda app, host, port, **kwargs: calls.append((host, port, kwargs["app_path"])),
        )
        main(["run", f"{app_module}:app", "--host", "0.0.0.0", "--port", "8000"])
        assert calls == [("0.0.0.0", 8000, f"{app_module}:app")]

    def test_missing_module(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "no_such_module_for_wren:app"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 0
    assert "usage: wren" in capsys.readouterr().out
