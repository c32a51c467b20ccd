"""Tests for perch.cli — CLI entrypoint, argument parsing, and ``perch routes``."""

import json
import textwrap
from pathlib import Path

import pytest

from perch.cli import main
from perch.cli._resolve import resolve_app
from perch.errors import AppResolutionError

DEMO_APP = textwrap.dedent(
    """
    from perch.testing import App, Router


    def require_auth():
        return None


    def create_app():
        api = Router()
        api.route("/users", "get")
        api.route("/users", "post", middlewares=(require_auth,))
        app = App()
        app.route("/health", "get")
        app.use("/api", api)
        return app


    app = create_app()
    not_an_app = 42
    """
)


@pytest.fixture
def demo_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / "perch_demo_app.py").write_text(DEMO_APP)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "perch_demo_app"


@pytest.fixture
def broken_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / "perch_broken_app.py").write_text("raise RuntimeError('init failed')\n")
    monkeypatch.syspath_prepend(str(tmp_path))
    return "perch_broken_app"


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_routes_missing_app(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_bad_format(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "x:app", "--format", "xml"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "perch" in captured.out


class TestResolveApp:
    def test_attribute(self, demo_module: str) -> None:
        app = resolve_app(f"{demo_module}:app")
        assert hasattr(app, "_router")

    def test_default_attribute(self, demo_module: str) -> None:
        assert hasattr(resolve_app(demo_module), "_router")

    def test_factory(self, demo_module: str) -> None:
        assert hasattr(resolve_app(f"{demo_module}:create_app"), "_router")

    def test_missing_module(self) -> None:
        with pytest.raises(AppResolutionError, match="Cannot import"):
            resolve_app("perch_no_such_module:app")

    def test_missing_attribute(self, demo_module: str) -> None:
        with pytest.raises(AppResolutionError, match="no attribute"):
            resolve_app(f"{demo_module}:missing")

    def test_module_raising_on_import(self, broken_module: str) -> None:
        with pytest.raises(AppResolutionError, match="raised an error on import"):
            resolve_app(f"{broken_module}:app")


class TestRoutesCommand:
    def test_table(self, demo_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", f"{demo_module}:app", "--no-color"])
        out = capsys.readouterr().out
        assert "/api/users" in out
        assert "/health" in out
        assert "\033[" not in out

    def test_json_with_protection(
        self, demo_module: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["routes", f"{demo_module}:app", "--format", "json", "--protect", "require_auth"])
        data = json.loads(capsys.readouterr().out)
        assert [(d["method"], d["path"], d["protected"]) for d in data] == [
            ("GET", "/health", False),
            ("GET", "/api/users", False),
            ("POST", "/api/users", True),
        ]

    def test_filters(self, demo_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main([
            "routes", f"{demo_module}:app",
            "--format", "json",
            "--domain", "users",
            "--protect", "require_auth",
            "--unprotected",
        ])
        data = json.loads(capsys.readouterr().out)
        assert [(d["method"], d["path"]) for d in data] == [("GET", "/api/users")]

    def test_prefix(self, demo_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", f"{demo_module}:app", "--format", "json", "--prefix", "/health"])
        data = json.loads(capsys.readouterr().out)
        assert [d["path"] for d in data] == ["/health"]

    def test_html(self, demo_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", f"{demo_module}:app", "--format", "html"])
        assert "<table>" in capsys.readouterr().out

    def test_no_router_is_not_fatal(
        self, demo_module: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["routes", f"{demo_module}:not_an_app", "--format", "json"])
        assert json.loads(capsys.readouterr().out) == []

    def test_unresolvable_app(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "perch_no_such_module:app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_module_raising_on_import(
        self, broken_module: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", f"{broken_module}:app"])
        assert exc_info.value.code == 1
        assert "init failed" in capsys.readouterr().err
