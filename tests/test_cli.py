import sys
import types

import pytest

from pattern_catalog import cli
from pattern_catalog.core import config_templates


@pytest.fixture(autouse=True)
def reset_metadata(monkeypatch):
    """Ensure metadata.version is controllable during tests."""

    def fake_version(name: str) -> str:
        assert name == "pattern-catalog"
        return "0.0-test"

    monkeypatch.setattr(cli.metadata, "version", fake_version)
    yield


def test_version_command_handles_missing_package(monkeypatch, capsys):
    monkeypatch.setattr(
        cli.metadata,
        "version",
        lambda name: (_ for _ in ()).throw(cli.metadata.PackageNotFoundError()),
    )
    code = cli.main(["version"])
    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.strip() == "unknown"


def test_no_args_prints_usage_and_returns_error(capsys):
    code = cli.main([])
    captured = capsys.readouterr()
    assert code == 2
    assert "Usage: patterns" in captured.out
    assert "Available commands:" in captured.out


def test_help_flag_shows_usage(capsys):
    code = cli.main(["--help"])
    captured = capsys.readouterr()
    assert code == 0
    assert "Usage: patterns" in captured.out


def test_list_outputs_command_table(capsys):
    code = cli.main(["list"])
    captured = capsys.readouterr()
    assert code == 0
    for name in ("init", "config", "export", "play"):
        assert f"  {name}" in captured.out


def test_help_known_command(capsys):
    code = cli.main(["help", "play"])
    captured = capsys.readouterr()
    assert code == 0
    assert "play: Play a playlist" in captured.out
    assert "Run `patterns play --help`" in captured.out


def test_help_unknown_command(capsys):
    code = cli.main(["help", "does-not-exist"])
    captured = capsys.readouterr()
    assert code == 2
    assert "Unknown command" in captured.err
    assert "Available commands:" in captured.err


@pytest.mark.parametrize("flag", ["version", "--version", "-V"])
def test_version_variants(flag, capsys):
    code = cli.main([flag])
    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.strip() == "0.0-test"


def test_unknown_command_errors(capsys):
    code = cli.main(["bogus"])
    captured = capsys.readouterr()
    assert code == 2
    assert "Unknown command 'bogus'." in captured.err


def test_dispatch_invokes_module_main_with_passthrough(monkeypatch):
    before = list(sys.argv)
    captured: dict[str, list[str]] = {}

    def fake_import(module_name: str):
        assert module_name == "pattern_catalog.iterator.cli"

        def stub_main(argv):
            captured["argv"] = list(argv)
            captured["sys_argv"] = list(sys.argv)
            return 7

        return types.SimpleNamespace(main=stub_main)

    monkeypatch.setattr(cli, "import_module", fake_import)
    code = cli.main(["play", "--mode", "shuffle"])
    assert code == 7
    assert captured["argv"] == ["--mode", "shuffle"]
    assert captured["sys_argv"] == ["patterns play", "--mode", "shuffle"]
    assert list(sys.argv) == before


def test_dispatch_uses_configured_function(monkeypatch):
    def fake_import(module_name: str):
        assert module_name == "pattern_catalog.workspace.cli"
        return types.SimpleNamespace(
            main=lambda argv: 1, config_main=lambda argv: 4
        )

    monkeypatch.setattr(cli, "import_module", fake_import)
    assert cli.main(["config", "init"]) == 4


def test_dispatch_supports_main_without_parameters(monkeypatch):
    called = {"count": 0}

    def fake_import(module_name: str):
        def stub_main():
            called["count"] += 1
            assert sys.argv[0] == "patterns export"

        return types.SimpleNamespace(main=stub_main)

    monkeypatch.setattr(cli, "import_module", fake_import)
    code = cli.main(["export"])
    assert code == 0
    assert called["count"] == 1


@pytest.mark.parametrize(
    ("payload", "expected_code", "expected_err"),
    [(5, 5, ""), (None, 0, ""), ("boom", 1, "boom")],
)
def test_dispatch_normalizes_system_exit(
    monkeypatch, capsys, payload, expected_code, expected_err
):
    def fake_import(module_name: str):
        def stub_main(argv):
            raise SystemExit(payload)

        return types.SimpleNamespace(main=stub_main)

    monkeypatch.setattr(cli, "import_module", fake_import)
    code = cli.main(["play"])
    captured = capsys.readouterr()
    assert code == expected_code
    assert captured.err.strip() == expected_err


def test_dispatch_normalizes_non_int_return(monkeypatch):
    def fake_import(module_name: str):
        return types.SimpleNamespace(main=lambda argv: "done")

    monkeypatch.setattr(cli, "import_module", fake_import)
    assert cli.main(["play"]) == 0


def test_accepts_argv_handles_signature_failure(monkeypatch):
    def boom(_func):
        raise TypeError("no signature")

    monkeypatch.setattr(cli.inspect, "signature", boom)

    assert cli._accepts_argv(lambda argv: None) is False


def test_patterns_cli_runs_init_end_to_end(tmp_path, capsys):
    target = tmp_path / "workspace"

    code = cli.main(["init", "--path", str(target)])

    captured = capsys.readouterr()
    assert code == 0
    assert "Workspace ready" in captured.out
    for entry in ("config", "logs", "exports"):
        assert (target / entry).is_dir()


def test_patterns_cli_runs_config_init(tmp_path, capsys):
    destination = tmp_path / "patterns.toml"

    code = cli.main(["config", "init", "--path", str(destination)])

    captured = capsys.readouterr()
    assert code == 0
    assert destination.read_text(encoding="utf-8") == (
        config_templates.read_template()
    )
    assert str(destination.resolve()) in captured.out


def test_patterns_cli_runs_export_end_to_end(capsys):
    code = cli.main(["export", "--format", "text"])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.startswith("INTRODUCTION TO DESIGN PATTERNS")


def test_patterns_cli_argparse_errors_become_exit_codes(capsys):
    code = cli.main(["play", "--mode", "genre"])

    captured = capsys.readouterr()
    assert code == 2
    assert "--genre is required" in captured.err
