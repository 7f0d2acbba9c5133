"""CLI parser and entrypoint tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from ignr.cli import _build_parser, main


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    for name in list(os.environ):
        if name.startswith("IGNR_"):
            monkeypatch.delenv(name)
    return tmp_path


def test_cli_accepts_verbose_before_command() -> None:
    args = _build_parser().parse_args(["-vv", "generate"])
    assert args.verbose == 2
    assert args.command == "generate"


def test_cli_accepts_verbose_after_command() -> None:
    args = _build_parser().parse_args(["generate", "--verbose"])
    assert args.verbose == 1


def test_cli_generate_aliases_and_defaults() -> None:
    args = _build_parser().parse_args(["gen"])
    assert args.command == "gen"
    assert args.dir == "."
    assert args.depth == 10
    assert args.add == []
    assert args.print_only is False
    assert args.force is False


def test_cli_add_is_repeatable() -> None:
    args = _build_parser().parse_args(["g", "-t", "vim", "--add", "macos", "--no-detect"])
    assert args.add == ["vim", "macos"]
    assert args.no_detect is True


def test_cli_output_formats_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["list", "--json", "--yaml"])


def test_cli_config_requires_action() -> None:
    args = _build_parser().parse_args(["config", "show"])
    assert args.config_command == "show"
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["config", "bogus"])


def test_main_prints_generated_block(isolated_env: Path, capsys) -> None:
    project = isolated_env / "project"
    project.mkdir()
    (project / "Cargo.toml").write_text("", encoding="utf-8")

    main(["generate", "--print", "--force", "--dir", str(project), "--no-detect", "-t", "rust"])

    out = capsys.readouterr().out
    assert out.startswith("# ---- ignr (detected: rust) @ ")
    assert "# === rust ===\n" in out
    assert not (project / ".gitignore").exists()


def test_main_writes_gitignore(isolated_env: Path, capsys) -> None:
    project = isolated_env / "project"
    (project / ".git").mkdir(parents=True)
    (project / "go.mod").write_text("", encoding="utf-8")

    main(["generate", "--dir", str(project)])

    assert "Generated .gitignore with:" in capsys.readouterr().out
    text = (project / ".gitignore").read_text(encoding="utf-8")
    assert "# === go ===" in text


def test_main_reports_empty_tag_set(isolated_env: Path, capsys) -> None:
    project = isolated_env / "empty"
    project.mkdir()

    main(["generate", "--force", "--no-detect", "--dir", str(project)])

    assert "Use --add to specify templates." in capsys.readouterr().out


def test_main_exits_outside_git_repository(isolated_env: Path, capsys) -> None:
    project = isolated_env / "plain"
    project.mkdir()
    if any((parent / ".git").exists() for parent in [project, *project.parents]):
        pytest.skip("temporary directory lives inside a git work tree")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", "--dir", str(project)])

    assert excinfo.value.code == 1
    assert "Not in a git repository" in capsys.readouterr().err


def test_main_lists_templates_as_json(isolated_env: Path, capsys) -> None:
    main(["list", "--json"])

    names = json.loads(capsys.readouterr().out)
    assert "python" in names
    assert names == sorted(names)


def test_main_config_path_uses_override(isolated_env: Path, capsys) -> None:
    config_file = isolated_env / "custom.yml"

    main(["config", "path", "--config", str(config_file)])

    assert capsys.readouterr().out.strip() == str(config_file)
    assert config_file.exists()


def test_main_init_refuses_existing_config(isolated_env: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["init"])

    assert excinfo.value.code == 1
    assert "config already exists" in capsys.readouterr().err


def test_main_exits_on_undecodable_gitignore(isolated_env: Path, capsys) -> None:
    project = isolated_env / "project"
    (project / ".git").mkdir(parents=True)
    (project / "go.mod").write_text("", encoding="utf-8")
    (project / ".gitignore").write_bytes(b"\xff\xfe bad\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", "--dir", str(project)])

    assert excinfo.value.code == 1
    assert "reading existing .gitignore" in capsys.readouterr().err
    assert (project / ".gitignore").read_bytes() == b"\xff\xfe bad\n"


def test_main_exits_on_undecodable_config(isolated_env: Path, capsys) -> None:
    config_file = isolated_env / "broken.yml"
    config_file.write_bytes(b"\xff\xfe: 1\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["list", "--config", str(config_file)])

    assert excinfo.value.code == 1
    assert "broken.yml" in capsys.readouterr().err


def test_cli_debug_flag_before_or_after_command() -> None:
    assert _build_parser().parse_args(["--debug", "list"]).debug is True
    assert _build_parser().parse_args(["list", "--debug"]).debug is True
    assert _build_parser().parse_args(["list"]).debug is False
