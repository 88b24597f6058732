from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from policy_page.cli import app

runner = CliRunner()


def write_config(tmp_path: Path, *, use_embedded: bool = True) -> Path:
    config = tmp_path / "config.toml"
    config.write_text(
        "\n".join(
            [
                "[source]",
                f'markdown_url = "{(tmp_path / "missing.md").as_posix()}"',
                f"use_embedded = {'true' if use_embedded else 'false'}",
                "[theme]",
                f'storage_path = "{(tmp_path / "prefs.json").as_posix()}"',
                "[runtime]",
                f'output_dir = "{(tmp_path / "site").as_posix()}"',
            ]
        ),
        encoding="utf-8",
    )
    return config


def test_convert_prints_fragment(tmp_path: Path) -> None:
    source = tmp_path / "policy.md"
    source.write_text("# Title\n\n**bold**", encoding="utf-8")
    result = runner.invoke(app, ["convert", str(source), "--plain", "--config", str(write_config(tmp_path))])
    assert result.exit_code == 0
    assert "<h1>Title</h1>\n<p><strong>bold</strong></p>" in result.output


def test_convert_writes_output_file(tmp_path: Path) -> None:
    source = tmp_path / "policy.md"
    source.write_text("## Overview", encoding="utf-8")
    target = tmp_path / "out.html"
    result = runner.invoke(
        app, ["convert", str(source), "-o", str(target), "--config", str(write_config(tmp_path))]
    )
    assert result.exit_code == 0
    assert 'id="overview"' in target.read_text(encoding="utf-8")


def test_render_with_fallback(tmp_path: Path) -> None:
    result = runner.invoke(app, ["render", "--config", str(write_config(tmp_path))])
    assert result.exit_code == 0
    assert (tmp_path / "site" / "index.html").exists()
    assert (tmp_path / "site" / "render.jsonl").exists()


def test_render_without_sources_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["render", "--config", str(write_config(tmp_path, use_embedded=False))])
    assert result.exit_code == 1
    document = (tmp_path / "site" / "index.html").read_text(encoding="utf-8")
    assert "Oops! Something went wrong" in document


def test_theme_toggle_persists(tmp_path: Path) -> None:
    config = str(write_config(tmp_path))
    assert runner.invoke(app, ["theme", "--toggle", "--config", config]).exit_code == 0
    assert '"theme": "dark"' in (tmp_path / "prefs.json").read_text(encoding="utf-8")
    result = runner.invoke(app, ["theme", "--set", "light", "--config", config])
    assert result.exit_code == 0
    assert '"theme": "light"' in (tmp_path / "prefs.json").read_text(encoding="utf-8")
