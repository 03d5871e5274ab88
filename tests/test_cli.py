"""Tests for the Typer command-line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from devblog.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DEVBLOG_BASE_PATH", raising=False)
    monkeypatch.delenv("DEVBLOG_SITE_URL", raising=False)


def _content(tmp_path: Path) -> Path:
    blog = tmp_path / "content" / "blog"
    blog.mkdir(parents=True)
    (blog / "alpha.md").write_text("---\ntitle: Alpha\npubDate: 2025-01-01\n---\nA\n", encoding="utf-8")
    (blog / "beta.md").write_text(
        "---\ntitle: Beta\npubDate: 2025-02-01\nheroImage: https://img.example.com/b.png\n---\nB\n",
        encoding="utf-8",
    )
    return tmp_path / "content"


def test_build_command_generates_site(tmp_path: Path):
    content_dir = _content(tmp_path)
    output_dir = tmp_path / "dist"

    result = runner.invoke(
        app,
        [
            "build",
            "--content-dir",
            str(content_dir),
            "--output",
            str(output_dir),
            "--no-progress",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Site generated" in result.output
    assert (output_dir / "blog" / "alpha" / "index.html").exists()
    assert (output_dir / "blog" / "beta" / "index.html").exists()


def test_build_command_rejects_missing_explicit_config(tmp_path: Path):
    content_dir = _content(tmp_path)

    result = runner.invoke(
        app,
        [
            "build",
            "--config",
            str(tmp_path / "missing.yaml"),
            "--content-dir",
            str(content_dir),
            "--output",
            str(tmp_path / "dist"),
            "--no-progress",
        ],
    )

    assert result.exit_code == 2
    assert not (tmp_path / "dist").exists()


def test_default_config_file_is_used_when_present(tmp_path: Path):
    content_dir = _content(tmp_path)
    (tmp_path / "devblog.yaml").write_text(
        f"site:\n  base_path: /cfg\ncontent:\n  content_dir: {content_dir.as_posix()}\n",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0, result.output
    assert "/cfg/blog/beta/" in result.output


def test_build_command_reports_content_errors(tmp_path: Path):
    blog = tmp_path / "content" / "blog"
    blog.mkdir(parents=True)
    (blog / "broken.md").write_text("---\ntitle: Broken\n---\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "build",
            "--content-dir",
            str(tmp_path / "content"),
            "--output",
            str(tmp_path / "dist"),
            "--no-progress",
        ],
    )

    assert result.exit_code == 1
    assert "Build failed" in result.output


def test_list_command_prints_rows_newest_first(tmp_path: Path):
    content_dir = _content(tmp_path)

    result = runner.invoke(
        app,
        ["list", "--content-dir", str(content_dir), "--base-path", "/site"],
    )

    assert result.exit_code == 0, result.output
    assert result.output.index("Beta") < result.output.index("Alpha")
    assert "/site/blog/beta/" in result.output


def test_list_command_missing_collection(tmp_path: Path):
    result = runner.invoke(app, ["list", "--content-dir", str(tmp_path)])

    assert result.exit_code == 1
    assert "Listing failed" in result.output
