"""Tests for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from peoplefinder.cli import _format_payload, _setup_logging, app
from peoplefinder.web.app import app as web_app


runner = CliRunner()


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("peoplefinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("peoplefinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestFormatPayload:
    def test_text_kept(self) -> None:
        assert _format_payload("John,Doe") == "John,Doe"

    def test_mapping_as_json(self) -> None:
        assert _format_payload({"name": "Ann"}) == '{"name": "Ann"}'


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_finds_matches(self, data_dir: Path) -> None:
        result = runner.invoke(app, ["search", "--first-name", "john", "--data-dir", str(data_dir)])

        assert result.exit_code == 0
        assert "a.txt" in result.stdout
        assert "pic_john.jpg" in result.stdout

    def test_search_no_matches(self, data_dir: Path) -> None:
        result = runner.invoke(app, ["search", "--email", "nobody@nowhere", "--data-dir", str(data_dir)])

        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_requires_a_field(self, data_dir: Path) -> None:
        result = runner.invoke(app, ["search", "--data-dir", str(data_dir)])

        assert result.exit_code != 0

    def test_search_missing_directory(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["search", "--first-name", "john", "--data-dir", str(tmp_path / "missing")]
        )

        assert result.exit_code == 1

    def test_search_reports_skipped_files(self, data_dir: Path) -> None:
        (data_dir / "broken.json").write_text("[{", encoding="utf-8")

        result = runner.invoke(app, ["search", "--first-name", "john", "--data-dir", str(data_dir)])

        assert result.exit_code == 0
        assert "Skipped broken.json" in result.stdout


class TestWebCommand:
    """Tests for the web command."""

    @patch("uvicorn.run")
    def test_web_starts_server(self, mock_run: MagicMock, data_dir: Path) -> None:
        try:
            result = runner.invoke(
                app, ["web", "--port", "4000", "--data-dir", str(data_dir), "--workers", "2"]
            )

            assert result.exit_code == 0
            mock_run.assert_called_once()
            assert mock_run.call_args[1]["port"] == 4000
            assert web_app.state.config.data_dir == data_dir
            assert web_app.state.config.max_workers == 2
        finally:
            web_app.state.config = None

    @patch("uvicorn.run")
    def test_web_default_port(self, mock_run: MagicMock, data_dir: Path) -> None:
        try:
            result = runner.invoke(app, ["web", "--data-dir", str(data_dir)])

            assert result.exit_code == 0
            assert mock_run.call_args[1]["port"] == 3000
        finally:
            web_app.state.config = None

    @patch("uvicorn.run")
    def test_web_warns_missing_folder(self, mock_run: MagicMock, tmp_path: Path) -> None:
        try:
            result = runner.invoke(app, ["web", "--data-dir", str(tmp_path / "missing")])

            assert result.exit_code == 0
            assert "data folder not found" in result.stdout
        finally:
            web_app.state.config = None
