"""Unit tests for the main entry point.

Tests the main() function including:
- Configuration loading with priority (CLI > env > config)
- Request body construction from flags, files and stdin
- A full run against an in-memory database
- Exit code handling
"""

import io
import json
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from internscan.config.exceptions import ConfigurationError
from internscan.domain.results import StepResult
from internscan.fetching import FetchedPage
from internscan.main import build_parser, build_request_body, load_runtime_config, main

PAGES_DIR = Path(__file__).parent / "fixtures" / "pages"

CONFIG_YAML = """
companies:
  - id: c1
    name: Example
    career_pages:
      - https://example.com/careers
geographies: [Toronto]
enrichment:
  enabled: false
logging:
  level: WARNING
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


@pytest.fixture
def no_logging_setup():
    """Keep main() from replacing the root logger's handlers."""
    with patch("internscan.main.configure_logging") as mock_configure:
        yield mock_configure


@pytest.fixture
def stub_fetcher():
    """PageFetcher replacement serving the JSON-LD fixture for every URL."""
    html = (PAGES_DIR / "jsonld_posting.html").read_text(encoding="utf-8")
    fetcher = Mock()
    fetcher.fetch.side_effect = lambda url: StepResult.success(
        FetchedPage(requested_url=url, url=url, html=html, attempts=[url])
    )
    with patch("internscan.pipeline.runner.PageFetcher", return_value=fetcher):
        yield fetcher


class TestLoadRuntimeConfig:
    """Test suite for load_runtime_config helper."""

    def test_config_level_used_without_overrides(self, config_file, mock_env_vars):
        _, env_config = load_runtime_config(config_file, None)

        assert env_config.log_level == "WARNING"

    def test_env_level_beats_config(self, config_file, mock_env_vars, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")

        _, env_config = load_runtime_config(config_file, None)

        assert env_config.log_level == "ERROR"

    def test_cli_level_beats_env(self, config_file, mock_env_vars, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        _, env_config = load_runtime_config(config_file, "DEBUG")

        assert env_config.log_level == "DEBUG"


class TestBuildRequestBody:
    def test_flags(self):
        args = build_parser().parse_args(
            ["--company-id", "c1", "--company-id", "c2", "--geography", "Toronto"]
        )

        assert build_request_body(args) == {"companyIds": ["c1", "c2"], "geographies": ["Toronto"]}

    def test_no_flags(self):
        assert build_request_body(build_parser().parse_args([])) == {}

    def test_request_file(self, tmp_path):
        request_file = tmp_path / "request.json"
        request_file.write_text('{"companyIds": ["c1"]}', encoding="utf-8")

        args = build_parser().parse_args(["--request", str(request_file)])

        assert build_request_body(args) == '{"companyIds": ["c1"]}'

    def test_request_from_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"geographies": ["Remote"]}'))

        args = build_parser().parse_args(["--request", "-"])

        assert build_request_body(args) == '{"geographies": ["Remote"]}'

    def test_missing_request_file(self, tmp_path):
        args = build_parser().parse_args(["--request", str(tmp_path / "missing.json")])

        with pytest.raises(ConfigurationError, match="Cannot read request file"):
            build_request_body(args)


class TestMain:
    """Test suite for main() exit codes and output."""

    def test_successful_scan(self, config_file, mock_env_vars, no_logging_setup, stub_fetcher, capsys):
        exit_code = main(["--config", str(config_file)])

        assert exit_code == 0
        response = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert response == {"ok": True, "totalInserted": 1, "companiesProcessed": 1}
        stub_fetcher.fetch.assert_called_once_with("https://example.com/careers")
        stub_fetcher.close.assert_called_once()
        no_logging_setup.assert_called_once_with(level="WARNING", format_type="key-value", environment="test")

    def test_company_filter_without_matches(self, config_file, mock_env_vars, no_logging_setup, stub_fetcher, capsys):
        exit_code = main(["--config", str(config_file), "--company-id", "unknown"])

        assert exit_code == 0
        response = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert response["companiesProcessed"] == 0
        assert response["message"] == "No companies or career pages found"
        stub_fetcher.fetch.assert_not_called()

    def test_configuration_error(self, tmp_path, mock_env_vars, no_logging_setup, capsys):
        exit_code = main(["--config", str(tmp_path / "missing.yaml")])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert json.loads(captured.out.strip())["ok"] is False
        assert "Configuration Error" in captured.err

    def test_malformed_request(self, config_file, tmp_path, mock_env_vars, no_logging_setup, stub_fetcher, capsys):
        request_file = tmp_path / "request.json"
        request_file.write_text("{not json", encoding="utf-8")

        exit_code = main(["--config", str(config_file), "--request", str(request_file)])

        assert exit_code == 1
        response = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert response["ok"] is False
        assert "not valid JSON" in response["error"]

    def test_database_error(self, config_file, monkeypatch, no_logging_setup, capsys):
        monkeypatch.setenv("DATABASE_URL", "bogus://nowhere")
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        exit_code = main(["--config", str(config_file)])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert json.loads(captured.out.strip())["ok"] is False
        assert "Database Error" in captured.err
