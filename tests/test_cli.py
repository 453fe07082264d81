"""Tests for the cli module."""

import json
from unittest import mock

import pytest

from sitemap_inspector import cli as cli_module
from sitemap_inspector.config import InspectorConfig
from sitemap_inspector.errors import PageUnreachable, SitemapUnreachable
from sitemap_inspector.report import BrokenLink, CrawlReport

SEED = "http://localhost/sitemap.xml"


def _broken(link, same_origin, parent=None):
    return BrokenLink(
        link=link,
        parent_page=parent,
        error=PageUnreachable(link, "404 Not Found", 404),
        has_same_origin_as_sitemap=same_origin,
    )


def _report(*broken_links):
    return CrawlReport(
        base_url="http://localhost",
        sitemap_urls=[SEED],
        all_urls=["http://localhost/"],
        broken_links=list(broken_links),
    )


class TestParseArguments:
    """Tests for argument parsing."""

    def test_key_value_styles(self):
        """Both --key=value and --key value should be accepted."""
        args = cli_module.parse_arguments(
            [SEED, "--max-active-pages=5", "--timeout", "2.5"],
        )

        config = cli_module.build_config(args)

        assert args.sitemap == SEED
        assert config.max_active_pages == 5
        assert config.timeout == 2.5

    def test_defaults(self):
        """Without flags the default config should be used."""
        config = cli_module.build_config(cli_module.parse_arguments([SEED]))

        assert config == InspectorConfig()

    def test_missing_sitemap(self):
        """A missing sitemap URL should exit with usage."""
        with pytest.raises(SystemExit) as exc_info:
            cli_module.parse_arguments([])

        assert exc_info.value.code == 2


class TestMain:
    """Tests for main function."""

    @mock.patch("sitemap_inspector.cli.inspect_sitemap")
    def test_all_links_working(self, mock_inspect, capsys):
        """Should exit 0 when nothing is broken."""
        mock_inspect.return_value = _report()

        exit_code = cli_module.main([SEED])

        assert exit_code == 0
        assert "All links working" in capsys.readouterr().out

    @mock.patch("sitemap_inspector.cli.inspect_sitemap")
    def test_same_origin_broken(self, mock_inspect, capsys):
        """Broken links on the own domain should fail the run."""
        mock_inspect.return_value = _report(
            _broken("http://localhost/contact/", True, "http://localhost/"),
        )

        exit_code = cli_module.main([SEED])

        out = capsys.readouterr().out
        assert exit_code == 1
        assert 'from your own domain "http://localhost"' in out
        assert "http://localhost/contact/ [parent: http://localhost/]" in out
        assert "==> 404 Not Found" in out

    @mock.patch("sitemap_inspector.cli.inspect_sitemap")
    def test_foreign_broken_is_advisory(self, mock_inspect, capsys):
        """Broken links to other sites are printed but do not fail the run."""
        mock_inspect.return_value = _report(_broken("https://other.com/", False))

        exit_code = cli_module.main([SEED])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "https://other.com/ [parent: http://localhost]" in out
        assert "own domain" not in out

    @mock.patch("sitemap_inspector.cli.inspect_sitemap")
    def test_fail_on_foreign(self, mock_inspect):
        """--fail-on-foreign should turn foreign breaks into a failure."""
        mock_inspect.return_value = _report(_broken("https://other.com/", False))

        assert cli_module.main([SEED, "--fail-on-foreign"]) == 1

    @mock.patch("sitemap_inspector.cli.inspect_sitemap")
    def test_fatal_error(self, mock_inspect, capsys):
        """Fatal errors go to stderr with exit code 1."""
        mock_inspect.side_effect = SitemapUnreachable(SEED, "400 Bad Request")

        exit_code = cli_module.main([SEED])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Unable to access the sitemap" in captured.err

    @mock.patch("sitemap_inspector.cli.inspect_sitemap")
    def test_invalid_option(self, mock_inspect, capsys):
        """Unparseable option values are reported as errors."""
        exit_code = cli_module.main([SEED, "--max-active-pages", "lots"])

        assert exit_code == 1
        assert "max_active_pages" in capsys.readouterr().err
        mock_inspect.assert_not_called()

    @mock.patch("sitemap_inspector.cli.inspect_sitemap")
    def test_config_passed_through(self, mock_inspect):
        """Options should reach the inspector as a config."""
        mock_inspect.return_value = _report()

        cli_module.main([SEED, "--no-follow-redirects", "--user-agent", "bot/1"])

        _, config = mock_inspect.call_args.args
        assert config.follow_redirects is False
        assert config.user_agent == "bot/1"

    @mock.patch("sitemap_inspector.cli.inspect_sitemap")
    def test_json_output(self, mock_inspect, capsys):
        """--json should print the report as JSON."""
        mock_inspect.return_value = _report(_broken("http://localhost/x/", True))

        exit_code = cli_module.main([SEED, "--json"])

        data = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert data["broken_links"][0]["link"] == "http://localhost/x/"
        assert data["broken_links"][0]["error"] == "404 Not Found"
