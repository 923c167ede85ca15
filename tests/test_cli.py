# File: tests/test_cli.py
"""CLI tests (`link_scout.cli`) driven through click.testing.CliRunner.

The network layer is replaced by fakes of `check_links` / `dump_links`.
"""
import json

import pytest
from click.testing import CliRunner

import link_scout.cli as cli_module
from link_scout.cli import cli
from link_scout.crawler.models import CrawlResult, LinkStats, Reachable, Unreachable
from link_scout.crawler.urls import AbsoluteUrl
from link_scout.errors import SeedUnreachable

STATS = LinkStats(parsed=3, valid=2, filtered=2, unique=2, domains=1)


def fake_result() -> CrawlResult:
    return CrawlResult(
        outcomes=(
            Reachable(AbsoluteUrl.parse("http://example.com/ok"), 200),
            Unreachable(AbsoluteUrl.parse("http://example.com/gone"), 404),
        ),
        total_links=3,
        stats=STATS,
    )


@pytest.fixture()
def captured(monkeypatch):
    """Replaces check_links/dump_links and records the configs they receive."""
    seen = {}

    async def fake_check(cfg, reporter=None):
        seen["check"] = cfg
        result = fake_result()
        if reporter is not None:
            reporter.start(result.stats)
            for outcome in result.outcomes:
                reporter(outcome.url, outcome)
            reporter.close()
            reporter.summary(result)
        return result

    async def fake_dump(cfg):
        seen["dump"] = cfg
        return frozenset(o.url for o in fake_result().outcomes), STATS

    monkeypatch.setattr(cli_module, "check_links", fake_check)
    monkeypatch.setattr(cli_module, "dump_links", fake_dump)
    return seen


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "LinkScout" in result.output


def test_check_prints_failures_and_summary(captured):
    runner = CliRunner()
    result = runner.invoke(cli, ["check", "example.com", "--no-progress"])
    assert result.exit_code == 0, result.output
    assert "http://example.com/gone failed (404 Not Found)" in result.output
    assert "http://example.com/ok is valid" not in result.output
    assert "Got 1/2 valid links" in result.output
    cfg = captured["check"]
    assert cfg.url == "example.com"
    assert cfg.concurrency == 4
    assert cfg.truncate_fragments is True


def test_check_show_ok_and_options(captured):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "check", "example.com", "--no-progress",
            "-s", "-p", "7", "-t", "2.5", "-u", "Agent/9", "-i", "gone", "--keep-fragments", "--insecure",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "http://example.com/ok is valid (200 OK)" in result.output
    cfg = captured["check"]
    assert (cfg.concurrency, cfg.timeout, cfg.user_agent) == (7, 2.5, "Agent/9")
    assert cfg.ignore_pattern == "gone"
    assert cfg.show_ok is True
    assert cfg.truncate_fragments is False
    assert cfg.verify_tls is False


def test_check_writes_reports(tmp_path, captured):
    json_out = tmp_path / "out" / "report.json"
    html_out = tmp_path / "report.html"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["check", "example.com", "--no-progress", "--json", str(json_out), "--html", str(html_out)],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(json_out.read_text(encoding="utf-8"))
    assert data["seed"] == "example.com"
    assert data["reachable"] == 1
    assert data["outcomes"][0]["url"] == "http://example.com/gone"
    assert "http://example.com/gone" in html_out.read_text(encoding="utf-8")


def test_config_file_is_overridden_by_options(tmp_path, captured):
    cfg_file = tmp_path / "linkscout.yaml"
    cfg_file.write_text("url: example.com\nconcurrency: 8\ntimeout: 3\noutput_file: links.txt\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "check", "--no-progress", "-p", "2"])
    assert result.exit_code == 0, result.output
    cfg = captured["check"]
    assert cfg.concurrency == 2
    assert cfg.timeout == 3.0


def test_seed_unreachable_exits_with_error(monkeypatch):
    async def failing(cfg, reporter=None):
        raise SeedUnreachable("http://example.com/", 503)

    monkeypatch.setattr(cli_module, "check_links", failing)
    runner = CliRunner()
    result = runner.invoke(cli, ["check", "example.com", "--no-progress"])
    assert result.exit_code == 1
    assert "Could not reach website http://example.com/: HTTP 503" in result.output


def test_invalid_pattern_exits_with_error(captured):
    runner = CliRunner()
    result = runner.invoke(cli, ["check", "example.com", "-i", "(oops"])
    assert result.exit_code == 1
    assert "Invalid ignore pattern" in result.output
    assert "check" not in captured


def test_missing_url_is_a_configuration_error(captured):
    runner = CliRunner()
    result = runner.invoke(cli, ["check"])
    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_dump_writes_links(tmp_path, captured):
    out = tmp_path / "links.txt"
    runner = CliRunner()
    result = runner.invoke(cli, ["dump", "example.com", "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8") == "http://example.com/gone\nhttp://example.com/ok\n"
    assert "Wrote 2 links" in result.output
    assert captured["dump"].output_file == out


def test_dump_requires_output(captured):
    runner = CliRunner()
    result = runner.invoke(cli, ["dump", "example.com"])
    assert result.exit_code == 1
    assert "Configuration error" in result.output
