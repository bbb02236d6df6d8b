# File: tests/test_cli.py
"""Тесты для CLI (`site_crawler.cli`) с использованием click.testing.CliRunner.
Проверяют команды `domain`, `pages`, `config`, `--version`, а также обработку ошибок.
"""
import importlib
import json

import pytest
from click.testing import CliRunner

from site_crawler import __version__
from site_crawler.cli import cli
from site_crawler.crawler.models import DomainRequest, PageResult, PageStatus, PagesRequest

cli_module = importlib.import_module("site_crawler.cli")

QUIET = ["--log-level", "ERROR"]


@pytest.fixture()
def calls(monkeypatch, tmp_path):
    """Патчим start_crawl: возвращает фиктивные страницы без сети и запоминает запросы."""
    recorded = []

    async def fake_crawl(request, cfg):
        recorded.append(request)
        if isinstance(request, DomainRequest):
            return [PageResult(url="https://example.com/", status=PageStatus.OK, content="Hello there")]
        return [PageResult(url=u, status=PageStatus.OK, content="x") for u in dict.fromkeys(filter(None, request.urls))]

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    monkeypatch.chdir(tmp_path)
    return recorded


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_domain_stdout(calls):
    result = CliRunner().invoke(cli, [*QUIET, "domain", "example.com", "--max-pages", "1000"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data == {
        "pages": [{"url": "https://example.com/", "status": "ok", "content": "Hello there", "wordCount": 2}]
    }
    assert calls[0].url == "example.com"
    assert calls[0].max_pages == 1000


def test_pages_stdout_with_file(calls, tmp_path):
    url_file = tmp_path / "urls.txt"
    url_file.write_text("https://b.example\nhttps://c.example, https://a.example\n", encoding="utf-8")

    result = CliRunner().invoke(cli, [*QUIET, "pages", "https://a.example", "--from-file", str(url_file)])
    assert result.exit_code == 0, result.output
    assert isinstance(calls[0], PagesRequest)
    assert calls[0].urls == ["https://a.example", "https://b.example", "https://c.example", "https://a.example"]
    urls = [p["url"] for p in json.loads(result.output)["pages"]]
    assert urls == ["https://a.example", "https://b.example", "https://c.example"]


def test_pages_without_urls_fails(calls):
    result = CliRunner().invoke(cli, [*QUIET, "pages"])
    assert result.exit_code == 1
    assert "No URLs provided" in result.output
    assert calls == []


def test_domain_invalid_url_fails(calls):
    result = CliRunner().invoke(cli, [*QUIET, "domain", "exa mple.com"])
    assert result.exit_code == 1
    assert "Invalid URL" in result.output
    assert calls == []


def test_reports_written(calls, tmp_path):
    out_json = tmp_path / "out" / "crawl.json"
    out_csv = tmp_path / "crawl.csv"
    out_html = tmp_path / "crawl.html"

    result = CliRunner().invoke(
        cli,
        [*QUIET, "domain", "example.com", "--json", str(out_json), "--csv", str(out_csv), "--html", str(out_html)],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(out_json.read_text(encoding="utf-8"))["summary"]["total_words"] == 2
    assert out_csv.read_text(encoding="utf-8").splitlines()[1] == '"https://example.com/","2","Hello there"'
    assert "Hello there" in out_html.read_text(encoding="utf-8")
    assert "1 pages crawled (1 ok, 0 error), 2 words" in result.output


def test_domain_blank_url_fails(calls):
    result = CliRunner().invoke(cli, [*QUIET, "domain", "   "])
    assert result.exit_code == 1
    assert "Domain URL is required" in result.output
    assert calls == []


def test_no_whole_crawl_timeout_option(calls):
    result = CliRunner().invoke(cli, [*QUIET, "domain", "example.com", "--crawl-timeout", "5"])
    assert result.exit_code == 2
    assert "No such option" in result.output
    assert calls == []


def test_show_config(tmp_path, monkeypatch):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("max_depth: 1\ntimeout: 3\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["max_depth"] == 1
    assert data["timeout"] == 3.0
    assert data["max_pages_limit"] == 60


def test_bad_config_fails(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("timeout: -5\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_serve_uses_config(monkeypatch, tmp_path):
    captured = {}

    def fake_run_app(app, host, port):
        captured.update(app=app, host=host, port=port)

    monkeypatch.setattr(cli_module.web, "run_app", fake_run_app)
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, [*QUIET, "serve", "--port", "9999"])
    assert result.exit_code == 0, result.output
    assert captured["host"] == "127.0.0.1"
    assert captured["port"] == 9999
