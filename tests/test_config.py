# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_crawler.config import DEFAULT_USER_AGENT, CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("timeout: 5\nmax_depth: 1", ".yaml", None),
        (json.dumps({"timeout": 5, "max_depth": 1}), ".json", None),
        ("timeout: -1", ".yaml", ValidationError),
        ("unknown_key: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken", ".json", ValueError),
        ("timeout = 5", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.timeout == 5.0
        assert cfg.max_depth == 1


def test_defaults():
    cfg = CrawlerConfig()
    assert cfg.timeout == 12.0
    assert cfg.user_agent == DEFAULT_USER_AGENT
    assert "contact=" in cfg.user_agent
    assert cfg.accept == "text/html,application/xhtml+xml"
    assert cfg.default_max_pages == 30
    assert cfg.max_pages_limit == 60
    assert cfg.max_depth == 2
    assert cfg.asset_extensions == ("png", "jpg", "jpeg", "gif", "svg", "ico", "css", "js", "pdf", "zip")


@pytest.mark.parametrize(
    "requested,expected",
    [(None, 30), (40, 40), (60, 60), (1000, 60), (0, 0)],
)
def test_effective_max_pages(requested, expected):
    assert CrawlerConfig().effective_max_pages(requested) == expected


def test_default_cannot_exceed_limit():
    with pytest.raises(ValidationError):
        CrawlerConfig(default_max_pages=80, max_pages_limit=60)


def test_asset_extensions_are_normalized():
    cfg = CrawlerConfig(asset_extensions=[".PNG", "webp"])
    assert cfg.asset_extensions == ("png", "webp")


def test_config_is_frozen():
    cfg = CrawlerConfig()
    with pytest.raises(ValidationError):
        cfg.timeout = 1.0


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == CrawlerConfig()


def test_load_config_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_depth: 3\n", encoding="utf-8")
    assert load_config(None).max_depth == 3


def test_load_config_explicit_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")
