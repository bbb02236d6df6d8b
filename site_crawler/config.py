# === FILE: site_crawler/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера SiteCrawler.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from site_crawler.utils import ASSET_EXTENSIONS

DEFAULT_USER_AGENT = "VoiceAICrawler/1.0 (+https://example.com; contact=admin@example.com)"
DEFAULT_ACCEPT = "text/html,application/xhtml+xml"


class CrawlerConfig(BaseModel):
    """Конфигурация краулера: таймауты, заголовки и жёсткие лимиты обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(12.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    accept: str = Field(DEFAULT_ACCEPT, min_length=1, description="Заголовок Accept.")
    default_max_pages: int = Field(30, ge=1, description="Лимит страниц, если maxPages не передан.")
    max_pages_limit: int = Field(60, ge=1, description="Жёсткий потолок числа страниц в режиме domain.")
    max_depth: int = Field(2, ge=0, description="Максимальная глубина обхода от seed-URL.")
    asset_extensions: Tuple[str, ...] = Field(
        ASSET_EXTENSIONS, description="Расширения ресурсов, которые не ставятся в очередь."
    )
    host: str = Field("127.0.0.1", min_length=1, description="Адрес HTTP-сервиса.")
    port: int = Field(8080, ge=1, le=65535, description="Порт HTTP-сервиса.")

    @field_validator("asset_extensions", mode="before")
    def _strip_dots(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return tuple(str(ext).lower().lstrip(".") for ext in v)
        return v

    @model_validator(mode="after")
    def _check_limits(self) -> CrawlerConfig:
        if self.default_max_pages > self.max_pages_limit:
            raise ValueError("default_max_pages must not exceed max_pages_limit")
        return self

    def effective_max_pages(self, requested: int | None) -> int:
        """``min(requested or default, limit)``."""
        value = self.default_max_pages if requested is None else requested
        return min(value, self.max_pages_limit)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без явного пути использует configs/default.yaml, а если его нет — значения по умолчанию.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)
