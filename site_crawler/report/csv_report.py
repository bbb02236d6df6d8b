# site_crawler/report/csv_report.py
"""
CSV-выгрузка результатов обхода: колонки ``url,wordCount,content``.

Все поля в кавычках, переводы строк внутри значений заменяются пробелом.
"""
from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Union

from site_crawler.aggregator import CrawlReport

CSV_HEADER = ("url", "wordCount", "content")

_NEWLINE_RE = re.compile(r"\r?\n")


def _flatten(value: object) -> str:
    return _NEWLINE_RE.sub(" ", str(value))


def render_csv(report: CrawlReport, output_path: Union[Path, str]) -> Path:
    """Сохраняет страницы отчёта в CSV и возвращает путь к файлу."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        quoted = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for page in report.pages:
            quoted.writerow([_flatten(page["url"]), _flatten(page["wordCount"]), _flatten(page["content"])])

    return output
