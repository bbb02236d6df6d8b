# === FILE: site_crawler/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteCrawler через командную строку.

Команды:
  domain URL  Обойти сайт в ширину, начиная с URL (в пределах одного origin)
  pages URL…  Загрузить только перечисленные страницы (параллельно)
  serve       Запустить HTTP-сервис с маршрутом POST /api/crawler
  config      Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Опции domain/pages:
  --json PATH         Сохранить JSON-отчёт в файл
  --csv PATH          Сохранить CSV (url, wordCount, content)
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблонами
  --pretty            Преформатировать JSON-вывод (отступ 2)

Пример:
  site-crawler domain example.com --max-pages 40 --csv crawl.csv
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from aiohttp import web

from site_crawler import __version__
from site_crawler.aggregator import aggregate_results
from site_crawler.config import load_config
from site_crawler.crawler.models import DomainRequest, PagesRequest
from site_crawler.errors import CrawlRequestError
from site_crawler.logger import DEFAULT_FORMAT, init_logging
from site_crawler.report.csv_report import render_csv
from site_crawler.report.html_report import render_html
from site_crawler.report.json_report import render_json
from site_crawler.scanner import start_crawl
from site_crawler.service import create_app, parse_request
from site_crawler.utils import split_url_list

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def output_options(func):
    """Общие опции вывода для команд domain и pages."""
    options = [
        click.option('--json', '-j', 'json_output', default=None,
                     type=click.Path(writable=True, dir_okay=False, path_type=Path),
                     help='Сохранить JSON-отчёт в файл'),
        click.option('--csv', 'csv_output', default=None,
                     type=click.Path(writable=True, dir_okay=False, path_type=Path),
                     help='Сохранить CSV (url, wordCount, content)'),
        click.option('--html', '-h', 'html_output', default=None,
                     type=click.Path(writable=True, dir_okay=False, path_type=Path),
                     help='Сохранить HTML-отчёт в файл'),
        click.option('--template', '-t', 'template_dir', default=None,
                     type=click.Path(exists=True, file_okay=False, path_type=Path),
                     help='Папка с Jinja2-шаблонами (по умолчанию встроенный шаблон)'),
        click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteCrawler, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteCrawler CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


def _run_and_report(ctx, body, json_output, csv_output, html_output, template_dir, pretty):
    cfg = ctx.obj['config']
    try:
        request = parse_request(body)
    except CrawlRequestError as e:
        print_error(e.message)

    try:
        pages = asyncio.run(start_crawl(request, cfg))
    except CrawlRequestError as e:
        print_error(e.message)
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    report = aggregate_results(pages)

    # Если не сохраняем в файл — печатаем в stdout
    if not (json_output or csv_output or html_output):
        indent = 2 if pretty else None
        click.echo(json.dumps({'pages': report.pages}, ensure_ascii=False, indent=indent))
        return

    if json_output:
        try:
            click.echo(f'JSON report: {render_json(report, json_output, pretty=pretty)}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if csv_output:
        try:
            click.echo(f'CSV report: {render_csv(report, csv_output)}')
        except Exception as e:
            print_error(f'Ошибка при сохранении CSV: {e}')

    if html_output:
        try:
            click.echo(f'HTML report: {render_html(report, template_dir, html_output)}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    summary = report.summary()
    click.echo(
        f"{summary['total_pages']} pages crawled "
        f"({summary['ok_pages']} ok, {summary['error_pages']} error), "
        f"{summary['total_words']:,} words"
    )


@cli.command('domain', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--max-pages', '-m', 'max_pages', type=int, default=None,
              help='Лимит страниц (не больше потолка из конфига)')
@output_options
@click.pass_context
def domain(ctx, url, max_pages, **outputs):
    """Обойти сайт в ширину начиная с URL."""
    body = DomainRequest(url=url, max_pages=max_pages).model_dump(by_alias=True)
    _run_and_report(ctx, body, **outputs)


@cli.command('pages', context_settings=CONTEXT_SETTINGS)
@click.argument('urls', nargs=-1)
@click.option('--from-file', '-f', 'url_file', default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Файл со списком URL (через перевод строки или запятую)')
@output_options
@click.pass_context
def pages(ctx, urls, url_file, **outputs):
    """Загрузить только перечисленные страницы."""
    collected = list(urls)
    if url_file:
        collected.extend(split_url_list(url_file.read_text(encoding='utf-8')))
    body = PagesRequest(urls=collected).model_dump()
    _run_and_report(ctx, body, **outputs)


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default=None, help='Адрес (по умолчанию из конфига)')
@click.option('--port', '-p', type=int, default=None, help='Порт (по умолчанию из конфига)')
@click.pass_context
def serve(ctx, host, port):
    """Запустить HTTP-сервис POST /api/crawler."""
    cfg = ctx.obj['config']
    web.run_app(create_app(cfg), host=host or cfg.host, port=port or cfg.port)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
