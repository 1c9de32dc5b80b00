# === FILE: vr_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа VR Scout для командной строки.

Команды:
  pairs     Построить пары reference/test URL и вывести/сохранить JSON
  discover  Найти sitemap сайта (стандартные пути и robots.txt)
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию не используется)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только консоль, если не указан)
  --log-format FORMAT Формат логирования

Команда pairs опции:
  --reference URL, --test URLS, --sitemap URL|auto, --sitemap-filter PATTERNS,
  --sitemap-limit N, --url-mapping MAPPING, --json PATH, --pretty

Дополнительно:
  --version, -v       Показать версию VR Scout

Пример:
  vr-scout pairs -r https://www.example.com -t https://user:pw@staging.example.com -s auto --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from vr_scout import __version__
from vr_scout.config import ScoutConfig, load_config
from vr_scout.crawler.discovery import discover_sitemaps
from vr_scout.crawler.fetcher import XmlFetcher
from vr_scout.engine import resolve_pairs
from vr_scout.errors import ScoutError
from vr_scout.logger import init_logging
from vr_scout.report.json_report import pairs_to_data, render_json
from vr_scout.utils import ensure_scheme

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='VR Scout, version %(version)s')
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
    help='Путь к файлу логов (только консоль, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд VR Scout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path) if config_path else ScoutConfig()
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('pairs', context_settings=CONTEXT_SETTINGS)
@click.option('--reference', '-r', default=None, help='Reference URL')
@click.option('--test', '-t', default=None, help='Test URL(s) через запятую')
@click.option('--sitemap', '-s', default=None, help="URL sitemap или 'auto' для автопоиска")
@click.option('--sitemap-filter', 'sitemap_filter', default=None,
              help='Regex-шаблоны через запятую для исключения URL (например /admin,/api)')
@click.option('--sitemap-limit', 'sitemap_limit', type=int, default=None,
              help='Максимум URL из sitemap (по умолчанию 50)')
@click.option('--url-mapping', 'url_mapping', default=None,
              help='Явные пары reference1:test1,reference2:test2')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить пары в JSON-файл'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def pairs(ctx, reference, test, sitemap, sitemap_filter, sitemap_limit, url_mapping, json_output, pretty):
    """Построить пары reference/test URL."""
    try:
        cfg = ctx.obj['config'].override(
            reference=reference,
            test=test,
            sitemap=sitemap,
            sitemap_filter=sitemap_filter,
            sitemap_limit=sitemap_limit,
            url_mapping=url_mapping,
        )
    except ValidationError as e:
        print_error(f'Некорректные параметры: {e}')

    try:
        result = asyncio.run(resolve_pairs(cfg))
    except (ScoutError, ValueError) as e:
        print_error(f'Ошибка: {e}')

    if json_output:
        try:
            saved = render_json(result, json_output, pretty=pretty)
            click.echo(f'Pairs JSON: {saved}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')
        return

    indent = 2 if pretty else None
    click.echo(json.dumps(pairs_to_data(result), ensure_ascii=False, indent=indent))


async def _discover(url: str, cfg: ScoutConfig):
    async with XmlFetcher(
        timeout=cfg.timeout,
        max_redirects=cfg.max_redirects,
        max_bytes=cfg.max_bytes,
        user_agent=cfg.user_agent,
    ) as fetcher:
        return await discover_sitemaps(url, fetcher)


@cli.command('discover', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def discover(ctx, url):
    """Найти sitemap сайта и вывести их URL."""
    url = ensure_scheme(url.strip())
    found = asyncio.run(_discover(url, ctx.obj['config']))
    if not found:
        print_error(f'Sitemap не найден для {url}')
    for sitemap_url in found:
        click.echo(sitemap_url)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
