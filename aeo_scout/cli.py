# aeo_scout/cli.py
"""
CLI для AEO Scout: аудит одной страницы на готовность к answer-engine.

Пример:
    aeo-scout --config configs/default.yaml audit https://example.com --json report.json --pretty
"""
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click

from aeo_scout import __version__
from aeo_scout.config import AuditConfig, load_config
from aeo_scout.engine import Engine
from aeo_scout.errors import FetchError
from aeo_scout.logger import init_logging
from aeo_scout.models import AuditReport, ExtractionBundle
from aeo_scout.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from aeo_scout.report.json_report import render_json, to_json
from aeo_scout.rubric import load_rubric

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def run_audit(config: AuditConfig, url: str, rubric: Optional[Dict[str, Any]] = None) -> AuditReport:
    return Engine(config).start_audit(url, rubric=rubric)


def run_extract(config: AuditConfig, url: str) -> ExtractionBundle:
    return asyncio.run(Engine(config).extract(url))


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='AEO Scout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON (по умолчанию configs/default.yaml, если есть).'
)
@click.option(
    '--max-words', '-w', 'max_words',
    type=click.IntRange(min=1),
    default=None,
    help='Бюджет слов для извлечённого текста (override max_words)'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.pass_context
def cli(ctx, config_path, max_words, log_level, log_file):
    """Группа команд AEO Scout CLI."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    if max_words is not None:
        cfg = cfg.model_copy(update={'max_words': max_words})
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('audit', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=str(DEFAULT_TEMPLATE_DIR),
    show_default=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (report.html.j2)'
)
@click.option(
    '--rubric', '-r', 'rubric_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='JSON-ответ AI-аудита: его рекомендации добавляются к исправлениям'
)
@click.option('--no-link-check', 'no_link_check', is_flag=True, help='Не проверять внешние ссылки на битость')
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def audit(ctx, url, json_output, html_output, template_dir, rubric_path, no_link_check, pretty):
    """Провести аудит страницы URL и вывести/сохранить отчёт."""
    cfg = ctx.obj['config']
    if no_link_check:
        cfg = cfg.model_copy(update={'check_links': False})
    rubric = None
    if rubric_path is not None:
        try:
            rubric = load_rubric(rubric_path)
        except Exception as e:
            print_error(f'Ошибка загрузки AI-рубрики: {e}')
    try:
        report = run_audit(cfg, url, rubric)
    except FetchError as e:
        print_error(f'Не удалось загрузить страницу: {e}')
    except Exception as e:
        print_error(f'Ошибка при аудите: {e}')

    if not json_output and not html_output:
        click.echo(to_json(report, pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('extract', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def extract(ctx, url, pretty):
    """Вывести извлечённые сигналы страницы (без оценки) в JSON."""
    cfg = ctx.obj['config']
    try:
        bundle = run_extract(cfg, url)
    except FetchError as e:
        print_error(f'Не удалось загрузить страницу: {e}')
    except Exception as e:
        print_error(f'Ошибка при извлечении: {e}')
    click.echo(to_json(bundle, pretty=pretty))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
