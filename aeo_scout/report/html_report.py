"""aeo_scout.report.html_report: Генерация HTML-отчёта аудита с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from aeo_scout.models import AuditReport

#: template directory shipped with the package
DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def score_band(score: int) -> str:
    """CSS class for a 0–100 score: ``good`` (≥80), ``fair`` (≥50) or ``poor``."""
    if score >= 80:
        return "good"
    if score >= 50:
        return "fair"
    return "poor"


def _environment(template_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["score_band"] = score_band
    return env


def render_html(
    report: AuditReport,
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт из шаблона ``report.html.j2`` и сохраняет его.

    Шаблон получает сам ``report`` и его сериализованную форму ``data``
    (то же, что уходит в JSON-отчёт).

    Args:
        report: объект AuditReport.
        template_dir: директория с шаблоном (None: встроенная).
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    template = _environment(Path(template_dir or DEFAULT_TEMPLATE_DIR)).get_template(TEMPLATE_NAME)
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(template.render(report=report, data=report.to_dict()), encoding="utf-8")
    return output
