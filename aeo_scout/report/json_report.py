# aeo_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта AEO Scout.

Один сериализатор на оба пути вывода: файл (``--json``) и stdout.
"""
import json
from pathlib import Path

from aeo_scout.models import AuditReport, ExtractionBundle


def to_json(payload: AuditReport | ExtractionBundle, *, pretty: bool = True) -> str:
    """Сериализует отчёт или набор извлечённых сигналов (кириллица без \\u-экранирования)."""
    return json.dumps(payload.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def render_json(report: AuditReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект AuditReport
    :param output_path: путь к JSON-файлу (каталоги создаются)
    :param pretty: отступ 2 пробела (иначе одна строка)
    :return: Path сохранённого файла

    Пример:
    ```python
    from aeo_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/example.com.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(to_json(report, pretty=pretty) + "\n", encoding="utf-8")
    return output
