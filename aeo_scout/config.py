"""
Модуль для загрузки и валидации конфигурации аудитора AEO Scout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["AuditConfig", "load_config"]


class AuditConfig(BaseModel):
    """Конфигурация одного запуска аудита страницы."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field(
        "Mozilla/5.0 (compatible; AEO-Clarity-Scanner/1.0)",
        min_length=1,
        description="Заголовок User-Agent.",
    )
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    max_redirects: int = Field(5, ge=0, description="Максимальное число редиректов.")
    max_words: int = Field(1200, ge=1, description="Бюджет слов для извлечённого текста.")
    schema_cap: int = Field(1024, ge=1, description="Лимит символов на один блок JSON-LD.")
    check_links: bool = Field(True, description="Проверять ли внешние ссылки на битость.")
    link_check_limit: int = Field(10, ge=0, description="Сколько внешних ссылок проверять.")
    link_check_concurrency: int = Field(
        10, ge=1, description="Одновременных проверок ссылок."
    )

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


_DEFAULT_CFG = Path("configs/default.yaml")

# suffix -> (format name, parser, parser error)
_PARSERS: dict[str, tuple[str, Callable[[str], Any], type[Exception]]] = {
    ".yaml": ("YAML", yaml.safe_load, yaml.YAMLError),
    ".yml": ("YAML", yaml.safe_load, yaml.YAMLError),
    ".json": ("JSON", json.loads, json.JSONDecodeError),
}


def _read_mapping(path: Path) -> dict[str, Any]:
    """Содержимое конфига как dict; формат определяется по расширению файла."""
    suffix = path.suffix.lower()
    if suffix not in _PARSERS:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")
    kind, parse, parse_error = _PARSERS[suffix]
    try:
        data = parse(path.read_text(encoding="utf-8")) or {}
    except parse_error as exc:
        raise ValueError(f"Неправильный {kind} в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень {kind} должен быть mapping, получено {type(data).__name__}")
    return data


def _config_path(path: Union[str, Path, None]) -> Optional[Path]:
    if path is None:
        return _DEFAULT_CFG if _DEFAULT_CFG.is_file() else None
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
    return path_obj


def load_config(path: Union[str, Path, None] = None) -> AuditConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AuditConfig.

    Без явного пути используется ``configs/default.yaml``, а если его нет,
    значения по умолчанию. Явно указанный, но отсутствующий файл даёт
    FileNotFoundError.
    """
    path_obj = _config_path(path)
    if path_obj is None:
        return AuditConfig()
    return AuditConfig(**_read_mapping(path_obj))
