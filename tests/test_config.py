# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from aeo_scout.config import AuditConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("timeout: 3\nmax_words: 500", ".yaml", None),
        (json.dumps({"timeout": 3, "max_words": 500}), ".json", None),
        ("", ".yml", None),
        ("bogus_field: 1", ".yaml", ValidationError),
        ("timeout: 0", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- a\n- b", ".yaml", TypeError),
        ("[1, 2]", ".json", TypeError),
        ("{broken", ".json", ValueError),
        ("timeout = 3", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, AuditConfig)
        if content:
            assert cfg.timeout == 3.0
            assert cfg.max_words == 500


def test_load_config_default_missing(tmp_path, monkeypatch):
    # Без configs/default.yaml берутся значения по умолчанию
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == AuditConfig()


def test_load_config_default_present(tmp_path, monkeypatch):
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("schema_cap: 64\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert load_config(None).schema_cap == 64


def test_explicit_path_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_defaults_and_frozen():
    cfg = AuditConfig(user_agent="  Agent/1.0  ")
    assert cfg.user_agent == "Agent/1.0"
    assert cfg.max_words == 1200
    assert cfg.schema_cap == 1024
    assert cfg.link_check_limit == 10
    with pytest.raises(ValidationError):
        cfg.timeout = 1.0


def test_shipped_default_config_is_valid():
    path = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"
    assert isinstance(load_config(path), AuditConfig)
