# === FILE: vr_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации VR Scout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vr_scout.utils import ensure_scheme, parse_url_list

DEFAULT_USER_AGENT = "VRScout/1.0 (Visual Regression URL Scout)"
AUTO_SITEMAP = "auto"


class ScoutConfig(BaseModel):
    """Конфигурация одного запуска подбора пар URL."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    reference: Optional[str] = Field(None, description="Reference URL (эталонное окружение).")
    test: List[str] = Field(default_factory=list, description="Test URL(s), список или строка через запятую.")
    sitemap: Optional[str] = Field(None, description="URL sitemap.xml или 'auto' для автопоиска.")
    sitemap_filter: List[str] = Field(default_factory=list, description="Regex-шаблоны для исключения URL.")
    sitemap_limit: int = Field(50, ge=0, description="Максимум URL из sitemap.")
    url_mapping: Optional[str] = Field(None, description="Явные пары 'ref:test,ref2:test2'.")
    timeout: float = Field(15.0, gt=0, description="Таймаут на один запрос (секунд).")
    max_redirects: int = Field(5, ge=0, description="Максимум редиректов на один запрос.")
    max_depth: int = Field(5, ge=0, description="Максимальная глубина вложенных sitemap index.")
    max_bytes: int = Field(50 * 1024 * 1024, gt=0, description="Максимальный размер тела ответа (байт).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")

    @field_validator("reference", mode="before")
    def _reference_scheme(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return ensure_scheme(v) if v else None
        return v

    @field_validator("test", mode="before")
    def _split_test_urls(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_url_list(v)
        if isinstance(v, (list, tuple)):
            return [ensure_scheme(str(u).strip()) for u in v if str(u).strip()]
        return v

    @field_validator("sitemap_filter", mode="before")
    def _split_patterns(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [p.strip() for p in v.split(",") if p.strip()]
        return v

    @field_validator("sitemap", "url_mapping", mode="before")
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @property
    def auto_discover(self) -> bool:
        return (self.sitemap or "").lower() == AUTO_SITEMAP

    def override(self, **changes: Any) -> ScoutConfig:
        """Возвращает новую проверенную конфигурацию; значения None игнорируются."""
        data = self.model_dump()
        data.update({k: v for k, v in changes.items() if v is not None})
        return ScoutConfig(**data)


_DEFAULT_CFG = Path("configs/vr_scout.yaml")


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


def load_config(path: Union[str, Path, None]) -> ScoutConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ScoutConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
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

    try:
        return ScoutConfig(**data)
    except ValidationError:
        raise


__all__ = ["ScoutConfig", "load_config", "DEFAULT_USER_AGENT", "AUTO_SITEMAP"]
