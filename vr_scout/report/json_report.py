# vr_scout/report/json_report.py

"""
Сохранение списка пар URL в JSON для внешнего visual-diff движка.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from vr_scout.crawler.models import UrlPair


def pairs_to_data(pairs: Sequence[UrlPair]) -> List[Dict[str, Any]]:
    """Список словарей ``{"reference": ..., "test": ...}`` в исходном порядке."""
    return [pair.as_dict() for pair in pairs]


def render_json(pairs: Sequence[UrlPair], output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет пары URL в формате JSON по указанному пути.

    :param pairs: упорядоченный список UrlPair
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from vr_scout.report.json_report import render_json
    path = render_json(pairs, 'reports/pairs.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(pairs_to_data(pairs), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
