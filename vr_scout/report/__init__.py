# File: vr_scout/report/__init__.py
"""vr_scout.report: Выгрузка пар URL для visual-diff движка (используется CLI и тестами)."""

from vr_scout.report.json_report import pairs_to_data, render_json

__all__ = ["pairs_to_data", "render_json"]
