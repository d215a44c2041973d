"""
Application Services.

역할:
- export: 평가된 리포트 → 다운로드 artifact (XLSX/CSV)
"""

from .export import ExportService, export_report

__all__ = [
    "ExportService",
    "export_report",
]
