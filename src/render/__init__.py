"""
Render layer: XLSX/CSV 출력 생성.

역할:
- 에페메럴 RenderConfiguration + 평가 결과 → bytes
- openpyxl (Excel 템플릿), csv (구분자 텍스트)
"""

from .base import ReportRenderer
from .configuration import build_render_configuration
from .delimited import DelimitedTextRenderer, render_csv
from .excel import ExcelTemplateRenderer, render_xlsx

__all__ = [
    "ReportRenderer",
    "build_render_configuration",
    "render_csv",
    "render_xlsx",
    "DelimitedTextRenderer",
    "ExcelTemplateRenderer",
]
