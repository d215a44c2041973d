"""
Renderer 추상 인터페이스.

두 가지 구현만 존재 (플러그인 없음):
- ExcelTemplateRenderer (spreadsheet)
- DelimitedTextRenderer (delimited-text)
"""

from typing import Protocol

from src.domain.schemas import EvaluatedReportData


class ReportRenderer(Protocol):
    """평가 결과 → bytes."""

    def render(self, data: EvaluatedReportData) -> bytes:
        """
        Raises:
            RenderFailedError: 출력 생성 실패 (부분 출력 없음)
        """
        ...
