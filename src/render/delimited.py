"""Delimited-text (CSV) 렌더러."""

import csv
import io
import logging
from datetime import date, datetime
from typing import Any

from src.core.config import CsvSettings
from src.domain.constants import ExportFormat
from src.domain.errors import RenderFailedError
from src.domain.schemas import DataSet, EvaluatedReportData

logger = logging.getLogger(__name__)


class DelimitedTextRenderer:
    """
    평가 결과 → 평면 구분자 테이블.

    - 데이터셋마다 헤더(컬럼 라벨) + 행 (평가 결과의 순서 그대로)
    - 데이터셋이 여러 개면 각 섹션 앞에 데이터셋 이름 행, 섹션 사이 빈 줄
    """

    def __init__(self, report_name: str, settings: CsvSettings | None = None):
        self.report_name = report_name
        self.settings = settings or CsvSettings()

    def render(self, data: EvaluatedReportData) -> bytes:
        """
        Raises:
            RenderFailedError: 직렬화/인코딩 실패
        """
        try:
            output = io.StringIO(newline="")
            writer = csv.writer(
                output,
                delimiter=self.settings.delimiter,
                lineterminator=self.settings.line_terminator,
                quoting=csv.QUOTE_MINIMAL,
            )

            multiple = len(data.data_sets) > 1
            for index, data_set in enumerate(data.data_sets.values()):
                if multiple:
                    if index > 0:
                        writer.writerow([])
                    writer.writerow([data_set.name])
                self._write_data_set(writer, data_set)

            return output.getvalue().encode(self.settings.encoding)

        except (csv.Error, UnicodeError, TypeError, ValueError) as e:
            logger.error(
                f"CSV render failed for {self.report_name!r}: {e}", exc_info=True
            )
            raise RenderFailedError(
                report=self.report_name,
                format=ExportFormat.DELIMITED_TEXT.value,
                error=str(e),
            ) from e

    def _write_data_set(self, writer: Any, data_set: DataSet) -> None:
        writer.writerow([column.display_label for column in data_set.columns])
        for row in data_set.rows:
            writer.writerow(
                [self._format_value(row.get(column.name)) for column in data_set.columns]
            )

    def _format_value(self, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return value


def render_csv(
    report_name: str,
    data: EvaluatedReportData,
    settings: CsvSettings | None = None,
) -> bytes:
    """CSV 바이트 생성 (간편 함수)."""
    return DelimitedTextRenderer(report_name, settings).render(data)
