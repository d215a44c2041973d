"""
Excel (XLSX) 템플릿 렌더러: openpyxl 기반.

- 템플릿 바이트를 메모리에서 로드 후 값 채우기 (파일/DB 저장 없음)
- 셀 placeholder: "#key#"
    - #startDate#          : evaluation 파라미터
    - #report.name#        : 리포트 이름
    - #<dataset>.<column>#: 데이터셋 첫 행 값
    - #<column>#           : 데이터셋이 하나일 때만
- Named Range: 이름이 key 와 같으면 첫 셀에 값 설정
- 알 수 없는 key 는 그대로 둠
- 출력 결정성: 문서 속성/zip 엔트리 타임스탬프 고정
"""

import io
import logging
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from zipfile import ZIP_DEFLATED, ZipFile, ZipInfo

from openpyxl import load_workbook
from openpyxl.workbook import Workbook
from openpyxl.writer.excel import ExcelWriter

from src.domain.constants import ExportFormat
from src.domain.errors import InvalidTemplateConfigurationError, RenderFailedError
from src.domain.schemas import EvaluatedReportData, RenderConfiguration

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"#([^#\r\n]+?)#")

# 고정 타임스탬프 (zip 엔트리 / docProps)
FIXED_DOCUMENT_TIMESTAMP = datetime(2000, 1, 1)
FIXED_ZIP_DATE_TIME = (2000, 1, 1, 0, 0, 0)
ZIP_ENTRY_PERMISSIONS = 0o600 << 16


class ExcelTemplateRenderer:
    """
    Excel 템플릿 렌더러.

    저장소에서 디자인을 조회하지 않고, 주입된 RenderConfiguration
    값만으로 동작.

    Usage:
        config = build_render_configuration(identity, descriptor, template_bytes)
        content = ExcelTemplateRenderer(config).render(data)
    """

    def __init__(self, config: RenderConfiguration):
        """
        Args:
            config: template_bytes 를 가진 RenderConfiguration

        Raises:
            InvalidTemplateConfigurationError: 템플릿 바이트 없음
        """
        if not config.template_bytes:
            raise InvalidTemplateConfigurationError(
                report=config.report.name,
                error="render configuration carries no template bytes",
            )
        self.config = config

    def render(self, data: EvaluatedReportData) -> bytes:
        """
        템플릿에 평가 결과를 채워 XLSX 바이트 생성.

        Args:
            data: 평가 결과

        Returns:
            XLSX 바이트

        Raises:
            RenderFailedError: 템플릿 손상 등으로 출력 불가
        """
        try:
            wb = load_workbook(io.BytesIO(self.config.template_bytes))

            values = self._build_values(data)
            self._fill_placeholders(wb, values)
            self._fill_named_ranges(wb, values)

            return self._save(wb)

        except RenderFailedError:
            raise
        except Exception as e:
            logger.error(
                f"Excel render failed for {self.config.report.name!r}: {e}",
                exc_info=True,
            )
            raise RenderFailedError(
                report=self.config.report.name,
                format=ExportFormat.SPREADSHEET.value,
                template=self.config.template_name,
                error=str(e),
            ) from e

    def _build_values(self, data: EvaluatedReportData) -> dict[str, Any]:
        """placeholder key → 값."""
        values: dict[str, Any] = dict(data.context.parameter_values)

        single_data_set = len(data.data_sets) == 1
        for ds_name, data_set in data.data_sets.items():
            first_row = data_set.rows[0] if data_set.rows else {}
            for column in data_set.columns:
                value = first_row.get(column.name)
                values[f"{ds_name}.{column.name}"] = value
                if single_data_set:
                    values.setdefault(column.name, value)

        # 리포트 이름은 파라미터/데이터셋 key 보다 우선
        values["report.name"] = self.config.report.name
        return values

    def _fill_placeholders(self, wb: Workbook, values: dict[str, Any]) -> None:
        """모든 시트의 문자열 셀에서 #key# 치환."""
        for ws in wb.worksheets:
            for row in ws.iter_rows():
                for cell in row:
                    if not isinstance(cell.value, str) or "#" not in cell.value:
                        continue

                    text = cell.value
                    whole = PLACEHOLDER_PATTERN.fullmatch(text)
                    if whole and whole.group(1) in values:
                        # 단일 placeholder 셀 → 타입 유지
                        cell.value = self._convert_value(values[whole.group(1)])
                        continue

                    cell.value = PLACEHOLDER_PATTERN.sub(
                        lambda m: (
                            self._format_value(values[m.group(1)])
                            if m.group(1) in values
                            else m.group(0)
                        ),
                        text,
                    )

    def _fill_named_ranges(self, wb: Workbook, values: dict[str, Any]) -> None:
        """key 와 같은 이름의 Named Range 첫 셀에 값 설정 (워크북/시트 범위)."""
        for range_name, defined_name in wb.defined_names.items():
            if range_name in values:
                self._set_defined_name(wb, defined_name, values[range_name])

        for ws in wb.worksheets:
            for range_name, defined_name in ws.defined_names.items():
                if range_name in values:
                    self._set_defined_name(
                        wb, defined_name, values[range_name], default_sheet=ws.title
                    )

    def _set_defined_name(
        self,
        wb: Workbook,
        defined_name: Any,
        value: Any,
        default_sheet: str | None = None,
    ) -> None:
        """Named Range destinations 의 첫 셀에 값 설정."""
        for sheet_name, cell_ref in defined_name.destinations:
            sheet_name = sheet_name or default_sheet
            if sheet_name not in wb.sheetnames:
                continue
            # cell_ref가 범위일 수 있음 (예: $A$1:$A$3) → 첫 번째 셀만
            cell_addr = cell_ref.replace("$", "").split(":")[0]
            wb[sheet_name][cell_addr] = self._convert_value(value)

    def _save(self, wb: Workbook) -> bytes:
        """
        워크북 → 결정적 XLSX 바이트.

        openpyxl 은 저장 시각을 docProps 와 zip 엔트리에 기록하므로
        둘 다 고정값으로 덮어씀.
        """
        wb.properties.created = FIXED_DOCUMENT_TIMESTAMP
        wb.properties.modified = FIXED_DOCUMENT_TIMESTAMP

        raw = io.BytesIO()
        with ZipFile(raw, "w", ZIP_DEFLATED, allowZip64=True) as archive:
            ExcelWriter(wb, archive).save()

        normalized = io.BytesIO()
        with ZipFile(io.BytesIO(raw.getvalue())) as src, ZipFile(
            normalized, "w", ZIP_DEFLATED
        ) as dst:
            for info in src.infolist():
                entry = ZipInfo(info.filename, date_time=FIXED_ZIP_DATE_TIME)
                entry.compress_type = ZIP_DEFLATED
                entry.external_attr = ZIP_ENTRY_PERMISSIONS
                dst.writestr(entry, src.read(info.filename))

        return normalized.getvalue()

    def _convert_value(self, value: Any) -> Any:
        """값 변환 (Decimal → float 등)."""
        if isinstance(value, Decimal):
            # Excel은 Decimal을 직접 지원하지 않음
            return float(value)
        return value

    def _format_value(self, value: Any) -> str:
        """문자열 치환용 포맷."""
        if value is None:
            return ""
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return str(value)


def render_xlsx(config: RenderConfiguration, data: EvaluatedReportData) -> bytes:
    """
    Excel 문서 생성 (간편 함수).

    Args:
        config: 에페메럴 RenderConfiguration
        data: 평가 결과

    Returns:
        XLSX 바이트
    """
    return ExcelTemplateRenderer(config).render(data)
