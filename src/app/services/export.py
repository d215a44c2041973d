"""
Export Service: 평가된 리포트 → 다운로드 artifact.

흐름:
1. format 토큰 파싱 (spreadsheet | delimited-text, 별칭 excel | csv)
2. format ↔ 템플릿 호환성 검증 (spreadsheet 는 .xlsx 템플릿 필수)
3. 파일명 도출 (기간 파라미터 없으면 렌더 전에 실패)
4. 템플릿 로드 + 에페메럴 RenderConfiguration (spreadsheet 만)
5. 렌더러 실행 → ExportedArtifact(filename, content_type, content)

상태 없음: 호출 간 공유 가변 상태/캐시/락 없음. 재시도 없음.
접근 권한 검사는 호출자 책임.
"""

import logging
from collections.abc import Callable

from src.core.config import ExportSettings
from src.core.filenames import download_filename
from src.core.resources import TemplateResolver, load_template_resource
from src.domain.constants import CONTENT_TYPES, FILE_EXTENSIONS, ExportFormat
from src.domain.errors import (
    ExportError,
    InvalidTemplateConfigurationError,
    ResourceNotFoundError,
)
from src.domain.schemas import (
    EvaluatedReportData,
    ExportedArtifact,
    ReportDescriptor,
    ReportIdentity,
)
from src.render.configuration import build_render_configuration
from src.render.delimited import DelimitedTextRenderer
from src.render.excel import ExcelTemplateRenderer

logger = logging.getLogger(__name__)

FormatHandler = Callable[
    [ReportIdentity, ReportDescriptor, EvaluatedReportData, TemplateResolver | None],
    bytes,
]


class ExportService:
    """
    Export 오케스트레이터.

    Usage:
        service = ExportService(load_export_settings())
        artifact = service.export(identity, descriptor, data, "excel", resolver)
    """

    def __init__(self, settings: ExportSettings | None = None):
        self.settings = settings or ExportSettings()
        self._handlers: dict[ExportFormat, FormatHandler] = {
            ExportFormat.SPREADSHEET: self._render_spreadsheet,
            ExportFormat.DELIMITED_TEXT: self._render_delimited_text,
        }

    @property
    def supported_formats(self) -> frozenset[ExportFormat]:
        return frozenset(self._handlers)

    def export(
        self,
        report_identity: ReportIdentity,
        report_definition: ReportDescriptor,
        evaluated_data: EvaluatedReportData,
        requested_format: str | ExportFormat,
        template_lookup: TemplateResolver | None = None,
    ) -> ExportedArtifact:
        """
        리포트 export.

        Args:
            report_identity: 리포트 식별 정보 (파일명/에러 컨텍스트)
            report_definition: 리포트 정의 (템플릿 참조)
            evaluated_data: 평가 결과 (읽기 전용)
            requested_format: format 토큰
            template_lookup: 템플릿 resolver (spreadsheet 만 사용)

        Returns:
            ExportedArtifact

        Raises:
            UnsupportedFormatError: 인식 불가 format
            InvalidTemplateConfigurationError: 템플릿 없음/확장자 불일치
            ResourceNotFoundError: 템플릿 로드 실패
            MissingTimeParameterError: 기간 파라미터 없음
            RenderFailedError: 렌더링 실패
        """
        try:
            export_format = ExportFormat.parse(requested_format)
            logger.info(
                f"Exporting report {report_identity.name!r} as {export_format.value}"
            )

            self._validate_template(report_identity, report_definition, export_format)

            filename = download_filename(
                report_identity.name,
                evaluated_data.context,
                FILE_EXTENSIONS[export_format],
                parameter=self.settings.time_parameter,
                date_format=self.settings.filename_date_format,
            )

            handler = self._handlers[export_format]
            content = handler(
                report_identity, report_definition, evaluated_data, template_lookup
            )

        except ExportError as e:
            logger.warning(
                f"Export rejected for {report_identity.name!r} "
                f"(format={requested_format!r}): {e}"
            )
            raise

        artifact = ExportedArtifact(
            filename=filename,
            content_type=CONTENT_TYPES[export_format],
            content=content,
        )
        logger.info(f"Exported {artifact.filename!r} ({artifact.size} bytes)")
        return artifact

    def _validate_template(
        self,
        report_identity: ReportIdentity,
        report_definition: ReportDescriptor,
        export_format: ExportFormat,
    ) -> None:
        """spreadsheet: 템플릿 필수 + 확장자 확인. delimited-text: 검증 없음."""
        if export_format is not ExportFormat.SPREADSHEET:
            return

        extension = self.settings.spreadsheet_template_extension
        template = report_definition.template
        if template is None:
            raise InvalidTemplateConfigurationError(
                report=report_identity.name,
                error="report doesn't specify a spreadsheet template",
            )
        if not template.has_extension(extension):
            raise InvalidTemplateConfigurationError(
                report=report_identity.name,
                template=template.path,
                expected_extension=extension,
            )

    def _render_spreadsheet(
        self,
        report_identity: ReportIdentity,
        report_definition: ReportDescriptor,
        evaluated_data: EvaluatedReportData,
        template_lookup: TemplateResolver | None,
    ) -> bytes:
        # _validate_template 통과 후이므로 template 은 None 아님
        template = report_definition.template

        if template_lookup is None:
            raise ResourceNotFoundError(
                provider=template.provider,
                path=template.path,
                error="no template resolver supplied",
            )

        template_bytes = load_template_resource(
            template_lookup, template, prefix=self.settings.template_prefix
        )
        config = build_render_configuration(
            report_identity, report_definition, template_bytes
        )
        return ExcelTemplateRenderer(config).render(evaluated_data)

    def _render_delimited_text(
        self,
        report_identity: ReportIdentity,
        report_definition: ReportDescriptor,
        evaluated_data: EvaluatedReportData,
        template_lookup: TemplateResolver | None,
    ) -> bytes:
        renderer = DelimitedTextRenderer(report_identity.name, self.settings.csv)
        return renderer.render(evaluated_data)


def export_report(
    report_definition: ReportDescriptor,
    evaluated_data: EvaluatedReportData,
    requested_format: str | ExportFormat,
    template_lookup: TemplateResolver | None = None,
    settings: ExportSettings | None = None,
) -> ExportedArtifact:
    """
    리포트 export (간편 함수).

    report_identity 는 report_definition 에서 도출.
    """
    return ExportService(settings).export(
        report_definition.identity,
        report_definition,
        evaluated_data,
        requested_format,
        template_lookup,
    )
