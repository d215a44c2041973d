"""
에페메럴 RenderConfiguration 빌더.

리소스 번들에서 요청 시점에 로드한 템플릿을 저장 단계 없이
바로 렌더할 수 있도록 메모리에서만 설정 값을 조립.
"""

from src.domain.constants import DEFAULT_TEMPLATE_NAME, ExportFormat
from src.domain.schemas import RenderConfiguration, ReportDescriptor, ReportIdentity


def build_render_configuration(
    report_identity: ReportIdentity,
    report_definition: ReportDescriptor,
    template_bytes: bytes | None = None,
) -> RenderConfiguration:
    """
    RenderConfiguration 생성 (순수 함수, 저장소 접근 없음).

    Args:
        report_identity: 리포트 식별 정보
        report_definition: 리포트 정의 (템플릿 이름 추출용)
        template_bytes: 템플릿 바이트 (spreadsheet 만)

    Returns:
        요청 전용 RenderConfiguration
    """
    if template_bytes is None:
        return RenderConfiguration(
            report=report_identity,
            export_format=ExportFormat.DELIMITED_TEXT,
            design_name=f"{report_identity.name} design",
        )

    template = report_definition.template
    template_name = template.filename if template is not None else DEFAULT_TEMPLATE_NAME

    return RenderConfiguration(
        report=report_identity,
        export_format=ExportFormat.SPREADSHEET,
        design_name=f"{report_identity.name} design",
        template_bytes=bytes(template_bytes),
        template_name=template_name,
    )
