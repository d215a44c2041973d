"""
Error definitions for the export pipeline.

규칙:
- 조용한 실패 금지 → ExportError 하위 클래스로 명시적 실패
- 모든 에러는 해당 export 호출에 대해 terminal (로컬 복구/재시도 없음)
- 실패 시 artifact는 절대 반환하지 않음 (부분 출력 금지)
"""

from typing import Any


class ExportError(Exception):
    """
    Export 파이프라인 에러의 공통 베이스.

    code: 에러 코드 (ErrorCodes)
    category: 호출자가 에러를 어떻게 노출할지 구분
        - request: 요청 거절 (잘못된 format 등)
        - configuration: 리포트 정의 설정 오류
        - io: 리소스 로드 실패
        - render: 렌더링 실패
        - data: 평가 결과 데이터 불완전

    Usage:
        raise RenderFailedError(report="ANC Monthly", format="spreadsheet", error=str(e))
    """

    category = "export"

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "category": self.category,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    INVALID_TEMPLATE_CONFIGURATION = "INVALID_TEMPLATE_CONFIGURATION"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RENDER_FAILED = "RENDER_FAILED"
    MISSING_TIME_PARAMETER = "MISSING_TIME_PARAMETER"


# =============================================================================
# Taxonomy
# =============================================================================

class UnsupportedFormatError(ExportError):
    """요청된 format 토큰이 인식 가능한 집합에 없음."""

    category = "request"

    def __init__(self, **context: Any) -> None:
        super().__init__(ErrorCodes.UNSUPPORTED_FORMAT, **context)


class InvalidTemplateConfigurationError(ExportError):
    """spreadsheet export인데 템플릿이 없거나 확장자가 틀림 (리포트 정의 책임)."""

    category = "configuration"

    def __init__(self, **context: Any) -> None:
        super().__init__(ErrorCodes.INVALID_TEMPLATE_CONFIGURATION, **context)


class ResourceNotFoundError(ExportError):
    """템플릿 바이트를 로드할 수 없음."""

    category = "io"

    def __init__(self, **context: Any) -> None:
        super().__init__(ErrorCodes.RESOURCE_NOT_FOUND, **context)


class RenderFailedError(ExportError):
    """
    유효한 입력으로도 렌더러가 출력을 만들지 못함.

    동일 입력으로 재시도해도 성공할 수 없으므로
    report/format 컨텍스트를 반드시 포함.
    """

    category = "render"

    def __init__(self, **context: Any) -> None:
        super().__init__(ErrorCodes.RENDER_FAILED, **context)


class MissingTimeParameterError(ExportError):
    """파일명 도출에 필요한 기간 파라미터가 evaluation context에 없음."""

    category = "data"

    def __init__(self, **context: Any) -> None:
        super().__init__(ErrorCodes.MISSING_TIME_PARAMETER, **context)
