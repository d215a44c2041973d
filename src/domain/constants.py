"""
Domain Constants: export 포맷, content type, 파일명 정책 상수.

포맷 집합은 닫혀 있음 (spreadsheet | delimited-text).
content type / 확장자 테이블은 포맷 토큰으로만 결정 (content negotiation 없음).
"""

from enum import Enum

from src.domain.errors import UnsupportedFormatError

# =============================================================================
# Export Formats
# =============================================================================


class ExportFormat(str, Enum):
    """지원 export 포맷."""
    SPREADSHEET = "spreadsheet"
    DELIMITED_TEXT = "delimited-text"

    @classmethod
    def parse(cls, token: "str | ExportFormat | None") -> "ExportFormat":
        """
        요청 토큰 → ExportFormat.

        표준 토큰(spreadsheet, delimited-text)과 다운로드 URL에서 쓰던
        별칭(excel, csv)을 모두 받음. 대소문자/앞뒤 공백 무시.

        Raises:
            UnsupportedFormatError: 인식 불가 토큰
        """
        if isinstance(token, ExportFormat):
            return token
        if not isinstance(token, str):
            raise UnsupportedFormatError(format=token)

        normalized = token.strip().lower()
        try:
            return cls(FORMAT_ALIASES.get(normalized, normalized))
        except ValueError:
            raise UnsupportedFormatError(
                format=token,
                supported=sorted(RECOGNIZED_FORMAT_TOKENS),
            ) from None


# 소스 어휘 별칭
FORMAT_ALIASES = {
    "excel": ExportFormat.SPREADSHEET.value,
    "csv": ExportFormat.DELIMITED_TEXT.value,
}

RECOGNIZED_FORMAT_TOKENS = frozenset(
    [f.value for f in ExportFormat] + list(FORMAT_ALIASES)
)

# =============================================================================
# Content Types / Extensions (닫힌 테이블)
# =============================================================================

CONTENT_TYPES = {
    ExportFormat.SPREADSHEET: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.DELIMITED_TEXT: "text/csv",
}

FILE_EXTENSIONS = {
    ExportFormat.SPREADSHEET: "xlsx",
    ExportFormat.DELIMITED_TEXT: "csv",
}

# =============================================================================
# Template / Filename Policy Defaults
# =============================================================================

# spreadsheet 템플릿 필수 확장자
SPREADSHEET_TEMPLATE_EXTENSION = ".xlsx"

# 템플릿 리소스 경로 prefix (provider 내부)
TEMPLATE_RESOURCE_PREFIX = "reports/"

# 에페메럴 configuration 에서 쓰는 기본 템플릿 이름
DEFAULT_TEMPLATE_NAME = "template.xlsx"

# 파일명 기간 파라미터
DEFAULT_TIME_PARAMETER = "startDate"
FILENAME_DATE_FORMAT = "%Y-%m"
