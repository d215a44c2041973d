"""
Filename Policy: 다운로드 파일명 결정.

형식: "{report_name} {YYYY-MM}.{extension}"
- 기간 파라미터(기본 startDate)를 evaluation context 에서 읽음
- 없으면 MissingTimeParameterError (현재 날짜로 대체하지 않음)
"""

from datetime import date, datetime
from typing import Any

from src.domain.constants import DEFAULT_TIME_PARAMETER, FILENAME_DATE_FORMAT
from src.domain.errors import MissingTimeParameterError
from src.domain.schemas import EvaluationContext


def download_filename(
    report_name: str,
    evaluation_context: EvaluationContext,
    extension: str,
    parameter: str = DEFAULT_TIME_PARAMETER,
    date_format: str = FILENAME_DATE_FORMAT,
) -> str:
    """
    다운로드 파일명 생성.

    Args:
        report_name: 리포트 이름
        evaluation_context: 평가 컨텍스트
        extension: 확장자 ("csv" 또는 ".csv")
        parameter: 기간 파라미터 이름
        date_format: 기간 포맷 (기본 YYYY-MM)

    Returns:
        예: "ANC Monthly 2024-03.csv"

    Raises:
        MissingTimeParameterError: 파라미터 없음 또는 날짜가 아님
    """
    period = _coerce_date(
        evaluation_context.get_parameter_value(parameter),
        report_name=report_name,
        parameter=parameter,
    )
    return f"{report_name} {period.strftime(date_format)}.{extension.lstrip('.')}"


def _coerce_date(value: Any, report_name: str, parameter: str) -> date:
    """파라미터 값 → date (date/datetime/ISO 문자열/"YYYY-MM")."""
    if value is None:
        raise MissingTimeParameterError(report=report_name, parameter=parameter)

    # datetime 은 date 의 하위 클래스
    if isinstance(value, date):
        return value

    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            pass
        # 월 단위 파라미터 (예: "2024-03")
        try:
            return datetime.strptime(value.strip(), "%Y-%m")
        except ValueError:
            pass

    raise MissingTimeParameterError(
        report=report_name,
        parameter=parameter,
        value=value,
        error="parameter value is not a date",
    )
