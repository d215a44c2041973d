"""
Pytest fixtures for the export pipeline tests.

구성:
- 평가 결과 (ANC Monthly, 2024-03)
- XLSX 템플릿 바이트 (placeholder + Named Range)
- 인메모리 template resolver
"""

import io
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from openpyxl import Workbook
from openpyxl.workbook.defined_name import DefinedName

from src.core.resources import InMemoryTemplateResolver
from src.domain.schemas import (
    DataSet,
    DataSetColumn,
    EvaluatedReportData,
    EvaluationContext,
    ReportDescriptor,
    ReportIdentity,
    TemplateResource,
)

PROVIDER = "kenyaemr"
TEMPLATE_PATH = "anc_monthly.xlsx"


def build_template_bytes(title: str = "ANC") -> bytes:
    """
    XLSX 템플릿 생성.

    - A1: "#report.name#"
    - B1: "Period: #startDate#"
    - B3: "#indicators.first_visits#"
    - B4: "#indicators.revisits#"
    - B5: "#unknown.key#" (알 수 없는 key)
    - Named Range: total (B6)
    """
    wb = Workbook()
    ws = wb.active
    ws.title = title

    ws["A1"] = "#report.name#"
    ws["B1"] = "Period: #startDate#"
    ws["A3"] = "First visits"
    ws["B3"] = "#indicators.first_visits#"
    ws["A4"] = "Re-visits"
    ws["B4"] = "#indicators.revisits#"
    ws["B5"] = "#unknown.key#"
    ws["A6"] = "Total"

    wb.defined_names.add(DefinedName("total", attr_text=f"{title}!$B$6"))

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


# =============================================================================
# Report Fixtures
# =============================================================================

@pytest.fixture
def report_identity() -> ReportIdentity:
    return ReportIdentity(name="ANC Monthly")


@pytest.fixture
def xlsx_descriptor() -> ReportDescriptor:
    """XLSX 템플릿을 가진 리포트 정의."""
    return ReportDescriptor(
        name="ANC Monthly",
        template=TemplateResource(provider=PROVIDER, path=TEMPLATE_PATH),
    )


@pytest.fixture
def plain_descriptor() -> ReportDescriptor:
    """템플릿 없는 리포트 정의."""
    return ReportDescriptor(name="ANC Monthly")


@pytest.fixture
def evaluated_data() -> EvaluatedReportData:
    """2024-03 평가 결과 (단일 데이터셋)."""
    indicators = DataSet(
        name="indicators",
        columns=[
            DataSetColumn("first_visits", "First visits"),
            DataSetColumn("revisits", "Re-visits"),
            DataSetColumn("total"),
        ],
        rows=[{"first_visits": 12, "revisits": Decimal("7"), "total": 19}],
    )
    return EvaluatedReportData(
        data_sets={"indicators": indicators},
        context=EvaluationContext(
            {"startDate": date(2024, 3, 1), "endDate": date(2024, 3, 31)}
        ),
    )


@pytest.fixture
def multi_data_set_data() -> EvaluatedReportData:
    """데이터셋 두 개짜리 평가 결과."""
    visits = DataSet(
        name="visits",
        columns=[DataSetColumn("clinic"), DataSetColumn("count", "Visits")],
        rows=[{"clinic": "North", "count": 3}, {"clinic": "South", "count": None}],
    )
    tests = DataSet(
        name="tests",
        columns=[DataSetColumn("test"), DataSetColumn("done_on")],
        rows=[{"test": "HIV", "done_on": date(2024, 3, 5)}],
    )
    return EvaluatedReportData(
        data_sets={"visits": visits, "tests": tests},
        context=EvaluationContext({"startDate": date(2024, 3, 1)}),
    )


# =============================================================================
# Template Fixtures
# =============================================================================

@pytest.fixture
def template_bytes() -> bytes:
    return build_template_bytes()


@pytest.fixture
def resolver(template_bytes: bytes) -> InMemoryTemplateResolver:
    """reports/anc_monthly.xlsx 를 가진 resolver."""
    return InMemoryTemplateResolver({(PROVIDER, f"reports/{TEMPLATE_PATH}"): template_bytes})


@pytest.fixture
def resources_root(tmp_path: Path, template_bytes: bytes) -> Path:
    """파일 시스템 리소스 루트 (<root>/reports/anc_monthly.xlsx)."""
    root = tmp_path / "resources"
    (root / "reports").mkdir(parents=True)
    (root / "reports" / TEMPLATE_PATH).write_bytes(template_bytes)
    return root


@pytest.fixture
def template_factory():
    """시트 이름별 XLSX 템플릿 바이트 생성기."""
    return build_template_bytes
