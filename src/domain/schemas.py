"""
Data schemas for the export pipeline.

규칙:
- 평가 결과(EvaluatedReportData)는 읽기 전용 입력 (평가 서브시스템 소유)
- RenderConfiguration 은 요청마다 새로 생성, 저장/공유 금지
- ExportedArtifact 는 불변 값
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import quote

from src.domain.constants import ExportFormat

# =============================================================================
# Report Descriptor
# =============================================================================


@dataclass(frozen=True)
class ReportIdentity:
    """리포트 식별 정보 (표시/파일명용)."""
    name: str


@dataclass(frozen=True)
class TemplateResource:
    """
    템플릿 리소스 참조.

    provider: 리소스 제공자 (모듈/번들 ID)
    path: provider 내부 경로 (예: "anc_monthly.xlsx")
    """
    provider: str
    path: str

    @property
    def filename(self) -> str:
        return PurePosixPath(self.path).name

    def has_extension(self, extension: str) -> bool:
        """확장자 확인 (대소문자 무시)."""
        return self.path.lower().endswith(extension.lower())


@dataclass(frozen=True)
class ReportDescriptor:
    """export 계층이 보는 리포트 정의."""
    name: str
    template: TemplateResource | None = None
    description: str = ""

    @property
    def identity(self) -> ReportIdentity:
        return ReportIdentity(name=self.name)


# =============================================================================
# Evaluated Data
# =============================================================================


@dataclass(frozen=True)
class DataSetColumn:
    """데이터셋 컬럼."""
    name: str
    label: str | None = None

    @property
    def display_label(self) -> str:
        return self.label or self.name


@dataclass
class DataSet:
    """
    평가된 데이터셋.

    rows: 컬럼 이름 → 값 매핑의 리스트.
    컬럼/행 순서가 곧 출력 순서.
    """
    name: str
    columns: list[DataSetColumn] = field(default_factory=list)
    rows: list[Mapping[str, Any]] = field(default_factory=list)

    def __iter__(self) -> Iterator[Mapping[str, Any]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "DataSet":
        """
        dict → DataSet.

        columns 생략 시 첫 행의 키 순서를 사용.
        columns 항목은 "name" 문자열 또는 {"name": ..., "label": ...}.
        """
        rows = [dict(row) for row in data.get("rows", [])]
        raw_columns = data.get("columns")
        if raw_columns is None:
            raw_columns = list(rows[0].keys()) if rows else []

        columns = []
        for col in raw_columns:
            if isinstance(col, str):
                columns.append(DataSetColumn(name=col))
            else:
                columns.append(DataSetColumn(name=col["name"], label=col.get("label")))

        return cls(name=name, columns=columns, rows=rows)


@dataclass
class EvaluationContext:
    """평가에 사용된 파라미터 값 (예: startDate, endDate)."""
    parameter_values: dict[str, Any] = field(default_factory=dict)

    def get_parameter_value(self, name: str) -> Any:
        return self.parameter_values.get(name)

    def has_parameter(self, name: str) -> bool:
        return name in self.parameter_values


@dataclass
class EvaluatedReportData:
    """
    리포트 평가 결과.

    data_sets: 데이터셋 이름 → DataSet (삽입 순서 유지)
    context: 평가 컨텍스트
    """
    data_sets: dict[str, DataSet] = field(default_factory=dict)
    context: EvaluationContext = field(default_factory=EvaluationContext)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EvaluatedReportData":
        data_sets = {
            name: DataSet.from_dict(name, ds)
            for name, ds in (data.get("data_sets") or {}).items()
        }
        context = EvaluationContext(dict(data.get("parameters") or {}))
        return cls(data_sets=data_sets, context=context)


# =============================================================================
# Render Configuration / Artifact
# =============================================================================


@dataclass(frozen=True)
class RenderConfiguration:
    """
    에페메럴 렌더 설정.

    요청마다 메모리에서만 생성되고 렌더 직후 버려짐.
    저장소 조회 없이 렌더러를 만족시키기 위한 값.
    """
    report: ReportIdentity
    export_format: ExportFormat
    design_name: str
    template_bytes: bytes | None = field(default=None, repr=False)
    template_name: str | None = None


@dataclass(frozen=True)
class ExportedArtifact:
    """다운로드 artifact (불변)."""
    filename: str
    content_type: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)

    def content_disposition(self) -> str:
        """
        Content-Disposition 헤더 값.

        filename="..." 에는 ASCII 만, 따옴표/역슬래시/제어 문자는 "_" 로 치환.
        치환이 일어나면 RFC 5987 filename* 로 원래 이름을 함께 제공.
        """
        fallback = "".join(
            "_" if ch in '"\\' or ord(ch) < 0x20 or ord(ch) == 0x7F else ch
            for ch in self.filename.encode("ascii", "replace").decode("ascii")
        )
        if fallback == self.filename:
            return f'attachment; filename="{fallback}"'
        return (
            f'attachment; filename="{fallback}"; '
            f"filename*=UTF-8''{quote(self.filename, safe='')}"
        )
