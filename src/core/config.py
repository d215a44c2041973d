"""
Export 설정 로드 (default.yaml).

default.yaml:
    export:
      time_parameter: startDate
      filename_date_format: "%Y-%m"
      template_prefix: reports/
      spreadsheet_template_extension: .xlsx
      csv:
        delimiter: ","
        line_terminator: "\\r\\n"
        encoding: utf-8
      template_roots:
        kenyaemr: resources
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.domain.constants import (
    DEFAULT_TIME_PARAMETER,
    FILENAME_DATE_FORMAT,
    SPREADSHEET_TEMPLATE_EXTENSION,
    TEMPLATE_RESOURCE_PREFIX,
)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "default.yaml"


@dataclass(frozen=True)
class CsvSettings:
    """delimited-text 렌더러 설정."""
    delimiter: str = ","
    line_terminator: str = "\r\n"
    encoding: str = "utf-8"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CsvSettings":
        return cls(
            delimiter=data.get("delimiter", ","),
            line_terminator=data.get("line_terminator", "\r\n"),
            encoding=data.get("encoding", "utf-8"),
        )


@dataclass(frozen=True)
class ExportSettings:
    """Export 파이프라인 설정 (불변, 요청 간 공유 가능)."""
    time_parameter: str = DEFAULT_TIME_PARAMETER
    filename_date_format: str = FILENAME_DATE_FORMAT
    template_prefix: str = TEMPLATE_RESOURCE_PREFIX
    spreadsheet_template_extension: str = SPREADSHEET_TEMPLATE_EXTENSION
    csv: CsvSettings = field(default_factory=CsvSettings)
    template_roots: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExportSettings":
        return cls(
            time_parameter=data.get("time_parameter", DEFAULT_TIME_PARAMETER),
            filename_date_format=data.get("filename_date_format", FILENAME_DATE_FORMAT),
            template_prefix=data.get("template_prefix", TEMPLATE_RESOURCE_PREFIX),
            spreadsheet_template_extension=data.get(
                "spreadsheet_template_extension", SPREADSHEET_TEMPLATE_EXTENSION
            ),
            csv=CsvSettings.from_dict(data.get("csv") or {}),
            template_roots=dict(data.get("template_roots") or {}),
        )

    def resolve_template_roots(self, base_dir: Path) -> dict[str, Path]:
        """상대 경로 template_roots → base_dir 기준 절대 경로."""
        return {
            provider: (base_dir / root if not Path(root).is_absolute() else Path(root))
            for provider, root in self.template_roots.items()
        }


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """설정 파일 로드. 파일이 없으면 빈 dict."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}
        return data


def load_export_settings(config_path: Path | None = None) -> ExportSettings:
    """default.yaml 의 export 섹션 → ExportSettings."""
    config = load_config(config_path)
    return ExportSettings.from_dict(config.get("export") or {})
