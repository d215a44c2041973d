"""
test_config.py - default.yaml 로드 테스트
"""

from pathlib import Path

import yaml

from src.core.config import (
    DEFAULT_CONFIG_PATH,
    CsvSettings,
    ExportSettings,
    load_config,
    load_export_settings,
)


def test_missing_file_gives_defaults(tmp_path: Path):
    settings = load_export_settings(tmp_path / "missing.yaml")

    assert settings == ExportSettings()
    assert settings.time_parameter == "startDate"
    assert settings.spreadsheet_template_extension == ".xlsx"
    assert settings.csv == CsvSettings()


def test_load_overrides(tmp_path: Path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "export": {
                    "time_parameter": "periodStart",
                    "csv": {"delimiter": ";"},
                    "template_roots": {"kenyaemr": "resources"},
                }
            }
        ),
        encoding="utf-8",
    )

    settings = load_export_settings(config_path)

    assert settings.time_parameter == "periodStart"
    assert settings.csv.delimiter == ";"
    assert settings.csv.encoding == "utf-8"
    assert settings.template_roots == {"kenyaemr": "resources"}


def test_empty_file(tmp_path: Path):
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path) == {}


def test_resolve_template_roots(tmp_path: Path):
    settings = ExportSettings(
        template_roots={"rel": "resources", "abs": str(tmp_path / "abs")}
    )

    roots = settings.resolve_template_roots(tmp_path / "base")

    assert roots["rel"] == tmp_path / "base" / "resources"
    assert roots["abs"] == tmp_path / "abs"


def test_project_default_config():
    """프로젝트 루트 default.yaml."""
    settings = load_export_settings(DEFAULT_CONFIG_PATH)

    assert settings.time_parameter == "startDate"
    assert settings.filename_date_format == "%Y-%m"
    assert settings.template_prefix == "reports/"
    assert settings.csv.line_terminator == "\r\n"
