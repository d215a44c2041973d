#!/usr/bin/env python3
"""
export_report.py - 평가된 리포트 문서를 XLSX/CSV 파일로 export

입력 문서 (YAML 또는 JSON):
    report:
      name: ANC Monthly
      template:            # spreadsheet 만 필요
        provider: kenyaemr
        path: anc_monthly.xlsx
    parameters:
      startDate: 2024-03-01
    data_sets:
      indicators:
        columns: [indicator, value]
        rows:
          - {indicator: HV02-01, value: 12}

사용법:
    # CSV
    uv run python scripts/export_report.py evaluated.yaml --format csv

    # Excel 템플릿 (default.yaml 의 template_roots 사용)
    uv run python scripts/export_report.py evaluated.yaml --format excel --output-dir out
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

# 프로젝트 루트를 import 경로에 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.app.services.export import ExportService  # noqa: E402
from src.core.config import load_export_settings  # noqa: E402
from src.core.resources import FileSystemTemplateResolver  # noqa: E402
from src.domain.errors import ExportError  # noqa: E402
from src.domain.schemas import (  # noqa: E402
    EvaluatedReportData,
    ExportedArtifact,
    ReportDescriptor,
    TemplateResource,
)

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def load_document(path: Path) -> dict[str, Any]:
    """YAML/JSON 입력 문서 로드 (JSON 은 YAML 의 부분집합)."""
    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}
        return data


def parse_report(document: dict[str, Any]) -> ReportDescriptor:
    """입력 문서의 report 섹션 → ReportDescriptor."""
    report = document.get("report") or {}
    template = report.get("template")
    return ReportDescriptor(
        name=report["name"],
        template=(
            TemplateResource(provider=template["provider"], path=template["path"])
            if template
            else None
        ),
        description=report.get("description", ""),
    )


def safe_output_path(output_dir: Path, filename: str) -> Path:
    """
    파일명 → output_dir 내부 경로.

    리포트 이름의 경로 구분자(/, \\)는 "_" 로 치환.
    결과 경로가 output_dir 밖이면 ValueError.
    """
    safe_name = filename.replace("/", "_").replace("\\", "_")
    output_path = output_dir / safe_name
    if output_path.resolve().parent != output_dir.resolve():
        raise ValueError(f"output path escapes output directory: {filename!r}")
    return output_path


def write_artifact(artifact: ExportedArtifact, output_dir: Path) -> Path:
    """artifact 를 output_dir 에 저장."""
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = safe_output_path(output_dir, artifact.filename)
    output_path.write_bytes(artifact.content)
    return output_path


def run_export(
    input_path: Path,
    export_format: str,
    output_dir: Path,
    config_path: Path | None = None,
) -> Path:
    """
    입력 문서를 export 해서 파일로 저장.

    Raises:
        ExportError: export 실패
    """
    settings = load_export_settings(config_path)
    base_dir = config_path.parent if config_path else PROJECT_ROOT
    resolver = FileSystemTemplateResolver(settings.resolve_template_roots(base_dir))

    document = load_document(input_path)
    descriptor = parse_report(document)
    data = EvaluatedReportData.from_dict(document)

    artifact = ExportService(settings).export(
        descriptor.identity,
        descriptor,
        data,
        export_format,
        resolver,
    )
    return write_artifact(artifact, output_dir)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="평가된 리포트를 XLSX/CSV 로 export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "input",
        type=Path,
        help="평가 결과 문서 (YAML/JSON)",
    )
    parser.add_argument(
        "--format",
        dest="export_format",
        default="csv",
        help="export 포맷: excel | csv | spreadsheet | delimited-text (기본: csv)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="출력 디렉터리 (기본: 현재 디렉터리)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="설정 파일 경로 (기본: default.yaml)",
    )

    args = parser.parse_args(argv)

    if not args.input.exists():
        logger.error(f"입력 문서 없음: {args.input}")
        return 1

    try:
        output_path = run_export(
            args.input,
            args.export_format,
            args.output_dir,
            config_path=args.config,
        )
    except ExportError as e:
        logger.error(f"Export 실패 [{e.category}]: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"저장 실패: {e}")
        return 1

    logger.info(f"저장 완료: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
