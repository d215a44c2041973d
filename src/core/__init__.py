"""
Core layer: export 공통 정책 모듈.

역할:
- 설정 로드 (default.yaml)
- 파일명 정책
- 템플릿 리소스 로드
"""

from .config import CsvSettings, ExportSettings, load_config, load_export_settings
from .filenames import download_filename
from .resources import (
    FileSystemTemplateResolver,
    InMemoryTemplateResolver,
    TemplateResolver,
    load_template_resource,
)

__all__ = [
    # config
    "CsvSettings",
    "ExportSettings",
    "load_config",
    "load_export_settings",
    # filenames
    "download_filename",
    # resources
    "TemplateResolver",
    "FileSystemTemplateResolver",
    "InMemoryTemplateResolver",
    "load_template_resource",
]
