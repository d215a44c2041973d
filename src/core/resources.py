"""
Template Resolver: 템플릿 리소스 → bytes.

- TemplateResolver: resolve(provider, path) -> bytes 프로토콜
- FileSystemTemplateResolver: provider 별 루트 디렉터리에서 읽기
- InMemoryTemplateResolver: dict 기반 (테스트/임베딩용)

읽기 전용 로드만 수행. 재시도 없음 → 실패는 즉시 ResourceNotFoundError.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from src.domain.constants import TEMPLATE_RESOURCE_PREFIX
from src.domain.errors import ResourceNotFoundError
from src.domain.schemas import TemplateResource

logger = logging.getLogger(__name__)


class TemplateResolver(Protocol):
    """템플릿 리소스 조회 협력자."""

    def resolve(self, provider: str, path: str) -> bytes:
        """
        Raises:
            ResourceNotFoundError: 리소스 없음
        """
        ...


class FileSystemTemplateResolver:
    """
    파일 시스템 기반 resolver.

    구조:
    <root>/reports/<template path>

    Usage:
        resolver = FileSystemTemplateResolver({"kenyaemr": Path("resources")})
        data = resolver.resolve("kenyaemr", "reports/anc_monthly.xlsx")
    """

    def __init__(self, roots: Mapping[str, Path]):
        self.roots = {provider: Path(root) for provider, root in roots.items()}

    def resolve(self, provider: str, path: str) -> bytes:
        root = self.roots.get(provider)
        if root is None:
            raise ResourceNotFoundError(
                provider=provider,
                path=path,
                error="unknown provider",
            )

        resolved_root = root.resolve()
        file_path = (resolved_root / path).resolve()

        # 루트 밖 경로 차단 (../ 등)
        if not file_path.is_relative_to(resolved_root):
            raise ResourceNotFoundError(
                provider=provider,
                path=path,
                error="path escapes provider root",
            )

        if not file_path.is_file():
            raise ResourceNotFoundError(provider=provider, path=path)

        try:
            return file_path.read_bytes()
        except OSError as e:
            raise ResourceNotFoundError(
                provider=provider,
                path=path,
                error=str(e),
            ) from e


class InMemoryTemplateResolver:
    """(provider, path) → bytes 매핑 기반 resolver."""

    def __init__(self, resources: Mapping[tuple[str, str], bytes] | None = None):
        self._resources = dict(resources or {})

    def add(self, provider: str, path: str, data: bytes) -> None:
        self._resources[(provider, path)] = data

    def resolve(self, provider: str, path: str) -> bytes:
        try:
            return self._resources[(provider, path)]
        except KeyError:
            raise ResourceNotFoundError(provider=provider, path=path) from None


def load_template_resource(
    resolver: TemplateResolver,
    template: TemplateResource,
    prefix: str = TEMPLATE_RESOURCE_PREFIX,
) -> bytes:
    """
    템플릿 리소스를 bytes 로 로드.

    Args:
        resolver: 템플릿 resolver
        template: 템플릿 리소스 참조
        prefix: provider 내부 리소스 prefix (기본 "reports/")

    Returns:
        템플릿 바이트

    Raises:
        ResourceNotFoundError: 로드 실패
    """
    resource_path = f"{prefix}{template.path}"
    data = resolver.resolve(template.provider, resource_path)
    logger.debug(
        f"Loaded template {template.provider}:{resource_path} ({len(data)} bytes)"
    )
    return data
