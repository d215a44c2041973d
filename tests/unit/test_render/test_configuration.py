"""
test_configuration.py - 에페메럴 RenderConfiguration 빌더 테스트
"""

import dataclasses

import pytest

from src.domain.constants import ExportFormat
from src.domain.schemas import ReportDescriptor, ReportIdentity
from src.render.configuration import build_render_configuration


def test_spreadsheet_configuration(
    report_identity: ReportIdentity,
    xlsx_descriptor: ReportDescriptor,
):
    config = build_render_configuration(report_identity, xlsx_descriptor, b"bytes")

    assert config.report == report_identity
    assert config.export_format is ExportFormat.SPREADSHEET
    assert config.design_name == "ANC Monthly design"
    assert config.template_bytes == b"bytes"
    assert config.template_name == "anc_monthly.xlsx"


def test_default_template_name(
    report_identity: ReportIdentity,
    plain_descriptor: ReportDescriptor,
):
    config = build_render_configuration(report_identity, plain_descriptor, b"bytes")

    assert config.template_name == "template.xlsx"


def test_without_template_bytes(
    report_identity: ReportIdentity,
    plain_descriptor: ReportDescriptor,
):
    config = build_render_configuration(report_identity, plain_descriptor)

    assert config.export_format is ExportFormat.DELIMITED_TEXT
    assert config.template_bytes is None


def test_copies_mutable_buffer(
    report_identity: ReportIdentity,
    xlsx_descriptor: ReportDescriptor,
):
    """bytearray 를 넘겨도 이후 변경이 configuration 에 반영되지 않음."""
    buffer = bytearray(b"abc")

    config = build_render_configuration(report_identity, xlsx_descriptor, buffer)
    buffer[0:1] = b"z"

    assert config.template_bytes == b"abc"


def test_immutable(report_identity: ReportIdentity, xlsx_descriptor: ReportDescriptor):
    config = build_render_configuration(report_identity, xlsx_descriptor, b"bytes")

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.template_bytes = b"other"  # type: ignore[misc]


def test_repr_hides_template_bytes(
    report_identity: ReportIdentity,
    xlsx_descriptor: ReportDescriptor,
):
    config = build_render_configuration(report_identity, xlsx_descriptor, b"secret-bytes")

    assert "secret-bytes" not in repr(config)
