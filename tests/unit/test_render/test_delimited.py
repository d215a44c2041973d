"""
test_delimited.py - Delimited-text (CSV) 렌더러 테스트
"""

from datetime import date

import pytest

from src.core.config import CsvSettings
from src.domain.errors import ErrorCodes, RenderFailedError
from src.domain.schemas import (
    DataSet,
    DataSetColumn,
    EvaluatedReportData,
    EvaluationContext,
)
from src.render.delimited import DelimitedTextRenderer, render_csv


class TestDelimitedTextRenderer:

    def test_single_data_set(self, evaluated_data: EvaluatedReportData):
        content = DelimitedTextRenderer("ANC Monthly").render(evaluated_data)

        assert content == b"First visits,Re-visits,total\r\n12,7,19\r\n"

    def test_multiple_data_sets(self, multi_data_set_data: EvaluatedReportData):
        """섹션마다 데이터셋 이름 행, 섹션 사이 빈 줄, None → 빈 필드."""
        content = render_csv("ANC Monthly", multi_data_set_data)

        assert content.decode("utf-8") == (
            "visits\r\n"
            "clinic,Visits\r\n"
            "North,3\r\n"
            "South,\r\n"
            "\r\n"
            "tests\r\n"
            "test,done_on\r\n"
            "HIV,2024-03-05\r\n"
        )

    def test_row_order_follows_data(self):
        data = EvaluatedReportData(
            data_sets={
                "d": DataSet(
                    "d",
                    [DataSetColumn("b"), DataSetColumn("a")],
                    [{"a": 1, "b": 2}, {"a": 3, "b": 4}],
                )
            }
        )

        assert render_csv("R", data) == b"b,a\r\n2,1\r\n4,3\r\n"

    def test_quoting(self):
        data = EvaluatedReportData(
            data_sets={
                "d": DataSet("d", [DataSetColumn("name")], [{"name": 'Nairobi, "West"'}])
            }
        )

        assert render_csv("R", data) == b'name\r\n"Nairobi, ""West"""\r\n'

    def test_custom_settings(self, evaluated_data: EvaluatedReportData):
        settings = CsvSettings(delimiter=";", line_terminator="\n")

        content = render_csv("ANC Monthly", evaluated_data, settings)

        assert content == b"First visits;Re-visits;total\n12;7;19\n"

    def test_no_data_sets(self):
        assert render_csv("R", EvaluatedReportData()) == b""

    def test_deterministic(self, multi_data_set_data: EvaluatedReportData):
        assert render_csv("R", multi_data_set_data) == render_csv("R", multi_data_set_data)

    def test_encoding_failure(self):
        data = EvaluatedReportData(
            data_sets={"d": DataSet("d", [DataSetColumn("name")], [{"name": "Müller"}])},
            context=EvaluationContext({"startDate": date(2024, 3, 1)}),
        )
        renderer = DelimitedTextRenderer("ANC Monthly", CsvSettings(encoding="ascii"))

        with pytest.raises(RenderFailedError) as exc_info:
            renderer.render(data)

        assert exc_info.value.code == ErrorCodes.RENDER_FAILED
        assert exc_info.value.context["report"] == "ANC Monthly"
        assert exc_info.value.context["format"] == "delimited-text"
