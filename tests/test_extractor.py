"""
Tests for segment extraction.

I check that every structural defect is reported with its segment index
instead of the segment quietly disappearing.
"""
import pytest
import pandas as pd

from conftest import NO_QUANTITY, document_xml, timeseries_xml
from provider.document import parse_document
from reconstruction.extractor import extract_segment, extract_segments, parse_instant
from reconstruction.interfaces import ExtractionError


def first_timeseries(*timeseries):
    doc = parse_document(document_xml(*timeseries))
    return doc.get_children("TimeSeries")[0]


class TestExtractSegment:

    def test_valid_segment(self):
        node = first_timeseries(
            timeseries_xml("2015-01-01T00:00Z", "2015-01-01T01:00Z", [1, 2.5, 3, 4], resolution="PT15M")
        )
        seg = extract_segment(node, 0)

        assert seg.index == 0
        assert seg.start == pd.Timestamp("2015-01-01T00:00Z")
        assert seg.end == pd.Timestamp("2015-01-01T01:00Z")
        assert seg.samples == (1.0, 2.5, 3.0, 4.0)
        assert seg.declared_resolution == pd.Timedelta(minutes=15)

    def test_signed_and_decimal_quantities(self):
        node = first_timeseries(
            timeseries_xml("2015-01-01T00:00Z", "2015-01-01T01:00Z", ["-12.5", "+3", "0", "1000.25"])
        )
        assert extract_segment(node, 0).samples == (-12.5, 3.0, 0.0, 1000.25)

    def test_empty_quantity_is_a_gap(self):
        node = first_timeseries(
            timeseries_xml("2015-01-01T00:00Z", "2015-01-01T01:00Z", [1, 2, None, None])
        )
        seg = extract_segment(node, 0)
        assert seg.samples == (1.0, 2.0, None, None)

    def test_zero_points_is_valid(self):
        node = first_timeseries(timeseries_xml("2015-01-01T00:00Z", "2015-01-01T01:00Z", []))
        seg = extract_segment(node, 0)
        assert seg.sample_count == 0

    def test_missing_quantity_node(self):
        node = first_timeseries(
            timeseries_xml("2015-01-01T00:00Z", "2015-01-01T01:00Z", [1, NO_QUANTITY, 3, 4])
        )
        with pytest.raises(ExtractionError) as exc:
            extract_segment(node, 5)
        assert exc.value.segment_index == 5
        assert "point 2" in str(exc.value)

    def test_missing_period(self):
        doc = parse_document(document_xml("<TimeSeries><mRID>1</mRID></TimeSeries>"))
        with pytest.raises(ExtractionError, match="missing Period"):
            extract_segment(doc.get_children("TimeSeries")[0], 0)

    def test_two_periods(self):
        node = first_timeseries(
            timeseries_xml("2015-01-01T00:00Z", "2015-01-01T01:00Z", [1, 2], n_periods=2)
        )
        with pytest.raises(ExtractionError, match="exactly one Period"):
            extract_segment(node, 0)

    def test_missing_time_interval(self):
        doc = parse_document(document_xml(
            "<TimeSeries><Period><Point><position>1</position><quantity>1</quantity></Point>"
            "</Period></TimeSeries>"
        ))
        with pytest.raises(ExtractionError, match="timeInterval"):
            extract_segment(doc.get_children("TimeSeries")[0], 0)

    @pytest.mark.parametrize("text", ["abc", "NaN", "nan", "inf", "-inf", "Infinity", "1_000", "1e3", "0x10"])
    def test_non_numeric_quantity(self, text):
        node = first_timeseries(
            timeseries_xml("2015-01-01T00:00Z", "2015-01-01T01:00Z", [1, text, 3, 4])
        )
        with pytest.raises(ExtractionError, match="not numeric"):
            extract_segment(node, 0)

    def test_end_not_after_start(self):
        node = first_timeseries(
            timeseries_xml("2015-01-01T01:00Z", "2015-01-01T01:00Z", [1])
        )
        with pytest.raises(ExtractionError, match="not after start"):
            extract_segment(node, 0)


class TestParseInstant:

    def test_fixed_format(self):
        ts = parse_instant("2024-06-30T22:00Z", 0, "start")
        assert ts == pd.Timestamp("2024-06-30T22:00Z")
        assert str(ts.tz) == "UTC"

    @pytest.mark.parametrize("text", [
        "2024-06-30T22:00:00Z",
        "2024-06-30T22:00+02:00",
        "2024-06-30 22:00",
        "2024-6-3T2:0Z",
        "2024-06-3T22:00Z",
        "24-06-30T22:00Z",
        "",
        None,
    ])
    def test_other_formats_fail_loudly(self, text):
        with pytest.raises(ExtractionError):
            parse_instant(text, 2, "end")


def test_extract_segments_keeps_going_after_a_failure():
    doc = parse_document(document_xml(
        timeseries_xml("2015-01-01T00:00Z", "2015-01-01T01:00Z", [1, NO_QUANTITY]),
        timeseries_xml("2015-01-01T01:00Z", "2015-01-01T02:00Z", [1, 2, 3, 4]),
        timeseries_xml("bad", "2015-01-01T03:00Z", [1]),
    ))
    segments, errors = extract_segments(doc)

    assert [s.index for s in segments] == [1]
    assert [e.segment_index for e in errors] == [0, 2]


def test_extract_segments_without_timeseries():
    segments, errors = extract_segments(parse_document(document_xml()))
    assert segments == [] and errors == []
