"""
Shared fixtures: synthetic ENTSO-E generation documents.
"""
import os
import sys

import pytest

# Add project root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

GL_NS = "urn:iec62325.351:tc57wg16:451-6:generationloaddocument:3:0"

# Marker for a Point that has no quantity node at all
NO_QUANTITY = object()


def timeseries_xml(start, end, quantities, resolution=None, n_periods=1):
    """One <TimeSeries> with the given interval text and point quantities."""
    points = []
    for position, q in enumerate(quantities, start=1):
        if q is NO_QUANTITY:
            body = ""
        elif q is None:
            body = "<quantity></quantity>"
        else:
            body = f"<quantity>{q}</quantity>"
        points.append(f"<Point><position>{position}</position>{body}</Point>")

    res = f"<resolution>{resolution}</resolution>" if resolution else ""
    period = (
        "<Period>"
        f"<timeInterval><start>{start}</start><end>{end}</end></timeInterval>"
        f"{res}{''.join(points)}"
        "</Period>"
    )
    return (
        "<TimeSeries><mRID>1</mRID><businessType>A01</businessType>"
        f"{period * n_periods}"
        "</TimeSeries>"
    )


def document_xml(*timeseries, root="GL_MarketDocument", ns=GL_NS) -> bytes:
    xmlns = f' xmlns="{ns}"' if ns else ""
    return (
        f'<?xml version="1.0" encoding="UTF-8"?><{root}{xmlns}>'
        "<mRID>doc</mRID><type>A75</type>"
        f"{''.join(timeseries)}"
        f"</{root}>"
    ).encode("utf-8")


@pytest.fixture
def one_hour_doc():
    """Single segment, 4 samples over 00:00-01:00."""
    return document_xml(
        timeseries_xml("2015-01-01T00:00Z", "2015-01-01T01:00Z", [10, 20, 30, 40])
    )
