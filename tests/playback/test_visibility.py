"""
Visibility Calculation Tests

Tests turning scroll geometry into visibility reports.

To run these tests:
    pytest tests/playback/test_visibility.py -v
"""

import pytest

from playback.models.viewport import EntryLayout, Viewport
from playback.utils.visibility import (
    build_visibility_report,
    compute_visible_fractions,
    paged_layouts,
)


@pytest.mark.unit
def test_paged_layouts():
    layouts = paged_layouts(3, 800)

    assert layouts == [
        EntryLayout(index=0, offset=0, length=800),
        EntryLayout(index=1, offset=800, length=800),
        EntryLayout(index=2, offset=1600, length=800),
    ]
    assert paged_layouts(0, 800) == []
    assert paged_layouts(-2, 800) == []


@pytest.mark.unit
def test_settled_on_first_page():
    fractions = compute_visible_fractions(
        Viewport(offset=0, height=800),
        paged_layouts(3, 800),
    )

    assert fractions == {0: 1.0, 1: 0.0, 2: 0.0}


@pytest.mark.unit
def test_between_pages():
    fractions = compute_visible_fractions(
        Viewport(offset=200, height=800),
        paged_layouts(2, 800),
    )

    assert fractions[0] == pytest.approx(0.75)
    assert fractions[1] == pytest.approx(0.25)


@pytest.mark.unit
def test_zero_length_entry_reports_zero():
    fractions = compute_visible_fractions(
        Viewport(offset=0, height=100),
        [EntryLayout(index=0, offset=0, length=0)],
    )

    assert fractions == {0: 0.0}


@pytest.mark.unit
def test_negative_viewport_height_sees_nothing():
    fractions = compute_visible_fractions(
        Viewport(offset=0, height=-50),
        paged_layouts(1, 100),
    )

    assert fractions == {0: 0.0}


@pytest.mark.unit
def test_entry_shorter_than_viewport_is_fully_visible():
    fractions = compute_visible_fractions(
        Viewport(offset=0, height=1000),
        [EntryLayout(index=0, offset=100, length=200)],
    )

    assert fractions == {0: 1.0}


@pytest.mark.unit
def test_report_drops_invisible_entries():
    report = build_visibility_report(
        Viewport(offset=400, height=800),
        paged_layouts(4, 800),
    )

    assert report == {0: pytest.approx(0.5), 1: pytest.approx(0.5)}
