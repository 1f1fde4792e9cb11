"""Tests for build_page."""

from newsroom.paging import build_page


def test_build_page_envelope():
    page = build_page([{"id": 2}, {"id": 1}], limit=10, offset=0, total=2)
    assert page == {
        "data": [{"id": 2}, {"id": 1}],
        "paging": {"limit": 10, "offset": 0, "total": 2},
    }


def test_build_page_never_exceeds_limit():
    page = build_page(list(range(25)), limit=10, offset=0, total=25)
    assert len(page["data"]) == 10
    assert page["paging"]["total"] == 25


def test_total_independent_of_offset():
    first = build_page([1, 2], limit=2, offset=0, total=7)
    later = build_page([7], limit=2, offset=6, total=7)
    assert first["paging"]["total"] == later["paging"]["total"] == 7


def test_offset_past_end_is_empty_not_error():
    page = build_page([], limit=10, offset=500, total=3)
    assert page["data"] == []
    assert page["paging"] == {"limit": 10, "offset": 500, "total": 3}
