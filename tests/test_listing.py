import math

import pytest

from posadmin.accounts.listing import (
    ELLIPSIS,
    ListingQuery,
    apply_listing,
    filter_by_fullname,
    page_count,
    page_window,
    paginate,
)
from tests.conftest import make_profile


@pytest.fixture
def people():
    names = ["Alice Smith", "bob stone", "ALINA Park", "Carl", "Malika Ito"]
    return [make_profile(f"P{i}", fullname=n) for i, n in enumerate(names)]


def test_filter_is_case_insensitive_and_order_preserving(people):
    result = filter_by_fullname(people, "ALI")
    assert [p.fullname for p in result] == ["Alice Smith", "ALINA Park", "Malika Ito"]


def test_filter_matches_exact_definition(people):
    for term in ["", "a", "S", "sto", "zzz", "carl", " "]:
        expected = [p for p in people if term.lower() in p.fullname.lower()]
        assert filter_by_fullname(people, term) == expected


def test_empty_term_keeps_everything(people):
    assert filter_by_fullname(people, "") == people


@pytest.mark.parametrize("total", [0, 1, 9, 10, 11, 25, 50])
@pytest.mark.parametrize("size", [5, 10, 20])
def test_page_count_and_bounds(total, size):
    items = list(range(total))
    pages = page_count(total, size)
    assert pages == math.ceil(total / size)

    for k in range(1, pages + 1):
        page = paginate(items, k, size)
        assert page.items == items[(k - 1) * size:min(k * size, total)]
        assert page.total == total
        assert page.total_pages == pages


def test_page_past_end_is_empty():
    page = paginate(list(range(7)), 3, 5)
    assert page.items == []
    assert page.summary() == {"from": 0, "to": 0, "of": 7}


def test_page_summary():
    page = paginate(list(range(23)), 3, 10)
    assert page.items == [20, 21, 22]
    assert page.summary() == {"from": 21, "to": 23, "of": 23}
    assert page.has_previous
    assert not page.has_next


def test_invalid_page_arguments():
    with pytest.raises(ValueError):
        paginate([1, 2], 0, 10)
    with pytest.raises(ValueError):
        paginate([1, 2], 1, 0)


@pytest.mark.parametrize(
    "current,total,expected",
    [
        (1, 1, []),
        (1, 0, []),
        (1, 2, [1, 2]),
        (1, 5, [1, 2, 3, ELLIPSIS, 5]),
        (3, 5, [1, 2, 3, 4, 5]),
        (1, 10, [1, 2, 3, ELLIPSIS, 10]),
        (5, 10, [1, ELLIPSIS, 3, 4, 5, 6, 7, ELLIPSIS, 10]),
        (6, 12, [1, ELLIPSIS, 4, 5, 6, 7, 8, ELLIPSIS, 12]),
        (10, 10, [1, ELLIPSIS, 8, 9, 10]),
    ],
)
def test_page_window(current, total, expected):
    assert page_window(current, total) == expected


def test_search_and_page_size_changes_reset_page():
    query = ListingQuery(search="", page=4, page_size=10)

    assert query.with_search("ali").page == 1
    assert query.with_search("ali").search == "ali"
    assert query.with_page_size(50).page == 1
    assert query.with_page_size(50).page_size == 50
    assert query.with_page(2).page == 2


def test_apply_listing_filters_then_pages(people):
    page = apply_listing(people, ListingQuery(search="a", page=2, page_size=2))
    filtered = filter_by_fullname(people, "a")
    assert page.total == len(filtered)
    assert page.items == filtered[2:4]


def test_page_to_dict_serialises_profiles(people):
    data = paginate(people, 1, 2).to_dict()
    assert data["items"][0]["id"] == "P0"
    assert data["total_pages"] == 3
    assert data["links"] == [1, 2, 3]
    assert data["showing"] == {"from": 1, "to": 2, "of": 5}
