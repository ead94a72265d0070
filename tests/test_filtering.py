"""
Tests for client-side instance filtering
"""

from simulator_console.browser.filtering import filter_items, normalize_query
from simulator_console.browser.types import MasterItem

ITEMS = [
    MasterItem(id=1, display_key="10.0.0.1"),
    MasterItem(id=2, display_key="10.0.0.2"),
    MasterItem(id=3, display_key="Lab-Gateway.local"),
    MasterItem(id=4, display_key=None),
]


def test_substring_match_by_display_key():
    """Only items whose display key contains the query are kept."""
    items = ITEMS[:2]
    assert filter_items(items, "0.0.0.1") == [items[0]]


def test_empty_and_blank_query_return_the_same_sequence():
    """Blank queries are the identity view."""
    assert filter_items(ITEMS, "") is ITEMS
    assert filter_items(ITEMS, "   ") is ITEMS
    assert filter_items(ITEMS, None) is ITEMS


def test_match_ignores_case_and_surrounding_whitespace():
    result = filter_items(ITEMS, "  gateway.LOCAL ")
    assert [item.id for item in result] == [3]


def test_missing_display_key_matches_as_empty_string():
    """An item without a display key never matches a non-empty query."""
    assert [item.id for item in filter_items(ITEMS, "10.")] == [1, 2]
    assert ITEMS[3] not in filter_items(ITEMS, "l")


def test_order_is_preserved():
    result = filter_items(ITEMS, "10.0.0")
    assert [item.id for item in result] == [1, 2]


def test_filter_is_deterministic():
    assert filter_items(ITEMS, "0.0") == filter_items(ITEMS, "0.0")


def test_no_match_returns_empty():
    assert filter_items(ITEMS, "172.16") == []


def test_normalize_query():
    assert normalize_query("  ABC ") == "abc"
    assert normalize_query(None) == ""
