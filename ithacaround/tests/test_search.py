from __future__ import annotations

from ithacaround.catalog.loader import load_catalog, load_venues
from ithacaround.catalog.models import Category
from ithacaround.config import BUNDLED_CATALOG
from ithacaround.search.engine import filter_by_category, fold, matches_query, search

CATALOG = load_catalog(BUNDLED_CATALOG)


def _names(venues):
    return [v.name for v in venues]


def test_empty_query_no_category_returns_full_catalog_in_order():
    assert search(CATALOG, "", None) == list(CATALOG)


def test_whitespace_query_is_a_no_op():
    assert search(CATALOG, "   ") == list(CATALOG)


def test_name_match():
    assert _names(search(CATALOG, "bagel")) == ["Collegetown Bagels"]


def test_match_is_case_insensitive():
    assert _names(search(CATALOG, "MOOSEWOOD")) == ["Moosewood Restaurant"]


def test_description_match():
    assert _names(search(CATALOG, "waterfall")) == ["Ithaca Falls"]


def test_cuisine_label_match():
    assert _names(search(CATALOG, "ital")) == ["Mercato Bar & Kitchen"]


def test_cuisine_match_keeps_catalog_order():
    result = _names(search(CATALOG, "american"))
    assert result == [
        "Collegetown Bagels",
        "Moosewood Restaurant",
        "The Rook",
        "Gorgers Subs",
        "Mercato Bar & Kitchen",
    ]


def test_category_only():
    result = search(CATALOG, "", Category.outdoor)
    assert _names(result) == ["Ithaca Falls"]
    assert all(v.category is Category.outdoor for v in result)


def test_category_and_query_compose_with_and():
    assert _names(search(CATALOG, "american", Category.bar)) == ["The Rook"]
    assert search(CATALOG, "bagel", Category.bar) == []


def test_category_with_no_members():
    assert search(CATALOG, "", Category.study_spot) == []


def test_no_match():
    assert search(CATALOG, "sushi") == []


def test_empty_catalog():
    assert search([], "bagel", Category.cafe) == []
    assert search([], "") == []


def test_unicode_folding():
    (cafe,) = load_venues([{
        "id": "cafe",
        "name": "CAFÉ STRASSE",
        "category": "Cafe",
        "price_range": "$",
        "coordinate": {"latitude": 42.44, "longitude": -76.48},
        "rating": 4.0,
    }])
    assert matches_query(cafe, "café")
    assert matches_query(cafe, "straße")
    assert fold("Ｃａｆｅ") == "cafe"


def test_filter_by_category_none_keeps_everything():
    assert filter_by_category(CATALOG, None) == list(CATALOG)


def test_surrounding_whitespace_is_part_of_the_query():
    assert _names(search(CATALOG, "Bagels")) == ["Collegetown Bagels"]
    assert search(CATALOG, "Bagels ") == []
    assert _names(search(CATALOG, " Bar ")) == ["Mercato Bar & Kitchen"]
