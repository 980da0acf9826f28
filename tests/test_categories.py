"""Tests for analysis category presets."""

from reviewinsights.core.categories import (
    CATEGORIES,
    DEFAULT_CATEGORY_VALUE,
    category_hint,
    get_category,
    grouped_categories,
)


def test_get_category_known_value():
    assert get_category("electronics").label == "Electronics"


def test_get_category_falls_back_to_default():
    assert get_category("no-such-preset").value == DEFAULT_CATEGORY_VALUE
    assert get_category(None).value == DEFAULT_CATEGORY_VALUE


def test_values_are_unique():
    values = [c.value for c in CATEGORIES]
    assert len(values) == len(set(values))


def test_grouped_categories_keep_order():
    groups = grouped_categories()
    assert list(groups)[0] == "Product Type Analysis"
    assert [c.value for c in groups["Product Type Analysis"]] == ["electronics", "general_products"]
    assert sum(len(v) for v in groups.values()) == len(CATEGORIES)


def test_every_aspect_has_keywords():
    for category in CATEGORIES:
        for aspect in category.aspects:
            assert aspect.keywords, aspect.name


def test_category_hint_lists_aspects():
    hint = category_hint(get_category("general_products"))
    assert hint.startswith("DOMAIN=General Products.")
    assert "Shipping/Delivery" in hint
