"""Tests for deterministic category fallback images."""

import pytest

from article_pipeline.images.bank import (
    DEFAULT_CATEGORY,
    detect_category,
    fnv1a_32,
    load_image_bank,
    select_fallback_image,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", 0x811C9DC5),
        ("a", 0xE40C292C),
        ("foobar", 0xBF9CF968),
    ],
)
def test_fnv1a_32_reference_values(text, expected):
    assert fnv1a_32(text) == expected


@pytest.mark.parametrize(
    ("title", "category"),
    [
        ("Bitcoin breaks $70k", "bitcoin"),
        ("BTC miners sell", "bitcoin"),
        ("Ethereum upgrade ships", "ethereum"),
        ("DeFi lending grows", "defi"),
        ("Altcoins rally", "altcoins"),
        ("Stock markets slide", "macro"),
        ("Regulators meet", DEFAULT_CATEGORY),
        (None, DEFAULT_CATEGORY),
    ],
)
def test_detect_category(title, category):
    assert detect_category(title) == category


def test_first_matching_category_wins():
    assert detect_category("Bitcoin and Ethereum diverge") == "bitcoin"


def test_bank_has_default_category():
    bank = load_image_bank()
    assert DEFAULT_CATEGORY in bank
    assert all(urls for urls in bank.values())


def test_select_fallback_image_is_deterministic():
    title = "Bitcoin ETF inflows hit record"
    first = select_fallback_image(title)
    assert first == select_fallback_image(title)
    images = load_image_bank()["bitcoin"]
    assert first == images[fnv1a_32(title) % len(images)]


def test_select_fallback_image_unknown_category_uses_default():
    image = select_fallback_image("Anything", category="no-such-category")
    assert image in load_image_bank()[DEFAULT_CATEGORY]
