"""Deterministic category fallback images.

The bank is a packaged YAML file (category -> image URLs). An image is picked
with a 32-bit FNV-1a hash of the UTF-8 title modulo the category's size, so
the same title maps to the same image in every process and language.
"""

import functools
import re
from pathlib import Path

import yaml

_CONFIG_PATH = Path(__file__).resolve().parent / "fallback_images.yaml"

DEFAULT_CATEGORY = "default"

_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x01000193

# First match wins
_CATEGORY_KEYWORDS: list[tuple[str, re.Pattern[str]]] = [
    ("bitcoin", re.compile(r"\b(bitcoin|btc)\b", re.IGNORECASE)),
    ("ethereum", re.compile(r"\b(ethereum|eth|ether)\b", re.IGNORECASE)),
    ("defi", re.compile(r"\b(defi|decentralized)\b", re.IGNORECASE)),
    ("altcoins", re.compile(r"\b(altcoins?|crypto\w*)\b", re.IGNORECASE)),
    ("macro", re.compile(r"\b(markets?|prices?)\b", re.IGNORECASE)),
]


@functools.lru_cache
def load_image_bank() -> dict[str, tuple[str, ...]]:
    """Load the fallback image bank from YAML. Result is cached."""
    with open(_CONFIG_PATH) as f:
        data = yaml.safe_load(f)
    categories = data.get("categories", {})
    return {name: tuple(urls) for name, urls in categories.items() if urls}


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a hash of the UTF-8 encoding of text."""
    value = _FNV_OFFSET
    for byte in text.encode("utf-8"):
        value ^= byte
        value = (value * _FNV_PRIME) & 0xFFFFFFFF
    return value


def detect_category(title: str | None) -> str:
    """Keyword category of a title, "default" when nothing matches."""
    if title:
        for category, pattern in _CATEGORY_KEYWORDS:
            if pattern.search(title):
                return category
    return DEFAULT_CATEGORY


def select_fallback_image(title: str | None, category: str | None = None) -> str:
    """Pick a bank image for a title. Unknown categories use the default list."""
    bank = load_image_bank()
    category = category or detect_category(title)
    images = bank.get(category) or bank[DEFAULT_CATEGORY]
    return images[fnv1a_32(title or "") % len(images)]
