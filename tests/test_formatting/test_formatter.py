"""Tests for reading metadata derived by the formatter."""

from article_pipeline.formatting.formatter import (
    UNTITLED,
    count_words,
    create_excerpt,
    detect_language,
    format_content,
    reading_time,
)
from helpers import SENTENCE, article_body


def test_count_words_ignores_punctuation():
    assert count_words("Hello, world! It's -- fine.") == 5


def test_reading_time_rounds_up():
    assert reading_time(0) == 0
    assert reading_time(200) == 1
    assert reading_time(201) == 2


def test_detect_language():
    assert detect_language("the price of bitcoin and the market") == "en"
    assert detect_language("el precio de la moneda que se vende en el mercado") == "es"
    assert detect_language("der Preis und die Kurse von den Märkten mit dem") == "de"
    assert detect_language("xyz qwv") == "en"


def test_create_excerpt_whole_sentences():
    text = article_body(10)
    excerpt = create_excerpt(text)
    assert len(excerpt) <= 300 + 3
    assert excerpt.endswith("...")
    assert excerpt.startswith("The price of bitcoin")


def test_create_excerpt_short_text_unchanged():
    assert create_excerpt("One short line") == "One short line"


def test_format_content_plain_text_metadata():
    html = (
        '<meta name="description" content="Funds keep buying bitcoin.">'
        "<h1>Bitcoin Climbs</h1>"
        f"<p>{article_body(12)}</p>"
        '<p><a href="https://example.com/more">More</a> <img src="https://cdn.example.com/a.jpg"></p>'
    )
    formatted = format_content(html)
    assert formatted.title == "Bitcoin Climbs"
    assert formatted.description == "Funds keep buying bitcoin."
    assert "<" not in formatted.content
    # 12 sentences of 17 words, the heading and the link text
    assert formatted.word_count == 12 * 17 + 2 + 1
    assert formatted.reading_time == 2
    assert formatted.language == "en"
    assert formatted.has_links is True
    assert formatted.has_images is True


def test_format_content_browser_view_keeps_markup():
    formatted = format_content(f"<p>{SENTENCE}</p>", browser_view=True)
    assert formatted.content.startswith("<p>")
    assert formatted.has_images is False
    assert formatted.has_links is False


def test_format_content_description_from_first_paragraph():
    formatted = format_content(f"<p>{SENTENCE}</p><p>Second.</p>")
    assert formatted.description == SENTENCE


def test_format_content_title_fallbacks():
    assert format_content("<title>Doc Title</title><p>x</p>").title == "Doc Title"
    assert format_content("A reasonable first line\nmore text").title == "A reasonable first line"
    assert format_content("tiny").title == UNTITLED


def test_format_content_truncates():
    formatted = format_content(article_body(50), max_length=100)
    assert len(formatted.content) <= 100
    assert formatted.content.endswith("...")


def test_format_content_empty():
    formatted = format_content("")
    assert formatted.content == ""
    assert formatted.word_count == 0
    assert formatted.excerpt == ""
    assert formatted.language is None
