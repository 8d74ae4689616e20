"""Image candidate gathering, validation, and ranking.

Candidates come from, in priority order: feed media fields, HTML
(structured metadata, <img>, <picture>/<source srcset>, CSS background-image),
a supplementary direct page fetch, a raw-text URL scan, and finally the
category fallback bank. Processing resolves relative URLs, validates scheme
and extension (or a known image CDN host), deduplicates by URL, drops images
known to be too small, assigns a quality tier, and sorts by (quality desc,
area desc).
"""

import json
import logging
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from article_pipeline.errors import NetworkError
from article_pipeline.fetcher import Fetcher
from article_pipeline.images.bank import select_fallback_image
from article_pipeline.models.content import FeedItem
from article_pipeline.models.images import ImageInfo, ImageQuality, ImageSource
from article_pipeline.urls import resolve_url

logger = logging.getLogger(__name__)

_IMAGE_EXTENSION = re.compile(r"\.(jpe?g|png|gif|webp|svg|bmp|tiff?)$", re.IGNORECASE)
_CDN_HOST_PREFIXES = ("cdn.", "img.", "images.", "static.", "assets.", "media.", "photos.", "pics.")
_HIGH_KEYWORDS = re.compile(r"(?<![a-z])(large|hd|hero)(?![a-z])", re.IGNORECASE)
_MEDIUM_KEYWORDS = re.compile(r"(?<![a-z])(medium|thumb)", re.IGNORECASE)
_BACKGROUND_URL = re.compile(r"background(?:-image)?\s*:[^;]*url\(\s*['\"]?([^'\")]+)['\"]?\s*\)", re.IGNORECASE)
_RAW_IMAGE_URL = re.compile(
    r"https?://(?:images\.unsplash\.com/[^\s\"'<>()]+"
    r"|[^\s\"'<>()]+?\.(?:jpe?g|png|gif|webp)(?:\?[^\s\"'<>()]*)?)",
    re.IGNORECASE,
)

HIGH_AREA = 1_000_000
MEDIUM_AREA = 200_000


def _dimension(value) -> int | None:
    try:
        parsed = int(str(value).strip().removesuffix("px"))
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None


def is_valid_image_url(url: str) -> bool:
    """http(s) URL with an image file extension or on a known image host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return False
    if _IMAGE_EXTENSION.search(parsed.path):
        return True
    host = parsed.hostname.lower()
    return host == "images.unsplash.com" or host.startswith(_CDN_HOST_PREFIXES) or "imgur" in host


def image_quality(url: str, width: int | None = None, height: int | None = None) -> ImageQuality:
    area = (width or 0) * (height or 0)
    if _HIGH_KEYWORDS.search(url) or area > HIGH_AREA:
        return ImageQuality.HIGH
    if area > MEDIUM_AREA or _MEDIUM_KEYWORDS.search(url):
        return ImageQuality.MEDIUM
    return ImageQuality.LOW


def feed_image_candidates(feed_item: FeedItem) -> list[ImageInfo]:
    """Images named by a feed item: media content, thumbnails, enclosures, then body <img> tags."""
    candidates: list[ImageInfo] = []

    def is_image_type(media_type: str | None) -> bool:
        return media_type is None or media_type.startswith("image/")

    for media in feed_item.media_content:
        if media.url and is_image_type(media.type):
            candidates.append(
                ImageInfo(url=media.url, source=ImageSource.FEED, width=media.width, height=media.height)
            )
    for thumb in feed_item.media_thumbnail:
        if thumb.url:
            candidates.append(
                ImageInfo(url=thumb.url, source=ImageSource.FEED, width=thumb.width, height=thumb.height)
            )
    for enclosure in feed_item.enclosure:
        if enclosure.url and enclosure.type and enclosure.type.startswith("image/"):
            candidates.append(
                ImageInfo(
                    url=enclosure.url,
                    source=ImageSource.FEED,
                    width=enclosure.width,
                    height=enclosure.height,
                )
            )
    for body in (feed_item.content, feed_item.content_encoded, feed_item.description, feed_item.summary):
        if body and "<img" in body:
            soup = BeautifulSoup(body, "html.parser")
            candidates.extend(_img_tag_candidates(soup, ImageSource.FEED))
    return candidates


def _srcset_candidates(srcset: str, source: ImageSource, alt: str | None) -> list[ImageInfo]:
    images = []
    for entry in srcset.split(","):
        parts = entry.strip().split()
        if not parts:
            continue
        width = None
        if len(parts) > 1 and parts[1].endswith("w"):
            width = _dimension(parts[1][:-1])
        images.append(ImageInfo(url=parts[0], source=source, width=width, alt=alt))
    return images


def _img_tag_candidates(root: BeautifulSoup | Tag, source: ImageSource) -> list[ImageInfo]:
    images = []
    for img in root.find_all("img"):
        src = img.get("src") or img.get("data-src") or img.get("data-lazy-src")
        alt = img.get("alt") or None
        if src and not src.startswith("data:"):
            images.append(
                ImageInfo(
                    url=src,
                    source=source,
                    width=_dimension(img.get("width")),
                    height=_dimension(img.get("height")),
                    alt=alt,
                )
            )
        srcset = img.get("srcset") or img.get("data-srcset")
        if srcset:
            images.extend(_srcset_candidates(srcset, source, alt))
    return images


def _structured_candidates(soup: BeautifulSoup) -> list[ImageInfo]:
    images = []
    for prop in ("og:image", "og:image:url", "twitter:image"):
        for meta in soup.find_all("meta", attrs={"property": prop}) + soup.find_all(
            "meta", attrs={"name": prop}
        ):
            if meta.get("content"):
                images.append(ImageInfo(url=meta["content"], source=ImageSource.STRUCTURED))
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        try:
            data = json.loads(script.string or "")
        except ValueError:
            continue
        for url in json_ld_image_urls(data):
            images.append(ImageInfo(url=url, source=ImageSource.STRUCTURED))
    return images


def json_ld_image_urls(data) -> list[str]:
    """Image URLs of JSON-LD objects: "image" as a string, a list, or {"url": ...}."""
    items = data if isinstance(data, list) else [data]
    urls: list[str] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        image = item.get("image")
        for value in image if isinstance(image, list) else [image]:
            if isinstance(value, str):
                urls.append(value)
            elif isinstance(value, dict) and isinstance(value.get("url"), str):
                urls.append(value["url"])
    return urls


def html_image_candidates(html: str | BeautifulSoup | Tag, *, include_structured: bool = True) -> list[ImageInfo]:
    """Images referenced by an HTML document or fragment."""
    soup = BeautifulSoup(html, "html.parser") if isinstance(html, str) else html
    images: list[ImageInfo] = []
    if include_structured and isinstance(soup, BeautifulSoup):
        images.extend(_structured_candidates(soup))
    images.extend(_img_tag_candidates(soup, ImageSource.HTML))
    for source_tag in soup.select("picture source[srcset]"):
        images.extend(_srcset_candidates(source_tag["srcset"], ImageSource.HTML, None))
    for styled in soup.find_all(style=True):
        for url in _BACKGROUND_URL.findall(styled["style"]):
            images.append(ImageInfo(url=url, source=ImageSource.HTML))
    for style in soup.find_all("style"):
        for url in _BACKGROUND_URL.findall(style.get_text()):
            images.append(ImageInfo(url=url, source=ImageSource.HTML))
    return images


def text_image_candidates(text: str) -> list[ImageInfo]:
    """Image-shaped absolute URLs found anywhere in raw text."""
    return [ImageInfo(url=url, source=ImageSource.HTML) for url in _RAW_IMAGE_URL.findall(text or "")]


def process_images(
    candidates: list[ImageInfo],
    base_url: str,
    *,
    max_images: int = 5,
    min_width: int = 300,
    min_height: int = 200,
    prefer_high_quality: bool = True,
) -> list[ImageInfo]:
    """Resolve, validate, deduplicate, filter, grade, and rank image candidates.

    Earlier candidates win on duplicate URLs. Size filters only apply to
    known dimensions. The sort is stable, so equal images keep gathering order.
    """
    seen: set[str] = set()
    processed: list[ImageInfo] = []
    for candidate in candidates:
        url = resolve_url(candidate.url, base_url)
        if url in seen or not is_valid_image_url(url):
            continue
        seen.add(url)
        if candidate.width is not None and candidate.width < min_width:
            continue
        if candidate.height is not None and candidate.height < min_height:
            continue
        processed.append(
            candidate.model_copy(
                update={
                    "url": url,
                    "quality": image_quality(url, candidate.width, candidate.height),
                    "is_valid": True,
                }
            )
        )

    if prefer_high_quality:
        processed.sort(key=lambda img: (img.quality.rank, img.area), reverse=True)
    else:
        processed.sort(key=lambda img: img.area, reverse=True)
    return processed[:max_images]


def get_best_image(images: list[ImageInfo]) -> ImageInfo | None:
    return images[0] if images else None


def fallback_image(title: str | None) -> ImageInfo:
    """Last-resort candidate: the title's deterministic category bank image."""
    return ImageInfo(url=select_fallback_image(title), source=ImageSource.FALLBACK, quality=ImageQuality.MEDIUM)


async def fetch_page_images(fetcher: Fetcher, url: str, timeout_seconds: float = 15.0) -> list[ImageInfo]:
    """Supplementary single-attempt page fetch for image discovery.

    A failed fetch yields no images rather than an error.
    """
    try:
        html = await fetcher.fetch(url, timeout_seconds=timeout_seconds, max_retries=1)
    except NetworkError as exc:
        logger.info("Direct image fetch failed for %s: %s", url, exc)
        return []
    return html_image_candidates(html)


async def supplementary_image_candidates(
    url: str,
    *,
    fetcher: Fetcher | None,
    text: str = "",
    allow_fetch: bool = True,
    timeout_seconds: float = 15.0,
) -> list[ImageInfo]:
    """Lower-priority sources used when feed and page HTML yielded nothing.

    Tries a direct page fetch (when allowed), then a raw-text URL scan.
    """
    if allow_fetch and fetcher is not None:
        images = await fetch_page_images(fetcher, url, timeout_seconds)
        if images:
            return images
    return text_image_candidates(text)


def create_responsive_image_set(images: list[ImageInfo]) -> dict[str, str | None]:
    """Build src/srcset/sizes/alt for an <img> from ranked images.

    srcset lists high-quality images with known widths, so it is only set
    when there is more than one such image.
    """
    best = get_best_image(images)
    if best is None:
        return {"src": "", "srcset": None, "sizes": None, "alt": ""}

    sized = [img for img in images if img.quality == ImageQuality.HIGH and img.width]
    srcset = None
    sizes = None
    if len(sized) > 1:
        sized.sort(key=lambda img: img.width or 0)
        srcset = ", ".join(f"{img.url} {img.width}w" for img in sized)
        sizes = "(max-width: 768px) 100vw, (max-width: 1200px) 50vw, 33vw"
    return {"src": best.url, "srcset": srcset, "sizes": sizes, "alt": best.alt or ""}
