"""
Image enrichment: Open Graph preview images for matched source URLs.

Each URL fails soft (no image) and the caller waits for the whole set. All
URLs across all platforms share one capped thread pool; results are put back
in source order, so completion order never affects the response.
"""

import concurrent.futures
import logging
from typing import Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from traveldesk.errors import ImageFetchError
from traveldesk.search.schemas import ImagePreview

logger = logging.getLogger(__name__)

DEFAULT_ALT = "Activity image"
DEFAULT_TIMEOUT_SECONDS = 8.0
DEFAULT_MAX_WORKERS = 6

_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml",
}

# Reuse session for connection pooling across preview fetches
_session: Optional[requests.Session] = None


def _get_session() -> requests.Session:
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers.update(_HEADERS)
    return _session


def _meta_content(soup: BeautifulSoup, key: str) -> Optional[str]:
    """First <meta property=key> (or name=key) content, stripped."""
    tag = soup.find("meta", attrs={"property": key}) or soup.find("meta", attrs={"name": key})
    if tag is None:
        return None
    content = (tag.get("content") or "").strip()
    return content or None


def _to_int(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def parse_og_image(html: str, base_url: str) -> Optional[ImagePreview]:
    """Pick the first og:image of a page; None when the page has none."""
    soup = BeautifulSoup(html or "", "html.parser")
    image_url = _meta_content(soup, "og:image") or _meta_content(soup, "og:image:url")
    if not image_url:
        return None
    return ImagePreview(
        url=urljoin(base_url, image_url),
        alt=_meta_content(soup, "og:title") or DEFAULT_ALT,
        width=_to_int(_meta_content(soup, "og:image:width")),
        height=_to_int(_meta_content(soup, "og:image:height")),
        is_fallback=False,
    )


def _fetch_og_metadata(url: str, timeout: float) -> Optional[ImagePreview]:
    try:
        response = _get_session().get(url, timeout=timeout, allow_redirects=True)
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        raise ImageFetchError(url, f"HTTP {e.response.status_code}") from e
    except requests.exceptions.RequestException as e:
        raise ImageFetchError(url, str(e)) from e
    try:
        return parse_og_image(response.text, response.url or url)
    except Exception as e:
        raise ImageFetchError(url, f"unparseable page: {e}") from e


def fetch_og_image(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Optional[ImagePreview]:
    """Fetch one preview image, or None when the page has none or the fetch fails."""
    try:
        return _fetch_og_metadata(url, timeout)
    except ImageFetchError as e:
        logger.warning("Failed to fetch OG image from %s", e)
        return None


def enrich_images(
    urls_by_platform: dict[str, list[str]],
    max_workers: int = DEFAULT_MAX_WORKERS,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> dict[str, list[ImagePreview]]:
    """
    Fetch previews for every platform's URLs concurrently.

    Returns platform -> successful previews in source order; failed or
    image-less URLs are left out, so a list may be shorter than its URLs.
    """
    tasks = [
        (platform, position, url)
        for platform, urls in urls_by_platform.items()
        for position, url in enumerate(urls)
    ]
    slots: dict[str, list[Optional[ImagePreview]]] = {
        platform: [None] * len(urls) for platform, urls in urls_by_platform.items()
    }
    if not tasks:
        return {platform: [] for platform in urls_by_platform}

    workers = max(1, min(max_workers, len(tasks)))
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_task = {
            executor.submit(fetch_og_image, url, timeout): (platform, position, url)
            for platform, position, url in tasks
        }
        for future in concurrent.futures.as_completed(future_to_task):
            platform, position, url = future_to_task[future]
            try:
                slots[platform][position] = future.result()
            except Exception as e:
                logger.warning("Image enrichment error for %s (%s): %s", url, platform, e)

    return {platform: [img for img in images if img is not None] for platform, images in slots.items()}
