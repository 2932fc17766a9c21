# Best-effort structural scan of raw HTML.
# Never raises on malformed markup: missing pieces become sentinels or empty tuples.
# Relative URLs are returned as written; nothing is resolved or validated.

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from .types import NO_META_DESCRIPTION, NO_TITLE, PageFeatures

_HEADING_TAG = re.compile(r"^h[1-6]$")


def extract_title(soup: BeautifulSoup) -> str:
    tag = soup.find("title")
    if tag is None:
        return NO_TITLE
    return tag.get_text().strip() or NO_TITLE


def extract_meta_description(soup: BeautifulSoup) -> str:
    for meta in soup.find_all("meta"):
        name = (meta.get("name") or "").strip().lower()
        if name != "description":
            continue
        content = (meta.get("content") or "").strip()
        return content or NO_META_DESCRIPTION
    return NO_META_DESCRIPTION


def extract_headings(soup: BeautifulSoup) -> list[str]:
    return [h.get_text().strip() for h in soup.find_all(_HEADING_TAG)]


def _attr_values(soup: BeautifulSoup, tag: str, attr: str) -> list[str]:
    out = []
    for el in soup.find_all(tag):
        value = el.get(attr)
        if value:
            out.append(value)
    return out


def extract_features(html: str) -> PageFeatures:
    """
    Pull title, meta description, headings, image sources and link targets
    out of `html`, each in document order.
    html.parser lowercases tag and attribute names, so matching is case-insensitive.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    return PageFeatures(
        title=extract_title(soup),
        meta_description=extract_meta_description(soup),
        headings=tuple(extract_headings(soup)),
        images=tuple(_attr_values(soup, "img", "src")),
        links=tuple(_attr_values(soup, "a", "href")),
    )
