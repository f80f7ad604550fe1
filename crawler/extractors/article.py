"""
Utilities for extracting the detail fields of a single article page.
"""
from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup, Tag

from crawler.schemas.models import ArticleDetail

# Sidebar headings that share the title selector on the article template.
TITLE_NOISE = ("Berita Lainnya", "Kalender Pendataan", "Foto Gallery")


def _parents(soup: BeautifulSoup, selector: str) -> List[Tag]:
    seen = set()
    parents: List[Tag] = []
    for icon in soup.select(selector):
        parent = icon.parent
        if parent is None or id(parent) in seen:
            continue
        seen.add(id(parent))
        parents.append(parent)
    return parents


def _labelled_text(soup: BeautifulSoup, selector: str, label: str, first_only: bool = False) -> str:
    parents = _parents(soup, selector)
    if first_only:
        parents = parents[:1]
    text = "".join(parent.get_text() for parent in parents).strip()
    return text.replace(label, "", 1).strip()


def parse_article(html: str) -> ArticleDetail:
    soup = BeautifulSoup(html, "lxml")

    title = "".join(node.get_text() for node in soup.select("h2:nth-child(1)"))
    for noise in TITLE_NOISE:
        title = title.replace(noise, "")

    content = " ".join(p.get_text() for p in soup.find_all("p"))

    return ArticleDetail(
        title=title,
        author=_labelled_text(soup, ".glyphicon-user", "Diposkan Oleh :"),
        date=_labelled_text(soup, ".glyphicon-calendar", "Tanggal :", first_only=True),
        content=content,
        category=_labelled_text(soup, ".glyphicon-tag", "Kategori :"),
    )
