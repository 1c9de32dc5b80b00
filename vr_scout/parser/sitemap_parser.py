# File: vr_scout/parser/sitemap_parser.py
"""vr_scout.parser.sitemap_parser: Разбор sitemap.xml (urlset / sitemapindex)."""

from __future__ import annotations

from typing import List, Union

from lxml import etree

from vr_scout.crawler.models import SitemapDocument
from vr_scout.errors import ParseError

_ENTRY_TAG = {"urlset": "url", "sitemapindex": "sitemap"}


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return etree.QName(tag).localname


def parse_sitemap(xml_content: Union[str, bytes]) -> SitemapDocument:
    """Разбирает XML sitemap и возвращает SitemapDocument.

    Args:
        xml_content: содержимое sitemap.xml или sitemap index. Байты
            передаются lxml как есть, поэтому действует объявленная в XML
            кодировка; уже декодированная строка разбирается как UTF-8.

    Returns:
        SitemapDocument вида ``urlset`` (URL страниц), ``sitemapindex``
        (URL дочерних sitemap) или ``empty`` для неизвестного корня.

    Raises:
        ParseError: пустой ввод или текст, не являющийся XML.

    Пример:
    ```python
    doc = parse_sitemap(text)
    if doc.is_index:
        children = doc.locations
    ```
    """
    if not xml_content or not xml_content.strip():
        raise ParseError("Empty XML content")

    if isinstance(xml_content, str):
        # the text is already decoded; an encoding declaration inside it is stale
        data, encoding = xml_content.strip().encode("utf-8"), "utf-8"
    else:
        data, encoding = xml_content.strip(), None

    parser = etree.XMLParser(
        encoding=encoding, ns_clean=True, recover=True, resolve_entities=False, no_network=True
    )
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise ParseError(f"Malformed XML: {exc}") from exc
    if root is None:
        raise ParseError("Document has no root element")

    kind = _local_name(root.tag)
    entry = _ENTRY_TAG.get(kind)
    if entry is None:
        return SitemapDocument("empty")

    locations: List[str] = []
    # ./{*}url/{*}loc: one <loc> per entry, namespaced or not
    for loc in root.findall(f"./{{*}}{entry}/{{*}}loc"):
        if loc.text and loc.text.strip():
            locations.append(loc.text.strip())
    return SitemapDocument(kind, tuple(locations))  # type: ignore[arg-type]


__all__ = ["parse_sitemap"]
