"""최소 RSS item 문법 파서.

피드마다 XML 방언이 달라 엄격한 스키마 검증 대신
<item> 조각 단위 토크나이즈 + 태그명 -> 캡처 그룹 테이블로 필드 추출.
필드가 없거나 깨져 있으면 기본값 사용.

Usage:
    items = parse_items(xml_text, limit=5)
    for item in items:
        print(item.title, item.link, item.pub_date)
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from .text import decode_entities, strip_cdata

DEFAULT_TITLE = "No Title"

_ITEM_RE = re.compile(r"<item\b[^>]*>([\s\S]*?)</item>")

# RssItem 속성 -> XML 태그명
ITEM_FIELDS: dict[str, str] = {
    "title": "title",
    "link": "link",
    "pub_date": "pubDate",
    "description": "description",
    "content": "content:encoded",
}


@dataclass
class RssItem:
    """<item> 하나에서 추출한 원시 필드 (CDATA 제거, trim 완료)."""

    title: str = DEFAULT_TITLE
    link: str = ""
    pub_date: str | None = None
    description: str = ""
    content: str = ""


def _tag_pattern(tag: str) -> re.Pattern[str]:
    name = re.escape(tag)
    return re.compile(rf"<{name}(?:\s[^>]*)?>([\s\S]*?)</{name}>")


class RssItemParser:
    """태그명 -> 캡처 그룹 테이블 기반 item 파서."""

    def __init__(self, fields: dict[str, str] | None = None):
        self._patterns = {attr: _tag_pattern(tag) for attr, tag in (fields or ITEM_FIELDS).items()}

    def capture(self, fragment: str) -> dict[str, str]:
        """조각에서 매칭된 필드만 반환 (CDATA 제거 + trim)."""
        found: dict[str, str] = {}
        for attr, pattern in self._patterns.items():
            m = pattern.search(fragment)
            if m:
                found[attr] = strip_cdata(m.group(1)).strip()
        return found

    def parse(self, fragment: str) -> RssItem:
        found = self.capture(fragment)
        item = RssItem(
            link=decode_entities(found.get("link", "")),
            pub_date=found.get("pub_date"),
            description=found.get("description", ""),
            content=found.get("content", ""),
        )
        if "title" in found:
            item.title = decode_entities(found["title"])
        return item


def iter_items(xml: str) -> Iterator[str]:
    """<item>...</item> 조각 순회."""
    for m in _ITEM_RE.finditer(xml):
        yield m.group(1)


def parse_items(xml: str, limit: int | None = None, parser: RssItemParser | None = None) -> list[RssItem]:
    """문서 전체 파싱. limit 개수까지만."""
    parser = parser or RssItemParser()
    items: list[RssItem] = []
    for fragment in iter_items(xml):
        if limit is not None and len(items) >= limit:
            break
        items.append(parser.parse(fragment))
    return items


def parse_pub_date(raw: str | None, now: datetime | None = None) -> datetime:
    """RFC 822 (RSS 표준) -> ISO-8601 순으로 시도. 실패 시 now."""
    fallback = now or datetime.now(UTC)
    if not raw:
        return fallback

    value = raw.strip()
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return fallback

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
