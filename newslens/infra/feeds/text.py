"""Text Normalizer - 피드 본문의 마크업/엔티티/URL 제거.

Usage:
    title = decode_entities(strip_cdata(raw_title)).strip()
    description = clean_description(raw_description)  # <= 180자 + "..."
"""

import re

from bs4 import BeautifulSoup

DESCRIPTION_LIMIT = 180
ELLIPSIS = "..."

_CDATA_RE = re.compile(r"<!\[CDATA\[([\s\S]*?)\]\]>")
_URL_RE = re.compile(r"https?://\S+")

# 최소 엔티티 집합 (곡선 따옴표는 직선 따옴표로)
_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&rsquo;": "'",
    "&lsquo;": "'",
    "&rdquo;": '"',
    "&ldquo;": '"',
    "&nbsp;": " ",
}
_ENTITY_RE = re.compile("|".join(re.escape(e) for e in _ENTITIES))

# BeautifulSoup 이 이미 디코딩한 문자를 동일 규칙으로 정규화
_DECODED_TRANSLATION = str.maketrans(
    {
        "‘": "'",
        "’": "'",
        "“": '"',
        "”": '"',
        "\xa0": " ",
    }
)


def strip_cdata(text: str) -> str:
    """<![CDATA[...]]> 래퍼 제거 (내용 유지)."""
    return _CDATA_RE.sub(r"\1", text)


def decode_entities(text: str) -> str:
    """최소 HTML 엔티티 집합 디코딩 (단일 패스, 이중 디코딩 없음)."""
    return _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(0)], text)


def strip_markup(html: str) -> str:
    """<style>/<script> 블록 제거 후 나머지 태그 제거. 엔티티는 디코딩됨."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["style", "script"]):
        tag.decompose()
    return soup.get_text().translate(_DECODED_TRANSLATION)


def truncate(text: str, limit: int = DESCRIPTION_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def clean_description(html: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """피드 description 정규화.

    style/script 제거 -> 태그 제거 -> 엔티티 디코딩 -> bare URL 제거 -> trim -> 길이 제한.
    """
    if not html:
        return ""
    text = strip_markup(html)
    text = _URL_RE.sub("", text)
    return truncate(text.strip(), limit)
