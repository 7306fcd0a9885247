"""Feed infrastructure - RSS item parser, text normalizer."""

from .rss import RssItem, RssItemParser, iter_items, parse_items, parse_pub_date
from .text import clean_description, decode_entities, strip_cdata

__all__ = [
    "RssItem",
    "RssItemParser",
    "iter_items",
    "parse_items",
    "parse_pub_date",
    "clean_description",
    "decode_entities",
    "strip_cdata",
]
