"""Content transforms shared by the dialect tables.

These are the pieces of the mapping that change a value's shape rather than
just its name: creator strings become creator records and back, a combined
``V(I)`` volume string is split by item type, keyword strings become tag lists.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from bibsync.domain.types import RecordView, Value

CREATOR_SEPARATOR = "; "
TAG_MAX_LENGTH = 100

_VOLUME_ISSUE = re.compile(r"([^(]+)\(([^)]+)\)")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_HTML_BREAK = re.compile(r"<br />")


def creator_role_field(role: str) -> str:
    """Flat field holding creators of ``role`` (``author`` -> ``authors``)."""

    return f"{role}s"


def split_creators(role: str, field: str | None = None) -> Callable[[RecordView], list[Value]]:
    """Return a transform turning ``"Smith, John; Doe"`` into creator records."""

    source = field or creator_role_field(role)

    def transform(record: RecordView) -> list[Value]:
        value = record.get(source)
        if not isinstance(value, str):
            raise TypeError(f"Content in field '{source}' must be string")
        creators: list[Value] = []
        for part in value.split(";"):
            element = part.strip()
            if "," in element and len(element) > 3 and not element.endswith(","):
                family, given = element.split(",", 1)
                creators.append(
                    {"creatorType": role, "lastName": family.strip(), "firstName": given.strip()}
                )
            elif element:
                creators.append({"creatorType": role, "name": element})
        return creators

    return transform


def join_creators(record: RecordView) -> dict[str, Value]:
    """Group creator records by role into flat ``<role>s`` strings."""

    grouped: dict[str, list[str]] = {}
    creators = record.get("creators")
    if not isinstance(creators, list):
        return {}
    for creator in creators:
        if not isinstance(creator, dict):
            continue
        name = creator.get("name")
        if not name:
            name = f"{creator.get('lastName', '')}, {creator.get('firstName', '')}"
        role = str(creator.get("creatorType", "author"))
        grouped.setdefault(creator_role_field(role), []).append(str(name))
    return {field: CREATOR_SEPARATOR.join(names) for field, names in grouped.items()}


def split_lines(field: str, *, separator: str = CREATOR_SEPARATOR) -> Callable[[RecordView], str]:
    """Bookends keeps one name per line; the canonical form is ``;``-separated."""

    def transform(record: RecordView) -> str:
        return separator.join(line for line in str(record.get(field, "")).split("\n") if line)

    return transform


def join_lines(field: str) -> Callable[[RecordView], str]:
    def transform(record: RecordView) -> str:
        parts = (part.strip() for part in str(record.get(field, "")).split(";"))
        return "\n".join(part for part in parts if part)

    return transform


def keywords_to_tags(record: RecordView) -> list[Value]:
    keywords = str(record.get("keywords", ""))
    return [
        {"tag": part.strip()[:TAG_MAX_LENGTH], "type": 1}
        for part in keywords.split(";")
        if part.strip()
    ]


def tags_to_keywords(record: RecordView) -> str:
    tags = record.get("tags")
    if not isinstance(tags, list):
        return ""
    names = (str(tag.get("tag", "")) for tag in tags if isinstance(tag, dict))
    return CREATOR_SEPARATOR.join(name for name in names if name)


def notes_to_html(record: RecordView) -> str:
    return _LINE_BREAK.sub("<br />", str(record.get("notes", "")))


def notes_from_html(record: RecordView) -> str:
    return _HTML_BREAK.sub("\n", str(record.get("notes", "")))


def split_collections(record: RecordView) -> list[Value]:
    return [key for key in str(record.get("collections", "")).split(",") if key]


def join_collections(record: RecordView) -> str:
    collections = record.get("collections")
    if not isinstance(collections, list):
        return ""
    return ",".join(str(key) for key in collections)


def combine_volume(record: RecordView) -> str:
    """Canonical ``volume`` and ``issue`` folded into ``V(I)``."""

    volume = record.get("volume")
    issue = record.get("issue")
    return (f"{volume}" if volume else "") + (f"({issue})" if issue else "")


def issue_without_volume(record: RecordView) -> str | None:
    # the volume rule already carries the issue when both are present
    if record.get("volume"):
        return None
    issue = record.get("issue")
    return f"({issue})" if issue else ""


ARTICLE_TYPES = frozenset({"Journal article", "Newspaper article"})
CHAPTER_TYPES = frozenset({"Book chapter"})


def split_volume(record: RecordView) -> dict[str, Value]:
    """Route a Bookends ``volume`` by item type.

    Chapters keep the containing book's title there; articles keep
    ``volume(issue)``; everything else is a plain volume.
    """

    volume = record.get("volume")
    item_type = record.get("type")
    if item_type in CHAPTER_TYPES:
        return {"bookTitle": volume}
    if item_type in ARTICLE_TYPES:
        match = _VOLUME_ISSUE.search(str(volume))
        if match is not None:
            return {"volume": match.group(1), "issue": match.group(2)}
    return {"volume": volume}
