"""
Markdown to ability sections.

Class documents are loosely structured Markdown. Features are introduced by
`###` headings in most files and by `##` headings in older ones; the level
at which a feature is gained is embedded in the heading text in French or
English ("Niveau 3 : ...", "Niv. 6", "Level 7", "Au niveau 10").
"""

from __future__ import annotations

import re

from .models import AbilitySection, SectionOrigin

GENERAL_TITLE = "Général"

_H3_SPLIT_RE = re.compile(r"\n(?=###\s+)")
_H2_SPLIT_RE = re.compile(r"\n(?=##\s+)")
_HEADING_RE = re.compile(r"^#{2,3}\s+")
_LEADING_HASHES_RE = re.compile(r"^#+\s*")
_TRAILING_COLONS_RE = re.compile(r"\s*:+\s*$")

# Tried in order; the first match gives the level
LEVEL_PATTERNS = [
    re.compile(r"\bNiveau\s*(\d+)\b", re.IGNORECASE),
    re.compile(r"\bNiv\.?\s*(\d+)\b", re.IGNORECASE),
    re.compile(r"\bLevel\s*(\d+)\b", re.IGNORECASE),
    re.compile(r"\bLvl\.?\s*(\d+)\b", re.IGNORECASE),
    re.compile(r"\bAu\s+niveau\s+(\d+)\b", re.IGNORECASE),
]


def extract_level(title: str) -> int:
    """Level embedded in a heading, 0 when none is recognized.

    Example:
        >>> extract_level("Niveau 3 : Sous-classe")
        3
        >>> extract_level("Capacités de classe")
        0
    """
    for pattern in LEVEL_PATTERNS:
        match = pattern.search(title or "")
        if match:
            return int(match.group(1))
    return 0


def clean_title(raw: str) -> str:
    """Strip heading markers and trailing colons: "### Niveau 1 :" -> "Niveau 1"."""
    title = _LEADING_HASHES_RE.sub("", raw or "")
    title = _TRAILING_COLONS_RE.sub("", title)
    return title.strip()


def split_chunks(text: str) -> list[str]:
    """Split a document at `###` headings, falling back to `##`.

    The deeper depth wins whenever it produces more than one chunk. In a
    document mixing both depths, `##` headings then stay inside the chunk
    they fall in.
    """
    chunks = _H3_SPLIT_RE.split(text)
    if len(chunks) > 1:
        return chunks
    return _H2_SPLIT_RE.split(text)


def parse_sections(markdown: str | None, origin: SectionOrigin | str) -> list[AbilitySection]:
    """Parse a class or subclass document into sections.

    Never raises on malformed input: text before the first heading becomes a
    level 0 "Général" section, unrecognized levels default to 0 and chunks
    with neither title nor content are dropped.

    Args:
        markdown: Raw document text
        origin: Origin tag applied to every produced section

    Returns:
        Sections in document order
    """
    if not markdown or not isinstance(markdown, str):
        return []

    origin = SectionOrigin(origin)
    text = markdown.replace("\r\n", "\n")
    sections: list[AbilitySection] = []

    for chunk in split_chunks(text):
        lines = chunk.split("\n")
        first = lines[0] if lines else ""

        if not _HEADING_RE.match(first):
            content = chunk.strip()
            if content:
                sections.append(
                    AbilitySection(level=0, title=GENERAL_TITLE, content=content, origin=origin)
                )
            continue

        title = clean_title(first)
        body = "\n".join(lines[1:]).strip()
        if not title and not body:
            continue
        sections.append(
            AbilitySection(level=extract_level(title), title=title, content=body, origin=origin)
        )

    return sections


__all__ = ["parse_sections", "extract_level", "clean_title", "split_chunks", "GENERAL_TITLE"]
