"""
Merging and ordering of class and subclass sections.
"""

from __future__ import annotations

import unicodedata
from typing import Iterable

from .models import AbilitySection, SectionOrigin

_ORIGIN_RANK = {SectionOrigin.CLASS: 0, SectionOrigin.SUBCLASS: 1}


def collation_key(title: str) -> tuple[str, str]:
    """Sort key approximating French locale order.

    Primary comparison ignores accents and case ("Évasion" sorts with
    "evasion", before "Frappe"); the original title breaks remaining ties.
    """
    decomposed = unicodedata.normalize("NFKD", title or "")
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), title or ""


def section_sort_key(section: AbilitySection) -> tuple:
    return (section.level, _ORIGIN_RANK[section.origin], collation_key(section.title))


def sort_sections(sections: Iterable[AbilitySection]) -> list[AbilitySection]:
    """Stable sort: level, then class before subclass, then title."""
    return sorted(sections, key=section_sort_key)


def merge_sections(
    class_sections: Iterable[AbilitySection],
    subclass_sections: Iterable[Iterable[AbilitySection]] = (),
) -> list[AbilitySection]:
    """Concatenate class sections with each subclass list, then sort.

    Args:
        class_sections: Sections parsed from the class document
        subclass_sections: One section list per subclass, in request order
    """
    merged = list(class_sections)
    for sections in subclass_sections:
        merged.extend(sections)
    return sort_sections(merged)


__all__ = ["merge_sections", "sort_sections", "collation_key", "section_sort_key"]
