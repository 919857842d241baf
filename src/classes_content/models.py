"""
Data models for class and subclass ability content.

Sections are immutable value objects produced by the parser; the result
containers mirror what the character tracker UI consumes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SectionOrigin(str, Enum):
    """Where a section comes from: the base class or a subclass document."""
    CLASS = "class"
    SUBCLASS = "subclass"


class AbilitySection(BaseModel):
    """A titled, leveled block of ability text.

    Attributes:
        level: Level at which the ability is gained (0 when the heading
               carries no level indication)
        title: Heading text without Markdown markers or trailing colons
        content: Body text under the heading
        origin: Class or subclass document
    """
    model_config = ConfigDict(frozen=True)

    level: int = Field(default=0, ge=0, description="Level indicated in the heading")
    title: str = Field(default="", description="Section title")
    content: str = Field(default="", description="Section body (Markdown)")
    origin: SectionOrigin = Field(..., description="Class or subclass origin")


class AbilitySectionsResult(BaseModel):
    """Sorted sections for a (class, subclass) request."""

    sections: list[AbilitySection] = Field(default_factory=list)


class ClassAndSubclassContent(BaseModel):
    """Class sections plus the sections of each requested subclass.

    `sections` holds class sections followed by subclass sections in the
    order the subclasses were requested.
    """

    class_name: str = Field(description="Canonical class name")
    subclasses_requested: list[str] = Field(
        default_factory=list, description="Canonical subclass names, in request order"
    )
    sections: list[AbilitySection] = Field(default_factory=list)
    class_sections: list[AbilitySection] = Field(default_factory=list)
    subclass_sections: dict[str, list[AbilitySection]] = Field(default_factory=dict)


class ClassAliasEntry(BaseModel):
    """One class in the alias table.

    Attributes:
        canonical: Display name, also the primary repository folder name
        aliases: Accepted spellings (matched after normalization)
        legacy_folders: Older folder names still used by the repository
    """
    canonical: str = Field(..., min_length=1)
    aliases: list[str] = Field(default_factory=list)
    legacy_folders: list[str] = Field(default_factory=list)


class SubclassAliasEntry(BaseModel):
    """One subclass in the alias table."""

    model_config = ConfigDict(populate_by_name=True)

    canonical: str = Field(..., min_length=1, description="Exact repository spelling")
    class_name: str = Field(..., alias="class", description="Owning canonical class")
    aliases: list[str] = Field(default_factory=list)


class SubclassOption(BaseModel):
    """A selectable subclass for a class."""

    key: str = Field(description="Normalized lookup key")
    label: str = Field(description="Canonical display name")
    class_name: str = Field(description="Canonical class name")


class CacheStats(BaseModel):
    """Counters for the resolution cache.

    Attributes:
        positive_entries: Locations with cached content
        negative_entries: Locations currently recorded as failed
        hit_count: Lookups served from the positive cache
        skip_count: Candidates skipped because of a fresh negative entry
        fetch_count: Network retrievals attempted
        failure_count: Retrievals that failed (non-2xx or transport error)
    """
    positive_entries: int = 0
    negative_entries: int = 0
    hit_count: int = 0
    skip_count: int = 0
    fetch_count: int = 0
    failure_count: int = 0


__all__ = [
    "SectionOrigin",
    "AbilitySection",
    "AbilitySectionsResult",
    "ClassAndSubclassContent",
    "ClassAliasEntry",
    "SubclassAliasEntry",
    "SubclassOption",
    "CacheStats",
]
