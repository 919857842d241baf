"""
Class and subclass content resolution for the character tracker.

Resolves free-form class/subclass names against the Markdown content
repository, caches hits and misses, and parses documents into leveled
ability sections.

Usage:
    from classes_content import load_ability_sections

    result = await load_ability_sections("Occultiste", "Protecteur Fiélon")

The module-level functions share one default `ClassesContentLoader`
configured from the environment; create a loader directly for custom
roots, an injected HTTP client or an isolated cache.
"""

from __future__ import annotations

from .aggregator import merge_sections, sort_sections
from .cache import ResolutionCache
from .candidates import build_class_candidates, build_subclass_candidates, subclass_dir_names
from .config import ContentConfig
from .exceptions import AliasTableError, ClassesContentError, ConfigError
from .fetcher import ContentFetcher
from .loader import ClassesContentLoader
from .models import (
    AbilitySection,
    AbilitySectionsResult,
    CacheStats,
    ClassAndSubclassContent,
    SectionOrigin,
    SubclassOption,
)
from .names import NameCanonicalizer, build_name_variants, normalize
from .parser import parse_sections

_default_loader: ClassesContentLoader | None = None


def get_default_loader() -> ClassesContentLoader:
    """Shared loader, created from the environment on first use."""
    global _default_loader
    if _default_loader is None:
        config = ContentConfig.from_env()
        config.apply_logging()
        _default_loader = ClassesContentLoader(config)
    return _default_loader


async def load_class_sections(class_name: str) -> list[AbilitySection]:
    return await get_default_loader().load_class_sections(class_name)


async def load_subclass_sections(class_name: str, subclass_name: str) -> list[AbilitySection]:
    return await get_default_loader().load_subclass_sections(class_name, subclass_name)


async def load_class_and_subclass_content(
    class_name: str, subclass_names: list[str] | None = None
) -> ClassAndSubclassContent:
    return await get_default_loader().load_class_and_subclass_content(class_name, subclass_names)


async def load_ability_sections(
    class_name: str,
    subclass_name: str | None = None,
    character_level: int | None = None,
) -> AbilitySectionsResult:
    return await get_default_loader().load_ability_sections(class_name, subclass_name, character_level)


def display_class_name(class_name: str | None) -> str:
    return get_default_loader().display_class_name(class_name)


def reset_classes_content_cache() -> None:
    """Clear the default loader's cache (both tiers)."""
    if _default_loader is not None:
        _default_loader.reset_cache()


__all__ = [
    # Loader
    "ClassesContentLoader",
    "get_default_loader",
    "load_class_sections",
    "load_subclass_sections",
    "load_class_and_subclass_content",
    "load_ability_sections",
    "display_class_name",
    "reset_classes_content_cache",
    # Building blocks
    "NameCanonicalizer",
    "normalize",
    "build_name_variants",
    "build_class_candidates",
    "build_subclass_candidates",
    "subclass_dir_names",
    "ResolutionCache",
    "ContentFetcher",
    "parse_sections",
    "merge_sections",
    "sort_sections",
    "ContentConfig",
    # Models
    "AbilitySection",
    "AbilitySectionsResult",
    "ClassAndSubclassContent",
    "SectionOrigin",
    "SubclassOption",
    "CacheStats",
    # Errors
    "ClassesContentError",
    "ConfigError",
    "AliasTableError",
]
