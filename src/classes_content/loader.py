"""
ClassesContentLoader - resolves and parses class and subclass documents.

This module composes name canonicalization, candidate generation, cached
retrieval and parsing into the operations used by the character tracker.
"""

from __future__ import annotations

import logging

import httpx

from .aggregator import merge_sections
from .cache import ResolutionCache
from .candidates import build_class_candidates, build_subclass_candidates
from .config import ContentConfig
from .fetcher import ContentFetcher
from .models import (
    AbilitySection,
    AbilitySectionsResult,
    CacheStats,
    ClassAndSubclassContent,
    SectionOrigin,
    SubclassOption,
)
from .names import NameCanonicalizer
from .parser import parse_sections

logger = logging.getLogger("classes-content")


class ClassesContentLoader:
    """Entry point for class and subclass ability content.

    Class and subclass documents are resolved independently, each walk
    stopping at its first hit. Nothing is filtered by character level;
    callers decide which sections to show.

    Usage:
        loader = ClassesContentLoader()
        result = await loader.load_ability_sections("Occultiste", "Protecteur Fiélon")
        for section in result.sections:
            print(section.level, section.title)
    """

    def __init__(
        self,
        config: ContentConfig | None = None,
        canonicalizer: NameCanonicalizer | None = None,
        cache: ResolutionCache | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            config: Repository roots, cache TTL and transport settings
            canonicalizer: Alias tables; the packaged tables when omitted
            cache: Resolution cache; a fresh one owned by this loader when omitted
            client: Optional shared HTTP client (owned by the caller)
        """
        self.config = config or ContentConfig()
        self.names = canonicalizer or NameCanonicalizer()
        self.cache = cache or ResolutionCache(negative_ttl=self.config.negative_ttl)
        self.fetcher = ContentFetcher(self.cache, client=client, timeout=self.config.request_timeout)

    # =========================================================================
    # Candidates
    # =========================================================================

    def class_candidates(self, class_name: str) -> list[str]:
        """URLs tried for a class document, in priority order."""
        folders = self.names.class_folder_names(class_name)
        return build_class_candidates(self.config.raw_bases, folders)

    def subclass_candidates(self, class_name: str, subclass_name: str) -> list[str]:
        """URLs tried for a subclass document, in priority order.

        Every candidate for the canonical name comes first, then the
        candidates for each alias spelling of that subclass.
        """
        class_canonical = self.names.canonicalize_class(class_name)
        spellings = self.names.subclass_spellings(class_canonical, subclass_name)
        if not class_canonical or not spellings:
            return []
        folders = self.names.class_folder_names(class_canonical)
        urls: list[str] = []
        for spelling in spellings:
            urls.extend(build_subclass_candidates(self.config.raw_bases, folders, spelling))
        return list(dict.fromkeys(urls))

    # =========================================================================
    # Raw documents
    # =========================================================================

    async def load_class_markdown(self, class_name: str) -> str | None:
        return await self.fetcher.resolve_first(
            self.class_candidates(class_name), label=f"class:{class_name}"
        )

    async def load_subclass_markdown(self, class_name: str, subclass_name: str) -> str | None:
        return await self.fetcher.resolve_first(
            self.subclass_candidates(class_name, subclass_name),
            label=f"subclass:{class_name}/{subclass_name}",
        )

    # =========================================================================
    # Sections
    # =========================================================================

    async def load_class_sections(self, class_name: str) -> list[AbilitySection]:
        """Sections of a class document in document order, [] when not found."""
        markdown = await self.load_class_markdown(class_name)
        if not markdown:
            return []
        return parse_sections(markdown, SectionOrigin.CLASS)

    async def load_subclass_sections(self, class_name: str, subclass_name: str) -> list[AbilitySection]:
        """Sections of a subclass document in document order, [] when not found."""
        markdown = await self.load_subclass_markdown(class_name, subclass_name)
        if not markdown:
            return []
        return parse_sections(markdown, SectionOrigin.SUBCLASS)

    async def load_class_and_subclass_content(
        self,
        class_name: str,
        subclass_names: list[str] | None = None,
    ) -> ClassAndSubclassContent:
        """Class sections plus the sections of every requested subclass.

        `sections` keeps document order: class sections, then each
        subclass in request order. Use `load_ability_sections` for the
        level-sorted view.
        """
        class_canonical = self.names.canonicalize_class(class_name)
        class_sections = await self.load_class_sections(class_canonical)

        requested: list[str] = []
        per_subclass: dict[str, list[AbilitySection]] = {}
        for name in subclass_names or []:
            if not name or not name.strip():
                continue
            subclass_canonical = self.names.canonicalize_subclass(class_canonical, name)
            requested.append(subclass_canonical)
            per_subclass[subclass_canonical] = await self.load_subclass_sections(
                class_canonical, subclass_canonical
            )

        sections = list(class_sections)
        for subclass_canonical in requested:
            sections.extend(per_subclass.get(subclass_canonical, []))

        return ClassAndSubclassContent(
            class_name=class_canonical,
            subclasses_requested=requested,
            sections=sections,
            class_sections=class_sections,
            subclass_sections=per_subclass,
        )

    async def load_ability_sections(
        self,
        class_name: str,
        subclass_name: str | None = None,
        character_level: int | None = None,
    ) -> AbilitySectionsResult:
        """Level-sorted class and subclass sections.

        The class document is always resolved; the subclass document only
        when a non-blank subclass name is given. `character_level` is
        accepted for compatibility with existing callers and does not
        filter anything.
        """
        class_sections = await self.load_class_sections(class_name)

        subclass_sections: list[list[AbilitySection]] = []
        if subclass_name and subclass_name.strip():
            subclass_sections.append(await self.load_subclass_sections(class_name, subclass_name))

        sections = merge_sections(class_sections, subclass_sections)
        if not sections:
            logger.debug(f"No ability content for {class_name!r} / {subclass_name!r}")
        return AbilitySectionsResult(sections=sections)

    # =========================================================================
    # Utils
    # =========================================================================

    def display_class_name(self, class_name: str | None) -> str:
        return self.names.display_class_name(class_name)

    def list_subclasses(self, class_name: str) -> list[SubclassOption]:
        return self.names.subclasses_for_class(class_name)

    @property
    def last_attempts(self) -> list[str]:
        """URLs requested over the network by the most recent document lookup.

        Locations skipped by the negative cache or served from the positive
        cache are not listed.
        """
        return list(self.fetcher.attempted)

    def reset_cache(self) -> None:
        """Clear both cache tiers."""
        self.cache.clear()

    def cache_stats(self) -> CacheStats:
        return self.cache.get_stats()


__all__ = ["ClassesContentLoader"]
