"""
Candidate URL generation for class and subclass documents.

The content repository is not internally consistent: class folders exist
under several names, subclass folders use several conventions, and subclass
files are named with different prefixes and dash glyphs. These functions
expand a canonical name into every location worth trying, in priority order.
All functions are pure; the list position of a URL is its priority.
"""

from __future__ import annotations

from typing import Iterable, Iterator
from urllib.parse import quote

from .names import build_name_variants

# Observed subclass folder conventions, most common first
SUBCLASS_DIR_NAMES = (
    "Subclasses",
    "Sous-classes",
    "Sous classes",
    "SousClasses",
    "SubClasses",
    "Sous_Classes",
)

CLASS_FILE_FALLBACKS = ("README.md", "index.md")
NESTED_FILES = ("README.md", "index.md")

BEST_PREFIX = "Sous-classe"
LEGACY_PREFIXES = ("Sous classe", "Subclass", "Sous-Classe")

HYPHEN = "-"
EN_DASH = "–"
EM_DASH = "—"
DASHES = (HYPHEN, EN_DASH, EM_DASH)

# Same unreserved set as JavaScript's encodeURIComponent
_SEGMENT_SAFE = "!~*'()"


def url_join(base: str, *segments: str) -> str:
    """Join a base URL and raw path segments, percent-encoding each segment.

    The base is used as-is apart from trailing slashes.

    Example:
        >>> url_join("https://host/Classes/", "Rôdeur", "Rôdeur.md")
        'https://host/Classes/R%C3%B4deur/R%C3%B4deur.md'
    """
    encoded = [quote(segment, safe=_SEGMENT_SAFE) for segment in segments]
    return "/".join([base.rstrip("/"), *encoded])


def subclass_dir_names() -> list[str]:
    return list(SUBCLASS_DIR_NAMES)


def _dedupe(urls: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(urls))


def build_class_candidates(roots: Iterable[str], class_folders: Iterable[str]) -> list[str]:
    """Candidate URLs for a class document.

    For every root and folder name: `<folder>/<folder>.md` (the layout the
    repository actually uses), then `README.md` and `index.md`.

    Args:
        roots: Repository roots, in priority order
        class_folders: Folder names for the class (see
            `NameCanonicalizer.class_folder_names`)
    """
    folders = list(class_folders)

    def generate() -> Iterator[str]:
        for root in roots:
            for folder in folders:
                yield url_join(root, folder, f"{folder}.md")
                for fallback in CLASS_FILE_FALLBACKS:
                    yield url_join(root, folder, fallback)

    return _dedupe(generate())


def _prefixed(prefix: str, name: str) -> list[str]:
    return [f"{prefix} {dash} {name}" for dash in DASHES]


def build_subclass_candidates(
    roots: Iterable[str],
    class_folders: Iterable[str],
    subclass_name: str,
) -> list[str]:
    """Candidate URLs for a subclass document.

    For every root, class folder and subclass folder convention, in order:

    1. `Sous-classe <dash> <name>.md` with hyphen, en dash and em dash,
       then `<name>.md`, for each name variant
    2. the same prefixed forms with legacy prefixes
    3. nested folders: `<name>/README.md`, `<name>/index.md` (also with the
       prefixed folder name) and `<name>/<name>.md`

    then, once the subclass folders of a class folder are exhausted,
    `<classFolder>/<name>.md` for each name variant.

    Args:
        roots: Repository roots, in priority order
        class_folders: Folder names for the owning class
        subclass_name: Canonical subclass name
    """
    folders = list(class_folders)
    names = build_name_variants(subclass_name)
    if not names:
        return []

    def generate() -> Iterator[str]:
        for root in roots:
            for folder in folders:
                for subdir in SUBCLASS_DIR_NAMES:
                    for name in names:
                        for stem in _prefixed(BEST_PREFIX, name):
                            yield url_join(root, folder, subdir, f"{stem}.md")
                        yield url_join(root, folder, subdir, f"{name}.md")

                    for name in names:
                        for prefix in LEGACY_PREFIXES:
                            for stem in _prefixed(prefix, name):
                                yield url_join(root, folder, subdir, f"{stem}.md")

                    for name in names:
                        for nested in _dedupe([name, *_prefixed(BEST_PREFIX, name)]):
                            for filename in NESTED_FILES:
                                yield url_join(root, folder, subdir, nested, filename)
                            yield url_join(root, folder, subdir, name, f"{name}.md")

                for name in names:
                    yield url_join(root, folder, f"{name}.md")

    return _dedupe(generate())
