"""
Class and subclass name canonicalization with accent normalization.

Free-form names typed by players ("warlock", "Rodeur", "protecteur fielon")
are mapped onto the canonical French names used as folder and file names in
the content repository.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from pathlib import Path

import yaml
from pydantic import ValidationError

from .exceptions import AliasTableError
from .models import ClassAliasEntry, SubclassAliasEntry, SubclassOption

logger = logging.getLogger("classes-content")

DEFAULT_ALIASES_PATH = Path(__file__).parent / "data" / "aliases.yaml"

# Words kept lowercase by French title case, except in first position
SMALL_WORDS = frozenset({"de", "des", "du", "la", "le", "les", "et", "d'", "l'"})

_PAREN_RE = re.compile(r"\s*\([^)]*\)\s*")
_PUNCT_RE = re.compile(r"[\W_]+")
_MULTI_SPACE_RE = re.compile(r"\s{2,}")
_WHITESPACE_SPLIT_RE = re.compile(r"(\s+)")
# "Serment de dévotion" is stored as "de Dévotion" in some file names
_DEVOTION_RE = re.compile(r"(de)\s+(d[ée]votion)", re.IGNORECASE)


def strip_diacritics(text: str | None) -> str:
    """Remove combining accents: "Rôdeur" -> "Rodeur"."""
    decomposed = unicodedata.normalize("NFD", text or "")
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_apostrophes(text: str | None) -> str:
    return (text or "").replace("’", "'")


def strip_parentheses(text: str | None) -> str:
    """Remove parenthesized asides: "Clerc (prêtre)" -> "Clerc"."""
    without = _PAREN_RE.sub(" ", text or "")
    return _MULTI_SPACE_RE.sub(" ", without).strip()


def normalize(text: str | None) -> str:
    """Normalize a name into an alias-table lookup key.

    Lowercases, strips accents and parenthetical content, turns punctuation
    into spaces and collapses whitespace.

    Example:
        >>> normalize("  Voie de l’Arbre-Monde (2024) ")
        'voie de l arbre monde'
    """
    if not text:
        return ""
    key = strip_diacritics(text.lower())
    key = _PAREN_RE.sub(" ", key)
    key = _PUNCT_RE.sub(" ", key)
    return " ".join(key.split())


def title_case_fr(text: str | None) -> str:
    """French title case: "voie du coeur sauvage" -> "Voie du Coeur Sauvage"."""
    parts = _WHITESPACE_SPLIT_RE.split((text or "").strip())
    out = []
    for idx, part in enumerate(parts):
        if not part or part.isspace():
            out.append(part)
            continue
        lowered = part.lower()
        if idx != 0 and lowered in SMALL_WORDS:
            out.append(lowered)
            continue
        out.append(lowered[:1].upper() + lowered[1:])
    return "".join(out)


def sentence_case_fr(text: str | None) -> str:
    """First letter capitalized, rest lowercase: "Collège du savoir"."""
    lowered = (text or "").strip().lower()
    if not lowered:
        return lowered
    return lowered[:1].upper() + lowered[1:]


def _uniq(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _devotion_variant(text: str) -> str:
    return _DEVOTION_RE.sub("de Dévotion", text, count=1)


def build_name_variants(name: str | None) -> list[str]:
    """Textual forms of a name to try as file or folder names.

    Order matters: it is the resolution priority. Forms come as raw,
    lowercase, title case and sentence case, then the same four without
    parentheses and with normalized apostrophes, then the "de Dévotion"
    spelling of each, then the unaccented counterparts.
    """
    base = (name or "").strip()
    if not base:
        return []

    no_paren = strip_parentheses(base)
    apos = normalize_apostrophes(base)

    with_accents = []
    for form in (base, no_paren, apos):
        with_accents.extend([
            form,
            form.lower(),
            title_case_fr(form),
            sentence_case_fr(form),
        ])
    no_accents = [strip_diacritics(v) for v in with_accents]

    with_devotion = _uniq(with_accents + [_devotion_variant(v) for v in with_accents])
    variants = _uniq(with_devotion + no_accents + [_devotion_variant(v) for v in no_accents])
    return [v for v in variants if v]


class NameCanonicalizer:
    """Maps free-form class and subclass names to canonical names.

    Backed by two independent alias tables loaded from YAML. Class lookups
    only consult the class table and subclass lookups only the subclass
    table, so a name present in both ("Voleur") resolves according to the
    kind of lookup requested.

    Example:
        >>> names = NameCanonicalizer()
        >>> names.canonicalize_class("warlock")
        'Occultiste'
        >>> names.canonicalize_subclass("Occultiste", "protecteur fielon")
        'Protecteur Fiélon'
    """

    def __init__(self, path: Path | None = None) -> None:
        self._class_lookup: dict[str, str] = {}
        self._legacy_folders: dict[str, list[str]] = {}
        self._subclass_lookup: dict[str, str] = {}
        self._subclasses: list[SubclassAliasEntry] = []
        self._subclass_entries: dict[str, SubclassAliasEntry] = {}
        self.load_yaml(path or DEFAULT_ALIASES_PATH)

    def load_yaml(self, path: Path) -> None:
        """Load both alias tables from a YAML file.

        Expected format:
            classes:
              - canonical: Occultiste
                aliases: [warlock, sorcier]
                legacy_folders: [Sorcier, Warlock]
            subclasses:
              - canonical: Protecteur Fiélon
                class: Occultiste
                aliases: [The Fiend, Fiend]

        Raises:
            AliasTableError: If the file is missing or malformed
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise AliasTableError(f"Cannot read alias table: {e}", path=str(path)) from e
        except yaml.YAMLError as e:
            raise AliasTableError(f"Malformed alias table: {e}", path=str(path)) from e

        if not isinstance(data, dict) or "classes" not in data:
            raise AliasTableError("Alias table must contain a 'classes' key", path=str(path))

        try:
            classes = [ClassAliasEntry(**entry) for entry in data.get("classes") or []]
            subclasses = [SubclassAliasEntry(**entry) for entry in data.get("subclasses") or []]
        except (TypeError, ValidationError) as e:
            raise AliasTableError(f"Invalid alias entry: {e}", path=str(path)) from e

        self._class_lookup.clear()
        self._legacy_folders.clear()
        self._subclass_lookup.clear()

        for entry in classes:
            for variant in [entry.canonical, *entry.aliases]:
                self._register(self._class_lookup, variant, entry.canonical, "class")
            self._legacy_folders[entry.canonical] = list(entry.legacy_folders)

        for entry in subclasses:
            for variant in [entry.canonical, *entry.aliases]:
                self._register(self._subclass_lookup, variant, entry.canonical, "subclass")
        self._subclasses = subclasses
        self._subclass_entries = {}
        for entry in subclasses:
            self._subclass_entries.setdefault(entry.canonical, entry)

        logger.info(
            f"Loaded alias tables: {len(classes)} classes, {len(subclasses)} subclasses"
        )

    @staticmethod
    def _register(table: dict[str, str], variant: str, canonical: str, kind: str) -> None:
        key = normalize(variant)
        if not key:
            return
        existing = table.get(key)
        if existing and existing != canonical:
            # First entry wins
            logger.warning(
                f"Ambiguous {kind} alias '{variant}': keeps '{existing}', ignores '{canonical}'"
            )
            return
        table[key] = canonical

    def canonicalize_class(self, name: str | None) -> str:
        """Canonical class name, or a French title-cased form of unknown input."""
        if not name or not name.strip():
            return ""
        return self._class_lookup.get(normalize(name)) or title_case_fr(name)

    def canonicalize_subclass(self, class_name: str | None, name: str | None) -> str:
        """Canonical subclass name, or a French title-cased form of unknown input.

        `class_name` is part of the signature for symmetry with the class
        lookup; subclass names are unique across classes so the lookup is
        keyed by subclass text alone.
        """
        if not name or not name.strip():
            return ""
        return self._subclass_lookup.get(normalize(name)) or title_case_fr(name)

    def subclass_spellings(self, class_name: str | None, name: str | None) -> list[str]:
        """Spellings to try as subclass file names.

        The canonical name first, then the aliases of its table entry in
        table order. Unknown names yield only their canonical form.

        Example:
            >>> names.subclass_spellings("Occultiste", "fiend")
            ['Protecteur Fiélon', 'Protecteur Fielon', 'The Fiend', 'Fiend']
        """
        canonical = self.canonicalize_subclass(class_name, name)
        if not canonical:
            return []
        entry = self._subclass_entries.get(canonical)
        aliases = entry.aliases if entry else []
        return _uniq([canonical, *aliases])

    def class_folder_names(self, class_name: str | None) -> list[str]:
        """Repository folders that may hold a class.

        Canonical name first, then legacy folder names for that class, then
        the unaccented canonical name.
        """
        primary = self.canonicalize_class(class_name)
        if not primary:
            return []
        variants = [primary, *self._legacy_folders.get(primary, []), strip_diacritics(primary)]
        return _uniq(variants)

    def subclasses_for_class(self, class_name: str | None) -> list[SubclassOption]:
        """Known subclasses of a class, in table order."""
        canonical = self.canonicalize_class(class_name)
        return [
            SubclassOption(key=normalize(entry.canonical), label=entry.canonical, class_name=canonical)
            for entry in self._subclasses
            if entry.class_name == canonical
        ]

    def display_class_name(self, class_name: str | None) -> str:
        if not class_name:
            return ""
        return self.canonicalize_class(class_name)
