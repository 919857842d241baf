"""Tests for section merging and ordering."""

from classes_content.aggregator import collation_key, merge_sections, sort_sections
from classes_content.models import AbilitySection, SectionOrigin


def section(level: int, origin: str, title: str, content: str = "x") -> AbilitySection:
    return AbilitySection(level=level, title=title, content=content, origin=origin)


class TestSortSections:
    """Test the deterministic ordering rules."""

    def test_level_ascending(self):
        ordered = sort_sections([section(6, "class", "A"), section(1, "class", "B"), section(3, "class", "C")])
        assert [s.level for s in ordered] == [1, 3, 6]

    def test_class_before_subclass_at_same_level(self):
        ordered = sort_sections([section(3, "subclass", "A"), section(3, "class", "Z")])
        assert [s.origin for s in ordered] == [SectionOrigin.CLASS, SectionOrigin.SUBCLASS]

    def test_alphabetical_within_level_and_origin(self):
        ordered = sort_sections([
            section(2, "class", "Frappe"),
            section(2, "class", "Évasion"),
            section(2, "class", "attaque"),
        ])
        assert [s.title for s in ordered] == ["attaque", "Évasion", "Frappe"]

    def test_stable_for_equal_keys(self):
        first = section(1, "class", "Même", content="premier")
        second = section(1, "class", "Même", content="second")
        assert sort_sections([first, second]) == [first, second]
        assert sort_sections([second, first]) == [second, first]

    def test_collation_key_ignores_accents_and_case(self):
        assert collation_key("Évasion")[0] == collation_key("evasion")[0]

    def test_collation_key_folds_compatibility_forms(self):
        assert collation_key("Ofﬁce")[0] == collation_key("office")[0]


class TestMergeSections:
    """Test concatenation followed by sorting."""

    def test_merge_class_and_subclasses(self):
        class_sections = [section(0, "class", "Général"), section(3, "class", "Sous-classe")]
        fielon = [section(3, "subclass", "Bénédiction"), section(7, "subclass", "Chance")]
        merged = merge_sections(class_sections, [fielon])

        assert [(s.level, s.origin.value) for s in merged] == [
            (0, "class"), (3, "class"), (3, "subclass"), (7, "subclass"),
        ]

    def test_request_order_breaks_full_ties(self):
        first = [section(3, "subclass", "Capacité", content="premier")]
        second = [section(3, "subclass", "Capacité", content="second")]
        merged = merge_sections([], [first, second])
        assert [s.content for s in merged] == ["premier", "second"]

    def test_empty(self):
        assert merge_sections([], []) == []
        assert merge_sections([]) == []
