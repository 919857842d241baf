"""
Tests for the MCP tools exposed by classes_content.main.

Tools are accessed via m.<tool>.fn(); the module-level loader is replaced
by one wired to the in-memory content store.
"""

import pytest

import classes_content.main as m

pytestmark = pytest.mark.anyio


@pytest.fixture(autouse=True)
def patched_loader(monkeypatch, loader):
    monkeypatch.setattr(m, "loader", loader)
    return loader


class TestAbilityTools:
    """Test section retrieval tools."""

    async def test_get_ability_sections(self):
        result = await m.get_ability_sections.fn(
            class_name="warlock", subclass_name="Protecteur Fiélon", character_level=3
        )
        assert result.startswith("**Occultiste** (6 sections)")
        assert "### Niveau 7 : Chance du ténébreux (niveau 7, sous-classe)" in result
        assert result.index("Magie de pacte") < result.index("Chance du ténébreux")

    async def test_get_ability_sections_not_found(self):
        result = await m.get_ability_sections.fn(class_name="Artificier")
        assert result.startswith("❌")
        assert "'Artificier'." in result

    async def test_get_class_sections(self):
        result = await m.get_class_sections.fn(class_name="Magicien")
        assert "### Niveau 2 : Érudit (niveau 2, classe)" in result

    async def test_get_subclass_sections_not_found(self):
        result = await m.get_subclass_sections.fn(class_name="Occultiste", subclass_name="Céleste")
        assert result.startswith("❌ Subclass document not found")


class TestNameTools:
    """Test naming and listing tools."""

    def test_list_subclasses(self):
        result = m.list_subclasses.fn(class_name="sorcier")
        assert result.startswith("**Subclasses of Occultiste:**")
        assert "• Protecteur Fiélon" in result

    def test_list_subclasses_unknown_class(self):
        assert m.list_subclasses.fn(class_name="Artificier").startswith("❌")

    def test_display_class_name(self):
        assert m.display_class_name.fn(class_name="ranger") == "Rôdeur"


class TestCacheTool:
    """Test cache reset."""

    async def test_reset_content_cache(self, patched_loader, store):
        await m.get_class_sections.fn(class_name="Magicien")
        result = m.reset_content_cache.fn()

        assert "1 documents" in result
        assert patched_loader.cache_stats().positive_entries == 0
