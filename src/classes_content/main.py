"""
Classes Content MCP Server
Exposes class and subclass ability content as FastMCP tools.
"""

import logging
from typing import Annotated

from dotenv import load_dotenv
from fastmcp import FastMCP
from pydantic import Field

from .config import ContentConfig
from .loader import ClassesContentLoader
from .models import AbilitySection

logger = logging.getLogger("classes-content")

logging.basicConfig(
    level=logging.INFO,
    )

if not load_dotenv():
    logger.debug("No .env file found, using environment and defaults.")

config = ContentConfig.from_env()
config.apply_logging()
loader = ClassesContentLoader(config)
logger.debug(f"📂 Content roots: {config.raw_bases}")

mcp = FastMCP(
    name="classes-content"
)


def _format_sections(sections: list[AbilitySection]) -> str:
    """Render sections as Markdown, one block per section."""
    blocks = []
    for section in sections:
        origin = "sous-classe" if section.origin.value == "subclass" else "classe"
        header = f"### {section.title} (niveau {section.level}, {origin})"
        blocks.append(f"{header}\n{section.content}".rstrip())
    return "\n\n".join(blocks)


@mcp.tool
async def get_ability_sections(
    class_name: Annotated[str, Field(description="Class name, any spelling (e.g. 'Warlock', 'Rodeur')")],
    subclass_name: Annotated[str | None, Field(description="Subclass name (optional)")] = None,
    character_level: Annotated[int | None, Field(description="Character level (informational, no filtering)")] = None,
) -> str:
    """Get class and subclass abilities sorted by level.

    Sections are ordered by level, class abilities before subclass abilities
    at the same level. All levels are returned.
    """
    result = await loader.load_ability_sections(class_name, subclass_name, character_level)
    if not result.sections:
        return f"❌ No ability content found for '{class_name}'" + (
            f" / '{subclass_name}'." if subclass_name else "."
        )
    title = loader.display_class_name(class_name)
    return f"**{title}** ({len(result.sections)} sections)\n\n" + _format_sections(result.sections)


@mcp.tool
async def get_class_sections(
    class_name: Annotated[str, Field(description="Class name, any spelling")],
) -> str:
    """Get the sections of a class document in document order."""
    sections = await loader.load_class_sections(class_name)
    if not sections:
        return f"❌ Class document not found for '{class_name}'."
    return _format_sections(sections)


@mcp.tool
async def get_subclass_sections(
    class_name: Annotated[str, Field(description="Class name, any spelling")],
    subclass_name: Annotated[str, Field(description="Subclass name, any spelling")],
) -> str:
    """Get the sections of a subclass document in document order."""
    sections = await loader.load_subclass_sections(class_name, subclass_name)
    if not sections:
        return f"❌ Subclass document not found for '{class_name}' / '{subclass_name}'."
    return _format_sections(sections)


@mcp.tool
def list_subclasses(
    class_name: Annotated[str, Field(description="Class name, any spelling")],
) -> str:
    """List the known subclasses of a class."""
    options = loader.list_subclasses(class_name)
    title = loader.display_class_name(class_name)
    if not options:
        return f"❌ No known subclasses for '{title or class_name}'."
    lines = [f"• {option.label}" for option in options]
    return f"**Subclasses of {title}:**\n" + "\n".join(lines)


@mcp.tool
def display_class_name(
    class_name: Annotated[str, Field(description="Class name, any spelling")],
) -> str:
    """Get the canonical display name of a class."""
    return loader.display_class_name(class_name)


@mcp.tool
def reset_content_cache() -> str:
    """Clear cached documents and recorded failures."""
    stats = loader.cache_stats()
    loader.reset_cache()
    return (
        f"🧹 Cleared content cache ({stats.positive_entries} documents, "
        f"{stats.negative_entries} failed locations)."
    )


def main() -> None:
    """Main entry point for the Classes Content MCP server."""
    mcp.run()

if __name__ == "__main__":
    main()
