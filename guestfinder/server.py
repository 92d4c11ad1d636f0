"""Guestfinder MCP Server — find a guest's table by (fuzzy) name."""

import logging
import re

from mcp.server.fastmcp import FastMCP

from guestfinder.service import SearchResult, SearchService

logger = logging.getLogger(__name__)

TABLE_PLACEHOLDER = "—"

_MD_SPECIAL_RE = re.compile(r"([\\`*_\[\]|<>#])")


def escape_md(text: str) -> str:
    """Backslash-escape characters that would change markdown rendering."""
    return _MD_SPECIAL_RE.sub(r"\\\1", str(text))


def format_result(result: SearchResult) -> str:
    """Format a search result as markdown."""
    if result.cleared:
        return "Type a guest name to find their table."

    if result.no_matches:
        return "No close matches found. Try viewing the full list (`list_guests`)."

    hits = result.hits
    if len(hits) == 1:
        parts = ["**Match found:**\n"]
    else:
        parts = [f"**{len(hits)} matches found:**\n"]
    for h in hits:
        table = h["table"] or TABLE_PLACEHOLDER
        parts.append(f"- **{escape_md(h['name'])}** — Table {escape_md(table)}")
    return "\n".join(parts)


def format_guest_list(guests: list[dict]) -> str:
    """Format the full guest list as a markdown table."""
    if not guests:
        return "No guest list loaded."

    lines = ["| Guest | Table |", "|---|---|"]
    for g in guests:
        lines.append(f"| {escape_md(g['name'])} | {escape_md(g['table'])} |")
    return "\n".join(lines)


def create_server(service: SearchService) -> FastMCP:
    """Build the MCP server around an already-loaded SearchService."""
    mcp = FastMCP("guestfinder")

    @mcp.tool()
    async def find_guest(query: str) -> str:
        """Find a guest's table number by name.

        Tolerates misspellings and accepts names typed in Arabic script.
        Short queries (1-3 letters) match loosely; longer ones strictly.
        """
        result = service.search(query)
        logger.debug("find_guest %r -> %d hit(s)", query, len(result.hits))
        return format_result(result)

    @mcp.tool()
    async def list_guests() -> str:
        """List every guest and their table, sorted by name."""
        return format_guest_list(service.list_all())

    return mcp
