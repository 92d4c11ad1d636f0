"""Tests for result formatting and the MCP tool surface."""

import asyncio

from mcp.server.fastmcp import FastMCP

from guestfinder.server import (
    TABLE_PLACEHOLDER,
    create_server,
    escape_md,
    format_guest_list,
    format_result,
)
from guestfinder.service import SearchResult, SearchService


class TestEscapeMd:
    def test_special_characters(self):
        assert escape_md("A*B_C") == "A\\*B\\_C"

    def test_plain_text(self):
        assert escape_md("Ahmed") == "Ahmed"

    def test_table_pipe(self):
        assert escape_md("1|2") == "1\\|2"


class TestFormatResult:
    def test_cleared(self):
        assert "Type a guest name" in format_result(SearchResult(cleared=True))

    def test_no_matches(self):
        text = format_result(SearchResult())
        assert text.startswith("No close matches found.")
        assert "list_guests" in text

    def test_single_match(self):
        text = format_result(SearchResult(hits=[{"name": "Ahmed", "table": "4", "score": 0.001}]))
        assert text.startswith("**Match found:**")
        assert "**Ahmed** — Table 4" in text

    def test_multiple_matches(self):
        hits = [
            {"name": "Ahmed", "table": "4", "score": 0.001},
            {"name": "Ahmad", "table": "", "score": 0.2},
        ]
        text = format_result(SearchResult(hits=hits))
        assert text.startswith("**2 matches found:**")
        assert f"**Ahmad** — Table {TABLE_PLACEHOLDER}" in text
        assert text.index("Ahmed") < text.index("Ahmad")


class TestFormatGuestList:
    def test_empty(self):
        assert format_guest_list([]) == "No guest list loaded."

    def test_table(self):
        text = format_guest_list([{"name": "Amir", "table": "1"}, {"name": "Zara", "table": ""}])
        lines = text.splitlines()
        assert lines[0] == "| Guest | Table |"
        assert lines[2] == "| Amir | 1 |"
        assert lines[3] == "| Zara |  |"


class TestCreateServer:
    def test_tools_registered(self):
        service = SearchService()
        service.bootstrap([{"name": "Ahmed", "table": "1"}])
        server = create_server(service)
        assert isinstance(server, FastMCP)
        tools = asyncio.run(server.list_tools())
        assert {t.name for t in tools} == {"find_guest", "list_guests"}
