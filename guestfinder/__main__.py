"""Run the guestfinder MCP server over stdio: python -m guestfinder"""

import asyncio
import logging
import os
import sys

from guestfinder.loader import resolve_source
from guestfinder.records import DataLoadError
from guestfinder.server import create_server
from guestfinder.service import SearchService

logger = logging.getLogger("guestfinder")


def main() -> None:
    # stdout carries the MCP protocol
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get("GUESTFINDER_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    service = SearchService()
    try:
        asyncio.run(service.load(resolve_source()))
    except DataLoadError:
        logger.warning("Starting with an empty guest list")

    create_server(service).run()


if __name__ == "__main__":
    main()
