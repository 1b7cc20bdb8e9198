#!/usr/bin/env python3
"""
Todoist Assignments MCP Server

Exposes Todoist task-assignment tools (bulk assign/unassign/reassign,
collaborator search, eligibility checks) to MCP hosts over stdio.

Configuration comes from environment variables; see config/settings.py.
"""

import asyncio
import logging
import sys

from assignments import AssignmentValidator, UserResolver
from config import ConfigError, Settings, load_settings
from mcp_server import create_server, serve_stdio
from todoist import TodoistClient
from tools import create_registry

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    # stdout carries the MCP transport, so logs must go to stderr
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_registry(settings: Settings, client: TodoistClient):
    """Wire client, resolver, validator and tools together."""
    user_resolver = UserResolver(
        client,
        ttl=settings.assignment_cache_ttl,
        max_workers=settings.max_concurrency,
    )
    validator = AssignmentValidator(
        client, user_resolver, max_workers=settings.max_concurrency
    )
    return create_registry(
        client, user_resolver, validator, max_workers=settings.max_concurrency
    )


def main() -> None:
    try:
        settings = load_settings()
    except ConfigError as e:
        configure_logging()
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    configure_logging(settings.log_level)

    client = TodoistClient(
        settings.todoist_api_key,
        base_url=settings.todoist_api_base,
        timeout=settings.todoist_timeout,
    )
    registry = build_registry(settings, client)
    server = create_server(
        registry, use_structured_content=settings.use_structured_content
    )

    try:
        asyncio.run(serve_stdio(server))
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        client.close()


if __name__ == "__main__":
    main()
