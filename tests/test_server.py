"""
Unit tests for the server.py entry point.
"""

from unittest.mock import MagicMock, patch

import pytest

import server
from config import Settings
from tools import tool_names


class TestBuildRegistry:
    def test_registers_all_tools(self):
        settings = Settings(todoist_api_key="secret", assignment_cache_ttl=30, max_concurrency=3)

        registry = server.build_registry(settings, MagicMock())

        assert {t.name for t in registry.list_tools()} == {
            tool_names.MANAGE_ASSIGNMENTS,
            tool_names.FIND_PROJECT_COLLABORATORS,
            tool_names.GET_ASSIGNMENT_ELIGIBILITY,
        }
        manage = registry.get(tool_names.MANAGE_ASSIGNMENTS)
        assert manage.max_workers == 3
        assert manage.user_resolver._user_cache.ttl == 30


class TestMain:
    def test_missing_api_key_exits(self, monkeypatch):
        monkeypatch.delenv("TODOIST_API_KEY", raising=False)

        with pytest.raises(SystemExit) as exc_info:
            server.main()

        assert exc_info.value.code == 1

    def test_serves_and_closes_client(self, monkeypatch):
        monkeypatch.setenv("TODOIST_API_KEY", "secret")
        client = MagicMock()

        with patch.object(server, "TodoistClient", return_value=client), patch.object(
            server, "serve_stdio", new=MagicMock(return_value=None)
        ), patch.object(server.asyncio, "run") as run:
            server.main()

        run.assert_called_once()
        client.close.assert_called_once()
