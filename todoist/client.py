"""
Thin synchronous client for the Todoist API.

Only the endpoints the tools need are wrapped. Every failure (HTTP error
status, timeout, transport problem) is raised as TodoistApiError so callers
have one exception type to catch.
"""

import logging
from typing import Optional

import httpx

from todoist.models import Project, ProjectPage, Task

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.todoist.com/api/v1"


class TodoistApiError(Exception):
    """Raised when a Todoist API call fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_tag: Optional[str] = None,
        error_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_tag = error_tag
        self.error_code = error_code

    @classmethod
    def from_response(cls, response: httpx.Response) -> "TodoistApiError":
        message = f"Todoist API error: {response.status_code}"
        error_tag = None
        error_code = None
        try:
            body = response.json()
            if isinstance(body, dict) and "error" in body:
                message = f"Todoist: {body['error']}"
                error_tag = body.get("error_tag")
                error_code = body.get("error_code")
        except ValueError:
            pass
        return cls(
            message,
            status_code=response.status_code,
            error_tag=error_tag,
            error_code=error_code,
        )


class TodoistClient:
    """Todoist REST client backed by httpx."""

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_API_BASE,
        timeout: float = 15,
        http_client: Optional[httpx.Client] = None,
    ):
        self.api_token = api_token
        self.client = http_client or httpx.Client(
            base_url=base_url,
            headers={"Authorization": f"Bearer {api_token}"},
            timeout=timeout,
        )

    def _request(self, method: str, path: str, **kwargs):
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.debug(f"Todoist {method} {path} failed: {e}")
            raise TodoistApiError.from_response(e.response) from e
        except httpx.TimeoutException as e:
            raise TodoistApiError("Todoist API timeout") from e
        except httpx.RequestError as e:
            raise TodoistApiError(f"Todoist API request failed: {e}") from e

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # --- Tasks ---

    def get_task(self, task_id: str) -> Task:
        return Task.from_dict(self._request("GET", f"/tasks/{task_id}"))

    def update_task(self, task_id: str, **fields) -> Task:
        """
        Update a task. Pass ``assignee_id=None`` to unassign it.

        Keyword arguments map directly onto API fields, so an explicit None is
        sent as JSON null.
        """
        data = self._request("POST", f"/tasks/{task_id}", json=fields)
        return Task.from_dict(data)

    # --- Projects ---

    def get_project(self, project_id: str) -> Project:
        return Project.from_dict(self._request("GET", f"/projects/{project_id}"))

    def get_projects(
        self, cursor: Optional[str] = None, limit: Optional[int] = None
    ) -> ProjectPage:
        params = {}
        if cursor:
            params["cursor"] = cursor
        if limit:
            params["limit"] = limit

        data = self._request("GET", "/projects", params=params)
        # Older endpoints return a bare list
        if isinstance(data, list):
            return ProjectPage(results=[Project.from_dict(p) for p in data])
        return ProjectPage(
            results=[Project.from_dict(p) for p in data.get("results", [])],
            next_cursor=data.get("next_cursor"),
        )

    def get_project_collaborators(self, project_id: str):
        """
        Raw collaborator payload for a project.

        Depending on the API version this is either a bare list or a page
        object with a ``results`` key. Normalisation happens in the resolver.
        """
        return self._request("GET", f"/projects/{project_id}/collaborators")

    def close(self) -> None:
        self.client.close()
