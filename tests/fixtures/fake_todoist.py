"""
In-memory stand-in for TodoistClient.

Returns the same model objects as the real client and records every call so
tests can assert on what was (or wasn't) sent to the API.
"""

import threading
from collections import Counter
from dataclasses import replace
from typing import Optional

from todoist.client import TodoistApiError
from todoist.models import Project, ProjectPage, Task

ALICE = {"id": "1001", "name": "Alice Smith", "email": "alice@example.com"}
BOB = {"id": "1002", "name": "Bob Jones", "email": "bob@example.com"}
CAROL = {"id": "1003", "name": "Carol White", "email": "carol@example.com"}


class FakeTodoistClient:
    """Mock Todoist client for testing."""

    def __init__(
        self,
        tasks: Optional[list[Task]] = None,
        projects: Optional[list[Project]] = None,
        collaborators: Optional[dict] = None,
        page_size: Optional[int] = None,
    ):
        self.tasks = {t.id: t for t in tasks or []}
        self.projects = {p.id: p for p in projects or []}
        # project_id -> raw payload, as the API would return it
        self.collaborators = collaborators or {}
        self.page_size = page_size

        self.failing_updates: set[str] = set()
        self.failing_collaborators: set[str] = set()
        self.fail_project_listing = False

        self.calls = Counter()
        self.updates: list[tuple[str, dict]] = []
        self.collaborator_requests: list[str] = []
        self._lock = threading.Lock()

    def _record(self, name: str) -> None:
        with self._lock:
            self.calls[name] += 1

    def get_task(self, task_id: str) -> Task:
        self._record("get_task")
        task = self.tasks.get(task_id)
        if task is None:
            raise TodoistApiError("Todoist: Task not found", status_code=404)
        return task

    def update_task(self, task_id: str, **fields) -> Task:
        self._record("update_task")
        with self._lock:
            self.updates.append((task_id, fields))
        if task_id in self.failing_updates:
            raise TodoistApiError("Todoist: Insufficient permissions", status_code=403)

        task = self.tasks[task_id]
        if "assignee_id" in fields:
            task = replace(task, responsible_uid=fields["assignee_id"])
            self.tasks[task_id] = task
        return task

    def get_project(self, project_id: str) -> Project:
        self._record("get_project")
        project = self.projects.get(project_id)
        if project is None:
            raise TodoistApiError("Todoist: Project not found", status_code=404)
        return project

    def get_projects(
        self, cursor: Optional[str] = None, limit: Optional[int] = None
    ) -> ProjectPage:
        self._record("get_projects")
        if self.fail_project_listing:
            raise TodoistApiError("Todoist API timeout")

        projects = list(self.projects.values())
        if not self.page_size:
            return ProjectPage(results=projects)

        start = int(cursor or 0)
        end = start + self.page_size
        next_cursor = str(end) if end < len(projects) else None
        return ProjectPage(results=projects[start:end], next_cursor=next_cursor)

    def get_project_collaborators(self, project_id: str):
        self._record("get_project_collaborators")
        with self._lock:
            self.collaborator_requests.append(project_id)
        if project_id in self.failing_collaborators:
            raise TodoistApiError("Todoist: Forbidden", status_code=403)
        return self.collaborators.get(project_id, [])


def make_task(task_id: str, project_id: str, responsible_uid: Optional[str] = None) -> Task:
    return Task(
        id=task_id,
        content=f"Task {task_id}",
        project_id=project_id,
        responsible_uid=responsible_uid,
    )


def make_workspace(**kwargs) -> FakeTodoistClient:
    """
    A small account:

    - p1 "Team" (shared): Alice, Bob; tasks t1 (held by Bob), t2, t3
    - p2 "Personal" (not shared): task t4
    - p3 "Design" (shared): Bob, Carol; task t5 (held by Carol)
    """
    return FakeTodoistClient(
        projects=[
            Project(id="p1", name="Team", is_shared=True),
            Project(id="p2", name="Personal"),
            Project(id="p3", name="Design", is_shared=True),
        ],
        tasks=[
            make_task("t1", "p1", responsible_uid=BOB["id"]),
            make_task("t2", "p1"),
            make_task("t3", "p1"),
            make_task("t4", "p2"),
            make_task("t5", "p3", responsible_uid=CAROL["id"]),
        ],
        collaborators={
            "p1": [ALICE, BOB],
            "p3": {"results": [BOB, CAROL], "next_cursor": None},
        },
        **kwargs,
    )
