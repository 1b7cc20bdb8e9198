"""
Typed views over the raw Todoist API payloads.

The API returns plain JSON objects; tools only need a handful of fields, so
each entity keeps the fields we use and drops the rest.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ProjectKind(Enum):
    """Which flavour of project the API returned."""

    PERSONAL = "personal"
    WORKSPACE = "workspace"


@dataclass
class Task:
    """A Todoist task."""

    id: str
    content: str = ""
    description: str = ""
    project_id: str = ""
    section_id: Optional[str] = None
    parent_id: Optional[str] = None
    responsible_uid: Optional[str] = None
    assigned_by_uid: Optional[str] = None
    priority: int = 1
    labels: list[str] = field(default_factory=list)
    due: Optional[dict] = None
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            id=str(data["id"]),
            content=data.get("content", ""),
            description=data.get("description", ""),
            project_id=str(data.get("project_id", "")),
            section_id=data.get("section_id"),
            parent_id=data.get("parent_id"),
            responsible_uid=data.get("responsible_uid"),
            assigned_by_uid=data.get("assigned_by_uid"),
            priority=data.get("priority", 1),
            labels=data.get("labels") or [],
            due=data.get("due"),
            url=data.get("url"),
        )


@dataclass
class Project:
    """
    A Todoist project.

    Personal and workspace projects share most fields but differ in a few
    (personal projects have inbox/parent info, workspace projects have an
    access level). ``kind`` is decided once when parsing so callers never
    have to sniff for fields.
    """

    id: str
    name: str
    kind: ProjectKind = ProjectKind.PERSONAL
    is_shared: bool = False
    color: Optional[str] = None
    is_favorite: bool = False
    view_style: Optional[str] = None
    # Personal projects only
    parent_id: Optional[str] = None
    inbox_project: bool = False
    # Workspace projects only
    workspace_id: Optional[str] = None
    access_level: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        if "workspace_id" in data or "access_level" in data:
            kind = ProjectKind.WORKSPACE
        else:
            kind = ProjectKind.PERSONAL

        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            kind=kind,
            is_shared=bool(data.get("is_shared", False)),
            color=data.get("color"),
            is_favorite=bool(data.get("is_favorite", False)),
            view_style=data.get("view_style"),
            parent_id=data.get("parent_id") if kind == ProjectKind.PERSONAL else None,
            inbox_project=(
                bool(data.get("inbox_project", False))
                if kind == ProjectKind.PERSONAL
                else False
            ),
            workspace_id=data.get("workspace_id"),
            access_level=data.get("access_level"),
        )


@dataclass
class ProjectPage:
    """One page of ``GET /projects``."""

    results: list[Project]
    next_cursor: Optional[str] = None


@dataclass
class Collaborator:
    """A user who shares a project and can be assigned tasks in it."""

    id: str
    name: str
    email: str

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Collaborator"]:
        """Parse a collaborator, or None if id, name or email is missing."""
        if not isinstance(data, dict):
            return None
        if not (data.get("id") and data.get("name") and data.get("email")):
            return None
        return cls(id=str(data["id"]), name=data["name"], email=data["email"])

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email}
