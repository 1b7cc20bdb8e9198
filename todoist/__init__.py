# Todoist API client and entity types

from todoist.client import DEFAULT_API_BASE, TodoistApiError, TodoistClient
from todoist.models import Collaborator, Project, ProjectKind, ProjectPage, Task

__all__ = [
    "DEFAULT_API_BASE",
    "TodoistApiError",
    "TodoistClient",
    "Collaborator",
    "Project",
    "ProjectKind",
    "ProjectPage",
    "Task",
]
