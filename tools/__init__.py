"""
Built-in tools and the factory that wires them to a Todoist client.
"""

from assignments import AssignmentValidator, UserResolver
from tool_base import ToolRegistry
from tools.assignment_eligibility import AssignmentEligibilityTool
from tools.find_project_collaborators import FindProjectCollaboratorsTool
from tools.manage_assignments import (
    MAX_TASKS_PER_OPERATION,
    ManageAssignmentsTool,
    OperationResult,
)
from utils.concurrency import DEFAULT_MAX_WORKERS


def create_registry(
    client,
    user_resolver: UserResolver,
    validator: AssignmentValidator,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> ToolRegistry:
    """Register every built-in tool against one client and resolver."""
    registry = ToolRegistry(client)
    registry.register(ManageAssignmentsTool(user_resolver, validator, max_workers))
    registry.register(FindProjectCollaboratorsTool(user_resolver))
    registry.register(AssignmentEligibilityTool(validator))
    return registry


__all__ = [
    "MAX_TASKS_PER_OPERATION",
    "AssignmentEligibilityTool",
    "FindProjectCollaboratorsTool",
    "ManageAssignmentsTool",
    "OperationResult",
    "create_registry",
]
