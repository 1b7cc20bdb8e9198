"""
Assignment validation.

Before a task is assigned we check, in order, that the target user can be
resolved, that the project is shared, that the user collaborates on that
project and (when a task is given) that the task is reachable. The first
failing check decides the error; each error comes with suggestions meant to
be shown to the end user.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from assignments.user_resolver import ResolvedUser, UserResolver
from utils.concurrency import DEFAULT_MAX_WORKERS, settle_all

logger = logging.getLogger(__name__)


class AssignmentErrorType(Enum):
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_NOT_COLLABORATOR = "USER_NOT_COLLABORATOR"
    PROJECT_NOT_SHARED = "PROJECT_NOT_SHARED"
    TASK_NOT_ACCESSIBLE = "TASK_NOT_ACCESSIBLE"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"


@dataclass
class AssignmentError:
    """Why an assignment is invalid, and what the user can do about it."""

    type: AssignmentErrorType
    message: str
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "message": self.message,
            "suggestions": self.suggestions,
        }


@dataclass
class Assignment:
    """A candidate binding of a (possibly not yet created) task to a user."""

    project_id: str
    responsible_uid: str  # name, email or ID; not resolved yet
    task_id: Optional[str] = None


@dataclass
class ValidationResult:
    is_valid: bool
    resolved_user: Optional[ResolvedUser] = None
    error: Optional[AssignmentError] = None
    task_id: Optional[str] = None
    project_id: Optional[str] = None

    def to_dict(self) -> dict:
        result = {"isValid": self.is_valid}
        if self.resolved_user:
            result["resolvedUser"] = self.resolved_user.to_dict()
        if self.error:
            result["error"] = self.error.to_dict()
        if self.task_id is not None:
            result["taskId"] = self.task_id
        if self.project_id is not None:
            result["projectId"] = self.project_id
        return result


@dataclass
class AssignmentEligibility:
    """Troubleshooting report from get_assignment_eligibility()."""

    can_assign: bool
    project_info: dict
    recommendations: list[str] = field(default_factory=list)
    user_info: Optional[dict] = None
    task_info: Optional[dict] = None

    def to_dict(self) -> dict:
        result = {
            "canAssign": self.can_assign,
            "projectInfo": self.project_info,
            "recommendations": self.recommendations,
        }
        if self.user_info is not None:
            result["userInfo"] = self.user_info
        if self.task_info is not None:
            result["taskInfo"] = self.task_info
        return result


def _task_not_found(task_id: str) -> AssignmentError:
    return AssignmentError(
        type=AssignmentErrorType.TASK_NOT_FOUND,
        message=f'Task "{task_id}" not found or not accessible',
        suggestions=[
            "Verify the task ID is correct",
            "Check if the task has been deleted",
            "Ensure you have access to the task",
        ],
    )


class AssignmentValidator:
    """Validates task assignments against project sharing and membership."""

    def __init__(
        self,
        client,
        user_resolver: UserResolver,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self.client = client
        self.user_resolver = user_resolver
        self.max_workers = max_workers

    def validate_assignment(self, assignment: Assignment) -> ValidationResult:
        task_id = assignment.task_id
        project_id = assignment.project_id

        resolved_user = self.user_resolver.resolve_user(assignment.responsible_uid)
        if not resolved_user:
            return ValidationResult(
                is_valid=False,
                task_id=task_id,
                project_id=project_id,
                error=AssignmentError(
                    type=AssignmentErrorType.USER_NOT_FOUND,
                    message=f'User "{assignment.responsible_uid}" not found',
                    suggestions=[
                        "Check the spelling of the user name or email",
                        "Ensure the user is a collaborator on at least one shared project",
                        "Try using the user's full email address",
                    ],
                ),
            )

        try:
            project = self.client.get_project(project_id)

            if not project.is_shared:
                return ValidationResult(
                    is_valid=False,
                    task_id=task_id,
                    project_id=project_id,
                    resolved_user=resolved_user,
                    error=AssignmentError(
                        type=AssignmentErrorType.PROJECT_NOT_SHARED,
                        message=f'Project "{project.name}" is not shared',
                        suggestions=[
                            "Share the project with collaborators before assigning tasks",
                            "Only shared projects support task assignments",
                        ],
                    ),
                )

            if not self.user_resolver.validate_project_collaborator(
                project_id, resolved_user.user_id
            ):
                return ValidationResult(
                    is_valid=False,
                    task_id=task_id,
                    project_id=project_id,
                    resolved_user=resolved_user,
                    error=AssignmentError(
                        type=AssignmentErrorType.USER_NOT_COLLABORATOR,
                        message=(
                            f'User "{resolved_user.display_name}" is not a collaborator '
                            f'on project "{project.name}"'
                        ),
                        suggestions=[
                            "Invite the user to collaborate on this project first",
                            "Check if the user has been removed from the project",
                            "Verify you have permission to see project collaborators",
                        ],
                    ),
                )

            if task_id:
                try:
                    self.client.get_task(task_id)
                except Exception as e:
                    logger.debug(f"Task {task_id} not reachable during validation: {e}")
                    return ValidationResult(
                        is_valid=False,
                        task_id=task_id,
                        project_id=project_id,
                        resolved_user=resolved_user,
                        error=_task_not_found(task_id),
                    )

            return ValidationResult(
                is_valid=True,
                task_id=task_id,
                project_id=project_id,
                resolved_user=resolved_user,
            )
        except Exception as e:
            logger.warning(f"Assignment validation for project {project_id} failed: {e}")
            return ValidationResult(
                is_valid=False,
                task_id=task_id,
                project_id=project_id,
                resolved_user=resolved_user,
                error=AssignmentError(
                    type=AssignmentErrorType.PERMISSION_DENIED,
                    message="Permission denied or API error occurred",
                    suggestions=[
                        "Check your API permissions",
                        "Verify you have access to the project",
                        "Try again later if this is a temporary API issue",
                    ],
                ),
            )

    def validate_bulk_assignment(
        self, assignments: list[Assignment]
    ) -> list[ValidationResult]:
        """
        Validate every assignment concurrently.

        ``results[i]`` always belongs to ``assignments[i]``; one item failing
        never affects another.
        """
        outcomes = settle_all(
            self.validate_assignment, assignments, max_workers=self.max_workers
        )

        results = []
        for assignment, outcome in zip(assignments, outcomes):
            if outcome.ok:
                results.append(outcome.value)
                continue
            logger.error(
                f"Unexpected error validating task {assignment.task_id}: {outcome.error}"
            )
            results.append(
                ValidationResult(
                    is_valid=False,
                    task_id=assignment.task_id,
                    project_id=assignment.project_id,
                    error=AssignmentError(
                        type=AssignmentErrorType.PERMISSION_DENIED,
                        message=str(outcome.error) or "Validation failed",
                    ),
                )
            )
        return results

    def validate_task_creation_assignment(
        self, project_id: str, responsible_uid: str
    ) -> ValidationResult:
        """Validate an assignee for a task that does not exist yet."""
        return self.validate_assignment(
            Assignment(project_id=project_id, responsible_uid=responsible_uid)
        )

    def validate_task_update_assignment(
        self, task_id: str, responsible_uid: Optional[str]
    ) -> ValidationResult:
        """Validate changing an existing task's assignee; None means unassign."""
        if responsible_uid is None:
            return ValidationResult(is_valid=True, task_id=task_id)

        try:
            task = self.client.get_task(task_id)
        except Exception as e:
            logger.debug(f"Task {task_id} not reachable: {e}")
            return ValidationResult(
                is_valid=False, task_id=task_id, error=_task_not_found(task_id)
            )

        return self.validate_assignment(
            Assignment(
                project_id=task.project_id,
                responsible_uid=responsible_uid,
                task_id=task_id,
            )
        )

    def get_assignment_eligibility(
        self,
        project_id: str,
        responsible_uid: str,
        task_ids: Optional[list[str]] = None,
    ) -> AssignmentEligibility:
        """Explain whether (and why not) tasks in a project can go to a user."""
        try:
            project = self.client.get_project(project_id)
        except Exception as e:
            logger.debug(f"Project {project_id} not reachable: {e}")
            return AssignmentEligibility(
                can_assign=False,
                project_info={"name": "Unknown", "isShared": False, "collaboratorCount": 0},
                recommendations=["Project not found or not accessible"],
            )

        collaborators = self.user_resolver.get_project_collaborators(project_id)
        project_info = {
            "name": project.name,
            "isShared": project.is_shared,
            "collaboratorCount": len(collaborators),
        }

        if not project.is_shared:
            return AssignmentEligibility(
                can_assign=False,
                project_info=project_info,
                recommendations=["Share this project to enable task assignments"],
            )

        resolved_user = self.user_resolver.resolve_user(responsible_uid)
        if not resolved_user:
            return AssignmentEligibility(
                can_assign=False,
                project_info=project_info,
                recommendations=[
                    "User not found - check spelling or invite to a shared project"
                ],
            )

        is_collaborator = any(c.id == resolved_user.user_id for c in collaborators)
        user_info = {
            "resolvedName": resolved_user.display_name,
            "isCollaborator": is_collaborator,
        }
        if not is_collaborator:
            return AssignmentEligibility(
                can_assign=False,
                project_info=project_info,
                user_info=user_info,
                recommendations=[
                    f'Invite {resolved_user.display_name} to collaborate on project "{project.name}"'
                ],
            )

        recommendations = []
        task_info = None
        if task_ids:
            outcomes = settle_all(
                self.client.get_task, task_ids, max_workers=self.max_workers
            )
            accessible = sum(1 for o in outcomes if o.ok)
            inaccessible = len(outcomes) - accessible
            task_info = {"accessibleTasks": accessible, "inaccessibleTasks": inaccessible}
            if inaccessible:
                recommendations.append(f"{inaccessible} task(s) are not accessible")

        recommendations.append(f"Ready to assign tasks to {resolved_user.display_name}")
        return AssignmentEligibility(
            can_assign=True,
            project_info=project_info,
            user_info=user_info,
            task_info=task_info,
            recommendations=recommendations,
        )
