"""
manage-assignments: bulk assign, unassign or reassign up to 50 tasks.

Each step fans out over all tasks and waits for every call before the next
step starts: fetch tasks, (reassign only) keep tasks held by the "from" user,
validate assignees, then update or simulate. Every per-task problem ends up
in the result ledger; only a missing ``responsibleUser`` aborts the call.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from assignments import Assignment, AssignmentValidator, UserResolver, ValidationResult
from todoist.models import Task
from tool_base import (
    FieldDefinition,
    FieldType,
    TodoistTool,
    ToolOutput,
    get_tool_output,
)
from tools import tool_names
from utils.concurrency import DEFAULT_MAX_WORKERS, settle_all

logger = logging.getLogger(__name__)

# Bounds fan-out per call and keeps a single call well under host timeouts
MAX_TASKS_PER_OPERATION = 50

# How many successes/failures to list in the text digest
PREVIEW_LIMIT = 5

OPERATIONS = ("assign", "unassign", "reassign")

PAST_TENSE = {
    "assign": "assigned",
    "unassign": "unassigned",
    "reassign": "reassigned",
}


@dataclass
class OperationResult:
    """Outcome for one requested task."""

    task_id: str
    success: bool
    error: Optional[str] = None
    original_assignee_id: Optional[str] = None
    new_assignee_id: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "taskId": self.task_id,
            "success": self.success,
            "originalAssigneeId": self.original_assignee_id,
            "newAssigneeId": self.new_assignee_id,
        }
        if self.error is not None:
            result["error"] = self.error
        return result


class ManageAssignmentsTool(TodoistTool):
    """Bulk assignment operations."""

    name = tool_names.MANAGE_ASSIGNMENTS
    description = (
        "Bulk assignment operations for multiple tasks. Supports assign, unassign, "
        "and reassign operations. Each task succeeds or fails on its own; use "
        "dryRun to validate before making changes."
    )

    @classmethod
    def get_params(cls) -> list[FieldDefinition]:
        return [
            FieldDefinition(
                name="operation",
                label="Operation",
                field_type=FieldType.SELECT,
                required=True,
                options=list(OPERATIONS),
                help_text="The assignment operation to perform.",
            ),
            FieldDefinition(
                name="taskIds",
                label="Task IDs",
                field_type=FieldType.STRING_LIST,
                required=True,
                min_length=1,
                max_length=MAX_TASKS_PER_OPERATION,
                help_text=f"The IDs of the tasks to operate on (max {MAX_TASKS_PER_OPERATION}).",
            ),
            FieldDefinition(
                name="responsibleUser",
                label="Assignee",
                field_type=FieldType.TEXT,
                help_text=(
                    "The user to assign tasks to. Can be user ID, name, or email. "
                    "Required for assign and reassign operations."
                ),
            ),
            FieldDefinition(
                name="fromAssigneeUser",
                label="Current assignee",
                field_type=FieldType.TEXT,
                help_text=(
                    "For reassign operations: the current assignee to reassign from. "
                    "Can be user ID, name, or email. Optional - if not provided, "
                    "reassigns from any current assignee."
                ),
            ),
            FieldDefinition(
                name="dryRun",
                label="Dry run",
                field_type=FieldType.BOOLEAN,
                default=False,
                help_text="If true, validates operations without executing them.",
            ),
        ]

    def __init__(
        self,
        user_resolver: UserResolver,
        validator: AssignmentValidator,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self.user_resolver = user_resolver
        self.validator = validator
        self.max_workers = max_workers

    def execute(self, args: dict, client) -> ToolOutput:
        operation = args["operation"]
        task_ids = args["taskIds"]
        responsible_user = args.get("responsibleUser")
        from_assignee_user = args.get("fromAssigneeUser")
        dry_run = bool(args.get("dryRun"))

        if operation in ("assign", "reassign") and not responsible_user:
            raise ValueError(f"{operation} operation requires responsibleUser parameter")

        tasks, task_errors = self._fetch_tasks(client, task_ids)

        if not tasks:
            return self._build_output(operation, task_ids, [], [], task_errors, dry_run)

        if operation == "reassign" and from_assignee_user:
            from_user = self.user_resolver.resolve_user(from_assignee_user)
            from_user_id = from_user.user_id if from_user else from_assignee_user
            tasks = [t for t in tasks if t.responsible_uid == from_user_id]
            logger.info(
                f"reassign: {len(tasks)} task(s) currently held by {from_user_id}"
            )

        if operation == "unassign":
            results = self._unassign(client, tasks, dry_run)
            return self._build_output(operation, task_ids, results, [], task_errors, dry_run)

        assignments = [
            Assignment(
                project_id=task.project_id,
                responsible_uid=responsible_user,
                task_id=task.id,
            )
            for task in tasks
        ]
        validations = self.validator.validate_bulk_assignment(assignments)

        valid: list[tuple[Task, ValidationResult]] = []
        validation_errors: list[OperationResult] = []
        for task, validation in zip(tasks, validations):
            if validation.is_valid and validation.resolved_user:
                valid.append((task, validation))
            else:
                validation_errors.append(
                    OperationResult(
                        task_id=task.id,
                        success=False,
                        error=validation.error.message if validation.error else "Validation failed",
                    )
                )

        if dry_run:
            results = [
                OperationResult(
                    task_id=task.id,
                    success=True,
                    original_assignee_id=task.responsible_uid,
                    new_assignee_id=validation.resolved_user.user_id,
                )
                for task, validation in valid
            ]
        else:
            results = self._assign(client, valid)

        return self._build_output(
            operation, task_ids, results, validation_errors, task_errors, dry_run
        )

    def _fetch_tasks(
        self, client, task_ids: list[str]
    ) -> tuple[list[Task], list[OperationResult]]:
        outcomes = settle_all(client.get_task, task_ids, max_workers=self.max_workers)

        tasks = []
        errors = []
        for task_id, outcome in zip(task_ids, outcomes):
            if outcome.ok:
                tasks.append(outcome.value)
            else:
                logger.debug(f"Could not fetch task {task_id}: {outcome.error}")
                errors.append(
                    OperationResult(
                        task_id=task_id,
                        success=False,
                        error=f"Task {task_id} not found or not accessible",
                    )
                )
        return tasks, errors

    def _unassign(self, client, tasks: list[Task], dry_run: bool) -> list[OperationResult]:
        if dry_run:
            return [
                OperationResult(
                    task_id=task.id,
                    success=True,
                    original_assignee_id=task.responsible_uid,
                    new_assignee_id=None,
                )
                for task in tasks
            ]

        outcomes = settle_all(
            lambda task: client.update_task(task.id, assignee_id=None),
            tasks,
            max_workers=self.max_workers,
        )
        results = []
        for task, outcome in zip(tasks, outcomes):
            if outcome.ok:
                results.append(
                    OperationResult(
                        task_id=task.id,
                        success=True,
                        original_assignee_id=task.responsible_uid,
                        new_assignee_id=None,
                    )
                )
            else:
                logger.warning(f"Failed to unassign task {task.id}: {outcome.error}")
                results.append(
                    OperationResult(
                        task_id=task.id,
                        success=False,
                        error=str(outcome.error) or "Update failed",
                        original_assignee_id=task.responsible_uid,
                    )
                )
        return results

    def _assign(
        self, client, valid: list[tuple[Task, ValidationResult]]
    ) -> list[OperationResult]:
        outcomes = settle_all(
            lambda item: client.update_task(
                item[0].id, assignee_id=item[1].resolved_user.user_id
            ),
            valid,
            max_workers=self.max_workers,
        )
        results = []
        for (task, validation), outcome in zip(valid, outcomes):
            if outcome.ok:
                results.append(
                    OperationResult(
                        task_id=task.id,
                        success=True,
                        original_assignee_id=task.responsible_uid,
                        new_assignee_id=validation.resolved_user.user_id,
                    )
                )
            else:
                logger.warning(f"Failed to assign task {task.id}: {outcome.error}")
                results.append(
                    OperationResult(
                        task_id=task.id,
                        success=False,
                        error=str(outcome.error) or "Update failed",
                        original_assignee_id=task.responsible_uid,
                    )
                )
        return results

    def _build_output(
        self,
        operation: str,
        task_ids: list[str],
        operation_results: list[OperationResult],
        validation_errors: list[OperationResult],
        task_errors: list[OperationResult],
        dry_run: bool,
    ) -> ToolOutput:
        results = operation_results + validation_errors + task_errors
        successful = sum(1 for r in results if r.success)
        failed = sum(1 for r in results if not r.success)

        return get_tool_output(
            text_content=generate_text_content(operation, results, dry_run),
            structured_content={
                "operation": operation,
                "results": [r.to_dict() for r in results],
                "totalRequested": len(task_ids),
                "successful": successful,
                "failed": failed,
                "dryRun": dry_run,
            },
        )


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def generate_text_content(
    operation: str, results: list[OperationResult], dry_run: bool
) -> str:
    successful = [r for r in results if r.success]
    failed = [r for r in results if not r.success]

    verb = "would be" if dry_run else "were"
    lines = [f"**{'Dry Run: ' if dry_run else ''}Bulk {operation} operation**", ""]

    if successful:
        lines.append(
            f"**{_plural(len(successful), 'task')} {verb} successfully {PAST_TENSE[operation]}**"
        )
        for result in successful[:PREVIEW_LIMIT]:
            if operation == "unassign":
                change = " (unassigned from previous assignee)"
            elif result.new_assignee_id:
                change = f" → {result.new_assignee_id}"
            else:
                change = ""
            lines.append(f"  • Task {result.task_id}{change}")
        if len(successful) > PREVIEW_LIMIT:
            lines.append(f"  • ... and {len(successful) - PREVIEW_LIMIT} more")
        lines.append("")

    if failed:
        lines.append(f"**{_plural(len(failed), 'task')} failed**")
        for result in failed[:PREVIEW_LIMIT]:
            lines.append(f"  • Task {result.task_id}: {result.error}")
        if len(failed) > PREVIEW_LIMIT:
            lines.append(f"  • ... and {len(failed) - PREVIEW_LIMIT} more failures")
        lines.append("")

    if not dry_run and successful:
        newly = "unassigned" if operation == "unassign" else "newly assigned"
        lines.append("**Next steps:**")
        lines.append(f"• Use {tool_names.FIND_TASKS} with responsibleUser to see {newly} tasks")
        lines.append(f"• Use {tool_names.UPDATE_TASKS} for individual assignment changes")
        if failed:
            lines.append(
                f"• Check failed tasks and use {tool_names.FIND_PROJECT_COLLABORATORS} "
                "to verify collaborator access"
            )
    elif dry_run:
        lines.append("**To execute:**")
        lines.append("• Remove dryRun parameter and run again to execute changes")
        if successful:
            lines.append(
                f"• {_plural(len(successful), 'task')} ready for {operation} operation"
            )
        if failed:
            lines.append(
                f"• Fix {_plural(len(failed), 'validation error')} before executing"
            )
    else:
        lines.append("**Suggestions:**")
        lines.append(
            f"• Use {tool_names.FIND_PROJECT_COLLABORATORS} to find valid assignees"
        )
        lines.append("• Check task IDs and assignee permissions")
        lines.append("• Use dryRun=true to validate before executing")

    return "\n".join(lines) + "\n"
