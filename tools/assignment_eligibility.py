"""
get-assignment-eligibility: explain why tasks can or cannot go to a user.
"""

from assignments import AssignmentValidator
from tool_base import FieldDefinition, FieldType, TodoistTool, ToolOutput, get_tool_output
from tools import tool_names
from tools.manage_assignments import MAX_TASKS_PER_OPERATION


class AssignmentEligibilityTool(TodoistTool):
    """Read-only troubleshooting report for assignments in one project."""

    name = tool_names.GET_ASSIGNMENT_ELIGIBILITY
    description = (
        "Check whether tasks in a project can be assigned to a user, and get "
        "recommendations when they can't. Does not change anything."
    )
    read_only = True

    @classmethod
    def get_params(cls) -> list[FieldDefinition]:
        return [
            FieldDefinition(
                name="projectId",
                label="Project ID",
                field_type=FieldType.TEXT,
                required=True,
                min_length=1,
                help_text="The project the tasks live in.",
            ),
            FieldDefinition(
                name="responsibleUser",
                label="Assignee",
                field_type=FieldType.TEXT,
                required=True,
                min_length=1,
                help_text="The intended assignee. Can be user ID, name, or email.",
            ),
            FieldDefinition(
                name="taskIds",
                label="Task IDs",
                field_type=FieldType.STRING_LIST,
                max_length=MAX_TASKS_PER_OPERATION,
                help_text="Optional task IDs to check for accessibility.",
            ),
        ]

    def __init__(self, validator: AssignmentValidator):
        self.validator = validator

    def execute(self, args: dict, client) -> ToolOutput:
        report = self.validator.get_assignment_eligibility(
            args["projectId"], args["responsibleUser"], args.get("taskIds")
        )

        project = report.project_info
        lines = [
            f"**Assignment eligibility for project \"{project['name']}\"**",
            "",
            f"Can assign: {'yes' if report.can_assign else 'no'}",
            f"Shared: {'yes' if project['isShared'] else 'no'}"
            f" ({project['collaboratorCount']} collaborators)",
        ]
        if report.user_info:
            lines.append(
                f"User: {report.user_info['resolvedName']}"
                f" (collaborator: {'yes' if report.user_info['isCollaborator'] else 'no'})"
            )
        if report.task_info:
            lines.append(
                f"Tasks: {report.task_info['accessibleTasks']} accessible, "
                f"{report.task_info['inaccessibleTasks']} not accessible"
            )
        lines.append("")
        lines.append("**Recommendations:**")
        lines.extend(f"• {r}" for r in report.recommendations)

        return get_tool_output(
            text_content="\n".join(lines), structured_content=report.to_dict()
        )
