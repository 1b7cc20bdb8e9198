"""
find-project-collaborators: list the people a project's tasks can be assigned to.
"""

import logging
from typing import Optional

from assignments import UserResolver
from todoist.models import Collaborator
from tool_base import FieldDefinition, FieldType, TodoistTool, ToolOutput, get_tool_output
from tools import tool_names
from tools.response_builders import summarize_list

logger = logging.getLogger(__name__)

PREVIEW_LIMIT = 10


class FindProjectCollaboratorsTool(TodoistTool):
    """Search collaborators of a shared project."""

    name = tool_names.FIND_PROJECT_COLLABORATORS
    description = "Search for collaborators by name or other criteria in a project."
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
                help_text="The ID of the project to search for collaborators in.",
            ),
            FieldDefinition(
                name="searchTerm",
                label="Search term",
                field_type=FieldType.TEXT,
                help_text=(
                    "Search for a collaborator by name or email (partial and case "
                    "insensitive match). If omitted, all collaborators in the project "
                    "are returned."
                ),
            ),
        ]

    def __init__(self, user_resolver: UserResolver):
        self.user_resolver = user_resolver

    def execute(self, args: dict, client) -> ToolOutput:
        project_id = args["projectId"]
        search_term = args.get("searchTerm")
        applied_filters = {k: v for k, v in args.items() if v is not None}

        try:
            project = client.get_project(project_id)
        except Exception as e:
            raise ValueError(f'Failed to access project "{project_id}": {e}') from e

        if not project.is_shared:
            text = (
                f'Project "{project.name}" is not shared and has no collaborators.\n\n'
                "**Next steps:**\n"
                "• Share the project to enable collaboration\n"
                f"• Use {tool_names.ADD_TASKS} and {tool_names.UPDATE_TASKS} for "
                "assignment features once shared"
            )
            return get_tool_output(
                text_content=text,
                structured_content={
                    "collaborators": [],
                    "projectInfo": {"id": project_id, "name": project.name, "isShared": False},
                    "totalCount": 0,
                    "appliedFilters": applied_filters,
                },
            )

        all_collaborators = self.user_resolver.get_project_collaborators(project_id)

        if not all_collaborators:
            text = (
                f'Project "{project.name}" has no collaborators or collaborator data '
                "is not accessible.\n\n"
                "**Next steps:**\n"
                "• Check project sharing settings\n"
                "• Ensure you have permission to view collaborators\n"
                "• Try refreshing or re-sharing the project"
            )
            return get_tool_output(
                text_content=text,
                structured_content={
                    "collaborators": [],
                    "projectInfo": {"id": project_id, "name": project.name, "isShared": True},
                    "totalCount": 0,
                    "appliedFilters": applied_filters,
                },
            )

        collaborators = all_collaborators
        if search_term:
            term = search_term.lower().strip()
            collaborators = [
                c for c in all_collaborators
                if term in c.name.lower() or term in c.email.lower()
            ]

        return get_tool_output(
            text_content=generate_text_content(
                collaborators, project.name, search_term, len(all_collaborators)
            ),
            structured_content={
                "collaborators": [c.to_dict() for c in collaborators],
                "projectInfo": {"id": project_id, "name": project.name, "isShared": True},
                "totalCount": len(collaborators),
                "totalAvailable": len(all_collaborators),
                "appliedFilters": applied_filters,
            },
        )


def generate_text_content(
    collaborators: list[Collaborator],
    project_name: str,
    search_term: Optional[str],
    total_available: int,
) -> str:
    if search_term:
        subject = f'Project collaborators matching "{search_term}"'
        filter_hints = [f'matching "{search_term}"', f'in project "{project_name}"']
    else:
        subject = "Project collaborators"
        filter_hints = [f'in project "{project_name}"']

    preview = [
        f"• {c.name or 'Unknown Name'} ({c.email or 'No email'}) - ID: {c.id}"
        for c in collaborators[:PREVIEW_LIMIT]
    ]
    if len(collaborators) > PREVIEW_LIMIT:
        preview.append(f"... and {len(collaborators) - PREVIEW_LIMIT} more")

    zero_reason_hints = []
    if not collaborators:
        if search_term:
            zero_reason_hints.append(f'No collaborators match "{search_term}"')
            zero_reason_hints.append("Try a broader search term or check spelling")
            if total_available:
                zero_reason_hints.append(
                    f"{total_available} collaborators available without filter"
                )
        else:
            zero_reason_hints.append("Project has no collaborators")
            zero_reason_hints.append("Share the project to add collaborators")

    if collaborators:
        next_steps = [
            f"Use {tool_names.ADD_TASKS} with responsibleUser to assign new tasks",
            f"Use {tool_names.UPDATE_TASKS} with responsibleUser to reassign existing tasks",
            f"Use {tool_names.MANAGE_ASSIGNMENTS} to assign several tasks at once",
        ]
    else:
        next_steps = [f"Use {tool_names.FIND_PROJECTS} to find other projects"]
        if search_term and total_available:
            next_steps.append("Try searching without filters to see all collaborators")

    return summarize_list(
        subject=subject,
        count=len(collaborators),
        filter_hints=filter_hints,
        preview_lines="\n".join(preview),
        zero_reason_hints=zero_reason_hints,
        next_steps=next_steps,
    )
