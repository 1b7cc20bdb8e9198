"""
Tool names, kept in one place so cross-references in tool output never go
stale when a tool is renamed.
"""

MANAGE_ASSIGNMENTS = "manage-assignments"
FIND_PROJECT_COLLABORATORS = "find-project-collaborators"
GET_ASSIGNMENT_ELIGIBILITY = "get-assignment-eligibility"

# Tools referenced in guidance text; provided by other Todoist servers
FIND_TASKS = "find-tasks"
FIND_PROJECTS = "find-projects"
ADD_TASKS = "add-tasks"
UPDATE_TASKS = "update-tasks"
