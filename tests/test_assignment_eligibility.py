"""
Unit tests for tools/assignment_eligibility.py
"""

from tools import tool_names


def call(registry, **arguments):
    return registry.call(tool_names.GET_ASSIGNMENT_ELIGIBILITY, arguments)


class TestAssignmentEligibilityTool:
    """Tests for the get-assignment-eligibility tool."""

    def test_ready(self, client, registry):
        output = call(registry, projectId="p1", responsibleUser="Alice Smith", taskIds=["t1"])

        assert output.is_error is False
        assert output.structured_content["canAssign"] is True
        assert output.structured_content["taskInfo"] == {
            "accessibleTasks": 1,
            "inaccessibleTasks": 0,
        }
        assert "Can assign: yes" in output.text
        assert "User: Alice Smith (collaborator: yes)" in output.text
        assert "• Ready to assign tasks to Alice Smith" in output.text
        assert client.updates == []

    def test_not_shared(self, registry):
        output = call(registry, projectId="p2", responsibleUser="Alice Smith")

        assert output.structured_content["canAssign"] is False
        assert "Shared: no (0 collaborators)" in output.text
        assert "User:" not in output.text

    def test_missing_project(self, registry):
        output = call(registry, projectId="nope", responsibleUser="Alice Smith")

        assert output.is_error is False
        assert '**Assignment eligibility for project "Unknown"**' in output.text

    def test_responsible_user_required(self, registry):
        output = call(registry, projectId="p1")
        assert output.is_error is True
        assert "responsibleUser" in output.text
