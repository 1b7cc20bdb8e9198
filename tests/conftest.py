"""
Shared fixtures: a fake Todoist account and the objects wired around it.
"""

import pytest

from assignments import AssignmentValidator, UserResolver
from tests.fixtures.fake_todoist import make_workspace
from tools import create_registry


@pytest.fixture
def client():
    return make_workspace()


@pytest.fixture
def resolver(client):
    return UserResolver(client)


@pytest.fixture
def validator(client, resolver):
    return AssignmentValidator(client, resolver)


@pytest.fixture
def registry(client, resolver, validator):
    return create_registry(client, resolver, validator)
