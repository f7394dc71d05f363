"""
BDD step definitions for health feature (pytest-bdd).
Challenge: Express requirements in Gherkin; map to HTTP calls.
"""

import pytest
from pytest_bdd import parsers, scenarios, then, when

# Load all scenarios from the feature file
scenarios("health.feature")


@pytest.fixture
def response():
    """Store last response for then steps."""
    return {}


@when(parsers.parse('I request "{method}" "{path}"'))
def request_path(sync_client, response, method, path):
    r = sync_client.request(method, path)
    response["status"] = r.status_code
    response["body"] = r.json()


@then(parsers.parse("the response status should be {status:d}"))
def response_status(response, status):
    assert response["status"] == status


@then(parsers.parse('the response body should have "{key}" equals "{value}"'))
def body_field_equals(response, key, value):
    assert response["body"].get(key) == value
