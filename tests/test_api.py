"""
HTTP API tests with a mocked workflow planner
"""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from database_agents.agents.agent_planner import WorkflowPlanner
from database_agents.api.main import API_KEY_ERROR, app, get_planner
from database_agents.config.config import API_KEY_PLACEHOLDER, Config
from database_agents.config.state import (
    AnalysisResult,
    BuildResult,
    SampleDataResult,
    WorkflowResult,
)


@pytest.fixture
def planner():
    return Mock(spec=WorkflowPlanner)


@pytest.fixture
def client(planner, monkeypatch):
    monkeypatch.setattr(Config, "OPENAI_API_KEY", "sk-test-key")
    app.dependency_overrides[get_planner] = lambda: planner
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.mark.parametrize("api_key", [None, "", API_KEY_PLACEHOLDER])
def test_unconfigured_api_key_blocks_every_route(client, planner, monkeypatch, api_key):
    monkeypatch.setattr(Config, "OPENAI_API_KEY", api_key)

    for path in ["/design", "/build", "/sample-data", "/analyze", "/workflow"]:
        response = client.post(path, json={"requirements": "r", "schema": "s", "request": "q"})
        assert response.status_code == 500
        assert response.json() == {"error": API_KEY_ERROR}

    planner.design_schema.assert_not_called()
    planner.add_sample_data.assert_not_called()


def test_design_returns_schema(client, planner):
    planner.design_schema.return_value = "CREATE TABLE a (id INTEGER);"

    response = client.post("/design", json={"requirements": "A single table"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "schema": "CREATE TABLE a (id INTEGER);"}
    planner.design_schema.assert_called_once_with("A single table")


@pytest.mark.parametrize("body", [{}, {"requirements": ""}, {"requirements": "   "}])
def test_design_requires_requirements(client, planner, body):
    response = client.post("/design", json=body)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Requirements are required"}
    planner.design_schema.assert_not_called()


def test_design_without_body_is_a_client_error(client):
    response = client.post("/design")

    assert response.status_code == 400
    assert response.json()["error"] == "Requirements are required"


def test_design_provider_error_is_server_error(client, planner):
    planner.design_schema.side_effect = RuntimeError("invalid api key")

    response = client.post("/design", json={"requirements": "A single table"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "invalid api key"}


def test_build_returns_build_result(client, planner):
    planner.build_database.return_value = BuildResult(
        success=True,
        message="Database built successfully",
        statements=["CREATE TABLE a (id INTEGER);"]
    )

    response = client.post("/build", json={"schema": "CREATE TABLE a (id INTEGER)"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Database built successfully",
        "statements": ["CREATE TABLE a (id INTEGER);"],
    }
    planner.build_database.assert_called_once_with("CREATE TABLE a (id INTEGER)")


def test_build_failure_is_returned_as_result(client, planner):
    planner.build_database.return_value = BuildResult(success=False, message="Error building database: boom")

    response = client.post("/build", json={"schema": "CREATE TABLE"})

    assert response.status_code == 200
    assert response.json() == {"success": False, "message": "Error building database: boom"}


def test_build_requires_schema(client):
    response = client.post("/build", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "Schema is required"


def test_sample_data(client, planner):
    planner.add_sample_data.return_value = SampleDataResult(success=True, message="Sample data added successfully")

    response = client.post("/sample-data")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Sample data added successfully"}


def test_analyze_returns_analysis(client, planner):
    planner.analyze.return_value = AnalysisResult(
        success=True,
        query="SELECT name FROM users",
        results=[{"name": "Ann"}],
        insights="One user.",
        agent_response="```sql\nSELECT name FROM users\n```"
    )

    response = client.post("/analyze", json={"request": "Who are the users?"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["query"] == "SELECT name FROM users"
    assert body["results"] == [{"name": "Ann"}]
    assert body["insights"] == "One user."
    assert "message" not in body
    planner.analyze.assert_called_once_with("Who are the users?")


def test_analyze_requires_request(client):
    response = client.post("/analyze", json={"question": "wrong field"})

    assert response.status_code == 400
    assert response.json()["error"] == "Request is required"


def test_analyze_schema_error_is_server_error(client, planner):
    planner.analyze.side_effect = RuntimeError("database is locked")

    response = client.post("/analyze", json={"request": "anything"})

    assert response.status_code == 500
    assert response.json()["error"] == "database is locked"


def test_workflow_passes_sample_data_flag(client, planner):
    planner.run_workflow.return_value = WorkflowResult(
        success=True,
        schema_text="CREATE TABLE a (id INTEGER);",
        build_result=BuildResult(success=True, message="Database built successfully", statements=[]),
        sample_data_result=SampleDataResult(success=True, message="Sample data added successfully"),
        analysis_result=AnalysisResult(success=True, query="SELECT 1 FROM a", results=[], insights="None.")
    )

    response = client.post(
        "/workflow",
        json={"requirements": "r", "request": "q", "includeSampleData": True}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["schema"] == "CREATE TABLE a (id INTEGER);"
    assert body["analysis_result"]["insights"] == "None."
    planner.run_workflow.assert_called_once_with("r", "q", True)


def test_workflow_build_failure_names_step(client, planner):
    planner.run_workflow.return_value = WorkflowResult(
        success=False,
        step="build",
        error="Error building database: near \"(\": syntax error",
        schema_text="CREATE TABLE (",
        build_result=BuildResult(success=False, message="Error building database: near \"(\": syntax error")
    )

    response = client.post("/workflow", json={"requirements": "r", "request": "q"})

    body = response.json()
    assert body["success"] is False
    assert body["step"] == "build"
    assert body["schema"] == "CREATE TABLE ("
    assert "analysis_result" not in body
    planner.run_workflow.assert_called_once_with("r", "q", False)


@pytest.mark.parametrize("body, error", [
    ({"request": "q"}, "Requirements are required"),
    ({"requirements": "r"}, "Request is required"),
])
def test_workflow_requires_both_fields(client, planner, body, error):
    response = client.post("/workflow", json=body)

    assert response.status_code == 400
    assert response.json()["error"] == error
    planner.run_workflow.assert_not_called()


def test_invalid_field_type_is_a_client_error(client):
    response = client.post("/design", json={"requirements": ["not", "a", "string"]})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_design_with_empty_model_reply(client, planner):
    planner.design_schema.return_value = ""

    response = client.post("/design", json={"requirements": "A single table"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "schema": ""}
