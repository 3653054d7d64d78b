"""
API Tests for ranklist.

Tests all endpoints of the lists router plus root and health.
Uses pytest with FastAPI TestClient.
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(workflow):
    """Test client serving the workflow fixture."""
    from ranklist.api.main import app
    from ranklist.api.dependencies import get_workflow

    app.dependency_overrides[get_workflow] = lambda: workflow
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def open_list(client, list_id="fruits"):
    response = client.post(f"/lists/{list_id}/open")
    assert response.status_code == 200
    return response.json()


# =============================================================================
# Root and Health Tests (API-001 to API-002)
# =============================================================================

class TestRootEndpoints:
    """Test service endpoints."""

    def test_root(self, client):
        """API-001: Root returns service info."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "ranklist API"
        assert data["health"] == "/health"
        assert "X-Response-Time-Ms" in response.headers

    def test_health(self, client, tmp_path):
        """API-002: Health reports status and storage writability."""
        from ranklist.config.settings import configure

        configure(state_dir=str(tmp_path))
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["storage_writable"] is True
        assert data["timestamp"].endswith("Z")


# =============================================================================
# List Discovery Tests (API-010 to API-012)
# =============================================================================

class TestListDiscovery:
    """Test GET /lists."""

    def test_lists(self, client):
        """API-010: Lists come from the index."""
        response = client.get("/lists")

        assert response.status_code == 200
        data = response.json()
        assert [entry["id"] for entry in data["lists"]] == ["fruits", "stone_fruit", "single"]
        assert data["lists"][1]["label"] == "Stone Fruit"
        assert data["selected_list_id"] is None

    def test_selected_list_reported(self, client):
        """API-011: The last opened list is reported as selected."""
        open_list(client, "stone_fruit")

        assert client.get("/lists").json()["selected_list_id"] == "stone_fruit"

    def test_missing_index(self, tmp_path, gateway, settings):
        """API-012: A missing index answers 503."""
        from ranklist.api.main import app
        from ranklist.api.dependencies import get_workflow
        from ranklist.data.loader import ListDirectorySource
        from ranklist.workflow import RankingWorkflow

        workflow = RankingWorkflow(ListDirectorySource(tmp_path / "empty"), gateway, settings)
        app.dependency_overrides[get_workflow] = lambda: workflow
        try:
            with TestClient(app) as client:
                response = client.get("/lists")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503


# =============================================================================
# Session Tests (API-020 to API-024)
# =============================================================================

class TestOpenList:
    """Test POST /lists/{list_id}/open and GET /lists/{list_id}/matchup."""

    def test_open(self, client):
        """API-020: Opening returns items, matchup and standings."""
        data = open_list(client)

        assert data["list_id"] == "fruits"
        assert data["label"] == "Fruits"
        assert len(data["items"]) == 4
        assert len(data["standings"]) == 4
        assert data["comparisons"] == 0
        matchup = data["matchup"]
        assert matchup["left_index"] != matchup["right_index"]
        assert matchup["left"] == data["items"][matchup["left_index"]]

    def test_open_unknown(self, client):
        """API-021: Unknown lists answer 404."""
        response = client.post("/lists/vegetables/open")

        assert response.status_code == 404

    def test_open_malformed(self, client, assets_dir):
        """API-022: Malformed list files answer 422."""
        (assets_dir / "lists" / "broken.json").write_text("[1, 2", encoding="utf-8")

        response = client.post("/lists/broken/open")

        assert response.status_code == 422

    def test_matchup(self, client):
        """API-023: The current matchup matches the one from opening."""
        opened = open_list(client)

        response = client.get("/lists/fruits/matchup")

        assert response.status_code == 200
        assert response.json()["matchup"] == opened["matchup"]

    def test_matchup_idle(self, client):
        """API-024: One-item lists report a null matchup."""
        open_list(client, "single")

        response = client.get("/lists/single/matchup")

        assert response.status_code == 200
        assert response.json()["matchup"] is None

    def test_matchup_not_open(self, client):
        """API-025: Lists that were not opened answer 404."""
        response = client.get("/lists/fruits/matchup")

        assert response.status_code == 404


# =============================================================================
# Choice Tests (API-030 to API-034)
# =============================================================================

class TestChoices:
    """Test POST /lists/{list_id}/choices and skip."""

    def test_choice(self, client):
        """API-030: A choice is recorded and a new matchup returned."""
        opened = open_list(client)
        winner_id = opened["matchup"]["left"]["id"]

        response = client.post("/lists/fruits/choices", json={"winner_id": winner_id})

        assert response.status_code == 200
        data = response.json()
        assert data["comparisons"] == 1
        assert data["matchup"] is not None
        top = data["standings"][0]
        assert top["item"]["id"] == winner_id
        assert top["wins"] == 1

    def test_choice_not_in_matchup(self, client):
        """API-031: Choosing an item outside the matchup answers 400."""
        opened = open_list(client)
        shown = {opened["matchup"]["left"]["id"], opened["matchup"]["right"]["id"]}
        outsider = next(item["id"] for item in opened["items"] if item["id"] not in shown)

        response = client.post("/lists/fruits/choices", json={"winner_id": outsider})

        assert response.status_code == 400

    def test_choice_missing_body(self, client):
        """API-032: A request without winner_id fails validation."""
        open_list(client)

        response = client.post("/lists/fruits/choices", json={})

        assert response.status_code == 422

    def test_choice_not_open(self, client):
        """API-033: Choices on unopened lists answer 404."""
        response = client.post("/lists/fruits/choices", json={"winner_id": "banana"})

        assert response.status_code == 404

    def test_skip(self, client):
        """API-034: Skipping returns a matchup without recording anything."""
        open_list(client)

        response = client.post("/lists/fruits/skip")

        assert response.status_code == 200
        data = response.json()
        assert data["comparisons"] == 0
        assert data["matchup"] is not None
        assert all(row["matches"] == 0 for row in data["standings"])


# =============================================================================
# Standings Tests (API-040 to API-041)
# =============================================================================

class TestStandings:
    """Test GET /lists/{list_id}/standings."""

    def test_standings(self, client):
        """API-040: Standings are ranked rows."""
        open_list(client, "stone_fruit")

        response = client.get("/lists/stone_fruit/standings")

        assert response.status_code == 200
        data = response.json()
        assert data["list_id"] == "stone_fruit"
        assert [row["rank"] for row in data["standings"]] == [1, 2]
        assert data["standings"][0]["rating"] == pytest.approx(1000.0)

    def test_standings_not_open(self, client):
        """API-041: Standings of unopened lists answer 404."""
        response = client.get("/lists/stone_fruit/standings")

        assert response.status_code == 404


# =============================================================================
# Dependency Tests (API-050 to API-052)
# =============================================================================

class TestDependencies:
    """Test the default workflow dependency."""

    def test_workflow_built_from_settings(self, assets_dir, tmp_path):
        """API-050: get_workflow() uses the configured directories once."""
        from ranklist.api.dependencies import get_workflow, cleanup
        from ranklist.config.settings import configure

        configure(assets_dir=str(assets_dir), state_dir=str(tmp_path / "state"))
        cleanup()
        try:
            workflow = get_workflow()

            assert get_workflow() is workflow
            assert str(workflow.source.root) == str(assets_dir)
            assert [info.id for info in workflow.available_lists()][0] == "fruits"
        finally:
            cleanup()

    def test_selected_list_reopened(self, assets_dir, tmp_path):
        """API-051: The list selected in a previous run is reopened on startup."""
        from ranklist.api.dependencies import get_workflow, cleanup
        from ranklist.config.settings import configure
        from ranklist.core.state import AppState
        from ranklist.storage.blob_store import JsonFileBlobStore
        from ranklist.storage.gateway import StateGateway

        state_dir = tmp_path / "state"
        StateGateway(JsonFileBlobStore(state_dir)).save(AppState(selected_list_id="stone_fruit"))
        configure(assets_dir=str(assets_dir), state_dir=str(state_dir))
        cleanup()
        try:
            session = get_workflow().session("stone_fruit")

            assert session.matchup is not None
            assert [item.id for item in session.items] == ["peach", "plum"]
        finally:
            cleanup()

    def test_vanished_selected_list(self, assets_dir, tmp_path, caplog):
        """API-052: A selected list that no longer exists is skipped with a warning."""
        import logging
        from ranklist.api.dependencies import get_workflow, cleanup
        from ranklist.config.settings import configure
        from ranklist.core.state import AppState
        from ranklist.storage.blob_store import JsonFileBlobStore
        from ranklist.storage.gateway import StateGateway
        from ranklist.workflow import SessionNotFoundError

        state_dir = tmp_path / "state"
        StateGateway(JsonFileBlobStore(state_dir)).save(AppState(selected_list_id="vegetables"))
        configure(assets_dir=str(assets_dir), state_dir=str(state_dir))
        cleanup()
        try:
            with caplog.at_level(logging.WARNING, logger="ranklist.api.dependencies"):
                workflow = get_workflow()

            assert "Could not reopen list 'vegetables'" in caplog.text
            with pytest.raises(SessionNotFoundError):
                workflow.session("vegetables")
        finally:
            cleanup()
