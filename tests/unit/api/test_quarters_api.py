"""HTTP tests for the v1 API, backed by the in-memory session."""

import pytest
from fastapi.testclient import TestClient

from whereabouts.api.dependencies import get_quarter_service
from whereabouts.core.errors import StoreError
from whereabouts.db.repositories.daily_slot import DailySlotRepository
from whereabouts.db.repositories.quarter import QuarterRepository
from whereabouts.db.session import get_db
from whereabouts.main import app
from whereabouts.services.quarter_service import QuarterService

ATHLETE = "athlete-1"

WEEK = {
    day: {"location_type": "training", "time_start": "07:00", "time_end": "08:00"}
    for day in ("monday", "tuesday", "wednesday", "thursday", "friday")
}
WEEK.update({day: {"location_type": "home", "time_start": "06:00", "time_end": "07:00"} for day in ("saturday", "sunday")})


@pytest.fixture
def client(session):
    app.dependency_overrides[get_db] = lambda: session
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def _create_with_pattern(client, quarter="Q1", year=2024):
    return client.post("/api/v1/quarters/with-pattern",
                       json={"athlete_id": ATHLETE, "year": year, "quarter": quarter, "pattern": WEEK})


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestQuarterEndpoints:
    def test_create_with_pattern(self, client):
        response = _create_with_pattern(client)
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["slots_created"] == 91
        assert body["quarter"]["status"] == "complete"

    def test_duplicate_is_conflict(self, client):
        _create_with_pattern(client)
        response = _create_with_pattern(client)
        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "already-exists"

    def test_invalid_pattern_is_422_with_issues(self, client):
        week = dict(WEEK, monday={"location_type": "home", "time_start": "06:00", "time_end": "08:00"})
        response = client.post("/api/v1/quarters/with-pattern",
                               json={"athlete_id": ATHLETE, "year": 2024, "quarter": "Q1", "pattern": week})
        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "validation-failed"
        assert error["details"]["issues"][0]["day"] == "monday"

    def test_unknown_quarter_is_404(self, client):
        response = client.get("/api/v1/quarters/999")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "not-found"

    def test_extract_and_copy(self, client):
        quarter_id = _create_with_pattern(client).json()["quarter"]["id"]

        pattern = client.get(f"/api/v1/quarters/{quarter_id}/pattern").json()["pattern"]
        assert pattern["monday"] == WEEK["monday"]

        response = client.post(f"/api/v1/quarters/{quarter_id}/copy-pattern",
                               json={"athlete_id": ATHLETE, "target_year": 2024, "target_quarter": "Q2"})
        assert response.status_code == 201
        assert response.json()["quarter"]["copied_from_quarter_id"] == quarter_id

    def test_extract_from_empty_quarter_is_failure(self, client):
        quarter_id = client.post("/api/v1/quarters",
                                 json={"athlete_id": ATHLETE, "year": 2024, "quarter": "Q1"}).json()["quarter"]["id"]

        response = client.get(f"/api/v1/quarters/{quarter_id}/pattern")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"]["message"] == "No slots found in quarter"

    def test_apply_pattern_overwrite(self, client):
        quarter_id = _create_with_pattern(client).json()["quarter"]["id"]
        gym_week = {day: {"location_type": "gym", "time_start": "18:00", "time_end": "19:00"} for day in WEEK}

        response = client.post(f"/api/v1/quarters/{quarter_id}/apply-pattern",
                               json={"athlete_id": ATHLETE, "pattern": gym_week, "overwrite": True})

        assert response.json() == {"success": True, "error": None, "slots_created": 91, "slots_updated": 91}

    def test_stats_and_slot_upsert(self, client):
        quarter_id = client.post("/api/v1/quarters",
                                 json={"athlete_id": ATHLETE, "year": 2024, "quarter": "Q1"}).json()["quarter"]["id"]

        response = client.put(f"/api/v1/quarters/{quarter_id}/slots/2024-01-03", params={"athlete_id": ATHLETE},
                              json={"location_type": "gym", "time_start": "18:00", "time_end": "19:00"})
        assert response.status_code == 200
        assert response.json()["slot"]["modification_count"] == 0

        body = client.get(f"/api/v1/quarters/{quarter_id}/stats").json()
        assert body["stats"]["completed_days"] == 1
        assert body["stats"]["missing_days"] == 90
        assert "2024-01-03" not in body["missing_dates"]
        assert body["missing_dates"][0] == "2024-01-01"

    def test_slot_with_bad_duration(self, client):
        quarter_id = client.post("/api/v1/quarters",
                                 json={"athlete_id": ATHLETE, "year": 2024, "quarter": "Q1"}).json()["quarter"]["id"]
        response = client.put(f"/api/v1/quarters/{quarter_id}/slots/2024-01-03", params={"athlete_id": ATHLETE},
                              json={"location_type": "gym", "time_start": "18:00", "time_end": "18:30"})
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "validation-failed"


class TestStatelessEndpoints:
    def test_validate_pattern(self, client):
        week = dict(WEEK)
        del week["sunday"]
        body = client.post("/api/v1/patterns/validate", json={"pattern": week}).json()
        assert body["success"] is True
        assert body["validation"]["is_valid"] is False
        assert body["validation"]["errors"][0]["message"] == "Sunday: Pattern not defined"

    def test_calendar(self, client):
        dates = client.get("/api/v1/calendar/2024/Q1").json()["dates"]
        assert dates == {"start_date": "2024-01-01", "end_date": "2024-03-31", "filing_deadline": "2023-12-15",
                         "total_days": 91}


class TestTemplateEndpoints:
    def test_save_apply_list(self, client):
        quarter_id = client.post("/api/v1/quarters",
                                 json={"athlete_id": ATHLETE, "year": 2024, "quarter": "Q3"}).json()["quarter"]["id"]
        template = client.post("/api/v1/templates",
                               json={"athlete_id": ATHLETE, "name": "Base", "pattern": WEEK}).json()["template"]

        applied = client.post(f"/api/v1/templates/{template['id']}/apply",
                              json={"athlete_id": ATHLETE, "quarter_id": quarter_id}).json()
        assert applied["slots_created"] == 92

        templates = client.get("/api/v1/templates", params={"athlete_id": ATHLETE}).json()["templates"]
        assert templates[0]["usage_count"] == 1


class TestStoreFailures:
    def test_partial_batch_failure_is_207(self, client, session, monkeypatch):
        app.dependency_overrides[get_quarter_service] = lambda: QuarterService(session, chunk_size=40)
        original = DailySlotRepository.create_many
        calls = {"n": 0}

        def flaky(self, rows):
            calls["n"] += 1
            if calls["n"] == 2:
                raise StoreError("simulated store outage")
            return original(self, rows)

        monkeypatch.setattr(DailySlotRepository, "create_many", flaky)

        response = _create_with_pattern(client)

        assert response.status_code == 207
        error = response.json()["error"]
        assert error["code"] == "partial-batch-failure"
        assert error["details"]["committed_count"] == 40
        assert error["details"]["failed_at_chunk"] == 2
        assert "quarter_id" in error["details"]

    def test_store_error_is_502(self, client, monkeypatch):
        def broken_create(self, quarter):
            raise StoreError("Failed to create quarter")

        monkeypatch.setattr(QuarterRepository, "create", broken_create)

        response = client.post("/api/v1/quarters", json={"athlete_id": ATHLETE, "year": 2024, "quarter": "Q1"})

        assert response.status_code == 502
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "store-error"
