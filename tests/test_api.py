"""
Basic tests for the FastAPI endpoints.

These tests drive the API against the in-memory store, which is reset
before every test.
"""

import json

import pytest
from fastapi.testclient import TestClient

from api.services.matching import matching_service
from main import app

client = TestClient(app)

SEEKER = {
    "id": "seeker-1",
    "skills": ["JavaScript", "React"],
    "experience_years": 3,
    "preferred_locations": ["Remote"],
    "preferred_job_types": ["full-time"],
}

REACT_JOB = {
    "id": "job-a",
    "employer_id": "employer-1",
    "title": "React Engineer",
    "company_name": "Acme",
    "employment_type": "full-time",
    "location": "Remote",
    "is_remote": True,
    "experience_required_min": 2,
    "experience_required_max": 5,
    "skills_required": ["JavaScript", "React"],
    "status": "active",
    "created_at": "2025-09-03T00:00:00Z",
}

CONTRACT_JOB = {
    "id": "job-b",
    "employer_id": "employer-1",
    "title": "Backend Contractor",
    "company_name": "Acme",
    "employment_type": "contract",
    "location": "NYC",
    "experience_required_min": 2,
    "experience_required_max": 5,
    "skills_required": ["JavaScript", "Python"],
    "status": "active",
    "created_at": "2025-09-04T00:00:00Z",
}


@pytest.fixture(autouse=True)
def fresh_store():
    matching_service.reset()
    yield
    matching_service.reset()


@pytest.fixture
def ingested():
    response = client.post(
        "/ingest/", json={"jobs": [REACT_JOB, CONTRACT_JOB], "profiles": [SEEKER]}
    )
    assert response.status_code == 200
    return response.json()


def test_root_endpoint():
    """Test the root endpoint returns API information."""
    response = client.get("/")
    assert response.status_code == 200

    data = response.json()
    assert "name" in data
    assert "endpoints" in data
    assert "Job Matching Service" in data["name"]


def test_ingest_endpoint_validation():
    """Test the ingest endpoint with invalid data."""
    response = client.post("/ingest/", json={"invalid": "data"})
    assert response.status_code == 422

    response = client.post("/ingest/", json={"jobs": [{"id": "job-x"}], "profiles": []})
    assert response.status_code == 422


def test_ingest_reports_store_sizes(ingested):
    assert ingested == {
        "jobs_loaded": 2,
        "profiles_loaded": 1,
        "jobs_store_size": 2,
        "profiles_store_size": 1,
    }


def test_feed_validation():
    """Test feed endpoint parameter validation."""
    assert client.get("/feed").status_code == 422
    assert client.get("/feed?seeker_id=seeker-1&k=0").status_code == 422
    assert client.get("/feed?seeker_id=seeker-1&k=1000").status_code == 422


def test_feed_for_unknown_seeker():
    response = client.get("/feed?seeker_id=nobody")
    assert response.status_code == 404


def test_feed_ranks_by_match_score(ingested):
    response = client.get("/feed?seeker_id=seeker-1")
    assert response.status_code == 200

    data = response.json()
    assert [item["job"]["id"] for item in data["results"]] == ["job-a", "job-b"]
    assert data["results"][0]["match_score"] == 100
    assert data["results"][0]["match_score"] > data["results"][1]["match_score"]
    assert data["total_results"] == 2
    assert not data["is_exhausted"]


def test_feed_filters_from_query(ingested):
    response = client.get("/feed?seeker_id=seeker-1&location=nyc")
    assert [item["job"]["id"] for item in response.json()["results"]] == ["job-b"]

    response = client.get("/feed?seeker_id=seeker-1&remote_only=true")
    assert [item["job"]["id"] for item in response.json()["results"]] == ["job-a"]


def test_apply_then_repeat_is_conflict(ingested):
    response = client.post(
        "/decisions",
        json={"seeker_id": "seeker-1", "job_id": "job-a", "action": "apply"},
    )
    assert response.status_code == 200

    data = response.json()
    assert data["application"]["job_id"] == "job-a"
    assert data["application"]["status"] == "applied"
    assert data["intents"] == [
        "record_swipe",
        "create_application",
        "bootstrap_conversation",
        "toggle_save",
        "exclude_from_feed",
    ]
    assert data["saved"] is True

    response = client.post(
        "/decisions",
        json={"seeker_id": "seeker-1", "job_id": "job-a", "action": "apply"},
    )
    assert response.status_code == 409

    applications = client.get("/applications?applicant_id=seeker-1").json()
    assert applications["total_results"] == 1


def test_pass_removes_job_from_feed(ingested):
    response = client.post(
        "/decisions",
        json={"seeker_id": "seeker-1", "job_id": "job-b", "action": "pass"},
    )
    assert response.status_code == 200
    assert response.json()["application"] is None

    feed = client.get("/feed?seeker_id=seeker-1").json()
    assert [item["job"]["id"] for item in feed["results"]] == ["job-a"]


def test_decision_validation(ingested):
    response = client.post(
        "/decisions",
        json={"seeker_id": "seeker-1", "job_id": "job-a", "action": "superlike"},
    )
    assert response.status_code == 422

    response = client.post(
        "/decisions",
        json={"seeker_id": "seeker-1", "job_id": "missing", "action": "apply"},
    )
    assert response.status_code == 404


def test_toggle_save(ingested):
    response = client.post(
        "/saved/toggle", json={"seeker_id": "seeker-1", "job_id": "job-b"}
    )
    assert response.json() == {"job_id": "job-b", "saved": True}
    assert client.get("/saved?seeker_id=seeker-1").json()["job_ids"] == ["job-b"]

    feed = client.get("/feed?seeker_id=seeker-1").json()
    saved_flags = {item["job"]["id"]: item["is_saved"] for item in feed["results"]}
    assert saved_flags == {"job-a": False, "job-b": True}

    response = client.post(
        "/saved/toggle", json={"seeker_id": "seeker-1", "job_id": "job-b"}
    )
    assert response.json()["saved"] is False
    assert client.get("/saved?seeker_id=seeker-1").json()["job_ids"] == []


def test_save_decision_is_idempotent(ingested):
    for _ in range(2):
        response = client.post(
            "/decisions",
            json={"seeker_id": "seeker-1", "job_id": "job-b", "action": "save"},
        )
        assert response.status_code == 200
        assert response.json()["saved"] is True

    assert client.get("/saved?seeker_id=seeker-1").json()["job_ids"] == ["job-b"]


def test_new_job_waits_for_approval(ingested):
    new_job = dict(REACT_JOB, id="job-c", title="Senior React Engineer")

    response = client.post("/jobs", json=new_job)
    assert response.status_code == 201
    assert response.json()["status"] == "pending_approval"

    feed = client.get("/feed?seeker_id=seeker-1").json()
    assert "job-c" not in [item["job"]["id"] for item in feed["results"]]

    employer = client.get("/jobs/employer/employer-1").json()
    assert "job-c" in [item["job"]["id"] for item in employer["results"]]

    response = client.post("/jobs/job-c/approve")
    assert response.status_code == 200
    assert response.json()["status"] == "active"

    feed = client.get("/feed?seeker_id=seeker-1").json()
    assert "job-c" in [item["job"]["id"] for item in feed["results"]]


def test_job_rejection(ingested):
    client.post("/jobs", json=dict(REACT_JOB, id="job-c"))

    response = client.post("/jobs/job-c/reject", json={"reason": "   "})
    assert response.status_code == 422

    response = client.post("/jobs/job-c/reject", json={"reason": "Duplicate posting"})
    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["rejection_reason"] == "Duplicate posting"

    response = client.post("/jobs/job-c/approve")
    assert response.status_code == 409

    assert client.post("/jobs/missing/approve").status_code == 404


def test_application_status_updates(ingested):
    client.post(
        "/decisions",
        json={"seeker_id": "seeker-1", "job_id": "job-a", "action": "apply"},
    )
    application = client.get("/applications?job_id=job-a").json()["results"][0]

    response = client.patch(
        f"/applications/{application['id']}/status",
        json={"status": "rejected", "notes": "Position filled"},
    )
    assert response.status_code == 200
    assert response.json()["rejection_reason"] == "Position filled"

    response = client.patch(
        f"/applications/{application['id']}/status", json={"status": "interview"}
    )
    assert response.status_code == 409

    response = client.patch(
        "/applications/missing/status", json={"status": "viewed"}
    )
    assert response.status_code == 404


def test_decision_on_closed_job_is_conflict(ingested):
    client.post("/ingest/", json={"jobs": [dict(REACT_JOB, id="job-x", status="closed")]})

    response = client.post(
        "/decisions",
        json={"seeker_id": "seeker-1", "job_id": "job-x", "action": "apply"},
    )
    assert response.status_code == 409
    assert "closed" in response.json()["detail"]

    assert client.get("/applications?job_id=job-x").json()["total_results"] == 0
    assert client.get("/saved?seeker_id=seeker-1").json()["job_ids"] == []


def test_decision_from_unknown_seeker(ingested):
    response = client.post(
        "/decisions",
        json={"seeker_id": "ghost", "job_id": "job-a", "action": "apply"},
    )
    assert response.status_code == 404
    assert client.get("/applications?applicant_id=ghost").json()["total_results"] == 0

    response = client.post("/saved/toggle", json={"seeker_id": "ghost", "job_id": "job-a"})
    assert response.status_code == 404


def test_create_job_with_existing_id_is_conflict(ingested):
    response = client.post("/jobs", json=dict(REACT_JOB, employer_id="employer-2"))
    assert response.status_code == 409

    employer = client.get("/jobs/employer/employer-1").json()
    job = next(item["job"] for item in employer["results"] if item["job"]["id"] == "job-a")
    assert job["status"] == "active"
    assert client.get("/jobs/employer/employer-2").json()["results"] == []


def test_ingest_from_json_files(tmp_path):
    jobs_file = tmp_path / "jobs.json"
    profiles_file = tmp_path / "profiles.json"
    jobs_file.write_text(json.dumps([REACT_JOB, CONTRACT_JOB]), encoding="utf-8")
    profiles_file.write_text(json.dumps([SEEKER]), encoding="utf-8")

    response = client.post(
        "/ingest/from-json",
        params={"jobs_file": str(jobs_file), "profiles_file": str(profiles_file)},
    )
    assert response.status_code == 200
    assert response.json()["jobs_loaded"] == 2
    assert response.json()["profiles_loaded"] == 1

    feed = client.get("/feed?seeker_id=seeker-1").json()
    assert [item["job"]["id"] for item in feed["results"]] == ["job-a", "job-b"]


def test_ingest_from_json_missing_and_invalid_files(tmp_path):
    response = client.post(
        "/ingest/from-json",
        params={
            "jobs_file": str(tmp_path / "missing.json"),
            "profiles_file": str(tmp_path / "also-missing.json"),
        },
    )
    assert response.status_code == 200
    assert response.json()["jobs_store_size"] == 0

    broken = tmp_path / "broken.json"
    broken.write_text(json.dumps([{"id": "job-x"}]), encoding="utf-8")
    response = client.post("/ingest/from-json", params={"jobs_file": str(broken)})
    assert response.status_code == 400


if __name__ == "__main__":
    pytest.main([__file__])
