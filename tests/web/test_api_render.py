"""Tests for render API endpoints."""

from fastapi.testclient import TestClient

from storyvid.web.backend.services.job_manager import JobManager, JobStatus


class TestStartRender:
    """Tests for POST /api/render."""

    def test_start_render(self, test_client: TestClient, job_manager: JobManager) -> None:
        response = test_client.post(
            "/api/render",
            json={"projectId": "project-1", "config": {"resolution": "1080p", "fps": 30}},
        )
        assert response.status_code == 202
        data = response.json()
        assert data["jobId"].startswith("job_")
        assert data["estimatedDuration"] == 120

        job = job_manager.get_job(data["jobId"])
        assert job is not None
        assert job.project_id == "project-1"
        assert job.config == {"resolution": "1080p", "fps": 30}

    def test_missing_project_id(self, test_client: TestClient, job_manager: JobManager) -> None:
        response = test_client.post("/api/render", json={"config": {}})
        assert response.status_code == 400
        assert response.json() == {"error": "Project ID and config are required"}
        assert job_manager.list_jobs() == []

    def test_missing_config(self, test_client: TestClient, job_manager: JobManager) -> None:
        response = test_client.post("/api/render", json={"projectId": "project-1"})
        assert response.status_code == 400
        assert response.json()["error"] == "Project ID and config are required"
        assert job_manager.list_jobs() == []

    def test_null_config(self, test_client: TestClient) -> None:
        response = test_client.post("/api/render", json={"projectId": "project-1", "config": None})
        assert response.status_code == 400

    def test_malformed_body(self, test_client: TestClient) -> None:
        response = test_client.post("/api/render", json={"projectId": ["not", "a", "string"], "config": {}})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"
        assert response.json()["details"]


class TestGetRender:
    """Tests for GET /api/render."""

    def test_poll_until_complete(self, test_client: TestClient, wait_until) -> None:
        job_id = test_client.post(
            "/api/render", json={"projectId": "project-1", "config": {}}
        ).json()["jobId"]

        def completed() -> bool:
            return test_client.get("/api/render", params={"jobId": job_id}).json()["job"]["status"] == "completed"

        assert wait_until(completed)

        job = test_client.get("/api/render", params={"jobId": job_id}).json()["job"]
        assert job["id"] == job_id
        assert job["projectId"] == "project-1"
        assert job["progress"] == 100
        assert job["currentStep"] == "Render complete!"
        assert job["outputUrl"] == f"/videos/{job_id}.mp4"
        assert job["estimatedTimeRemaining"] == 0
        assert job["endTime"] is not None
        assert job["error"] is None

    def test_unknown_job(self, test_client: TestClient) -> None:
        response = test_client.get("/api/render", params={"jobId": "job_0_missing"})
        assert response.status_code == 404
        assert response.json() == {"error": "Render job not found"}

    def test_missing_job_id(self, test_client: TestClient) -> None:
        response = test_client.get("/api/render")
        assert response.status_code == 400
        assert response.json() == {"error": "Job ID is required"}

    def test_failed_job(self, test_client: TestClient, job_manager: JobManager, wait_until) -> None:
        def fail(job, phase):
            if phase.status == JobStatus.ENCODING:
                raise RuntimeError("Encoder crashed")

        job_manager.phase_runner = fail
        job_id = test_client.post(
            "/api/render", json={"projectId": "project-1", "config": {}}
        ).json()["jobId"]

        assert wait_until(lambda: job_manager.get_job(job_id).status == JobStatus.FAILED)
        job = test_client.get("/api/render", params={"jobId": job_id}).json()["job"]
        assert job["status"] == "failed"
        assert job["error"] == "Encoder crashed"
        assert job["progress"] == 70
        assert job["outputUrl"] is None
