"""Tests for jobs API endpoints."""

import threading

from fastapi.testclient import TestClient

from storyvid.web.backend.services.job_manager import JobManager, JobStatus


class TestJobsAPI:
    """Tests for /api/jobs endpoints."""

    def test_list_jobs_empty(self, test_client: TestClient) -> None:
        """Test listing jobs when none exist."""
        response = test_client.get("/api/jobs")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_jobs_with_data(
        self, test_client: TestClient, job_manager: JobManager, wait_until
    ) -> None:
        """Test listing jobs when jobs exist."""
        job_id = job_manager.submit_render("test-project", {"resolution": "720p"})
        assert wait_until(lambda: job_manager.get_job(job_id).status == JobStatus.COMPLETED)

        response = test_client.get("/api/jobs")
        assert response.status_code == 200
        jobs = response.json()
        assert len(jobs) == 1
        assert jobs[0]["id"] == job_id
        assert jobs[0]["status"] == "completed"
        assert jobs[0]["config"] == {"resolution": "720p"}

    def test_list_jobs_filter_by_project(
        self, test_client: TestClient, job_manager: JobManager
    ) -> None:
        """Test filtering jobs by project ID."""
        job_manager.submit_render("project-1", {})
        job_manager.submit_render("project-2", {})

        response = test_client.get("/api/jobs?projectId=project-1")
        assert response.status_code == 200
        jobs = response.json()
        assert len(jobs) == 1
        assert jobs[0]["projectId"] == "project-1"

    def test_get_job(self, test_client: TestClient, job_manager: JobManager) -> None:
        """Test getting a specific job."""
        job_id = job_manager.submit_render("test-project", {})

        response = test_client.get(f"/api/jobs/{job_id}")
        assert response.status_code == 200
        assert response.json()["id"] == job_id

    def test_get_job_not_found(self, test_client: TestClient) -> None:
        response = test_client.get("/api/jobs/nonexistent")
        assert response.status_code == 404
        assert response.json() == {"error": "Render job not found"}


class TestCancelJob:
    """Tests for DELETE /api/jobs/{job_id}."""

    def test_cancel_running_job(self, test_client: TestClient, job_manager: JobManager) -> None:
        gate = threading.Event()
        job_manager.phase_runner = lambda job, phase: gate.wait(timeout=5)
        try:
            job_id = job_manager.submit_render("test-project", {})

            response = test_client.delete(f"/api/jobs/{job_id}")
            assert response.status_code == 204

            job = test_client.get(f"/api/jobs/{job_id}").json()
            assert job["status"] == "cancelled"
            assert job["error"] == "Render cancelled"
        finally:
            gate.set()

    def test_cancel_completed_job(
        self, test_client: TestClient, job_manager: JobManager, wait_until
    ) -> None:
        job_id = job_manager.submit_render("test-project", {})
        assert wait_until(lambda: job_manager.get_job(job_id).status == JobStatus.COMPLETED)

        response = test_client.delete(f"/api/jobs/{job_id}")
        assert response.status_code == 400
        assert response.json() == {"error": "Cannot cancel job with status: completed"}

    def test_cancel_unknown_job(self, test_client: TestClient) -> None:
        response = test_client.delete("/api/jobs/nonexistent")
        assert response.status_code == 404
