import pytest
from rest_framework import status
from rest_framework.test import APIClient
from task_gateway.adapters.worker_api_http_client import WorkerApiHttpClient
from task_gateway.ports.worker_queue import WorkerApiError


@pytest.mark.django_db
class TestTaskView:
    def setup_method(self):
        self.client = APIClient()

    def test_unauthenticated_returns_401(self):
        resp = self.client.get("/api/v1/tasks/abc/")

        assert resp.status_code == status.HTTP_401_UNAUTHORIZED

    def test_submit_single(self, make_user, mocker):
        submit = mocker.patch.object(
            WorkerApiHttpClient, "submit", return_value={"task_id": "t-1"}
        )
        self.client.force_authenticate(user=make_user())

        resp = self.client.post(
            "/api/v1/tasks/ranking/", {"payload": {"job_posting_id": "42"}}, format="json"
        )

        assert resp.status_code == status.HTTP_202_ACCEPTED
        assert resp.data == {"task_id": "t-1", "query_url": "/api/v1/tasks/t-1/"}
        submit.assert_called_once_with(
            path="/api/v1/tasks/ranking/start", body={"job_posting_id": "42"}
        )

    def test_submit_requires_exactly_one_of_payload_or_payloads(self, make_user):
        self.client.force_authenticate(user=make_user())

        resp = self.client.post(
            "/api/v1/tasks/ranking/",
            {"payload": {"job_posting_id": "1"}, "payloads": [{"job_posting_id": "2"}]},
            format="json",
        )

        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_submit_batch(self, make_user, mocker):
        mocker.patch.object(
            WorkerApiHttpClient,
            "submit",
            return_value={"batch_task_id": "b-1", "total_pairs": 2},
        )
        self.client.force_authenticate(user=make_user())

        resp = self.client.post(
            "/api/v1/tasks/matching/",
            {
                "payloads": [
                    {"candidate_id": "c1", "job_posting_id": "j1"},
                    {"candidate_id": "c2", "job_posting_id": "j1"},
                ]
            },
            format="json",
        )

        assert resp.status_code == status.HTTP_202_ACCEPTED
        assert resp.data["batch_task_id"] == "b-1"
        assert resp.data["total_count"] == 2

    def test_worker_unavailable_returns_500_upstream_error(self, make_user, mocker):
        mocker.patch.object(
            WorkerApiHttpClient, "submit", side_effect=WorkerApiError("worker_api_failed")
        )
        self.client.force_authenticate(user=make_user())

        resp = self.client.post(
            "/api/v1/tasks/ranking/", {"payload": {"job_posting_id": "42"}}, format="json"
        )

        assert resp.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert resp.data["error_code"] == "UPSTREAM_ERROR"

    def test_poll_batch(self, make_user, mocker):
        mocker.patch.object(
            WorkerApiHttpClient,
            "batch_status",
            return_value={
                "batch_task_id": "b-1",
                "total": 2,
                "completed": 2,
                "results": [
                    {"task_id": "s1", "status": "SUCCESS", "result": {"ok": True}},
                    {"task_id": "s2", "status": "FAILURE", "error": "boom"},
                ],
            },
        )
        self.client.force_authenticate(user=make_user())

        resp = self.client.get("/api/v1/tasks/b-1/?batch=true")

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["ready"] is True
        assert resp.data["failed"] == 1
        assert resp.data["results"][1]["error"] == "boom"

    def test_poll_single_and_cancel(self, make_user, mocker):
        mocker.patch.object(
            WorkerApiHttpClient,
            "task_status",
            return_value={"task_id": "t-1", "status": "RETRY"},
        )
        mocker.patch.object(
            WorkerApiHttpClient,
            "cancel",
            return_value={"task_id": "t-1", "status": "STARTED"},
        )
        self.client.force_authenticate(user=make_user())

        polled = self.client.get("/api/v1/tasks/t-1/")
        cancelled = self.client.delete("/api/v1/tasks/t-1/")

        assert polled.data["status"] == "STARTED"
        assert polled.data["ready"] is False
        assert cancelled.status_code == status.HTTP_200_OK
        assert cancelled.data == {"task_id": "t-1", "status": "STARTED"}
