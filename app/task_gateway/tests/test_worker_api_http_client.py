import io
import json
import urllib.error

import pytest
from task_gateway.adapters.worker_api_http_client import WorkerApiHttpClient
from task_gateway.ports.worker_queue import WorkerApiError


class _FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _client():
    return WorkerApiHttpClient(base_url="http://worker.local:8000/", timeout_seconds=3)


def test_submit_posts_json(monkeypatch):
    captured = {}

    def fake_urlopen(req, timeout):
        captured["url"] = req.full_url
        captured["method"] = req.get_method()
        captured["body"] = json.loads(req.data.decode("utf-8"))
        captured["timeout"] = timeout
        return _FakeResponse(json.dumps({"task_id": "t1"}).encode("utf-8"))

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)

    data = _client().submit(path="/api/v1/tasks/ranking/start", body={"job_posting_id": "j1"})

    assert data == {"task_id": "t1"}
    assert captured["url"] == "http://worker.local:8000/api/v1/tasks/ranking/start"
    assert captured["method"] == "POST"
    assert captured["body"] == {"job_posting_id": "j1"}
    assert captured["timeout"] == 3


def test_cancel_and_status_paths(monkeypatch):
    urls = []

    def fake_urlopen(req, timeout):
        urls.append((req.get_method(), req.full_url))
        return _FakeResponse(b'{"status": "PENDING"}')

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
    client = _client()

    client.task_status(task_id="t/1")
    client.batch_status(batch_task_id="b1")
    client.cancel(task_id="t1")

    assert urls == [
        ("GET", "http://worker.local:8000/api/v1/tasks/status/t%2F1"),
        ("GET", "http://worker.local:8000/api/v1/tasks/batch/b1"),
        ("POST", "http://worker.local:8000/api/v1/tasks/cancel/t1"),
    ]


def test_http_error_keeps_status_and_detail(monkeypatch):
    def fake_urlopen(req, timeout):
        raise urllib.error.HTTPError(
            req.full_url, 422, "Unprocessable", {}, io.BytesIO(b'{"detail": "bad id"}')
        )

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)

    with pytest.raises(WorkerApiError) as exc_info:
        _client().task_status(task_id="t1")

    assert exc_info.value.status_code == 422
    assert exc_info.value.detail == "bad id"
    assert exc_info.value.is_client_error


def test_connection_error_has_no_status(monkeypatch):
    def fake_urlopen(req, timeout):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)

    with pytest.raises(WorkerApiError) as exc_info:
        _client().cancel(task_id="t1")

    assert exc_info.value.status_code is None
    assert not exc_info.value.is_client_error
