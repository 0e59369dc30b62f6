import pytest

from conftest import load_app


@pytest.fixture()
def app(monkeypatch):
    return load_app(monkeypatch)


def test_traceparent_header(app):
    resp = app.test_client().get("/__ok")
    assert resp.status_code == 200
    assert "traceparent" in resp.headers


def test_request_spans_are_recorded(app):
    exporter = app.extensions["otel_spans"]
    exporter.clear()
    resp = app.test_client().get("/__ok")
    trace_id = resp.headers["traceparent"].split("-")[1]
    spans = exporter.get_finished_spans()
    assert any(format(s.context.trace_id, "032x") == trace_id for s in spans)
