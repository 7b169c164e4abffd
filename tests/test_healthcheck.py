from __future__ import annotations

from fastapi.testclient import TestClient

from app.core.config import VERSION, settings


def test_healthcheck_endpoint(client: TestClient):
    res = client.get("/v1/healthcheck")
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/json"
    assert res.json() == {
        "status": "available",
        "system_info": {"environment": settings.ENV, "version": VERSION},
    }
    assert res.text.startswith("{\n\t\"status\"")
    assert res.text.endswith("}\n")
