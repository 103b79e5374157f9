"""
HTTP API tests for the analysis server.
"""
import json
import shutil
from pathlib import Path

from fastapi.testclient import TestClient

import server
from hiddenfield.config import HiddenFieldConfig
from server import app

ROOT = Path(__file__).resolve().parent.parent

client = TestClient(app)

SOURCE = """
class Person {
    String name;
    Person(String name) { this.name = name; }
    void setName(String name) { this.name = name; }
}
"""


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_analyze_reports_hidden_fields():
    resp = client.post("/analyze", json={"content": SOURCE, "file_path": "Person.java", "config": {}})
    assert resp.status_code == 200
    body = resp.json()
    assert body["file"] == "Person.java"
    assert [(d["line"], d["code"]) for d in body["diagnostics"]] == [(4, "hidden-field"), (5, "hidden-field")]
    assert body["diagnostics"][0]["message"] == "'name' hides a field."


def test_analyze_with_options():
    resp = client.post("/analyze", json={
        "content": SOURCE,
        "file_path": "Person.java",
        "config": {"ignoreConstructorParameter": True, "ignoreSetter": True},
    })
    assert resp.status_code == 200
    assert resp.json()["diagnostics"] == []


def test_analyze_rejects_invalid_pattern():
    resp = client.post("/analyze", json={
        "content": SOURCE,
        "file_path": "Person.java",
        "config": {"ignoreFormat": "[unclosed"},
    })
    assert resp.status_code == 400
    assert "ignoreFormat" in resp.json()["detail"]


def test_analyze_skips_other_languages():
    resp = client.post("/analyze", json={"content": "x = 1", "file_path": "app.py", "config": {}})
    assert resp.status_code == 200
    assert resp.json()["diagnostics"] == []


def test_scan_persists_diagnostics(tmp_path):
    repo = tmp_path / "repo"
    shutil.copytree(ROOT / "demo_repo", repo)
    resp = client.post("/scan", json={"repo_path": str(repo), "config": {}})
    assert resp.status_code == 200
    diagnostics = resp.json()["diagnostics"]
    assert len(diagnostics) == 6
    saved = json.loads((repo / ".hidefield" / "diagnostics.json").read_text())
    assert saved == diagnostics


def test_scan_rejects_missing_repo(tmp_path):
    resp = client.post("/scan", json={"repo_path": str(tmp_path / "missing")})
    assert resp.status_code == 400


def test_rules():
    rules = client.get("/rules").json()["rules"]
    assert rules[0]["code"] == "hidden-field"
    assert "setterCanReturnItsClass" in rules[0]["options"]


def test_env_config_read_once(monkeypatch):
    calls = []

    def fake_config_from_env():
        calls.append(1)
        return HiddenFieldConfig(ignore_setter=True)

    monkeypatch.setattr(server, "config_from_env", fake_config_from_env)
    server._env_config.cache_clear()
    try:
        for _ in range(3):
            resp = client.post("/analyze", json={"content": SOURCE, "file_path": "Person.java"})
            assert resp.status_code == 200
            assert [d["line"] for d in resp.json()["diagnostics"]] == [4]
    finally:
        server._env_config.cache_clear()
    assert len(calls) == 1, f"environment read {len(calls)} times"
