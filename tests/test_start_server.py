"""
Tests for the server launch script
"""
import importlib.util
from pathlib import Path

import uvicorn

SCRIPT = Path(__file__).parent.parent / "scripts" / "start_server.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("start_server", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_start_server_runs_matching_app(monkeypatch, caplog):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    script = _load_script()

    with caplog.at_level("INFO"):
        script.main()

    assert calls == [(
        "api.main:app",
        {"host": script.API_HOST, "port": script.API_PORT, "reload": script.API_RELOAD,
         "log_level": script.LOG_LEVEL.lower()},
    )]
    assert "/api/matching/project/{id}" in caplog.text
    assert "/api/matching/search" in caplog.text
