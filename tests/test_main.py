"""Tests for the ``python -m boardmatch`` runner."""

import runpy

import uvicorn

from boardmatch.config import settings


class TestRunner:
    def test_runs_app_with_settings(self, monkeypatch):
        calls = []
        monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

        runpy.run_module("boardmatch.__main__", run_name="__main__")

        assert calls == [(
            ("boardmatch.main:app",),
            {"host": settings.host, "port": settings.port, "reload": settings.reload},
        )]
