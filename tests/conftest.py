from __future__ import annotations

import pytest

import app as app_module
from calculator import CalcInputs, calculate


@pytest.fixture
def default_results():
    return calculate(CalcInputs())


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(app_module, "PDF_PATH", str(tmp_path / "report.pdf"))
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as c:
        yield c
