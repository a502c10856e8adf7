from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_save_dir(tmp_path, monkeypatch):
    for key in list(os.environ):
        if key.startswith("SQLIDENT_"):
            monkeypatch.delenv(key)
    save_dir = tmp_path / "home"
    monkeypatch.setenv("SQLIDENT_BASE_DIR", str(save_dir))
    return save_dir
