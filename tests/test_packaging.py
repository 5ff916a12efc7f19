import pathlib

import pytest
from setuptools import find_namespace_packages

ROOT = pathlib.Path(__file__).resolve().parents[1]


def test_wheel_includes_api_layer():
    tomllib = pytest.importorskip("tomllib")
    config = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))
    find = config["tool"]["setuptools"]["packages"]["find"]

    # backend/, backend/app/ 에는 __init__.py 가 없음
    assert find["namespaces"] is True
    packages = find_namespace_packages(where=str(ROOT), include=find["include"])
    for name in ("pricing", "backend.app", "backend.app.api", "backend.app.models"):
        assert name in packages
