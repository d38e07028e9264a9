from __future__ import annotations

import os
import sys

import pytest


def _ensure_project_root_on_path() -> None:
    # When running via the venv's pytest entrypoint, the CWD is not guaranteed to
    # be on sys.path. Ensure the repository root (containing `navrouter/`) is importable.
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_path()

from navrouter.delegate import TraceDelegate  # noqa: E402
from navrouter.router import Router  # noqa: E402


@pytest.fixture
def trace():
    return TraceDelegate()


@pytest.fixture
def router(trace):
    return Router(delegate=trace)
