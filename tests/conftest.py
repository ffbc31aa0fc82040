from __future__ import annotations

import pytest

from hamming import runtime
from hamming.solvers import DenseMergeSolver


@pytest.fixture(autouse=True)
def _isolated_workspace(tmp_path, monkeypatch):
    """Every test gets its own workspace and a fresh runtime."""
    monkeypatch.setenv("HAMMING_HOME", str(tmp_path / "ws"))
    runtime.reset()
    yield
    runtime.reset()


@pytest.fixture(scope="session")
def prefix():
    """H(0) .. H(15000) from the dense solver, shared by the property tests."""
    return DenseMergeSolver(check_every=1 << 30).sequence(15000)
