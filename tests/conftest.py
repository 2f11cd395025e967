"""Shared fixtures for the linediff test suite."""

import time

import pytest

from linediff.core.diff.text_diff import NormalizationPolicy


POLICIES = [
    NormalizationPolicy(),
    NormalizationPolicy(ignore_whitespace=True),
    NormalizationPolicy(ignore_case=True),
    NormalizationPolicy(ignore_whitespace=True, ignore_case=True),
]


@pytest.fixture(params=POLICIES, ids=["exact", "whitespace", "case", "both"])
def policy(request):
    """Every combination of the two comparison flags."""
    return request.param


@pytest.fixture(scope="session")
def qapp():
    """A QCoreApplication for tests that need the Qt event loop."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def wait_until(qapp):
    """Pump Qt events until a condition holds or the timeout expires."""
    def _wait(condition, timeout=5.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            qapp.processEvents()
            if condition():
                return True
            time.sleep(0.005)
        qapp.processEvents()
        return condition()
    return _wait
