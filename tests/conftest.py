"""Root conftest for test suite.

Auto-skips e2e tests that need a live job queue API.
Run explicitly with: pytest tests/e2e -m e2e
"""

import pytest


def pytest_collection_modifyitems(config, items):
    """Skip e2e tests unless explicitly requested.

    These tests talk to a real queue and need JOB_QUEUE_URL and
    JOB_QUEUE_TOKEN, so they should not run in CI unless explicitly invoked.
    """
    # Check if user explicitly requested e2e tests
    # via -m marker or by specifying the test path directly
    markexpr = config.getoption("-m", default="")
    explicit_e2e = "e2e" in markexpr

    args = config.args
    running_e2e_path = any("tests/e2e" in str(arg) for arg in args)

    skip_e2e = pytest.mark.skip(
        reason="e2e tests require a live API. Run with: pytest tests/e2e -m e2e"
    )

    for item in items:
        if "e2e" in item.keywords and not explicit_e2e and not running_e2e_path:
            item.add_marker(skip_e2e)
