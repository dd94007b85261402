"""Root pytest configuration shared by all test directories."""

from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore structlog defaults after each test.

    setup_logging() binds structlog to the sys.stderr active at call time,
    which under pytest capture is a per-test stream closed after the test.
    """
    yield
    structlog.reset_defaults()
